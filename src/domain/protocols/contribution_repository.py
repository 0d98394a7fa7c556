"""ContributionRepository protocol (port) for domain layer."""

from typing import Protocol
from uuid import UUID

from src.domain.entities import Contribution


class ContributionRepository(Protocol):
    """Protocol for contribution persistence operations.

    Implementations:
        - SQLAlchemyContributionRepository: src/infrastructure/persistence/repositories/
    """

    async def get(self, contribution_id: UUID) -> Contribution | None: ...

    async def add(self, contribution: Contribution) -> None: ...

    async def save(self, contribution: Contribution) -> None: ...

    async def delete(self, contribution_id: UUID) -> bool:
        """Delete a contribution row.

        Returns:
            True if a row was deleted.
        """
        ...
