"""CauseRepository protocol (port) for domain layer."""

from typing import Protocol
from uuid import UUID

from src.domain.entities import Cause


class CauseRepository(Protocol):
    """Protocol for cause persistence operations.

    Implementations:
        - SQLAlchemyCauseRepository: src/infrastructure/persistence/repositories/
    """

    async def get(self, cause_id: UUID) -> Cause | None: ...

    async def add(self, cause: Cause) -> None: ...

    async def save(self, cause: Cause) -> None: ...

    async def delete(self, cause_id: UUID) -> bool:
        """Delete a cause row.

        Returns:
            True if a row was deleted.
        """
        ...
