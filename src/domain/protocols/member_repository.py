"""MemberRepository protocol (port) for domain layer.

Following hexagonal architecture:
- Domain defines what it needs (protocol/port)
- Infrastructure provides implementation (adapter)
- Domain has no knowledge of how members are stored
"""

from typing import Protocol
from uuid import UUID

from src.domain.entities import Member


class MemberRepository(Protocol):
    """Protocol for member persistence operations.

    Implementations:
        - SQLAlchemyMemberRepository: src/infrastructure/persistence/repositories/
    """

    async def get(self, member_id: UUID, *, for_update: bool = False) -> Member | None:
        """Load a member by id.

        Args:
            member_id: Member's unique identifier.
            for_update: Take a row lock held until the unit of work ends.

        Returns:
            Member if found, None otherwise.
        """
        ...

    async def get_by_email(self, email: str) -> Member | None:
        """Load a member by normalized email address."""
        ...

    async def add(self, member: Member) -> None:
        """Insert a new member.

        Duplicate email surfaces when the unit of work flushes or commits.
        """
        ...

    async def save(self, member: Member) -> None:
        """Persist changes to an existing member."""
        ...

    async def list_with_email(self) -> list[Member]:
        """Return every member that has an email address (broadcast recipients)."""
        ...
