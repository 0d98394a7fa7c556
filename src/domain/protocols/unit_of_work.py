"""UnitOfWork protocol (port) for domain layer.

A unit of work is one database transaction exposing the repositories that
participate in it. Leaving the context without calling commit() rolls back.

Usage:
    async with uow_factory() as uow:
        member = await uow.members.get(member_id, for_update=True)
        ...
        await uow.commit()
"""

from collections.abc import Callable
from types import TracebackType
from typing import Protocol, Self

from src.domain.enums import AttachmentOwner
from src.domain.protocols.attachment_repository import AttachmentRepository
from src.domain.protocols.cause_repository import CauseRepository
from src.domain.protocols.contribution_repository import ContributionRepository
from src.domain.protocols.member_repository import MemberRepository
from src.domain.protocols.secret_token_repository import SecretTokenRepository


class UnitOfWork(Protocol):
    """Transaction boundary plus the repositories bound to it.

    Implementations:
        - SQLAlchemyUnitOfWork: src/infrastructure/persistence/unit_of_work.py
    """

    members: MemberRepository
    secret_tokens: SecretTokenRepository
    contributions: ContributionRepository
    causes: CauseRepository

    def attachments(self, owner: AttachmentOwner) -> AttachmentRepository:
        """Attachment repository for one owner kind."""
        ...

    async def commit(self) -> None:
        """Commit the transaction. Row locks are released.

        Raises:
            DuplicateKeyError: If a uniqueness constraint is violated.
        """
        ...

    async def rollback(self) -> None:
        """Roll back the transaction. Row locks are released."""
        ...

    async def __aenter__(self) -> Self: ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None: ...


UnitOfWorkFactory = Callable[[], UnitOfWork]
"""Zero-argument callable returning a fresh, unopened unit of work."""


class DuplicateKeyError(Exception):
    """Raised by commit() (or a flushing repository call) on a uniqueness violation.

    Attributes:
        constraint: Name of the violated constraint or column, when known.
    """

    def __init__(self, constraint: str | None = None) -> None:
        super().__init__(f"Duplicate key: {constraint or 'unknown'}")
        self.constraint = constraint
