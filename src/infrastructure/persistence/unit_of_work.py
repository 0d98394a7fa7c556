"""SQLAlchemyUnitOfWork - one AsyncSession, one transaction.

The session is opened on __aenter__ and closed on __aexit__. Anything not
committed by then is rolled back, which also releases row locks taken with
SELECT ... FOR UPDATE.

Usage:
    uow_factory = SQLAlchemyUnitOfWork.factory(database.async_session)
    async with uow_factory() as uow:
        await uow.members.get(member_id, for_update=True)
        await uow.commit()
"""

from collections.abc import Callable
from types import TracebackType
from typing import Self

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.domain.enums import AttachmentOwner
from src.domain.protocols.unit_of_work import DuplicateKeyError
from src.infrastructure.persistence.repositories import (
    SQLAlchemyAttachmentRepository,
    SQLAlchemyCauseRepository,
    SQLAlchemyContributionRepository,
    SQLAlchemyMemberRepository,
    SQLAlchemySecretTokenRepository,
)


class SQLAlchemyUnitOfWork:
    """UnitOfWork implementation over an async_sessionmaker."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: AsyncSession | None = None
        self._attachments: dict[AttachmentOwner, SQLAlchemyAttachmentRepository] = {}

    @classmethod
    def factory(
        cls, session_factory: async_sessionmaker[AsyncSession]
    ) -> Callable[[], "SQLAlchemyUnitOfWork"]:
        """Bind a session factory, returning a zero-argument UoW constructor."""
        return lambda: cls(session_factory)

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("Unit of work used outside 'async with'")
        return self._session

    async def __aenter__(self) -> Self:
        self._session = self._session_factory()
        self.members = SQLAlchemyMemberRepository(self._session)
        self.secret_tokens = SQLAlchemySecretTokenRepository(self._session)
        self.contributions = SQLAlchemyContributionRepository(self._session)
        self.causes = SQLAlchemyCauseRepository(self._session)
        self._attachments = {}
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        session = self.session
        try:
            if session.in_transaction():
                await session.rollback()
        finally:
            await session.close()
            self._session = None

    def attachments(self, owner: AttachmentOwner) -> SQLAlchemyAttachmentRepository:
        if owner not in self._attachments:
            self._attachments[owner] = SQLAlchemyAttachmentRepository(self.session, owner)
        return self._attachments[owner]

    async def commit(self) -> None:
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise DuplicateKeyError(str(e.orig) if e.orig else None) from e

    async def rollback(self) -> None:
        await self.session.rollback()
