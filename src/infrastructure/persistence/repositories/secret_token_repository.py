"""SQLAlchemySecretTokenRepository - hashed single-use token persistence.

Consumption uses a conditional UPDATE (WHERE consumed_at IS NULL) so that,
even without the row lock, at most one caller can flip a token to consumed.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import SecretToken
from src.domain.enums import TokenKind
from src.infrastructure.persistence.models.secret_token import (
    SecretToken as SecretTokenModel,
)


def _to_domain(model: SecretTokenModel) -> SecretToken:
    """Convert database model to domain entity."""
    return SecretToken(
        id=model.id,
        member_id=model.member_id,
        kind=model.kind,
        token_hash=model.token_hash,
        issued_at=model.issued_at,
        expires_at=model.expires_at,
        consumed_at=model.consumed_at,
    )


class SQLAlchemySecretTokenRepository:
    """SQLAlchemy implementation of SecretTokenRepository.

    Attributes:
        session: SQLAlchemy async session owned by the unit of work.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def add(self, token: SecretToken) -> None:
        self.session.add(
            SecretTokenModel(
                id=token.id,
                member_id=token.member_id,
                kind=token.kind,
                token_hash=token.token_hash,
                issued_at=token.issued_at,
                expires_at=token.expires_at,
                consumed_at=token.consumed_at,
            )
        )
        await self.session.flush()

    async def get_by_hash(
        self,
        token_hash: str,
        kind: TokenKind,
        *,
        for_update: bool = False,
    ) -> SecretToken | None:
        stmt = select(SecretTokenModel).where(
            SecretTokenModel.token_hash == token_hash,
            SecretTokenModel.kind == kind,
        )
        if for_update:
            stmt = stmt.with_for_update()
        # populate_existing: a row cached earlier in this session must reflect
        # the state observed after the lock was granted
        stmt = stmt.execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_domain(model) if model else None

    async def supersede_active(
        self,
        member_id: UUID,
        kind: TokenKind,
        at: datetime,
    ) -> int:
        stmt = (
            update(SecretTokenModel)
            .where(
                SecretTokenModel.member_id == member_id,
                SecretTokenModel.kind == kind,
                SecretTokenModel.consumed_at.is_(None),
            )
            .values(consumed_at=at)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0

    async def mark_consumed(self, token_id: UUID, at: datetime) -> bool:
        stmt = (
            update(SecretTokenModel)
            .where(
                SecretTokenModel.id == token_id,
                SecretTokenModel.consumed_at.is_(None),
            )
            .values(consumed_at=at)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def count_active(self, member_id: UUID, kind: TokenKind, now: datetime) -> int:
        stmt = select(func.count()).where(
            SecretTokenModel.member_id == member_id,
            SecretTokenModel.kind == kind,
            SecretTokenModel.consumed_at.is_(None),
            SecretTokenModel.expires_at >= now,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()
