"""SQLAlchemyCauseRepository - cause persistence."""

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import Cause
from src.infrastructure.persistence.models.cause import Cause as CauseModel


def _to_domain(model: CauseModel) -> Cause:
    return Cause(
        id=model.id,
        title=model.title,
        description=model.description,
        amount=model.amount,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


class SQLAlchemyCauseRepository:
    """SQLAlchemy implementation of CauseRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, cause_id: UUID) -> Cause | None:
        model = await self.session.get(CauseModel, cause_id)
        return _to_domain(model) if model else None

    async def add(self, cause: Cause) -> None:
        self.session.add(
            CauseModel(
                id=cause.id,
                title=cause.title,
                description=cause.description,
                amount=cause.amount,
                created_at=cause.created_at,
                updated_at=cause.updated_at,
            )
        )
        await self.session.flush()

    async def save(self, cause: Cause) -> None:
        stmt = select(CauseModel).where(CauseModel.id == cause.id)
        result = await self.session.execute(stmt)
        model = result.scalar_one()
        model.title = cause.title
        model.description = cause.description
        model.amount = cause.amount
        await self.session.flush()

    async def delete(self, cause_id: UUID) -> bool:
        result = await self.session.execute(delete(CauseModel).where(CauseModel.id == cause_id))
        return result.rowcount == 1
