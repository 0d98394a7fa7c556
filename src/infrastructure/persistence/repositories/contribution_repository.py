"""SQLAlchemyContributionRepository - contribution persistence."""

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import Contribution
from src.infrastructure.persistence.models.contribution import (
    Contribution as ContributionModel,
)


def _to_domain(model: ContributionModel) -> Contribution:
    return Contribution(
        id=model.id,
        member_id=model.member_id,
        amount=model.amount,
        contributed_on=model.contributed_on,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


class SQLAlchemyContributionRepository:
    """SQLAlchemy implementation of ContributionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, contribution_id: UUID) -> Contribution | None:
        model = await self.session.get(ContributionModel, contribution_id)
        return _to_domain(model) if model else None

    async def add(self, contribution: Contribution) -> None:
        self.session.add(
            ContributionModel(
                id=contribution.id,
                member_id=contribution.member_id,
                amount=contribution.amount,
                contributed_on=contribution.contributed_on,
                created_at=contribution.created_at,
                updated_at=contribution.updated_at,
            )
        )
        await self.session.flush()

    async def save(self, contribution: Contribution) -> None:
        stmt = select(ContributionModel).where(ContributionModel.id == contribution.id)
        result = await self.session.execute(stmt)
        model = result.scalar_one()
        model.member_id = contribution.member_id
        model.amount = contribution.amount
        model.contributed_on = contribution.contributed_on
        await self.session.flush()

    async def delete(self, contribution_id: UUID) -> bool:
        stmt = delete(ContributionModel).where(ContributionModel.id == contribution_id)
        result = await self.session.execute(stmt)
        return result.rowcount == 1
