"""SQLAlchemyAttachmentRepository - attachment index persistence.

One class serves both attachment tables; the unit of work binds an instance
to the model matching the requested owner kind.
"""

from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import Attachment
from src.domain.enums import AttachmentOwner
from src.infrastructure.persistence.models.attachment import (
    CauseImage,
    ContributionImage,
)

_MODELS: dict[AttachmentOwner, type[ContributionImage] | type[CauseImage]] = {
    AttachmentOwner.CONTRIBUTION: ContributionImage,
    AttachmentOwner.CAUSE: CauseImage,
}


class SQLAlchemyAttachmentRepository:
    """SQLAlchemy implementation of AttachmentRepository.

    Attributes:
        session: SQLAlchemy async session owned by the unit of work.
        owner: Owner kind this instance is bound to.
    """

    def __init__(self, session: AsyncSession, owner: AttachmentOwner) -> None:
        self.session = session
        self.owner = owner
        self._model = _MODELS[owner]

    async def get(self, attachment_id: UUID, owner_id: UUID) -> Attachment | None:
        stmt = select(self._model).where(
            self._model.id == attachment_id,
            self._model.owner_id == owner_id,
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model else None

    async def list_for_owner(self, owner_id: UUID) -> list[Attachment]:
        stmt = (
            select(self._model)
            .where(self._model.owner_id == owner_id)
            .order_by(self._model.created_at.desc(), self._model.id.desc())
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def add(self, attachment: Attachment) -> None:
        self.session.add(
            self._model(
                id=attachment.id,
                owner_id=attachment.owner_id,
                url=attachment.url,
                created_at=attachment.created_at,
            )
        )
        await self.session.flush()

    async def update_url(self, attachment_id: UUID, url: str) -> bool:
        stmt = (
            update(self._model)
            .where(self._model.id == attachment_id)
            .values(url=url)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def delete(self, attachment_id: UUID) -> bool:
        result = await self.session.execute(
            delete(self._model).where(self._model.id == attachment_id)
        )
        return result.rowcount == 1

    async def delete_for_owner(self, owner_id: UUID) -> int:
        result = await self.session.execute(
            delete(self._model).where(self._model.owner_id == owner_id)
        )
        return result.rowcount or 0

    async def all_urls(self) -> set[str]:
        result = await self.session.execute(select(self._model.url))
        return set(result.scalars().all())

    def _to_domain(self, model: ContributionImage | CauseImage) -> Attachment:
        return Attachment(
            id=model.id,
            owner=self.owner,
            owner_id=model.owner_id,
            url=model.url,
            created_at=model.created_at,
        )
