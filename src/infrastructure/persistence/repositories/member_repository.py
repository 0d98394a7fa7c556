"""SQLAlchemyMemberRepository - member persistence.

Repositories never commit; the enclosing unit of work owns the transaction.
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import Member
from src.domain.protocols.unit_of_work import DuplicateKeyError
from src.infrastructure.persistence.models.member import Member as MemberModel


class SQLAlchemyMemberRepository:
    """SQLAlchemy implementation of MemberRepository.

    Attributes:
        session: SQLAlchemy async session owned by the unit of work.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, member_id: UUID, *, for_update: bool = False) -> Member | None:
        stmt = select(MemberModel).where(MemberModel.id == member_id)
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model else None

    async def get_by_email(self, email: str) -> Member | None:
        stmt = select(MemberModel).where(MemberModel.email == email)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model else None

    async def add(self, member: Member) -> None:
        """Insert a member and flush so a duplicate email fails here.

        Raises:
            DuplicateKeyError: If the email is already registered.
        """
        self.session.add(self._to_model(member))
        try:
            await self.session.flush()
        except IntegrityError as e:
            raise DuplicateKeyError("members.email") from e

    async def save(self, member: Member) -> None:
        """Copy mutable fields onto the tracked row.

        Raises:
            NoResultFound: If the member row does not exist.
        """
        stmt = select(MemberModel).where(MemberModel.id == member.id)
        result = await self.session.execute(stmt)
        model = result.scalar_one()
        model.name = member.name
        model.email = member.email
        model.phone = member.phone
        model.password_hash = member.password_hash
        model.is_admin = member.is_admin
        model.email_verified = member.email_verified
        model.email_verified_at = member.email_verified_at
        await self.session.flush()

    async def list_with_email(self) -> list[Member]:
        stmt = (
            select(MemberModel)
            .where(MemberModel.email.is_not(None))
            .order_by(MemberModel.created_at)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    def _to_domain(self, model: MemberModel) -> Member:
        return Member(
            id=model.id,
            name=model.name,
            email=model.email,
            phone=model.phone,
            password_hash=model.password_hash,
            is_admin=model.is_admin,
            email_verified=model.email_verified,
            email_verified_at=model.email_verified_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, member: Member) -> MemberModel:
        return MemberModel(
            id=member.id,
            name=member.name,
            email=member.email,
            phone=member.phone,
            password_hash=member.password_hash,
            is_admin=member.is_admin,
            email_verified=member.email_verified,
            email_verified_at=member.email_verified_at,
            created_at=member.created_at,
            updated_at=member.updated_at,
        )
