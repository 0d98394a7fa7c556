"""Member database model.

Maps the members table. Email is nullable but unique when present;
PostgreSQL treats NULLs as distinct, so many members may lack an email.
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel


class Member(BaseMutableModel):
    """Member model.

    Fields:
        id: UUID primary key (from BaseModel)
        created_at: Creation timestamp (from BaseModel)
        updated_at: Last update timestamp (from TimestampMixin)
        name: Display name
        email: Normalized email address (nullable, unique, indexed)
        phone: Optional phone number
        password_hash: Bcrypt hash (nullable until a password is set)
        is_admin: Administrator flag
        email_verified: Verification status
        email_verified_at: Last verification timestamp

    Note:
        Row locks on this table (SELECT ... FOR UPDATE) serialize token
        issuance for one member.
    """

    __tablename__ = "members"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name",
    )
    email: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        unique=True,
        index=True,
        comment="Normalized email address",
    )
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    password_hash: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Bcrypt password hash",
    )
    is_admin: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default="false",
    )
    email_verified: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default="false",
    )
    email_verified_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
