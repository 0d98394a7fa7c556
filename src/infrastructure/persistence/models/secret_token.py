"""Secret token database model.

Stores email verification and password reset tokens in one table,
discriminated by kind. Only the SHA-256 hash of a token is stored.

Security:
    - token_hash: sha256 hex of a 32-byte random secret (unique, indexed)
    - consumed_at: set on consumption or supersession (one-time use)
    - Rows are retained after use as an audit trail
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, Enum as SAEnum, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from src.core.constants import TOKEN_HEX_LENGTH
from src.domain.enums import TokenKind
from src.infrastructure.persistence.base import BaseModel


class SecretToken(BaseModel):
    """Secret token model (immutable apart from consumed_at).

    Fields:
        id: UUID primary key (from BaseModel)
        created_at: Row creation timestamp (from BaseModel)
        member_id: Owning member (cascade delete)
        kind: email_verification | password_reset
        token_hash: SHA-256 hex digest (64 chars, unique)
        issued_at: Issuance timestamp (store clock)
        expires_at: Expiry timestamp
        consumed_at: Consumption/supersession timestamp (nullable)

    Indexes:
        - ix_secret_tokens_active: (member_id, kind, consumed_at) for supersession
    """

    __tablename__ = "secret_tokens"

    member_id: Mapped[UUID] = mapped_column(
        ForeignKey("members.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Member the token was issued to",
    )
    kind: Mapped[TokenKind] = mapped_column(
        SAEnum(
            TokenKind,
            name="secret_token_kind",
            values_callable=lambda kinds: [k.value for k in kinds],
        ),
        nullable=False,
    )
    token_hash: Mapped[str] = mapped_column(
        String(TOKEN_HEX_LENGTH),
        nullable=False,
        unique=True,
        index=True,
        comment="SHA-256 hex digest of the plaintext token",
    )
    issued_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    consumed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        comment="Set once consumed or superseded",
    )

    __table_args__ = (
        Index("ix_secret_tokens_active", "member_id", "kind", "consumed_at"),
    )
