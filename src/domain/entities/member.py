"""Member domain entity.

A member funds contributions, receives notifications and authenticates with
an email address and password. Email is optional: members added by an
administrator without an address never receive mail or tokens.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID


@dataclass
class Member:
    """Member domain entity.

    Pure business logic with no infrastructure dependencies.

    Business Rules:
        - A member without email cannot verify, reset or receive mail
        - Issuing a new verification token resets email_verified
        - Successful verification records email_verified_at

    Attributes:
        id: Unique member identifier.
        name: Display name (used in contribution image names).
        email: Normalized email address, or None.
        phone: Optional phone number.
        password_hash: Bcrypt hash (never plaintext), None until a password is set.
        is_admin: Administrator flag.
        email_verified: Verification status.
        email_verified_at: When the email was last verified.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    id: UUID
    name: str
    email: str | None
    phone: str | None = None
    password_hash: str | None = None
    is_admin: bool = False
    email_verified: bool = False
    email_verified_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def has_email(self) -> bool:
        return bool(self.email)

    def mark_unverified(self) -> None:
        """Reset verification state (a new verification token was issued)."""
        self.email_verified = False
        self.email_verified_at = None

    def mark_verified(self, at: datetime) -> None:
        """Record a successful email verification.

        Args:
            at: Verification timestamp (store clock).
        """
        self.email_verified = True
        self.email_verified_at = at
        self.updated_at = at

    def change_password(self, password_hash: str, at: datetime) -> None:
        self.password_hash = password_hash
        self.updated_at = at
