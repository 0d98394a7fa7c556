"""Member account commands (registration, verification, password reset).

All commands are immutable (frozen=True) and keyword-only (kw_only=True).
Handlers return Result types; commands carry no logic.
"""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class RegisterMember:
    """Register a member.

    A member with an email receives a verification link. Registering again
    with an unverified email re-issues the link instead of failing.

    Attributes:
        name: Display name.
        email: Email address (optional).
        phone: Phone number (optional).
        password: Plaintext password (min 8 characters, hashed by the handler).
    """

    name: str
    password: str
    email: str | None = None
    phone: str | None = None


@dataclass(frozen=True, kw_only=True)
class RegisteredMember:
    """Response from registration (not a command).

    Attributes:
        member_id: New (or existing unverified) member id.
        verification_required: True when a verification link was issued.
        verification_ttl_seconds: Lifetime of that link.
    """

    member_id: UUID
    verification_required: bool
    verification_ttl_seconds: int | None = None


@dataclass(frozen=True, kw_only=True)
class VerifyEmail:
    token: str


@dataclass(frozen=True, kw_only=True)
class ResendVerification:
    email: str


@dataclass(frozen=True, kw_only=True)
class RequestPasswordReset:
    """Request a reset link. Always succeeds (no member enumeration)."""

    email: str


@dataclass(frozen=True, kw_only=True)
class ConfirmPasswordReset:
    """Reset a password with a token from the reset link.

    Attributes:
        token: Plaintext reset token.
        new_password: New plaintext password (min 8 characters).
    """

    token: str
    new_password: str
