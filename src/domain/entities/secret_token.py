"""SecretToken domain entity.

Persisted record of an issued single-use secret. Only the SHA-256 hash of
the plaintext is ever stored; the plaintext is returned to the caller once
at issuance and then forgotten.

State Machine:
    ISSUED → CONSUMED | SUPERSEDED | EXPIRED

    consumed_at is set both on consumption and on supersession. Expiry is
    derived from expires_at and never written.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from src.domain.enums import TokenKind


@dataclass
class SecretToken:
    """Single-use secret token record.

    Attributes:
        id: Unique token identifier.
        member_id: Owning member.
        kind: EMAIL_VERIFICATION or PASSWORD_RESET.
        token_hash: SHA-256 hex digest of the plaintext (unique).
        issued_at: Issuance timestamp.
        expires_at: Expiry timestamp (issued_at + TTL).
        consumed_at: Set once consumed or superseded; None while active.
    """

    id: UUID
    member_id: UUID
    kind: TokenKind
    token_hash: str
    issued_at: datetime
    expires_at: datetime
    consumed_at: datetime | None = None

    @property
    def is_consumed(self) -> bool:
        return self.consumed_at is not None

    def is_expired(self, now: datetime) -> bool:
        """Check expiry against an explicit clock reading.

        Args:
            now: Current time (timezone-aware).

        Returns:
            True if now is strictly after expires_at.
        """
        return now > self.expires_at

    def is_active(self, now: datetime) -> bool:
        return not self.is_consumed and not self.is_expired(now)
