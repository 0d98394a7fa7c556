"""SecretTokenRepository protocol (port) for domain layer.

Stores hashed single-use tokens for both token kinds. Plaintext never
crosses this boundary.
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from src.domain.entities import SecretToken
from src.domain.enums import TokenKind


class SecretTokenRepository(Protocol):
    """Protocol for secret token persistence operations.

    Token Lifecycle:
        1. add() on issuance (after supersede_active for the same kind)
        2. get_by_hash(for_update=True) on consumption
        3. mark_consumed() with a conditional update
        4. Rows are never deleted (audit trail)

    Implementations:
        - SQLAlchemySecretTokenRepository: src/infrastructure/persistence/repositories/
    """

    async def add(self, token: SecretToken) -> None:
        """Insert a newly issued token."""
        ...

    async def get_by_hash(
        self,
        token_hash: str,
        kind: TokenKind,
        *,
        for_update: bool = False,
    ) -> SecretToken | None:
        """Find a token by hash and kind, regardless of state.

        Args:
            token_hash: SHA-256 hex digest of the presented plaintext.
            kind: Expected token kind.
            for_update: Take a row lock held until the unit of work ends.

        Returns:
            Token if found, None otherwise. Caller checks consumed/expired.
        """
        ...

    async def supersede_active(
        self,
        member_id: UUID,
        kind: TokenKind,
        at: datetime,
    ) -> int:
        """Mark every unconsumed token of a kind for a member as consumed.

        Returns:
            Number of tokens superseded.
        """
        ...

    async def mark_consumed(self, token_id: UUID, at: datetime) -> bool:
        """Set consumed_at only if it is still NULL.

        Returns:
            True if this call consumed the token, False if it was already consumed.
        """
        ...

    async def count_active(self, member_id: UUID, kind: TokenKind, now: datetime) -> int:
        """Count unconsumed, unexpired tokens of a kind for a member."""
        ...
