"""Secret token kinds.

Both kinds share one table and one state machine:

    ISSUED → CONSUMED (terminal)
    ISSUED → SUPERSEDED (a newer token of the same kind was issued; terminal)
    ISSUED → EXPIRED (observed at consumption time)

Usage:
    from src.domain.enums import TokenKind

    result = await token_store.issue(member_id, TokenKind.PASSWORD_RESET, ttl)
"""

from enum import Enum


class TokenKind(str, Enum):
    """Purpose of a single-use secret token.

    String Enum:
        Inherits from str for easy serialization and database storage.
    """

    EMAIL_VERIFICATION = "email_verification"
    PASSWORD_RESET = "password_reset"
