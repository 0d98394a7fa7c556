"""Secret token error types.

Returned by SecretTokenStore.consume and CredentialTransaction when a
presented token exists but can no longer be used.

Usage:
    from src.domain.errors import SecretTokenError
    from src.core.enums import ErrorCode
    from src.core.result import Failure

    return Failure(error=SecretTokenError(
        code=ErrorCode.TOKEN_EXPIRED,
        message="Token expired",
        token_kind=TokenKind.PASSWORD_RESET,
    ))
"""

from dataclasses import dataclass

from src.core.errors import DomainError
from src.domain.enums import TokenKind


@dataclass(frozen=True, slots=True, kw_only=True)
class SecretTokenError(DomainError):
    """Token is known but unusable.

    Attributes:
        code: ErrorCode enum (TOKEN_EXPIRED or TOKEN_ALREADY_USED).
        message: Human-readable message.
        token_kind: Kind of the rejected token.
        details: Additional context.
    """

    token_kind: TokenKind
