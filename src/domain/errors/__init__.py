"""Domain errors package.

Exports all domain-level error classes for convenient importing.

Usage:
    from src.domain.errors import SecretTokenError
"""

from src.domain.errors.secret_token_error import SecretTokenError

__all__ = [
    "SecretTokenError",
]
