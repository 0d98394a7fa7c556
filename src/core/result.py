"""Result types for railway-oriented programming.

Every workflow in the application returns a Result instead of raising across
layer boundaries. Failures carry a DomainError value; callers branch with
isinstance (fields are keyword-only, so positional match patterns do not apply).

Usage:
    result = await token_store.consume(plaintext, TokenKind.PASSWORD_RESET)
    if isinstance(result, Failure):
        return result
    member_id = result.value
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Represents a successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Represents a failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


# Type alias for Result union
type Result[T, E] = Success[T] | Failure[E]
