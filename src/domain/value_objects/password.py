"""Password value object with length validation.

Immutable value object wrapping a plaintext password between the command
boundary and the hashing service.
"""

from dataclasses import dataclass

from src.core.constants import PASSWORD_MIN_LENGTH


@dataclass(frozen=True)
class Password:
    """Plaintext password that satisfies the minimum length policy.

    Attributes:
        value: The password string (validated, never logged)

    Raises:
        ValueError: If password is shorter than PASSWORD_MIN_LENGTH

    Example:
        >>> Password("correct horse")
        Password(***)
        >>> Password("short")
        Traceback (most recent call last):
        ...
        ValueError: Password must be at least 8 characters
    """

    value: str

    def __post_init__(self) -> None:
        if len(self.value) < PASSWORD_MIN_LENGTH:
            raise ValueError(
                f"Password must be at least {PASSWORD_MIN_LENGTH} characters"
            )

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        """Mask value so passwords never reach logs or tracebacks."""
        return "Password(***)"
