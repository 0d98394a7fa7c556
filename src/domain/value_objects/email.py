"""Email value object with validation.

Normalizes member email addresses so uniqueness checks are case-insensitive.
"""

from dataclasses import dataclass

from email_validator import EmailNotValidError, validate_email


@dataclass(frozen=True)
class Email:
    """Email value object with format validation.

    Uses email-validator for RFC-compliant syntax checks (no DNS lookups).

    Attributes:
        value: The email address string (validated, normalized)

    Raises:
        ValueError: If email format is invalid

    Example:
        >>> str(Email("Treasurer@Example.com"))
        'treasurer@example.com'
        >>> Email("invalid")
        Traceback (most recent call last):
        ...
        ValueError: Invalid email: ...
    """

    value: str

    def __post_init__(self) -> None:
        try:
            validated = validate_email(self.value.strip(), check_deliverability=False)
            # Frozen dataclass: bypass __setattr__ to store the normalized form
            object.__setattr__(self, "value", validated.normalized.lower())
        except EmailNotValidError as e:
            raise ValueError(f"Invalid email: {e}") from e

    def __str__(self) -> str:
        return self.value
