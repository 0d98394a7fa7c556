"""Common error classes used across all domains and layers.

These are generic errors that don't belong to any specific domain.
They are used throughout the application for common failure scenarios.

Error Types:
- ValidationError: Caller-supplied input is unusable
- NotFoundError: Resource (entity or token) not found
- ConflictError: Uniqueness violation (duplicate email)
- UpstreamUnavailableError: Object store or mail transport failure
- InternalError: Unexpected failure (database driver, programming error)

Usage:
    from src.core.errors import ValidationError, NotFoundError
    from src.core.enums import ErrorCode
    from src.core.result import Failure

    return Failure(error=NotFoundError(
        code=ErrorCode.CAUSE_NOT_FOUND,
        message="Cause not found",
        resource_type="Cause",
        resource_id=str(cause_id),
    ))
"""

from dataclasses import dataclass

from src.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        code: ErrorCode enum.
        message: Human-readable message.
        field: Field name that failed validation.
        details: Additional context.
    """

    field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class NotFoundError(DomainError):
    """Resource not found.

    Attributes:
        code: ErrorCode enum.
        message: Human-readable message.
        resource_type: Type of resource (Member, Cause, SecretToken, etc.).
        resource_id: ID of the resource that was not found.
        details: Additional context.
    """

    resource_type: str
    resource_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ConflictError(DomainError):
    """Resource conflict (duplicate secondary key).

    Attributes:
        code: ErrorCode enum.
        message: Human-readable message.
        resource_type: Type of resource in conflict.
        conflicting_field: Field that has conflict (email, etc.).
        details: Additional context.
    """

    resource_type: str
    conflicting_field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class UpstreamUnavailableError(DomainError):
    """External collaborator (object store, mail transport) failed or timed out.

    Attributes:
        code: ErrorCode enum (UPSTREAM_UNAVAILABLE).
        message: Human-readable message.
        service_name: Collaborator that failed (s3, ses, resend, ...).
        details: Additional context (operation, SDK error code).
    """

    service_name: str


@dataclass(frozen=True, slots=True, kw_only=True)
class InternalError(DomainError):
    """Unexpected failure with no more specific classification.

    Attributes:
        code: ErrorCode enum (INTERNAL_ERROR).
        message: Human-readable message.
        details: Additional context.
    """

    pass
