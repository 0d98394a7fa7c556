"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention.
Used with Result types for railway-oriented programming.

Categories:
- Validation errors (VALIDATION_*)
- Resource errors (*_NOT_FOUND)
- Conflict errors (*_ALREADY_EXISTS)
- Secret token errors (TOKEN_*)
- Collaborator errors (UPSTREAM_*)
- Unexpected errors (INTERNAL_*)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable).

    Error codes follow ENTITY_ACTION_REASON naming convention.
    """

    # Validation errors
    VALIDATION_FAILED = "validation_failed"
    PASSWORD_TOO_WEAK = "password_too_weak"
    NO_FILES_UPLOADED = "no_files_uploaded"
    INVALID_AMOUNT = "invalid_amount"

    # Resource errors
    MEMBER_NOT_FOUND = "member_not_found"
    CONTRIBUTION_NOT_FOUND = "contribution_not_found"
    CAUSE_NOT_FOUND = "cause_not_found"
    ATTACHMENT_NOT_FOUND = "attachment_not_found"
    TOKEN_NOT_FOUND = "token_not_found"

    # Conflict errors
    EMAIL_ALREADY_EXISTS = "email_already_exists"
    EMAIL_ALREADY_VERIFIED = "email_already_verified"

    # Secret token errors
    TOKEN_EXPIRED = "token_expired"
    TOKEN_ALREADY_USED = "token_already_used"

    # Collaborator errors (object store, mail transport)
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"

    # Unexpected errors
    INTERNAL_ERROR = "internal_error"
