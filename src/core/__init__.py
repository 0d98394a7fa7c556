"""Core shared kernel.

This module provides foundational utilities used across all architectural layers:
- Result types for railway-oriented programming
- Base error classes for domain-level error handling
- Error codes shared by every workflow

The core module has NO dependencies on other application layers.
"""

from src.core.errors import (
    ConflictError,
    DomainError,
    InternalError,
    NotFoundError,
    UpstreamUnavailableError,
    ValidationError,
)
from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success

__all__ = [
    "ConflictError",
    "DomainError",
    "ErrorCode",
    "Failure",
    "InternalError",
    "NotFoundError",
    "Result",
    "Success",
    "UpstreamUnavailableError",
    "ValidationError",
]
