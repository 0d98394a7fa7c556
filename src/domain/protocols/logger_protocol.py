"""LoggerProtocol definition for structured logging.

Standardizes structured logging across the codebase while remaining
backend-agnostic. Implementations MUST keep logs structured (key-value
context) and safe (no secrets).

Log Levels:
    - DEBUG: Detailed diagnostic info (dev only)
    - INFO: Normal operational events (token issued, attachment stored)
    - WARNING: Degraded behaviour (compensation failed, notification dropped)
    - ERROR: Operation failed, system continues
    - CRITICAL: System-wide failure

Security:
    - NEVER log plaintext tokens or passwords
    - Token hashes may appear only as a short preview

Usage:
    logger: LoggerProtocol = context.logger
    logger.info("secret_token_issued", member_id=str(member_id), kind=kind.value)

    scoped = logger.bind(owner=owner.value, owner_id=str(owner_id))
    scoped.warning("attachment_compensation_failed", object_id=object_id)
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters.

    All logging calls MUST be structured: event-style message plus
    key-value context.
    """

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level message."""
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level message."""
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level message."""
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level message with optional exception details.

        Args:
            message: Event-style message (avoid f-strings; use context).
            error: Optional exception instance; implementation adds
                error_type and error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level message for catastrophic failures."""
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return new logger with permanently bound context.

        The original logger instance remains unchanged.

        Args:
            **context: Context to bind to all future logs.

        Returns:
            New logger instance with bound context.
        """
        ...
