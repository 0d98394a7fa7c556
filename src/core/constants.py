"""Centralized constants for internal implementation details.

This module contains constants that are internal implementation details,
NOT environment-specific configuration. For environment-specific settings,
use `src/core/config.py` instead.

Categories:
- Token lengths: Fixed sizes for secret tokens
- Password policy: Minimum credential length
- Object naming: Folder names and MIME extension map
- Logging: Truncation limits for sensitive values

Example:
    >>> from src.core.constants import TOKEN_BYTES
    >>> token = secrets.token_hex(TOKEN_BYTES)
"""

# =============================================================================
# Token Lengths
# =============================================================================

TOKEN_BYTES: int = 32
"""Number of random bytes for secret token generation (32 bytes = 256 bits)."""

TOKEN_HEX_LENGTH: int = 64
"""Length of hex-encoded token string (TOKEN_BYTES * 2)."""

TOKEN_LOG_PREVIEW_LENGTH: int = 8
"""Characters of a token hash that may appear in log records."""


# =============================================================================
# Password Policy
# =============================================================================

PASSWORD_MIN_LENGTH: int = 8
"""Minimum accepted length for a new member password."""

BCRYPT_ROUNDS_DEFAULT: int = 12
"""Default bcrypt work factor (cost parameter)."""


# =============================================================================
# Object Naming
# =============================================================================

CONTRIBUTIONS_FOLDER: str = "contributions"
"""Object store folder for contribution proof images."""

CAUSES_FOLDER: str = "causes"
"""Object store folder for cause images."""

MIME_EXTENSIONS: dict[str, str] = {
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
    "image/gif": ".gif",
    "image/bmp": ".bmp",
    "image/tiff": ".tif",
}
"""File extension used when the uploaded filename carries none."""

SLUG_MAX_LENGTH: int = 80
"""Upper bound on each slugified component of an object name."""


# =============================================================================
# Notifications
# =============================================================================

NOTIFICATION_STOP_TIMEOUT_SECONDS: float = 10.0
"""Default time the dispatcher worker gets to drain its queue on shutdown."""
