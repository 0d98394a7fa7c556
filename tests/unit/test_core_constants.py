"""Tests for src/core/constants.py.

Verifies that centralized constants have correct values and stay
consistent with each other.

Reference:
    - src/core/constants.py
"""

from src.core.constants import (
    BCRYPT_ROUNDS_DEFAULT,
    CAUSES_FOLDER,
    CONTRIBUTIONS_FOLDER,
    MIME_EXTENSIONS,
    PASSWORD_MIN_LENGTH,
    TOKEN_BYTES,
    TOKEN_HEX_LENGTH,
)
from src.domain.enums import AttachmentOwner


class TestTokenConstants:
    """Tests for token generation constants."""

    def test_token_bytes_value(self) -> None:
        """TOKEN_BYTES should be 32 (256 bits of entropy)."""
        assert TOKEN_BYTES == 32

    def test_token_hex_length_matches_bytes(self) -> None:
        assert TOKEN_HEX_LENGTH == TOKEN_BYTES * 2


class TestSecurityConstants:
    def test_password_min_length(self) -> None:
        assert PASSWORD_MIN_LENGTH == 8

    def test_bcrypt_default_within_bcrypt_range(self) -> None:
        assert 4 <= BCRYPT_ROUNDS_DEFAULT <= 31


class TestObjectNamingConstants:
    def test_owner_folders(self) -> None:
        assert AttachmentOwner.CONTRIBUTION.folder == CONTRIBUTIONS_FOLDER == "contributions"
        assert AttachmentOwner.CAUSE.folder == CAUSES_FOLDER == "causes"

    def test_mime_extensions_start_with_dot(self) -> None:
        assert all(ext.startswith(".") for ext in MIME_EXTENSIONS.values())
        assert MIME_EXTENSIONS["image/png"] == ".png"
