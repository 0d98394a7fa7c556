"""Unit tests for domain value objects (Email, Password, FileUpload)."""

import pytest

from src.core.constants import PASSWORD_MIN_LENGTH
from src.domain.value_objects import Email, FileUpload, Password


@pytest.mark.unit
class TestEmail:
    """Test Email value object."""

    def test_normalizes_case_and_whitespace(self):
        email = Email("  Treasurer@Example.COM ")

        assert email.value == "treasurer@example.com"
        assert str(email) == "treasurer@example.com"

    def test_equal_after_normalization(self):
        assert Email("JANE@example.com") == Email("jane@EXAMPLE.com")

    @pytest.mark.parametrize("value", ["", "invalid", "jane@", "@example.com", "a b@example.com"])
    def test_invalid_email_raises(self, value):
        with pytest.raises(ValueError, match="Invalid email"):
            Email(value)

    def test_is_immutable(self):
        email = Email("jane@example.com")

        with pytest.raises(AttributeError):
            email.value = "other@example.com"  # type: ignore[misc]


@pytest.mark.unit
class TestPassword:
    """Test Password value object."""

    def test_minimum_length_accepted(self):
        password = Password("x" * PASSWORD_MIN_LENGTH)

        assert password.value == "x" * PASSWORD_MIN_LENGTH

    def test_too_short_raises(self):
        with pytest.raises(ValueError, match=f"at least {PASSWORD_MIN_LENGTH} characters"):
            Password("x" * (PASSWORD_MIN_LENGTH - 1))

    def test_repr_masks_value(self):
        password = Password("correct horse battery")

        assert repr(password) == "Password(***)"
        assert "correct" not in f"{password!r}"


@pytest.mark.unit
class TestFileUpload:
    def test_size_is_content_length(self):
        upload = FileUpload(filename="a.png", content_type="image/png", content=b"12345")

        assert upload.size == 5
