"""
Unit tests for configuration management (flat Settings).

Tests cover:
- Settings loading from environment variables
- Environment detection
- Validation (bcrypt_rounds, positive sizes, URLs, provider choices)
- Derived timedeltas
- Default values
- Cached singleton behavior
"""

import os
from datetime import timedelta
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from src.core.config import Environment, Settings, get_settings


@pytest.fixture
def base_test_env():
    """Base environment dict for config tests.

    Every setting has a default; tests merge overrides into this dict.
    """
    return {
        "DATABASE_URL": "postgresql+asyncpg://test:test@db:5432/test",
        "ENVIRONMENT": "testing",
    }


def load(env: dict[str, str]) -> Settings:
    with patch.dict(os.environ, env, clear=True):
        return Settings(_env_file=None)


class TestEnvironmentEnum:
    """Test Environment enum."""

    def test_environment_values(self):
        assert Environment.DEVELOPMENT == "development"
        assert Environment.TESTING == "testing"
        assert Environment.CI == "ci"
        assert Environment.PRODUCTION == "production"


class TestSettingsValidation:
    """Test Settings field validation."""

    def test_bcrypt_rounds_valid(self, base_test_env):
        settings = load(base_test_env | {"BCRYPT_ROUNDS": "10"})

        assert settings.bcrypt_rounds == 10

    @pytest.mark.parametrize("rounds", ["3", "32"])
    def test_bcrypt_rounds_out_of_range(self, base_test_env, rounds):
        with pytest.raises(ValidationError) as exc_info:
            load(base_test_env | {"BCRYPT_ROUNDS": rounds})

        errors = exc_info.value.errors()
        assert any("bcrypt_rounds must be between 4 and 31" in str(error) for error in errors)

    @pytest.mark.parametrize(
        "variable",
        [
            "EMAIL_VERIFICATION_TTL_SECONDS",
            "PASSWORD_RESET_TTL_MINUTES",
            "NOTIFICATION_QUEUE_SIZE",
            "NOTIFICATION_CONCURRENCY",
            "OBJECT_STORE_MAX_ATTEMPTS",
        ],
    )
    def test_sizes_must_be_positive(self, base_test_env, variable):
        with pytest.raises(ValidationError) as exc_info:
            load(base_test_env | {variable: "0"})

        assert "value must be positive" in str(exc_info.value)

    def test_url_trailing_slash_removed(self, base_test_env):
        settings = load(
            base_test_env
            | {
                "APP_BASE_URL": "https://api.fundkeeper.test/",
                "CLIENT_BASE_URL": "https://app.fundkeeper.test//",
                "OBJECT_STORE_PUBLIC_BASE_URL": "https://cdn.fundkeeper.test/",
            }
        )

        assert settings.app_base_url == "https://api.fundkeeper.test"
        assert settings.client_base_url == "https://app.fundkeeper.test"
        assert settings.object_store_public_base_url == "https://cdn.fundkeeper.test"

    def test_unknown_mail_provider_rejected(self, base_test_env):
        with pytest.raises(ValidationError):
            load(base_test_env | {"MAIL_PROVIDER": "sendgrid"})

    def test_unknown_object_store_backend_rejected(self, base_test_env):
        with pytest.raises(ValidationError):
            load(base_test_env | {"OBJECT_STORE_BACKEND": "gcs"})


class TestSettingsLoading:
    def test_settings_from_env(self, base_test_env):
        settings = load(
            base_test_env
            | {
                "MAIL_ENABLED": "true",
                "MAIL_PROVIDER": "resend",
                "RESEND_API_KEY": "re_123",
                "OBJECT_STORE_BACKEND": "s3",
                "OBJECT_STORE_BUCKET": "parish-uploads",
                "EMAIL_VERIFICATION_TTL_SECONDS": "120",
                "PASSWORD_RESET_TTL_MINUTES": "30",
                "ORPHAN_GRACE_PERIOD_MINUTES": "5",
            }
        )

        assert settings.database_url == "postgresql+asyncpg://test:test@db:5432/test"
        assert settings.mail_enabled is True
        assert settings.mail_provider == "resend"
        assert settings.resend_api_key == "re_123"
        assert settings.object_store_backend == "s3"
        assert settings.object_store_bucket == "parish-uploads"
        assert settings.email_verification_ttl == timedelta(seconds=120)
        assert settings.password_reset_ttl == timedelta(minutes=30)
        assert settings.orphan_grace_period == timedelta(minutes=5)

    def test_settings_defaults(self):
        settings = load({})

        assert settings.environment == Environment.DEVELOPMENT
        assert settings.app_name == "Fundkeeper"
        assert settings.bcrypt_rounds == 12
        assert settings.email_verification_ttl == timedelta(seconds=90)
        assert settings.password_reset_ttl == timedelta(minutes=15)
        assert settings.mail_enabled is False
        assert settings.mail_provider == "stub"
        assert settings.object_store_backend == "memory"
        assert settings.object_store_public_base_url is None


class TestEnvironmentDetection:
    @pytest.mark.parametrize(
        ("value", "prop"),
        [
            ("development", "is_development"),
            ("testing", "is_testing"),
            ("ci", "is_ci"),
            ("production", "is_production"),
        ],
    )
    def test_environment_flags(self, value, prop):
        settings = load({"ENVIRONMENT": value})

        flags = ["is_development", "is_testing", "is_ci", "is_production"]
        assert [getattr(settings, flag) for flag in flags] == [flag == prop for flag in flags]


class TestSettingsCaching:
    """Test Settings singleton caching behavior."""

    def test_get_settings_cached(self, base_test_env):
        with patch.dict(os.environ, base_test_env, clear=True):
            get_settings.cache_clear()

            settings1 = get_settings()
            settings2 = get_settings()

            assert settings1 is settings2  # Same instance (cached)
        get_settings.cache_clear()
