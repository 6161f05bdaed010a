"""
Tests for configuration validation.

Ensures environment variables are validated at startup.
"""

import pytest
from pydantic import ValidationError

from serviflex.core.config import Settings

VALID_KEY = "a" * 32


@pytest.fixture
def base_env(monkeypatch):
    monkeypatch.setenv("FIREBASE_PROJECT_ID", "serviflex-test")
    monkeypatch.setenv("SECRET_KEY", VALID_KEY)
    monkeypatch.delenv("BUSINESS_TIMEZONE", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("CORS_ORIGINS", raising=False)
    return monkeypatch


class TestSecretKeyValidation:
    """Test SECRET_KEY validation."""

    def test_secret_key_too_short(self, base_env):
        """Test SECRET_KEY must be at least 32 characters."""
        base_env.setenv("SECRET_KEY", "tooshort")

        with pytest.raises(ValidationError) as exc_info:
            Settings(_env_file=None)

        assert "SECRET_KEY must be at least 32 characters long" in str(exc_info.value)

    @pytest.mark.parametrize("placeholder", [
        "generate-with-openssl-rand-hex-32",
        "CHANGE_ME_32_CHARS_MIN",
        "your-secret-key-here",
    ])
    def test_secret_key_placeholder_value(self, base_env, placeholder):
        """Test SECRET_KEY rejects placeholder values."""
        base_env.setenv("SECRET_KEY", placeholder)

        with pytest.raises(ValidationError) as exc_info:
            Settings(_env_file=None)

        error_msg = str(exc_info.value).lower()
        assert "placeholder" in error_msg or "at least 32 characters" in error_msg

    def test_secret_key_valid(self, base_env):
        settings = Settings(_env_file=None)
        assert settings.secret_key == VALID_KEY


class TestFirebaseProjectValidation:
    """Test FIREBASE_PROJECT_ID validation."""

    def test_project_id_placeholder_rejected(self, base_env):
        base_env.setenv("FIREBASE_PROJECT_ID", "your-project")

        with pytest.raises(ValidationError) as exc_info:
            Settings(_env_file=None)

        assert "placeholder" in str(exc_info.value)

    def test_project_id_whitespace_stripped(self, base_env):
        base_env.setenv("FIREBASE_PROJECT_ID", "  serviflex-prod  ")

        settings = Settings(_env_file=None)

        assert settings.firebase_project_id == "serviflex-prod"


class TestTimezoneAndLogging:
    """Test business timezone and log level validation."""

    def test_default_timezone(self, base_env):
        settings = Settings(_env_file=None)

        assert settings.business_timezone == "America/Sao_Paulo"
        assert settings.tz.key == "America/Sao_Paulo"

    def test_invalid_timezone_rejected(self, base_env):
        base_env.setenv("BUSINESS_TIMEZONE", "Mars/Olympus_Mons")

        with pytest.raises(ValidationError) as exc_info:
            Settings(_env_file=None)

        assert "BUSINESS_TIMEZONE" in str(exc_info.value)

    def test_log_level_normalized(self, base_env):
        base_env.setenv("LOG_LEVEL", "debug")

        settings = Settings(_env_file=None)

        assert settings.log_level == "DEBUG"

    def test_invalid_log_level_rejected(self, base_env):
        base_env.setenv("LOG_LEVEL", "chatty")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)


class TestCorsOrigins:
    """Test CORS origin parsing."""

    def test_cors_origins_json_list(self, base_env):
        base_env.setenv("CORS_ORIGINS", '["http://localhost:3000", "https://app.serviflex.com"]')

        settings = Settings(_env_file=None)

        assert settings.cors_origins == ["http://localhost:3000", "https://app.serviflex.com"]

    def test_cors_origins_default(self, base_env):
        settings = Settings(_env_file=None)

        assert settings.cors_origins == ["*"]
        assert settings.cors_allow_credentials is False
