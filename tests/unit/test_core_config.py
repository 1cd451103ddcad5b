"""Unit tests for Settings validation."""

import base64

import pytest
from pydantic import ValidationError

from src.core.config import Settings
from src.core.enums import Environment

REQUIRED = {
    "database_url": "postgresql+asyncpg://u:p@localhost/db",
    "redis_url": "redis://localhost:6379/0",
    "jwt_secret": "a" * 32,
    "jwt_refresh_secret": "b" * 32,
    "encryption_key": "00" * 32,
}


def _settings(**overrides):
    return Settings(**{**REQUIRED, **overrides})


@pytest.mark.unit
class TestSettings:
    def test_defaults(self):
        settings = _settings(environment="development")

        assert settings.lockout_max_attempts == 5
        assert settings.access_token_expire_minutes == 15
        assert settings.refresh_token_expire_days == 7
        assert settings.is_development is True

    def test_short_jwt_secret_rejected(self):
        with pytest.raises(ValidationError, match="32 bytes"):
            _settings(jwt_secret="short")

    @pytest.mark.parametrize("key", ["zz" * 32, "00" * 16])
    def test_bad_encryption_key_rejected(self, key):
        with pytest.raises(ValidationError):
            _settings(encryption_key=key)

    def test_encryption_key_is_hex_not_base64(self):
        base64_key = base64.b64encode(bytes(32)).decode()

        assert _settings(encryption_key="0f" * 32).encryption_key == "0f" * 32
        with pytest.raises(ValidationError, match="hex"):
            _settings(encryption_key=base64_key)

    def test_urls_lose_trailing_slash(self):
        settings = _settings(frontend_url="https://app.example.com/")

        assert settings.frontend_url == "https://app.example.com"

    def test_cors_origin_list(self):
        settings = _settings(cors_origins="https://a.example.com, https://b.example.com,")

        assert settings.cors_origin_list == [
            "https://a.example.com",
            "https://b.example.com",
        ]

    def test_ci_counts_as_testing(self):
        settings = _settings(environment=Environment.CI)

        assert settings.is_testing is True
        assert settings.is_production is False
