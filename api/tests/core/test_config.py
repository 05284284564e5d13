"""Unit tests for core.config module.

Tests cover:
- Settings model_validator database check
- is_sqlite property
- allowed_origins computed property with deduplication
- get_settings / clear_settings_cache lru_cache behavior
"""

import pytest
from pydantic import ValidationError

from core.config import Settings, clear_settings_cache, get_settings


@pytest.mark.unit
class TestSettingsValidation:
    def test_requires_database_config(self):
        with pytest.raises(ValidationError, match="Database configuration"):
            Settings(database_url="")

    def test_accepts_database_url(self):
        settings = Settings(database_url="postgresql+asyncpg://localhost/test")
        assert settings.database_url == "postgresql+asyncpg://localhost/test"

    def test_defaults(self):
        settings = Settings(database_url="postgresql+asyncpg://localhost/test")
        assert settings.service_name == "table-service"
        assert settings.service_version == "1.0.0"
        assert settings.db_create_schema is False
        assert settings.ratelimit_storage_uri == "memory://"


@pytest.mark.unit
class TestIsSqlite:
    def test_sqlite_url(self):
        assert Settings(database_url="sqlite+aiosqlite:///:memory:").is_sqlite is True

    def test_postgres_url(self):
        settings = Settings(database_url="postgresql+asyncpg://localhost/test")
        assert settings.is_sqlite is False


@pytest.mark.unit
class TestAllowedOrigins:
    def test_empty(self):
        settings = Settings(
            database_url="sqlite+aiosqlite:///:memory:", cors_allowed_origins=""
        )
        assert settings.allowed_origins == []

    def test_strips_and_deduplicates_preserving_order(self):
        settings = Settings(
            database_url="sqlite+aiosqlite:///:memory:",
            cors_allowed_origins=" http://b.test, http://a.test ,http://b.test,,",
        )
        assert settings.allowed_origins == ["http://b.test", "http://a.test"]


@pytest.mark.unit
class TestSettingsCache:
    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_clear_settings_cache_picks_up_env(self, monkeypatch):
        monkeypatch.setenv("SERVICE_NAME", "tables-under-test")
        clear_settings_cache()
        assert get_settings().service_name == "tables-under-test"
