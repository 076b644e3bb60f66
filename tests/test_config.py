"""Unit tests for configuration and settings."""

import pytest
from pydantic import ValidationError

from reportit.config import Settings, get_settings, reset_settings_cache


class TestSettings:

    def test_get_settings_returns_same_instance(self):
        assert get_settings() is get_settings()

    def test_reset_settings_cache(self):
        first = get_settings()
        reset_settings_cache()
        assert get_settings() is not first

    @pytest.mark.parametrize(
        "url, expected",
        [
            ("postgresql://u:p@db/x", "postgresql+asyncpg://u:p@db/x"),
            ("postgres://u:p@db/x", "postgresql+asyncpg://u:p@db/x"),
            ("sqlite+aiosqlite:///./local.db", "sqlite+aiosqlite:///./local.db"),
        ],
    )
    def test_database_url_normalized(self, url, expected):
        assert Settings(database_url=url).database_url == expected

    def test_storage_backend_validated(self):
        assert Settings(storage_backend="MEMORY").storage_backend == "memory"
        with pytest.raises(ValidationError):
            Settings(storage_backend="redis")

    def test_upload_limits(self):
        settings = get_settings()
        assert settings.max_upload_size_mb == 10
        assert settings.max_photos_per_report == 5
