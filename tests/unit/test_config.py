"""
Tests for the configuration module.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Drop variables a developer shell may export so defaults are observable."""
    for name in ("HOST", "PORT", "REDIS_URL", "REDIS_ENABLED", "CATALOG_PATH",
                 "MAX_RESULTS", "DEFAULT_USER_ID", "DEFAULT_CURRENCY", "ENVIRONMENT",
                 "CORS_ORIGINS"):
        monkeypatch.delenv(name, raising=False)


class TestSettings:
    """Tests for Settings class."""

    def test_defaults(self):
        from config.settings import Settings

        settings = Settings(_env_file=None)

        assert settings.host == "0.0.0.0"
        assert settings.port == 3001
        assert settings.default_user_id == "guest"
        assert settings.max_results == 5
        assert settings.default_currency == "INR"
        assert settings.catalog_path is None

    def test_loads_from_env(self, monkeypatch):
        from config.settings import Settings

        monkeypatch.setenv("REDIS_URL", "redis://cache:6379/2")
        monkeypatch.setenv("MAX_RESULTS", "3")
        monkeypatch.setenv("REDIS_ENABLED", "false")

        settings = Settings(_env_file=None)
        assert settings.redis_url == "redis://cache:6379/2"
        assert settings.max_results == 3
        assert settings.redis_enabled is False

    def test_is_development_property(self):
        from config.settings import Settings

        for env in ["development", "dev", "local"]:
            assert Settings(_env_file=None, environment=env).is_development is True

        assert Settings(_env_file=None, environment="production").is_development is False

    def test_is_production_property(self):
        from config.settings import Settings

        for env in ["production", "prod"]:
            assert Settings(_env_file=None, environment=env).is_production is True

        assert Settings(_env_file=None, environment="development").is_production is False

    def test_cors_origins_parsing(self):
        from config.settings import Settings

        settings = Settings(
            _env_file=None,
            cors_origins="http://localhost:3000, https://shop.example.com",
        )

        assert settings.cors_origins == ["http://localhost:3000", "https://shop.example.com"]

    def test_catalog_path_parsing(self):
        from config.settings import Settings

        settings = Settings(_env_file=None, catalog_path="/tmp/products.json")
        assert settings.catalog_path == Path("/tmp/products.json")
        assert Settings(_env_file=None, catalog_path="").catalog_path is None

    def test_max_results_must_be_positive(self):
        from config.settings import Settings

        with pytest.raises(ValidationError):
            Settings(_env_file=None, max_results=0)


class TestGetSettings:

    def test_get_settings_is_cached(self):
        from config.settings import get_settings

        assert get_settings() is get_settings()

    def test_settings_for_testing_bypasses_cache(self):
        from config.settings import get_settings, get_settings_for_testing

        settings = get_settings_for_testing(max_results=2)

        assert settings is not get_settings()
        assert settings.max_results == 2
        assert settings.environment == "testing"
        assert settings.redis_enabled is False
