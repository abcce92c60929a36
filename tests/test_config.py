"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from sitelens.config import AppSettings, get_settings, reload_settings


class TestAppSettings:
    """Test settings defaults and environment overrides."""

    def test_defaults(self):
        settings = AppSettings(_env_file=None)

        assert settings.log_level == "INFO"
        assert settings.api.port == 8000
        assert settings.scraping.timeout_seconds is None
        assert settings.scraping.follow_redirects is True
        assert settings.sessions.recent_limit == 10

    def test_nested_env_override(self, monkeypatch):
        monkeypatch.setenv("API__PORT", "9001")
        monkeypatch.setenv("SCRAPING__TIMEOUT_SECONDS", "2.5")
        monkeypatch.setenv("SESSIONS__RECENT_LIMIT", "3")

        settings = AppSettings(_env_file=None)

        assert settings.api.port == 9001
        assert settings.scraping.timeout_seconds == 2.5
        assert settings.sessions.recent_limit == 3

    def test_log_level_is_normalized(self):
        assert AppSettings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            AppSettings(_env_file=None, log_level="chatty")

    def test_invalid_timeout(self):
        with pytest.raises(ValidationError):
            AppSettings(_env_file=None, scraping={"timeout_seconds": 0})

    def test_reload_settings(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        try:
            assert reload_settings().log_level == "ERROR"
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()
