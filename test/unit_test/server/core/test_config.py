"""Unit tests for server configuration settings model.

Tests verify that the Settings model binds environment variables by their
aliases and that the grouped configurations are built from them.
"""

import pytest
from pydantic import ValidationError

from agent_guard.guard.config import DEFAULT_BLOCKED_MESSAGE, GuardConfig
from agent_guard.server.core.config import CORSConfig, Settings


def make_settings() -> Settings:
    return Settings(_env_file=None)


class TestSettingsBinding:
    """Test Settings model environment variable binding."""

    def test_server_binding(self, monkeypatch):
        monkeypatch.setenv("AGENT_GUARD_SERVER_HOST", "127.0.0.1")
        monkeypatch.setenv("AGENT_GUARD_SERVER_PORT", "9001")

        settings = make_settings()

        assert settings.server_host == "127.0.0.1"
        assert settings.server_port == 9001

    def test_logging_binding(self, monkeypatch):
        monkeypatch.setenv("AGENT_GUARD_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("LOG_FORMAT", "json")
        monkeypatch.setenv("ENABLE_FILE_LOGGING", "true")

        settings = make_settings()

        assert settings.log_level == "DEBUG"
        assert settings.log_format == "json"
        assert settings.enable_file_logging is True

    def test_database_url_binding(self):
        # test/conftest.py points the service at an in-memory database
        assert make_settings().database_url == "sqlite+aiosqlite:///:memory:"

    def test_auto_create_tables_is_off_by_default(self, monkeypatch):
        monkeypatch.delenv("AGENT_GUARD_AUTO_CREATE_TABLES", raising=False)

        assert make_settings().auto_create_tables is False

    def test_field_names_are_accepted(self):
        settings = Settings(_env_file=None, server_port=8100)

        assert settings.server_port == 8100


class TestGuardConfig:
    """Test the grouped gateway configuration."""

    def test_defaults(self, monkeypatch):
        for name in (
            "AGENT_GUARD_RATE_WINDOW_SECONDS",
            "AGENT_GUARD_INPUT_PREVIEW_CHARS",
            "AGENT_GUARD_FAIL_OPEN_ON_COUNT_ERRORS",
            "AGENT_GUARD_BLOCKED_MESSAGE",
        ):
            monkeypatch.delenv(name, raising=False)

        guard = make_settings().guard

        assert isinstance(guard, GuardConfig)
        assert guard.rate_window_seconds == 60
        assert guard.input_preview_chars == 200
        assert guard.fail_open_on_count_errors is False
        assert guard.blocked_message == DEFAULT_BLOCKED_MESSAGE

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("AGENT_GUARD_RATE_WINDOW_SECONDS", "30")
        monkeypatch.setenv("AGENT_GUARD_INPUT_PREVIEW_CHARS", "50")
        monkeypatch.setenv("AGENT_GUARD_FAIL_OPEN_ON_COUNT_ERRORS", "true")
        monkeypatch.setenv("AGENT_GUARD_BLOCKED_MESSAGE", "Paused by your administrator.")

        guard = make_settings().guard

        assert guard.rate_window_seconds == 30
        assert guard.input_preview_chars == 50
        assert guard.fail_open_on_count_errors is True
        assert guard.blocked_message == "Paused by your administrator."

    def test_window_must_be_positive(self, monkeypatch):
        monkeypatch.setenv("AGENT_GUARD_RATE_WINDOW_SECONDS", "0")

        with pytest.raises(ValidationError):
            make_settings().guard


class TestCORSConfig:
    """Test the grouped CORS configuration."""

    def test_defaults_allow_everything(self, monkeypatch):
        monkeypatch.delenv("CORS_ORIGINS", raising=False)

        cors = make_settings().cors

        assert isinstance(cors, CORSConfig)
        assert cors.origins == ["*"]
        assert cors.allow_credentials is True

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", '["https://console.example.com"]')
        monkeypatch.setenv("CORS_ALLOW_CREDENTIALS", "false")

        cors = make_settings().cors

        assert cors.origins == ["https://console.example.com"]
        assert cors.allow_credentials is False
