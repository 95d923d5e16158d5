"""
Tests for configuration management
"""
from workbench.config import Settings, get_settings


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ("API_BASE", "REQUEST_TIMEOUT", "DEFAULT_PAGE_SIZE", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.api_base == "http://localhost:8000"
        assert settings.request_timeout is None
        assert settings.default_page_size == 20
        assert settings.log_level == "INFO"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("API_BASE", "https://console.example.com/")
        monkeypatch.setenv("REQUEST_TIMEOUT", "12.5")

        settings = Settings(_env_file=None)

        assert settings.API_BASE_URL == "https://console.example.com"
        assert settings.request_timeout == 12.5

    def test_get_settings_cached(self):
        assert get_settings() is get_settings()


class TestLogger:

    def test_handler_attached_once(self):
        from workbench.utils.logger import get_logger, setup_logger

        first = setup_logger("workbench.tests.logger")
        second = get_logger("workbench.tests.logger")

        assert first is second
        assert len(first.handlers) == 1
