"""Tests for application settings."""

from app.core.config import Settings


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self):
        """Test default settings."""
        settings = Settings()
        assert settings.app_name == "Clinical Text Analyzer"
        assert settings.debug is False
        assert settings.api_v1_prefix == "/api/v1"
        assert settings.max_text_length == 50000
        assert settings.max_batch_size == 100

    def test_environment_override(self, monkeypatch):
        """Test settings are read from the environment."""
        monkeypatch.setenv("MAX_TEXT_LENGTH", "1000")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        settings = Settings()
        assert settings.max_text_length == 1000
        assert settings.log_level == "DEBUG"

    def test_case_insensitive(self, monkeypatch):
        """Test environment variable names are case-insensitive."""
        monkeypatch.setenv("app_name", "Triage Analyzer")
        assert Settings().app_name == "Triage Analyzer"
