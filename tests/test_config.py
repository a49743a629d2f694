"""
Tests for configuration management.
"""
from ranker.config import Settings, get_settings


class TestSettings:
    """Test suite for Settings."""

    def test_defaults(self, monkeypatch):
        """Test default ranking settings."""
        monkeypatch.delenv("RANKER_LOWERCASE_QUERY", raising=False)
        monkeypatch.delenv("RANKER_MAX_RESULTS_PER_REQUEST", raising=False)

        settings = Settings(_env_file=None)

        assert settings.lowercase_query is False
        assert settings.max_results_per_request == 100
        assert settings.include_scores is False

    def test_environment_overrides(self, monkeypatch):
        """Test settings are read from RANKER_ variables."""
        monkeypatch.setenv("RANKER_LOWERCASE_QUERY", "true")
        monkeypatch.setenv("RANKER_MAX_RESULTS_PER_REQUEST", "10")
        monkeypatch.setenv("RANKER_LOG_LEVEL", "DEBUG")

        settings = Settings(_env_file=None)

        assert settings.lowercase_query is True
        assert settings.max_results_per_request == 10
        assert settings.log_level == "DEBUG"

    def test_get_settings_cached(self):
        """Test get_settings returns the same instance."""
        assert get_settings() is get_settings()
