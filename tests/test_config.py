"""Tests for environment-driven settings."""

from pathlib import Path

import pytest

from videobooks.config import (
    AppSettings,
    ReportSettings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:
    """Tests for the settings classes."""

    def test_defaults(self, monkeypatch):
        """Test the default document location and report labels."""
        monkeypatch.delenv("VIDEOBOOKS_STORAGE_DATA_DIR", raising=False)
        monkeypatch.delenv("VIDEOBOOKS_STORAGE_FILE_NAME", raising=False)
        assert StorageSettings().document_path == Path("data") / "videobooks.json"
        assert ReportSettings().unknown_client_label == "Unknown client"

    def test_env_overrides(self, monkeypatch, tmp_path):
        """Test prefixed environment variables are read."""
        monkeypatch.setenv("VIDEOBOOKS_STORAGE_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("VIDEOBOOKS_STORAGE_FILE_NAME", "books.json")
        monkeypatch.setenv("VIDEOBOOKS_REPORT_UNKNOWN_CLIENT_LABEL", "(removed)")

        settings = get_settings()

        assert settings.storage.document_path == tmp_path / "books.json"
        assert settings.reports.unknown_client_label == "(removed)"

    def test_file_name_must_not_be_a_path(self):
        """Test directories in the file name are rejected."""
        with pytest.raises(ValueError):
            StorageSettings(file_name="../elsewhere.json")

    def test_log_level_normalized(self):
        """Test log levels are upper-cased and checked."""
        assert AppSettings(log_level="debug").log_level == "DEBUG"
        with pytest.raises(ValueError):
            AppSettings(log_level="chatty")

    def test_debug_mode_from_env(self, monkeypatch):
        """Test DEBUG_MODE switches on traceback display."""
        monkeypatch.delenv("DEBUG_MODE", raising=False)
        assert get_settings().app.debug_mode is False

        monkeypatch.setenv("DEBUG_MODE", "true")
        assert get_settings().app.debug_mode is True
        assert not hasattr(AppSettings(), "app_environment")

    def test_validate_all_settings(self, monkeypatch):
        """Test startup validation reports the failing section."""
        assert validate_all_settings() == {"storage": True, "reports": True, "app": True}

        monkeypatch.setenv("LOG_LEVEL", "chatty")
        results = validate_all_settings()
        assert results["app"] is False
        assert "app_error" in results


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
