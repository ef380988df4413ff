"""Tests for configuration loading."""

import pytest
from pathlib import Path

from pydantic import ValidationError

from expense_tracker.config import (
    AppSettings,
    ChartSettings,
    LoggingSettings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)


@pytest.fixture(autouse=True)
def clean_env(tmp_path, monkeypatch):
    """Run each test away from any local .env file, with a fresh cache."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "EXPENSE_TRACKER_DATA_FILE",
        "EXPENSE_TRACKER_LOG_LEVEL",
        "EXPENSE_TRACKER_MAX_AMOUNT",
        "EXPENSE_TRACKER_CHART_DPI",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestDefaults:
    """Tests for default values."""

    def test_storage_defaults(self):
        settings = StorageSettings()
        assert settings.data_file == Path("transactions.csv")
        assert settings.file_encoding == "utf-8"

    def test_logging_defaults(self):
        settings = LoggingSettings()
        assert settings.log_level == "INFO"
        assert settings.json_logs is True

    def test_app_defaults(self):
        assert AppSettings().max_amount == 10000000.0


class TestEnvironmentOverrides:
    """Tests for EXPENSE_TRACKER_* environment variables."""

    def test_data_file_from_env(self, monkeypatch):
        monkeypatch.setenv("EXPENSE_TRACKER_DATA_FILE", "/tmp/elsewhere.csv")
        assert get_settings().storage.data_file == Path("/tmp/elsewhere.csv")

    def test_chart_prefix(self, monkeypatch):
        monkeypatch.setenv("EXPENSE_TRACKER_CHART_DPI", "150")
        assert ChartSettings().dpi == 150

    def test_dotenv_file(self, tmp_path):
        """Test a .env file in the working directory is read."""
        (tmp_path / ".env").write_text("EXPENSE_TRACKER_MAX_AMOUNT=42\n", encoding="utf-8")
        assert AppSettings().max_amount == 42.0

    def test_log_level_is_normalized(self, monkeypatch):
        monkeypatch.setenv("EXPENSE_TRACKER_LOG_LEVEL", " debug ")
        assert LoggingSettings().log_level == "DEBUG"


class TestInvalidSettings:
    """Tests for rejected configuration."""

    def test_unknown_log_level(self, monkeypatch):
        monkeypatch.setenv("EXPENSE_TRACKER_LOG_LEVEL", "LOUD")
        with pytest.raises(ValidationError):
            LoggingSettings()

    def test_validate_all_settings_reports_failure(self, monkeypatch):
        """Test a bad value is reported, not raised."""
        monkeypatch.setenv("EXPENSE_TRACKER_LOG_LEVEL", "LOUD")
        status = validate_all_settings()
        assert status["storage"] is True
        assert status["logging"] is False
        assert "logging_error" in status

    def test_validate_all_settings_all_good(self):
        status = validate_all_settings()
        assert all(status[name] for name in ("storage", "logging", "chart", "app"))
