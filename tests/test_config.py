"""Tests for settings loading."""

import pytest
from decimal import Decimal
from pathlib import Path

from pydantic import ValidationError

from expense_tracker.config import (
    AppSettings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)


class TestSettings:
    """Tests for the pydantic-settings groups."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("EXPENSE_TRACKER_DAILY_BUDGET", raising=False)
        settings = AppSettings()
        assert settings.daily_budget == Decimal("50")
        assert settings.streak_lookback_days == 365
        assert settings.recent_expenses_limit == 5
        assert settings.currency_symbol == "$"

    def test_environment_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("EXPENSE_TRACKER_CURRENCY_SYMBOL", "€")
        monkeypatch.setenv("EXPENSE_TRACKER_STORAGE_DATA_DIR", str(tmp_path))

        assert AppSettings().currency_symbol == "€"
        assert StorageSettings().data_dir == Path(tmp_path)

    def test_log_level_normalized(self):
        assert AppSettings(log_level=" debug ").log_level == "DEBUG"

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValidationError):
            AppSettings(log_level="chatty")

    def test_validate_all_settings(self, monkeypatch):
        get_settings.cache_clear()
        monkeypatch.setenv("EXPENSE_TRACKER_TREND_MONTHS", "0")

        results = validate_all_settings()

        assert results["storage"] is True
        assert results["app"] is False
        assert "trend_months" in results["app_error"]
        get_settings.cache_clear()
