from __future__ import annotations

import pytest
from pydantic import ValidationError

from pipeline_forecast.core.config import (
    CACHE_TTL_SECONDS,
    CONFIDENCE_Z,
    FORECAST_DAYS,
    HISTORY_WINDOW_DAYS,
    ROLLING_WINDOW,
    Settings,
    get_settings,
)


def test_defaults_match_engine_constants(monkeypatch) -> None:
    monkeypatch.delenv("FORECAST_FORECAST_DAYS", raising=False)
    settings = Settings()

    assert (HISTORY_WINDOW_DAYS, FORECAST_DAYS, ROLLING_WINDOW) == (730, 90, 7)
    assert CONFIDENCE_Z == 1.282
    assert CACHE_TTL_SECONDS == 3600
    assert settings.history_window_days == 730
    assert settings.forecast_days == 90
    assert settings.rolling_window == 7
    assert settings.confidence_z == 1.282
    assert settings.cache_ttl_seconds == 3600
    assert settings.excluded_statuses == ("canceled", "closed")


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("FORECAST_FORECAST_DAYS", "30")
    monkeypatch.setenv("FORECAST_DATABASE_URL", "mysql+pymysql://dash:dash@db/dashboard")

    settings = Settings()

    assert settings.forecast_days == 30
    assert settings.database_url.startswith("mysql+pymysql://")


@pytest.mark.parametrize("field", ["history_window_days", "forecast_days", "rolling_window"])
def test_windows_must_be_positive(field) -> None:
    with pytest.raises(ValidationError):
        Settings(**{field: 0})


def test_get_settings_is_memoized() -> None:
    assert get_settings() is get_settings()
