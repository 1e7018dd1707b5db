from functools import lru_cache
from pathlib import Path
from typing import Tuple

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ROOT = Path(__file__).resolve().parents[1]           # .../pipeline_forecast

HISTORY_WINDOW_DAYS = 730
FORECAST_DAYS = 90
ROLLING_WINDOW = 7
CONFIDENCE_Z = 1.282  # ~80% two-sided interval
CACHE_TTL_SECONDS = 3600


class Settings(BaseSettings):
    """Engine constants and runtime wiring, overridable via FORECAST_* env vars."""

    model_config = SettingsConfigDict(env_prefix="FORECAST_", env_file=".env", extra="ignore")

    history_window_days: int = Field(HISTORY_WINDOW_DAYS, ge=1)
    forecast_days: int = Field(FORECAST_DAYS, ge=1)
    rolling_window: int = Field(ROLLING_WINDOW, ge=1)
    confidence_z: float = Field(CONFIDENCE_Z, ge=0)
    cache_ttl_seconds: float = Field(CACHE_TTL_SECONDS, ge=0)

    database_url: str = "sqlite:///sales_dashboard.db"
    excluded_statuses: Tuple[str, ...] = ("canceled", "closed")

    log_level: str = "INFO"
    environment: str = "development"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
