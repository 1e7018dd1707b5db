from datetime import datetime, timezone
from typing import Optional

import numpy as np
import pandas as pd

from ..core.config import Settings
from ..core.logging import get_logger
from ..models.schemas import ForecastPayload, ForecastPoint, HistoricalPoint
from ..utils.time_windows import future_dates
from .seasonality import SeasonalityProfile, build_seasonality
from .smoothing import rolling_average
from .summary import summarize
from .trend import RegressionResult, fit_trend

logger = get_logger(__name__)

FORECAST_COLUMNS = [
    "date", "revenue", "orders",
    "revenue_lower", "revenue_upper", "orders_lower", "orders_upper",
]


def compose_forecast(
    history: pd.DataFrame,
    revenue_trend: RegressionResult,
    orders_trend: RegressionResult,
    seasonality: SeasonalityProfile,
    horizon_days: int,
    confidence_z: float,
) -> pd.DataFrame:
    """
    Project both trends ``horizon_days`` past the last historical date,
    scale each day by its weekday x month factor and attach a symmetric
    band of ``confidence_z`` residual standard deviations.
    """
    if history.empty or horizon_days <= 0:
        return pd.DataFrame(columns=FORECAST_COLUMNS)

    dates = future_dates(history["date"].iloc[-1], horizon_days)
    x = np.arange(len(history), len(history) + horizon_days, dtype=float)
    multiplier = np.array([seasonality.multiplier_for(d) for d in dates], dtype=float)

    revenue = np.maximum(revenue_trend.predict(x), 0.0) * multiplier
    orders = np.maximum(orders_trend.predict(x), 0.0) * multiplier

    revenue_delta = confidence_z * revenue_trend.std_dev
    orders_delta = confidence_z * orders_trend.std_dev

    return pd.DataFrame({
        "date": dates,
        "revenue": revenue,
        "orders": orders,
        "revenue_lower": np.maximum(revenue - revenue_delta, 0.0),
        "revenue_upper": revenue + revenue_delta,
        "orders_lower": np.maximum(orders - orders_delta, 0.0),
        "orders_upper": orders + orders_delta,
    }, columns=FORECAST_COLUMNS)


def build_forecast_payload(
    history: pd.DataFrame,
    settings: Settings,
    generated_at: Optional[datetime] = None,
) -> ForecastPayload:
    generated_at = generated_at or datetime.now(timezone.utc)
    if history.empty:
        logger.warning("no order history in window", lookback_days=settings.history_window_days)
        return ForecastPayload.empty(generated_at, settings.forecast_days)

    revenue_trend = fit_trend(rolling_average(history["revenue"], settings.rolling_window))
    orders_trend = fit_trend(rolling_average(history["orders"], settings.rolling_window))
    seasonality = build_seasonality(history)

    forecast = compose_forecast(
        history,
        revenue_trend,
        orders_trend,
        seasonality,
        settings.forecast_days,
        settings.confidence_z,
    )
    summary = summarize(history, forecast, settings.forecast_days)

    logger.info(
        "generated pipeline forecast",
        history_days=len(history),
        revenue_forecast_total=round(summary.revenue_forecast),
        orders_forecast_total=round(summary.orders_forecast),
    )

    return ForecastPayload(
        generated_at=generated_at,
        horizon_days=settings.forecast_days,
        history_days=len(history),
        history=[HistoricalPoint(**row) for row in history.to_dict(orient="records")],
        forecast=[ForecastPoint(**row) for row in forecast.to_dict(orient="records")],
        summary=summary,
    )
