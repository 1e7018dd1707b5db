import pandas as pd

from ..models.schemas import ForecastSummary


def growth_pct(forecast_total: float, trailing_total: float) -> float:
    if trailing_total <= 0:
        return 0.0
    return (forecast_total - trailing_total) / trailing_total * 100


def summarize(history: pd.DataFrame, forecast: pd.DataFrame, horizon_days: int) -> ForecastSummary:
    """
    Forecast totals against the trailing ``horizon_days`` raw history
    points, which act as the last-quarter baseline.
    """
    revenue_forecast = float(forecast["revenue"].sum()) if not forecast.empty else 0.0
    orders_forecast = float(forecast["orders"].sum()) if not forecast.empty else 0.0

    trailing = history.tail(horizon_days)
    revenue_last_quarter = float(trailing["revenue"].sum()) if not trailing.empty else 0.0
    orders_last_quarter = float(trailing["orders"].sum()) if not trailing.empty else 0.0

    return ForecastSummary(
        revenue_forecast=revenue_forecast,
        orders_forecast=orders_forecast,
        revenue_last_quarter=revenue_last_quarter,
        orders_last_quarter=orders_last_quarter,
        revenue_growth_pct=growth_pct(revenue_forecast, revenue_last_quarter),
        orders_growth_pct=growth_pct(orders_forecast, orders_last_quarter),
    )
