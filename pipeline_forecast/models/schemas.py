from datetime import date, datetime
from typing import List

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _Schema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class HistoricalPoint(_Schema):
    date: date
    revenue: float
    orders: int


class ForecastPoint(_Schema):
    date: date
    revenue: float
    orders: float
    revenue_lower: float
    revenue_upper: float
    orders_lower: float
    orders_upper: float


class ForecastSummary(_Schema):
    revenue_forecast: float = 0.0
    orders_forecast: float = 0.0
    revenue_last_quarter: float = 0.0
    orders_last_quarter: float = 0.0
    revenue_growth_pct: float = 0.0
    orders_growth_pct: float = 0.0


class ForecastPayload(_Schema):
    generated_at: datetime
    horizon_days: int
    history_days: int
    history: List[HistoricalPoint]
    forecast: List[ForecastPoint]
    summary: ForecastSummary

    @classmethod
    def empty(cls, generated_at: datetime, horizon_days: int) -> "ForecastPayload":
        return cls(
            generated_at=generated_at,
            horizon_days=horizon_days,
            history_days=0,
            history=[],
            forecast=[],
            summary=ForecastSummary(),
        )
