from __future__ import annotations

import math
from datetime import date, timedelta
from typing import Iterator, List

import pandas as pd
import pytest

from pipeline_forecast.core.config import Settings
from pipeline_forecast.models.schemas import ForecastPayload


def make_history(
    days: int,
    revenue=1000.0,
    orders=10,
    start: date = date(2024, 3, 4),
) -> pd.DataFrame:
    """Consecutive daily history; ``revenue``/``orders`` may be constants or callables of the day index."""
    rows = []
    for i in range(days):
        rows.append({
            "date": start + timedelta(days=i),
            "revenue": float(revenue(i) if callable(revenue) else revenue),
            "orders": int(orders(i) if callable(orders) else orders),
        })
    return pd.DataFrame(rows, columns=["date", "revenue", "orders"])


def payload_numbers(payload: ForecastPayload) -> List[float]:
    values: List[float] = []
    for point in payload.history:
        values += [point.revenue, point.orders]
    for point in payload.forecast:
        values += [
            point.revenue, point.orders,
            point.revenue_lower, point.revenue_upper,
            point.orders_lower, point.orders_upper,
        ]
    values += list(payload.summary.model_dump().values())
    return values


def assert_all_finite(payload: ForecastPayload) -> None:
    assert all(math.isfinite(v) for v in payload_numbers(payload))


class FakeClock:
    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(database_url=f"sqlite:///{tmp_path / 'sales.db'}")


@pytest.fixture()
def flat_history() -> pd.DataFrame:
    return make_history(14)


@pytest.fixture()
def clock() -> Iterator[FakeClock]:
    yield FakeClock()
