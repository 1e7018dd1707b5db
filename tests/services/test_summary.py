from __future__ import annotations

import pandas as pd
import pytest

from conftest import make_history
from pipeline_forecast.services.summary import growth_pct, summarize


def _forecast(revenue: float, orders: float, days: int) -> pd.DataFrame:
    return pd.DataFrame({"revenue": [revenue] * days, "orders": [orders] * days})


def test_growth_pct() -> None:
    assert growth_pct(150.0, 100.0) == pytest.approx(50.0)
    assert growth_pct(50.0, 100.0) == pytest.approx(-50.0)


def test_growth_is_zero_without_baseline() -> None:
    assert growth_pct(12_345.0, 0.0) == 0.0
    summary = summarize(make_history(5, revenue=0.0, orders=0), _forecast(500.0, 5.0, 3), 3)
    assert summary.revenue_growth_pct == 0.0
    assert summary.orders_growth_pct == 0.0
    assert summary.revenue_forecast == pytest.approx(1500.0)


def test_trailing_totals_use_last_horizon_points() -> None:
    history = make_history(10, revenue=lambda i: float(i), orders=lambda i: i)
    summary = summarize(history, _forecast(10.0, 1.0, 3), 3)

    assert summary.revenue_last_quarter == pytest.approx(7 + 8 + 9)
    assert summary.orders_last_quarter == pytest.approx(24)
    assert summary.revenue_forecast == pytest.approx(30.0)
    assert summary.revenue_growth_pct == pytest.approx((30 - 24) / 24 * 100)


def test_empty_inputs_summarize_to_zero() -> None:
    summary = summarize(make_history(0), pd.DataFrame(columns=["revenue", "orders"]), 90)
    assert all(v == 0 for v in summary.model_dump().values())
