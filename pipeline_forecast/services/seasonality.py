from dataclasses import dataclass, field
from datetime import date
from typing import Tuple

import pandas as pd

WEEKDAYS = 7
MONTHS = 12


def _neutral(size: int) -> Tuple[float, ...]:
    return tuple([1.0] * size)


@dataclass(frozen=True)
class SeasonalityProfile:
    """Multiplicative weekday (Mon=0) and month (Jan=0) factors."""

    weekday: Tuple[float, ...] = field(default_factory=lambda: _neutral(WEEKDAYS))
    month: Tuple[float, ...] = field(default_factory=lambda: _neutral(MONTHS))

    def multiplier_for(self, day: date) -> float:
        return self.weekday[day.weekday()] * self.month[day.month - 1]


def _bucket_multipliers(values: pd.Series, buckets: pd.Series, size: int, overall: float) -> Tuple[float, ...]:
    means = values.groupby(buckets).mean() / overall
    return tuple(float(v) for v in means.reindex(range(size), fill_value=1.0))


def build_seasonality(history: pd.DataFrame) -> SeasonalityProfile:
    """
    Bucket raw daily revenue by weekday and by month and express each
    bucket's mean relative to the overall mean. Empty buckets stay at 1.
    """
    if history.empty:
        return SeasonalityProfile()

    revenue = history["revenue"].astype(float).reset_index(drop=True)
    dates = pd.to_datetime(history["date"]).reset_index(drop=True)

    # all-zero revenue would divide by zero; treat the mean as 1 instead
    overall = float(revenue.mean()) or 1.0

    return SeasonalityProfile(
        weekday=_bucket_multipliers(revenue, dates.dt.weekday, WEEKDAYS, overall),
        month=_bucket_multipliers(revenue, dates.dt.month - 1, MONTHS, overall),
    )
