from datetime import date, datetime, timedelta, timezone
from typing import List, Optional


def utc_today(now: Optional[datetime] = None) -> date:
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.date()


def lookback_start(lookback_days: int, today: Optional[date] = None) -> date:
    if lookback_days < 0:
        raise ValueError("lookback_days must be non-negative")
    return (today or utc_today()) - timedelta(days=lookback_days)


def future_dates(last_actual: date, horizon_days: int) -> List[date]:
    """Consecutive calendar days starting the day after ``last_actual``."""
    return [last_actual + timedelta(days=i + 1) for i in range(horizon_days)]
