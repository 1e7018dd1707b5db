from datetime import date
from functools import lru_cache
from typing import Iterable, Mapping, Optional, Sequence, Union

import pandas as pd
from sqlalchemy import bindparam, create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from ..core.errors import DataLoadError, InvalidHistoryError
from ..core.logging import get_logger
from ..utils.time_windows import lookback_start

logger = get_logger(__name__)

HISTORY_COLUMNS = ["date", "revenue", "orders"]

DAILY_TOTALS_SQL = text(
    """
    SELECT
      DATE(created_at) AS day,
      SUM(base_grand_total) AS revenue,
      COUNT(*) AS orders
    FROM sales_order
    WHERE status NOT IN :excluded
      AND created_at >= :start
    GROUP BY DATE(created_at)
    ORDER BY day ASC
    """
).bindparams(bindparam("excluded", expanding=True))

RawHistory = Union[pd.DataFrame, Iterable[Mapping]]


@lru_cache(maxsize=8)
def get_engine(url: str) -> Engine:
    logger.debug("creating database engine", dialect=url.split(":", 1)[0])
    return create_engine(url, pool_pre_ping=True)


def normalize_history(raw: RawHistory) -> pd.DataFrame:
    """One row per calendar day, ascending, with date/revenue/orders columns."""
    df = raw.copy() if isinstance(raw, pd.DataFrame) else pd.DataFrame(list(raw))
    if df.empty:
        return pd.DataFrame({
            "date": pd.Series(dtype="object"),
            "revenue": pd.Series(dtype="float64"),
            "orders": pd.Series(dtype="int64"),
        })
    if "day" in df.columns and "date" not in df.columns:
        df = df.rename(columns={"day": "date"})
    missing = set(HISTORY_COLUMNS) - set(df.columns)
    if missing:
        raise InvalidHistoryError(missing)

    df = df[HISTORY_COLUMNS].copy()
    df["date"] = pd.to_datetime(df["date"]).dt.date
    df["revenue"] = pd.to_numeric(df["revenue"], errors="coerce").fillna(0.0).astype(float)
    df["orders"] = pd.to_numeric(df["orders"], errors="coerce").fillna(0).astype(int)
    df = df.groupby("date", as_index=False, sort=True)[["revenue", "orders"]].sum()
    return df.reset_index(drop=True)


def load_daily_totals(
    lookback_days: int,
    engine: Engine,
    excluded_statuses: Sequence[str] = ("canceled", "closed"),
    today: Optional[date] = None,
) -> pd.DataFrame:
    """
    Revenue sum and order count per day for non-excluded orders placed in
    the last ``lookback_days`` days. Days without orders are absent.
    """
    start = lookback_start(lookback_days, today)
    try:
        with engine.connect() as conn:
            rows = pd.read_sql_query(
                DAILY_TOTALS_SQL,
                conn,
                params={"excluded": list(excluded_statuses), "start": start.isoformat()},
            )
    except (SQLAlchemyError, pd.errors.DatabaseError) as exc:
        # pandas >= 2.2 re-raises driver failures as its own DatabaseError
        raise DataLoadError(
            "Failed to load daily order totals",
            details={"lookback_days": lookback_days, "error": str(exc)},
        ) from exc
    return normalize_history(rows)


def check_connection(engine: Engine) -> bool:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as exc:
        logger.warning("database connection failed", error=str(exc))
        return False
