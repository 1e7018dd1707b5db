"""
In-process cache around the forecast pipeline.

One slot per ``ForecastCache`` instance. The payload is recomputed when the
slot is empty or older than the TTL; a failed recomputation leaves the
previous entry untouched.
"""

import threading
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

import pandas as pd

from ..core.config import Settings
from ..core.logging import get_logger
from ..models.schemas import ForecastPayload
from .data_loader import RawHistory, normalize_history
from .forecast_engine import build_forecast_payload

logger = get_logger(__name__)

HistoryLoader = Callable[[int], RawHistory]


@dataclass(frozen=True)
class CacheEntry:
    timestamp: float
    payload: ForecastPayload


class ForecastCache:
    def __init__(
        self,
        loader: HistoryLoader,
        settings: Settings,
        clock: Callable[[], float] = time.time,
    ):
        self._loader = loader
        self._settings = settings
        self._clock = clock
        self._entry: Optional[CacheEntry] = None
        self._lock = threading.Lock()

    def _fresh(self, entry: Optional[CacheEntry]) -> bool:
        return entry is not None and self._clock() - entry.timestamp < self._settings.cache_ttl_seconds

    def get_forecast(self) -> ForecastPayload:
        entry = self._entry
        if self._fresh(entry):
            logger.debug("forecast cache hit", age_seconds=self._clock() - entry.timestamp)
            return entry.payload

        # callers that missed together wait here and reuse the winner's entry
        with self._lock:
            entry = self._entry
            if self._fresh(entry):
                return entry.payload
            payload = self._compute()
            self._entry = CacheEntry(timestamp=self._clock(), payload=payload)
            return payload

    def _compute(self) -> ForecastPayload:
        history: pd.DataFrame = normalize_history(self._loader(self._settings.history_window_days))
        generated_at = datetime.fromtimestamp(self._clock(), tz=timezone.utc)
        return build_forecast_payload(history, self._settings, generated_at=generated_at)
