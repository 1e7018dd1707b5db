"""Errors raised by the forecasting engine."""

from typing import Any, Dict, Optional


class ForecastError(Exception):
    """Base class for forecast failures."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class DataLoadError(ForecastError):
    """Raised when the order store cannot be queried."""


class InvalidHistoryError(ForecastError):
    """Raised when loaded history is missing required columns."""

    def __init__(self, missing, details: Optional[Dict[str, Any]] = None):
        self.missing = sorted(missing)
        super().__init__(f"History is missing columns: {', '.join(self.missing)}", details)
