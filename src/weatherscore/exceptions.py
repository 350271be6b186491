"""Custom exceptions for the weather resolution and scoring engine."""

from __future__ import annotations

import datetime as dt


class WeatherScoreError(Exception):
    """Base exception for all engine errors."""


class SourceUnavailable(WeatherScoreError):
    """Raised when a weather source cannot answer a request.

    Transient by nature: the resolver reacts by falling back to
    historical averages for the affected dates.
    """


class SourceConnectionError(SourceUnavailable):
    """Raised when the source cannot be reached."""


class SourceTimeoutError(SourceUnavailable):
    """Raised when a request to the source times out."""


class SourceAPIError(SourceUnavailable):
    """Raised when the source returns an error response (4xx/5xx)."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"HTTP {status_code}: {message}")


class SourceParseError(SourceUnavailable):
    """Raised when a source payload cannot be decoded into daily records."""


class InsufficientHistory(WeatherScoreError):
    """Raised when no prior year could be sampled for an estimate."""

    def __init__(self, target_date: dt.date, years_tried: int) -> None:
        self.target_date = target_date
        self.years_tried = years_tried
        super().__init__(
            f"No historical data for {target_date.isoformat()} in the previous {years_tried} years"
        )


class CacheWriteFailed(WeatherScoreError):
    """Raised when a cache upsert batch could not be persisted."""


class CacheReadFailed(WeatherScoreError):
    """Raised when the cache backend could not be queried."""
