"""Weather cache store interface."""

from __future__ import annotations

import datetime as dt
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from weatherscore._dates import DateRange
from weatherscore.models.cache import CacheEntry
from weatherscore.models.weather import DailyWeatherRecord, DataClass

CacheWrite = tuple[dt.date, DataClass, DailyWeatherRecord]


@runtime_checkable
class WeatherCacheStore(Protocol):
    """Persistent map keyed by (location_id, date, data_class).

    The store applies no freshness rule: it returns whatever is present and
    leaves staleness decisions to the caller.
    """

    async def get(self, location_id: str, date_range: DateRange) -> dict[dt.date, CacheEntry]:
        """Return the newest entry per date in ``date_range``; absent dates are left out.

        Backend failures raise ``CacheReadFailed``.
        """
        ...

    async def put(
        self, location_id: str, entries: Sequence[CacheWrite], fetched_at: dt.datetime,
    ) -> None:
        """Upsert ``entries`` as one atomic batch; raise ``CacheWriteFailed`` on failure."""
        ...


def newest_per_date(entries: list[CacheEntry]) -> dict[dt.date, CacheEntry]:
    """Collapse entries to one per date, keeping the most recently fetched."""
    by_date: dict[dt.date, CacheEntry] = {}
    for entry in entries:
        current = by_date.get(entry.date)
        if current is None or entry.fetched_at > current.fetched_at:
            by_date[entry.date] = entry
    return by_date
