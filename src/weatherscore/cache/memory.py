"""In-process weather cache."""

from __future__ import annotations

import asyncio
import datetime as dt
from collections.abc import Sequence

from weatherscore._dates import DateRange
from weatherscore.cache.base import CacheWrite, newest_per_date
from weatherscore.models.cache import CacheEntry
from weatherscore.models.weather import DataClass


class InMemoryWeatherCache:
    """Dict-backed cache store; each ``put`` batch is applied under one lock."""

    def __init__(self) -> None:
        self._entries: dict[str, dict[tuple[dt.date, DataClass], CacheEntry]] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return sum(len(by_key) for by_key in self._entries.values())

    async def get(self, location_id: str, date_range: DateRange) -> dict[dt.date, CacheEntry]:
        async with self._lock:
            by_key = self._entries.get(location_id, {})
            hits = [entry for (day, _), entry in by_key.items() if day in date_range]
        return newest_per_date(hits)

    async def put(
        self, location_id: str, entries: Sequence[CacheWrite], fetched_at: dt.datetime,
    ) -> None:
        async with self._lock:
            by_key = self._entries.setdefault(location_id, {})
            for day, data_class, record in entries:
                by_key[(day, data_class)] = CacheEntry(
                    location_id=location_id,
                    date=day,
                    data_class=data_class,
                    record=record,
                    fetched_at=fetched_at,
                )
