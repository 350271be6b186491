"""Weather source capability shared by forecast and historical providers."""

from __future__ import annotations

import datetime as dt
from typing import Protocol, runtime_checkable

from weatherscore.models.weather import DailyWeatherRecord


@runtime_checkable
class WeatherSource(Protocol):
    """Anything that can answer daily weather for a coordinate and date span."""

    name: str

    async def fetch(
        self, lat: float, lon: float, start: dt.date, end: dt.date,
    ) -> list[DailyWeatherRecord]:
        """Return records ordered by date; raise ``SourceUnavailable`` on failure."""
        ...

    def supports_range(self, start: dt.date, end: dt.date) -> bool:
        """Whether this source can answer every day in ``[start, end]``."""
        ...
