"""Cache entry model."""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict

from weatherscore.models.weather import DailyWeatherRecord, DataClass


class CacheEntry(BaseModel):
    """A cached daily record keyed by (location_id, date, data_class)."""

    model_config = ConfigDict(frozen=True)

    location_id: str
    date: dt.date
    data_class: DataClass
    record: DailyWeatherRecord
    fetched_at: dt.datetime

    @property
    def key(self) -> tuple[str, dt.date, DataClass]:
        return (self.location_id, self.date, self.data_class)

    def age(self, now: dt.datetime) -> dt.timedelta:
        """Time elapsed since the entry was fetched."""
        return now - self.fetched_at
