"""Daily weather data model."""

from __future__ import annotations

import datetime as dt
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class PrecipitationType(str, Enum):
    """Canonical precipitation categories shared by every source."""

    NONE = "none"
    RAIN = "rain"
    SNOW = "snow"
    SLEET = "sleet"
    FREEZING_RAIN = "freezing_rain"
    HAIL = "hail"
    DRIZZLE = "drizzle"
    THUNDERSTORMS = "thunderstorms"
    ICE_PELLETS = "ice_pellets"
    FOG = "fog"
    MIST = "mist"
    MIXED = "mixed"


class DataClass(str, Enum):
    """Kind of cached data; selects the freshness rule."""

    FORECAST = "forecast"
    HISTORICAL = "historical"


class Provenance(str, Enum):
    """Which data classes fed a resolved record set."""

    FORECAST = "forecast"
    HISTORICAL = "historical"
    MIXED = "mixed"


class DailyWeatherRecord(BaseModel):
    """One calendar day of weather, in °F, mph and inches."""

    model_config = ConfigDict(frozen=True)

    date: dt.date
    temp_high: int
    temp_low: int
    humidity: int = Field(ge=0, le=100)
    wind_speed: int = Field(ge=0)
    wind_gust: int | None = None
    precip_chance: int = Field(ge=0, le=100)
    precip_type: PrecipitationType = PrecipitationType.NONE
    precip_amount: float = Field(default=0.0, ge=0)
    uv_index: float | None = None
    cloud_cover: float | None = Field(default=None, ge=0, le=100)
    sunrise: dt.datetime | None = None
    sunset: dt.datetime | None = None


class ResolvedWeather(BaseModel):
    """Merged record set for one location and its provenance."""

    model_config = ConfigDict(frozen=True)

    location_id: str
    latitude: float
    longitude: float
    records: list[DailyWeatherRecord]
    provenance: Provenance | None = None
    fetched_at: dt.datetime

    @property
    def is_empty(self) -> bool:
        return not self.records
