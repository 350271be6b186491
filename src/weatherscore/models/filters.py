"""User weather preference filters."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from weatherscore.models.weather import PrecipitationType


class WeatherFilters(BaseModel):
    """Optional weather preferences; unset fields never take part in scoring.

    Accepts both snake_case names and the camelCase keys used by the web
    layer (``tempMin``, ``precipTypesExcluded``, ...).
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    temp_min: float | None = Field(default=None, ge=-50, le=150)
    temp_max: float | None = Field(default=None, ge=-50, le=150)
    humidity_max: float | None = Field(default=None, ge=0, le=100)
    wind_speed_max: float | None = Field(default=None, ge=0, le=200)
    precip_chance_max: float | None = Field(default=None, ge=0, le=100)
    precip_types_allowed: list[PrecipitationType] | None = None
    precip_types_excluded: list[PrecipitationType] | None = None
    # Accepted but not scored: no air-quality source is wired in.
    aqi_max: float | None = Field(default=None, ge=1, le=500)

    @property
    def filters_temperature(self) -> bool:
        return self.temp_min is not None or self.temp_max is not None

    @property
    def filters_humidity(self) -> bool:
        return self.humidity_max is not None

    @property
    def filters_wind(self) -> bool:
        return self.wind_speed_max is not None

    @property
    def filters_precipitation(self) -> bool:
        return (
            self.precip_chance_max is not None
            or self.precip_types_allowed is not None
            or self.precip_types_excluded is not None
        )

    def merged(self, **updates: object) -> WeatherFilters:
        """Return a copy with extra filter fields set, re-running validation."""
        data = self.model_dump(exclude_none=True)
        data.update({k: v for k, v in updates.items() if v is not None})
        return WeatherFilters.model_validate(data)
