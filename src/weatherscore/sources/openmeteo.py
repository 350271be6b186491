"""Open-Meteo forecast and archive sources.

Both variants request metric units and normalize to °F, mph and inches, and
map WMO weather codes onto ``PrecipitationType``.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Callable
from typing import Any

from pydantic import ValidationError

from weatherscore._http import AsyncTransport
from weatherscore._logging import get_logger, log_source_call
from weatherscore._math import celsius_to_fahrenheit, kmh_to_mph, mm_to_inches, round_int
from weatherscore.config import settings
from weatherscore.exceptions import SourceParseError
from weatherscore.models.weather import DailyWeatherRecord, PrecipitationType

# WMO code -> precipitation category; anything unlisted is treated as clear.
WMO_PRECIPITATION: dict[int, PrecipitationType] = {
    0: PrecipitationType.NONE,
    1: PrecipitationType.NONE,
    2: PrecipitationType.NONE,
    3: PrecipitationType.NONE,
    45: PrecipitationType.FOG,
    48: PrecipitationType.FOG,
    51: PrecipitationType.DRIZZLE,
    53: PrecipitationType.DRIZZLE,
    55: PrecipitationType.DRIZZLE,
    56: PrecipitationType.FREEZING_RAIN,
    57: PrecipitationType.FREEZING_RAIN,
    61: PrecipitationType.RAIN,
    63: PrecipitationType.RAIN,
    65: PrecipitationType.RAIN,
    66: PrecipitationType.FREEZING_RAIN,
    67: PrecipitationType.FREEZING_RAIN,
    71: PrecipitationType.SNOW,
    73: PrecipitationType.SNOW,
    75: PrecipitationType.SNOW,
    77: PrecipitationType.SNOW,
    80: PrecipitationType.RAIN,
    81: PrecipitationType.RAIN,
    82: PrecipitationType.RAIN,
    85: PrecipitationType.SNOW,
    86: PrecipitationType.SNOW,
    95: PrecipitationType.THUNDERSTORMS,
    96: PrecipitationType.THUNDERSTORMS,
    99: PrecipitationType.THUNDERSTORMS,
}

_FORECAST_DAILY = [
    "temperature_2m_max",
    "temperature_2m_min",
    "relative_humidity_2m_max",
    "wind_speed_10m_max",
    "wind_gusts_10m_max",
    "precipitation_probability_max",
    "precipitation_sum",
    "weather_code",
    "uv_index_max",
    "cloud_cover_mean",
    "sunrise",
    "sunset",
]

# The archive has no precipitation probability or UV index.
_HISTORICAL_DAILY = [
    "temperature_2m_max",
    "temperature_2m_min",
    "relative_humidity_2m_max",
    "wind_speed_10m_max",
    "wind_gusts_10m_max",
    "precipitation_sum",
    "weather_code",
    "sunrise",
    "sunset",
]

_REQUIRED = (
    "temperature_2m_max",
    "temperature_2m_min",
    "relative_humidity_2m_max",
    "wind_speed_10m_max",
)


def map_weather_code(code: int | None) -> PrecipitationType:
    """Map a WMO weather code to a precipitation category."""
    if code is None:
        return PrecipitationType.NONE
    return WMO_PRECIPITATION.get(int(code), PrecipitationType.NONE)


def _build_params(
    lat: float, lon: float, start: dt.date, end: dt.date, daily: list[str],
) -> list[tuple[str, str]]:
    return [
        ("latitude", str(lat)),
        ("longitude", str(lon)),
        ("start_date", start.isoformat()),
        ("end_date", end.isoformat()),
        ("daily", ",".join(daily)),
        ("temperature_unit", "celsius"),
        ("wind_speed_unit", "kmh"),
        ("precipitation_unit", "mm"),
        ("timezone", "auto"),
    ]


def _series_value(series: Any, index: int) -> Any:
    """Return series[index], or None when the series is missing or short."""
    if not isinstance(series, list) or index >= len(series):
        return None
    return series[index]


def _parse_timestamp(value: Any) -> dt.datetime | None:
    if not value:
        return None
    return dt.datetime.fromisoformat(str(value))


def parse_daily(payload: dict[str, Any], historical: bool = False) -> list[DailyWeatherRecord]:
    """Convert an Open-Meteo ``daily`` block into normalized records.

    Days with a null in any required series are skipped. Historical payloads
    carry no precipitation probability, so it is derived from the amount
    (100 when any precipitation fell, else 0).
    """
    daily = payload.get("daily")
    if not isinstance(daily, dict) or not isinstance(daily.get("time"), list):
        raise SourceParseError("Response has no daily time series")

    records: list[DailyWeatherRecord] = []
    for i, day in enumerate(daily["time"]):
        values = {key: _series_value(daily.get(key), i) for key in _REQUIRED}
        if any(v is None for v in values.values()):
            get_logger().debug("Skipping %s: incomplete daily values", day)
            continue

        precip_mm = _series_value(daily.get("precipitation_sum"), i) or 0.0
        if historical:
            precip_chance = 100 if precip_mm > 0 else 0
        else:
            precip_chance = round_int(_series_value(daily.get("precipitation_probability_max"), i) or 0)
        gust = _series_value(daily.get("wind_gusts_10m_max"), i)

        try:
            records.append(
                DailyWeatherRecord(
                    date=dt.date.fromisoformat(str(day)),
                    temp_high=celsius_to_fahrenheit(values["temperature_2m_max"]),
                    temp_low=celsius_to_fahrenheit(values["temperature_2m_min"]),
                    humidity=round_int(values["relative_humidity_2m_max"]),
                    wind_speed=kmh_to_mph(values["wind_speed_10m_max"]),
                    wind_gust=kmh_to_mph(gust) if gust is not None else None,
                    precip_chance=precip_chance,
                    precip_type=map_weather_code(_series_value(daily.get("weather_code"), i)),
                    precip_amount=mm_to_inches(precip_mm),
                    uv_index=_series_value(daily.get("uv_index_max"), i),
                    cloud_cover=_series_value(daily.get("cloud_cover_mean"), i),
                    sunrise=_parse_timestamp(_series_value(daily.get("sunrise"), i)),
                    sunset=_parse_timestamp(_series_value(daily.get("sunset"), i)),
                )
            )
        except (TypeError, ValueError, ValidationError) as exc:
            raise SourceParseError(f"Failed to parse daily values for {day}: {exc}") from exc
    return records


class OpenMeteoForecastSource:
    """Live forecast source, answering ``[today, today + horizon_days]``.

    Usage:
        async with OpenMeteoForecastSource() as forecast:
            records = await forecast.fetch(39.74, -104.99, start, end)
    """

    name = "open-meteo-forecast"

    def __init__(
        self,
        base_url: str = settings.forecast_base_url,
        timeout: float = settings.http_timeout,
        horizon_days: int = settings.forecast_horizon_days,
        today: Callable[[], dt.date] = dt.date.today,
    ) -> None:
        self._transport = AsyncTransport(base_url=base_url, timeout=timeout)
        self.horizon_days = horizon_days
        self._today = today

    async def __aenter__(self) -> OpenMeteoForecastSource:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP connection."""
        await self._transport.close()

    def supports_range(self, start: dt.date, end: dt.date) -> bool:
        today = self._today()
        return today <= start <= end <= today + dt.timedelta(days=self.horizon_days)

    @log_source_call
    async def fetch(
        self, lat: float, lon: float, start: dt.date, end: dt.date,
    ) -> list[DailyWeatherRecord]:
        """Get daily forecast records for ``[start, end]``."""
        params = _build_params(lat, lon, start, end, _FORECAST_DAILY)
        payload = await self._transport.get("/forecast", params)
        return parse_daily(payload)


class OpenMeteoHistoricalSource:
    """Archive source, answering any range that ends by yesterday.

    Usage:
        async with OpenMeteoHistoricalSource() as archive:
            records = await archive.fetch(39.74, -104.99, start, end)
    """

    name = "open-meteo-archive"

    def __init__(
        self,
        base_url: str = settings.historical_base_url,
        timeout: float = settings.http_timeout,
        today: Callable[[], dt.date] = dt.date.today,
    ) -> None:
        self._transport = AsyncTransport(base_url=base_url, timeout=timeout)
        self._today = today

    async def __aenter__(self) -> OpenMeteoHistoricalSource:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP connection."""
        await self._transport.close()

    def supports_range(self, start: dt.date, end: dt.date) -> bool:
        return start <= end < self._today()

    @log_source_call
    async def fetch(
        self, lat: float, lon: float, start: dt.date, end: dt.date,
    ) -> list[DailyWeatherRecord]:
        """Get observed daily records for ``[start, end]``."""
        params = _build_params(lat, lon, start, end, _HISTORICAL_DAILY)
        payload = await self._transport.get("/archive", params)
        return parse_daily(payload, historical=True)
