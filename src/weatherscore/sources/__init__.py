"""Weather sources."""

from weatherscore.sources.base import WeatherSource
from weatherscore.sources.openmeteo import (
    OpenMeteoForecastSource,
    OpenMeteoHistoricalSource,
    map_weather_code,
    parse_daily,
)

__all__ = [
    "OpenMeteoForecastSource",
    "OpenMeteoHistoricalSource",
    "WeatherSource",
    "map_weather_code",
    "parse_daily",
]
