"""Weather cache stores."""

from weatherscore.cache.base import CacheWrite, WeatherCacheStore
from weatherscore.cache.memory import InMemoryWeatherCache
from weatherscore.cache.sql import SqlWeatherCache, WeatherCacheRow

__all__ = [
    "CacheWrite",
    "InMemoryWeatherCache",
    "SqlWeatherCache",
    "WeatherCacheRow",
    "WeatherCacheStore",
]
