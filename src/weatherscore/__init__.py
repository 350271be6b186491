"""weatherscore: resolve daily weather for many locations and rank them against preferences."""

from weatherscore._dates import DateRange
from weatherscore.averaging import AveragingFallback
from weatherscore.cache import InMemoryWeatherCache, SqlWeatherCache, WeatherCacheStore
from weatherscore.exceptions import (
    CacheReadFailed,
    CacheWriteFailed,
    InsufficientHistory,
    SourceAPIError,
    SourceConnectionError,
    SourceParseError,
    SourceTimeoutError,
    SourceUnavailable,
    WeatherScoreError,
)
from weatherscore.locations import InMemoryLocationStore, LocationStore
from weatherscore.models import (
    Bounds,
    DailyWeatherRecord,
    DataClass,
    Location,
    PrecipitationType,
    Provenance,
    Region,
    ScoredLocation,
    SearchOptions,
    SearchResponse,
    WeatherFilters,
)
from weatherscore.resolution import FreshnessPolicy, ResolutionOrchestrator
from weatherscore.scoring import ScoringEngine
from weatherscore.search import BatchSearchCoordinator, search_locations
from weatherscore.sources import OpenMeteoForecastSource, OpenMeteoHistoricalSource, WeatherSource

__all__ = [
    "AveragingFallback",
    "BatchSearchCoordinator",
    "Bounds",
    "CacheReadFailed",
    "CacheWriteFailed",
    "DailyWeatherRecord",
    "DataClass",
    "DateRange",
    "FreshnessPolicy",
    "InMemoryLocationStore",
    "InMemoryWeatherCache",
    "InsufficientHistory",
    "Location",
    "LocationStore",
    "OpenMeteoForecastSource",
    "OpenMeteoHistoricalSource",
    "PrecipitationType",
    "Provenance",
    "Region",
    "ResolutionOrchestrator",
    "ScoredLocation",
    "ScoringEngine",
    "SearchOptions",
    "SearchResponse",
    "SourceAPIError",
    "SourceConnectionError",
    "SourceParseError",
    "SourceTimeoutError",
    "SourceUnavailable",
    "SqlWeatherCache",
    "WeatherCacheStore",
    "WeatherFilters",
    "WeatherScoreError",
    "WeatherSource",
    "search_locations",
]

__version__ = "0.1.0"
