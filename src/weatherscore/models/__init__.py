"""Engine data models."""

from weatherscore.models.cache import CacheEntry
from weatherscore.models.filters import WeatherFilters
from weatherscore.models.location import Bounds, Location, Region
from weatherscore.models.scoring import DailyScore, ScoreBreakdown, ScoredLocation
from weatherscore.models.search import SearchCriteria, SearchOptions, SearchResponse
from weatherscore.models.weather import (
    DailyWeatherRecord,
    DataClass,
    PrecipitationType,
    Provenance,
    ResolvedWeather,
)

__all__ = [
    "Bounds",
    "CacheEntry",
    "DailyScore",
    "DailyWeatherRecord",
    "DataClass",
    "Location",
    "PrecipitationType",
    "Provenance",
    "Region",
    "ResolvedWeather",
    "ScoreBreakdown",
    "ScoredLocation",
    "SearchCriteria",
    "SearchOptions",
    "SearchResponse",
    "WeatherFilters",
]
