"""Search request options and response envelope."""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field

from weatherscore.models.filters import WeatherFilters
from weatherscore.models.location import Bounds, Region
from weatherscore.models.scoring import ScoredLocation


class SearchOptions(BaseModel):
    """Result shaping and upstream candidate filtering."""

    model_config = ConfigDict(frozen=True)

    limit: int = Field(default=50, ge=1, le=500)
    min_score: float = Field(default=0, ge=0, le=100)
    region: Region | None = None
    states: list[str] | None = None
    bounds: Bounds | None = None


class SearchCriteria(BaseModel):
    """Echo of the request that produced a response."""

    model_config = ConfigDict(frozen=True)

    filters: WeatherFilters
    start_date: dt.date
    end_date: dt.date
    options: SearchOptions


class SearchResponse(BaseModel):
    """Ranked search results."""

    model_config = ConfigDict(frozen=True)

    results: list[ScoredLocation]
    total: int
    warnings: list[str] = Field(default_factory=list)
    criteria: SearchCriteria
