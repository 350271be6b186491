"""Scoring result models."""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict

from weatherscore.models.location import Region
from weatherscore.models.weather import Provenance


class ScoreBreakdown(BaseModel):
    """Per-category aggregate scores (0-100)."""

    model_config = ConfigDict(frozen=True)

    temperature: int
    humidity: int
    wind: int
    precipitation: int
    aqi: int | None = None


class DailyScore(BaseModel):
    """Score for a single day."""

    model_config = ConfigDict(frozen=True)

    date: dt.date
    score: float
    passes_filters: bool


class ScoredLocation(BaseModel):
    """A location ranked against a set of weather filters."""

    model_config = ConfigDict(frozen=True)

    location_id: str
    latitude: float
    longitude: float
    name: str | None = None
    state: str | None = None
    region: Region | None = None
    score: int
    score_breakdown: ScoreBreakdown
    daily_scores: list[DailyScore]
    provenance: Provenance

    @property
    def days_passing(self) -> int:
        """Number of days that satisfied every active filter."""
        return sum(1 for d in self.daily_scores if d.passes_filters)
