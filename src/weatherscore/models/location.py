"""Candidate location model."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Region(str, Enum):
    """Administrative regions that grid points are tagged with."""

    NORTHEAST = "northeast"
    SOUTHEAST = "southeast"
    MIDWEST = "midwest"
    SOUTHWEST = "southwest"
    WEST = "west"
    PACIFIC_NORTHWEST = "pacific_northwest"


class Location(BaseModel):
    """A grid point that can be searched."""

    model_config = ConfigDict(frozen=True)

    id: str
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    name: str | None = None
    state: str | None = None
    region: Region | None = None


class Bounds(BaseModel):
    """A latitude/longitude viewport, inclusive on every edge."""

    model_config = ConfigDict(frozen=True)

    min_lat: float = Field(ge=-90, le=90)
    min_lon: float = Field(ge=-180, le=180)
    max_lat: float = Field(ge=-90, le=90)
    max_lon: float = Field(ge=-180, le=180)

    @model_validator(mode="after")
    def _check_order(self) -> Bounds:
        if self.min_lat > self.max_lat or self.min_lon > self.max_lon:
            raise ValueError("minimum bound exceeds maximum bound")
        return self

    @classmethod
    def parse(cls, value: str) -> Bounds:
        """Build bounds from a ``"minLat,minLon,maxLat,maxLon"`` string."""
        parts = value.split(",")
        if len(parts) != 4:
            raise ValueError(f"Invalid bounds format: {value!r}")
        min_lat, min_lon, max_lat, max_lon = (float(p) for p in parts)
        return cls(min_lat=min_lat, min_lon=min_lon, max_lat=max_lat, max_lon=max_lon)

    def contains(self, latitude: float, longitude: float) -> bool:
        return (
            self.min_lat <= latitude <= self.max_lat
            and self.min_lon <= longitude <= self.max_lon
        )
