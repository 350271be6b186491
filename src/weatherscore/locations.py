"""Candidate location lookup."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from typing import Protocol, runtime_checkable

from weatherscore._math import round_half_up
from weatherscore.config import settings
from weatherscore.models.location import Bounds, Location, Region

# One degree of latitude is roughly 69 miles.
MILES_PER_DEGREE = 69


@runtime_checkable
class LocationStore(Protocol):
    """Read-only source of grid points to search."""

    def find(
        self,
        region: Region | None = None,
        states: Sequence[str] | None = None,
        bounds: Bounds | None = None,
        limit: int = settings.max_candidates,
    ) -> list[Location]: ...

    def get(self, location_id: str) -> Location | None: ...

    def nearest(self, lat: float, lon: float) -> tuple[Location, float] | None: ...


def degree_distance_miles(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Flat-plane distance in degrees scaled to miles; fine at grid spacing."""
    return math.hypot(lat1 - lat2, lon1 - lon2) * MILES_PER_DEGREE


class InMemoryLocationStore:
    """Location store over a fixed list, ordered by state then latitude (north first).

    Usage:
        store = InMemoryLocationStore(grid)
        store.find(region=Region.WEST, states=["co"])
        point, miles = store.nearest(39.7, -105.0)
    """

    def __init__(self, locations: Iterable[Location]) -> None:
        self._locations = sorted(
            locations, key=lambda loc: ((loc.state or "").upper(), -loc.latitude),
        )
        self._by_id = {loc.id: loc for loc in self._locations}

    def __len__(self) -> int:
        return len(self._locations)

    def find(
        self,
        region: Region | None = None,
        states: Sequence[str] | None = None,
        bounds: Bounds | None = None,
        limit: int = settings.max_candidates,
    ) -> list[Location]:
        wanted_states = {s.upper() for s in states} if states else None
        matches = [
            loc for loc in self._locations
            if (region is None or loc.region == region)
            and (wanted_states is None or (loc.state or "").upper() in wanted_states)
            and (bounds is None or bounds.contains(loc.latitude, loc.longitude))
        ]
        return matches[:limit]

    def get(self, location_id: str) -> Location | None:
        return self._by_id.get(location_id)

    def nearest(self, lat: float, lon: float) -> tuple[Location, float] | None:
        """Closest grid point and its distance in miles (2 decimals); ``None`` if empty."""
        if not self._locations:
            return None
        closest = min(
            self._locations,
            key=lambda loc: math.hypot(loc.latitude - lat, loc.longitude - lon),
        )
        miles = degree_distance_miles(closest.latitude, closest.longitude, lat, lon)
        return closest, round_half_up(miles, 2)
