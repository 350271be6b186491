"""Concurrent batch search over many candidate locations."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

from weatherscore._dates import DateRange
from weatherscore._logging import get_logger, log_service_call
from weatherscore.config import settings
from weatherscore.locations import LocationStore
from weatherscore.models.filters import WeatherFilters
from weatherscore.models.location import Location
from weatherscore.models.scoring import ScoredLocation
from weatherscore.models.search import SearchCriteria, SearchOptions, SearchResponse
from weatherscore.resolution import ResolutionOrchestrator
from weatherscore.scoring import ScoringEngine


class BatchSearchCoordinator:
    """Resolve and score locations in concurrent fixed-size batches.

    Batches run one after another; every location inside a batch is
    resolved concurrently. Once ``early_stop_factor * limit`` kept results
    score at or above ``high_score_threshold``, remaining batches are
    skipped.
    """

    def __init__(
        self,
        orchestrator: ResolutionOrchestrator,
        scoring: ScoringEngine | None = None,
        batch_size: int = settings.batch_size,
        high_score_threshold: int = settings.high_score_threshold,
        early_stop_factor: int = settings.early_stop_factor,
    ) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self._orchestrator = orchestrator
        self._scoring = scoring or ScoringEngine()
        self.batch_size = batch_size
        self.high_score_threshold = high_score_threshold
        self.early_stop_factor = early_stop_factor

    async def evaluate(
        self, location: Location, date_range: DateRange, filters: WeatherFilters,
    ) -> ScoredLocation | None:
        """Resolve and score one location; ``None`` if it failed or has no data."""
        try:
            resolved = await self._orchestrator.resolve(
                location.id, location.latitude, location.longitude,
                date_range.start, date_range.end,
            )
            if resolved.provenance is None:
                get_logger().info("No weather data for %s; omitting", location.id)
                return None
            return self._scoring.score(location, resolved.records, filters, resolved.provenance)
        except Exception as exc:
            # One location failing must not take its batch down with it.
            get_logger().error(
                "Location %s failed: %s: %s", location.id, type(exc).__name__, exc,
            )
            return None

    @log_service_call
    async def search(
        self,
        locations: Sequence[Location],
        date_range: DateRange,
        filters: WeatherFilters,
        limit: int = settings.default_limit,
        min_score: float = 0,
    ) -> list[ScoredLocation]:
        """Return at most ``limit`` locations scoring ``>= min_score``, best first."""
        results: list[ScoredLocation] = []
        for offset in range(0, len(locations), self.batch_size):
            batch = locations[offset:offset + self.batch_size]
            scored = await asyncio.gather(
                *(self.evaluate(location, date_range, filters) for location in batch)
            )
            results.extend(r for r in scored if r is not None and r.score >= min_score)

            high_scorers = sum(1 for r in results if r.score >= self.high_score_threshold)
            if high_scorers >= self.early_stop_factor * limit:
                get_logger().info(
                    "Early stop after %d of %d locations (%d high scorers)",
                    offset + len(batch), len(locations), high_scorers,
                )
                break

        results.sort(key=lambda r: r.score, reverse=True)
        return results[:limit]


async def search_locations(
    filters: WeatherFilters,
    date_range: DateRange,
    options: SearchOptions | None = None,
    *,
    store: LocationStore,
    coordinator: BatchSearchCoordinator,
) -> SearchResponse:
    """Find the locations whose weather best matches ``filters`` over ``date_range``.

    Candidates come from ``store`` (narrowed by region, states and bounds);
    ranges longer than ``settings.long_range_warning_days`` are processed but
    flagged.
    """
    options = options or SearchOptions()
    warnings: list[str] = []
    if len(date_range) > settings.long_range_warning_days:
        warnings.append(
            f"Date range spans {len(date_range)} days; results beyond the forecast "
            "horizon are estimated from historical averages."
        )

    candidates = store.find(
        region=options.region,
        states=options.states,
        bounds=options.bounds,
        limit=settings.max_candidates,
    )
    results: list[ScoredLocation] = []
    if candidates:
        results = await coordinator.search(
            candidates, date_range, filters, limit=options.limit, min_score=options.min_score,
        )

    return SearchResponse(
        results=results,
        total=len(results),
        warnings=warnings,
        criteria=SearchCriteria(
            filters=filters,
            start_date=date_range.start,
            end_date=date_range.end,
            options=options,
        ),
    )
