"""Resolve a location's daily weather from cache, live sources and averages."""

from __future__ import annotations

import datetime as dt
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from weatherscore._dates import ONE_DAY, DateRange, contiguous_runs
from weatherscore._logging import get_logger, log_service_call
from weatherscore.averaging import AveragingFallback
from weatherscore.cache.base import CacheWrite, WeatherCacheStore
from weatherscore.config import settings
from weatherscore.exceptions import CacheReadFailed, CacheWriteFailed, SourceUnavailable
from weatherscore.models.cache import CacheEntry
from weatherscore.models.weather import DailyWeatherRecord, DataClass, Provenance, ResolvedWeather
from weatherscore.sources.base import WeatherSource

Resolved = dict[dt.date, tuple[DailyWeatherRecord, DataClass]]


def utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


@dataclass(frozen=True)
class FreshnessPolicy:
    """How long cached entries of each data class stay usable."""

    forecast_ttl: dt.timedelta = dt.timedelta(hours=settings.forecast_ttl_hours)
    historical_ttl: dt.timedelta = dt.timedelta(days=settings.historical_ttl_days)

    def ttl_for(self, data_class: DataClass) -> dt.timedelta:
        if data_class is DataClass.FORECAST:
            return self.forecast_ttl
        return self.historical_ttl

    def is_stale(self, entry: CacheEntry, now: dt.datetime) -> bool:
        return entry.age(now) > self.ttl_for(entry.data_class)


def provenance_of(classes: Sequence[DataClass]) -> Provenance | None:
    """Summarize the data classes behind a record set."""
    kinds = set(classes)
    if not kinds:
        return None
    if kinds == {DataClass.FORECAST}:
        return Provenance.FORECAST
    if kinds == {DataClass.HISTORICAL}:
        return Provenance.HISTORICAL
    return Provenance.MIXED


class ResolutionOrchestrator:
    """Produce a merged, provenance-tagged record set for one location.

    Fresh cache hits are used as-is. Remaining dates are fetched in
    contiguous runs: past days from the historical source, days inside the
    forecast horizon from the forecast source, and anything a source cannot
    answer (or days past the horizon) from the averaging fallback. New
    records are written back in a single batch.

    Usage:
        orchestrator = ResolutionOrchestrator(cache, forecast, historical)
        resolved = await orchestrator.resolve("grid-1", 39.7, -105.0, start, end)
    """

    def __init__(
        self,
        cache: WeatherCacheStore,
        forecast: WeatherSource,
        historical: WeatherSource,
        fallback: AveragingFallback | None = None,
        policy: FreshnessPolicy | None = None,
        horizon_days: int = settings.forecast_horizon_days,
        today: Callable[[], dt.date] = dt.date.today,
        now: Callable[[], dt.datetime] = utc_now,
    ) -> None:
        self._cache = cache
        self._forecast = forecast
        self._historical = historical
        self._fallback = fallback or AveragingFallback(historical)
        self._policy = policy or FreshnessPolicy()
        self.horizon_days = horizon_days
        self._today = today
        self._now = now

    def expected_class(self, day: dt.date, today: dt.date) -> DataClass:
        """Data class a date should be served from, given today's date."""
        if today <= day <= today + dt.timedelta(days=self.horizon_days):
            return DataClass.FORECAST
        return DataClass.HISTORICAL

    @log_service_call
    async def resolve(
        self,
        location_id: str,
        lat: float,
        lon: float,
        start: dt.date,
        end: dt.date,
    ) -> ResolvedWeather:
        """Return every obtainable day in ``[start, end]`` for the location.

        Dates that neither a source nor the fallback could produce are left
        out, so the result may be sparse.
        """
        date_range = DateRange(start, end)
        today = self._today()
        now = self._now()

        try:
            cached = await self._cache.get(location_id, date_range)
        except CacheReadFailed as exc:
            get_logger().warning("Cache read failed for %s (fetching all): %s", location_id, exc)
            cached = {}
        merged: Resolved = {}
        needs_fetch: list[dt.date] = []
        for day in date_range:
            entry = cached.get(day)
            if (
                entry is not None
                and entry.data_class is self.expected_class(day, today)
                and not self._policy.is_stale(entry, now)
            ):
                merged[day] = (entry.record, entry.data_class)
            else:
                needs_fetch.append(day)

        if needs_fetch:
            fetched = await self._fetch(lat, lon, needs_fetch, today)
            if fetched:
                await self._write_back(location_id, fetched, now)
            merged.update(fetched)

        days = [day for day in date_range if day in merged]
        return ResolvedWeather(
            location_id=location_id,
            latitude=lat,
            longitude=lon,
            records=[merged[day][0] for day in days],
            provenance=provenance_of([merged[day][1] for day in days]),
            fetched_at=now,
        )

    def _segments(self, run: DateRange, today: dt.date) -> tuple[DateRange | None, DateRange | None, DateRange | None]:
        """Split a run into its past, forecast-window and beyond-horizon parts."""
        horizon_end = today + dt.timedelta(days=self.horizon_days)

        def clip(lo: dt.date, hi: dt.date) -> DateRange | None:
            lo, hi = max(lo, run.start), min(hi, run.end)
            return DateRange(lo, hi) if lo <= hi else None

        return (
            clip(run.start, today - ONE_DAY),
            clip(today, horizon_end),
            clip(horizon_end + ONE_DAY, run.end),
        )

    async def _fetch(
        self, lat: float, lon: float, days: list[dt.date], today: dt.date,
    ) -> Resolved:
        fetched: Resolved = {}
        for_fallback: list[dt.date] = []

        for run in contiguous_runs(days):
            past, window, beyond = self._segments(run, today)
            for segment, source, data_class in (
                (past, self._historical, DataClass.HISTORICAL),
                (window, self._forecast, DataClass.FORECAST),
            ):
                if segment is None:
                    continue
                records = await self._from_source(source, lat, lon, segment)
                for day in segment:
                    if day in records:
                        fetched[day] = (records[day], data_class)
                    else:
                        for_fallback.append(day)
            if beyond is not None:
                for_fallback.extend(beyond)

        if for_fallback:
            get_logger().info(
                "Averaging %d day(s) at (%s, %s) from prior years", len(for_fallback), lat, lon,
            )
            estimates = await self._fallback.estimate_many(lat, lon, for_fallback)
            for day, record in estimates.items():
                fetched[day] = (record, DataClass.HISTORICAL)
        return fetched

    async def _from_source(
        self, source: WeatherSource, lat: float, lon: float, segment: DateRange,
    ) -> dict[dt.date, DailyWeatherRecord]:
        if not source.supports_range(segment.start, segment.end):
            get_logger().info(
                "%s cannot answer %s..%s; using averages", source.name, segment.start, segment.end,
            )
            return {}
        try:
            records = await source.fetch(lat, lon, segment.start, segment.end)
        except SourceUnavailable as exc:
            get_logger().warning(
                "%s failed for %s..%s at (%s, %s); using averages: %s",
                source.name, segment.start, segment.end, lat, lon, exc,
            )
            return {}
        return {r.date: r for r in records if r.date in segment}

    async def _write_back(self, location_id: str, fetched: Resolved, now: dt.datetime) -> None:
        entries: list[CacheWrite] = [
            (day, data_class, record) for day, (record, data_class) in sorted(fetched.items())
        ]
        try:
            await self._cache.put(location_id, entries, now)
        except CacheWriteFailed as exc:
            get_logger().warning("Cache write failed for %s (continuing): %s", location_id, exc)
