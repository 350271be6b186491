"""Multi-year historical averaging for dates no live source can answer."""

from __future__ import annotations

import datetime as dt
import statistics
from collections import Counter
from collections.abc import Iterable

from weatherscore._dates import contiguous_runs, same_day_in_year
from weatherscore._logging import get_logger
from weatherscore._math import round_half_up, round_int
from weatherscore.config import settings
from weatherscore.exceptions import InsufficientHistory, SourceUnavailable
from weatherscore.models.weather import DailyWeatherRecord
from weatherscore.sources.base import WeatherSource


def _on_date(value: dt.datetime | None, day: dt.date) -> dt.datetime | None:
    if value is None:
        return None
    return dt.datetime.combine(day, value.time(), tzinfo=value.tzinfo)


def aggregate_samples(target_date: dt.date, samples: list[DailyWeatherRecord]) -> DailyWeatherRecord:
    """Combine same-calendar-day samples (most recent year first) into one estimate.

    Temperatures, humidity and wind are averaged; gust, UV and cloud cover
    are left unset; precipitation chance is the share of sampled years that
    had any precipitation; the category is the most common one, ties going
    to the more recent year. Sunrise and sunset come from the most recent
    year, moved onto ``target_date``.
    """
    if not samples:
        raise InsufficientHistory(target_date, 0)

    wet_years = sum(1 for s in samples if s.precip_amount > 0)
    most_common_type, _ = Counter(s.precip_type for s in samples).most_common(1)[0]
    latest = samples[0]

    return DailyWeatherRecord(
        date=target_date,
        temp_high=round_int(statistics.mean(s.temp_high for s in samples)),
        temp_low=round_int(statistics.mean(s.temp_low for s in samples)),
        humidity=round_int(statistics.mean(s.humidity for s in samples)),
        wind_speed=round_int(statistics.mean(s.wind_speed for s in samples)),
        wind_gust=None,
        precip_chance=round_int(wet_years / len(samples) * 100),
        precip_type=most_common_type,
        precip_amount=round_half_up(statistics.mean(s.precip_amount for s in samples), 2),
        uv_index=None,
        cloud_cover=None,
        sunrise=_on_date(latest.sunrise, target_date),
        sunset=_on_date(latest.sunset, target_date),
    )


class AveragingFallback:
    """Estimate a day's weather from the same calendar day in prior years."""

    def __init__(self, historical: WeatherSource, years: int = settings.averaging_years) -> None:
        if years < 1:
            raise ValueError("years must be at least 1")
        self._historical = historical
        self.years = years

    async def estimate(self, lat: float, lon: float, target_date: dt.date) -> DailyWeatherRecord:
        """Average ``target_date``'s month/day over the previous ``years`` years.

        Years whose fetch fails are skipped. Raises ``InsufficientHistory``
        when none succeed.
        """
        samples: list[DailyWeatherRecord] = []
        for offset in range(1, self.years + 1):
            day = same_day_in_year(target_date, target_date.year - offset)
            try:
                records = await self._historical.fetch(lat, lon, day, day)
            except SourceUnavailable as exc:
                get_logger().warning(
                    "Averaging: no history for %s at (%s, %s): %s", day, lat, lon, exc,
                )
                continue
            match = next((r for r in records if r.date == day), None)
            if match is not None:
                samples.append(match)

        if not samples:
            raise InsufficientHistory(target_date, self.years)
        return aggregate_samples(target_date, samples)

    async def estimate_many(
        self, lat: float, lon: float, dates: Iterable[dt.date],
    ) -> dict[dt.date, DailyWeatherRecord]:
        """Estimate several dates, fetching each prior year once per contiguous run.

        Every date is still aggregated on its own; dates with no usable
        year are left out of the result.
        """
        estimates: dict[dt.date, DailyWeatherRecord] = {}
        for run in contiguous_runs(dates):
            by_year: list[tuple[int, dict[dt.date, DailyWeatherRecord]]] = []
            for offset in range(1, self.years + 1):
                year_start = same_day_in_year(run.start, run.start.year - offset)
                year_end = same_day_in_year(run.end, run.end.year - offset)
                try:
                    records = await self._historical.fetch(lat, lon, year_start, year_end)
                except SourceUnavailable as exc:
                    get_logger().warning(
                        "Averaging: no history for %s..%s at (%s, %s): %s",
                        year_start, year_end, lat, lon, exc,
                    )
                    continue
                by_year.append((offset, {r.date: r for r in records}))

            for day in run:
                samples = [
                    records[sample_day]
                    for offset, records in by_year
                    if (sample_day := same_day_in_year(day, day.year - offset)) in records
                ]
                if not samples:
                    get_logger().warning("%s", InsufficientHistory(day, self.years))
                    continue
                estimates[day] = aggregate_samples(day, samples)
        return estimates
