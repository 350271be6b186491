"""Score daily weather against user filters."""

from __future__ import annotations

import statistics
from collections.abc import Sequence

from weatherscore._math import round_int
from weatherscore.models.filters import WeatherFilters
from weatherscore.models.location import Location
from weatherscore.models.scoring import DailyScore, ScoreBreakdown, ScoredLocation
from weatherscore.models.weather import DailyWeatherRecord, PrecipitationType, Provenance

CATEGORY_WEIGHTS: dict[str, float] = {
    "temperature": 0.25,
    "humidity": 0.25,
    "wind": 0.25,
    "precipitation": 0.25,
}

TEMPERATURE_PENALTY = 10  # points per °F outside the range
HUMIDITY_PENALTY = 5  # points per % over the max
WIND_PENALTY = 10  # points per mph over the max
PRECIP_CHANCE_PENALTY = 2  # points per % over the max


def score_temperature(high: float, temp_min: float | None, temp_max: float | None) -> float:
    """Score a day's high against the wanted range (0-100).

    A high below ``temp_min`` (the day never warms up enough) and a high
    above ``temp_max`` are checked independently and their penalties add up.
    """
    penalty = 0.0
    if temp_min is not None and high < temp_min:
        penalty += (temp_min - high) * TEMPERATURE_PENALTY
    if temp_max is not None and high > temp_max:
        penalty += (high - temp_max) * TEMPERATURE_PENALTY
    return max(0.0, 100 - penalty)


def score_humidity(humidity: float, humidity_max: float) -> float:
    if humidity <= humidity_max:
        return 100.0
    return max(0.0, 100 - (humidity - humidity_max) * HUMIDITY_PENALTY)


def score_wind(wind_speed: float, wind_speed_max: float) -> float:
    if wind_speed <= wind_speed_max:
        return 100.0
    return max(0.0, 100 - (wind_speed - wind_speed_max) * WIND_PENALTY)


def score_precipitation(
    chance: float,
    precip_type: PrecipitationType,
    chance_max: float | None = None,
    allowed: Sequence[PrecipitationType] | None = None,
    excluded: Sequence[PrecipitationType] | None = None,
) -> float:
    """Score precipitation (0-100) as the lowest of three independent checks.

    Excluded types and types outside a non-empty allowlist cost the day its
    precipitation chance; a chance above ``chance_max`` costs two points per
    percentage point over.
    """
    score = 100.0
    if excluded and precip_type in excluded and chance > 0:
        score = max(0.0, 100 - chance)
    if (
        allowed
        and precip_type is not PrecipitationType.NONE
        and precip_type not in allowed
        and chance > 0
    ):
        score = min(score, max(0.0, 100 - chance))
    if chance_max is not None and chance > chance_max:
        score = min(score, max(0.0, 100 - (chance - chance_max) * PRECIP_CHANCE_PENALTY))
    return score


def category_scores(record: DailyWeatherRecord, filters: WeatherFilters) -> dict[str, float]:
    """Scores for the categories the filters activate, keyed by category name."""
    scores: dict[str, float] = {}
    if filters.filters_temperature:
        scores["temperature"] = score_temperature(record.temp_high, filters.temp_min, filters.temp_max)
    if filters.humidity_max is not None:
        scores["humidity"] = score_humidity(record.humidity, filters.humidity_max)
    if filters.wind_speed_max is not None:
        scores["wind"] = score_wind(record.wind_speed, filters.wind_speed_max)
    if filters.filters_precipitation:
        scores["precipitation"] = score_precipitation(
            record.precip_chance,
            record.precip_type,
            chance_max=filters.precip_chance_max,
            allowed=filters.precip_types_allowed,
            excluded=filters.precip_types_excluded,
        )
    return scores


class ScoringEngine:
    """Turn a record set into a ranked, explainable ``ScoredLocation``.

    The overall score weights the four category aggregates equally, so a
    category without filters counts as a perfect 100. Pass
    ``renormalize_weights=True`` to spread the weight over active
    categories only.
    """

    def __init__(self, renormalize_weights: bool = False) -> None:
        self.renormalize_weights = renormalize_weights

    def score_day(self, record: DailyWeatherRecord, filters: WeatherFilters) -> tuple[float, bool]:
        """Return ``(score, passes_all)`` for one day.

        With no active filters the day scores a vacuous 100. A day passes
        when every active category scored above zero.
        """
        scores = category_scores(record, filters)
        if not scores:
            return 100.0, True
        return statistics.mean(scores.values()), all(s > 0 for s in scores.values())

    def breakdown(self, records: Sequence[DailyWeatherRecord], filters: WeatherFilters) -> ScoreBreakdown:
        """Average each category over the days it was active (100 if never active)."""
        per_category: dict[str, list[float]] = {name: [] for name in CATEGORY_WEIGHTS}
        for record in records:
            for name, value in category_scores(record, filters).items():
                per_category[name].append(value)
        aggregates = {
            name: round_int(statistics.mean(values)) if values else 100
            for name, values in per_category.items()
        }
        # No air-quality source: reported, never scored.
        return ScoreBreakdown(**aggregates, aqi=None)

    def overall(self, breakdown: ScoreBreakdown, filters: WeatherFilters) -> int:
        weights = dict(CATEGORY_WEIGHTS)
        if self.renormalize_weights:
            active = {
                "temperature": filters.filters_temperature,
                "humidity": filters.filters_humidity,
                "wind": filters.filters_wind,
                "precipitation": filters.filters_precipitation,
            }
            total = sum(w for name, w in weights.items() if active[name])
            if total == 0:
                return 100
            weights = {name: (w / total if active[name] else 0.0) for name, w in weights.items()}
        return round_int(sum(getattr(breakdown, name) * w for name, w in weights.items()))

    def score(
        self,
        location: Location,
        records: Sequence[DailyWeatherRecord],
        filters: WeatherFilters,
        provenance: Provenance,
    ) -> ScoredLocation | None:
        """Score a location; ``None`` when there is no weather to score."""
        if not records:
            return None

        daily_scores = []
        for record in records:
            day_score, passes = self.score_day(record, filters)
            daily_scores.append(DailyScore(date=record.date, score=day_score, passes_filters=passes))

        breakdown = self.breakdown(records, filters)
        return ScoredLocation(
            location_id=location.id,
            latitude=location.latitude,
            longitude=location.longitude,
            name=location.name,
            state=location.state,
            region=location.region,
            score=self.overall(breakdown, filters),
            score_breakdown=breakdown,
            daily_scores=daily_scores,
            provenance=provenance,
        )
