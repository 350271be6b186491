"""Tests for the pydantic data models."""

from __future__ import annotations

import datetime as dt

import pytest
from pydantic import ValidationError

from tests.conftest import NOW, make_record
from weatherscore.models import (
    CacheEntry,
    DailyScore,
    DataClass,
    Location,
    PrecipitationType,
    Provenance,
    ResolvedWeather,
    ScoreBreakdown,
    ScoredLocation,
    SearchOptions,
    WeatherFilters,
)

DAY = dt.date(2025, 6, 16)


class TestDailyWeatherRecord:
    def test_defaults(self) -> None:
        record = make_record(DAY)
        assert record.precip_type is PrecipitationType.NONE
        assert record.wind_gust is None
        assert record.uv_index is None
        assert record.sunrise is None

    def test_humidity_bounds(self) -> None:
        with pytest.raises(ValidationError):
            make_record(DAY, humidity=101)

    def test_negative_wind(self) -> None:
        with pytest.raises(ValidationError):
            make_record(DAY, wind_speed=-1)

    def test_negative_precip_amount(self) -> None:
        with pytest.raises(ValidationError):
            make_record(DAY, precip_amount=-0.1)

    def test_precip_type_from_string(self) -> None:
        record = make_record(DAY, precip_type="freezing_rain")
        assert record.precip_type is PrecipitationType.FREEZING_RAIN

    def test_unknown_precip_type(self) -> None:
        with pytest.raises(ValidationError):
            make_record(DAY, precip_type="frogs")

    def test_frozen(self) -> None:
        record = make_record(DAY)
        with pytest.raises(ValidationError):
            record.temp_high = 100

    def test_json_round_trip(self) -> None:
        record = make_record(
            DAY, wind_gust=20, uv_index=7.5, cloud_cover=40.0,
            sunrise=dt.datetime(2025, 6, 16, 5, 31),
        )
        assert type(record).model_validate_json(record.model_dump_json()) == record


class TestWeatherFilters:
    def test_all_optional(self) -> None:
        f = WeatherFilters()
        assert not f.filters_temperature
        assert not f.filters_humidity
        assert not f.filters_wind
        assert not f.filters_precipitation

    def test_camel_case_keys(self) -> None:
        f = WeatherFilters.model_validate(
            {"tempMin": 60, "humidityMax": 70, "precipTypesExcluded": ["snow"]}
        )
        assert f.temp_min == 60
        assert f.humidity_max == 70
        assert f.precip_types_excluded == [PrecipitationType.SNOW]

    def test_snake_case_names(self) -> None:
        assert WeatherFilters(wind_speed_max=15).wind_speed_max == 15

    @pytest.mark.parametrize(
        "field,value",
        [
            ("temp_min", -51),
            ("temp_max", 151),
            ("humidity_max", 101),
            ("wind_speed_max", 201),
            ("precip_chance_max", -1),
            ("aqi_max", 0),
        ],
    )
    def test_bounds(self, field: str, value: float) -> None:
        with pytest.raises(ValidationError):
            WeatherFilters(**{field: value})

    def test_precipitation_active_by_any_field(self) -> None:
        assert WeatherFilters(precip_chance_max=30).filters_precipitation
        assert WeatherFilters(precip_types_allowed=["rain"]).filters_precipitation
        assert WeatherFilters(precip_types_excluded=["snow"]).filters_precipitation

    def test_aqi_does_not_activate_a_category(self) -> None:
        f = WeatherFilters(aqi_max=50)
        assert not any(
            [f.filters_temperature, f.filters_humidity, f.filters_wind, f.filters_precipitation]
        )

    def test_merged_equals_direct_construction(self) -> None:
        merged = WeatherFilters(temp_min=60).merged(humidity_max=50)
        assert merged == WeatherFilters(humidity_max=50, temp_min=60)

    def test_merged_validates(self) -> None:
        with pytest.raises(ValidationError):
            WeatherFilters(temp_min=60).merged(humidity_max=120)


class TestLocationAndOptions:
    def test_latitude_bounds(self) -> None:
        with pytest.raises(ValidationError):
            Location(id="x", latitude=91, longitude=0)

    def test_region_from_string(self) -> None:
        loc = Location(id="pdx", latitude=45.5, longitude=-122.7, region="pacific_northwest")
        assert loc.region.value == "pacific_northwest"

    def test_search_options_defaults(self) -> None:
        opts = SearchOptions()
        assert opts.limit == 50
        assert opts.min_score == 0

    @pytest.mark.parametrize("limit", [0, 501])
    def test_search_options_limit_bounds(self, limit: int) -> None:
        with pytest.raises(ValidationError):
            SearchOptions(limit=limit)


class TestDerivedProperties:
    def test_cache_entry_age_and_key(self) -> None:
        entry = CacheEntry(
            location_id="den",
            date=DAY,
            data_class=DataClass.FORECAST,
            record=make_record(DAY),
            fetched_at=NOW,
        )
        assert entry.key == ("den", DAY, DataClass.FORECAST)
        assert entry.age(NOW + dt.timedelta(hours=2)) == dt.timedelta(hours=2)

    def test_resolved_weather_is_empty(self) -> None:
        resolved = ResolvedWeather(
            location_id="den", latitude=39.7, longitude=-105.0, records=[], fetched_at=NOW,
        )
        assert resolved.is_empty
        assert resolved.provenance is None

    def test_days_passing(self) -> None:
        scored = ScoredLocation(
            location_id="den",
            latitude=39.7,
            longitude=-105.0,
            score=80,
            score_breakdown=ScoreBreakdown(temperature=60, humidity=100, wind=100, precipitation=100),
            daily_scores=[
                DailyScore(date=DAY, score=100, passes_filters=True),
                DailyScore(date=DAY + dt.timedelta(days=1), score=0, passes_filters=False),
            ],
            provenance=Provenance.FORECAST,
        )
        assert scored.days_passing == 1
        assert scored.score_breakdown.aqi is None
