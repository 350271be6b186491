"""Shared test fixtures, fake sources and sample Open-Meteo responses."""

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Callable

import pytest

from weatherscore._dates import DateRange
from weatherscore.exceptions import SourceConnectionError
from weatherscore.models.weather import DailyWeatherRecord, PrecipitationType

FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
ARCHIVE_URL = "https://archive-api.open-meteo.com/v1/archive"

TODAY = dt.date(2025, 6, 15)
NOW = dt.datetime(2025, 6, 15, 12, 0, tzinfo=dt.timezone.utc)


SAMPLE_FORECAST_RESPONSE = {
    "latitude": 39.75,
    "longitude": -105.0,
    "timezone": "America/Denver",
    "daily_units": {"temperature_2m_max": "°C", "wind_speed_10m_max": "km/h"},
    "daily": {
        "time": ["2025-06-16", "2025-06-17", "2025-06-18"],
        "temperature_2m_max": [25.0, 30.0, None],
        "temperature_2m_min": [15.0, 18.3, 12.0],
        "relative_humidity_2m_max": [65.4, 80, 70],
        "wind_speed_10m_max": [16.1, 32.2, 10.0],
        "wind_gusts_10m_max": [30.0, None, 20.0],
        "precipitation_probability_max": [10, 85, 0],
        "precipitation_sum": [0.0, 12.7, 0.0],
        "weather_code": [1, 95, 0],
        "uv_index_max": [7.5, 5.1, 6.0],
        "cloud_cover_mean": [20, 90, 5],
        "sunrise": ["2025-06-16T05:31", "2025-06-17T05:31", "2025-06-18T05:31"],
        "sunset": ["2025-06-16T20:29", "2025-06-17T20:30", "2025-06-18T20:30"],
    },
}

SAMPLE_ARCHIVE_RESPONSE = {
    "latitude": 39.75,
    "longitude": -105.0,
    "timezone": "America/Denver",
    "daily": {
        "time": ["2024-06-16", "2024-06-17"],
        "temperature_2m_max": [20.0, 22.0],
        "temperature_2m_min": [10.0, 11.0],
        "relative_humidity_2m_max": [90, 60],
        "wind_speed_10m_max": [8.0, 12.0],
        "wind_gusts_10m_max": [None, None],
        "precipitation_sum": [2.54, 0.0],
        "weather_code": [61, 3],
        "sunrise": ["2024-06-16T05:31", "2024-06-17T05:31"],
        "sunset": ["2024-06-16T20:29", "2024-06-17T20:30"],
    },
}


def make_record(day: dt.date, **overrides: object) -> DailyWeatherRecord:
    """Build a mild, dry day, overriding any field."""
    values: dict[str, object] = {
        "date": day,
        "temp_high": 75,
        "temp_low": 60,
        "humidity": 50,
        "wind_speed": 8,
        "precip_chance": 10,
        "precip_type": PrecipitationType.NONE,
        "precip_amount": 0.0,
    }
    values.update(overrides)
    return DailyWeatherRecord.model_validate(values)


class FakeSource:
    """In-memory ``WeatherSource`` that records every fetch.

    Records come from ``records`` first, then from ``generate`` for any other
    date. ``fail`` makes every fetch raise; ``failing_years`` only the fetches
    starting in those years.
    """

    def __init__(
        self,
        name: str = "fake",
        records: list[DailyWeatherRecord] | None = None,
        generate: Callable[[dt.date], DailyWeatherRecord] | None = None,
        window: tuple[dt.date, dt.date] | None = None,
        fail: bool = False,
        failing_years: set[int] | None = None,
    ) -> None:
        self.name = name
        self.records = {r.date: r for r in records or []}
        self.generate = generate
        self.window = window
        self.fail = fail
        self.failing_years = failing_years or set()
        self.calls: list[tuple[dt.date, dt.date]] = []

    def supports_range(self, start: dt.date, end: dt.date) -> bool:
        if self.window is None:
            return start <= end
        lo, hi = self.window
        return lo <= start <= end <= hi

    async def fetch(
        self, lat: float, lon: float, start: dt.date, end: dt.date,
    ) -> list[DailyWeatherRecord]:
        self.calls.append((start, end))
        if self.fail or start.year in self.failing_years:
            raise SourceConnectionError(f"{self.name} is down")
        out = []
        for day in DateRange(start, end):
            if day in self.records:
                out.append(self.records[day])
            elif self.generate is not None:
                out.append(self.generate(day))
        return out


class FakeClock:
    """Settable UTC clock."""

    def __init__(self, now: dt.datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> dt.datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += dt.timedelta(**kwargs)


@pytest.fixture(autouse=True)
def _isolated_log(tmp_path):
    """Reset the engine logger and redirect log output to tmp_path."""
    import weatherscore._logging as mod

    old_logger = mod._logger
    old_dir = mod._LOG_DIR
    old_file = mod._LOG_FILE

    named_logger = logging.getLogger("weatherscore.engine")
    named_logger.handlers.clear()

    mod._logger = None
    mod._LOG_DIR = str(tmp_path)
    mod._LOG_FILE = str(tmp_path / "engine.log")

    yield tmp_path

    for h in named_logger.handlers[:]:
        h.close()
        named_logger.removeHandler(h)
    mod._logger = old_logger
    mod._LOG_DIR = old_dir
    mod._LOG_FILE = old_file


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def mild_day() -> Callable[[dt.date], DailyWeatherRecord]:
    """Generator for FakeSource: the same mild day on any date."""
    return make_record
