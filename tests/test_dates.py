"""Tests for date ranges and the rounding/unit helpers."""

from __future__ import annotations

from datetime import date

import pytest

from weatherscore._dates import DateRange, contiguous_runs, same_day_in_year
from weatherscore._math import (
    celsius_to_fahrenheit,
    kmh_to_mph,
    mm_to_inches,
    round_half_up,
    round_int,
)


class TestDateRange:
    def test_inclusive_length(self) -> None:
        assert len(DateRange(date(2024, 6, 1), date(2024, 6, 3))) == 3

    def test_single_day(self) -> None:
        r = DateRange(date(2024, 6, 1), date(2024, 6, 1))
        assert len(r) == 1
        assert r.dates() == [date(2024, 6, 1)]

    def test_iterates_across_month_end(self) -> None:
        r = DateRange(date(2024, 2, 28), date(2024, 3, 1))
        assert r.dates() == [date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 1)]

    def test_contains(self) -> None:
        r = DateRange(date(2024, 6, 1), date(2024, 6, 3))
        assert date(2024, 6, 2) in r
        assert date(2024, 6, 4) not in r
        assert "2024-06-02" not in r

    def test_end_before_start(self) -> None:
        with pytest.raises(ValueError, match="before start"):
            DateRange(date(2024, 6, 3), date(2024, 6, 1))

    def test_parse(self) -> None:
        r = DateRange.parse("2024-06-01", "2024-06-30")
        assert r.start == date(2024, 6, 1)
        assert len(r) == 30

    def test_is_frozen(self) -> None:
        r = DateRange(date(2024, 6, 1), date(2024, 6, 3))
        with pytest.raises(AttributeError):
            r.start = date(2024, 5, 1)  # type: ignore[misc]


class TestContiguousRuns:
    def test_empty(self) -> None:
        assert contiguous_runs([]) == []

    def test_groups_consecutive_days(self) -> None:
        days = [date(2024, 6, 1), date(2024, 6, 2), date(2024, 6, 5), date(2024, 6, 6), date(2024, 6, 9)]
        assert contiguous_runs(days) == [
            DateRange(date(2024, 6, 1), date(2024, 6, 2)),
            DateRange(date(2024, 6, 5), date(2024, 6, 6)),
            DateRange(date(2024, 6, 9), date(2024, 6, 9)),
        ]

    def test_unordered_with_duplicates(self) -> None:
        days = [date(2024, 6, 3), date(2024, 6, 1), date(2024, 6, 2), date(2024, 6, 1)]
        assert contiguous_runs(days) == [DateRange(date(2024, 6, 1), date(2024, 6, 3))]


class TestSameDayInYear:
    def test_regular_day(self) -> None:
        assert same_day_in_year(date(2025, 7, 4), 2021) == date(2021, 7, 4)

    def test_leap_day_to_non_leap_year(self) -> None:
        assert same_day_in_year(date(2024, 2, 29), 2023) == date(2023, 2, 28)

    def test_leap_day_to_leap_year(self) -> None:
        assert same_day_in_year(date(2024, 2, 29), 2020) == date(2020, 2, 29)


class TestRounding:
    def test_halves_round_up(self) -> None:
        assert round_int(2.5) == 3
        assert round_int(3.5) == 4
        assert round_int(-2.5) == -2

    def test_round_half_up_decimals(self) -> None:
        assert round_half_up(0.125, 2) == 0.13
        assert round_half_up(0.124, 2) == 0.12

    def test_celsius_to_fahrenheit(self) -> None:
        assert celsius_to_fahrenheit(0) == 32
        assert celsius_to_fahrenheit(37.0) == 99
        assert celsius_to_fahrenheit(-40) == -40

    def test_kmh_to_mph(self) -> None:
        assert kmh_to_mph(100) == 62
        assert kmh_to_mph(0) == 0

    def test_mm_to_inches(self) -> None:
        assert mm_to_inches(25.4) == 1.0
        assert mm_to_inches(12.7) == 0.5
