"""Pure calendar helpers: inclusive date ranges and contiguous runs."""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

ONE_DAY = dt.timedelta(days=1)


@dataclass(frozen=True)
class DateRange:
    """An inclusive ``[start, end]`` span of calendar days.

    Usage:
        DateRange(date(2024, 6, 1), date(2024, 6, 3)).dates()
        # [date(2024, 6, 1), date(2024, 6, 2), date(2024, 6, 3)]
    """

    start: dt.date
    end: dt.date

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError(
                f"End date {self.end.isoformat()} is before start date {self.start.isoformat()}"
            )

    @classmethod
    def parse(cls, start: str, end: str) -> DateRange:
        """Build a range from two ISO ``YYYY-MM-DD`` strings."""
        return cls(dt.date.fromisoformat(start), dt.date.fromisoformat(end))

    def __len__(self) -> int:
        return (self.end - self.start).days + 1

    def __iter__(self) -> Iterator[dt.date]:
        day = self.start
        while day <= self.end:
            yield day
            day += ONE_DAY

    def __contains__(self, day: object) -> bool:
        return isinstance(day, dt.date) and self.start <= day <= self.end

    def dates(self) -> list[dt.date]:
        """Return every calendar day in the range, in order."""
        return list(self)


def contiguous_runs(days: Iterable[dt.date]) -> list[DateRange]:
    """Group days into maximal runs of consecutive dates.

    Input order does not matter; duplicates are ignored.
    """
    runs: list[DateRange] = []
    ordered = sorted(set(days))
    if not ordered:
        return runs
    run_start = prev = ordered[0]
    for day in ordered[1:]:
        if day - prev != ONE_DAY:
            runs.append(DateRange(run_start, prev))
            run_start = day
        prev = day
    runs.append(DateRange(run_start, prev))
    return runs


def same_day_in_year(day: dt.date, year: int) -> dt.date:
    """Return the same month/day in another year; Feb 29 maps to Feb 28."""
    try:
        return day.replace(year=year)
    except ValueError:
        return day.replace(year=year, day=28)
