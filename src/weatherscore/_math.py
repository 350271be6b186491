"""Numeric helpers shared by sources, averaging and scoring."""

from __future__ import annotations

import math


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round with halves going up (2.5 -> 3, -2.5 -> -2), unlike bankers' ``round``."""
    factor = 10**ndigits
    return math.floor(value * factor + 0.5) / factor


def round_int(value: float) -> int:
    """Round half up to the nearest integer."""
    return int(math.floor(value + 0.5))


def celsius_to_fahrenheit(celsius: float) -> int:
    return round_int(celsius * 9 / 5 + 32)


def kmh_to_mph(kmh: float) -> int:
    return round_int(kmh * 0.621371)


def mm_to_inches(mm: float) -> float:
    return round_half_up(mm * 0.0393701, 2)
