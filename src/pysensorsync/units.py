"""Temperature unit conversion.

Celsius results are rounded to the nearest half degree and Fahrenheit
results to the nearest whole degree. Ties round towards positive
infinity so values match what the devices' own apps display.
"""

from __future__ import annotations

import math


def _round_half_up(value: float) -> float:
    return float(math.floor(value + 0.5))


def to_celsius(value: float) -> float:
    """Convert a Fahrenheit reading to Celsius, to the nearest 0.5 degree."""
    return _round_half_up((5 / 9) * (value - 32) * 2) / 2


def to_fahrenheit(value: float) -> float:
    """Convert a Celsius reading to Fahrenheit, to the nearest degree."""
    return _round_half_up((value * 9) / 5 + 32)
