from __future__ import annotations

import pytest

from pysensorsync.units import to_celsius, to_fahrenheit


def test_to_celsius_fixed_points() -> None:
    assert to_celsius(32) == 0
    assert to_celsius(212) == 100
    assert to_celsius(-40) == -40


def test_to_fahrenheit_fixed_points() -> None:
    assert to_fahrenheit(0) == 32
    assert to_fahrenheit(100) == 212
    assert to_fahrenheit(-40) == -40


@pytest.mark.parametrize("value", [-459.67, -3.3, 0.1, 33.0, 50.5, 71.6, 72.14, 98.6, 451.0])
def test_to_celsius_is_half_degree_multiple(value: float) -> None:
    assert (to_celsius(value) * 2).is_integer()


@pytest.mark.parametrize("value", [-273.15, -17.8, 0.5, 21.3, 22.25, 36.6, 100.01])
def test_to_fahrenheit_is_whole_degree(value: float) -> None:
    assert to_fahrenheit(value).is_integer()


def test_rounding_ties_go_up() -> None:
    # 0.25 C -> 32.45 F -> 32; 2.5 C -> 36.5 F -> 37 (not banker's 36)
    assert to_fahrenheit(0.25) == 32
    assert to_fahrenheit(2.5) == 37
    # 33.35 F -> 0.75 C -> 1.0 on the half-degree grid (ties up)
    assert to_celsius(33.35) == 1.0


def test_meter_style_readings() -> None:
    assert to_fahrenheit(22.3) == 72
    assert to_celsius(72) == 22.0
