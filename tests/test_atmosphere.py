"""Tests for aero/atmosphere.py (1976 US Standard Atmosphere).

Run: python -m pytest tests/test_atmosphere.py -v
"""

from __future__ import annotations

import math

import pytest

from aero.atmosphere import (
    EXTRAPOLATION_CEILING, LAYERS, P0, RS, atmosphere, layer_base_pressures, layer_index,
    ussa1976,
)
from errors import InvalidAltitude, InvalidTrimCondition

BOUNDARIES = [layer.h for layer in LAYERS[1:-1]]


# ---------------------------------------------------------------------------
# Sea level
# ---------------------------------------------------------------------------


def test_sea_level_values() -> None:
    """h = 0 gives the standard sea-level state."""
    s = ussa1976(0.0)
    assert s.pressure_Pa == pytest.approx(101325.0)
    assert s.temperature_K == pytest.approx(288.15)
    assert s.density_kg_m3 == pytest.approx(1.225, abs=0.001)
    assert s.speed_of_sound_m_s == pytest.approx(340.3, abs=0.5)


def test_specific_gas_constant() -> None:
    """Rs = R/M for dry air."""
    assert RS == pytest.approx(287.053, abs=1e-3)


def test_alias() -> None:
    assert atmosphere(1524.0) == ussa1976(1524.0)


# ---------------------------------------------------------------------------
# Layer structure
# ---------------------------------------------------------------------------


def test_layer_index_lookup() -> None:
    """First layer whose upper bound exceeds the altitude."""
    assert layer_index(0.0) == 0
    assert layer_index(10999.9) == 0
    assert layer_index(11000.0) == 1
    assert layer_index(50000.0) == 4
    assert layer_index(84851.0) == 6


def test_layer_index_above_top_uses_last_layer() -> None:
    assert layer_index(84852.0) == 6
    assert layer_index(120000.0) == 6


def test_layer_base_pressures_match_standard() -> None:
    """Base pressures built layer by layer reproduce the tabulated values."""
    p = layer_base_pressures()
    assert len(p) == len(LAYERS)
    assert p[0] == P0
    assert p[1] == pytest.approx(22632.1, rel=1e-3)
    assert p[2] == pytest.approx(5474.89, rel=1e-3)
    assert p[3] == pytest.approx(868.02, rel=2e-3)
    assert p[4] == pytest.approx(110.91, rel=2e-3)


def test_layer_base_temperatures_are_continuous() -> None:
    """Each tabulated base temperature equals the previous layer's top temperature."""
    for lower, upper in zip(LAYERS[:-1], LAYERS[1:]):
        top = lower.T + lower.L * (upper.h - lower.h)
        assert top == pytest.approx(upper.T, abs=1e-9)


@pytest.mark.parametrize("boundary", BOUNDARIES)
def test_continuity_across_layer_seams(boundary: float) -> None:
    """T and P converge to the same value from below and above each seam."""
    below = ussa1976(boundary - 1e-6)
    at = ussa1976(boundary)
    above = ussa1976(boundary + 1e-6)
    assert below.temperature_K == pytest.approx(at.temperature_K, rel=1e-9)
    assert above.temperature_K == pytest.approx(at.temperature_K, rel=1e-9)
    assert below.pressure_Pa == pytest.approx(at.pressure_Pa, rel=1e-9)
    assert above.pressure_Pa == pytest.approx(at.pressure_Pa, rel=1e-9)


def test_isothermal_layer_temperature_constant() -> None:
    assert ussa1976(12000.0).temperature_K == pytest.approx(216.65)
    assert ussa1976(19000.0).temperature_K == pytest.approx(216.65)


def test_monotonic_pressure_and_density() -> None:
    """Pressure and density fall with altitude."""
    samples = [ussa1976(h) for h in range(0, 84000, 500)]
    for lo, hi in zip(samples[:-1], samples[1:]):
        assert hi.pressure_Pa < lo.pressure_Pa
        assert hi.density_kg_m3 < lo.density_kg_m3


def test_ideal_gas_and_speed_of_sound() -> None:
    s = ussa1976(1524.0)
    assert s.density_kg_m3 == pytest.approx(s.pressure_Pa / (RS * s.temperature_K))
    assert s.speed_of_sound_m_s == pytest.approx(math.sqrt(1.4 * RS * s.temperature_K))
    assert s.density_kg_m3 == pytest.approx(1.0555, abs=1e-3)


# ---------------------------------------------------------------------------
# Out-of-range policy
# ---------------------------------------------------------------------------


def test_above_top_extrapolates_last_layer() -> None:
    """Above 84,852 m the 71 km layer lapse rate continues."""
    s = ussa1976(90000.0)
    assert s.temperature_K == pytest.approx(214.65 - 0.002 * (90000.0 - 71000.0))
    assert s.pressure_Pa < ussa1976(84852.0).pressure_Pa


def test_extrapolation_ceiling_value() -> None:
    """The 71 km layer lapse rate reaches 0 K at 178,325 m."""
    assert EXTRAPOLATION_CEILING == pytest.approx(178325.0)


def test_high_extrapolation_stays_physical() -> None:
    s = ussa1976(150000.0)
    assert s.temperature_K == pytest.approx(56.65)
    assert s.pressure_Pa > 0.0
    assert s.density_kg_m3 > 0.0
    assert math.isfinite(s.speed_of_sound_m_s)


@pytest.mark.parametrize("altitude", [178325.0, EXTRAPOLATION_CEILING, 200000.0, 1e7])
def test_altitude_at_or_above_ceiling_rejected(altitude: float) -> None:
    """Extrapolated temperature would be zero or negative."""
    with pytest.raises(InvalidAltitude):
        ussa1976(altitude)


@pytest.mark.parametrize("altitude", [-0.1, -500.0, float("nan"), float("inf")])
def test_invalid_altitude_rejected(altitude: float) -> None:
    with pytest.raises(InvalidAltitude):
        ussa1976(altitude)


def test_invalid_altitude_is_trim_error() -> None:
    """Callers can catch altitude errors as trim-condition errors."""
    with pytest.raises(InvalidTrimCondition):
        ussa1976(-1.0)
