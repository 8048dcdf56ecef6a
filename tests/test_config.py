"""Tests for config.py (validated dataclasses and trim presets)."""

from __future__ import annotations

import dataclasses

import pytest

from config import (
    CESSNA_182_CRUISE, TRIM_PRESETS, AircraftProperties, SteadyState,
    TrimCondition, get_trim_preset, steady_state_summary,
)
from errors import FlightModelError, InvalidAircraftProperties, InvalidTrimCondition


def _trim(**overrides) -> SteadyState:
    values = dict(altitude=1000.0, TAS=50.0, alpha=0.05, CL_1=0.5, CD_1=0.04, theta=0.05)
    values.update(overrides)
    return SteadyState(**values)


def test_steady_state_coerces_to_float() -> None:
    ss = SteadyState(altitude=1524, TAS=67, alpha=0, CL_1=0.307, CD_1=0.032, theta=0)
    assert isinstance(ss.altitude, float)
    assert ss == CESSNA_182_CRUISE


@pytest.mark.parametrize("tas", [0.0, -10.0])
def test_non_positive_airspeed_rejected(tas) -> None:
    with pytest.raises(InvalidTrimCondition):
        _trim(TAS=tas)


@pytest.mark.parametrize("altitude", [-1.0, 90000.0])
def test_altitude_out_of_range_rejected(altitude) -> None:
    with pytest.raises(InvalidTrimCondition):
        _trim(altitude=altitude)


@pytest.mark.parametrize("field", ['altitude', 'TAS', 'alpha', 'CL_1', 'CD_1', 'theta', 'de'])
def test_non_finite_trim_rejected(field) -> None:
    with pytest.raises(InvalidTrimCondition):
        _trim(**{field: float("nan")})


def test_trim_errors_are_value_errors() -> None:
    with pytest.raises(ValueError):
        _trim(TAS=0.0)
    with pytest.raises(FlightModelError):
        _trim(TAS=0.0)


@pytest.mark.parametrize("field", ['mass', 'Iyy', 'S', 'c'])
@pytest.mark.parametrize("value", [0.0, -1.0, float("inf")])
def test_bad_aircraft_properties(field, value) -> None:
    values = dict(mass=1000.0, Iyy=1500.0, S=15.0, c=1.4)
    values[field] = value
    with pytest.raises(InvalidAircraftProperties):
        AircraftProperties(**values)


def test_trim_is_frozen() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        CESSNA_182_CRUISE.TAS = 80.0


def test_presets() -> None:
    assert [p.name for p in TRIM_PRESETS.values()] == ['cruise', 'climb', 'approach']
    assert TRIM_PRESETS[TrimCondition.CRUISE].dt == 0.01
    assert TRIM_PRESETS[TrimCondition.CLIMB].dt == 0.004
    assert TRIM_PRESETS[TrimCondition.APPROACH].dt == 0.004


@pytest.mark.parametrize("key", [TrimCondition.CLIMB, 1, 'climb', 'CLIMB'])
def test_get_trim_preset_lookup(key) -> None:
    assert get_trim_preset(key).name == 'climb'


@pytest.mark.parametrize("key", [3, -1, 'hover'])
def test_get_trim_preset_unknown(key) -> None:
    with pytest.raises(ValueError):
        get_trim_preset(key)


def test_steady_state_summary_degrees() -> None:
    summary = steady_state_summary(TRIM_PRESETS[TrimCondition.APPROACH].steady_state)
    assert summary['alpha'] == pytest.approx(4.0, abs=1e-4)
    assert summary['CL'] == 1.12
    assert summary['CD'] == 0.132
    assert summary['de'] == 0.0
