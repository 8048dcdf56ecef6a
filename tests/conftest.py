"""Shared fixtures for the longitudinal model tests."""

from __future__ import annotations

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from aero.coefficients import DEFAULT_COEFFICIENTS, AerodynamicCoefficients  # noqa: E402
from config import (  # noqa: E402
    CESSNA_182, CESSNA_182_CLIMB, CESSNA_182_CRUISE,
    AircraftProperties, SteadyState,
)
from eom.longitudinal import LongitudinalLinearModel  # noqa: E402


class FakeClock:
    """Manually advanced wall clock for the real-time driver."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now


@pytest.fixture
def cessna() -> AircraftProperties:
    return CESSNA_182


@pytest.fixture
def cruise() -> SteadyState:
    return CESSNA_182_CRUISE


@pytest.fixture
def climb() -> SteadyState:
    return CESSNA_182_CLIMB


@pytest.fixture
def coeffs() -> AerodynamicCoefficients:
    return DEFAULT_COEFFICIENTS


@pytest.fixture
def cruise_model(cessna, cruise, coeffs) -> LongitudinalLinearModel:
    return LongitudinalLinearModel(cessna, cruise, coeffs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(100.0)
