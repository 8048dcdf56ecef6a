"""Tests for sim/integrator.py (forward Euler step)."""

from __future__ import annotations

import numpy as np
import pytest

from errors import NumericalInstability
from sim.integrator import check_finite, euler_step


def test_zero_state_zero_input_is_fixed_point(cruise_model) -> None:
    x = np.zeros(4)
    for _ in range(100):
        x = euler_step(x, 0.0, cruise_model.A, cruise_model.B, 0.01)
    np.testing.assert_array_equal(x, np.zeros(4))


def test_single_step_state_term() -> None:
    A = -np.eye(4)
    x = euler_step(np.ones(4), 0.0, A, np.zeros(4), 0.1)
    np.testing.assert_allclose(x, np.full(4, 0.9))


def test_single_step_input_term() -> None:
    B = np.array([0.0, 1.0, 2.0, 0.0])
    x = euler_step(np.ones(4), 0.5, np.zeros((4, 4)), B, 0.1)
    np.testing.assert_allclose(x, [1.0, 1.05, 1.1, 1.0])


def test_column_input_vector_accepted() -> None:
    B = np.array([[0.0], [1.0], [2.0], [0.0]])
    x = euler_step(np.zeros(4), 1.0, np.zeros((4, 4)), B, 1.0)
    np.testing.assert_allclose(x, [0.0, 1.0, 2.0, 0.0])


def test_input_not_modified() -> None:
    x0 = np.ones(4)
    euler_step(x0, 1.0, -np.eye(4), np.ones(4), 0.1)
    np.testing.assert_array_equal(x0, np.ones(4))


@pytest.mark.parametrize("x", [
    np.zeros(4),
    np.array([1.0, -0.02, 0.003, 0.05]),
    np.array([-30.0, 0.5, -1.2, 3.0]),
], ids=["origin", "small", "large"])
@pytest.mark.parametrize("u", [0.0, -0.0349, 1.0])
@pytest.mark.parametrize("dt", [1e-4, 0.01, 1.0])
def test_zero_dynamics_hold_state(x, u, dt) -> None:
    """A = 0 and B = 0: every step returns the state unchanged."""
    new = euler_step(x, u, np.zeros((4, 4)), np.zeros(4), dt)
    np.testing.assert_array_equal(new, x)
    assert new is not x


def test_monotone_decay_for_dissipative_system() -> None:
    """Symmetric negative-definite A: the state norm falls every step."""
    A = -np.array([
        [2.0, 0.5, 0.0, 0.0],
        [0.5, 1.0, 0.0, 0.0],
        [0.0, 0.0, 3.0, 0.2],
        [0.0, 0.0, 0.2, 0.5],
    ])
    x = np.array([1.0, -1.0, 0.5, 2.0])
    norm = np.linalg.norm(x)
    for _ in range(500):
        x = euler_step(x, 0.0, A, np.zeros(4), 0.01)
        new_norm = np.linalg.norm(x)
        assert new_norm < norm
        norm = new_norm


def test_cruise_envelope_decays(cruise_model) -> None:
    """Stable cruise model: the peak state norm falls window after window."""
    dt = 0.01
    x = np.array([1.0, 0.01, 0.0, 0.01])
    window = int(50.0 / dt)
    peaks = []
    for _ in range(4):
        peak = 0.0
        for _ in range(window):
            x = euler_step(x, 0.0, cruise_model.A, cruise_model.B, dt)
            peak = max(peak, float(np.linalg.norm(x)))
        peaks.append(peak)
    assert all(later < earlier for earlier, later in zip(peaks, peaks[1:]))
    assert peaks[-1] < 0.35 * peaks[0]


def test_check_finite_passes_values_through() -> None:
    values = np.array([1.0, 2.0])
    assert check_finite(values) is values


@pytest.mark.parametrize("bad", [np.nan, np.inf, -np.inf])
def test_check_finite_raises(bad) -> None:
    with pytest.raises(NumericalInstability, match="state"):
        check_finite(np.array([0.0, bad, 0.0, 0.0]))


def test_numerical_instability_is_arithmetic_error() -> None:
    with pytest.raises(ArithmeticError):
        check_finite(np.array([np.nan]), "A matrix")
