"""Tests for analysis/modes.py (poles, mode classification, sensitivity)."""

from __future__ import annotations

import math

import numpy as np
import pytest

from analysis.modes import (
    analyze_eigenvalue, characteristic_residual, classify_longitudinal_modes,
    coefficient_sensitivity, is_stable, poles, print_mode_table, split_conjugate_pairs,
)
from eom.longitudinal import state_space_matrices


# ---------------------------------------------------------------------------
# Single eigenvalues
# ---------------------------------------------------------------------------


def test_complex_eigenvalue_characteristics() -> None:
    info = analyze_eigenvalue(complex(-1.0, 2.0))
    assert info['omega_n'] == pytest.approx(math.sqrt(5.0))
    assert info['zeta'] == pytest.approx(1.0 / math.sqrt(5.0))
    assert info['period'] == pytest.approx(math.pi)
    assert info['time_constant'] == pytest.approx(1.0)
    assert info['is_oscillatory']


def test_real_eigenvalue_characteristics() -> None:
    info = analyze_eigenvalue(-0.5)
    assert info['time_constant'] == pytest.approx(2.0)
    assert info['period'] == math.inf
    assert info['zeta'] == pytest.approx(1.0)
    assert not info['is_oscillatory']


def test_is_stable() -> None:
    assert is_stable([-1 + 2j, -1 - 2j, -0.01])
    assert not is_stable([-1.0, 0.0])
    assert not is_stable([0.1 + 1j, 0.1 - 1j])


# ---------------------------------------------------------------------------
# Cessna 182 cruise
# ---------------------------------------------------------------------------


def test_poles_satisfy_characteristic_equation(cruise_model) -> None:
    A = cruise_model.A
    eigs = poles(A)
    assert eigs.dtype == complex
    assert len(eigs) == 4
    for eig in eigs:
        assert characteristic_residual(A, eig) < 1e-8


def test_cruise_is_stable(cruise_model) -> None:
    assert is_stable(cruise_model.get_eigenvalues())


def test_cruise_mode_classification(cruise_model) -> None:
    modes = cruise_model.analyze_modes()
    assert [m.name for m in modes] == ['Short-Period', 'Phugoid']
    sp, ph = modes
    assert sp.is_oscillatory and ph.is_oscillatory
    assert sp.is_stable and ph.is_stable
    assert sp.omega_n > 10 * ph.omega_n
    # Short period well damped, phugoid lightly damped
    assert 0.5 < sp.zeta < 1.0
    assert 0.0 < ph.zeta < 0.3
    assert 20.0 < ph.period < 60.0
    # Reported eigenvalue is the upper half-plane member
    assert sp.eigenvalue.imag > 0
    assert ph.eigenvalue.imag > 0


def test_overdamped_groups_reported_as_real_modes() -> None:
    modes = classify_longitudinal_modes(np.diag([-10.0, -5.0, -0.2, -0.1]))
    assert [m.name for m in modes] == [
        'Short-Period (1)', 'Short-Period (2)', 'Phugoid (1)', 'Phugoid (2)',
    ]
    assert modes[0].eigenvalue.real == pytest.approx(-10.0)
    assert modes[3].time_constant == pytest.approx(10.0)
    assert not any(m.is_oscillatory for m in modes)


def _covered_roots(modes) -> int:
    return sum(2 if m.is_oscillatory else 1 for m in modes)


def test_conjugate_pair_kept_whole_when_real_root_outruns_it() -> None:
    """A fast real root between two slow pair members must not split the pair."""
    A = np.zeros((4, 4))
    A[:2, :2] = [[-0.1735, 0.3322], [-0.3322, -0.1735]]
    A[2, 2] = -8.99
    A[3, 3] = 0.3194
    modes = classify_longitudinal_modes(A)

    assert [m.name for m in modes] == ['Short-Period (1)', 'Short-Period (2)', 'Phugoid']
    assert [m.is_oscillatory for m in modes] == [False, False, True]
    assert modes[0].eigenvalue.real == pytest.approx(-8.99)
    assert modes[1].eigenvalue.real == pytest.approx(0.3194)
    assert modes[2].eigenvalue == pytest.approx(complex(-0.1735, 0.3322))
    assert _covered_roots(modes) == 4


def test_single_fast_pair_is_short_period() -> None:
    A = np.zeros((4, 4))
    A[:2, :2] = [[-4.0, 6.0], [-6.0, -4.0]]
    A[2, 2] = -0.05
    A[3, 3] = -0.02
    modes = classify_longitudinal_modes(A)

    assert [m.name for m in modes] == ['Short-Period', 'Phugoid (1)', 'Phugoid (2)']
    assert modes[0].eigenvalue == pytest.approx(complex(-4.0, 6.0))
    assert modes[1].time_constant == pytest.approx(20.0)


def test_statically_unstable_cruise_reports_every_pole_once(cessna, cruise, coeffs) -> None:
    """Positive Cm_a: each pole appears in exactly one mode and pairs stay whole."""
    A = state_space_matrices(cessna, cruise, coeffs.with_value('Cm_a', 0.3)).A
    eigs = poles(A)
    modes = classify_longitudinal_modes(A)

    pairs, reals = split_conjugate_pairs(eigs)
    assert _covered_roots(modes) == 4
    assert sum(m.is_oscillatory for m in modes) == len(pairs)
    reported = [m.eigenvalue for m in modes]
    assert len({(round(e.real, 9), round(e.imag, 9)) for e in reported}) == len(reported)
    for m in modes:
        assert min(abs(eigs - m.eigenvalue)) < 1e-9
        if m.is_oscillatory:
            assert min(abs(eigs - m.eigenvalue.conjugate())) < 1e-9
    assert not is_stable(eigs)


def test_split_conjugate_pairs() -> None:
    pairs, reals = split_conjugate_pairs([-1 - 2j, -3.0, -1 + 2j, 0.5])
    assert pairs == [complex(-1.0, 2.0)]
    assert sorted(e.real for e in reals) == [-3.0, 0.5]


def test_classification_needs_four_poles() -> None:
    with pytest.raises(ValueError):
        classify_longitudinal_modes(np.eye(3))


def test_unstable_mode_flagged() -> None:
    A = np.diag([-10.0, -5.0, 0.2, -0.1])
    modes = classify_longitudinal_modes(A)
    assert [m.is_stable for m in modes] == [True, True, True, False]


def test_mode_table_formatting(cruise_model) -> None:
    table = print_mode_table(cruise_model.analyze_modes(), title="Cruise")
    lines = table.splitlines()
    assert lines[1] == "Cruise"
    assert any(line.startswith("Short-Period") and "T=" in line for line in lines)
    real_table = print_mode_table(classify_longitudinal_modes(np.diag([-4.0, -3.0, -0.2, -0.1])))
    assert "tau=" in real_table


# ---------------------------------------------------------------------------
# Coefficient sensitivity
# ---------------------------------------------------------------------------


def test_pitch_damping_sensitivity(cessna, cruise, coeffs) -> None:
    """More pitch damping (more negative Cm_q) raises short-period damping."""
    scales = [0.5, 1.0, 1.2]
    results = coefficient_sensitivity(cessna, cruise, coeffs, 'Cm_q', scales)

    assert [r['scale'] for r in results] == scales
    assert [r['coefficient_value'] for r in results] == pytest.approx([-6.2, -12.4, -14.88])

    sp_zeta = [r['modes'][0].zeta for r in results]
    assert all(r['modes'][0].name == 'Short-Period' for r in results)
    assert sp_zeta[0] < sp_zeta[1] < sp_zeta[2]


def test_sensitivity_values_are_clamped(cessna, cruise, coeffs) -> None:
    results = coefficient_sensitivity(cessna, cruise, coeffs, 'Cm_q', [10.0])
    assert results[0]['coefficient_value'] == -20.0


def test_sensitivity_unknown_coefficient(cessna, cruise, coeffs) -> None:
    with pytest.raises(ValueError):
        coefficient_sensitivity(cessna, cruise, coeffs, 'Cn_beta', [1.0])
