"""
Modal Analysis

Eigenvalue analysis of the longitudinal state matrix (Roskam Ch5):
    - Short-period: fast, heavily damped α/q oscillation
    - Phugoid: slow, lightly damped u/θ oscillation

For a pole λ = σ ± jω:
    ωn = |λ|
    ζ  = -σ/ωn
    T  = 2π/ω       (period)
    τ  = -1/σ       (time constant, real poles)

A pole with σ < 0 is a stable mode.

References:
    Roskam, "Airplane Flight Dynamics", Chapter 5
    Section 5.2: Modal analysis
    Section 5.4: Derivative sensitivity
"""

from dataclasses import dataclass
from typing import Dict, List, Sequence

import numpy as np

OSCILLATORY_TOL = 1e-6


@dataclass
class ModeInfo:
    """Information about a dynamic mode."""
    name: str
    eigenvalue: complex
    omega_n: float          # Natural frequency (rad/s)
    zeta: float             # Damping ratio
    period: float           # Period (s), inf for aperiodic
    time_constant: float    # Time constant (s) for real modes
    is_oscillatory: bool

    @property
    def is_stable(self) -> bool:
        return self.eigenvalue.real < 0.0


def poles(A: np.ndarray) -> np.ndarray:
    """System poles: the eigenvalues of A as complex numbers."""
    return np.linalg.eigvals(np.asarray(A, dtype=float)).astype(complex)


def is_stable(eigs: Sequence[complex]) -> bool:
    """True when every pole has a negative real part."""
    return all(complex(e).real < 0.0 for e in eigs)


def characteristic_residual(A: np.ndarray, eig: complex) -> float:
    """|det(A - λI)|, zero for an exact eigenvalue."""
    A = np.asarray(A, dtype=complex)
    return float(abs(np.linalg.det(A - eig * np.eye(A.shape[0]))))


def analyze_eigenvalue(eig: complex) -> Dict:
    """
    Natural frequency, damping, period and time constant of one pole.

    Only the magnitude of the imaginary part is used, so either member of a
    conjugate pair gives the same record. Real poles get an infinite period;
    a pole on the imaginary axis gets an infinite time constant.
    """
    eig = complex(eig)
    sigma = eig.real
    omega_d = abs(eig.imag)
    omega_n = abs(eig)
    oscillatory = omega_d > OSCILLATORY_TOL

    return {
        'eigenvalue': eig,
        'omega_n': omega_n,
        'zeta': -sigma / omega_n if omega_n > 1e-10 else 0.0,
        'period': 2 * np.pi / omega_d if oscillatory else np.inf,
        'time_constant': -1.0 / sigma if abs(sigma) > 1e-10 else np.inf,
        'is_oscillatory': oscillatory
    }


def _mode(name: str, eig: complex) -> ModeInfo:
    info = analyze_eigenvalue(eig)
    # Report the upper half-plane member of a conjugate pair
    eigenvalue = complex(info.pop('eigenvalue'))
    if eigenvalue.imag < 0:
        eigenvalue = eigenvalue.conjugate()
    return ModeInfo(name=name, eigenvalue=eigenvalue, **info)


def _aperiodic(name: str, roots: List[complex]) -> List[ModeInfo]:
    """One numbered ModeInfo per real root, ordered by real part."""
    ordered = sorted(roots, key=lambda e: e.real)
    return [_mode(f"{name} ({i + 1})", e) for i, e in enumerate(ordered)]


def split_conjugate_pairs(eigs: Sequence[complex]):
    """
    Separate poles into conjugate pairs and real roots.

    Returns:
        (pairs, reals): the upper half-plane member of every conjugate pair,
        and every root with |Im| <= OSCILLATORY_TOL (or with no conjugate)
    """
    remaining = [complex(e) for e in eigs]
    pairs, reals = [], []
    while remaining:
        e = remaining.pop(0)
        if abs(e.imag) <= OSCILLATORY_TOL:
            reals.append(e)
            continue
        tol = 1e-6 * max(1.0, abs(e))
        match = next((j for j, f in enumerate(remaining) if abs(f - e.conjugate()) < tol), None)
        if match is None:
            reals.append(e)
            continue
        remaining.pop(match)
        pairs.append(e if e.imag > 0 else e.conjugate())
    return pairs, reals


def classify_longitudinal_modes(A: np.ndarray) -> List[ModeInfo]:
    """
    Classify longitudinal modes from the 4x4 state matrix.

    Conjugate pairs are matched first and never split. The faster pair
    (larger |λ|) is the short-period mode and the slower one the phugoid.
    When only one pair exists it takes the name of the group it outruns or
    trails: if it is faster than every real root it is the short-period and
    the two real roots are an aperiodic phugoid, otherwise the real roots are
    an aperiodic short-period. With no pairs the two fastest real roots are
    the short-period and the two slowest the phugoid. Aperiodic roots are
    reported as "<Mode> (1)", "<Mode> (2)" by ascending real part.

    References:
        Roskam Ch5, Section 5.2.2
    """
    eigs = poles(A)
    if len(eigs) != 4:
        raise ValueError(f"Expected a 4x4 longitudinal matrix, got {len(eigs)} poles")

    pairs, reals = split_conjugate_pairs(eigs)
    pairs.sort(key=lambda e: -abs(e))

    if len(pairs) == 2:
        return [_mode('Short-Period', pairs[0]), _mode('Phugoid', pairs[1])]

    if len(pairs) == 1:
        pair = pairs[0]
        if abs(pair) >= max(abs(e) for e in reals):
            return [_mode('Short-Period', pair)] + _aperiodic('Phugoid', reals)
        return _aperiodic('Short-Period', reals) + [_mode('Phugoid', pair)]

    reals.sort(key=lambda e: -abs(e))
    return _aperiodic('Short-Period', reals[:2]) + _aperiodic('Phugoid', reals[2:])


def print_mode_table(modes: List[ModeInfo], title: str = "Mode Analysis") -> str:
    """Fixed-width text table of modes: T for oscillatory rows, tau for real ones."""
    width = 70
    header = f"{'Mode':<18} {'Lambda':<25} {'wn (rad/s)':<12} {'zeta':<8} {'T/tau (s)':<10}"
    rows = []
    for m in modes:
        lam = m.eigenvalue
        if m.is_oscillatory:
            lam_str, timing = f"{lam.real:+.4f} +/- {abs(lam.imag):.4f}j", f"T={m.period:.2f}"
        else:
            lam_str, timing = f"{lam.real:+.4f}", f"tau={m.time_constant:.2f}"
        rows.append(f"{m.name:<18} {lam_str:<25} {m.omega_n:<12.3f} {m.zeta:<8.3f} {timing:<10}")

    return "\n".join(["=" * width, title, "=" * width, header, "-" * width, *rows, "=" * width])


def coefficient_sensitivity(
    props,
    steady_state,
    coeffs,
    coefficient: str,
    scale_factors: Sequence[float]
) -> List[Dict]:
    """
    Analyze mode sensitivity to one non-dimensional coefficient.

    Scales the coefficient, rebuilds the state matrix and reclassifies the
    modes. Scaled values are clamped like any other edit.

    Args:
        props: AircraftProperties
        steady_state: SteadyState
        coeffs: Baseline AerodynamicCoefficients
        coefficient: Editable coefficient name (e.g. 'Cm_a', 'Cm_q')
        scale_factors: Multipliers applied to the baseline value

    Returns:
        List of dicts with scale, coefficient value and modes

    References:
        Roskam Ch5, Section 5.4
    """
    from eom.longitudinal import state_space_matrices

    original_value = getattr(coeffs, coefficient, None)
    if original_value is None:
        raise ValueError(f"Unknown coefficient: {coefficient}")

    results = []
    for scale in scale_factors:
        modified = coeffs.with_value(coefficient, original_value * scale)
        model = state_space_matrices(props, steady_state, modified)
        results.append({
            'scale': scale,
            'coefficient_value': getattr(modified, coefficient),
            'modes': classify_longitudinal_modes(model.A)
        })

    return results
