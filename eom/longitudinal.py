"""
Longitudinal Equations of Motion - Linear Small-Perturbation Model

Assembles the linearized longitudinal dynamics in α-state form from the
dimensional derivatives (Roskam Chapter 5).

State vector: x = [Δu, Δα, Δq, Δθ]ᵀ
    Δu     - perturbation in forward velocity (m/s)
    Δα     - perturbation in angle of attack (rad)
    Δq     - perturbation in pitch rate (rad/s)
    Δθ     - perturbation in pitch angle (rad)

Control input: u = Δδe (elevator deflection perturbation, rad)

Assumptions:
- Small perturbations from trimmed flight
- Stability axes for aerodynamic coefficients
- Flat Earth, constant mass
- α-state formulation (w ≈ U1·α)
- Decoupled longitudinal and lateral-directional dynamics

References:
    Roskam, "Airplane Flight Dynamics", Chapter 5
"""

from dataclasses import dataclass
from typing import Any, Dict, List

import numpy as np

from aero.coefficients import AerodynamicCoefficients
from aero.derivatives import dimensional_derivatives
from analysis.modes import ModeInfo, classify_longitudinal_modes, poles, print_mode_table
from config import G_MODEL, AircraftProperties, DimensionalDerivatives, SteadyState
from sim.integrator import check_finite

STATE_NAMES = ['Δu (m/s)', 'Δα (rad)', 'Δq (rad/s)', 'Δθ (rad)']


@dataclass(frozen=True)
class StateSpaceModel:
    """
    Immutable {A, B} pair.

    Both arrays are read-only; a change in any model input produces a new
    StateSpaceModel, so A and B are always read from the same build.
    """
    A: np.ndarray        # 4x4 state matrix
    B: np.ndarray        # Input vector, shape (4,)

    def __post_init__(self):
        A = np.array(self.A, dtype=float)
        B = np.array(self.B, dtype=float).reshape(-1)
        if A.shape != (4, 4) or B.shape != (4,):
            raise ValueError(f"Expected A (4, 4) and B (4,), got {A.shape} and {B.shape}")
        A.setflags(write=False)
        B.setflags(write=False)
        object.__setattr__(self, 'A', A)
        object.__setattr__(self, 'B', B)


def state_space_from_dimensional(
    steady_state: SteadyState,
    derivs: DimensionalDerivatives
) -> StateSpaceModel:
    """
    Build A, B from dimensional derivatives.

    ┌ u̇ ┐   ┌ Xu        Xα           -W1               -g·cosθ1          ┐┌ u ┐   ┌ 0            ┐
    │ α̇ │ = │ Zu        Zα           1+Zq              -g·sinθ1/U1       ││ α │ + │ Zδe          │ δe
    │ q̇ │   │ Zu·Mα̇     Mα+Zα·Mα̇     Mq+(1+Zq)·Mα̇      -g·sinθ1/U1·Mα̇    ││ q │   │ Mδe+Zδe·Mα̇   │
    └ θ̇ ┘   └ 0         0            1                 0                 ┘└ θ ┘   └ 0            ┘

    The q̇ row substitutes the α̇ row through the downwash-lag term Mα̇,
    which is why row 3 reuses the row-2 derivatives.

    Raises:
        NumericalInstability: Non-finite entries in A or B
    """
    d = derivs
    u1 = steady_state.TAS
    w1 = u1 * steady_state.alpha
    tht1 = steady_state.theta
    g = G_MODEL

    A = np.array([
        [d.Xu,           d.Xa,                   -w1,                          -g * np.cos(tht1)],
        [d.Zu,           d.Za,                   1 + d.Zq,                     -g * np.sin(tht1) / u1],
        [d.Zu * d.Madot, d.Ma + d.Za * d.Madot,  d.Mq + (1 + d.Zq) * d.Madot,  -g * np.sin(tht1) / u1 * d.Madot],
        [0.0,            0.0,                    1.0,                          0.0]
    ])

    B = np.array([0.0, d.Zde, d.Mde + d.Zde * d.Madot, 0.0])

    check_finite(A, "A matrix")
    check_finite(B, "B matrix")

    return StateSpaceModel(A=A, B=B)


def state_space_matrices(
    props: AircraftProperties,
    steady_state: SteadyState,
    coeffs: AerodynamicCoefficients
) -> StateSpaceModel:
    """Dimensional derivatives and state-space assembly in one call."""
    derivs = dimensional_derivatives(props, steady_state, coeffs)
    return state_space_from_dimensional(steady_state, derivs)


class LongitudinalLinearModel:
    """
    Linear state-space model for longitudinal dynamics.

    Holds the inputs (aircraft, trim, coefficients), the derived
    dimensional derivatives and the StateSpaceModel built from them.

    State: x = [Δu, Δα, Δq, Δθ]ᵀ
    Input: u = Δδe

    ẋ = Ax + Bu
    """

    def __init__(self, props: AircraftProperties, steady_state: SteadyState,
                 coeffs: AerodynamicCoefficients):
        self.props = props
        self.steady_state = steady_state
        self.coeffs = coeffs
        self.derivs = dimensional_derivatives(props, steady_state, coeffs)
        self.ss = state_space_from_dimensional(steady_state, self.derivs)
        self.state_names = list(STATE_NAMES)

    @property
    def A(self) -> np.ndarray:
        return self.ss.A

    @property
    def B(self) -> np.ndarray:
        return self.ss.B

    def with_coefficients(self, coeffs: AerodynamicCoefficients) -> 'LongitudinalLinearModel':
        """New model with a different coefficient set."""
        return LongitudinalLinearModel(self.props, self.steady_state, coeffs)

    def dynamics(self, t: float, x: np.ndarray, delta_e: float) -> np.ndarray:
        """
        Compute state derivatives for given state and control input.

        Args:
            t: Time (s) - unused but required for ODE solver interface
            x: State vector [Δu, Δα, Δq, Δθ]
            delta_e: Elevator deflection perturbation (rad)

        Returns:
            x_dot: State derivative vector
        """
        return self.A @ x + self.B * delta_e

    def get_eigenvalues(self) -> np.ndarray:
        """
        Poles of the system matrix.

        - Short-period mode: fast, well-damped α/q oscillation
        - Phugoid mode: slow, lightly-damped u/θ oscillation
        """
        return poles(self.A)

    def analyze_modes(self) -> List[ModeInfo]:
        return classify_longitudinal_modes(self.A)

    def mode_dict(self) -> Dict[str, Dict[str, Any]]:
        """Modes keyed by name, for tabular display."""
        return {
            m.name: {
                'eigenvalue': m.eigenvalue,
                'omega_n': m.omega_n,
                'zeta': m.zeta,
                'period': m.period,
            }
            for m in self.analyze_modes()
        }

    def print_modes_table(self) -> str:
        return print_mode_table(self.analyze_modes(), title="LONGITUDINAL MODE ANALYSIS (Roskam Chapter 5)")
