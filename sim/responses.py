"""
Time Responses

Control input generators and fixed-step simulation runs of the linear
longitudinal model.

simulate_with_input() drives the same forward-Euler step as the real-time
driver, so offline runs reproduce what playback shows. simulate_reference()
integrates the same model with scipy.integrate.solve_ivp (RK45) for
accuracy comparison.

References:
    Roskam, "Airplane Flight Dynamics", Chapter 5
    - Step/doublet inputs for mode identification
"""

from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np
import pandas as pd
from scipy.integrate import solve_ivp

from config import ELEVATOR_DEFLECTION, RAD2DEG
from eom.longitudinal import LongitudinalLinearModel
from sim.integrator import check_finite, euler_step


@dataclass
class SimulationResult:
    """
    Container for simulation results: states and elevator history.
    """
    t: np.ndarray                           # Time vector (s)
    y: np.ndarray                           # State history [4, n_steps]
    delta_e: np.ndarray                     # Elevator history (rad)

    @property
    def u(self) -> np.ndarray:
        """Forward velocity perturbation (m/s)"""
        return self.y[0]

    @property
    def alpha(self) -> np.ndarray:
        """Angle of attack perturbation (rad)"""
        return self.y[1]

    @property
    def q(self) -> np.ndarray:
        """Pitch rate perturbation (rad/s)"""
        return self.y[2]

    @property
    def theta(self) -> np.ndarray:
        """Pitch angle perturbation (rad)"""
        return self.y[3]

    def to_dataframe(self, degrees: bool = False) -> pd.DataFrame:
        """
        Tabulate the run, one row per sample.

        Args:
            degrees: Report angles and rates in degrees instead of radians
        """
        scale = RAD2DEG if degrees else 1.0
        unit = 'deg' if degrees else 'rad'
        return pd.DataFrame({
            't (s)': self.t,
            'du (m/s)': self.u,
            f'dalpha ({unit})': self.alpha * scale,
            f'dq ({unit}/s)': self.q * scale,
            f'dtheta ({unit})': self.theta * scale,
            f'de ({unit})': self.delta_e * scale,
        })


def elevator_step(t: float, t_step: float = 1.0, amplitude: float = ELEVATOR_DEFLECTION) -> float:
    """Hold `amplitude` (rad) from t_step onward; the -2° default is trailing edge up, nose up."""
    return amplitude if t >= t_step else 0.0


def elevator_pulse(t: float, t_start: float = 0.0, duration: float = 1.0,
                   amplitude: float = ELEVATOR_DEFLECTION) -> float:
    """Elevator held at `amplitude` for `duration` seconds, then released."""
    return amplitude if t_start <= t < t_start + duration else 0.0


def elevator_doublet(t: float, t_start: float = 1.0,
                     duration: float = 2.0, amplitude: float = 0.035) -> float:
    """+amplitude for the first half of `duration`, -amplitude for the second, zero otherwise."""
    half = t_start + duration / 2
    if t_start <= t < half:
        return amplitude
    if half <= t < t_start + duration:
        return -amplitude
    return 0.0


def elevator_ramp(t: float, t_start: float = 1.0,
                  t_end: float = 3.0, amplitude: float = ELEVATOR_DEFLECTION) -> float:
    """
    Linear ramp from zero at t_start to `amplitude` (rad) at t_end, held after.
    """
    if t <= t_start:
        return 0.0
    if t >= t_end:
        return amplitude
    return amplitude * (t - t_start) / (t_end - t_start)


def simulate_with_input(
    model: LongitudinalLinearModel,
    control_func: Callable[[float], float],
    x0: Optional[np.ndarray] = None,
    t_final: float = 20.0,
    dt: float = 0.01
) -> SimulationResult:
    """
    Fixed-step Euler simulation with an arbitrary control input.

    The control is sampled at the start of each step, as in real-time
    playback.

    Args:
        model: LongitudinalLinearModel instance
        control_func: Function f(t) -> delta_e (rad)
        x0: Initial state, defaults to zeros
        t_final: Simulated duration (s)
        dt: Integration step (s)

    Returns:
        SimulationResult sampled every step, including t = 0

    Raises:
        NumericalInstability: State became non-finite
    """
    if dt <= 0.0:
        raise ValueError(f"Time step must be positive, got {dt}")
    n_steps = int(round(t_final / dt))

    A, B = model.A, model.B
    t = np.arange(n_steps + 1) * dt
    y = np.zeros((4, n_steps + 1))
    delta_e_hist = np.zeros(n_steps + 1)

    x = np.zeros(4) if x0 is None else np.asarray(x0, dtype=float)
    y[:, 0] = x
    for k in range(n_steps):
        delta_e_hist[k] = control_func(t[k])
        x = euler_step(x, delta_e_hist[k], A, B, dt)
        y[:, k + 1] = x
    delta_e_hist[n_steps] = control_func(t[n_steps])
    check_finite(y, "state history")

    return SimulationResult(t=t, y=y, delta_e=delta_e_hist)


def simulate_step_response(
    model: LongitudinalLinearModel,
    x0: Optional[np.ndarray] = None,
    t_final: float = 20.0,
    t_step: float = 1.0,
    amplitude: float = ELEVATOR_DEFLECTION,
    dt: float = 0.01
) -> SimulationResult:
    """Longitudinal response to an elevator step at t_step."""
    return simulate_with_input(
        model,
        lambda t: elevator_step(t, t_step, amplitude),
        x0=x0,
        t_final=t_final,
        dt=dt
    )


def simulate_reference(
    model: LongitudinalLinearModel,
    control_func: Callable[[float], float],
    x0: Optional[np.ndarray] = None,
    t_final: float = 20.0,
    dt: float = 0.01
) -> SimulationResult:
    """
    Reference solution of the same model with scipy's RK45.

    Tight tolerances; sampled on the same grid as simulate_with_input().
    """
    if x0 is None:
        x0 = np.zeros(4)

    def dynamics(t, x):
        return model.dynamics(t, x, control_func(t))

    n_steps = int(round(t_final / dt))
    t_eval = np.arange(n_steps + 1) * dt

    sol = solve_ivp(
        dynamics,
        (0.0, t_eval[-1]),
        np.asarray(x0, dtype=float),
        method='RK45',
        t_eval=t_eval,
        rtol=1e-8,
        atol=1e-10,
        max_step=dt * 10
    )

    delta_e_hist = np.array([control_func(t) for t in sol.t])
    return SimulationResult(t=sol.t, y=sol.y, delta_e=delta_e_hist)


def dominant_period(t: np.ndarray, signal: np.ndarray, t_start: float = 0.0) -> float:
    """
    Oscillation period estimated from sign changes of a signal.

    Samples that are exactly zero (either sign) are dropped, then zero
    crossings between opposite-signed neighbours are linearly interpolated;
    consecutive crossings of a damped sinusoid are half a period apart.

    Returns:
        Period (s), or inf when fewer than two crossings are found
    """
    t = np.asarray(t, dtype=float)
    s = np.asarray(signal, dtype=float)
    mask = (t >= t_start) & (s != 0.0)
    t, s = t[mask], s[mask]

    idx = np.nonzero(s[:-1] * s[1:] < 0.0)[0]
    if len(idx) < 2:
        return np.inf
    crossings = t[idx] - s[idx] * (t[idx + 1] - t[idx]) / (s[idx + 1] - s[idx])
    return 2.0 * float(np.mean(np.diff(crossings)))
