"""
Explicit Euler Integrator

Advances the linear state-space model ẋ = Ax + Bu by one fixed step:

    x_{k+1} = x_k + dt · (A·x_k + B·u_k)

First-order accurate and only conditionally stable: dt must be small
relative to the fastest pole of A (|1 + dt·λ| < 1 for every eigenvalue λ).
"""

import numpy as np

from errors import NumericalInstability


def euler_step(x: np.ndarray, u: float, A: np.ndarray, B: np.ndarray, dt: float) -> np.ndarray:
    """
    One forward-Euler step.

    Args:
        x: State vector [Δu, Δα, Δq, Δθ]
        u: Elevator deflection perturbation Δδe (rad)
        A: 4x4 state matrix
        B: Input vector, shape (4,)
        dt: Step size (s)

    Returns:
        New state vector (the input is not modified)
    """
    x = np.asarray(x, dtype=float)
    x_dot = A @ x + np.ravel(B) * u
    return x + dt * x_dot


def check_finite(values: np.ndarray, what: str = "state") -> np.ndarray:
    """
    Raise NumericalInstability if any entry is NaN or infinite.

    Returns the values unchanged so the check can be chained.
    """
    if not np.all(np.isfinite(values)):
        raise NumericalInstability(f"Non-finite {what}: {np.asarray(values).tolist()}")
    return values
