"""
Dimensional Stability Derivatives

Converts non-dimensional coefficient derivatives and a trim condition into
dimensional longitudinal derivatives for the α-state model (Roskam
Chapter 5, Table 5.1):

    q̄ = ½·ρ·U1²

    Xu    = -(q̄S / mU1) · 2·CD_1
    Xα    =  (q̄S / m) · (-CD_α + CL_1)
    Zu    = -(q̄S / mU1²) · 2·CL_1
    Zα    =  (q̄S / mU1) · (-CL_α - CD_1)
    Zq    = -(q̄Sc / 2mU1²) · CL_q
    Zδe   = -(q̄S / mU1) · CL_δe
    Mα    =  (q̄Sc / Iyy) · Cm_α
    Mq    =  (q̄Sc² / 2·Iyy·U1) · Cm_q
    Mα̇    =  (q̄Sc² / 2·Iyy·U1) · Cm_α̇
    Mδe   =  (q̄Sc / Iyy) · Cm_δe

Every derivative is linear in q̄. The Z derivatives are divided by U1 so
they enter the α̇ equation directly.

References:
    Roskam, "Airplane Flight Dynamics", Chapter 5, Table 5.1
"""

import logging
import math
from typing import Optional

from aero.atmosphere import ussa1976
from aero.coefficients import AerodynamicCoefficients
from config import AircraftProperties, DimensionalDerivatives, SteadyState
from errors import InvalidTrimCondition

logger = logging.getLogger("longsim.derivatives")


def dimensional_derivatives(
    props: AircraftProperties,
    steady_state: SteadyState,
    coeffs: AerodynamicCoefficients,
    rho: Optional[float] = None
) -> DimensionalDerivatives:
    """
    Compute the ten dimensional longitudinal derivatives.

    Args:
        props: Aircraft mass, inertia and reference geometry
        steady_state: Trim condition (TAS > 0 guaranteed by SteadyState)
        coeffs: Non-dimensional coefficient derivatives
        rho: Air density override (kg/m³). Defaults to the standard
             atmosphere density at the trim altitude.

    Returns:
        DimensionalDerivatives

    Raises:
        InvalidTrimCondition: Density override that is not finite and positive
    """
    if rho is None:
        rho = ussa1976(steady_state.altitude).density_kg_m3
    elif not (math.isfinite(rho) and rho > 0.0):
        raise InvalidTrimCondition(f"Air density must be finite and positive, got {rho}")

    m = props.mass
    Iyy = props.Iyy
    S = props.S
    c = props.c

    u1 = steady_state.TAS
    CL_1 = steady_state.CL_1
    CD_1 = steady_state.CD_1

    q_bar = 0.5 * rho * u1 * u1

    # Common factors
    qS = q_bar * S
    mu = m * u1
    qSc = q_bar * S * c
    Iyyu = Iyy * u1

    derivs = DimensionalDerivatives(
        Xu=-qS / mu * 2 * CD_1,
        Xa=qS / m * (-coeffs.CD_a + CL_1),
        Zu=-qS / (mu * u1) * 2 * CL_1,
        Za=qS / mu * (-coeffs.CL_a - CD_1),
        Zq=-qSc / (2 * mu * u1) * coeffs.CL_q,
        Zde=-qS / mu * coeffs.CL_de,
        Ma=qSc / Iyy * coeffs.Cm_a,
        Mq=qSc * c / (2 * Iyyu) * coeffs.Cm_q,
        Madot=qSc * c / (2 * Iyyu) * coeffs.Cm_adot,
        Mde=qSc / Iyy * coeffs.Cm_de,
        q_bar=q_bar
    )

    logger.debug(
        "Derivatives at h=%.0f m, U1=%.1f m/s, rho=%.4f, q_bar=%.1f Pa: Ma=%.3f, Mq=%.3f, Za=%.3f",
        steady_state.altitude, u1, rho, q_bar, derivs.Ma, derivs.Mq, derivs.Za
    )

    return derivs
