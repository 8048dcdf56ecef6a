"""
Aircraft Configuration and Trim Conditions

Dataclasses for aircraft mass/geometry, trim (steady-state) flight
conditions and dimensional stability derivatives, following Roskam's
"Airplane Flight Dynamics and Automatic Flight Controls" notation
(Chapter 5 for the longitudinal equations).

Assumptions:
- Small perturbations about a single trim condition
- Stability axes for aerodynamic coefficients
- Flat Earth, constant mass
- α-state formulation for longitudinal (w ≈ U1 α)

References:
- Roskam Chapter 5: Longitudinal state-space
- Roskam Appendix B1: Cessna 182 data
"""

import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, Union

from aero.coefficients import AerodynamicCoefficients, DEFAULT_COEFFICIENTS
from errors import InvalidAircraftProperties, InvalidTrimCondition


# =============================================================================
# CONSTANTS
# =============================================================================
G0 = 9.80665         # Standard gravity, atmosphere model (m/s²)
G_MODEL = 9.81       # Gravity used in the A matrix (m/s²)
RAD2DEG = 180.0 / math.pi
DEG2RAD = math.pi / 180.0

# Top of the tabulated 1976 standard atmosphere (m)
MAX_TRIM_ALTITUDE = 84852.0

# Elevator command applied while the pilot holds the "perturb" input
ELEVATOR_DEFLECTION = -2.0 * DEG2RAD


def _require_finite(name: str, value: float, error=InvalidTrimCondition) -> float:
    value = float(value)
    if not math.isfinite(value):
        raise error(f"{name} must be finite, got {value}")
    return value


@dataclass(frozen=True)
class AircraftProperties:
    """
    Mass and reference geometry for the longitudinal model.

    All units SI.
    """
    mass: float          # kg
    Iyy: float           # Pitch moment of inertia (kg·m²)
    S: float             # Reference wing area (m²)
    c: float             # Mean aerodynamic chord (m)

    def __post_init__(self):
        for name in ('mass', 'Iyy', 'S', 'c'):
            value = _require_finite(name, getattr(self, name), InvalidAircraftProperties)
            if value <= 0.0:
                raise InvalidAircraftProperties(f"{name} must be positive, got {value}")
            object.__setattr__(self, name, value)


@dataclass(frozen=True)
class SteadyState:
    """
    Trim (reference) flight condition.

    Perturbation states are measured from this condition. Validated on
    construction: TAS appears as a divisor in several derivatives, so a
    non-positive airspeed is rejected here rather than producing Inf/NaN
    downstream.
    """
    altitude: float      # Geopotential altitude (m)
    TAS: float           # True airspeed U1 (m/s)
    alpha: float         # Trim angle of attack (rad)
    CL_1: float          # Trim lift coefficient
    CD_1: float          # Trim drag coefficient
    theta: float         # Trim pitch angle (rad)
    de: float = 0.0      # Trim elevator deflection (rad)

    def __post_init__(self):
        for name in ('altitude', 'TAS', 'alpha', 'CL_1', 'CD_1', 'theta', 'de'):
            object.__setattr__(self, name, _require_finite(name, getattr(self, name)))
        if self.TAS <= 0.0:
            raise InvalidTrimCondition(f"TAS must be positive, got {self.TAS} m/s")
        if not 0.0 <= self.altitude <= MAX_TRIM_ALTITUDE:
            raise InvalidTrimCondition(
                f"altitude must be within [0, {MAX_TRIM_ALTITUDE:.0f}] m, got {self.altitude}"
            )


@dataclass(frozen=True)
class DimensionalDerivatives:
    """
    Dimensional longitudinal stability and control derivatives.

    α-state form: the Z derivatives are already divided by U1, so they
    enter the α̇ row of the state matrix directly.

    Units (SI):
        Xu: 1/s             Xa: m/s²
        Zu: 1/m             Za: 1/s          Zq: -        Zde: 1/s
        Ma: 1/s²            Mq: 1/s          Madot: 1/s   Mde: 1/s²
    """
    Xu: float
    Xa: float
    Zu: float
    Za: float
    Zq: float
    Zde: float
    Ma: float
    Mq: float
    Madot: float
    Mde: float
    q_bar: float = 0.0   # Dynamic pressure the derivatives were built with (Pa)

    def as_dict(self) -> Dict[str, float]:
        return {
            'Xu': self.Xu, 'Xa': self.Xa,
            'Zu': self.Zu, 'Za': self.Za, 'Zq': self.Zq, 'Zde': self.Zde,
            'Ma': self.Ma, 'Mq': self.Mq, 'Madot': self.Madot, 'Mde': self.Mde,
        }


class TrimCondition(IntEnum):
    """Named trim presets, selectable by index."""
    CRUISE = 0
    CLIMB = 1
    APPROACH = 2


@dataclass(frozen=True)
class TrimPreset:
    """A trim condition together with its integration step and baseline coefficients."""
    name: str
    label: str
    steady_state: SteadyState
    dt: float                                   # Integration step (s)
    coefficients: AerodynamicCoefficients = field(default=DEFAULT_COEFFICIENTS)


# =============================================================================
# Cessna 182 (Roskam Appendix B1)
# =============================================================================
# Original data in imperial units, converted to SI:
#   W = 2650 lbf            -> m = 1202 kg
#   Iyy = 1346 slug·ft²     -> 1825 kg·m²
#   S = 174 ft²             -> 16.16 m²
#   c = 4.9 ft              -> 1.5 m
# =============================================================================

CESSNA_182 = AircraftProperties(
    mass=1202.0,
    Iyy=1825.0,
    S=16.16,
    c=1.5
)

# Cruise: 5,000 ft, 220 ft/s
CESSNA_182_CRUISE = SteadyState(
    altitude=1524.0,
    TAS=67.0,
    alpha=0.0,
    CL_1=0.307,
    CD_1=0.032,
    theta=0.0,
    de=0.0
)

# Climb: sea level, 5.4 deg
CESSNA_182_CLIMB = SteadyState(
    altitude=0.0,
    TAS=40.7,
    alpha=0.0942478,
    CL_1=0.719,
    CD_1=0.057,
    theta=0.0942478,
    de=0.0
)

# Approach: sea level, 4 deg
CESSNA_182_APPROACH = SteadyState(
    altitude=0.0,
    TAS=32.6,
    alpha=0.0698132,
    CL_1=1.120,
    CD_1=0.132,
    theta=0.0698132,
    de=0.0
)

TRIM_PRESETS: Dict[TrimCondition, TrimPreset] = {
    TrimCondition.CRUISE: TrimPreset('cruise', 'Cruise', CESSNA_182_CRUISE, dt=0.01),
    TrimCondition.CLIMB: TrimPreset('climb', 'Climb', CESSNA_182_CLIMB, dt=0.004),
    TrimCondition.APPROACH: TrimPreset('approach', 'Approach', CESSNA_182_APPROACH, dt=0.004),
}


def get_trim_preset(trim: Union[TrimCondition, int, str]) -> TrimPreset:
    """
    Look up a trim preset by enum member, index or name.

    Raises:
        ValueError: Unknown preset
    """
    if isinstance(trim, str):
        try:
            trim = TrimCondition[trim.upper()]
        except KeyError:
            raise ValueError(
                f"Unknown trim condition '{trim}'. Available: {[t.name.lower() for t in TrimCondition]}"
            ) from None
    else:
        try:
            trim = TrimCondition(trim)
        except ValueError:
            raise ValueError(f"Unknown trim condition index {trim!r}") from None
    return TRIM_PRESETS[trim]


def steady_state_summary(ss: SteadyState) -> Dict[str, float]:
    """Trim condition in display units (angles in degrees)."""
    return {
        'altitude': ss.altitude,
        'TAS': ss.TAS,
        'alpha': ss.alpha * RAD2DEG,
        'CL': ss.CL_1,
        'CD': ss.CD_1,
        'theta': ss.theta * RAD2DEG,
        'de': ss.de * RAD2DEG,
    }
