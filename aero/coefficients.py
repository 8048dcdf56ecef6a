"""
Aerodynamic Coefficient Set

Non-dimensional longitudinal coefficient derivatives that feed the
dimensional stability derivatives (Roskam Chapter 3/5 notation):

    C_D  : CD_a                       (drag curve slope)
    C_L  : CL_a, CL_q, CL_de          (lift curve slope, pitch rate, elevator)
    C_m  : Cm_a, Cm_adot, Cm_q, Cm_de (static stability, downwash lag,
                                       pitch damping, elevator power)

All derivatives are per-radian; the rate derivatives are with respect to
the non-dimensional rates q̂ = q·c/(2U1) and α̂̇ = α̇·c/(2U1).

The set is immutable. Edits produce a new snapshot with the edited value
clamped to COEFFICIENT_BOUNDS, so the derived state-space matrices can be
rebuilt from a consistent set every time.

References:
    Roskam, "Airplane Flight Dynamics", Chapter 3 and Appendix B1
"""

import logging
import math
from dataclasses import dataclass, fields, replace
from typing import Dict, Tuple

logger = logging.getLogger("longsim.coefficients")

# Coefficients the pilot/user may edit; CL_de and Cm_de stay fixed
EDITABLE_COEFFICIENTS: Tuple[str, ...] = ('CD_a', 'CL_a', 'CL_q', 'Cm_a', 'Cm_adot', 'Cm_q')

COEFFICIENT_BOUNDS: Tuple[float, float] = (-20.0, 20.0)


@dataclass(frozen=True)
class AerodynamicCoefficients:
    """
    Longitudinal coefficient derivatives (per radian).

    Default values are the Cessna 182 cruise data from Roskam Appendix B1.
    """
    CD_a: float = 0.121       # ∂CD/∂α
    CL_a: float = 4.41        # ∂CL/∂α
    CL_q: float = 3.9         # ∂CL/∂q̂
    Cm_a: float = -0.613      # ∂Cm/∂α (negative for static stability)
    Cm_adot: float = -7.27    # ∂Cm/∂α̂̇ (downwash lag)
    Cm_q: float = -12.4       # ∂Cm/∂q̂ (pitch damping)
    CL_de: float = 0.43       # ∂CL/∂δe
    Cm_de: float = -1.122     # ∂Cm/∂δe (elevator power)

    def as_dict(self) -> Dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def with_value(self, name: str, value: float) -> 'AerodynamicCoefficients':
        """
        Return a copy with one editable coefficient replaced.

        The value is clamped to COEFFICIENT_BOUNDS.

        Raises:
            ValueError: Unknown or fixed coefficient name, or non-finite value
        """
        if name not in EDITABLE_COEFFICIENTS:
            raise ValueError(
                f"Coefficient '{name}' is not editable. Editable: {list(EDITABLE_COEFFICIENTS)}"
            )
        return replace(self, **{name: clamp_coefficient(name, value)})

    def with_defaults_for_editable(self, baseline: 'AerodynamicCoefficients') -> 'AerodynamicCoefficients':
        """Restore every editable coefficient to its baseline value."""
        return replace(self, **{name: getattr(baseline, name) for name in EDITABLE_COEFFICIENTS})


DEFAULT_COEFFICIENTS = AerodynamicCoefficients()


def clamp_coefficient(name: str, value: float) -> float:
    """
    Clamp an edited coefficient to COEFFICIENT_BOUNDS.

    Raises:
        ValueError: Value is NaN or infinite
    """
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"Coefficient '{name}' must be finite, got {value}")
    lo, hi = COEFFICIENT_BOUNDS
    clamped = min(max(value, lo), hi)
    if clamped != value:
        logger.info("Clamped %s from %g to %g", name, value, clamped)
    return clamped
