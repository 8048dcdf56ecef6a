"""
Exception Taxonomy

Errors raised by the longitudinal model. Bad trim conditions and aircraft
data are rejected where they enter the system, so the numerical core can
assume well-formed inputs. Out-of-range coefficient edits are clamped
instead of raised (see aero.coefficients).
"""


class FlightModelError(Exception):
    """Base class for all flight-model errors."""


class InvalidTrimCondition(FlightModelError, ValueError):
    """Trim condition that cannot produce finite derivatives (TAS <= 0, bad altitude)."""


class InvalidAltitude(InvalidTrimCondition):
    """Altitude outside the range supported by the standard atmosphere."""


class InvalidAircraftProperties(FlightModelError, ValueError):
    """Mass, inertia or reference geometry that is not finite and positive."""


class NumericalInstability(FlightModelError, ArithmeticError):
    """Non-finite entries in A, B or the state vector."""
