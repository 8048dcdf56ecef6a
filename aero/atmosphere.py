"""
U.S. Standard Atmosphere 1976

Temperature, pressure, density and speed of sound as functions of
geopotential altitude, for the seven layers up to 84,852 m.

Each layer has a base altitude, a base temperature and a constant lapse
rate. Pressure at the base of each layer is built up layer by layer from
sea level with the barometric formula:

    L = 0:  P = Pb · exp(-g0·(h - hb) / (Rs·Tb))
    L ≠ 0:  P = Pb · (T / Tb)^(-g0 / (Rs·L))

so temperature and pressure are continuous across every layer seam.

    ρ = P / (Rs·T)
    a = sqrt(γ·Rs·T)

Policy:
- Negative (or non-finite) altitude is rejected with InvalidAltitude.
- Above 84,852 m the last tabulated layer (base 71,000 m) is extrapolated
  up to EXTRAPOLATION_CEILING, where its temperature reaches 0 K; at or
  above the ceiling the altitude is rejected with InvalidAltitude.

References:
    U.S. Standard Atmosphere, 1976 (NOAA-S/T 76-1562)
"""

import logging
import math
from dataclasses import dataclass
from typing import List, NamedTuple

from errors import InvalidAltitude

logger = logging.getLogger("longsim.atmosphere")

# Physical constants
G0 = 9.80665              # Standard gravity (m/s²)
R_UNIVERSAL = 8.3144598   # Universal gas constant (J/(mol·K))
M_AIR = 0.0289644         # Molar mass of dry air (kg/mol)
RS = R_UNIVERSAL / M_AIR  # Specific gas constant for air (J/(kg·K))
GAMMA = 1.4               # Ratio of specific heats
P0 = 101325.0             # Sea-level pressure (Pa)


class Layer(NamedTuple):
    h: float    # Base geopotential altitude (m)
    T: float    # Base temperature (K)
    L: float    # Lapse rate (K/m)


LAYERS: List[Layer] = [
    Layer(0.0,     288.15,  -0.0065),
    Layer(11000.0, 216.65,   0.0),
    Layer(20000.0, 216.65,   0.001),
    Layer(32000.0, 228.65,   0.0028),
    Layer(47000.0, 270.65,   0.0),
    Layer(51000.0, 270.65,  -0.0028),
    Layer(71000.0, 214.65,  -0.002),
    Layer(84852.0, 186.946,  0.0),    # Upper bound of the model
]

TOP_ALTITUDE = LAYERS[-1].h

# Altitude where the extrapolated 71 km layer reaches 0 K (178,325 m)
EXTRAPOLATION_CEILING = LAYERS[-2].h - LAYERS[-2].T / LAYERS[-2].L


@dataclass(frozen=True)
class AtmosphereSample:
    """Atmospheric properties at one altitude."""
    temperature_K: float
    pressure_Pa: float
    density_kg_m3: float
    speed_of_sound_m_s: float


def _pressure_ratio(dh: float, T_base: float, L: float) -> float:
    """Barometric pressure ratio across dh metres of a layer."""
    if L == 0.0:
        return math.exp(-G0 * dh / (RS * T_base))
    T = T_base + L * dh
    return (T / T_base) ** (-G0 / (RS * L))


def layer_index(altitude_m: float) -> int:
    """
    Index of the layer containing the altitude.

    First layer whose upper bound exceeds the altitude; altitudes at or
    above the top bound map onto the last defined layer.
    """
    for i in range(len(LAYERS) - 1):
        if altitude_m < LAYERS[i + 1].h:
            return i
    return len(LAYERS) - 2


def layer_base_pressures() -> List[float]:
    """Pressure (Pa) at the base of every tabulated layer, integrated from sea level."""
    pressures = [P0]
    for i in range(len(LAYERS) - 1):
        layer = LAYERS[i]
        dh = LAYERS[i + 1].h - layer.h
        pressures.append(pressures[-1] * _pressure_ratio(dh, layer.T, layer.L))
    return pressures


def ussa1976(altitude_m: float) -> AtmosphereSample:
    """
    Standard atmosphere at a geopotential altitude.

    Args:
        altitude_m: Geopotential altitude (m), >= 0

    Returns:
        AtmosphereSample with T (K), P (Pa), ρ (kg/m³), a (m/s)

    Raises:
        InvalidAltitude: Negative, non-finite or at/above EXTRAPOLATION_CEILING
    """
    h = float(altitude_m)
    if not math.isfinite(h) or h < 0.0:
        raise InvalidAltitude(f"Altitude must be a finite value >= 0 m, got {altitude_m}")
    if h >= EXTRAPOLATION_CEILING:
        raise InvalidAltitude(
            f"Altitude {h:.0f} m is at or above the {EXTRAPOLATION_CEILING:.0f} m extrapolation ceiling"
        )
    if h > TOP_ALTITUDE:
        logger.debug("Altitude %.0f m above %.0f m, extrapolating last layer", h, TOP_ALTITUDE)

    idx = layer_index(h)
    base = LAYERS[idx]

    # Pressure at the base of the layer
    P = P0
    for i in range(idx):
        layer = LAYERS[i]
        P *= _pressure_ratio(LAYERS[i + 1].h - layer.h, layer.T, layer.L)

    # Temperature and pressure within the layer
    dh = h - base.h
    if base.L == 0.0:
        T = base.T
    else:
        T = base.T + base.L * dh
    if T <= 0.0:
        raise InvalidAltitude(f"Altitude {h:.0f} m gives a non-physical temperature {T:g} K")
    P *= _pressure_ratio(dh, base.T, base.L)

    rho = P / (RS * T)
    a = math.sqrt(GAMMA * RS * T)

    return AtmosphereSample(
        temperature_K=T,
        pressure_Pa=P,
        density_kg_m3=rho,
        speed_of_sound_m_s=a
    )


atmosphere = ussa1976


if __name__ == "__main__":
    print(f"{'h (m)':>8} {'T (K)':>9} {'P (Pa)':>11} {'rho (kg/m3)':>12} {'a (m/s)':>8}")
    for h in (0, 1524, 5000, 11000, 20000, 32000, 47000, 51000, 71000, 84852):
        s = ussa1976(h)
        print(f"{h:>8} {s.temperature_K:>9.3f} {s.pressure_Pa:>11.3f} "
              f"{s.density_kg_m3:>12.6f} {s.speed_of_sound_m_s:>8.2f}")
