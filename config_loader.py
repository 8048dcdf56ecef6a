"""
Aircraft Database Loader

Loads aircraft mass/geometry, trim conditions and coefficient derivatives
from planes.yaml.

Each entry may be given in SI or Imperial units (meta.units); Imperial
data (as tabulated in Roskam Appendix B) is converted on load:

    weight (lbf)        -> mass (kg)      m = W·4.44822 / g0
    Iyy (slug·ft²)      -> kg·m²
    S (ft²), c (ft)     -> m², m
    altitude (ft), TAS (ft/s) -> m, m/s
    angles              -> degrees in the file, radians after load

Usage:
    from config_loader import load_aircraft, get_available_aircraft
    setup = load_aircraft('cessna_182')
"""

import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from aero.coefficients import DEFAULT_COEFFICIENTS, AerodynamicCoefficients
from config import AircraftProperties, SteadyState

logger = logging.getLogger("longsim.config_loader")


# =============================================================================
# UNIT CONVERSION CONSTANTS
# =============================================================================
FT_TO_M = 0.3048
FT2_TO_M2 = 0.09290304
LBF_TO_N = 4.44822
SLUGFT2_TO_KGM2 = 1.35582
G_SI = 9.80665  # m/s^2

_ANGLE_KEYS = ('alpha', 'theta', 'de')


@dataclass(frozen=True)
class AircraftSetup:
    """Everything needed to build longitudinal models for one aircraft."""
    name: str
    label: str
    properties: AircraftProperties
    steady_states: Dict[str, SteadyState]
    coefficients: AerodynamicCoefficients
    source: str = "Unknown"


def get_yaml_path() -> Path:
    """Get path to planes.yaml."""
    return Path(__file__).parent / 'planes.yaml'


def _read_yaml(yaml_path: Path) -> Dict[str, Any]:
    with open(yaml_path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)
    return data or {}


def get_available_aircraft(yaml_path: Optional[Path] = None) -> List[str]:
    """Return list of available aircraft names."""
    yaml_path = yaml_path or get_yaml_path()
    if not yaml_path.exists():
        return []
    return list(_read_yaml(yaml_path).keys())


def convert_imperial_to_si(raw: Dict) -> Dict:
    """
    Convert an Imperial aircraft entry to SI.

    Coefficients are dimensionless and copied unchanged.
    """
    mass = raw.get('mass_props', {})
    geom = raw.get('geometry', {})

    converted = {
        'mass_props': {
            'mass_kg': float(mass['weight_lbf']) * LBF_TO_N / G_SI,  # W = mg -> m = W/g
            'Iyy': abs(float(mass['Iyy'])) * SLUGFT2_TO_KGM2,
        },
        'geometry': {
            'S': float(geom['S']) * FT2_TO_M2,
            'c': float(geom['c']) * FT_TO_M,
        },
        'trim': {},
        'aero_long': dict(raw.get('aero_long', {})),
    }

    for name, trim in raw.get('trim', {}).items():
        trim = dict(trim)
        trim['altitude'] = float(trim['altitude']) * FT_TO_M
        trim['TAS'] = float(trim['TAS']) * FT_TO_M
        converted['trim'][name] = trim

    return converted


def _steady_state(name: str, raw: Dict) -> SteadyState:
    """Build a SteadyState from a trim entry with angles in degrees."""
    values = {
        'altitude': raw['altitude'],
        'TAS': raw['TAS'],
        'CL_1': raw['CL_1'],
        'CD_1': raw['CD_1'],
    }
    for key in _ANGLE_KEYS:
        values[key] = math.radians(float(raw.get(key, 0.0)))
    logger.debug("Trim '%s': h=%.0f m, U1=%.1f m/s", name, float(values['altitude']), float(values['TAS']))
    return SteadyState(**values)


def load_aircraft(name: str, yaml_path: Optional[Path] = None) -> AircraftSetup:
    """
    Load aircraft configuration from YAML.

    Handles Imperial/SI conversion. Coefficients missing from the file
    take the Cessna 182 defaults.

    Raises:
        ValueError: Missing file, unknown aircraft or unknown coefficient
        InvalidTrimCondition: Trim entry with TAS <= 0 or bad altitude
        InvalidAircraftProperties: Non-positive mass or geometry
    """
    if yaml_path is None:
        yaml_path = get_yaml_path()

    if not yaml_path.exists():
        raise ValueError(f"YAML file not found: {yaml_path}")

    data = _read_yaml(yaml_path)

    if name not in data:
        raise ValueError(f"Aircraft '{name}' not found. Available: {list(data.keys())}")

    raw = data[name]
    meta = raw.get('meta', {})
    units = str(meta.get('units', 'SI')).lower()

    logger.info("Loading %s (units=%s)", name, units)

    if units == 'imperial':
        raw = convert_imperial_to_si(raw)
    elif units != 'si':
        raise ValueError(f"Unknown units '{units}' for aircraft '{name}' (expected SI or imperial)")

    mp = raw.get('mass_props', {})
    geom = raw.get('geometry', {})
    props = AircraftProperties(
        mass=mp['mass_kg'],
        Iyy=mp['Iyy'],
        S=geom['S'],
        c=geom['c']
    )

    steady_states = {
        trim_name: _steady_state(trim_name, trim)
        for trim_name, trim in raw.get('trim', {}).items()
    }
    if not steady_states:
        raise ValueError(f"Aircraft '{name}' defines no trim conditions")

    aero = raw.get('aero_long', {})
    known = DEFAULT_COEFFICIENTS.as_dict()
    unknown = set(aero) - set(known)
    if unknown:
        raise ValueError(f"Unknown coefficients for '{name}': {sorted(unknown)}")
    coefficients = AerodynamicCoefficients(**{k: float(aero.get(k, v)) for k, v in known.items()})

    return AircraftSetup(
        name=name,
        label=meta.get('name', name),
        properties=props,
        steady_states=steady_states,
        coefficients=coefficients,
        source=meta.get('source', 'Unknown')
    )


def get_aircraft_info(name: str, yaml_path: Optional[Path] = None) -> Dict[str, Any]:
    """Get aircraft metadata for UI display."""
    yaml_path = yaml_path or get_yaml_path()

    if not yaml_path.exists():
        return {'name': name, 'source': 'Unknown', 'trim': []}

    data = _read_yaml(yaml_path)
    if name not in data:
        return {'name': name, 'source': 'Unknown', 'trim': []}

    meta = data[name].get('meta', {})
    return {
        'name': meta.get('name', name),
        'source': meta.get('source', 'Unknown'),
        'trim': list(data[name].get('trim', {}).keys())
    }


if __name__ == "__main__":
    print("=" * 60)
    print("Config Loader Test")
    print("=" * 60)

    for name in get_available_aircraft():
        print(f"\n--- {name.upper()} ---")
        setup = load_aircraft(name)
        p = setup.properties
        print(f"  Mass={p.mass:,.0f} kg, Iyy={p.Iyy:,.0f} kg·m², S={p.S:.2f} m², c={p.c:.2f} m")
        for trim_name, ss in setup.steady_states.items():
            print(f"  {trim_name:<10} h={ss.altitude:7.0f} m  U1={ss.TAS:6.1f} m/s  CL={ss.CL_1:.3f}")

    print("\n" + "=" * 60)
