"""
Unit tables and conversion to each quantity kind's base unit.

Every conversion returns NaN instead of raising; callers check
math.isfinite on the result.
"""

import math
from typing import Dict, List, Tuple

METERS_PER_AU = 149_597_870_700.0
METERS_PER_LY = 9_460_730_472_580_800.0
METERS_PER_PC = 3.08567758149e16

KG_PER_EARTH_MASS = 5.9722e24
KG_PER_JUPITER_MASS = 1.89813e27
KG_PER_SOLAR_MASS = 1.98847e30

WATTS_PER_SOLAR_LUMINOSITY = 3.828e26

# kind -> (base unit, unit -> factor to base)
UNIT_TABLES: Dict[str, Tuple[str, Dict[str, float]]] = {
    "length": (
        "m",
        {
            "mm": 1e-3,
            "cm": 1e-2,
            "m": 1.0,
            "km": 1e3,
            "R_earth": 6_371_008.8,
            "R_sun": 6.957e8,
            "AU": METERS_PER_AU,
            "ly": METERS_PER_LY,
            "kly": METERS_PER_LY * 1e3,
            "Mly": METERS_PER_LY * 1e6,
            "Gly": METERS_PER_LY * 1e9,
            "pc": METERS_PER_PC,
            "kpc": METERS_PER_PC * 1e3,
            "Mpc": METERS_PER_PC * 1e6,
            "Gpc": METERS_PER_PC * 1e9,
        },
    ),
    "mass": (
        "kg",
        {
            "g": 1e-3,
            "kg": 1.0,
            "t": 1e3,
            "M_earth": KG_PER_EARTH_MASS,
            "M_jup": KG_PER_JUPITER_MASS,
            "M_sun": KG_PER_SOLAR_MASS,
        },
    ),
    "luminosity": (
        "W",
        {
            "W": 1.0,
            "kW": 1e3,
            "MW": 1e6,
            "GW": 1e9,
            "TW": 1e12,
            "L_sun": WATTS_PER_SOLAR_LUMINOSITY,
        },
    ),
    "area": (
        "m2",
        {
            "m2": 1.0,
            "ha": 1e4,
            "km2": 1e6,
            "mi2": 2_589_988.110336,
        },
    ),
    "population": (
        "people",
        {
            "people": 1.0,
            "thousand": 1e3,
            "million": 1e6,
            "billion": 1e9,
        },
    ),
    "time": (
        "year",
        {
            "year": 1.0,
            "century": 100.0,
            "millennium": 1_000.0,
            "kyr": 1e3,
            "Myr": 1e6,
            "Gyr": 1e9,
        },
    ),
    # Single currency only, amounts are kept in cents
    "money": (
        "cent",
        {
            "cent": 1.0,
            "USD": 100.0,
            "thousand_USD": 1e5,
            "million_USD": 1e8,
            "billion_USD": 1e11,
            "trillion_USD": 1e14,
        },
    ),
}


def _as_float(value) -> float:
    if isinstance(value, bool):
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def base_unit(quantity_kind: str) -> str | None:
    table = UNIT_TABLES.get(quantity_kind)
    return table[0] if table else None


def list_units(quantity_kind: str) -> List[str]:
    table = UNIT_TABLES.get(quantity_kind)
    return list(table[1]) if table else []


def to_base(value: float, unit: str, quantity_kind: str) -> float:
    """
    Convert a value in `unit` into the base unit of `quantity_kind`.

    Returns NaN for an unknown kind, an unknown unit or a non-finite value.
    """
    table = UNIT_TABLES.get(quantity_kind)
    if table is None:
        return math.nan
    factor = table[1].get(unit)
    if factor is None:
        return math.nan
    v = _as_float(value)
    if not math.isfinite(v):
        return math.nan
    return v * factor


def convert_unit(value: float, from_unit: str, to_unit: str, quantity_kind: str) -> float:
    """Convert between two units of the same kind, NaN if either is unknown"""
    table = UNIT_TABLES.get(quantity_kind)
    if table is None or to_unit not in table[1]:
        return math.nan
    in_base = to_base(value, from_unit, quantity_kind)
    if not math.isfinite(in_base):
        return math.nan
    return in_base / table[1][to_unit]
