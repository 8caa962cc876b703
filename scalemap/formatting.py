import math
from typing import List, Tuple

from scalemap.units import METERS_PER_LY

# (upper bound in meters, factor, unit label)
DISTANCE_THRESHOLDS: List[Tuple[float, float, str]] = [
    (1e-2, 1e3, "mm"),
    (1, 1e2, "cm"),
    (1e3, 1, "m"),
    (1e6, 1e-3, "km"),
    (1e9, 1e-6, "thousand km"),
    (1e12, 1e-9, "million km"),
    (1e15, 1e-12, "billion km"),
    (1e18, 1 / METERS_PER_LY, "ly"),
    (1e21, 1 / (1e3 * METERS_PER_LY), "thousand ly"),
    (1e24, 1 / (1e6 * METERS_PER_LY), "million ly"),
    (math.inf, 1 / (1e9 * METERS_PER_LY), "billion ly"),
]


def format_distance(meters: float) -> Tuple[str, str]:
    """Value with two decimals (trailing zeros trimmed) in the first unit that fits"""
    if not math.isfinite(meters):
        return ("-", "")
    for upper, factor, unit in DISTANCE_THRESHOLDS:
        if meters < upper:
            break
    text = f"{meters * factor:.2f}"
    if text.endswith(".00"):
        text = text[:-3]
    elif text.endswith("0"):
        text = text[:-1]
    return (text, unit)
