"""
Scaling laws: real quantity -> map radius, and the inverse that finds the
baseline map diameter putting a target exactly on the antipode.

All laws take the baseline as (real value, map diameter) and derive the
scale factor from that pair, so the two never drift apart.

    linear            r = (D/2) * (v2/v1)         D_req = 2L * (v1/v2)
    square-root       r = (D/2) * sqrt(v2/v1)     D_req = 2L * sqrt(v1/v2)
    time-linear       r = y2 * (D/2) / y1         D_req = 2L * (y1/y2)
    direct-distance   r = v2 * D / v1             D_req = L * (v1/v2)

where L is the sphere limit. None of the laws raise: bad input yields a
None scale factor or the neutral projection.
"""

import math

from scalemap.project_types import Projection, neutral_projection
from scalemap.scale import LIMIT_TOLERANCE_METERS, SPHERE_LIMIT


def _is_positive(value: float) -> bool:
    return isinstance(value, (int, float)) and math.isfinite(value) and value > 0


def _is_non_negative(value: float) -> bool:
    return isinstance(value, (int, float)) and math.isfinite(value) and value >= 0


class ScaleLaw:
    """Base class, subclasses supply the three formulas"""

    name = "abstract"

    def __init__(self, limit_meters: float = SPHERE_LIMIT):
        self.limit_meters = limit_meters

    def _scale(self, baseline_real: float, map_diameter: float) -> float:
        raise NotImplementedError

    def _radius(self, baseline_real: float, map_diameter: float, target_real: float) -> float:
        raise NotImplementedError

    def _inverse(self, baseline_real: float, target_real: float) -> float:
        raise NotImplementedError

    def scale_factor(self, baseline_real: float, map_diameter: float) -> float | None:
        """Map meters per real unit (or per sqrt-unit), None if the baseline is invalid"""
        if not _is_positive(baseline_real) or not _is_non_negative(map_diameter):
            return None
        return self._scale(baseline_real, map_diameter)

    def required_baseline(self, baseline_real: float, target_real: float) -> float | None:
        """Baseline map diameter that puts the target circle exactly on the sphere limit"""
        if not _is_positive(baseline_real) or not _is_positive(target_real):
            return None
        required = self._inverse(baseline_real, target_real)
        return required if math.isfinite(required) else None

    def project(
        self, baseline_real: float, map_diameter: float, target_real: float
    ) -> Projection:
        scale = self.scale_factor(baseline_real, map_diameter)
        if scale is None or scale <= 0 or not _is_positive(target_real):
            return neutral_projection()

        radius = self._radius(baseline_real, map_diameter, target_real)
        if not math.isfinite(radius):
            return neutral_projection()

        too_large = radius >= self.limit_meters + LIMIT_TOLERANCE_METERS
        return {
            "radius_meters": radius,
            "too_large": too_large,
            "required_baseline_meters": (
                self.required_baseline(baseline_real, target_real) if too_large else None
            ),
        }


class LinearLaw(ScaleLaw):
    """Diameter compared with diameter: the circle diameter is proportional"""

    name = "linear"

    def _scale(self, baseline_real, map_diameter):
        return map_diameter / baseline_real

    def _radius(self, baseline_real, map_diameter, target_real):
        return (map_diameter / 2) * (target_real / baseline_real)

    def _inverse(self, baseline_real, target_real):
        return 2 * self.limit_meters * (baseline_real / target_real)


class SquareRootLaw(ScaleLaw):
    """Circle area proportional to the quantity (area, mass, luminosity, population)"""

    name = "square_root"

    def _scale(self, baseline_real, map_diameter):
        return map_diameter / math.sqrt(baseline_real)

    def _radius(self, baseline_real, map_diameter, target_real):
        return (map_diameter / 2) * math.sqrt(target_real / baseline_real)

    def _inverse(self, baseline_real, target_real):
        return 2 * self.limit_meters * math.sqrt(baseline_real / target_real)


class TimeLinearLaw(ScaleLaw):
    """
    Radius proportional to the distance in years from the reference year.

    Both real values are year distances (absolute, in years), the baseline
    one must be non-zero.
    """

    name = "time_linear"

    def _scale(self, baseline_real, map_diameter):
        return (map_diameter / 2) / baseline_real

    def _radius(self, baseline_real, map_diameter, target_real):
        return target_real * self._scale(baseline_real, map_diameter)

    def _inverse(self, baseline_real, target_real):
        return 2 * self.limit_meters * (baseline_real / target_real)


class DirectDistanceLaw(ScaleLaw):
    """
    Baseline is a diameter, the target is a distance to the reference point.

    The target value is already a radius, so it is not halved.
    """

    name = "direct_distance"

    def _scale(self, baseline_real, map_diameter):
        return map_diameter / baseline_real

    def _radius(self, baseline_real, map_diameter, target_real):
        return target_real * self._scale(baseline_real, map_diameter)

    def _inverse(self, baseline_real, target_real):
        return self.limit_meters * (baseline_real / target_real)


LINEAR = LinearLaw()
SQUARE_ROOT = SquareRootLaw()
TIME_LINEAR = TimeLinearLaw()
DIRECT_DISTANCE = DirectDistanceLaw()
