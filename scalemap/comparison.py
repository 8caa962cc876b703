import math
from typing import TypedDict, Union

from scalemap.logger import logger
from scalemap.project_types import LabelRef, Projection, neutral_projection
from scalemap.registry import CircleRegistry
from scalemap.scale import is_within_limit
from scalemap.session import MODE_UNIT_KINDS, BaselineSession, HistorySession
from scalemap.units import to_base

Label = Union[LabelRef, str, None]

HISTORY_UNIT = "year"


class ComparisonResult(TypedDict):
    circle_id: str | None
    projection: Projection


class Comparison:
    """
    Object 1 / Object 2 flow for one quantity mode.

    Values come in as (value, unit) pairs and are converted to the mode's
    base unit before reaching the session. History comparisons take signed
    calendar years.
    """

    def __init__(self, session: BaselineSession, registry: CircleRegistry):
        self.session = session
        self.registry = registry
        self.unit_kind = MODE_UNIT_KINDS[session.mode]
        self.baseline_id: str | None = None

    @property
    def mode_name(self) -> str:
        return self.session.mode.value

    def _to_real(self, value: float, unit: str) -> float:
        if isinstance(self.session, HistorySession):
            # Calendar years only; kyr/Myr durations are not dates
            if unit != HISTORY_UNIT:
                return math.nan
            year = to_base(value, unit, self.unit_kind)
            if not math.isfinite(year):
                return year
            return self.session.years_from_reference(year)
        return to_base(value, unit, self.unit_kind)

    def _upsert(self, circle_id: str | None, color: str, radius: float, label: Label) -> str:
        if isinstance(label, str):
            return self.registry.upsert(circle_id, color, radius, label_text=label)
        return self.registry.upsert(circle_id, color, radius, label_ref=label)

    def set_object1(
        self,
        value: float,
        unit: str,
        map_diameter_meters: float,
        color: str,
        label: Label = None,
    ) -> str | None:
        """Fix the baseline and draw its circle; returns the circle id if drawn"""
        real = self._to_real(value, unit)
        scale = self.session.set_baseline(real, map_diameter_meters)
        radius = map_diameter_meters / 2 if scale is not None else 0.0
        if radius <= 0:
            # Invalid or empty baseline: the old circle goes with it
            self._drop_baseline()
            return None

        self.baseline_id = self._upsert(self.baseline_id, color, radius, label)
        if not is_within_limit(radius, self.registry.projector.limit_meters):
            # Scale stays valid, the circle is stored but would wrap past the antipode
            logger.warning(
                f"[{self.mode_name}] baseline circle of {map_diameter_meters:.0f}m is larger than the globe, not drawn"
            )
            return None

        logger.info(
            f"[{self.mode_name}] baseline {value} {unit} -> {map_diameter_meters}m circle (scale {scale:.6g})"
        )
        return self.baseline_id

    def add_object2(
        self, value: float, unit: str, color: str, label: Label = None
    ) -> ComparisonResult:
        real = self._to_real(value, unit)
        if not math.isfinite(real):
            logger.warning(f"[{self.mode_name}] cannot convert {value!r} {unit!r}")
            return {"circle_id": None, "projection": neutral_projection()}

        projection = self.session.project(real)
        circle_id = None
        if projection["too_large"]:
            required = projection["required_baseline_meters"]
            logger.info(
                f"[{self.mode_name}] {value} {unit} does not fit on the globe"
                + (f", a baseline of {required:.3f}m would" if required is not None else "")
            )
        elif projection["radius_meters"] > 0:
            circle_id = self._upsert(None, color, projection["radius_meters"], label)

        return {"circle_id": circle_id, "projection": projection}

    def _drop_baseline(self) -> None:
        if self.baseline_id is not None:
            self.registry.remove(self.baseline_id)
        self.baseline_id = None

    def reset(self) -> None:
        self.session.reset()
        self._drop_baseline()
