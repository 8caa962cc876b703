from datetime import datetime
from enum import Enum
from typing import Dict, Iterator

from scalemap.events import SESSION_RESET, EventBus
from scalemap.laws import (
    DIRECT_DISTANCE,
    LINEAR,
    SQUARE_ROOT,
    TIME_LINEAR,
    ScaleLaw,
)
from scalemap.logger import logger
from scalemap.project_types import Projection, neutral_projection
from scalemap.scale import SPHERE_LIMIT


class QuantityMode(Enum):
    DIAMETER = "diameter"
    DISTANCE = "distance"
    MASS = "mass"
    LUMINOSITY = "luminosity"
    AREA = "area"
    POPULATION = "population"
    LINEAR_LENGTH = "linear_length"
    HISTORY = "history"
    MONEY = "money"


MODE_LAWS: Dict[QuantityMode, ScaleLaw] = {
    QuantityMode.DIAMETER: LINEAR,
    QuantityMode.DISTANCE: DIRECT_DISTANCE,
    QuantityMode.MASS: SQUARE_ROOT,
    QuantityMode.LUMINOSITY: SQUARE_ROOT,
    QuantityMode.AREA: SQUARE_ROOT,
    QuantityMode.POPULATION: SQUARE_ROOT,
    QuantityMode.LINEAR_LENGTH: LINEAR,
    QuantityMode.HISTORY: TIME_LINEAR,
    QuantityMode.MONEY: LINEAR,
}

# Unit table used to bring Object 1 / Object 2 values to base units
MODE_UNIT_KINDS: Dict[QuantityMode, str] = {
    QuantityMode.DIAMETER: "length",
    QuantityMode.DISTANCE: "length",
    QuantityMode.MASS: "mass",
    QuantityMode.LUMINOSITY: "luminosity",
    QuantityMode.AREA: "area",
    QuantityMode.POPULATION: "population",
    QuantityMode.LINEAR_LENGTH: "length",
    QuantityMode.HISTORY: "time",
    QuantityMode.MONEY: "money",
}


class BaselineSession:
    """
    Baseline state for one quantity mode.

    Unset -> Baselined on a successful set_baseline, back to Unset on reset()
    or on a failed set_baseline. Only a baselined session projects non-zero
    radii.
    """

    def __init__(self, mode: QuantityMode, law: ScaleLaw | None = None):
        self.mode = mode
        self.law = law or MODE_LAWS[mode]
        self.baseline_real_value: float | None = None
        self.baseline_map_diameter: float | None = None

    @property
    def is_set(self) -> bool:
        return self.baseline_real_value is not None and self.baseline_map_diameter is not None

    @property
    def scale_factor(self) -> float | None:
        if not self.is_set:
            return None
        return self.law.scale_factor(self.baseline_real_value, self.baseline_map_diameter)

    def set_baseline(self, real_value: float, map_diameter_meters: float) -> float | None:
        """Replace the baseline; returns the new scale factor or None if the input is invalid"""
        self.reset()
        scale = self.law.scale_factor(real_value, map_diameter_meters)
        if scale is None:
            logger.warning(
                f"[{self.mode.value}] invalid baseline: real={real_value!r}, map diameter={map_diameter_meters!r}"
            )
            return None

        self.baseline_real_value = float(real_value)
        self.baseline_map_diameter = float(map_diameter_meters)
        logger.debug(f"[{self.mode.value}] baseline set, scale factor {scale:.6g}")
        return scale

    def project(self, target_real_value: float) -> Projection:
        if not self.is_set:
            return neutral_projection()
        return self.law.project(
            self.baseline_real_value, self.baseline_map_diameter, target_real_value
        )

    def reset(self) -> None:
        self.baseline_real_value = None
        self.baseline_map_diameter = None


class HistorySession(BaselineSession):
    """Time-linear session working in signed calendar years around a reference year"""

    def __init__(self, reference_year: int | None = None, law: ScaleLaw | None = None):
        super().__init__(QuantityMode.HISTORY, law)
        self.reference_year = (
            reference_year if reference_year is not None else datetime.now().year
        )

    def years_from_reference(self, year: float) -> float:
        return abs(self.reference_year - year)

    def set_baseline_year(self, year: float, map_diameter_meters: float) -> float | None:
        return self.set_baseline(self.years_from_reference(year), map_diameter_meters)

    def project_year(self, year: float) -> Projection:
        return self.project(self.years_from_reference(year))


class SessionBook:
    """One independent session per quantity mode"""

    def __init__(
        self,
        bus: EventBus | None = None,
        reference_year: int | None = None,
        limit_meters: float = SPHERE_LIMIT,
    ):
        self._sessions: Dict[QuantityMode, BaselineSession] = {}
        self._history = HistorySession(
            reference_year, type(MODE_LAWS[QuantityMode.HISTORY])(limit_meters)
        )
        for mode in QuantityMode:
            if mode is QuantityMode.HISTORY:
                self._sessions[mode] = self._history
            else:
                law = type(MODE_LAWS[mode])(limit_meters)
                self._sessions[mode] = BaselineSession(mode, law)

        if bus is not None:
            bus.connect(SESSION_RESET, self.reset_all)

    def __getitem__(self, mode: QuantityMode) -> BaselineSession:
        return self._sessions[mode]

    def __iter__(self) -> Iterator[BaselineSession]:
        return iter(self._sessions.values())

    def history(self) -> HistorySession:
        return self._history

    def reset_all(self) -> None:
        logger.info("Resetting all baseline sessions")
        for session in self._sessions.values():
            session.reset()
