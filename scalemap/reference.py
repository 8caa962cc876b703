import math

from scalemap.events import REFERENCE_POINT_CHANGED, EventBus
from scalemap.logger import logger
from scalemap.project_types import Coord


class ReferencePoint:
    """Current map center that every circle is drawn around"""

    def __init__(self, bus: EventBus, lon: float = 0.0, lat: float = 0.0):
        self._validate(lon, lat)
        self.bus = bus
        self.lon = lon
        self.lat = lat

    @staticmethod
    def _validate(lon: float, lat: float) -> None:
        if not math.isfinite(lon) or not math.isfinite(lat):
            raise ValueError("lon and lat must be finite")
        if lat < -90 or lat > 90:
            raise ValueError("lat must be between -90 and 90")
        if lon < -180 or lon > 180:
            raise ValueError("lon must be between -180 and 180")

    @property
    def coord(self) -> Coord:
        return (self.lon, self.lat)

    def move(self, lon: float, lat: float) -> None:
        """Move the reference point and redraw synchronously through the bus"""
        self._validate(lon, lat)
        if (lon, lat) == self.coord:
            return
        self.lon = lon
        self.lat = lat
        logger.info(f"Reference point moved to ({lon:.4f}, {lat:.4f})")
        self.bus.emit(REFERENCE_POINT_CHANGED, self.coord)
