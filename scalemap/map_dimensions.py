from typing import Tuple

from shapely.geometry import Polygon, box

from scalemap.logger import logger
from scalemap.project_types import Coord
from scalemap.scale import METERS_PER_DEGREE_LAT, meters_per_degree_lon


class MapDimensions:
    """Page window over a lon/lat box, with the lon/lat -> page point transform"""

    def __init__(
        self,
        bottom_left_coord: Tuple[float, float],
        top_right_coord: Tuple[float, float],
        page_width_points: float = 842.0,
    ):
        self.min_lat: float = bottom_left_coord[0]
        self.min_lon: float = bottom_left_coord[1]
        self.max_lat: float = top_right_coord[0]
        self.max_lon: float = top_right_coord[1]

        # Aspect ratio taken at the average latitude, clamped so polar views stay finite
        avg_lat = (self.min_lat + self.max_lat) / 2
        self.meters_per_degree_lon_at_avg_lat: float = max(
            meters_per_degree_lon(avg_lat), METERS_PER_DEGREE_LAT * 0.05
        )

        self.width_meters: float = (
            self.max_lon - self.min_lon
        ) * self.meters_per_degree_lon_at_avg_lat
        self.height_meters: float = (
            self.max_lat - self.min_lat
        ) * METERS_PER_DEGREE_LAT

        self.width_points: float = page_width_points
        self.height_points: float = page_width_points * (
            self.height_meters / self.width_meters
        )

        logger.info(
            f"View dimensions: {self.width_meters / 1000:.0f}km x {self.height_meters / 1000:.0f}km"
        )
        logger.info(
            f"PDF dimensions: {self.width_points:.2f}pt x {self.height_points:.2f}pt"
        )

    @classmethod
    def around(
        cls,
        center: Coord,
        span_degrees: Tuple[float, float],
        page_width_points: float = 842.0,
    ) -> "MapDimensions":
        """Window of (lat span, lon span) degrees centered on a (lon, lat) point"""
        lon, lat = center
        half_lat = span_degrees[0] / 2
        half_lon = span_degrees[1] / 2
        bottom_left = (max(lat - half_lat, -90.0), max(lon - half_lon, -180.0))
        top_right = (min(lat + half_lat, 90.0), min(lon + half_lon, 180.0))
        return cls(bottom_left, top_right, page_width_points)

    def transform_coords(self, lon, lat):
        # Convert lon/lat to page points, origin at the bottom left
        x = (lon - self.min_lon) / (self.max_lon - self.min_lon) * self.width_points
        y = (lat - self.min_lat) / (self.max_lat - self.min_lat) * self.height_points
        return (x, y)

    def bounds_polygon(self) -> Polygon:
        return box(self.min_lon, self.min_lat, self.max_lon, self.max_lat)
