import math
from typing import Callable, Tuple

from scalemap.project_types import RING_METHODS, Coord, Ring
from scalemap.scale import PLANET_RADIUS_METERS, meters_per_degree_lon, sphere_limit

# (lon, lat) -> (x, y) in view space, larger y is higher on screen
ViewProjection = Callable[[float, float], Tuple[float, float]]

LABEL_BUCKET_DEG = 24
LABEL_BUCKETS = 6

# Angular distance from pi below which a circle collapses onto the antipode
ANTIPODE_EPS_RAD = 1e-8


def normalize_lon(lon: float) -> float:
    """Wrap a longitude into [-180, 180)"""
    return ((lon + 180.0) % 360.0) - 180.0


def hash_color(key: str) -> int:
    """31-multiplier string hash on 32-bit signed arithmetic, returned as abs value"""
    h = 0
    for ch in key or "":
        h = (h * 31 + ord(ch)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h)


def _default_view(lon: float, lat: float) -> Tuple[float, float]:
    return (lon, lat)


class GeodesicProjector:
    def __init__(
        self,
        planet_radius_meters: float = PLANET_RADIUS_METERS,
        segments: int = 64,
        method: str = "equirectangular",
    ):
        if method not in RING_METHODS:
            raise ValueError(f"method must be one of {RING_METHODS}")
        self.planet_radius_meters = planet_radius_meters
        self.segments = segments
        self.method = method
        self.limit_meters = sphere_limit(planet_radius_meters)
        self.meters_per_degree_lat = planet_radius_meters * (math.pi / 180)

    def ring(self, center: Coord, radius_meters: float) -> Ring:
        """
        Closed ring of `segments + 1` points around `center`.

        Points run clockwise from north; the last point repeats the first.
        Returns an empty ring for a non-positive or non-finite radius.
        """
        if not math.isfinite(radius_meters) or radius_meters <= 0:
            return []

        lon0, lat0 = center
        if self.method == "spherical":
            point_at = self._spherical_point
        else:
            point_at = self._equirectangular_point

        points: Ring = []
        for i in range(self.segments):
            theta = (i / self.segments) * 2 * math.pi
            points.append(point_at(lon0, lat0, radius_meters, theta))
        points.append(points[0])
        return points

    def _equirectangular_point(
        self, lon0: float, lat0: float, radius_meters: float, theta: float
    ) -> Coord:
        per_degree_lon = max(
            abs(meters_per_degree_lon(lat0, self.planet_radius_meters)), 1e-9
        )
        lat = lat0 + radius_meters * math.cos(theta) / self.meters_per_degree_lat
        lon = lon0 + radius_meters * math.sin(theta) / per_degree_lon
        return (normalize_lon(lon), min(max(lat, -90.0), 90.0))

    def _spherical_point(
        self, lon0: float, lat0: float, radius_meters: float, theta: float
    ) -> Coord:
        # Forward azimuth on the sphere, exact up to the antipode
        phi1 = math.radians(lat0)
        lambda1 = math.radians(lon0)
        delta = min(radius_meters / self.planet_radius_meters, math.pi)

        sin_phi2 = math.sin(phi1) * math.cos(delta) + math.cos(phi1) * math.sin(
            delta
        ) * math.cos(theta)
        phi2 = math.asin(min(max(sin_phi2, -1.0), 1.0))
        y = math.sin(theta) * math.sin(delta) * math.cos(phi1)
        x = math.cos(delta) - math.sin(phi1) * math.sin(phi2)
        lambda2 = lambda1 + math.atan2(y, x)
        return (normalize_lon(math.degrees(lambda2)), math.degrees(phi2))

    def is_antipodal(self, radius_meters: float) -> bool:
        """True if the circle has collapsed onto the antipode of its center"""
        delta = radius_meters / self.planet_radius_meters
        return math.pi - delta <= ANTIPODE_EPS_RAD

    def antipode(self, center: Coord) -> Coord:
        lon, lat = center
        return (normalize_lon(lon + 180.0), -lat)

    def pick_anchor(
        self, ring: Ring, color_key: str, view: ViewProjection | None = None
    ) -> int:
        """
        Index of the ring point hosting the label.

        Starts from the point highest in the view, then rotates by
        24 deg * (bucket + 1), bucket = hash(color_key) % 6.
        """
        if not ring:
            return 0
        project = view or _default_view

        best_idx = 0
        best_y = -math.inf
        for i, (lon, lat) in enumerate(ring):
            _, y = project(lon, lat)
            if y > best_y:
                best_y = y
                best_idx = i

        n = len(ring)
        bucket = hash_color(color_key) % LABEL_BUCKETS
        deg_shift = LABEL_BUCKET_DEG * (bucket + 1)
        step = max(1, math.floor(n * (deg_shift / 360) + 0.5))
        return (best_idx + step) % n

    def anchor_angle_deg(self, index: int) -> float:
        """Bearing from the center to ring point `index`"""
        return (360.0 * index / self.segments) % 360.0
