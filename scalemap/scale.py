import math

# Constants for the default body (mean Earth radius)
PLANET_RADIUS_METERS = 6371008.8
METERS_PER_DEGREE_LAT = PLANET_RADIUS_METERS * (math.pi / 180)  # ~111km per degree

# Largest drawable radius: a circle this size reaches the antipode
SPHERE_LIMIT: float = math.pi * PLANET_RADIUS_METERS
LIMIT_TOLERANCE_METERS: float = 1.0


def sphere_limit(planet_radius_meters: float = PLANET_RADIUS_METERS) -> float:
    """Antipodal radius for a sphere of the given radius"""
    return math.pi * planet_radius_meters


def is_within_limit(
    radius_meters: float, limit_meters: float = SPHERE_LIMIT
) -> bool:
    """True if a circle of this radius can be drawn without passing the antipode"""
    if not math.isfinite(radius_meters):
        return False
    return radius_meters < limit_meters + LIMIT_TOLERANCE_METERS


def meters_per_degree_lon(
    lat: float, planet_radius_meters: float = PLANET_RADIUS_METERS
) -> float:
    """Calculate meters per degree of longitude at a given latitude"""
    return planet_radius_meters * math.cos(math.radians(lat)) * (math.pi / 180)
