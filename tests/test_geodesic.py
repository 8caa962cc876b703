import math

import pytest

from scalemap.geodesic import GeodesicProjector, hash_color, normalize_lon
from scalemap.scale import PLANET_RADIUS_METERS, SPHERE_LIMIT


def great_circle_distance(a, b, radius=PLANET_RADIUS_METERS):
    lon1, lat1 = map(math.radians, a)
    lon2, lat2 = map(math.radians, b)
    h = (
        math.sin((lat2 - lat1) / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin((lon2 - lon1) / 2) ** 2
    )
    return 2 * radius * math.asin(math.sqrt(h))


class TestHelpers:
    @pytest.mark.parametrize(
        "lon, expected",
        [(0, 0), (179.5, 179.5), (180, -180), (190, -170), (-190, 170), (540, -180)],
    )
    def test_normalize_lon(self, lon, expected):
        assert normalize_lon(lon) == pytest.approx(expected)

    def test_hash_color(self):
        assert hash_color("") == 0
        assert hash_color("a") == 97
        assert hash_color("ab") == 97 * 31 + 98

    def test_hash_color_wraps_to_32_bits(self):
        value = hash_color("rgba(255,0,0,0.8)" * 4)
        assert 0 <= value <= 2**31


class TestRing:
    def test_closed_fixed_length(self, projector):
        ring = projector.ring((30.5, 50.4), 250_000)
        assert len(ring) == 65
        assert ring[0] == ring[-1]

    def test_segments_setting(self):
        projector = GeodesicProjector(segments=16)
        assert len(projector.ring((0, 0), 1000)) == 17

    @pytest.mark.parametrize("radius", [0, -10, math.nan, math.inf])
    def test_no_ring_for_invalid_radius(self, projector, radius):
        assert projector.ring((0, 0), radius) == []

    def test_equirectangular_at_equator(self, projector):
        one_degree = projector.meters_per_degree_lat
        ring = projector.ring((0.0, 0.0), one_degree)
        # North first, then clockwise: east at a quarter turn
        assert ring[0] == pytest.approx((0.0, 1.0))
        assert ring[16][0] == pytest.approx(1.0)
        assert ring[16][1] == pytest.approx(0.0, abs=1e-9)
        assert ring[32][1] == pytest.approx(-1.0)
        assert ring[48][0] == pytest.approx(-1.0)

    def test_equirectangular_widens_with_latitude(self, projector):
        ring = projector.ring((0.0, 60.0), 100_000)
        east = ring[16][0]
        north = ring[0][1] - 60.0
        assert east == pytest.approx(2 * north, rel=1e-9)

    def test_deterministic(self, projector):
        assert projector.ring((12.3, -45.6), 777_000) == projector.ring((12.3, -45.6), 777_000)

    def test_longitudes_stay_in_range(self, projector):
        ring = projector.ring((179.9, 0.0), 500_000)
        assert all(-180 <= lon < 180 for lon, _ in ring)

    def test_latitudes_are_clamped(self, projector):
        ring = projector.ring((0.0, 89.0), 1_000_000)
        assert all(-90 <= lat <= 90 for _, lat in ring)

    def test_spherical_points_sit_on_the_small_circle(self):
        projector = GeodesicProjector(method="spherical")
        center = (30.5, 50.4)
        for point in projector.ring(center, 3_000_000)[:-1]:
            assert great_circle_distance(center, point) == pytest.approx(3_000_000, rel=1e-6)

    def test_unknown_method(self):
        with pytest.raises(ValueError):
            GeodesicProjector(method="mercator")


class TestAntipode:
    def test_is_antipodal(self, projector):
        assert projector.is_antipodal(SPHERE_LIMIT)
        assert not projector.is_antipodal(SPHERE_LIMIT - 10)

    def test_antipode(self, projector):
        assert projector.antipode((30.0, 50.0)) == (-150.0, -50.0)
        assert projector.antipode((-120.0, 0.0)) == (60.0, -0.0)


class TestPickAnchor:
    def test_bucket_shift(self, projector):
        ring = projector.ring((0.0, 0.0), 100_000)
        # Highest point is index 0; "" -> bucket 0 (24 deg), "a" -> 1 (48), "ab" -> 3 (96)
        assert projector.pick_anchor(ring, "") == 4
        assert projector.pick_anchor(ring, "a") == 9
        assert projector.pick_anchor(ring, "ab") == 17

    def test_uses_view_projection(self, projector):
        ring = projector.ring((0.0, 0.0), 100_000)

        def flipped(lon, lat):
            return (lon, -lat)

        # Southernmost point (index 32) is now on top
        assert projector.pick_anchor(ring, "", view=flipped) == 36

    def test_deterministic(self, projector):
        ring = projector.ring((10.0, 20.0), 400_000)
        picks = {projector.pick_anchor(ring, "#17a061") for _ in range(10)}
        assert len(picks) == 1

    def test_empty_ring(self, projector):
        assert projector.pick_anchor([], "#fff") == 0

    def test_anchor_angle(self, projector):
        assert projector.anchor_angle_deg(0) == 0.0
        assert projector.anchor_angle_deg(16) == 90.0
        assert projector.anchor_angle_deg(64) == 0.0
