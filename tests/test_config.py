import pytest

from config import CONFIG
from scalemap.map_dimensions import MapDimensions
from scalemap.project_types import ScaleMapConfig
from scalemap.session import QuantityMode

BASELINE = {
    "value": 1,
    "unit": "km",
    "map_diameter_meters": 1000,
    "label": {"type": "custom", "name": "Home"},
}


class TestScaleMapConfig:
    def test_defaults(self):
        config = ScaleMapConfig(mode="diameter", baseline=BASELINE, targets=[])
        assert config.ring_segments == 64
        assert config.ring_method == "equirectangular"
        assert config.palette

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"reference_coord": (91.0, 0.0)},
            {"reference_coord": (0.0, -181.0)},
            {"planet_radius_meters": 0},
            {"ring_segments": 4},
            {"ring_method": "mercator"},
            {"view_span_degrees": (0.0, 90.0)},
            {"view_span_degrees": (60.0, 400.0)},
            {"page_width_points": -1},
        ],
    )
    def test_rejects_bad_values(self, kwargs):
        with pytest.raises(ValueError):
            ScaleMapConfig(mode="diameter", baseline=BASELINE, targets=[], **kwargs)

    def test_rejects_negative_map_diameter(self):
        baseline = dict(BASELINE, map_diameter_meters=-5)
        with pytest.raises(ValueError):
            ScaleMapConfig(mode="diameter", baseline=baseline, targets=[])

    def test_shipped_config(self):
        assert QuantityMode(CONFIG.mode) is QuantityMode.DIAMETER
        assert CONFIG.targets


class TestMapDimensions:
    def test_around_center(self):
        dims = MapDimensions.around((30.0, 50.0), (20.0, 40.0), 800.0)
        assert (dims.min_lon, dims.max_lon) == (10.0, 50.0)
        assert (dims.min_lat, dims.max_lat) == (40.0, 60.0)
        assert dims.width_points == 800.0

    def test_around_clamps_to_globe(self):
        dims = MapDimensions.around((170.0, 80.0), (40.0, 40.0))
        assert dims.max_lat == 90.0
        assert dims.max_lon == 180.0

    def test_transform_corners(self):
        dims = MapDimensions.around((0.0, 0.0), (60.0, 90.0), 600.0)
        assert dims.transform_coords(dims.min_lon, dims.min_lat) == (0.0, 0.0)
        x, y = dims.transform_coords(dims.max_lon, dims.max_lat)
        assert x == pytest.approx(dims.width_points)
        assert y == pytest.approx(dims.height_points)

    def test_equatorial_aspect_ratio(self):
        dims = MapDimensions.around((0.0, 0.0), (60.0, 90.0), 600.0)
        assert dims.height_points == pytest.approx(400.0)

    def test_bounds_polygon(self):
        dims = MapDimensions.around((0.0, 0.0), (60.0, 90.0))
        assert dims.bounds_polygon().bounds == (-45.0, -30.0, 45.0, 30.0)
