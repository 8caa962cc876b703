from typing import List, Literal, Tuple, TypedDict, Union

from scalemap.scale import PLANET_RADIUS_METERS

Lon = float
Lat = float
Coord = Tuple[Lon, Lat]
Ring = List[Coord]

Handle = int

RING_METHODS = ("equirectangular", "spherical")


class Projection(TypedDict):
    radius_meters: float
    too_large: bool
    required_baseline_meters: float | None


class CatalogLabelRef(TypedDict):
    type: Literal["catalog"]
    index: int


class CustomLabelRef(TypedDict):
    type: Literal["custom"]
    name: str


LabelRef = Union[CatalogLabelRef, CustomLabelRef]


class CircleRecord(TypedDict):
    id: str
    color: str
    radius_meters: float
    anchor_angle_deg: float
    label_text: str | None
    label_ref: LabelRef | None


class BaselineInput(TypedDict):
    value: float
    unit: str
    map_diameter_meters: float
    label: LabelRef


class TargetInput(TypedDict):
    value: float
    unit: str
    label: LabelRef


def neutral_projection() -> Projection:
    """Result for anything that cannot be drawn: no baseline, bad input"""
    return {"radius_meters": 0.0, "too_large": False, "required_baseline_meters": None}


class ScaleMapConfig:
    def __init__(
        self,
        mode: str,
        baseline: BaselineInput,
        targets: List[TargetInput],
        reference_coord: Tuple[Lat, Lon] = (0.0, 0.0),
        planet_radius_meters: float = PLANET_RADIUS_METERS,
        ring_segments: int = 64,
        ring_method: str = "equirectangular",
        view_span_degrees: Tuple[float, float] = (60.0, 90.0),
        page_width_points: float = 842.0,
        language: str = "en",
        output_dir: str = "maps",
        palette: List[str] | None = None,
        reference_year: int | None = None,
    ):
        if reference_coord is None:
            raise ValueError("reference_coord is required")
        if reference_coord[0] < -90 or reference_coord[0] > 90:
            raise ValueError("reference_coord[0] must be between -90 and 90")
        if reference_coord[1] < -180 or reference_coord[1] > 180:
            raise ValueError("reference_coord[1] must be between -180 and 180")
        if planet_radius_meters <= 0:
            raise ValueError("planet_radius_meters must be positive")
        if ring_segments < 8:
            raise ValueError("ring_segments must be at least 8")
        if ring_method not in RING_METHODS:
            raise ValueError(f"ring_method must be one of {RING_METHODS}")
        if view_span_degrees[0] <= 0 or view_span_degrees[0] > 180:
            raise ValueError("view_span_degrees[0] must be between 0 and 180")
        if view_span_degrees[1] <= 0 or view_span_degrees[1] > 360:
            raise ValueError("view_span_degrees[1] must be between 0 and 360")
        if page_width_points <= 0:
            raise ValueError("page_width_points must be positive")
        if baseline["map_diameter_meters"] < 0:
            raise ValueError("baseline map_diameter_meters must not be negative")

        self.mode = mode
        self.baseline = baseline
        self.targets = targets
        self.reference_coord = reference_coord
        self.planet_radius_meters = planet_radius_meters
        self.ring_segments = ring_segments
        self.ring_method = ring_method
        self.view_span_degrees = view_span_degrees
        self.page_width_points = page_width_points
        self.language = language
        self.output_dir = output_dir
        self.palette = palette or [
            "#1e5fff",
            "#17a061",
            "#ff8c00",
            "#c0267d",
            "#7b3fe4",
            "#d62728",
        ]
        self.reference_year = reference_year
