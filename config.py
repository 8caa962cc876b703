from scalemap.project_types import ScaleMapConfig

CONFIG: ScaleMapConfig = ScaleMapConfig(
    mode="diameter",
    baseline={
        "value": 12742,
        "unit": "km",
        "map_diameter_meters": 1_000_000,
        "label": {"type": "catalog", "index": 0},  # Earth
    },
    targets=[
        {"value": 3474.8, "unit": "km", "label": {"type": "catalog", "index": 1}},
        {"value": 6779, "unit": "km", "label": {"type": "catalog", "index": 3}},
        {"value": 139820, "unit": "km", "label": {"type": "catalog", "index": 4}},
        {"value": 1_392_700, "unit": "km", "label": {"type": "catalog", "index": 2}},
    ],
    reference_coord=(50.45, 30.52),  # (Latitude, Longitude)
    view_span_degrees=(30.0, 50.0),  # (Latitude span, Longitude span)
    language="en",
)
