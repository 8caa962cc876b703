from abc import ABC, abstractmethod
from typing import Dict, List, Literal, NotRequired, Tuple, TypedDict, Union

from reportlab.lib.colors import Color, toColor
from reportlab.pdfgen import canvas
from shapely.geometry import LineString, Point
from tqdm import tqdm

from scalemap.logger import logger
from scalemap.map_dimensions import MapDimensions
from scalemap.project_types import Coord, Handle, Ring

LAND_COLOR = Color(0.95, 0.95, 0.95)


class RingStyle(TypedDict):
    stroke_color: str
    stroke_width: float  # page points
    round_cap: NotRequired[bool]


class PointStyle(TypedDict):
    fill_color: str
    size: float  # page points


class LabelStyle(TypedDict):
    font_color: str
    font_size: float
    offset: NotRequired[Tuple[float, float]]


class DrawOp(TypedDict):
    type: Literal["ring", "point", "label"]
    coords: List[Coord]
    text: str | None
    style: Union[RingStyle, PointStyle, LabelStyle]


class RenderingSurface(ABC):
    """What the circle registry draws on. Any call may raise."""

    @abstractmethod
    def draw_ring(self, points: Ring, style: RingStyle) -> Handle: ...

    @abstractmethod
    def draw_point(self, point: Coord, style: PointStyle) -> Handle: ...

    @abstractmethod
    def draw_label(self, point: Coord, text: str, style: LabelStyle) -> Handle: ...

    @abstractmethod
    def remove(self, handle: Handle) -> None: ...

    @abstractmethod
    def clear_all(self) -> None: ...


def split_at_antimeridian(points: Ring) -> List[Ring]:
    """Split a lon/lat line wherever it wraps across +-180 longitude"""
    parts: List[Ring] = []
    current: Ring = []
    for point in points:
        if current and abs(point[0] - current[-1][0]) > 180:
            parts.append(current)
            current = []
        current.append(point)
    if current:
        parts.append(current)
    return parts


class PdfSurface(RenderingSurface):
    """
    Keeps a display list of drawn items, written to a PDF page on save().

    A PDF page cannot be edited once painted, so remove()/clear_all() only
    touch the display list.
    """

    def __init__(self, map_dimensions: MapDimensions):
        self.map_dimensions = map_dimensions
        self.transform_coords = map_dimensions.transform_coords
        self.bounds = map_dimensions.bounds_polygon()
        self.ops: Dict[Handle, DrawOp] = {}
        self._next_handle: Handle = 1

    def _add(self, op: DrawOp) -> Handle:
        handle = self._next_handle
        self._next_handle += 1
        self.ops[handle] = op
        return handle

    def draw_ring(self, points: Ring, style: RingStyle) -> Handle:
        if len(points) < 2:
            raise ValueError("A ring needs at least two points")
        return self._add({"type": "ring", "coords": list(points), "text": None, "style": style})

    def draw_point(self, point: Coord, style: PointStyle) -> Handle:
        return self._add({"type": "point", "coords": [point], "text": None, "style": style})

    def draw_label(self, point: Coord, text: str, style: LabelStyle) -> Handle:
        return self._add({"type": "label", "coords": [point], "text": text, "style": style})

    def remove(self, handle: Handle) -> None:
        self.ops.pop(handle, None)

    def clear_all(self) -> None:
        self.ops.clear()

    def save(self, output_path: str) -> None:
        c = canvas.Canvas(
            output_path,
            pagesize=(self.map_dimensions.width_points, self.map_dimensions.height_points),
        )
        c.setFillColor(LAND_COLOR)
        c.rect(
            0,
            0,
            self.map_dimensions.width_points,
            self.map_dimensions.height_points,
            fill=1,
            stroke=0,
        )
        self.render(c)
        c.save()
        logger.info(f"Wrote {len(self.ops)} items to {output_path}")

    def render(self, c: canvas.Canvas) -> None:
        # Rings first so points and labels stay on top
        ordered = sorted(self.ops.items(), key=lambda item: item[1]["type"] != "ring")
        for handle, op in tqdm(ordered, desc="Drawing circles"):
            try:
                if op["type"] == "ring":
                    self._render_ring(c, op)
                elif op["type"] == "point":
                    self._render_point(c, op)
                else:
                    self._render_label(c, op)
            except Exception as e:
                logger.warning(f"Failed to render {op['type']} {handle}: {e}")

    def _render_ring(self, c: canvas.Canvas, op: DrawOp) -> None:
        style: RingStyle = op["style"]  # type: ignore[assignment]
        for part in split_at_antimeridian(op["coords"]):
            if len(part) < 2:
                continue
            if not LineString(part).intersects(self.bounds):
                continue

            p = c.beginPath()
            x, y = self.transform_coords(*part[0])
            p.moveTo(x, y)
            for coord in part[1:]:
                x, y = self.transform_coords(*coord)
                p.lineTo(x, y)

            c.setStrokeColor(toColor(style["stroke_color"]))
            c.setLineWidth(style["stroke_width"])
            if style.get("round_cap", False):
                c.setLineCap(1)
                c.setLineJoin(1)
            c.drawPath(p, fill=0, stroke=1)

    def _render_point(self, c: canvas.Canvas, op: DrawOp) -> None:
        style: PointStyle = op["style"]  # type: ignore[assignment]
        if not Point(op["coords"][0]).intersects(self.bounds):
            return
        x, y = self.transform_coords(*op["coords"][0])
        c.setFillColor(toColor(style["fill_color"]))
        c.circle(x, y, style["size"] / 2, fill=1, stroke=0)

    def _render_label(self, c: canvas.Canvas, op: DrawOp) -> None:
        style: LabelStyle = op["style"]  # type: ignore[assignment]
        if not op["text"] or not Point(op["coords"][0]).intersects(self.bounds):
            return
        x, y = self.transform_coords(*op["coords"][0])
        dx, dy = style.get("offset", (4.0, 0.0))
        c.setFont("Helvetica", style["font_size"])
        c.setFillColor(toColor(style["font_color"]))
        c.drawString(x + dx, y + dy, op["text"])
