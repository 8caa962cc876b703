import math
from typing import Dict, Iterator, List

from scalemap.events import (
    LANGUAGE_CHANGED,
    REFERENCE_POINT_CHANGED,
    SESSION_RESET,
    EventBus,
)
from scalemap.geodesic import GeodesicProjector, ViewProjection
from scalemap.logger import logger
from scalemap.names import NameResolver
from scalemap.project_types import CircleRecord, Coord, Handle, LabelRef
from scalemap.reference import ReferencePoint
from scalemap.rendering import LabelStyle, PointStyle, RenderingSurface, RingStyle
from scalemap.scale import is_within_limit

HALO_STYLE: RingStyle = {
    "stroke_color": "#999999",
    "stroke_width": 3.5,
    "round_cap": True,
}

LABEL_STYLE: LabelStyle = {
    "font_color": "#111111",
    "font_size": 11,
    "offset": (4.0, 0.0),
}


def ring_style(color: str) -> RingStyle:
    return {"stroke_color": color, "stroke_width": 2.5, "round_cap": True}


def dot_style(color: str) -> PointStyle:
    return {"fill_color": color, "size": 5.0}


class CircleRegistry:
    """
    Drawn circles keyed by id.

    Records hold domain data only; surface handles are tracked alongside in
    `_handles`/`_label_handles`. Surface failures are logged and leave the
    record stored but undrawn.
    """

    def __init__(
        self,
        surface: RenderingSurface,
        projector: GeodesicProjector,
        reference: ReferencePoint,
        names: NameResolver | None = None,
        bus: EventBus | None = None,
        language: str = "en",
        view: ViewProjection | None = None,
    ):
        self.surface = surface
        self.projector = projector
        self.reference = reference
        self.names = names or NameResolver()
        self.language = language
        self.view = view

        self._records: Dict[str, CircleRecord] = {}
        self._handles: Dict[str, List[Handle]] = {}
        self._label_handles: Dict[str, Handle] = {}
        self._anchors: Dict[str, Coord] = {}
        self._seq = 0

        if bus is not None:
            bus.connect(REFERENCE_POINT_CHANGED, self._on_reference_changed)
            bus.connect(LANGUAGE_CHANGED, self.refresh_labels)
            bus.connect(SESSION_RESET, self.clear)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, circle_id: str) -> bool:
        return circle_id in self._records

    def get(self, circle_id: str) -> CircleRecord | None:
        return self._records.get(circle_id)

    def records(self) -> Iterator[CircleRecord]:
        return iter(list(self._records.values()))

    def is_drawn(self, circle_id: str) -> bool:
        return bool(self._handles.get(circle_id))

    def _next_id(self) -> str:
        self._seq += 1
        return f"c_{self._seq}"

    def upsert(
        self,
        circle_id: str | None,
        color: str,
        radius_meters: float,
        label_text: str | None = None,
        label_ref: LabelRef | None = None,
    ) -> str:
        """Store a circle and draw it around the current reference point"""
        if circle_id is None:
            circle_id = self._next_id()

        previous = self._records.get(circle_id)
        if previous is not None:
            self._erase(circle_id)

        if label_ref is None and label_text is None and previous is not None:
            label_ref = previous["label_ref"]
            label_text = previous["label_text"]
        elif label_ref is not None and label_text is None:
            label_text = self.names.resolve(label_ref, self.language) or None

        record: CircleRecord = {
            "id": circle_id,
            "color": color,
            "radius_meters": radius_meters,
            "anchor_angle_deg": previous["anchor_angle_deg"] if previous else 0.0,
            "label_text": label_text,
            "label_ref": label_ref,
        }
        self._records[circle_id] = record
        self._draw(record)
        return circle_id

    def set_label_text(self, circle_id: str, text: str | None) -> None:
        """Explicit text; drops any reference so language changes leave it alone"""
        record = self._records.get(circle_id)
        if record is None:
            return
        record["label_text"] = text
        record["label_ref"] = None
        self._draw_label(circle_id)

    def set_label_by_reference(self, circle_id: str, ref: LabelRef | None) -> None:
        record = self._records.get(circle_id)
        if record is None:
            return
        record["label_ref"] = ref
        record["label_text"] = self.names.resolve(ref, self.language) or None
        self._draw_label(circle_id)

    def refresh_labels(self, language: str | None = None) -> None:
        """Re-resolve every reference-backed label, geometry is untouched"""
        if language:
            self.language = language
        for record in self._records.values():
            if record["label_ref"] is None:
                continue
            record["label_text"] = (
                self.names.resolve(record["label_ref"], self.language) or None
            )
            self._draw_label(record["id"])

    def redraw_all(self) -> None:
        """Re-project every stored circle around the current reference point"""
        logger.info(f"Redrawing {len(self._records)} circles")
        for record in list(self._records.values()):
            self._erase(record["id"])
            self._draw(record)

    def remove(self, circle_id: str) -> None:
        """Forget a circle and erase its drawing; unknown ids are ignored"""
        if circle_id not in self._records:
            return
        self._erase(circle_id)
        del self._records[circle_id]

    def clear(self) -> None:
        try:
            self.surface.clear_all()
        except Exception as e:
            logger.warning(f"Failed to clear rendering surface: {e}")
        self._records.clear()
        self._handles.clear()
        self._label_handles.clear()
        self._anchors.clear()
        logger.info("Circle registry cleared")

    def _on_reference_changed(self, _coord: Coord | None = None) -> None:
        self.redraw_all()

    def _is_drawable(self, radius_meters: float) -> bool:
        return (
            isinstance(radius_meters, (int, float))
            and math.isfinite(radius_meters)
            and radius_meters > 0
            and is_within_limit(radius_meters, self.projector.limit_meters)
        )

    def _draw(self, record: CircleRecord) -> None:
        circle_id = record["id"]
        if not self._is_drawable(record["radius_meters"]):
            logger.debug(f"Circle {circle_id} not drawable: radius {record['radius_meters']!r}")
            return

        center = self.reference.coord
        handles: List[Handle] = []
        self._handles[circle_id] = handles
        try:
            if self.projector.is_antipodal(record["radius_meters"]):
                # Collapsed circle: mark the antipode instead of a ring
                anchor = self.projector.antipode(center)
            else:
                ring = self.projector.ring(center, record["radius_meters"])
                handles.append(self.surface.draw_ring(ring, HALO_STYLE))
                handles.append(self.surface.draw_ring(ring, ring_style(record["color"])))
                index = self.projector.pick_anchor(ring, record["color"], self.view)
                anchor = ring[index]
                record["anchor_angle_deg"] = self.projector.anchor_angle_deg(index)
            handles.append(self.surface.draw_point(anchor, dot_style(record["color"])))
            self._anchors[circle_id] = anchor
            self._draw_label(circle_id)
        except Exception as e:
            logger.warning(f"Failed to draw circle {circle_id}: {e}")
            self._erase(circle_id)

    def _draw_label(self, circle_id: str) -> None:
        self._remove_handle(self._label_handles.pop(circle_id, None))
        record = self._records[circle_id]
        anchor = self._anchors.get(circle_id)
        if anchor is None or not record["label_text"]:
            return
        try:
            self._label_handles[circle_id] = self.surface.draw_label(
                anchor, record["label_text"], LABEL_STYLE
            )
        except Exception as e:
            logger.warning(f"Failed to draw label for circle {circle_id}: {e}")

    def _erase(self, circle_id: str) -> None:
        for handle in self._handles.pop(circle_id, []):
            self._remove_handle(handle)
        self._remove_handle(self._label_handles.pop(circle_id, None))
        self._anchors.pop(circle_id, None)

    def _remove_handle(self, handle: Handle | None) -> None:
        if handle is None:
            return
        try:
            self.surface.remove(handle)
        except Exception as e:
            logger.warning(f"Failed to remove surface item {handle}: {e}")
