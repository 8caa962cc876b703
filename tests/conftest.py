from typing import Dict, List, Tuple

import pytest

from scalemap.events import EventBus
from scalemap.geodesic import GeodesicProjector
from scalemap.names import NameResolver
from scalemap.reference import ReferencePoint
from scalemap.registry import CircleRegistry
from scalemap.rendering import RenderingSurface


class RecordingSurface(RenderingSurface):
    """In-memory surface that remembers what is currently drawn."""

    def __init__(self):
        self.items: Dict[int, Tuple[str, tuple]] = {}
        self.clear_calls = 0
        self._next = 1

    def _add(self, kind: str, payload: tuple) -> int:
        handle = self._next
        self._next += 1
        self.items[handle] = (kind, payload)
        return handle

    def draw_ring(self, points, style):
        return self._add("ring", (list(points), style))

    def draw_point(self, point, style):
        return self._add("point", (point, style))

    def draw_label(self, point, text, style):
        return self._add("label", (point, text, style))

    def remove(self, handle):
        self.items.pop(handle, None)

    def clear_all(self):
        self.items.clear()
        self.clear_calls += 1

    def of_kind(self, kind: str) -> List[tuple]:
        return [payload for k, payload in self.items.values() if k == kind]

    def label_texts(self) -> List[str]:
        return [payload[1] for payload in self.of_kind("label")]


class RingFailingSurface(RecordingSurface):
    def draw_ring(self, points, style):
        raise RuntimeError("out of vertex buffers")


class LabelFailingSurface(RecordingSurface):
    def draw_label(self, point, text, style):
        raise RuntimeError("font atlas full")


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def reference(bus):
    return ReferencePoint(bus, lon=0.0, lat=0.0)


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def projector():
    return GeodesicProjector()


@pytest.fixture
def registry(surface, projector, reference, bus):
    return CircleRegistry(surface, projector, reference, NameResolver(), bus)
