"""Typed records for a planar geometry figure."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple, Union

PointId = str
Number = Union[int, float]
Vec2 = Tuple[float, float]


@dataclass
class Point:
    """Named point in the logical plane.

    ``label`` and ``label_offset_x``/``label_offset_y`` stay ``None`` until the
    source sets them (or, for the offsets, a label nudge touches them), so
    serialisation can reproduce the input exactly. A point without a label is
    drawn with its id.
    """

    id: PointId
    label: Optional[str]
    x: Number
    y: Number
    label_offset_x: Optional[Number] = None
    label_offset_y: Optional[Number] = None

    @property
    def position(self) -> Vec2:
        return (float(self.x), float(self.y))

    @property
    def label_offset(self) -> Vec2:
        return (float(self.label_offset_x or 0), float(self.label_offset_y or 0))

    @property
    def display_label(self) -> str:
        return self.label if self.label is not None else self.id


@dataclass
class Line:
    id: str
    p1: PointId
    p2: PointId
    style: Optional[str] = None
    is_ray: Optional[bool] = None

    def other_end(self, point_id: PointId) -> Optional[PointId]:
        if self.p1 == point_id:
            return self.p2
        if self.p2 == point_id:
            return self.p1
        return None


@dataclass
class Circle:
    id: str
    center_id: PointId
    radius: Optional[Number] = None
    point_on_circle_id: Optional[PointId] = None


@dataclass
class AngleMarker:
    id: str
    p1: PointId
    vertex: PointId
    p2: PointId
    is_right: Optional[bool] = None
    is_equal: Optional[bool] = None


@dataclass
class EqualSegment:
    id: str
    p1: PointId
    p2: PointId
    count: int = 1


@dataclass(frozen=True)
class LineSegment:
    p1: PointId
    p2: PointId


@dataclass(frozen=True)
class ArcSegment:
    p1: PointId
    p2: PointId
    center_id: Optional[PointId] = None
    is_large_arc: Optional[bool] = None
    is_clockwise: Optional[bool] = None


BoundarySegment = Union[LineSegment, ArcSegment]


@dataclass
class HatchedArea:
    id: str
    point_ids: List[PointId] = field(default_factory=list)
    segments: Optional[List[BoundarySegment]] = None
    label: Optional[str] = None
    is_special: Optional[bool] = None

    def boundary(self) -> List[BoundarySegment]:
        """Return the explicit boundary, or the closed polygon through ``point_ids``."""

        if self.segments:
            return list(self.segments)
        ids = self.point_ids
        if len(ids) < 2:
            return []
        return [LineSegment(a, ids[(idx + 1) % len(ids)]) for idx, a in enumerate(ids)]


@dataclass
class GeometryDocument:
    points: List[Point] = field(default_factory=list)
    lines: List[Line] = field(default_factory=list)
    circles: List[Circle] = field(default_factory=list)
    angles: List[AngleMarker] = field(default_factory=list)
    equal_segments: List[EqualSegment] = field(default_factory=list)
    hatched_areas: Optional[List[HatchedArea]] = None

    def find_point(self, point_id: Optional[PointId]) -> Optional[Point]:
        if point_id is None:
            return None
        for point in self.points:
            if point.id == point_id:
                return point
        return None

    def point_map(self) -> Dict[PointId, Point]:
        """Map ids to points; the first declaration of a repeated id wins."""

        mapping: Dict[PointId, Point] = {}
        for point in self.points:
            mapping.setdefault(point.id, point)
        return mapping

    def incident_lines(self, point_id: PointId) -> Iterator[Line]:
        for line in self.lines:
            if line.p1 == point_id or line.p2 == point_id:
                yield line

    def iter_hatched_areas(self) -> List[HatchedArea]:
        return list(self.hatched_areas or [])


def distance(a: Vec2, b: Vec2) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1])


def circle_radius(
    circle: Circle,
    points: Dict[PointId, Point],
    default_radius: float,
) -> float:
    """Resolve the logical radius of ``circle``.

    A point on the circumference wins over an explicit radius. When that point
    does not resolve the radius collapses to zero; a missing or zero explicit
    radius falls back to ``default_radius``.
    """

    center = points.get(circle.center_id)
    if circle.point_on_circle_id:
        on_circle = points.get(circle.point_on_circle_id)
        if center is None or on_circle is None:
            return 0.0
        return distance(center.position, on_circle.position)
    return float(circle.radius or default_radius)


__all__ = [
    "PointId",
    "Number",
    "Vec2",
    "Point",
    "Line",
    "Circle",
    "AngleMarker",
    "EqualSegment",
    "LineSegment",
    "ArcSegment",
    "BoundarySegment",
    "HatchedArea",
    "GeometryDocument",
    "distance",
    "circle_radius",
]
