"""JSON interchange format for geometry documents."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List

from .model import (
    AngleMarker,
    ArcSegment,
    BoundarySegment,
    Circle,
    EqualSegment,
    GeometryDocument,
    HatchedArea,
    Line,
    LineSegment,
    Point,
)
from .validate import (
    ValidationError,
    optional_bool,
    optional_number,
    optional_str,
    require_list,
    require_mapping,
    require_number,
    require_ref,
    require_str,
    validate,
)

logger = logging.getLogger(__name__)


def parse_document(text: str) -> GeometryDocument:
    """Parse serialized JSON text into a validated document."""

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValidationError(f"[line {exc.lineno}, col {exc.colno}] {exc.msg}") from exc
    return load_document(payload)


def load_document(payload: Any) -> GeometryDocument:
    root = require_mapping(payload, "")

    points = [
        _load_point(require_mapping(raw, f"points[{idx}]"), f"points[{idx}]")
        for idx, raw in enumerate(require_list(root.get("points"), "points"))
    ]
    lines = [
        _load_line(require_mapping(raw, f"lines[{idx}]"), f"lines[{idx}]")
        for idx, raw in enumerate(require_list(root.get("lines"), "lines"))
    ]
    circles = [
        _load_circle(require_mapping(raw, f"circles[{idx}]"), f"circles[{idx}]")
        for idx, raw in enumerate(require_list(root.get("circles"), "circles"))
    ]
    angles = [
        _load_angle(require_mapping(raw, f"angles[{idx}]"), f"angles[{idx}]")
        for idx, raw in enumerate(require_list(root.get("angles"), "angles"))
    ]
    equal_segments = [
        _load_equal_segment(require_mapping(raw, f"equalSegments[{idx}]"), f"equalSegments[{idx}]")
        for idx, raw in enumerate(require_list(root.get("equalSegments"), "equalSegments"))
    ]
    hatched_areas = None
    if root.get("hatchedAreas") is not None:
        hatched_areas = [
            _load_hatched_area(require_mapping(raw, f"hatchedAreas[{idx}]"), f"hatchedAreas[{idx}]")
            for idx, raw in enumerate(require_list(root.get("hatchedAreas"), "hatchedAreas"))
        ]

    document = GeometryDocument(
        points=points,
        lines=lines,
        circles=circles,
        angles=angles,
        equal_segments=equal_segments,
        hatched_areas=hatched_areas,
    )
    validate(document)
    logger.debug(
        "Loaded document: %d point(s), %d line(s), %d circle(s), %d angle(s), %d marker(s)",
        len(points),
        len(lines),
        len(circles),
        len(angles),
        len(equal_segments),
    )
    return document


def _load_point(raw: Dict[str, Any], path: str) -> Point:
    point_id = require_str(raw, "id", path)
    label = raw.get("label")
    if label is not None and not isinstance(label, str):
        raise ValidationError(f"[{path}.label] must be a string")
    return Point(
        id=point_id,
        label=label,
        x=require_number(raw, "x", path),
        y=require_number(raw, "y", path),
        label_offset_x=optional_number(raw, "labelOffsetX", path),
        label_offset_y=optional_number(raw, "labelOffsetY", path),
    )


def _load_line(raw: Dict[str, Any], path: str) -> Line:
    return Line(
        id=require_str(raw, "id", path),
        p1=require_ref(raw, "p1", path),
        p2=require_ref(raw, "p2", path),
        style=optional_str(raw, "style", path),
        is_ray=optional_bool(raw, "isRay", path),
    )


def _load_circle(raw: Dict[str, Any], path: str) -> Circle:
    radius = optional_number(raw, "radius", path)
    if radius is not None and radius < 0:
        raise ValidationError(f"[{path}.radius] must not be negative")
    return Circle(
        id=require_str(raw, "id", path),
        center_id=require_ref(raw, "centerId", path),
        radius=radius,
        point_on_circle_id=optional_str(raw, "pointOnCircleId", path),
    )


def _load_angle(raw: Dict[str, Any], path: str) -> AngleMarker:
    return AngleMarker(
        id=require_str(raw, "id", path),
        p1=require_ref(raw, "p1", path),
        vertex=require_ref(raw, "vertex", path),
        p2=require_ref(raw, "p2", path),
        is_right=optional_bool(raw, "isRight", path),
        is_equal=optional_bool(raw, "isEqual", path),
    )


def _load_equal_segment(raw: Dict[str, Any], path: str) -> EqualSegment:
    count = raw.get("count", 1)
    if isinstance(count, float) and count.is_integer():
        count = int(count)
    return EqualSegment(
        id=require_str(raw, "id", path),
        p1=require_ref(raw, "p1", path),
        p2=require_ref(raw, "p2", path),
        count=count,
    )


def _load_boundary_segment(raw: Dict[str, Any], path: str) -> BoundarySegment:
    kind = raw.get("type", "line")
    p1 = require_ref(raw, "p1", path)
    p2 = require_ref(raw, "p2", path)
    if kind == "line":
        return LineSegment(p1, p2)
    if kind == "arc":
        return ArcSegment(
            p1,
            p2,
            center_id=optional_str(raw, "centerId", path),
            is_large_arc=optional_bool(raw, "isLargeArc", path),
            is_clockwise=optional_bool(raw, "isClockwise", path),
        )
    raise ValidationError(f'[{path}.type] must be "line" or "arc" (got {kind!r})')


def _load_hatched_area(raw: Dict[str, Any], path: str) -> HatchedArea:
    point_ids: List[str] = []
    for idx, value in enumerate(require_list(raw.get("pointIds"), f"{path}.pointIds")):
        if not isinstance(value, str):
            raise ValidationError(f"[{path}.pointIds[{idx}]] must be a string")
        point_ids.append(value)
    segments = None
    if raw.get("segments") is not None:
        segments = [
            _load_boundary_segment(
                require_mapping(seg, f"{path}.segments[{idx}]"), f"{path}.segments[{idx}]"
            )
            for idx, seg in enumerate(require_list(raw.get("segments"), f"{path}.segments"))
        ]
    return HatchedArea(
        id=require_str(raw, "id", path),
        point_ids=point_ids,
        segments=segments,
        label=optional_str(raw, "label", path),
        is_special=optional_bool(raw, "isSpecial", path),
    )


# ---------------------------------------------------------------------------
# Serialisation
# ---------------------------------------------------------------------------

def _put(record: Dict[str, Any], key: str, value: Any) -> None:
    if value is not None:
        record[key] = value


def _dump_point(point: Point) -> Dict[str, Any]:
    record: Dict[str, Any] = {"id": point.id}
    _put(record, "label", point.label)
    record["x"] = point.x
    record["y"] = point.y
    _put(record, "labelOffsetX", point.label_offset_x)
    _put(record, "labelOffsetY", point.label_offset_y)
    return record


def _dump_line(line: Line) -> Dict[str, Any]:
    record: Dict[str, Any] = {"id": line.id, "p1": line.p1, "p2": line.p2}
    _put(record, "style", line.style)
    _put(record, "isRay", line.is_ray)
    return record


def _dump_circle(circle: Circle) -> Dict[str, Any]:
    record: Dict[str, Any] = {"id": circle.id, "centerId": circle.center_id}
    _put(record, "radius", circle.radius)
    _put(record, "pointOnCircleId", circle.point_on_circle_id)
    return record


def _dump_angle(angle: AngleMarker) -> Dict[str, Any]:
    record: Dict[str, Any] = {
        "id": angle.id,
        "p1": angle.p1,
        "vertex": angle.vertex,
        "p2": angle.p2,
    }
    _put(record, "isRight", angle.is_right)
    _put(record, "isEqual", angle.is_equal)
    return record


def _dump_equal_segment(marker: EqualSegment) -> Dict[str, Any]:
    return {"id": marker.id, "p1": marker.p1, "p2": marker.p2, "count": marker.count}


def _dump_boundary_segment(segment: BoundarySegment) -> Dict[str, Any]:
    if isinstance(segment, ArcSegment):
        record: Dict[str, Any] = {"p1": segment.p1, "p2": segment.p2, "type": "arc"}
        _put(record, "centerId", segment.center_id)
        _put(record, "isLargeArc", segment.is_large_arc)
        _put(record, "isClockwise", segment.is_clockwise)
        return record
    return {"p1": segment.p1, "p2": segment.p2, "type": "line"}


def _dump_hatched_area(area: HatchedArea) -> Dict[str, Any]:
    record: Dict[str, Any] = {"id": area.id, "pointIds": list(area.point_ids)}
    if area.segments is not None:
        record["segments"] = [_dump_boundary_segment(seg) for seg in area.segments]
    _put(record, "label", area.label)
    _put(record, "isSpecial", area.is_special)
    return record


def document_to_dict(document: GeometryDocument) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "points": [_dump_point(p) for p in document.points],
        "lines": [_dump_line(line) for line in document.lines],
        "circles": [_dump_circle(c) for c in document.circles],
        "angles": [_dump_angle(a) for a in document.angles],
        "equalSegments": [_dump_equal_segment(e) for e in document.equal_segments],
    }
    if document.hatched_areas is not None:
        payload["hatchedAreas"] = [_dump_hatched_area(h) for h in document.hatched_areas]
    return payload


def dump_document(document: GeometryDocument, *, indent: int = 2) -> str:
    return json.dumps(document_to_dict(document), indent=indent, ensure_ascii=False)


__all__ = ["parse_document", "load_document", "document_to_dict", "dump_document"]
