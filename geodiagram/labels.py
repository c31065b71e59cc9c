"""Automatic outward placement of point labels."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Tuple

from .config import LayoutConfig, resolve_config
from .logging_utils import apply_debug_logging
from .model import GeometryDocument, Point, PointId, Vec2

logger = logging.getLogger(__name__)

UP: Vec2 = (0.0, -1.0)


@dataclass(frozen=True)
class LabelPlacement:
    """Where a point label goes.

    ``vector`` is the unit base vector, ``anchor`` the drawn text position and
    ``footprint`` the farther position reserved by the viewport fit.
    """

    point_id: PointId
    vector: Vec2
    anchor: Vec2
    footprint: Vec2


def _unit_from(origin: Vec2, target: Vec2, min_length: float) -> Optional[Vec2]:
    dx = target[0] - origin[0]
    dy = target[1] - origin[1]
    length = math.hypot(dx, dy)
    if length <= min_length:
        return None
    return (dx / length, dy / length)


def _base_vector(
    point: Point,
    document: GeometryDocument,
    points: Mapping[PointId, Point],
    config: LayoutConfig,
) -> Vec2:
    origin = point.position
    outward_x = 0.0
    outward_y = 0.0

    # circles push the label out of their interior
    for circle in document.circles:
        center = points.get(circle.center_id)
        if center is None or center.id == point.id:
            continue
        unit = _unit_from(center.position, origin, config.coincident_eps)
        if unit is None:
            continue
        outward_x += unit[0]
        outward_y += unit[1]

    # incident lines push it into the empty angular sector
    pull_x = 0.0
    pull_y = 0.0
    for line in document.incident_lines(point.id):
        neighbour = points.get(line.other_end(point.id))
        if neighbour is None:
            continue
        unit = _unit_from(origin, neighbour.position, 0.0)
        if unit is None:
            continue
        pull_x += unit[0]
        pull_y += unit[1]
    outward_x -= pull_x
    outward_y -= pull_y

    if abs(outward_x) < config.degenerate_eps and abs(outward_y) < config.degenerate_eps:
        return UP
    magnitude = math.hypot(outward_x, outward_y) or 1.0
    return (outward_x / magnitude, outward_y / magnitude)


def base_label_vector(
    point: Point,
    document: GeometryDocument,
    config: Optional[LayoutConfig] = None,
) -> Vec2:
    """Return the unit direction pointing away from the geometry around ``point``."""

    return _base_vector(point, document, document.point_map(), resolve_config(config))


def _offset_along(point: Point, vector: Vec2, distance: float) -> Vec2:
    dx, dy = point.label_offset
    return (
        point.position[0] + vector[0] * distance + dx,
        point.position[1] + vector[1] * distance + dy,
    )


def label_anchor(
    point: Point,
    document: GeometryDocument,
    config: Optional[LayoutConfig] = None,
) -> Vec2:
    cfg = resolve_config(config)
    return _offset_along(point, base_label_vector(point, document, cfg), cfg.label_offset)


def label_footprint(
    point: Point,
    document: GeometryDocument,
    config: Optional[LayoutConfig] = None,
) -> Vec2:
    cfg = resolve_config(config)
    return _offset_along(point, base_label_vector(point, document, cfg), cfg.label_margin)


def label_layout(
    document: GeometryDocument,
    config: Optional[LayoutConfig] = None,
) -> Dict[PointId, LabelPlacement]:
    """Place every label of ``document`` in one pass.

    Points sharing an id resolve to the first declaration, so only that one
    gets an entry.
    """

    cfg = resolve_config(config)
    points = document.point_map()
    layout: Dict[PointId, LabelPlacement] = {}
    for point in points.values():
        vector = _base_vector(point, document, points, cfg)
        layout[point.id] = LabelPlacement(
            point_id=point.id,
            vector=vector,
            anchor=_offset_along(point, vector, cfg.label_offset),
            footprint=_offset_along(point, vector, cfg.label_margin),
        )
    logger.debug("Placed %d label(s)", len(layout))
    return layout


def label_extent_points(
    document: GeometryDocument,
    config: Optional[LayoutConfig] = None,
) -> Tuple[Vec2, ...]:
    """Return the footprint of every label, in declaration order."""

    cfg = resolve_config(config)
    points = document.point_map()
    footprints = []
    for point in document.points:
        vector = _base_vector(point, document, points, cfg)
        footprints.append(_offset_along(point, vector, cfg.label_margin))
    return tuple(footprints)


apply_debug_logging(globals(), logger=logger)
