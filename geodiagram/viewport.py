"""Fit a figure into the fixed square canvas."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .config import LayoutConfig, resolve_config
from .labels import label_extent_points
from .logging_utils import apply_debug_logging
from .model import GeometryDocument, Vec2, circle_radius

logger = logging.getLogger(__name__)

Extent = Tuple[float, float, float, float]


@dataclass(frozen=True)
class ViewTransform:
    """Uniform scale followed by a translation: ``canvas = logical * scale + translate``."""

    translate_x: float = 0.0
    translate_y: float = 0.0
    scale: float = 1.0

    def to_canvas(self, x: float, y: float) -> Vec2:
        return (x * self.scale + self.translate_x, y * self.scale + self.translate_y)

    def to_logical(self, canvas_x: float, canvas_y: float) -> Vec2:
        return (
            (canvas_x - self.translate_x) / self.scale,
            (canvas_y - self.translate_y) / self.scale,
        )


IDENTITY = ViewTransform()


def _extent_samples(document: GeometryDocument, config: LayoutConfig) -> np.ndarray:
    samples: List[Vec2] = [point.position for point in document.points]
    samples.extend(label_extent_points(document, config))

    points = document.point_map()
    for circle in document.circles:
        center = points.get(circle.center_id)
        if center is None:
            continue
        radius = circle_radius(circle, points, config.default_radius)
        cx, cy = center.position
        samples.append((cx - radius, cy - radius))
        samples.append((cx + radius, cy + radius))

    if not samples:
        return np.empty((0, 2), dtype=float)
    return np.asarray(samples, dtype=float)


def compute_extent(
    document: GeometryDocument,
    config: Optional[LayoutConfig] = None,
) -> Optional[Extent]:
    """Return ``(min_x, min_y, max_x, max_y)`` over points, label footprints and circles."""

    samples = _extent_samples(document, resolve_config(config))
    if samples.shape[0] == 0:
        return None
    min_x, min_y = samples.min(axis=0)
    max_x, max_y = samples.max(axis=0)
    return (float(min_x), float(min_y), float(max_x), float(max_y))


def compute_transform(
    document: GeometryDocument,
    config: Optional[LayoutConfig] = None,
) -> ViewTransform:
    """Scale and centre ``document`` inside the padded canvas.

    An empty point set yields the identity transform. Zero-width or
    zero-height extents are floored at one unit, and the scale never
    exceeds ``config.max_scale``.
    """

    cfg = resolve_config(config)
    if not document.points:
        logger.debug("No points; using identity transform")
        return IDENTITY

    extent = compute_extent(document, cfg)
    if extent is None:
        return IDENTITY
    min_x, min_y, max_x, max_y = extent
    width = max_x - min_x
    height = max_y - min_y
    center_x = (min_x + max_x) / 2
    center_y = (min_y + max_y) / 2

    available = cfg.available_span
    scale = min(available / max(width, 1.0), available / max(height, 1.0), cfg.max_scale)
    transform = ViewTransform(
        translate_x=cfg.center - center_x * scale,
        translate_y=cfg.center - center_y * scale,
        scale=scale,
    )
    logger.debug(
        "Extent %.3f x %.3f centred at (%.3f, %.3f) -> %s",
        width,
        height,
        center_x,
        center_y,
        transform,
    )
    return transform


apply_debug_logging(globals(), logger=logger)
