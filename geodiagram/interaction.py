"""Label nudging, pointer mapping and the editing session."""

from __future__ import annotations

import logging
from typing import Optional

from .codec import dump_document, parse_document
from .config import DIRECTIONS, LayoutConfig, resolve_config
from .model import GeometryDocument, PointId, Vec2
from .svg_render import generate_svg_code
from .validate import ValidationError
from .viewport import ViewTransform, compute_transform

logger = logging.getLogger(__name__)

_DIRECTION_ALIASES = {"n": "up", "e": "right", "s": "down", "w": "left"}


def apply_label_offset(
    document: GeometryDocument, point_id: PointId, dx: float, dy: float
) -> GeometryDocument:
    """Add ``(dx, dy)`` to the manual label offset of ``point_id``.

    The document is mutated in place and returned. An unknown id leaves it
    untouched. Offsets are not clamped; refitting the viewport keeps the label
    visible.
    """

    point = document.find_point(point_id)
    if point is None:
        logger.debug("Ignoring label offset for unknown point %r", point_id)
        return document
    point.label_offset_x = (point.label_offset_x or 0) + dx
    point.label_offset_y = (point.label_offset_y or 0) + dy
    logger.debug(
        "Label offset of %s is now (%s, %s)",
        point_id,
        point.label_offset_x,
        point.label_offset_y,
    )
    return document


def normalize_direction(direction: str) -> str:
    key = direction.strip().lower()
    key = _DIRECTION_ALIASES.get(key, key)
    if key not in DIRECTIONS:
        raise ValueError(f"unknown nudge direction {direction!r}")
    return key


def nudge_label(
    document: GeometryDocument,
    point_id: PointId,
    direction: str,
    config: Optional[LayoutConfig] = None,
) -> GeometryDocument:
    step = resolve_config(config).nudge_step
    ux, uy = DIRECTIONS[normalize_direction(direction)]
    return apply_label_offset(document, point_id, ux * step, uy * step)


def _canvas_ratio(viewport_width: float, viewport_height: float, view_size: float) -> Vec2:
    if viewport_width <= 0 or viewport_height <= 0:
        raise ValueError("viewport size must be positive")
    return (view_size / viewport_width, view_size / viewport_height)


def screen_to_logical(
    screen_x: float,
    screen_y: float,
    viewport_width: float,
    viewport_height: float,
    transform: ViewTransform,
    config: Optional[LayoutConfig] = None,
) -> Vec2:
    """Map a pointer position on the displayed canvas to logical coordinates.

    ``screen_x``/``screen_y`` are relative to the top-left corner of the canvas
    element, which is displayed at ``viewport_width`` x ``viewport_height``
    pixels.
    """

    rx, ry = _canvas_ratio(viewport_width, viewport_height, resolve_config(config).view_size)
    return transform.to_logical(screen_x * rx, screen_y * ry)


def logical_to_screen(
    x: float,
    y: float,
    viewport_width: float,
    viewport_height: float,
    transform: ViewTransform,
    config: Optional[LayoutConfig] = None,
) -> Vec2:
    rx, ry = _canvas_ratio(viewport_width, viewport_height, resolve_config(config).view_size)
    canvas_x, canvas_y = transform.to_canvas(x, y)
    return (canvas_x / rx, canvas_y / ry)


class DiagramSession:
    """Single-user working copy of a figure.

    Text edits are staged and only replace the document once they parse.
    ``transform`` is always the transform of the last rendered frame, so
    pointer clicks map against what the user actually sees.
    """

    def __init__(
        self,
        document: Optional[GeometryDocument] = None,
        *,
        config: Optional[LayoutConfig] = None,
    ) -> None:
        self.config = config
        self.document = document if document is not None else GeometryDocument()
        self.text = dump_document(self.document)
        self.selected_point_id: Optional[PointId] = None
        self.transform = compute_transform(self.document, self.config)

    @classmethod
    def from_text(cls, text: str, *, config: Optional[LayoutConfig] = None) -> "DiagramSession":
        session = cls(parse_document(text), config=config)
        session.text = text
        return session

    def commit_text(self, text: str) -> GeometryDocument:
        """Stage ``text`` and adopt it when it parses.

        On ``ValidationError`` the current document stays in place and the
        staged text is kept for correction.
        """

        self.text = text
        try:
            document = parse_document(text)
        except ValidationError as exc:
            logger.warning("Keeping previous document: %s", exc)
            raise
        self.document = document
        if self.selected_point_id is not None and document.find_point(self.selected_point_id) is None:
            self.selected_point_id = None
        self.transform = compute_transform(document, self.config)
        logger.info("Committed document with %d point(s)", len(document.points))
        return document

    def select_point(self, point_id: Optional[PointId]) -> Optional[PointId]:
        if point_id is not None and self.document.find_point(point_id) is None:
            point_id = None
        self.selected_point_id = point_id
        return point_id

    def clear_selection(self) -> None:
        self.selected_point_id = None

    def nudge(self, direction: str, point_id: Optional[PointId] = None) -> bool:
        """Nudge the label of ``point_id`` (default: the selection).

        Returns ``False`` when there is nothing to nudge.
        """

        target = point_id if point_id is not None else self.selected_point_id
        if target is None or self.document.find_point(target) is None:
            return False
        nudge_label(self.document, target, direction, self.config)
        self.text = dump_document(self.document)
        self.transform = compute_transform(self.document, self.config)
        return True

    def click(
        self, screen_x: float, screen_y: float, viewport_width: float, viewport_height: float
    ) -> Vec2:
        return screen_to_logical(
            screen_x, screen_y, viewport_width, viewport_height, self.transform, self.config
        )

    def render(self, *, interactive: bool = True) -> str:
        self.transform = compute_transform(self.document, self.config)
        return generate_svg_code(
            self.document,
            self.transform,
            selected_point_id=self.selected_point_id,
            interactive=interactive,
            config=self.config,
        )
