"""SVG renderer for geometry documents.

Layers are emitted in a fixed order, later layers drawing over earlier ones:
hatched areas, circles, lines, equal-segment ticks, angle markers, points with
their labels and, for an interactive render with a selected point, the label
nudge controls. A primitive that references a missing point is dropped.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .utils import attrs, format_float, svg_escape
from ..config import DIRECTIONS, LayoutConfig, resolve_config
from ..labels import label_anchor
from ..model import (
    AngleMarker,
    ArcSegment,
    Circle,
    EqualSegment,
    GeometryDocument,
    HatchedArea,
    Line,
    Point,
    PointId,
    Vec2,
    circle_radius,
    distance,
)
from ..viewport import ViewTransform, compute_transform

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"
XML_PROLOG = '<?xml version="1.0" encoding="UTF-8"?>'

INK = "black"
ACCENT = "#4f46e5"
ACCENT_FILL = "rgba(79, 70, 229, 0.1)"
HATCH_ID = "gd-hatch"
HATCH_SPECIAL_ID = "gd-hatch-special"

CONTROL_RING_RADIUS = 40.0
CONTROL_BUTTON_DISTANCE = 30.0
CONTROL_BUTTON_RADIUS = 8.0

CONTROL_GLYPHS: Dict[str, str] = {"up": "▲", "right": "▶", "down": "▼", "left": "◀"}

# direction name -> (unit dx, unit dy, glyph)
CONTROL_DIRECTIONS: Dict[str, Tuple[int, int, str]] = {
    name: (dx, dy, CONTROL_GLYPHS[name]) for name, (dx, dy) in DIRECTIONS.items()
}


def generate_svg_document(
    document: GeometryDocument,
    transform: Optional[ViewTransform] = None,
    *,
    selected_point_id: Optional[PointId] = None,
    interactive: bool = False,
    pixel_scale: Optional[float] = None,
    config: Optional[LayoutConfig] = None,
) -> str:
    """Render a standalone SVG file.

    ``pixel_scale`` sets explicit ``width``/``height`` attributes so a raster
    exporter can rasterise the scene at a multiple of the canvas size.
    """

    svg = generate_svg_code(
        document,
        transform,
        selected_point_id=selected_point_id,
        interactive=interactive,
        pixel_scale=pixel_scale,
        config=config,
    )
    return XML_PROLOG + "\n" + svg + "\n"


def generate_svg_code(
    document: GeometryDocument,
    transform: Optional[ViewTransform] = None,
    *,
    selected_point_id: Optional[PointId] = None,
    interactive: bool = False,
    pixel_scale: Optional[float] = None,
    config: Optional[LayoutConfig] = None,
) -> str:
    """Generate the ``<svg>`` element for ``document``.

    When ``transform`` is omitted it is fitted from the document, which is
    what a caller wants unless it needs to render against the transform of a
    frame it already displayed.
    """

    if not isinstance(document, GeometryDocument):
        raise TypeError("document must be an instance of GeometryDocument")
    cfg = resolve_config(config)
    if transform is None:
        transform = compute_transform(document, cfg)
    if pixel_scale is not None and pixel_scale <= 0:
        raise ValueError("pixel_scale must be positive")

    points = document.point_map()
    size = cfg.view_size
    root_attrs = {
        "xmlns": SVG_NS,
        "viewBox": f"0 0 {format_float(size)} {format_float(size)}",
        "width": float(size * pixel_scale) if pixel_scale else None,
        "height": float(size * pixel_scale) if pixel_scale else None,
        "preserveAspectRatio": "xMidYMid meet",
    }

    lines: List[str] = [f"<svg {attrs(root_attrs)}>"]
    hatched = document.iter_hatched_areas()
    if hatched:
        lines.extend("  " + entry for entry in _hatch_defs())
    lines.append(f"  <rect {attrs({'width': float(size), 'height': float(size), 'fill': 'white'})}/>")
    group_transform = "translate({tx}, {ty}) scale({s})".format(
        tx=format_float(transform.translate_x),
        ty=format_float(transform.translate_y),
        s=format_float(transform.scale),
    )
    lines.append(f'  <g transform="{group_transform}">')

    layers = [
        ("hatched-areas", _render_hatched_areas(hatched, points)),
        ("circles", _render_circles(document.circles, points, cfg)),
        ("lines", _render_lines(document.lines, points)),
        ("equal-segments", _render_equal_segments(document.equal_segments, points, cfg)),
        ("angles", _render_angles(document.angles, points, transform, cfg)),
        ("points", _render_points(document, selected_point_id, interactive, cfg)),
    ]
    selected = document.find_point(selected_point_id)
    if interactive and selected is not None:
        layers.append(("label-controls", _render_label_controls(selected, cfg)))

    for name, entries in layers:
        if not entries:
            continue
        lines.append(f'    <g class="{name}">')
        lines.extend("      " + entry for entry in entries)
        lines.append("    </g>")

    lines.append("  </g>")
    lines.append("</svg>")
    logger.debug(
        "Rendered SVG with %d layer(s) at scale %.4f",
        sum(1 for _, entries in layers if entries),
        transform.scale,
    )
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Layers
# ---------------------------------------------------------------------------

def _hatch_defs() -> List[str]:
    entries = ["<defs>"]
    for pattern_id, spacing, color in ((HATCH_ID, 8.0, INK), (HATCH_SPECIAL_ID, 4.0, ACCENT)):
        entries.append(
            "  <pattern {}>".format(
                attrs(
                    {
                        "id": pattern_id,
                        "patternUnits": "userSpaceOnUse",
                        "width": spacing,
                        "height": spacing,
                        "patternTransform": "rotate(45)",
                    }
                )
            )
        )
        entries.append(
            "    <line {}/>".format(
                attrs({"x1": 0.0, "y1": 0.0, "x2": 0.0, "y2": spacing, "stroke": color, "stroke-width": 1.0})
            )
        )
        entries.append("  </pattern>")
    entries.append("</defs>")
    return entries


def _hatched_area_path(area: HatchedArea, points: Mapping[PointId, Point]) -> Optional[str]:
    boundary = area.boundary()
    if not boundary:
        return None
    commands: List[str] = []
    cursor: Optional[Vec2] = None
    for segment in boundary:
        start = points.get(segment.p1)
        end = points.get(segment.p2)
        if start is None or end is None:
            return None
        if cursor is None:
            commands.append(f"M {_xy(start.position)}")
        elif distance(cursor, start.position) > 1e-9:
            commands.append(f"L {_xy(start.position)}")
        if isinstance(segment, ArcSegment):
            if segment.center_id is not None:
                center = points.get(segment.center_id)
                if center is None:
                    return None
                radius = distance(center.position, start.position)
            else:
                radius = distance(start.position, end.position) / 2
            commands.append(
                "A {r} {r} 0 {large} {sweep} {end}".format(
                    r=format_float(radius),
                    large=1 if segment.is_large_arc else 0,
                    sweep=1 if segment.is_clockwise else 0,
                    end=_xy(end.position),
                )
            )
        else:
            commands.append(f"L {_xy(end.position)}")
        cursor = end.position
    commands.append("Z")
    return " ".join(commands)


def _render_hatched_areas(
    areas: Sequence[HatchedArea], points: Mapping[PointId, Point]
) -> List[str]:
    entries: List[str] = []
    for area in areas:
        path = _hatched_area_path(area, points)
        if path is None:
            logger.debug("Skipping hatched area %s with unresolved boundary", area.id)
            continue
        fill = HATCH_SPECIAL_ID if area.is_special else HATCH_ID
        entries.append(
            "<path {}/>".format(
                attrs({"data-id": area.id, "d": path, "fill": f"url(#{fill})", "stroke": "none"})
            )
        )
    return entries


def _render_circles(
    circles: Sequence[Circle], points: Mapping[PointId, Point], cfg: LayoutConfig
) -> List[str]:
    entries: List[str] = []
    for circle in circles:
        center = points.get(circle.center_id)
        if center is None:
            continue
        radius = circle_radius(circle, points, cfg.default_radius)
        cx, cy = center.position
        entries.append(
            "<circle {}/>".format(
                attrs(
                    {
                        "data-id": circle.id,
                        "cx": cx,
                        "cy": cy,
                        "r": radius,
                        "fill": "none",
                        "stroke": INK,
                        "stroke-width": 2.0,
                    }
                )
            )
        )
    return entries


def _render_lines(lines: Sequence[Line], points: Mapping[PointId, Point]) -> List[str]:
    entries: List[str] = []
    for line in lines:
        p1 = points.get(line.p1)
        p2 = points.get(line.p2)
        if p1 is None or p2 is None:
            continue
        entries.append(
            "<line {}/>".format(
                attrs(
                    {
                        "data-id": line.id,
                        "x1": p1.position[0],
                        "y1": p1.position[1],
                        "x2": p2.position[0],
                        "y2": p2.position[1],
                        "stroke": INK,
                        "stroke-width": 2.0,
                        "stroke-linecap": "round",
                    }
                )
            )
        )
    return entries


def equal_segment_ticks(
    p1: Vec2, p2: Vec2, count: int, config: Optional[LayoutConfig] = None
) -> List[Tuple[Vec2, Vec2]]:
    """Return ``count`` perpendicular ticks centred as a group on the midpoint."""

    cfg = resolve_config(config)
    dx = p2[0] - p1[0]
    dy = p2[1] - p1[1]
    length = math.hypot(dx, dy)
    if length == 0:
        return []
    ux, uy = dx / length, dy / length
    nx, ny = -uy, ux
    mx = (p1[0] + p2[0]) / 2
    my = (p1[1] + p2[1]) / 2
    half = cfg.tick_half_length
    ticks = []
    for idx in range(count):
        shift = (idx - (count - 1) / 2) * cfg.tick_spacing
        cx = mx + ux * shift
        cy = my + uy * shift
        ticks.append(((cx + nx * half, cy + ny * half), (cx - nx * half, cy - ny * half)))
    return ticks


def _render_equal_segments(
    markers: Sequence[EqualSegment], points: Mapping[PointId, Point], cfg: LayoutConfig
) -> List[str]:
    entries: List[str] = []
    for marker in markers:
        p1 = points.get(marker.p1)
        p2 = points.get(marker.p2)
        if p1 is None or p2 is None:
            continue
        ticks = equal_segment_ticks(p1.position, p2.position, marker.count, cfg)
        if not ticks:
            continue
        entries.append(f'<g data-id="{svg_escape(marker.id)}">')
        for start, end in ticks:
            entries.append(
                "  <line {}/>".format(
                    attrs(
                        {
                            "x1": start[0],
                            "y1": start[1],
                            "x2": end[0],
                            "y2": end[1],
                            "stroke": INK,
                            "stroke-width": 1.5,
                        }
                    )
                )
            )
        entries.append("</g>")
    return entries


def equal_angle_sweep(vertex: Vec2, p1: Vec2, p2: Vec2) -> Tuple[float, float, int]:
    """Return ``(start_angle, signed_difference, sweep_flag)`` for the smaller angle.

    The difference ``a2 - a1`` is normalised into ``(-pi, pi]``; a positive
    difference sweeps with sweep-flag 1.
    """

    a1 = math.atan2(p1[1] - vertex[1], p1[0] - vertex[0])
    a2 = math.atan2(p2[1] - vertex[1], p2[0] - vertex[0])
    diff = a2 - a1
    while diff <= -math.pi:
        diff += 2 * math.pi
    while diff > math.pi:
        diff -= 2 * math.pi
    return a1, diff, 1 if diff > 0 else 0


def _right_angle_points(
    vertex: Vec2, p1: Vec2, p2: Vec2, size: float
) -> Optional[Tuple[Vec2, Vec2, Vec2]]:
    d1 = distance(vertex, p1)
    d2 = distance(vertex, p2)
    if d1 == 0 or d2 == 0:
        return None
    ux1, uy1 = (p1[0] - vertex[0]) / d1, (p1[1] - vertex[1]) / d1
    ux2, uy2 = (p2[0] - vertex[0]) / d2, (p2[1] - vertex[1]) / d2
    return (
        (vertex[0] + ux1 * size, vertex[1] + uy1 * size),
        (vertex[0] + (ux1 + ux2) * size, vertex[1] + (uy1 + uy2) * size),
        (vertex[0] + ux2 * size, vertex[1] + uy2 * size),
    )


def _equal_angle_entries(
    marker: AngleMarker, vertex: Vec2, p1: Vec2, p2: Vec2, radius: float, tick: float
) -> List[str]:
    a1, diff, sweep = equal_angle_sweep(vertex, p1, p2)
    a2 = a1 + diff
    start = (vertex[0] + math.cos(a1) * radius, vertex[1] + math.sin(a1) * radius)
    end = (vertex[0] + math.cos(a2) * radius, vertex[1] + math.sin(a2) * radius)
    r = format_float(radius)
    path = f"M {_xy(start)} A {r} {r} 0 0 {sweep} {_xy(end)}"
    mid = a1 + diff / 2
    inner = (vertex[0] + math.cos(mid) * (radius - tick), vertex[1] + math.sin(mid) * (radius - tick))
    outer = (vertex[0] + math.cos(mid) * (radius + tick), vertex[1] + math.sin(mid) * (radius + tick))
    return [
        f'<g data-id="{svg_escape(marker.id)}">',
        "  <path {}/>".format(
            attrs({"d": path, "fill": "none", "stroke": INK, "stroke-width": 1.5})
        ),
        "  <line {}/>".format(
            attrs(
                {
                    "x1": inner[0],
                    "y1": inner[1],
                    "x2": outer[0],
                    "y2": outer[1],
                    "stroke": INK,
                    "stroke-width": 1.2,
                }
            )
        ),
        "</g>",
    ]


def _render_angles(
    markers: Sequence[AngleMarker],
    points: Mapping[PointId, Point],
    transform: ViewTransform,
    cfg: LayoutConfig,
) -> List[str]:
    # glyph sizes are canvas units; undo the group scale
    unit = 1.0 / transform.scale if transform.scale > 0 else 1.0
    entries: List[str] = []
    for marker in markers:
        vertex = points.get(marker.vertex)
        p1 = points.get(marker.p1)
        p2 = points.get(marker.p2)
        if vertex is None or p1 is None or p2 is None:
            continue
        if marker.is_right:
            corner = _right_angle_points(
                vertex.position, p1.position, p2.position, cfg.right_angle_size * unit
            )
            if corner is None:
                continue
            entries.append(
                "<polyline {}/>".format(
                    attrs(
                        {
                            "data-id": marker.id,
                            "points": " ".join(_xy(pt, sep=",") for pt in corner),
                            "fill": "none",
                            "stroke": INK,
                            "stroke-width": 1.5,
                        }
                    )
                )
            )
        elif marker.is_equal:
            entries.extend(
                _equal_angle_entries(
                    marker,
                    vertex.position,
                    p1.position,
                    p2.position,
                    cfg.angle_arc_radius * unit,
                    cfg.angle_tick_size * unit,
                )
            )
    return entries


def _render_points(
    document: GeometryDocument,
    selected_point_id: Optional[PointId],
    interactive: bool,
    cfg: LayoutConfig,
) -> List[str]:
    entries: List[str] = []
    for point in document.points:
        x, y = point.position
        lx, ly = label_anchor(point, document, cfg)
        selected = selected_point_id is not None and point.id == selected_point_id
        group_attrs = {"data-point-id": point.id, "class": "point-label selectable" if interactive else "point-label"}
        entries.append(f"<g {attrs(group_attrs)}>")
        entries.append(
            "  <circle {}/>".format(attrs({"cx": x, "cy": y, "r": cfg.dot_radius, "fill": INK}))
        )
        if selected:
            entries.append(
                "  <rect {}/>".format(
                    attrs(
                        {
                            "x": lx - 12,
                            "y": ly - 12,
                            "width": 24.0,
                            "height": 24.0,
                            "fill": ACCENT_FILL,
                            "stroke": ACCENT,
                            "stroke-width": 1.0,
                            "rx": 4.0,
                        }
                    )
                )
            )
        text_attrs = {
            "x": lx,
            "y": ly,
            "font-size": 16,
            "font-family": "serif",
            "font-style": "italic",
            "text-anchor": "middle",
            "dominant-baseline": "middle",
            "fill": ACCENT if selected else INK,
            "font-weight": "bold" if selected else "normal",
            "stroke": "white",
            "stroke-width": "4px",
            "paint-order": "stroke",
        }
        entries.append(f"  <text {attrs(text_attrs)}>{svg_escape(point.display_label)}</text>")
        entries.append("</g>")
    return entries


def _render_label_controls(point: Point, cfg: LayoutConfig) -> List[str]:
    x, y = point.position
    entries = [
        f'<g transform="translate({format_float(x)}, {format_float(y)})" data-point-id="{svg_escape(point.id)}">',
        "  <circle {}/>".format(
            attrs(
                {
                    "r": CONTROL_RING_RADIUS,
                    "fill": "rgba(255,255,255,0.7)",
                    "stroke": "#cbd5e1",
                    "stroke-dasharray": "2,2",
                }
            )
        ),
    ]
    for direction, (dx, dy, glyph) in CONTROL_DIRECTIONS.items():
        bx = dx * CONTROL_BUTTON_DISTANCE
        by = dy * CONTROL_BUTTON_DISTANCE
        button_attrs = {
            "class": "nudge",
            "data-point-id": point.id,
            "data-direction": direction,
            "data-dx": dx * cfg.nudge_step,
            "data-dy": dy * cfg.nudge_step,
        }
        entries.append(f"  <g {attrs(button_attrs)}>")
        entries.append(
            "    <circle {}/>".format(
                attrs({"cx": bx, "cy": by, "r": CONTROL_BUTTON_RADIUS, "fill": ACCENT})
            )
        )
        entries.append(
            "    <text {}>{}</text>".format(
                attrs(
                    {
                        "x": bx,
                        "y": by,
                        "font-size": 8,
                        "fill": "white",
                        "text-anchor": "middle",
                        "dominant-baseline": "central",
                    }
                ),
                glyph,
            )
        )
        entries.append("  </g>")
    entries.append("</g>")
    return entries


def _xy(point: Vec2, sep: str = " ") -> str:
    return f"{format_float(point[0])}{sep}{format_float(point[1])}"
