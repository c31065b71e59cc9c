"""Geometry document → SVG scene rendering."""

from .generator import (
    CONTROL_DIRECTIONS,
    equal_angle_sweep,
    equal_segment_ticks,
    generate_svg_code,
    generate_svg_document,
)
from .utils import format_float, svg_escape

__all__ = [
    "CONTROL_DIRECTIONS",
    "equal_angle_sweep",
    "equal_segment_ticks",
    "generate_svg_code",
    "generate_svg_document",
    "format_float",
    "svg_escape",
]
