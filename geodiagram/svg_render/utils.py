import math
from typing import Mapping, Union
from xml.sax.saxutils import quoteattr, escape

_TEXT_ENTITIES = {'"': '&quot;'}


def format_float(value: float) -> str:
    if math.isnan(value) or math.isinf(value):
        raise ValueError("Cannot format non-finite float for SVG output")
    formatted = f"{value:.4f}".rstrip("0").rstrip(".")
    if formatted in ("", "-0"):
        return "0"
    return formatted


def svg_escape(text: str) -> str:
    """Escape label text for use as SVG character data."""
    return escape(text, _TEXT_ENTITIES)


def attrs(values: Mapping[str, Union[str, float, int, None]]) -> str:
    """Render ``values`` as an attribute string; floats are trimmed, ``None`` is dropped."""
    parts = []
    for key, value in values.items():
        if value is None:
            continue
        if isinstance(value, float):
            rendered = format_float(value)
        else:
            rendered = str(value)
        parts.append(f"{key}={quoteattr(rendered)}")
    return " ".join(parts)
