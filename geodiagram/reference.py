"""Prompt template for the figure generation service."""

import re
from textwrap import dedent

from .codec import parse_document
from .model import GeometryDocument

SCHEMA_EXAMPLE = dedent(
"""
```json
{
  "points": [{ "id": "A", "label": "A", "x": 150, "y": 100, "labelOffsetX": 0, "labelOffsetY": 0 }],
  "lines": [{ "id": "l1", "p1": "A", "p2": "B", "style": "solid" }],
  "circles": [{ "id": "c1", "centerId": "O", "pointOnCircleId": "A" }],
  "angles": [{ "id": "a1", "p1": "B", "vertex": "A", "p2": "C", "isRight": true, "isEqual": false }],
  "equalSegments": [{ "id": "e1", "p1": "A", "p2": "M", "count": 1 }],
  "hatchedAreas": []
}
```
"""
).strip()

_PROMPT_CORE = dedent(
"""
You are an expert in plane geometry and a graphics engineer.
Read the geometry problem below and convert it into a JSON document that a
renderer can draw. Answer with JSON only.

Problem: "{problem}"

## Coordinates

1. Every coordinate (x, y) lies between (50, 50) and (350, 350); y grows downwards.
2. When the problem mentions a semicircle or a circle with centre O, every point
   on that circle lies in the upper half (y <= 200). The centre O is usually
   (200, 200); a horizontal diameter AB is A(50, 200), B(350, 200).
3. Compute coordinates from the stated geometric properties; do not guess.
4. Name points the way a school textbook does (A, B, C, H, M, O, ...).
5. Set labelOffsetX and labelOffsetY to 0.

## Markings

* An angle bisector AD of angle A becomes two entries in "angles", (B, A, D) and
  (D, A, C), both with "isEqual": true.
* Two angles stated equal are both marked with "isEqual": true.
* A right angle uses "isRight": true (square corner mark).
* Equal sides go into "equalSegments" with the same "count" (1, 2 or 3).
* Every id referenced by a line, circle, angle or marker must be a point id.
"""
).strip()


def get_llm_prompt(problem_text: str, *, include_schema: bool = True) -> str:
    """Return the generation prompt for ``problem_text``."""
    sections = [_PROMPT_CORE.replace("{problem}", problem_text.strip())]
    if include_schema:
        sections.append("REQUIRED JSON STRUCTURE\n" + SCHEMA_EXAMPLE)
    return "\n\n".join(sections)


_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL)


def parse_generation_reply(text: str) -> GeometryDocument:
    """Parse a service reply, accepting a bare JSON body or a fenced block."""
    match = _FENCE_RE.search(text)
    body = match.group(1) if match else text
    return parse_document(body.strip() or "{}")


__all__ = ["SCHEMA_EXAMPLE", "get_llm_prompt", "parse_generation_reply"]
