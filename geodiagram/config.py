"""Configuration helpers for layout and rendering."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

# label nudge direction -> unit step in logical coordinates (y grows downwards)
DIRECTIONS: Dict[str, Tuple[int, int]] = {
    "up": (0, -1),
    "right": (1, 0),
    "down": (0, 1),
    "left": (-1, 0),
}


@dataclass
class LayoutConfig:
    """Constants shared by the label, viewport and rendering stages."""

    view_size: float = 400.0
    padding: float = 60.0
    max_scale: float = 1.2
    label_offset: float = 14.0
    label_margin: float = 30.0
    default_radius: float = 80.0
    right_angle_size: float = 12.0
    angle_arc_radius: float = 22.0
    angle_tick_size: float = 4.0
    tick_half_length: float = 6.0
    tick_spacing: float = 4.0
    nudge_step: float = 2.0
    dot_radius: float = 3.0
    coincident_eps: float = 0.1
    degenerate_eps: float = 0.01

    @property
    def available_span(self) -> float:
        return self.view_size - self.padding

    @property
    def center(self) -> float:
        return self.view_size / 2


_LAYOUT_CONFIG = LayoutConfig()


def get_layout_config() -> LayoutConfig:
    return copy.deepcopy(_LAYOUT_CONFIG)


def set_layout_config(config: LayoutConfig) -> None:
    global _LAYOUT_CONFIG
    _LAYOUT_CONFIG = copy.deepcopy(config)


def resolve_config(config: Optional[LayoutConfig]) -> LayoutConfig:
    return config if config is not None else _LAYOUT_CONFIG
