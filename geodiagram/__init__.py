from .model import (
    Point,
    Line,
    Circle,
    AngleMarker,
    EqualSegment,
    LineSegment,
    ArcSegment,
    HatchedArea,
    GeometryDocument,
    circle_radius,
)
from .validate import validate, ValidationError
from .codec import parse_document, load_document, document_to_dict, dump_document
from .consistency import check_references, ReferenceWarning
from .config import LayoutConfig, get_layout_config, set_layout_config
from .labels import base_label_vector, label_anchor, label_footprint, label_layout, LabelPlacement
from .viewport import ViewTransform, compute_extent, compute_transform
from .svg_render import generate_svg_code, generate_svg_document, equal_angle_sweep
from .interaction import (
    apply_label_offset,
    nudge_label,
    screen_to_logical,
    logical_to_screen,
    DiagramSession,
)
from .reference import SCHEMA_EXAMPLE, get_llm_prompt, parse_generation_reply

__all__ = [
    'Point',
    'Line',
    'Circle',
    'AngleMarker',
    'EqualSegment',
    'LineSegment',
    'ArcSegment',
    'HatchedArea',
    'GeometryDocument',
    'circle_radius',
    'validate',
    'ValidationError',
    'parse_document',
    'load_document',
    'document_to_dict',
    'dump_document',
    'check_references',
    'ReferenceWarning',
    'LayoutConfig',
    'get_layout_config',
    'set_layout_config',
    'base_label_vector',
    'label_anchor',
    'label_footprint',
    'label_layout',
    'LabelPlacement',
    'ViewTransform',
    'compute_extent',
    'compute_transform',
    'generate_svg_code',
    'generate_svg_document',
    'equal_angle_sweep',
    'apply_label_offset',
    'nudge_label',
    'screen_to_logical',
    'logical_to_screen',
    'DiagramSession',
    'SCHEMA_EXAMPLE',
    'get_llm_prompt',
    'parse_generation_reply',
]
