import math
from typing import Any, Dict, List, Optional

from .model import GeometryDocument


class ValidationError(ValueError):
    pass


def _where(path: str) -> str:
    return f'[{path}]' if path else '[document]'


def require_mapping(value: Any, path: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ValidationError(f'{_where(path)} expected an object, got {type(value).__name__}')
    return value


def require_list(value: Any, path: str) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValidationError(f'{_where(path)} expected an array, got {type(value).__name__}')
    return value


def require_str(record: Dict[str, Any], key: str, path: str) -> str:
    value = record.get(key)
    if value is None:
        raise ValidationError(f'{_where(path)} missing required field "{key}"')
    if not isinstance(value, str):
        raise ValidationError(f'{_where(path + "." + key)} must be a string')
    if not value:
        raise ValidationError(f'{_where(path + "." + key)} must not be empty')
    return value


def require_ref(record: Dict[str, Any], key: str, path: str) -> str:
    """Read a point reference; an empty id is kept and later fails to resolve."""
    value = record.get(key)
    if value is None:
        raise ValidationError(f'{_where(path)} missing required field "{key}"')
    if not isinstance(value, str):
        raise ValidationError(f'{_where(path + "." + key)} must be a string')
    return value


def optional_str(record: Dict[str, Any], key: str, path: str) -> Optional[str]:
    # "" reads as unset
    if record.get(key) in (None, ''):
        return None
    return require_str(record, key, path)


def require_number(record: Dict[str, Any], key: str, path: str):
    value = record.get(key)
    if value is None:
        raise ValidationError(f'{_where(path)} missing required field "{key}"')
    return _check_number(value, f'{path}.{key}')


def optional_number(record: Dict[str, Any], key: str, path: str):
    value = record.get(key)
    if value is None:
        return None
    return _check_number(value, f'{path}.{key}')


def _check_number(value: Any, path: str):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f'{_where(path)} must be a number')
    try:
        finite = math.isfinite(value)
    except OverflowError:
        finite = False
    if not finite:
        raise ValidationError(f'{_where(path)} must be finite')
    return value


def optional_bool(record: Dict[str, Any], key: str, path: str) -> Optional[bool]:
    value = record.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise ValidationError(f'{_where(path + "." + key)} must be true|false')
    return value


def validate(document: GeometryDocument) -> None:
    """Check invariants that span records: unique point ids and tick counts."""

    seen = set()
    for idx, point in enumerate(document.points):
        if point.id in seen:
            raise ValidationError(f'[points[{idx}].id] duplicate point id "{point.id}"')
        seen.add(point.id)
    for idx, marker in enumerate(document.equal_segments):
        if isinstance(marker.count, bool) or not isinstance(marker.count, int):
            raise ValidationError(f'[equalSegments[{idx}].count] must be an integer')
        if not 1 <= marker.count <= 3:
            raise ValidationError(f'[equalSegments[{idx}].count] must be 1, 2 or 3 (got {marker.count})')
    for idx, area in enumerate(document.iter_hatched_areas()):
        for s_idx, seg in enumerate(area.segments or []):
            if seg.p1 and seg.p1 == seg.p2:
                raise ValidationError(
                    f'[hatchedAreas[{idx}].segments[{s_idx}]] segment endpoints must be distinct'
                )
