from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .model import GeometryDocument


@dataclass
class ReferenceWarning:
    kind: str
    entity_id: str
    field: str
    missing: str
    message: str

    def __str__(self) -> str:
        return self.message


def _check(
    warnings: List[ReferenceWarning],
    known: set,
    kind: str,
    entity_id: str,
    refs: Sequence[Tuple[str, Optional[str]]],
) -> None:
    for field, ref in refs:
        if ref is None or ref in known:
            continue
        warnings.append(
            ReferenceWarning(
                kind=kind,
                entity_id=entity_id,
                field=field,
                missing=ref,
                message=f'{kind} "{entity_id}" references missing point "{ref}" via {field}',
            )
        )


def check_references(document: GeometryDocument) -> List[ReferenceWarning]:
    """List dangling point references and repeated point ids.

    Nothing here is an error: the renderer drops the affected primitives. The
    report only tells an editor what will be missing from the picture.
    """

    warnings: List[ReferenceWarning] = []
    known: set = set()
    for point in document.points:
        if point.id in known:
            warnings.append(
                ReferenceWarning(
                    kind='point',
                    entity_id=point.id,
                    field='id',
                    missing=point.id,
                    message=f'point id "{point.id}" is declared more than once; the first one wins',
                )
            )
        known.add(point.id)

    for line in document.lines:
        _check(warnings, known, 'line', line.id, [('p1', line.p1), ('p2', line.p2)])
    for circle in document.circles:
        _check(
            warnings,
            known,
            'circle',
            circle.id,
            [('centerId', circle.center_id), ('pointOnCircleId', circle.point_on_circle_id)],
        )
    for angle in document.angles:
        _check(
            warnings,
            known,
            'angle',
            angle.id,
            [('p1', angle.p1), ('vertex', angle.vertex), ('p2', angle.p2)],
        )
    for marker in document.equal_segments:
        _check(warnings, known, 'equalSegment', marker.id, [('p1', marker.p1), ('p2', marker.p2)])
    for area in document.iter_hatched_areas():
        refs: List[Tuple[str, Optional[str]]] = [
            (f'pointIds[{idx}]', pid) for idx, pid in enumerate(area.point_ids)
        ]
        for idx, seg in enumerate(area.segments or []):
            refs.append((f'segments[{idx}].p1', seg.p1))
            refs.append((f'segments[{idx}].p2', seg.p2))
            refs.append((f'segments[{idx}].centerId', getattr(seg, 'center_id', None)))
        _check(warnings, known, 'hatchedArea', area.id, refs)
    return warnings
