from geodiagram.consistency import check_references
from geodiagram.model import (
    AngleMarker,
    ArcSegment,
    Circle,
    EqualSegment,
    GeometryDocument,
    HatchedArea,
    Line,
    Point,
)


def _points():
    return [Point('A', 'A', 0, 0), Point('B', 'B', 1, 0), Point('O', 'O', 0.5, 0)]


def test_clean_document_has_no_warnings():
    doc = GeometryDocument(
        points=_points(),
        lines=[Line('l1', 'A', 'B')],
        circles=[Circle('c1', 'O', point_on_circle_id='A')],
        angles=[AngleMarker('a1', 'A', 'O', 'B', is_equal=True)],
        equal_segments=[EqualSegment('e1', 'A', 'O', 1)],
        hatched_areas=[HatchedArea('h1', ['A', 'B'], [ArcSegment('A', 'B', 'O')])],
    )

    assert check_references(doc) == []


def test_dangling_references_are_reported():
    doc = GeometryDocument(
        points=_points(),
        lines=[Line('l1', 'A', 'Z')],
        circles=[Circle('c1', 'O', point_on_circle_id='Q')],
        angles=[AngleMarker('a1', 'A', 'V', 'B', is_right=True)],
        equal_segments=[EqualSegment('e1', 'Y', 'O', 2)],
        hatched_areas=[HatchedArea('h1', ['A', 'X'])],
    )

    warnings = check_references(doc)

    found = {(w.kind, w.entity_id, w.field, w.missing) for w in warnings}
    assert found == {
        ('line', 'l1', 'p2', 'Z'),
        ('circle', 'c1', 'pointOnCircleId', 'Q'),
        ('angle', 'a1', 'vertex', 'V'),
        ('equalSegment', 'e1', 'p1', 'Y'),
        ('hatchedArea', 'h1', 'pointIds[1]', 'X'),
    }
    assert 'missing point "Z"' in warnings[0].message


def test_repeated_point_ids_are_reported():
    doc = GeometryDocument(points=[Point('A', 'A', 0, 0), Point('A', 'A', 1, 1)])

    warnings = check_references(doc)

    assert len(warnings) == 1
    assert warnings[0].kind == 'point'
    assert 'more than once' in warnings[0].message
