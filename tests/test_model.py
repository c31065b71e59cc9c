import pytest

from geodiagram.model import (
    ArcSegment,
    Circle,
    GeometryDocument,
    HatchedArea,
    Line,
    LineSegment,
    Point,
    circle_radius,
)


def _points():
    return {
        "O": Point("O", "O", 200, 200),
        "A": Point("A", "A", 50, 200),
    }


def test_point_on_circle_takes_precedence_over_radius():
    circle = Circle("c1", "O", radius=10, point_on_circle_id="A")

    assert circle_radius(circle, _points(), 80.0) == pytest.approx(150.0)


def test_explicit_radius_and_default():
    assert circle_radius(Circle("c1", "O", radius=42), _points(), 80.0) == 42.0
    assert circle_radius(Circle("c2", "O"), _points(), 80.0) == 80.0
    assert circle_radius(Circle("c3", "O", radius=0), _points(), 80.0) == 80.0


def test_missing_circumference_point_collapses_radius():
    circle = Circle("c1", "O", radius=30, point_on_circle_id="Z")

    assert circle_radius(circle, _points(), 80.0) == 0.0


def test_label_offset_defaults_to_zero():
    point = Point("A", "A", 1, 2)

    assert point.label_offset == (0.0, 0.0)
    assert point.position == (1.0, 2.0)


def test_find_point_prefers_first_declaration():
    first = Point("A", "A", 0, 0)
    doc = GeometryDocument(points=[first, Point("A", "A'", 5, 5)])

    assert doc.find_point("A") is first
    assert doc.point_map()["A"] is first
    assert doc.find_point("Z") is None
    assert doc.find_point(None) is None


def test_other_end_and_incident_lines():
    doc = GeometryDocument(
        lines=[Line("l1", "A", "B"), Line("l2", "C", "A"), Line("l3", "B", "C")]
    )

    assert [line.id for line in doc.incident_lines("A")] == ["l1", "l2"]
    assert doc.lines[1].other_end("A") == "C"
    assert doc.lines[2].other_end("A") is None


def test_hatched_area_boundary_defaults_to_closed_polygon():
    area = HatchedArea("h1", point_ids=["A", "B", "C"])

    assert area.boundary() == [
        LineSegment("A", "B"),
        LineSegment("B", "C"),
        LineSegment("C", "A"),
    ]


def test_hatched_area_explicit_segments_win():
    segments = [LineSegment("A", "B"), ArcSegment("B", "A", center_id="O", is_clockwise=True)]
    area = HatchedArea("h1", point_ids=["A", "B", "C"], segments=segments)

    assert area.boundary() == segments
    assert HatchedArea("h2", point_ids=["A"]).boundary() == []
