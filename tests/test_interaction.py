import json

import pytest

from geodiagram import ValidationError
from geodiagram.codec import document_to_dict, dump_document
from geodiagram.interaction import (
    DiagramSession,
    apply_label_offset,
    logical_to_screen,
    normalize_direction,
    nudge_label,
    screen_to_logical,
)
from geodiagram.model import Circle, GeometryDocument, Line, Point
from geodiagram.viewport import ViewTransform, compute_transform


def _doc() -> GeometryDocument:
    return GeometryDocument(
        points=[
            Point("A", "A", 50, 200),
            Point("B", "B", 350, 200),
            Point("O", "O", 200, 200),
        ],
        lines=[Line("l1", "A", "B")],
        circles=[Circle("c1", "O", point_on_circle_id="A")],
    )


def test_apply_label_offset_is_additive_and_commutative():
    stepwise = _doc()
    apply_label_offset(stepwise, "A", 1.5, 2)
    apply_label_offset(stepwise, "A", -4, 3.25)

    combined = _doc()
    apply_label_offset(combined, "A", 1.5 - 4, 2 + 3.25)

    swapped = _doc()
    apply_label_offset(swapped, "A", -4, 3.25)
    apply_label_offset(swapped, "A", 1.5, 2)

    expected = (-2.5, 5.25)
    assert stepwise.find_point("A").label_offset == pytest.approx(expected)
    assert combined.find_point("A").label_offset == pytest.approx(expected)
    assert swapped.find_point("A").label_offset == pytest.approx(expected)


def test_apply_label_offset_mutates_and_returns_same_document():
    doc = _doc()

    result = apply_label_offset(doc, "B", 2, -2)

    assert result is doc
    assert doc.find_point("B").label_offset_x == 2
    assert doc.find_point("B").label_offset_y == -2


def test_unknown_point_is_a_no_op():
    doc = _doc()
    before = document_to_dict(doc)

    result = apply_label_offset(doc, "Z", 10, 10)

    assert result is doc
    assert document_to_dict(doc) == before


def test_offsets_are_not_clamped():
    doc = _doc()

    apply_label_offset(doc, "A", 1e6, -1e6)

    assert doc.find_point("A").label_offset == (1e6, -1e6)


@pytest.mark.parametrize(
    "direction, expected",
    [("up", (0, -2)), ("right", (2, 0)), ("down", (0, 2)), ("left", (-2, 0)), ("N", (0, -2)), ("w", (-2, 0))],
)
def test_nudge_label_moves_two_units(direction, expected):
    doc = _doc()

    nudge_label(doc, "O", direction)

    assert doc.find_point("O").label_offset == expected


def test_unknown_direction_is_rejected():
    with pytest.raises(ValueError):
        normalize_direction("sideways")
    with pytest.raises(ValueError):
        nudge_label(_doc(), "A", "diagonal")


def test_screen_to_logical_normalises_then_inverts():
    transform = ViewTransform(translate_x=10.0, translate_y=20.0, scale=2.0)

    # displayed at 800x800 pixels, so screen units are half canvas units
    x, y = screen_to_logical(100.0, 200.0, 800.0, 800.0, transform)

    assert (x, y) == pytest.approx((20.0, 40.0))


@pytest.mark.parametrize("viewport", [(400.0, 400.0), (1024.0, 768.0), (133.0, 977.0)])
@pytest.mark.parametrize("point", [(50.0, 200.0), (-12.5, 3000.0), (0.0, 0.0)])
def test_screen_mapping_round_trip(viewport, point):
    transform = compute_transform(_doc())

    screen = logical_to_screen(point[0], point[1], viewport[0], viewport[1], transform)
    back = screen_to_logical(screen[0], screen[1], viewport[0], viewport[1], transform)

    assert back == pytest.approx(point)


def test_zero_viewport_is_rejected():
    with pytest.raises(ValueError):
        screen_to_logical(1.0, 1.0, 0.0, 100.0, ViewTransform())


@pytest.mark.parametrize(
    "text",
    [
        '{"points": [',
        '{"points": [{"id": "A", "x": ' + "9" * 400 + ', "y": 0}]}',
    ],
)
def test_session_keeps_previous_document_on_bad_text(text):
    session = DiagramSession.from_text(dump_document(_doc()))
    previous = session.document

    with pytest.raises(ValidationError):
        session.commit_text(text)

    assert session.document is previous
    assert session.text == text


def test_session_commit_replaces_document_and_transform():
    session = DiagramSession(_doc())
    small = GeometryDocument(points=[Point("P", "P", 0, 0)])

    session.commit_text(dump_document(small))

    assert [p.id for p in session.document.points] == ["P"]
    assert session.transform == compute_transform(session.document)


def test_session_selection():
    session = DiagramSession(_doc())

    assert session.select_point("A") == "A"
    assert session.select_point("Z") is None
    assert session.selected_point_id is None
    session.select_point("B")
    session.clear_selection()
    assert session.selected_point_id is None


def test_commit_drops_selection_of_removed_point():
    session = DiagramSession(_doc())
    session.select_point("A")

    session.commit_text(dump_document(GeometryDocument(points=[Point("B", "B", 0, 0)])))

    assert session.selected_point_id is None


def test_session_nudge_updates_text_and_transform():
    session = DiagramSession(_doc())

    assert session.nudge("up") is False

    session.select_point("A")
    assert session.nudge("left") is True
    assert session.nudge("left") is True

    assert session.document.find_point("A").label_offset == (-4.0, 0.0)
    staged = json.loads(session.text)
    assert staged["points"][0]["labelOffsetX"] == -4.0
    assert session.transform == compute_transform(session.document)


def test_session_click_uses_displayed_transform():
    session = DiagramSession(_doc())
    session.render()
    t = session.transform
    screen = logical_to_screen(50.0, 200.0, 800.0, 600.0, t)

    assert session.click(screen[0], screen[1], 800.0, 600.0) == pytest.approx((50.0, 200.0))


def test_session_render_shows_controls_for_selection():
    session = DiagramSession(_doc())
    session.select_point("O")

    assert 'class="label-controls"' in session.render()
    assert 'class="label-controls"' not in session.render(interactive=False)
