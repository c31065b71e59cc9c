import pytest

from geodiagram.config import LayoutConfig, get_layout_config
from geodiagram.labels import label_layout
from geodiagram.model import Circle, GeometryDocument, Line, Point
from geodiagram.viewport import IDENTITY, ViewTransform, compute_extent, compute_transform


def _circle_doc() -> GeometryDocument:
    return GeometryDocument(
        points=[
            Point("A", "A", 50, 200),
            Point("B", "B", 350, 200),
            Point("O", "O", 200, 200),
        ],
        circles=[Circle("c1", "O", point_on_circle_id="A")],
    )


def _triangle_doc() -> GeometryDocument:
    return GeometryDocument(
        points=[
            Point("A", "A", 120, 60, label_offset_x=-8, label_offset_y=12),
            Point("B", "B", 60, 330),
            Point("C", "C", 340, 310),
            Point("H", "H", 120, 321),
        ],
        lines=[
            Line("l1", "A", "B"),
            Line("l2", "B", "C"),
            Line("l3", "C", "A"),
            Line("l4", "A", "H"),
        ],
    )


def _spread_doc() -> GeometryDocument:
    return GeometryDocument(
        points=[
            Point("P", "P", -1000, 40),
            Point("Q", "Q", 2500, -700),
            Point("R", "R", 300, 1900),
            Point("O", "O", 0, 0),
        ],
        lines=[Line("l1", "P", "Q"), Line("l2", "Q", "R")],
        circles=[Circle("c1", "O", radius=600)],
    )


def test_empty_document_uses_identity():
    transform = compute_transform(GeometryDocument())

    assert transform == ViewTransform(0.0, 0.0, 1.0)
    assert transform == IDENTITY


def test_example_figure_radius_and_scale():
    doc = _circle_doc()

    extent = compute_extent(doc)
    transform = compute_transform(doc)

    # A and B labels sit 30 units outside the diameter; the circle spans 50..350 vertically
    assert extent == pytest.approx((20.0, 50.0, 380.0, 350.0))
    assert transform.scale <= get_layout_config().max_scale
    assert transform.scale == pytest.approx(340.0 / 360.0)
    assert transform.translate_x == pytest.approx(200.0 - 200.0 * transform.scale)
    assert transform.translate_y == pytest.approx(200.0 - 200.0 * transform.scale)


def test_small_figure_is_capped():
    doc = GeometryDocument(points=[Point("A", "A", 0, 0), Point("B", "B", 10, 0)])

    assert compute_transform(doc).scale == pytest.approx(1.2)


def test_single_point_floors_zero_width():
    doc = GeometryDocument(points=[Point("A", "A", 5, 5)])

    transform = compute_transform(doc)

    assert transform.scale == pytest.approx(1.2)
    assert transform.translate_x == pytest.approx(200.0 - 5.0 * 1.2)
    assert transform.translate_y == pytest.approx(200.0 + 10.0 * 1.2)


def test_default_radius_extends_extent():
    doc = GeometryDocument(
        points=[Point("O", "O", 0, 0)],
        circles=[Circle("c1", "O")],
    )

    assert compute_extent(doc) == pytest.approx((-80.0, -80.0, 80.0, 80.0))


def test_circle_with_missing_center_is_ignored():
    doc = GeometryDocument(
        points=[Point("A", "A", 0, 0)],
        circles=[Circle("c1", "Z", radius=500)],
    )

    assert compute_extent(doc) == pytest.approx((0.0, -30.0, 0.0, 0.0))


@pytest.mark.parametrize("factory", [_circle_doc, _triangle_doc, _spread_doc])
def test_points_and_label_footprints_stay_inside_padded_canvas(factory):
    doc = factory()
    config = get_layout_config()
    transform = compute_transform(doc)
    low = config.padding / 2 - 1e-9
    high = config.view_size - config.padding / 2 + 1e-9

    samples = [p.position for p in doc.points]
    samples.extend(placement.footprint for placement in label_layout(doc).values())
    for x, y in samples:
        cx, cy = transform.to_canvas(x, y)
        assert low <= cx <= high
        assert low <= cy <= high


def test_custom_config_changes_fit():
    doc = _triangle_doc()
    config = LayoutConfig(view_size=800.0, padding=100.0, max_scale=10.0)

    transform = compute_transform(doc, config)
    extent = compute_extent(doc, config)
    width = extent[2] - extent[0]
    height = extent[3] - extent[1]

    assert transform.scale == pytest.approx(min(700.0 / width, 700.0 / height))


@pytest.mark.parametrize("point", [(0.0, 0.0), (123.5, -42.25), (-1e4, 3e3)])
def test_to_logical_inverts_to_canvas(point):
    transform = ViewTransform(translate_x=17.5, translate_y=-3.0, scale=0.75)

    x, y = transform.to_logical(*transform.to_canvas(*point))

    assert x == pytest.approx(point[0])
    assert y == pytest.approx(point[1])
