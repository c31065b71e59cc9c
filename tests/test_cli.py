import json

import pytest

import geodiagram.__main__ as cli


FIGURE = {
    "points": [
        {"id": "A", "label": "A", "x": 50, "y": 200, "labelOffsetX": 0, "labelOffsetY": 0},
        {"id": "B", "label": "B", "x": 350, "y": 200},
        {"id": "O", "label": "O", "x": 200, "y": 200},
    ],
    "lines": [
        {"id": "l1", "p1": "A", "p2": "B", "style": "solid"},
        {"id": "l2", "p1": "A", "p2": "Z", "style": "solid"},
    ],
    "circles": [{"id": "c1", "centerId": "O", "pointOnCircleId": "A"}],
    "angles": [],
    "equalSegments": [],
}


def _write_figure(tmp_path, payload=FIGURE):
    path = tmp_path / "figure.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_main_writes_svg_document(tmp_path):
    figure = _write_figure(tmp_path)
    output = tmp_path / "out" / "figure.svg"

    cli.main([str(figure), "--output", str(output), "--pixel-scale", "2"])

    svg = output.read_text(encoding="utf-8")
    assert svg.startswith("<?xml")
    assert 'width="800"' in svg
    assert 'data-id="l1"' in svg
    assert 'data-id="l2"' not in svg


def test_main_prints_to_stdout(tmp_path, capsys):
    figure = _write_figure(tmp_path)

    cli.main([str(figure), "--select", "A", "--interactive"])

    out = capsys.readouterr().out
    assert 'class="label-controls"' in out


def test_main_applies_nudges_and_writes_json(tmp_path):
    figure = _write_figure(tmp_path)
    updated = tmp_path / "updated.json"

    cli.main(
        [
            str(figure),
            "--output",
            str(tmp_path / "figure.svg"),
            "--nudge",
            "A:up",
            "--nudge",
            "A:up",
            "--nudge",
            "Z:left",
            "--nudge",
            "B:sideways",
            "--write-json",
            str(updated),
        ]
    )

    payload = json.loads(updated.read_text(encoding="utf-8"))
    assert payload["points"][0]["labelOffsetY"] == -4
    assert payload["points"][0]["labelOffsetX"] == 0
    assert "labelOffsetX" not in payload["points"][1]


def test_main_rejects_malformed_document(tmp_path):
    figure = tmp_path / "broken.json"
    figure.write_text('{"points": [{"id": "A"}]}', encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(figure)])

    assert excinfo.value.code == 1


def test_main_logs_dangling_references(tmp_path, monkeypatch):
    figure = _write_figure(tmp_path)
    messages = []
    monkeypatch.setattr(cli.logger, "warning", lambda msg, *args: messages.append(msg % args))

    cli.main([str(figure), "--output", str(tmp_path / "figure.svg")])

    assert any('missing point "Z"' in message for message in messages)
