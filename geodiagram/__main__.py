import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from geodiagram import (
    ValidationError,
    check_references,
    compute_transform,
    dump_document,
    generate_svg_document,
    nudge_label,
    parse_document,
)
from geodiagram.interaction import normalize_direction

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _parse_nudge(value: str) -> Optional[Tuple[str, str]]:
    point_id, sep, direction = value.rpartition(":")
    if not sep or not point_id.strip():
        logger.warning("Nudge %r must look like POINT:DIRECTION", value)
        return None
    try:
        return (point_id.strip(), normalize_direction(direction))
    except ValueError as exc:
        logger.warning("Ignoring nudge %r: %s", value, exc)
        return None


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Render geometry figures to SVG")
    parser.add_argument("path", help="Path to the figure JSON document")
    parser.add_argument(
        "--output",
        help="Write the SVG document to this path (default: stdout)",
    )
    parser.add_argument(
        "--select",
        help="Point id to highlight as selected",
    )
    parser.add_argument(
        "--interactive",
        action="store_true",
        help="Draw the label nudge controls around the selected point",
    )
    parser.add_argument(
        "--nudge",
        action="append",
        default=[],
        metavar="POINT:DIRECTION",
        help="Nudge a label before rendering, e.g. A:up (repeatable)",
    )
    parser.add_argument(
        "--pixel-scale",
        type=float,
        help="Set explicit SVG width/height as a multiple of the 400 unit canvas",
    )
    parser.add_argument(
        "--write-json",
        help="Write the (nudged) figure document back to this path",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    text = Path(args.path).read_text(encoding="utf-8")
    logger.info("Parsing figure from %s", args.path)
    try:
        document = parse_document(text)
    except ValidationError as exc:
        logger.error("Malformed figure document: %s", exc)
        raise SystemExit(1)

    for warning in check_references(document):
        logger.warning("%s", warning)

    nudges: List[Tuple[str, str]] = [n for n in (_parse_nudge(v) for v in args.nudge) if n]
    for point_id, direction in nudges:
        if document.find_point(point_id) is None:
            logger.warning("Cannot nudge unknown point %s", point_id)
            continue
        nudge_label(document, point_id, direction)

    transform = compute_transform(document)
    logger.info(
        "Fitted transform: translate=(%.3f, %.3f) scale=%.4f",
        transform.translate_x,
        transform.translate_y,
        transform.scale,
    )
    svg = generate_svg_document(
        document,
        transform,
        selected_point_id=args.select,
        interactive=args.interactive,
        pixel_scale=args.pixel_scale,
    )

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(svg, encoding="utf-8")
        logger.info("SVG document written to %s", output_path)
    else:
        sys.stdout.write(svg)

    if args.write_json:
        json_path = Path(args.write_json)
        json_path.parent.mkdir(parents=True, exist_ok=True)
        json_path.write_text(dump_document(document) + "\n", encoding="utf-8")
        logger.info("Figure document written to %s", json_path)


if __name__ == "__main__":
    main(sys.argv[1:])
