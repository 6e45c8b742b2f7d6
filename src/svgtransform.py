from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence, Tuple

from calc.Calculator import Calculator
from calc.CalculatorError import CalculatorError
from export.MatrixExporter import MatrixExporter
from geometry.GeoUtil import GeoUtil
from geometry.PointFloat import PointFloat
from svg.SvgBounds import SvgBounds
from transform.Matrix import Matrix
from transform.TransformSyntaxError import TransformSyntaxError

log = logging.getLogger(__name__)


def parse_variable(text: str) -> Tuple[str, float]:
    """'name=value' -> (name, value)"""
    name, sep, value = text.partition("=")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got '{text}'")
    try:
        return name.strip(), float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{value}' is not a number") from None


def parse_point(text: str) -> PointFloat:
    """'x,y' -> PointFloat"""
    parts = text.split(",")
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"expected X,Y, got '{text}'")
    try:
        return PointFloat(float(parts[0]), float(parts[1]))
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{text}' is not a point") from None


def build_calculator(svg: Optional[str], variables: List[Tuple[str, float]]) -> Tuple[Calculator, Tuple[float, float, float, float]]:
    calc = Calculator()
    box = (0.0, 0.0, 0.0, 0.0)
    if svg:
        box = SvgBounds.load(svg)
    SvgBounds.publish(calc, box)
    for name, value in variables:
        calc.set_variable(name, value)
    box = (calc.lookup("ux"), calc.lookup("uy"), calc.lookup("w"), calc.lookup("h"))
    return calc, box


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = argparse.ArgumentParser(
        description="Transformation commands (e.g. 'T 10 20 R 45 S 2') -> SVG matrix")
    ap.add_argument("commands", help="Transformation command string")
    ap.add_argument("--svg", metavar="FILE", help="SVG file whose bounding box sets ux, uy, w, h")
    ap.add_argument("--var", dest="variables", metavar="NAME=VALUE", type=parse_variable, action="append",
                    default=[], help="Define a calculator variable (repeatable)")
    ap.add_argument("--point", dest="points", metavar="X,Y", type=parse_point, action="append",
                    default=[], help="Map a point through the matrix (repeatable)")
    ap.add_argument("--debug", action="store_true", help="Also print the raw 3x3 matrix")
    ap.add_argument("--export-json", metavar="PATH", help="Write the matrix as JSON (use '-' for stdout)")
    ap.add_argument("--view", action="store_true", help="Plot the bounding box before and after the transform")
    ap.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        calc, box = build_calculator(args.svg, args.variables)
        matrix = Matrix.from_commands(args.commands, calc)
    except (TransformSyntaxError, CalculatorError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    log.info("parsed %r -> %s", args.commands, matrix.to_debug_string())
    print(matrix.to_svg())
    if args.debug:
        print(matrix.to_debug_string())
    for p in args.points:
        q = matrix.apply(p)
        print(f"{GeoUtil.format_number(p.x)},{GeoUtil.format_number(p.y)} -> "
              f"{GeoUtil.format_number(q.x)},{GeoUtil.format_number(q.y)}")

    if args.export_json:
        MatrixExporter.export(matrix, args.export_json)

    if args.view:
        from view.TransformPreview import TransformPreview
        TransformPreview.show(matrix, box)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
