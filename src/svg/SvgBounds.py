import logging
from typing import Any, Iterator, Optional, Tuple

from svgelements import SVG, Shape

from calc.Calculator import Calculator
from geometry.GeoUtil import GeoUtil

log = logging.getLogger(__name__)

Box = Tuple[float, float, float, float]


class SvgBounds:
    """SVG document extents -> the ux, uy, w, h variables of a calculator."""

    @staticmethod
    def _walk_shapes(node: Any) -> Iterator[Shape]:
        if isinstance(node, Shape):
            yield node
            return
        if hasattr(node, "__iter__"):
            for ch in node:
                yield from SvgBounds._walk_shapes(ch)

    @staticmethod
    def bounds(doc: SVG) -> Box:
        """Union bounding box (x, y, width, height) of all shapes, transforms applied."""
        minx = miny = maxx = maxy = None
        for shape in SvgBounds._walk_shapes(doc):
            bb: Optional[Tuple[float, float, float, float]] = shape.bbox()
            if bb is None:
                continue
            x0, y0, x1, y1 = bb
            minx = x0 if minx is None else min(minx, x0)
            miny = y0 if miny is None else min(miny, y0)
            maxx = x1 if maxx is None else max(maxx, x1)
            maxy = y1 if maxy is None else max(maxy, y1)
        if minx is not None:
            return minx, miny, maxx - minx, maxy - miny

        vb = getattr(doc, "viewbox", None)
        if vb is not None and getattr(vb, "width", None) is not None:
            return (GeoUtil.safe_to_float(vb.x), GeoUtil.safe_to_float(vb.y),
                    GeoUtil.safe_to_float(vb.width), GeoUtil.safe_to_float(vb.height))
        return (0.0, 0.0,
                GeoUtil.safe_to_float(getattr(doc, "width", None)),
                GeoUtil.safe_to_float(getattr(doc, "height", None)))

    @staticmethod
    def load(svg_path: str) -> Box:
        box = SvgBounds.bounds(SVG.parse(svg_path))
        log.info("bounds of %s: x=%g y=%g w=%g h=%g", svg_path, *box)
        return box

    @staticmethod
    def publish(calc: Calculator, box: Box) -> Calculator:
        ux, uy, w, h = box
        calc.set_variable("ux", ux)
        calc.set_variable("uy", uy)
        calc.set_variable("w", w)
        calc.set_variable("h", h)
        return calc
