"""
SVG path generation for custom geometry (``a:custGeom``).

Path coordinates live in the coordinate space of each ``a:path`` (its ``w``
and ``h`` attributes) and are scaled to the shape's size in points. Values
may name guides from ``a:avLst``/``a:gdLst``; those are evaluated with the
DrawingML guide formula language against the shape size in EMU.
"""

import logging
import math
from xml.etree import ElementTree as ET

from pptx2json.namespaces import (
    ANGLE_UNITS_PER_DEGREE,
    EMU_PER_POINT,
    find,
    findall,
    local_name,
)

logger = logging.getLogger(__name__)


def _builtin_guides(width: float, height: float) -> dict[str, float]:
    short, long = min(width, height), max(width, height)
    guides = {
        "w": width,
        "h": height,
        "l": 0,
        "t": 0,
        "r": width,
        "b": height,
        "hc": width / 2,
        "vc": height / 2,
        "ss": short,
        "ls": long,
        "cd2": 10800000,
        "cd4": 5400000,
        "cd8": 2700000,
        "3cd4": 16200000,
        "3cd8": 8100000,
        "5cd8": 13500000,
        "7cd8": 18900000,
    }
    for divisor in (2, 3, 4, 5, 6, 8, 10, 12, 16, 32):
        guides[f"wd{divisor}"] = width / divisor
        guides[f"hd{divisor}"] = height / divisor
        guides[f"ssd{divisor}"] = short / divisor
    return guides


def _angle(value: float) -> float:
    return math.radians(value / ANGLE_UNITS_PER_DEGREE)


class GuideEvaluator:
    """Evaluates shape guide formulas (``fmla``) in document order."""

    def __init__(self, width: float, height: float):
        self.values = _builtin_guides(width, height)

    def value(self, token: str | None) -> float:
        if token is None:
            return 0
        if token in self.values:
            return self.values[token]
        try:
            return float(token)
        except ValueError:
            logger.debug(f"Unknown guide reference: {token}")
            return 0

    def define(self, guide: ET.Element) -> None:
        name = guide.get("name")
        formula = (guide.get("fmla") or "").split()
        if not name or not formula:
            return
        args = [self.value(token) for token in formula[1:]]
        self.values[name] = self.evaluate(formula[0], args)

    def evaluate(self, op: str, args: list[float]) -> float:
        a, b, c = (args + [0, 0, 0])[:3]
        if op == "val":
            return a
        if op == "*/":
            return a * b / c if c else 0
        if op == "+-":
            return a + b - c
        if op == "+/":
            return (a + b) / c if c else 0
        if op == "?:":
            return b if a > 0 else c
        if op == "abs":
            return abs(a)
        if op == "at2":
            return math.degrees(math.atan2(b, a)) * ANGLE_UNITS_PER_DEGREE
        if op == "cat2":
            return a * math.cos(math.atan2(c, b))
        if op == "sat2":
            return a * math.sin(math.atan2(c, b))
        if op == "cos":
            return a * math.cos(_angle(b))
        if op == "sin":
            return a * math.sin(_angle(b))
        if op == "tan":
            return a * math.tan(_angle(b))
        if op == "max":
            return max(a, b)
        if op == "min":
            return min(a, b)
        if op == "mod":
            return math.sqrt(a * a + b * b + c * c)
        if op == "pin":
            return a if b < a else c if b > c else b
        if op == "sqrt":
            return math.sqrt(a) if a > 0 else 0
        logger.debug(f"Unknown guide operator: {op}")
        return 0


def _fmt(value: float) -> str:
    return f"{round(value, 3):g}"


def _point(node: ET.Element | None, guides: GuideEvaluator) -> tuple[float, float]:
    if node is None:
        return 0, 0
    return guides.value(node.get("x")), guides.value(node.get("y"))


def _path_commands(
    path: ET.Element, guides: GuideEvaluator, scale_x: float, scale_y: float
) -> list[str]:
    commands = []
    current = (0.0, 0.0)

    def emit(letter: str, *points: tuple[float, float]) -> None:
        coords = " ".join(f"{_fmt(x * scale_x)} {_fmt(y * scale_y)}" for x, y in points)
        commands.append(f"{letter} {coords}")

    for segment in path:
        kind = local_name(segment.tag)
        if kind in ("moveTo", "lnTo"):
            current = _point(find(segment, "a:pt"), guides)
            emit("M" if kind == "moveTo" else "L", current)
        elif kind in ("cubicBezTo", "quadBezTo"):
            points = [_point(pt, guides) for pt in findall(segment, "a:pt")]
            if not points:
                continue
            emit("C" if kind == "cubicBezTo" else "Q", *points)
            current = points[-1]
        elif kind == "arcTo":
            w_r = guides.value(segment.get("wR"))
            h_r = guides.value(segment.get("hR"))
            start = _angle(guides.value(segment.get("stAng")))
            swing = guides.value(segment.get("swAng"))
            end = start + _angle(swing)
            center_x = current[0] - w_r * math.cos(start)
            center_y = current[1] - h_r * math.sin(start)
            current = (center_x + w_r * math.cos(end), center_y + h_r * math.sin(end))
            large_arc = 1 if abs(swing) > 180 * ANGLE_UNITS_PER_DEGREE else 0
            sweep = 1 if swing > 0 else 0
            commands.append(
                f"A {_fmt(w_r * scale_x)} {_fmt(h_r * scale_y)} 0 {large_arc} {sweep} "
                f"{_fmt(current[0] * scale_x)} {_fmt(current[1] * scale_y)}"
            )
        elif kind == "close":
            commands.append("Z")
    return commands


def build_custom_path(cust_geom: ET.Element, width: float, height: float) -> str:
    """
    Build the SVG path data of a custom geometry.

    Args:
        cust_geom: The ``a:custGeom`` element.
        width: Resolved shape width in points.
        height: Resolved shape height in points.

    Returns:
        SVG path data in points, all sub-paths concatenated.
    """
    guides = GuideEvaluator(width * EMU_PER_POINT, height * EMU_PER_POINT)
    for guide in findall(cust_geom, "a:avLst/a:gd"):
        guides.define(guide)
    for guide in findall(cust_geom, "a:gdLst/a:gd"):
        guides.define(guide)

    commands = []
    for path in findall(cust_geom, "a:pathLst/a:path"):
        path_w = guides.value(path.get("w"))
        path_h = guides.value(path.get("h"))
        scale_x = width / path_w if path_w else 1 / EMU_PER_POINT
        scale_y = height / path_h if path_h else 1 / EMU_PER_POINT
        commands.extend(_path_commands(path, guides, scale_x, scale_y))
    return " ".join(commands)
