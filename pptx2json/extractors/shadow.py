import math
from xml.etree import ElementTree as ET

from pptx2json.data_types import Shadow
from pptx2json.extractors.color import resolve_color
from pptx2json.extractors.theme import Theme
from pptx2json.namespaces import ANGLE_UNITS_PER_DEGREE, emu_to_points, find


def resolve_shadow(node: ET.Element, theme: Theme) -> Shadow | None:
    """Convert ``p:spPr/a:effectLst/a:outerShdw`` to offsets, blur and color."""
    outer = find(node, "p:spPr/a:effectLst/a:outerShdw")
    if outer is None:
        return None

    distance = emu_to_points(outer.get("dist", "0"))
    direction = math.radians(int(outer.get("dir", "0")) / ANGLE_UNITS_PER_DEGREE)
    return Shadow(
        h=round(distance * math.cos(direction), 4),
        v=round(distance * math.sin(direction), 4),
        blur=emu_to_points(outer.get("blurRad", "0")),
        color=resolve_color(outer, theme) or "",
    )
