"""
DrawingML color resolution.

A color is expressed by one of the ``a:*Clr`` elements, optionally followed
by transforms (lumMod, lumOff, tint, shade, satMod) applied in document
order. Scheme colors are resolved through the Theme; ``phClr`` stands for the
color carried by the style reference that points at a theme style.
"""

import colorsys
import logging
from xml.etree import ElementTree as ET

from pptx2json.extractors.theme import Theme
from pptx2json.namespaces import A_NS, local_name

logger = logging.getLogger(__name__)

COLOR_TAGS = frozenset(
    f"{A_NS}{name}"
    for name in ("srgbClr", "schemeClr", "sysClr", "prstClr", "scrgbClr", "hslClr")
)

# Subset of the preset color names actually seen in presentations
PRESET_COLORS = {
    "black": "000000",
    "white": "FFFFFF",
    "red": "FF0000",
    "green": "008000",
    "blue": "0000FF",
    "yellow": "FFFF00",
    "cyan": "00FFFF",
    "magenta": "FF00FF",
    "gray": "808080",
    "grey": "808080",
    "darkGray": "A9A9A9",
    "lightGray": "D3D3D3",
    "orange": "FFA500",
    "purple": "800080",
    "brown": "A52A2A",
    "navy": "000080",
    "silver": "C0C0C0",
    "gold": "FFD700",
}


def find_color_element(parent: ET.Element | None) -> ET.Element | None:
    """Return the first color element directly below ``parent``."""
    if parent is None:
        return None
    for child in parent:
        if child.tag in COLOR_TAGS:
            return child
    return None


def _hex_to_rgb(value: str) -> tuple[float, float, float]:
    return tuple(int(value[i : i + 2], 16) / 255 for i in (0, 2, 4))


def _rgb_to_hex(rgb: tuple[float, float, float]) -> str:
    return "".join(f"{round(min(max(c, 0.0), 1.0) * 255):02X}" for c in rgb)


def _percent(node: ET.Element) -> float:
    return int(node.get("val", "100000")) / 100000


def _base_hex(color: ET.Element, theme: Theme, ph_color: str | None) -> str | None:
    name = local_name(color.tag)
    if name == "srgbClr":
        return (color.get("val") or "").upper() or None
    if name == "schemeClr":
        val = color.get("val")
        if val == "phClr":
            return ph_color
        return theme.scheme_color(val) if val else None
    if name == "sysClr":
        return (color.get("lastClr") or "").upper() or None
    if name == "prstClr":
        return PRESET_COLORS.get(color.get("val", ""))
    if name == "scrgbClr":
        rgb = tuple(int(color.get(k, "0")) / 100000 for k in ("r", "g", "b"))
        return _rgb_to_hex(rgb)
    if name == "hslClr":
        hue = int(color.get("hue", "0")) / 60000 / 360
        sat = int(color.get("sat", "0")) / 100000
        lum = int(color.get("lum", "0")) / 100000
        return _rgb_to_hex(colorsys.hls_to_rgb(hue, lum, sat))
    return None


def _apply_transforms(hex_value: str, color: ET.Element) -> str:
    rgb = _hex_to_rgb(hex_value)
    for transform in color:
        name = local_name(transform.tag)
        if name in ("lumMod", "lumOff", "satMod"):
            h, l, s = colorsys.rgb_to_hls(*rgb)
            if name == "lumMod":
                l *= _percent(transform)
            elif name == "lumOff":
                l += _percent(transform)
            else:
                s *= _percent(transform)
            rgb = colorsys.hls_to_rgb(h, min(max(l, 0.0), 1.0), min(max(s, 0.0), 1.0))
        elif name == "shade":
            factor = _percent(transform)
            rgb = tuple(c * factor for c in rgb)
        elif name == "tint":
            factor = _percent(transform)
            rgb = tuple(c * factor + (1 - factor) for c in rgb)
    return _rgb_to_hex(rgb)


def resolve_color(
    parent: ET.Element | None, theme: Theme, ph_color: str | None = None
) -> str | None:
    """
    Resolve the color element below ``parent`` to ``#RRGGBB``.

    Args:
        parent: An element holding a color (``a:solidFill``, ``a:fgClr``,
            ``a:gs``, ``a:fillRef`` ...).
        theme: Theme used for scheme colors.
        ph_color: Hex color substituted for ``phClr``.

    Returns:
        The color, or None if ``parent`` holds no resolvable color.
    """
    color = find_color_element(parent)
    if color is None:
        return None
    base = _base_hex(color, theme, (ph_color or "").lstrip("#") or None)
    if not base:
        logger.debug(f"Unresolvable color: {local_name(color.tag)} {color.attrib}")
        return None
    return f"#{_apply_transforms(base, color)}"
