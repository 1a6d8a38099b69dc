import logging
from typing import Callable, Optional
from xml.etree import ElementTree as ET

from pptx2json.data_types import SlideFill
from pptx2json.extractors.color import resolve_color
from pptx2json.extractors.theme import Theme
from pptx2json.namespaces import A_NS, R_EMBED, find, findall, local_name
from pptx2json.resolve.geometry import angle_to_degrees
from pptx2json.resolve.placeholders import PlaceholderChain

logger = logging.getLogger(__name__)

_FILL_TAGS = frozenset(
    f"{A_NS}{name}"
    for name in ("noFill", "solidFill", "gradFill", "pattFill", "blipFill", "grpFill")
)

# Loads an embedded image by relationship id of a given level, as a data URI
ImageLoader = Callable[[int, str], Optional[str]]


def find_fill_element(parent: ET.Element | None) -> ET.Element | None:
    """Return the first fill element directly below ``parent``."""
    if parent is None:
        return None
    for child in parent:
        if child.tag in _FILL_TAGS:
            return child
    return None


def fill_color(
    fill: ET.Element | None, theme: Theme, ph_color: str | None = None
) -> str | None:
    """
    Reduce a fill element to a single color.

    noFill resolves to "" (explicitly transparent); gradients use their
    first stop and patterns their foreground color. Picture and group fills
    have no color of their own and resolve to None.
    """
    if fill is None:
        return None
    kind = local_name(fill.tag)
    if kind == "noFill":
        return ""
    if kind == "solidFill":
        return resolve_color(fill, theme, ph_color)
    if kind == "gradFill":
        stops = findall(fill, "a:gsLst/a:gs")
        return resolve_color(stops[0], theme, ph_color) if stops else None
    if kind == "pattFill":
        return resolve_color(find(fill, "a:fgClr"), theme, ph_color)
    return None


def style_reference_fill(
    style_ref: ET.Element | None, theme: Theme
) -> ET.Element | None:
    """
    Resolve a ``a:fillRef``/``p:bgRef`` index to the theme fill it names.

    Index 0 means no fill; 1-999 index the fill style list and 1001+ the
    background fill style list.
    """
    if style_ref is None:
        return None
    idx = int(style_ref.get("idx", "0"))
    if idx >= 1001:
        styles, position = theme.bg_fill_styles, idx - 1001
    elif idx > 0:
        styles, position = theme.fill_styles, idx - 1
    else:
        return None
    if 0 <= position < len(styles):
        return styles[position]
    return None


def resolve_shape_fill(
    node: ET.Element, chain: PlaceholderChain | None, theme: Theme
) -> str | None:
    """
    Resolve the fill color of a shape.

    The shape's own ``p:spPr`` fill wins, then its layout and master
    counterparts, then the theme fill named by ``p:style/a:fillRef`` (whose
    own color replaces ``phClr``).
    """
    levels = chain.levels() if chain is not None else (node,)
    for level in levels:
        fill = find_fill_element(find(level, "p:spPr"))
        if fill is not None:
            return fill_color(fill, theme)

    fill_ref = find(node, "p:style/a:fillRef")
    if fill_ref is not None:
        ph_color = resolve_color(fill_ref, theme)
        themed = style_reference_fill(fill_ref, theme)
        if themed is not None:
            return fill_color(themed, theme, ph_color)
        return ph_color
    return None


def _gradient(fill: ET.Element, theme: Theme, ph_color: str | None) -> dict:
    colors = []
    for stop in findall(fill, "a:gsLst/a:gs"):
        color = resolve_color(stop, theme, ph_color)
        if color is None:
            continue
        pos = int(stop.get("pos", "0")) / 1000
        colors.append({"pos": f"{pos:g}%", "color": color})
    lin = find(fill, "a:lin")
    return {
        "path": "line" if lin is not None or find(fill, "a:path") is None else "circle",
        "rot": angle_to_degrees(lin.get("ang")) if lin is not None else 0,
        "colors": colors,
    }


def _background_fill(
    fill: ET.Element,
    level: int,
    theme: Theme,
    load_image: ImageLoader,
    ph_color: str | None = None,
) -> SlideFill | None:
    kind = local_name(fill.tag)
    if kind == "gradFill":
        return SlideFill(type="gradient", value=_gradient(fill, theme, ph_color))
    if kind == "blipFill":
        rid = find(fill, "a:blip")
        src = load_image(level, rid.get(R_EMBED)) if rid is not None else None
        return SlideFill(type="image", value={"picBase64": src}) if src else None
    color = fill_color(fill, theme, ph_color)
    if color is None:
        return None
    return SlideFill(type="color", value=color)


def resolve_slide_fill(
    roots: tuple[ET.Element | None, ...],
    theme: Theme,
    load_image: ImageLoader,
) -> SlideFill | None:
    """
    Resolve the background of a slide.

    Args:
        roots: Slide, layout and master part roots in lookup order.
        theme: Theme of the slide's master.
        load_image: Loader for picture backgrounds; receives the index of
            the level in ``roots`` (relationship ids are per part) and the id.
            Fills taken from the theme's background styles belong to the
            theme part and are loaded with level ``len(roots)``.

    Returns:
        The first background defined along the chain, or None.
    """
    theme_level = len(roots)
    for level, root in enumerate(roots):
        bg = find(root, "p:cSld/p:bg")
        if bg is None:
            continue
        bg_pr = find(bg, "p:bgPr")
        if bg_pr is not None:
            fill = find_fill_element(bg_pr)
            if fill is not None:
                return _background_fill(fill, level, theme, load_image)
        bg_ref = find(bg, "p:bgRef")
        if bg_ref is not None:
            ph_color = resolve_color(bg_ref, theme)
            themed = style_reference_fill(bg_ref, theme)
            if themed is None:
                return SlideFill(type="color", value=ph_color) if ph_color else None
            return _background_fill(themed, theme_level, theme, load_image, ph_color)
    logger.debug("No slide background defined along the chain")
    return None
