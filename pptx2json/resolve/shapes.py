import logging
from xml.etree import ElementTree as ET

from pptx2json.data_types import ShapeElement, TextElement
from pptx2json.exceptions import MalformedTreeError
from pptx2json.extractors.align import resolve_vertical_align
from pptx2json.extractors.border import resolve_border
from pptx2json.extractors.custom_path import build_custom_path
from pptx2json.extractors.fill import resolve_shape_fill
from pptx2json.extractors.shadow import resolve_shadow
from pptx2json.extractors.text import format_text_body, has_valid_text
from pptx2json.namespaces import find, get_attr
from pptx2json.resolve.context import SlideContext
from pptx2json.resolve.geometry import (
    angle_to_degrees,
    resolve_flips,
    resolve_position,
    resolve_rotation,
    resolve_size,
)
from pptx2json.resolve.placeholders import PlaceholderChain, placeholder_of

logger = logging.getLogger(__name__)

_XFRM = "p:spPr/a:xfrm"


def resolve_placeholder(
    node: ET.Element, ctx: SlideContext
) -> tuple[PlaceholderChain, str]:
    """
    Find the layout and master counterparts of a shape and its effective type.

    The type is the shape's own ``ph@type``; a text box is "text"; otherwise
    the counterparts' types are used, and finally "obj" ("diagram" for shapes
    of a diagram drawing).
    """
    _, ph_idx, ph_type = placeholder_of(node)
    layout = ctx.layout_index.lookup(ph_type, ph_idx)
    master = ctx.master_index.lookup(ph_type, ph_idx)

    if not ph_type and get_attr(node, "p:nvSpPr/p:cNvSpPr", "txBox") == "1":
        ph_type = "text"
    if not ph_type and layout is not None:
        ph_type = placeholder_of(layout)[2]
    if not ph_type and master is not None:
        ph_type = placeholder_of(master)[2]
    if not ph_type:
        ph_type = "diagram" if ctx.in_diagram else "obj"

    return PlaceholderChain(node, layout, master), ph_type


def _text_rotation(node: ET.Element, shape_rotation: float) -> float | None:
    tx_xfrm = find(node, "p:txXfrm")
    if tx_xfrm is None:
        return shape_rotation
    if tx_xfrm.get("rot"):
        return angle_to_degrees(tx_xfrm.get("rot")) + 90
    return None


def generate_shape(
    node: ET.Element,
    chain: PlaceholderChain,
    ph_type: str | None,
    order: int,
    ctx: SlideContext,
) -> ShapeElement | TextElement:
    """
    Build the element of a ``p:sp`` or ``p:cxnSp`` node.

    Custom geometry becomes a "custom" shape with an SVG path and preset
    geometry of a plain object becomes a preset shape; both drop text that
    is only markup and whitespace. Everything else is a text element.

    Raises:
        MalformedTreeError: A custom geometry shape has no resolvable size.
    """
    xfrms = [find(level, _XFRM) for level in chain.levels()]
    position = resolve_position(*xfrms)
    size = resolve_size(*xfrms)
    flip_h, flip_v = resolve_flips(xfrms[0])
    rotation = resolve_rotation(xfrms[0])

    border = resolve_border(node, chain, ctx.theme)
    common = dict(
        left=position.left,
        top=position.top,
        width=size.width,
        height=size.height,
        order=order,
        name=get_attr(node, "*/p:cNvPr", "name") or "",
        content=format_text_body(find(node, "p:txBody"), chain, ph_type, ctx.text),
        fill_color=resolve_shape_fill(node, chain, ctx.theme) or "",
        border_color=border.color,
        border_width=border.width,
        border_type=border.type,
        border_stroke_dasharray=border.stroke_dasharray,
        is_flip_h=flip_h,
        is_flip_v=flip_v,
        v_align=resolve_vertical_align(chain),
        shadow=resolve_shadow(node, ctx.theme),
    )

    cust_geom = find(node, "p:spPr/a:custGeom")
    preset = get_attr(node, "p:spPr/a:prstGeom", "prst")

    if cust_geom is not None and ph_type != "diagram":
        if size.width is None or size.height is None:
            raise MalformedTreeError(None, "custom geometry shape has no extent")
        if not has_valid_text(common["content"]):
            common["content"] = ""
        return ShapeElement(
            rotate=rotation,
            shap_type="custom",
            path=build_custom_path(cust_geom, size.width, size.height),
            **common,
        )

    if preset and ph_type in (None, "obj"):
        if not has_valid_text(common["content"]):
            common["content"] = ""
        return ShapeElement(rotate=rotation, shap_type=preset, **common)

    return TextElement(
        rotate=_text_rotation(node, rotation),
        is_vertical=get_attr(node, "p:txBody/a:bodyPr", "vert") == "eaVert",
        **common,
    )
