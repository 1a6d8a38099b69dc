from dataclasses import dataclass
from xml.etree import ElementTree as ET

from pptx2json.extractors.color import resolve_color
from pptx2json.extractors.theme import Theme
from pptx2json.namespaces import emu_to_points, find
from pptx2json.resolve.placeholders import PlaceholderChain

# prstDash value -> (CSS border type, SVG stroke-dasharray)
DASH_STYLES = {
    "solid": ("solid", "0"),
    "dash": ("dashed", "5"),
    "dashDot": ("dashed", "5, 5, 1, 5"),
    "dot": ("dotted", "1, 5"),
    "lgDash": ("dashed", "10, 5"),
    "lgDashDot": ("dashed", "10, 5, 1, 5"),
    "lgDashDotDot": ("dashed", "10, 5, 1, 5, 1, 5"),
    "sysDash": ("dashed", "5, 2"),
    "sysDot": ("dotted", "2, 5"),
    "sysDashDot": ("dashed", "5, 5, 5, 5"),
    "sysDashDotDot": ("dashed", "5, 5, 1, 5, 1, 5"),
}


@dataclass
class Border:
    color: str = ""
    width: float = 0
    type: str = "solid"
    stroke_dasharray: str = "0"


def _line_border(ln: ET.Element | None, theme: Theme, ph_color: str | None) -> Border:
    border = Border()
    if ln is None:
        return border
    if find(ln, "a:noFill") is not None:
        return border

    if ln.get("w"):
        border.width = emu_to_points(ln.get("w"))
    color = resolve_color(find(ln, "a:solidFill"), theme, ph_color)
    if color is None:
        color = resolve_color(find(ln, "a:gradFill/a:gsLst/a:gs"), theme, ph_color)
    border.color = color or ph_color or ""

    dash = find(ln, "a:prstDash")
    if dash is not None:
        border.type, border.stroke_dasharray = DASH_STYLES.get(
            dash.get("val", "solid"), DASH_STYLES["solid"]
        )
    return border


def resolve_border(
    node: ET.Element,
    chain: PlaceholderChain | None,
    theme: Theme,
) -> Border:
    """
    Resolve the outline of a shape.

    The first ``p:spPr/a:ln`` along the chain is used; without one the
    theme line style named by ``p:style/a:lnRef`` applies, colored by the
    reference's own color. Shapes without any outline get a zero width.
    """
    levels = chain.levels() if chain is not None else (node,)
    for level in levels:
        ln = find(level, "p:spPr/a:ln")
        if ln is None:
            continue
        ln_ref = find(node, "p:style/a:lnRef")
        ph_color = resolve_color(ln_ref, theme)
        border = _line_border(ln, theme, ph_color)
        if not border.width and border.color:
            themed = _themed_line(ln_ref, theme)
            if themed is not None and themed.get("w"):
                border.width = emu_to_points(themed.get("w"))
        return border

    ln_ref = find(node, "p:style/a:lnRef")
    if ln_ref is None:
        return Border()
    ph_color = resolve_color(ln_ref, theme)
    return _line_border(_themed_line(ln_ref, theme), theme, ph_color)


def _themed_line(ln_ref: ET.Element | None, theme: Theme) -> ET.Element | None:
    if ln_ref is None:
        return None
    idx = int(ln_ref.get("idx", "0"))
    if 0 < idx <= len(theme.line_styles):
        return theme.line_styles[idx - 1]
    return None


def resolve_table_border(tc_bdr: ET.Element | None, theme: Theme) -> Border | None:
    """
    Reduce a table style ``a:tcBdr`` to one border.

    The first side defined among bottom, left, right and top is used.
    """
    if tc_bdr is None:
        return None
    for side in ("a:bottom", "a:left", "a:right", "a:top"):
        side_node = find(tc_bdr, side)
        if side_node is None:
            continue
        ln = find(side_node, "a:ln")
        if ln is not None:
            return _line_border(ln, theme, None)
        ln_ref = find(side_node, "a:lnRef")
        if ln_ref is not None:
            return _line_border(
                _themed_line(ln_ref, theme), theme, resolve_color(ln_ref, theme)
            )
    return None
