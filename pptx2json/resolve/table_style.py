"""
Conditional table styling.

A table names a style definition (``a:tblStyle`` in ``ppt/tableStyles.xml``)
and switches its regions on with six flags of its own ``a:tblPr``. For each
cell the applicable regions are listed in precedence order; every styled
field (fill, font color, bold) comes from the first region defining it.
The style definition element is shared by all tables using it and is only
read here; the flags travel next to it in a fresh ResolvedTableStyle.
"""

import logging
from dataclasses import dataclass, field
from xml.etree import ElementTree as ET

from pptx2json.data_types import TableCell
from pptx2json.extractors.color import resolve_color
from pptx2json.extractors.fill import (
    fill_color,
    find_fill_element,
    style_reference_fill,
)
from pptx2json.extractors.theme import Theme
from pptx2json.namespaces import find, findall, is_on

logger = logging.getLogger(__name__)

_CORNERS = (
    ("nwCell", "first_row", "first_col"),
    ("neCell", "first_row", "last_col"),
    ("swCell", "last_row", "first_col"),
    ("seCell", "last_row", "last_col"),
)


@dataclass(frozen=True)
class TableStyleFlags:
    first_row: bool = False
    first_col: bool = False
    last_row: bool = False
    last_col: bool = False
    band_row: bool = False
    band_col: bool = False

    @classmethod
    def from_tbl_pr(cls, tbl_pr: ET.Element | None) -> "TableStyleFlags":
        if tbl_pr is None:
            return cls()
        return cls(
            first_row=is_on(tbl_pr.get("firstRow")),
            first_col=is_on(tbl_pr.get("firstCol")),
            last_row=is_on(tbl_pr.get("lastRow")),
            last_col=is_on(tbl_pr.get("lastCol")),
            band_row=is_on(tbl_pr.get("bandRow")),
            band_col=is_on(tbl_pr.get("bandCol")),
        )


def _find_style(
    table_styles: ET.Element | None, style_id: str | None
) -> ET.Element | None:
    if not style_id:
        return None
    for style in findall(table_styles, "a:tblStyle"):
        if style.get("styleId") == style_id:
            return style
    logger.debug(f"Table style {style_id} not defined")
    return None


@dataclass(frozen=True)
class ResolvedTableStyle:
    definition: ET.Element | None = None
    flags: TableStyleFlags = field(default_factory=TableStyleFlags)

    @classmethod
    def build(
        cls, tbl_pr: ET.Element | None, table_styles: ET.Element | None
    ) -> "ResolvedTableStyle":
        """Pair the style named by ``a:tableStyleId`` with the table's flags."""
        style_id = find(tbl_pr, "a:tableStyleId")
        if style_id is not None and style_id.text:
            definition = _find_style(table_styles, style_id.text.strip())
        else:
            definition = None
        return cls(definition=definition, flags=TableStyleFlags.from_tbl_pr(tbl_pr))

    def region(self, name: str) -> ET.Element | None:
        return find(self.definition, f"a:{name}")

    def has_region(self, name: str) -> bool:
        return self.region(name) is not None

    def regions_for_cell(
        self, row: int, col: int, n_rows: int, n_cols: int
    ) -> list[str]:
        """
        Region names applying to a cell, highest precedence first.

        Corners need both boundary flags and a defined corner region. Row
        boundaries rank above column boundaries, column banding above row
        banding, and the whole-table region closes every list.
        """
        flags = self.flags
        at = {
            "first_row": flags.first_row and row == 0,
            "last_row": flags.last_row and row == n_rows - 1,
            "first_col": flags.first_col and col == 0,
            "last_col": flags.last_col and col == n_cols - 1,
        }

        regions = []
        for name, row_edge, col_edge in _CORNERS:
            if at[row_edge] and at[col_edge] and self.has_region(name):
                regions.append(name)

        if at["first_row"]:
            regions.append("firstRow")
        if at["last_row"]:
            regions.append("lastRow")
        if at["first_col"]:
            regions.append("firstCol")
        if at["last_col"]:
            regions.append("lastCol")

        if flags.band_col and not (at["first_col"] or at["last_col"]):
            regions.append(self._band(col - int(flags.first_col), "V"))
        if flags.band_row and not (at["first_row"] or at["last_row"]):
            regions.append(self._band(row - int(flags.first_row), "H"))

        regions.append("wholeTbl")
        return regions

    def _band(self, body_index: int, axis: str) -> str:
        # the second band alternates with the first; without it the first repeats
        if body_index % 2 == 1 and self.has_region(f"band2{axis}"):
            return f"band2{axis}"
        return f"band1{axis}"


def _region_fill(region: ET.Element | None, theme: Theme) -> str | None:
    tc_style = find(region, "a:tcStyle")
    if tc_style is None:
        return None
    fill = find_fill_element(find(tc_style, "a:fill"))
    if fill is not None:
        return fill_color(fill, theme)
    fill_ref = find(tc_style, "a:fillRef")
    if fill_ref is not None:
        ph_color = resolve_color(fill_ref, theme)
        themed = style_reference_fill(fill_ref, theme)
        return fill_color(themed, theme, ph_color) if themed is not None else ph_color
    return None


def _region_font_color(region: ET.Element | None, theme: Theme) -> str | None:
    tx_style = find(region, "a:tcTxStyle")
    if tx_style is None:
        return None
    color = resolve_color(tx_style, theme)
    if color is None:
        color = resolve_color(find(tx_style, "a:fontRef"), theme)
    return color


def _region_bold(region: ET.Element | None, theme: Theme) -> bool | None:
    tx_style = find(region, "a:tcTxStyle")
    if tx_style is None or tx_style.get("b") is None:
        return None
    return tx_style.get("b") == "on"


def table_background(style: ResolvedTableStyle, theme: Theme) -> str | None:
    """Fill color of ``a:tblBg``: a direct fill or a theme fill reference."""
    tbl_bg = style.region("tblBg")
    if tbl_bg is None:
        return None
    fill_ref = find(tbl_bg, "a:fillRef")
    if fill_ref is not None:
        ph_color = resolve_color(fill_ref, theme)
        themed = style_reference_fill(fill_ref, theme)
        return fill_color(themed, theme, ph_color) if themed is not None else ph_color
    return fill_color(find_fill_element(tbl_bg), theme)


def resolve_cell(
    tc: ET.Element,
    row: int,
    col: int,
    n_rows: int,
    n_cols: int,
    style: ResolvedTableStyle,
    theme: Theme,
    text: str = "",
) -> TableCell:
    """
    Resolve the styled fields and merge structure of one ``a:tc``.

    The cell's own ``a:tcPr`` fill wins over every region; cells no region
    fills take the table background.
    """
    names = style.regions_for_cell(row, col, n_rows, n_cols)
    regions = [style.region(name) for name in names]

    def first(lookup):
        for region in regions:
            value = lookup(region, theme)
            if value is not None:
                return value
        return None

    own_fill = find_fill_element(find(tc, "a:tcPr"))
    if own_fill is not None:
        fill = fill_color(own_fill, theme)
    else:
        fill = first(_region_fill)
    if fill is None:
        fill = table_background(style, theme)

    row_span = tc.get("rowSpan")
    grid_span = tc.get("gridSpan")
    return TableCell(
        text=text,
        row_span=int(row_span) if row_span else None,
        col_span=int(grid_span) if grid_span else None,
        v_merge=True if is_on(tc.get("vMerge")) else None,
        h_merge=True if is_on(tc.get("hMerge")) else None,
        fill_color=fill,
        font_color=first(_region_font_color),
        font_bold=first(_region_bold),
    )
