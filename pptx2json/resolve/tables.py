import logging
from xml.etree import ElementTree as ET

from pptx2json.data_types import TableElement
from pptx2json.exceptions import MalformedTreeError
from pptx2json.extractors.border import resolve_table_border
from pptx2json.extractors.text import format_text_body
from pptx2json.namespaces import find, findall
from pptx2json.resolve.context import SlideContext
from pptx2json.resolve.table_style import ResolvedTableStyle, resolve_cell

logger = logging.getLogger(__name__)


def build_table(frame: ET.Element, geometry: dict, ctx: SlideContext) -> TableElement:
    """
    Build the table element of a graphic frame holding ``a:tbl``.

    Args:
        frame: The ``p:graphicFrame`` node.
        geometry: Position, size and order already resolved for the frame.
        ctx: The slide context.
    """
    tbl = find(frame, "a:graphic/a:graphicData/a:tbl")
    if tbl is None:
        raise MalformedTreeError(None, "table graphic frame without a:tbl")

    style = ResolvedTableStyle.build(find(tbl, "a:tblPr"), ctx.table_styles)
    rows = findall(tbl, "a:tr")

    data = []
    for row_index, tr in enumerate(rows):
        cells = findall(tr, "a:tc")
        data.append(
            [
                resolve_cell(
                    tc,
                    row_index,
                    col_index,
                    len(rows),
                    len(cells),
                    style,
                    ctx.theme,
                    text=format_text_body(find(tc, "a:txBody"), None, None, ctx.text),
                )
                for col_index, tc in enumerate(cells)
            ]
        )

    element = TableElement(data=data, **geometry)
    whole_table = style.region("wholeTbl")
    border = resolve_table_border(find(whole_table, "a:tcStyle/a:tcBdr"), ctx.theme)
    if border is not None:
        element.border_color = border.color
        element.border_width = border.width
        element.border_type = border.type

    logger.debug(f"Built table {len(rows)}x{max((len(r) for r in data), default=0)}")
    return element
