"""
Graphic frame content: tables, charts, SmartArt diagrams and OLE objects.

Diagram shapes come from the pre-rendered drawing part (``dsp:`` namespace).
The drawing is copied with its tags renamed into the presentation namespace
so the regular shape handlers apply; the cached part stays untouched.
"""

import copy
import logging
from typing import Callable, Optional
from xml.etree import ElementTree as ET

from pptx2json.data_types import ChartElement, DiagramElement, VisualElement
from pptx2json.exceptions import UnsupportedNodeError
from pptx2json.extractors.chart import extract_chart
from pptx2json.namespaces import (
    CHART_URI,
    DIAGRAM_URI,
    DSP_NS,
    OLE_URI,
    P_NS,
    R_DM,
    R_ID,
    TABLE_URI,
    find,
    get_attr,
)
from pptx2json.resolve.context import SlideContext
from pptx2json.resolve.geometry import resolve_position, resolve_rotation, resolve_size
from pptx2json.resolve.relationships import (
    DIAGRAM_DRAWING,
    find_optional_target,
    parse_relationships,
    rels_path_for,
)
from pptx2json.resolve.tables import build_table

logger = logging.getLogger(__name__)

# Turns one shape tree node into an element (None when it yields nothing)
NodeVisitor = Callable[[ET.Element, SlideContext], Optional[VisualElement]]


def frame_geometry(frame: ET.Element) -> dict:
    xfrm = find(frame, "p:xfrm")
    position = resolve_position(xfrm)
    size = resolve_size(xfrm)
    return dict(
        left=position.left,
        top=position.top,
        width=size.width,
        height=size.height,
        rotate=resolve_rotation(xfrm),
    )


def _chart(frame: ET.Element, ctx: SlideContext) -> ChartElement:
    rel = ctx.relationship(get_attr(frame, "a:graphic/a:graphicData/c:chart", R_ID))
    if rel is None or not ctx.reader.exists(rel.target):
        logger.warning(f"Chart part missing for frame in {ctx.part_path}")
        raise UnsupportedNodeError(frame.tag, "Chart part not found")

    chart_root = ctx.reader.read_part(rel.target)
    info = extract_chart(find(chart_root, "c:chart/c:plotArea"))
    if info is None:
        raise UnsupportedNodeError(frame.tag, f"No supported chart in {rel.target}")

    return ChartElement(
        order=ctx.next_order(),
        chart_type=info.chart_type,
        data=info.data,
        marker=info.marker,
        bar_dir=info.bar_dir,
        hole_size=info.hole_size,
        grouping=info.grouping,
        style=info.style,
        **frame_geometry(frame),
    )


def _drawing_path(frame: ET.Element, ctx: SlideContext) -> str | None:
    """Locate the diagram drawing part named by the data model's extension."""
    data_path = "a:graphic/a:graphicData/dgm:relIds"
    data_rel = ctx.relationship(get_attr(frame, data_path, R_DM))
    if data_rel is not None and ctx.reader.exists(data_rel.target):
        data_root = ctx.reader.read_part(data_rel.target)
        for ext in data_root.iter(f"{DSP_NS}dataModelExt"):
            rel = ctx.relationship(ext.get("relId"))
            if rel is not None:
                return rel.target
    return find_optional_target(ctx.rels, DIAGRAM_DRAWING)


def _rename_drawing_tags(root: ET.Element) -> ET.Element:
    drawing = copy.deepcopy(root)
    for node in drawing.iter():
        if node.tag.startswith(DSP_NS):
            node.tag = P_NS + node.tag[len(DSP_NS) :]
    return drawing


def _diagram(
    frame: ET.Element, ctx: SlideContext, visit: NodeVisitor
) -> DiagramElement:
    element = DiagramElement(order=ctx.next_order(), **frame_geometry(frame))
    drawing_path = _drawing_path(frame, ctx)
    if drawing_path is None or not ctx.reader.exists(drawing_path):
        logger.debug(f"Diagram without drawing part in {ctx.part_path}")
        return element

    drawing = _rename_drawing_tags(ctx.reader.read_part(drawing_path))
    sp_tree = find(drawing, "p:spTree")
    if sp_tree is None:
        return element

    drawing_rels = parse_relationships(
        ctx.reader.read_optional_part(rels_path_for(drawing_path)), drawing_path
    )
    drawing_ctx = ctx.for_part(drawing_path, drawing_rels)
    for node in sp_tree:
        child = visit(node, drawing_ctx)
        if child is not None:
            element.elements.append(child)
    return element


def _ole_object(
    frame: ET.Element, ctx: SlideContext, visit: NodeVisitor
) -> Optional[VisualElement]:
    graphic_data = find(frame, "a:graphic/a:graphicData")
    ole = find(graphic_data, "mc:AlternateContent/mc:Fallback/p:oleObj")
    if ole is None:
        ole = find(graphic_data, "p:oleObj")
    if ole is None:
        ole = find(graphic_data, "mc:AlternateContent/mc:Choice/p:oleObj")
    if ole is None:
        raise UnsupportedNodeError(frame.tag, "OLE frame without p:oleObj")

    # the object's preview drawing, usually a p:pic
    for node in ole:
        element = visit(node, ctx)
        if element is not None:
            return element
    return None


def generate_graphic_frame(
    frame: ET.Element, ctx: SlideContext, visit: NodeVisitor
) -> Optional[VisualElement]:
    """
    Dispatch a ``p:graphicFrame`` on its ``a:graphicData@uri``.

    Raises:
        UnsupportedNodeError: Unknown content, or content whose parts are
            missing.
    """
    uri = get_attr(frame, "a:graphic/a:graphicData", "uri")
    if uri == TABLE_URI:
        geometry = frame_geometry(frame)
        return build_table(frame, dict(order=ctx.next_order(), **geometry), ctx)
    if uri == CHART_URI:
        return _chart(frame, ctx)
    if uri == DIAGRAM_URI:
        return _diagram(frame, ctx, visit)
    if uri == OLE_URI:
        return _ole_object(frame, ctx, visit)
    raise UnsupportedNodeError(frame.tag, f"Unsupported graphic frame content: {uri}")
