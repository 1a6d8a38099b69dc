"""
Shape tree traversal.

Every node of a ``p:spTree`` (and of groups, alternate content, diagram
drawings and OLE previews below it) is dispatched on its qualified tag. An
element takes its order number when it is created, before any of its
children, so order values follow a pre-order walk of the document.
"""

import logging
from typing import Callable, Optional
from xml.etree import ElementTree as ET

from pptx2json.data_types import GroupElement, MathElement, VisualElement
from pptx2json.exceptions import UnsupportedNodeError
from pptx2json.extractors.omml_to_latex import find_omath, omml_to_latex
from pptx2json.namespaces import (
    MC_ALTERNATECONTENT,
    P_CXNSP,
    P_EXTLST,
    P_GRAPHICFRAME,
    P_GRPSP,
    P_GRPSPPR,
    P_NVGRPSPPR,
    P_PIC,
    P_SP,
    find,
)
from pptx2json.resolve.context import SlideContext
from pptx2json.resolve.frames import generate_graphic_frame
from pptx2json.resolve.geometry import resolve_position, resolve_size
from pptx2json.resolve.groups import GroupContext, compose
from pptx2json.resolve.pictures import generate_picture
from pptx2json.resolve.placeholders import PlaceholderChain, placeholder_of
from pptx2json.resolve.shapes import generate_shape, resolve_placeholder

logger = logging.getLogger(__name__)

# Children that describe their container rather than content
_STRUCTURAL_TAGS = frozenset([P_NVGRPSPPR, P_GRPSPPR, P_EXTLST])

Handler = Callable[[ET.Element, SlideContext], Optional[VisualElement]]


class SlideTreeWalker:
    """Turns the shape tree of one slide into an ordered list of elements."""

    def __init__(self, ctx: SlideContext):
        self.ctx = ctx
        self._handlers: dict[str, Handler] = {
            P_SP: self._shape,
            P_CXNSP: self._connector,
            P_PIC: generate_picture,
            P_GRAPHICFRAME: self._graphic_frame,
            P_GRPSP: self._group,
            MC_ALTERNATECONTENT: self._alternate_content,
        }

    def walk(self, sp_tree: ET.Element) -> list[VisualElement]:
        return self._walk_children(sp_tree, self.ctx)

    def visit(self, node: ET.Element, ctx: SlideContext) -> Optional[VisualElement]:
        """
        Produce the element of a single node.

        Unsupported nodes are logged and yield None; malformed trees and
        missing parts propagate.
        """
        if node.tag in _STRUCTURAL_TAGS:
            return None
        handler = self._handlers.get(node.tag)
        try:
            if handler is None:
                raise UnsupportedNodeError(node.tag)
            return handler(node, ctx)
        except UnsupportedNodeError as exc:
            logger.debug(f"Skipping node in {ctx.part_path}: {exc}")
            return None

    def _walk_children(
        self, container: ET.Element, ctx: SlideContext
    ) -> list[VisualElement]:
        elements = []
        for node in container:
            element = self.visit(node, ctx)
            if element is not None:
                elements.append(element)
        return elements

    def _shape(self, node: ET.Element, ctx: SlideContext) -> VisualElement:
        chain, ph_type = resolve_placeholder(node, ctx)
        return generate_shape(node, chain, ph_type, ctx.next_order(), ctx)

    def _connector(self, node: ET.Element, ctx: SlideContext) -> VisualElement:
        # connectors never inherit from layout or master counterparts
        ph_type = placeholder_of(node)[2]
        chain = PlaceholderChain(node)
        return generate_shape(node, chain, ph_type, ctx.next_order(), ctx)

    def _graphic_frame(
        self, node: ET.Element, ctx: SlideContext
    ) -> Optional[VisualElement]:
        return generate_graphic_frame(node, ctx, self.visit)

    def _group(self, node: ET.Element, ctx: SlideContext) -> Optional[GroupElement]:
        xfrm = find(node, "p:grpSpPr/a:xfrm")
        if xfrm is None:
            logger.debug(f"Group without transform skipped in {ctx.part_path}")
            return None

        group = GroupContext.from_xfrm(xfrm)
        element = GroupElement(
            left=group.offset[0],
            top=group.offset[1],
            width=group.extent[0],
            height=group.extent[1],
            rotate=group.rotation,
            order=ctx.next_order(),
        )
        element.elements = compose(group, self._walk_children(node, ctx))
        return element

    def _alternate_content(
        self, node: ET.Element, ctx: SlideContext
    ) -> Optional[VisualElement]:
        fallback = find(node, "mc:Fallback")
        if find(fallback, "p:grpSpPr/a:xfrm") is not None:
            return self._group(fallback, ctx)

        choice = find(node, "mc:Choice")
        formulas = find_omath(choice) if choice is not None else []
        if not formulas:
            return None

        xfrm = find(choice, "p:sp/p:spPr/a:xfrm")
        position = resolve_position(xfrm)
        size = resolve_size(xfrm)
        return MathElement(
            left=position.left,
            top=position.top,
            width=size.width,
            height=size.height,
            order=ctx.next_order(),
            latex=omml_to_latex(formulas[0]),
        )
