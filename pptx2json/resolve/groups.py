"""
Group transform composition.

A group's ``a:xfrm`` maps its children's coordinate space (``chOff`` /
``chExt``) onto the group's own box (``off`` / ``ext``). Children are
resolved first, in child space, and then remapped into the group's frame:

    left' = (left - chOff.x) * ext.cx / chExt.cx

The group element keeps its own offset, so renderers add it as the anchor.
An inner group is remapped as an opaque element by its parent after it has
remapped its own children, which makes nesting compose bottom-up.
"""

import dataclasses
from dataclasses import dataclass
from typing import Optional
from xml.etree import ElementTree as ET

from pptx2json.data_types import VisualElement
from pptx2json.exceptions import MalformedTreeError
from pptx2json.namespaces import emu_to_points, find
from pptx2json.resolve.geometry import angle_to_degrees, read_extent, read_offset


@dataclass(frozen=True)
class GroupContext:
    offset: tuple[float, float]
    child_offset: tuple[float, float]
    extent: tuple[float, float]
    child_extent: tuple[float, float]
    rotation: float = 0

    @property
    def scale_x(self) -> float:
        # zero-width child spaces (e.g. a group of vertical lines) keep scale 1
        if not self.child_extent[0]:
            return 1.0
        return self.extent[0] / self.child_extent[0]

    @property
    def scale_y(self) -> float:
        if not self.child_extent[1]:
            return 1.0
        return self.extent[1] / self.child_extent[1]

    @classmethod
    def from_xfrm(cls, xfrm: ET.Element) -> "GroupContext":
        """
        Read the group transform.

        Raises:
            MalformedTreeError: ``a:off`` or ``a:ext`` is missing.
        """
        offset = read_offset(xfrm)
        extent = read_extent(xfrm)
        if offset is None or extent is None:
            raise MalformedTreeError(None, "group transform lacks a:off or a:ext")

        child_offset = _read_child(xfrm, "a:chOff", ("x", "y")) or offset
        child_extent = _read_child(xfrm, "a:chExt", ("cx", "cy")) or extent

        return cls(
            offset=_to_points(offset),
            child_offset=_to_points(child_offset),
            extent=_to_points(extent),
            child_extent=_to_points(child_extent),
            rotation=angle_to_degrees(xfrm.get("rot")),
        )


def _read_child(xfrm: ET.Element, path: str, names: tuple[str, str]):
    node = find(xfrm, path)
    if node is None or node.get(names[0]) is None or node.get(names[1]) is None:
        return None
    return int(node.get(names[0])), int(node.get(names[1]))


def _to_points(pair: tuple[int, int]) -> tuple[float, float]:
    return emu_to_points(pair[0]), emu_to_points(pair[1])


def _scale(value: Optional[float], origin: float, scale: float) -> Optional[float]:
    if value is None:
        return None
    return (value - origin) * scale


def compose(
    ctx: GroupContext, children: list[VisualElement]
) -> list[VisualElement]:
    """Remap resolved child elements from child space into the group frame."""
    sx, sy = ctx.scale_x, ctx.scale_y
    ch_x, ch_y = ctx.child_offset
    return [
        dataclasses.replace(
            child,
            left=_scale(child.left, ch_x, sx),
            top=_scale(child.top, ch_y, sy),
            width=_scale(child.width, 0, sx),
            height=_scale(child.height, 0, sy),
        )
        for child in children
    ]
