"""
Geometry resolution over the slide → layout → master chain.

Each level is an optional ``a:xfrm`` element; the first level defining an
offset (or extent) supplies it entirely. Values stay in EMU until the level
is chosen and are converted to points exactly once.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Sequence, TypeVar
from xml.etree import ElementTree as ET

from pptx2json.exceptions import MalformedTreeError
from pptx2json.namespaces import (
    ANGLE_UNITS_PER_DEGREE,
    emu_to_points,
    find,
    is_on,
)

T = TypeVar("T")


@dataclass(frozen=True)
class Position:
    top: Optional[float] = None
    left: Optional[float] = None


@dataclass(frozen=True)
class Size:
    width: Optional[float] = None
    height: Optional[float] = None


def first_defined(
    levels: Sequence[Optional[ET.Element]],
    lookup: Callable[[ET.Element], Optional[T]],
) -> Optional[T]:
    """Fold ``lookup`` over the levels left to right; first non-None wins."""
    for level in levels:
        if level is None:
            continue
        value = lookup(level)
        if value is not None:
            return value
    return None


def _read_pair(xfrm: ET.Element, child: str, names: tuple[str, str]):
    node = find(xfrm, child)
    if node is None:
        return None
    first, second = node.get(names[0]), node.get(names[1])
    if first is None or second is None:
        raise MalformedTreeError(
            None, f"{child} requires attributes {names[0]} and {names[1]}"
        )
    try:
        return int(first), int(second)
    except ValueError as exc:
        raise MalformedTreeError(
            None, f"{child} has non-integer coordinates", cause=exc
        ) from exc


def read_offset(xfrm: ET.Element) -> Optional[tuple[int, int]]:
    """Raw (x, y) of ``a:off`` in EMU, or None if absent."""
    return _read_pair(xfrm, "a:off", ("x", "y"))


def read_extent(xfrm: ET.Element) -> Optional[tuple[int, int]]:
    """Raw (cx, cy) of ``a:ext`` in EMU, or None if absent."""
    return _read_pair(xfrm, "a:ext", ("cx", "cy"))


def resolve_position(
    slide_xfrm: Optional[ET.Element],
    layout_xfrm: Optional[ET.Element] = None,
    master_xfrm: Optional[ET.Element] = None,
) -> Position:
    offset = first_defined((slide_xfrm, layout_xfrm, master_xfrm), read_offset)
    if offset is None:
        return Position()
    x, y = offset
    return Position(top=emu_to_points(y), left=emu_to_points(x))


def resolve_size(
    slide_xfrm: Optional[ET.Element],
    layout_xfrm: Optional[ET.Element] = None,
    master_xfrm: Optional[ET.Element] = None,
) -> Size:
    extent = first_defined((slide_xfrm, layout_xfrm, master_xfrm), read_extent)
    if extent is None:
        return Size()
    cx, cy = extent
    return Size(width=emu_to_points(cx), height=emu_to_points(cy))


def angle_to_degrees(value: Optional[str]) -> float:
    """Convert an OOXML angle to degrees normalized into [0, 360)."""
    if not value:
        return 0
    degrees = int(value) / ANGLE_UNITS_PER_DEGREE
    return degrees % 360


def resolve_rotation(xfrm: Optional[ET.Element]) -> float:
    if xfrm is None:
        return 0
    return angle_to_degrees(xfrm.get("rot"))


def resolve_flips(xfrm: Optional[ET.Element]) -> tuple[bool, bool]:
    """Return (flip horizontal, flip vertical)."""
    if xfrm is None:
        return False, False
    return is_on(xfrm.get("flipH")), is_on(xfrm.get("flipV"))
