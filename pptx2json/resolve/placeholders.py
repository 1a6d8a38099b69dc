import logging
from dataclasses import dataclass, field
from xml.etree import ElementTree as ET

from pptx2json.namespaces import P_NS, find, get_attr, local_name

logger = logging.getLogger(__name__)

# Non-visual property containers per indexed node kind
_NV_PROPS = {
    f"{P_NS}sp": "p:nvSpPr",
    f"{P_NS}cxnSp": "p:nvCxnSpPr",
    f"{P_NS}pic": "p:nvPicPr",
    f"{P_NS}graphicFrame": "p:nvGraphicFramePr",
}


@dataclass
class IndexTable:
    """Placeholder lookup tables of one layout or master part."""

    by_id: dict[str, ET.Element] = field(default_factory=dict)
    by_idx: dict[str, ET.Element] = field(default_factory=dict)
    by_type: dict[str, ET.Element] = field(default_factory=dict)

    def lookup(self, ph_type: str | None, ph_idx: str | None) -> ET.Element | None:
        """Find the counterpart of a slide placeholder: by type, else by index."""
        if ph_type:
            return self.by_type.get(ph_type)
        if ph_idx:
            return self.by_idx.get(ph_idx)
        return None


@dataclass(frozen=True)
class PlaceholderChain:
    """A slide node with its layout and master counterparts, in lookup order."""

    slide: ET.Element
    layout: ET.Element | None = None
    master: ET.Element | None = None

    def levels(self) -> tuple[ET.Element | None, ...]:
        return (self.slide, self.layout, self.master)


def placeholder_of(node: ET.Element) -> tuple[str | None, str | None, str | None]:
    """Return (shape id, placeholder idx, placeholder type) of a shape node."""
    nv_path = _NV_PROPS.get(node.tag)
    if nv_path is None:
        return None, None, None
    nv = find(node, nv_path)
    return (
        get_attr(nv, "p:cNvPr", "id"),
        get_attr(nv, "p:nvPr/p:ph", "idx"),
        get_attr(nv, "p:nvPr/p:ph", "type"),
    )


def build_index(part_root: ET.Element | None) -> IndexTable:
    """
    Index the top-level shapes of a layout or master part.

    Only direct children of the shape tree are registered; groups and the
    tree's own non-visual properties carry no placeholder identity.
    """
    table = IndexTable()
    sp_tree = find(part_root, "p:cSld/p:spTree")
    if sp_tree is None:
        return table

    for node in sp_tree:
        if node.tag not in _NV_PROPS:
            continue
        shape_id, ph_idx, ph_type = placeholder_of(node)
        if shape_id:
            table.by_id[shape_id] = node
        if ph_idx:
            table.by_idx[ph_idx] = node
        if ph_type:
            table.by_type[ph_type] = node

    logger.debug(
        f"Indexed {local_name(part_root.tag)}: {len(table.by_id)} ids, "
        f"{len(table.by_idx)} indices, {len(table.by_type)} types"
    )
    return table
