"""
Relationship resolution for package parts.

Every part ``dir/name.xml`` may carry a ``dir/_rels/name.xml.rels`` part
listing its outgoing relationships. Targets are stored relative to the source
part's directory and are resolved to archive paths here, so callers never
deal with ``../`` segments.
"""

import logging
import posixpath
from dataclasses import dataclass
from xml.etree import ElementTree as ET

from pptx2json.exceptions import PartNotFoundError
from pptx2json.namespaces import REL_NS

logger = logging.getLogger(__name__)

_RELATIONSHIP = f"{REL_NS}Relationship"

# Short relationship type names used by the resolver
SLIDE_LAYOUT = "slideLayout"
SLIDE_MASTER = "slideMaster"
THEME = "theme"
NOTES_SLIDE = "notesSlide"
DIAGRAM_DRAWING = "diagramDrawing"
SLIDE = "slide"


@dataclass(frozen=True)
class Relationship:
    id: str
    type: str
    target: str
    external: bool = False


RelationshipTable = dict[str, Relationship]


def rels_path_for(part_path: str) -> str:
    """Map ``ppt/slides/slide1.xml`` to ``ppt/slides/_rels/slide1.xml.rels``."""
    folder, name = posixpath.split(part_path)
    return posixpath.join(folder, "_rels", f"{name}.rels")


def short_type(rel_type: str) -> str:
    """Normalize a relationship type URI to its last path segment."""
    return rel_type.rstrip("/").rsplit("/", 1)[-1]


def resolve_target(source_path: str, target: str) -> str:
    """Resolve a relationship target against the directory of its source part."""
    if target.startswith("/"):
        return posixpath.normpath(target.lstrip("/"))
    folder = posixpath.dirname(source_path)
    return posixpath.normpath(posixpath.join(folder, target))


def parse_relationships(
    rels_root: ET.Element | None, source_path: str
) -> RelationshipTable:
    """
    Build the relationship table of a part.

    Args:
        rels_root: Parsed ``.rels`` part; None for parts without one.
        source_path: Archive path of the part owning the relationships.

    Returns:
        Mapping of relationship id to Relationship. Entries without an id or
        a target are dropped.
    """
    table: RelationshipTable = {}
    if rels_root is None:
        return table

    for rel in rels_root.iter(_RELATIONSHIP):
        rel_id = rel.get("Id")
        target = rel.get("Target")
        if not rel_id or not target:
            continue
        external = rel.get("TargetMode") == "External"
        table[rel_id] = Relationship(
            id=rel_id,
            type=short_type(rel.get("Type") or ""),
            target=target if external else resolve_target(source_path, target),
            external=external,
        )
    return table


def find_targets(table: RelationshipTable, rel_type: str) -> list[str]:
    return [
        rel.target
        for rel in table.values()
        if rel.type == rel_type and not rel.external
    ]


def find_optional_target(table: RelationshipTable, rel_type: str) -> str | None:
    targets = find_targets(table, rel_type)
    return targets[0] if targets else None


def find_single_target(
    table: RelationshipTable, rel_type: str, source_path: str
) -> str:
    """
    Return the target of the first relationship of ``rel_type``.

    Raises:
        PartNotFoundError: No relationship of that type exists. The error
            names the source part, since the target cannot be known.
    """
    target = find_optional_target(table, rel_type)
    if target is None:
        raise PartNotFoundError(
            source_path,
            f"No {rel_type} relationship found for part: {source_path}",
        )
    return target
