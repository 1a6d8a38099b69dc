import dataclasses
import itertools
from dataclasses import dataclass, field
from xml.etree import ElementTree as ET

from pptx2json.extractors.media import MediaLoader
from pptx2json.extractors.text import TextContext
from pptx2json.extractors.theme import Theme
from pptx2json.resolve.placeholders import IndexTable
from pptx2json.resolve.relationships import Relationship, RelationshipTable
from pptx2json.util.part_reader import PackageReader


@dataclass
class SlideContext:
    """
    Everything the tree walker needs for one slide.

    Parts and index tables are shared with other slides and never mutated;
    the order counter is private to the slide and shared by every nested
    context derived from it (diagram drawings walk with the same counter).
    """

    reader: PackageReader
    part_path: str
    rels: RelationshipTable
    theme: Theme
    text: TextContext
    media: MediaLoader
    layout_index: IndexTable = field(default_factory=IndexTable)
    master_index: IndexTable = field(default_factory=IndexTable)
    table_styles: ET.Element | None = None
    # shapes of a diagram drawing default to placeholder type "diagram"
    in_diagram: bool = False
    order: itertools.count = field(default_factory=itertools.count)

    def next_order(self) -> int:
        return next(self.order)

    def relationship(self, rel_id: str | None) -> Relationship | None:
        if not rel_id:
            return None
        return self.rels.get(rel_id)

    def for_part(self, part_path: str, rels: RelationshipTable) -> "SlideContext":
        """Derive the context of a diagram drawing part owned by this slide."""
        return dataclasses.replace(
            self,
            part_path=part_path,
            rels=rels,
            text=dataclasses.replace(self.text, rels=rels),
            in_diagram=True,
        )
