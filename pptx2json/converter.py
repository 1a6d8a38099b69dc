"""
Presentation to JSON document model.

The converter opens the package once, follows the relationship chain of every
slide (slide -> layout -> master -> theme) and hands each slide's shape tree
to the SlideTreeWalker. Parts, relationship tables, placeholder indices and
themes shared by several slides are built once per conversion.
"""

import io
import logging
from pathlib import Path

from pptx2json.config import DEFAULT_OPTIONS, ConverterOptions
from pptx2json.data_types import Presentation, Slide, SlideSize
from pptx2json.exceptions import (
    ConversionError,
    FileEncryptedError,
    MalformedTreeError,
)
from pptx2json.extractors.fill import resolve_slide_fill
from pptx2json.extractors.media import MediaLoader
from pptx2json.extractors.notes import extract_note
from pptx2json.extractors.text import TextContext
from pptx2json.extractors.theme import Theme, load_theme, read_color_map
from pptx2json.namespaces import R_ID, emu_to_points, find, findall
from pptx2json.resolve.context import SlideContext
from pptx2json.resolve.placeholders import IndexTable, build_index
from pptx2json.resolve.relationships import (
    NOTES_SLIDE,
    SLIDE,
    SLIDE_LAYOUT,
    SLIDE_MASTER,
    THEME,
    RelationshipTable,
    find_optional_target,
    find_single_target,
    parse_relationships,
    rels_path_for,
)
from pptx2json.resolve.walker import SlideTreeWalker
from pptx2json.util.encryption import is_pptx_encrypted
from pptx2json.util.part_reader import PackageReader

logger = logging.getLogger(__name__)

PRESENTATION_PART = "ppt/presentation.xml"
DEFAULT_TABLE_STYLES_PART = "ppt/tableStyles.xml"


class _PresentationContext:
    """
    Per-conversion cache of everything slides share.

    Relationship tables, placeholder indices and themes are keyed by part
    path, so a layout used by twenty slides is indexed once.
    """

    def __init__(self, reader: PackageReader, options: ConverterOptions):
        self.reader = reader
        self.media = MediaLoader(reader, include_media=options.include_media)
        self._rels: dict[str, RelationshipTable] = {}
        self._indices: dict[str, IndexTable] = {}
        self._themes: dict[str, Theme] = {}

        self.root = reader.read_part(PRESENTATION_PART)
        self.rels = self.relationships(PRESENTATION_PART)
        self.default_text_style = find(self.root, "p:defaultTextStyle")

        table_styles_path = find_optional_target(self.rels, "tableStyles")
        self.table_styles = reader.read_optional_part(
            table_styles_path or DEFAULT_TABLE_STYLES_PART
        )

    def relationships(self, part_path: str) -> RelationshipTable:
        if part_path not in self._rels:
            rels_root = self.reader.read_optional_part(rels_path_for(part_path))
            self._rels[part_path] = parse_relationships(rels_root, part_path)
        return self._rels[part_path]

    def index(self, part_path: str) -> IndexTable:
        if part_path not in self._indices:
            self._indices[part_path] = build_index(self.reader.read_part(part_path))
        return self._indices[part_path]

    def theme_path(self, master_path: str) -> str:
        return find_single_target(self.relationships(master_path), THEME, master_path)

    def theme(self, master_path: str) -> Theme:
        if master_path not in self._themes:
            self._themes[master_path] = load_theme(
                self.reader.read_part(self.theme_path(master_path)),
                self.reader.read_part(master_path),
            )
        return self._themes[master_path]

    def slide_paths(self) -> list[str]:
        """Slide parts in presentation order (``p:sldIdLst``)."""
        paths = []
        for sld_id in findall(self.root, "p:sldIdLst/p:sldId"):
            rel = self.rels.get(sld_id.get(R_ID) or "")
            if rel is None or rel.type != SLIDE:
                logger.warning(f"Slide id {sld_id.get('id')} has no slide relationship")
                continue
            paths.append(rel.target)
        return paths

    def slide_size(self) -> SlideSize:
        sld_sz = find(self.root, "p:sldSz")
        if sld_sz is None:
            raise MalformedTreeError(PRESENTATION_PART, "p:sldSz is missing")
        cx, cy = sld_sz.get("cx"), sld_sz.get("cy")
        if cx is None or cy is None:
            raise MalformedTreeError(PRESENTATION_PART, "p:sldSz lacks cx or cy")
        return SlideSize(width=emu_to_points(cx), height=emu_to_points(cy))


def _convert_slide(pres: _PresentationContext, slide_path: str) -> Slide:
    reader = pres.reader
    slide_root = reader.read_part(slide_path)
    slide_rels = pres.relationships(slide_path)

    layout_path = find_single_target(slide_rels, SLIDE_LAYOUT, slide_path)
    layout_root = reader.read_part(layout_path)
    layout_rels = pres.relationships(layout_path)

    master_path = find_single_target(layout_rels, SLIDE_MASTER, layout_path)
    master_root = reader.read_part(master_path)
    master_rels = pres.relationships(master_path)

    theme = pres.theme(master_path)
    for root in (layout_root, slide_root):
        overrides = read_color_map(find(root, "p:clrMapOvr/a:overrideClrMapping"))
        theme = theme.with_color_map(overrides)

    ctx = SlideContext(
        reader=reader,
        part_path=slide_path,
        rels=slide_rels,
        theme=theme,
        text=TextContext(
            theme=theme,
            master_text_styles=find(master_root, "p:txStyles"),
            default_text_style=pres.default_text_style,
            rels=slide_rels,
        ),
        media=pres.media,
        layout_index=pres.index(layout_path),
        master_index=pres.index(master_path),
        table_styles=pres.table_styles,
    )

    level_rels = (
        slide_rels,
        layout_rels,
        master_rels,
        pres.relationships(pres.theme_path(master_path)),
    )

    def load_image(level: int, rel_id: str | None) -> str | None:
        rel = level_rels[level].get(rel_id or "")
        if rel is None or rel.external:
            return None
        return pres.media.load(rel.target)

    sp_tree = find(slide_root, "p:cSld/p:spTree")
    if sp_tree is None:
        raise MalformedTreeError(slide_path, "slide has no p:cSld/p:spTree")

    slide = Slide(
        fill=resolve_slide_fill(
            (slide_root, layout_root, master_root), theme, load_image
        ),
        elements=SlideTreeWalker(ctx).walk(sp_tree),
        note=extract_note(
            reader.read_optional_part(find_optional_target(slide_rels, NOTES_SLIDE))
        ),
    )
    logger.debug(f"Converted {slide_path}: {len(slide.elements)} top-level elements")
    return slide


def convert(
    file_like: io.BytesIO,
    path: str | None = None,
    options: ConverterOptions | None = None,
) -> Presentation:
    """
    Convert a .pptx package into the renderer-ready document model.

    Args:
        file_like: BytesIO object containing the complete PPTX file data.
            The stream position is reset to the beginning before reading.
        path: Optional filesystem path of the source, used in messages.
        options: Conversion options; DEFAULT_OPTIONS when omitted.

    Returns:
        Presentation: slides in presentation order, each with its background
        fill, positioned elements and speaker notes, plus the slide size.
        All lengths are in points.

    Raises:
        FileEncryptedError: The package is password protected.
        PartNotFoundError: A slide, layout, master or theme is missing.
        MalformedTreeError: A part lacks content the schema guarantees.
        ConversionError: Any other failure while reading the package.

    Example:
        >>> import io
        >>> with open("deck.pptx", "rb") as f:
        ...     presentation = convert(io.BytesIO(f.read()))
        >>> presentation.to_dict()["size"]
        {'width': 960.0, 'height': 540.0}
    """
    options = options or DEFAULT_OPTIONS
    try:
        logger.debug(f"Converting pptx {path or ''}".rstrip())
        file_like.seek(0)
        if is_pptx_encrypted(file_like):
            raise FileEncryptedError()

        with PackageReader(file_like, limits=options.zip_limits, source=path) as reader:
            pres = _PresentationContext(reader, options)
            slides = []
            for slide_path in pres.slide_paths():
                try:
                    slides.append(_convert_slide(pres, slide_path))
                except MalformedTreeError as exc:
                    if exc.part_path is not None:
                        raise
                    raise MalformedTreeError(slide_path, exc.detail, cause=exc) from exc
            presentation = Presentation(slides=slides, size=pres.slide_size())

        logger.info(
            "Converted PPTX: %d slides, %d elements",
            len(presentation.slides),
            sum(len(list(slide.iter_elements())) for slide in presentation.slides),
        )
        return presentation
    except ConversionError:
        raise
    except Exception as exc:
        raise ConversionError("Failed to convert PPTX file", cause=exc) from exc


def read_file(
    path: str | Path, options: ConverterOptions | None = None
) -> Presentation:
    """Convert the .pptx file at ``path``."""
    path = Path(path)
    with open(path, "rb") as f:
        return convert(io.BytesIO(f.read()), str(path), options)
