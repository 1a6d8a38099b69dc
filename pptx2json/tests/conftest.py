import io
import zipfile
from xml.etree import ElementTree as ET

import pytest

NAMESPACE_DECLARATIONS = (
    'xmlns:a="http://schemas.openxmlformats.org/drawingml/2006/main" '
    'xmlns:r="http://schemas.openxmlformats.org/officeDocument/2006/relationships" '
    'xmlns:p="http://schemas.openxmlformats.org/presentationml/2006/main" '
    'xmlns:m="http://schemas.openxmlformats.org/officeDocument/2006/math" '
    'xmlns:mc="http://schemas.openxmlformats.org/markup-compatibility/2006" '
    'xmlns:c="http://schemas.openxmlformats.org/drawingml/2006/chart" '
    'xmlns:dgm="http://schemas.openxmlformats.org/drawingml/2006/diagram" '
    'xmlns:dsp="http://schemas.microsoft.com/office/drawing/2008/diagram"'
)

REL_TYPE = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/"

THEME_XML = f"""<a:theme {NAMESPACE_DECLARATIONS} name="Office">
  <a:themeElements>
    <a:clrScheme name="Office">
      <a:dk1><a:sysClr val="windowText" lastClr="000000"/></a:dk1>
      <a:lt1><a:sysClr val="window" lastClr="FFFFFF"/></a:lt1>
      <a:dk2><a:srgbClr val="44546A"/></a:dk2>
      <a:lt2><a:srgbClr val="E7E6E6"/></a:lt2>
      <a:accent1><a:srgbClr val="4472C4"/></a:accent1>
      <a:accent2><a:srgbClr val="ED7D31"/></a:accent2>
      <a:accent3><a:srgbClr val="A5A5A5"/></a:accent3>
      <a:accent4><a:srgbClr val="FFC000"/></a:accent4>
      <a:accent5><a:srgbClr val="5B9BD5"/></a:accent5>
      <a:accent6><a:srgbClr val="70AD47"/></a:accent6>
      <a:hlink><a:srgbClr val="0563C1"/></a:hlink>
      <a:folHlink><a:srgbClr val="954F72"/></a:folHlink>
    </a:clrScheme>
    <a:fontScheme name="Office">
      <a:majorFont><a:latin typeface="Calibri Light"/></a:majorFont>
      <a:minorFont><a:latin typeface="Calibri"/></a:minorFont>
    </a:fontScheme>
    <a:fmtScheme name="Office">
      <a:fillStyleLst>
        <a:solidFill><a:schemeClr val="phClr"/></a:solidFill>
        <a:solidFill><a:schemeClr val="phClr"><a:tint val="50000"/></a:schemeClr></a:solidFill>
        <a:solidFill><a:schemeClr val="phClr"><a:shade val="50000"/></a:schemeClr></a:solidFill>
      </a:fillStyleLst>
      <a:lnStyleLst>
        <a:ln w="6350"><a:solidFill><a:schemeClr val="phClr"/></a:solidFill><a:prstDash val="solid"/></a:ln>
        <a:ln w="12700"><a:solidFill><a:schemeClr val="phClr"/></a:solidFill><a:prstDash val="solid"/></a:ln>
        <a:ln w="19050"><a:solidFill><a:schemeClr val="phClr"/></a:solidFill><a:prstDash val="solid"/></a:ln>
      </a:lnStyleLst>
      <a:bgFillStyleLst>
        <a:solidFill><a:schemeClr val="phClr"/></a:solidFill>
        <a:solidFill><a:schemeClr val="phClr"><a:tint val="95000"/></a:schemeClr></a:solidFill>
        <a:solidFill><a:schemeClr val="phClr"><a:shade val="90000"/></a:schemeClr></a:solidFill>
      </a:bgFillStyleLst>
    </a:fmtScheme>
  </a:themeElements>
</a:theme>"""

CLR_MAP = (
    '<p:clrMap bg1="lt1" tx1="dk1" bg2="lt2" tx2="dk2" accent1="accent1" '
    'accent2="accent2" accent3="accent3" accent4="accent4" accent5="accent5" '
    'accent6="accent6" hlink="hlink" folHlink="folHlink"/>'
)

GROUP_PROPS = (
    '<p:nvGrpSpPr><p:cNvPr id="1" name=""/><p:cNvGrpSpPr/><p:nvPr/></p:nvGrpSpPr>'
    "<p:grpSpPr/>"
)


def _rels(entries) -> str:
    body = []
    for rel_id, rel_type, target, *mode in entries:
        rel_type = rel_type if "://" in rel_type else REL_TYPE + rel_type
        external = ' TargetMode="External"' if mode and mode[0] == "External" else ""
        body.append(
            f'<Relationship Id="{rel_id}" Type="{rel_type}" Target="{target}"{external}/>'
        )
    return (
        '<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">'
        + "".join(body)
        + "</Relationships>"
    )


def _sp_tree(shapes: str, background: str = "") -> str:
    return f"<p:cSld>{background}<p:spTree>{GROUP_PROPS}{shapes}</p:spTree></p:cSld>"


class PptxBuilder:
    """Assembles a minimal but schema-shaped .pptx package in memory."""

    def __init__(self):
        self.slides = []
        self.files: dict[str, bytes] = {}
        self.layout_shapes = ""
        self.master_shapes = ""
        self.master_extra = ""
        self.master_background = ""
        self.default_text_style = ""
        self.table_styles: str | None = None
        # None leaves the attribute out of p:sldSz
        self.size = (12192000, 6858000)
        # prepended to the theme's background fill styles (bgRef idx 1001 ...)
        self.theme_background_fills = ""

    def add_slide(
        self,
        shapes: str = "",
        *,
        rels=(),
        with_layout: bool = True,
        notes: str | None = None,
        extra: str = "",
        background: str = "",
    ) -> str:
        number = len(self.slides) + 1
        self.slides.append(
            (number, shapes, list(rels), with_layout, notes, extra, background)
        )
        return f"ppt/slides/slide{number}.xml"

    def add_file(self, path: str, data: bytes | str) -> None:
        self.files[path] = data.encode("utf-8") if isinstance(data, str) else data

    def build(self) -> io.BytesIO:
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            self._write_presentation(zf)
            zf.writestr(
                "ppt/theme/theme1.xml",
                THEME_XML.replace(
                    "<a:bgFillStyleLst>",
                    f"<a:bgFillStyleLst>{self.theme_background_fills}",
                ),
            )
            zf.writestr(
                "ppt/slideMasters/slideMaster1.xml",
                f"<p:sldMaster {NAMESPACE_DECLARATIONS}>"
                f"{_sp_tree(self.master_shapes, self.master_background)}"
                f"{CLR_MAP}{self.master_extra}</p:sldMaster>",
            )
            zf.writestr(
                "ppt/slideMasters/_rels/slideMaster1.xml.rels",
                _rels(
                    [
                        ("rId1", "slideLayout", "../slideLayouts/slideLayout1.xml"),
                        ("rId2", "theme", "../theme/theme1.xml"),
                    ]
                ),
            )
            zf.writestr(
                "ppt/slideLayouts/slideLayout1.xml",
                f"<p:sldLayout {NAMESPACE_DECLARATIONS}>{_sp_tree(self.layout_shapes)}"
                "</p:sldLayout>",
            )
            zf.writestr(
                "ppt/slideLayouts/_rels/slideLayout1.xml.rels",
                _rels([("rId1", "slideMaster", "../slideMasters/slideMaster1.xml")]),
            )
            if self.table_styles is not None:
                zf.writestr(
                    "ppt/tableStyles.xml",
                    f'<a:tblStyleLst {NAMESPACE_DECLARATIONS} def="">'
                    f"{self.table_styles}</a:tblStyleLst>",
                )
            for slide in self.slides:
                self._write_slide(zf, *slide)
            for path, data in self.files.items():
                zf.writestr(path, data)
        buffer.seek(0)
        return buffer

    def _write_presentation(self, zf: zipfile.ZipFile) -> None:
        slide_ids = "".join(
            f'<p:sldId id="{255 + number}" r:id="rId{10 + number}"/>'
            for number, *_ in self.slides
        )
        size_attrs = "".join(
            f' {name}="{value}"'
            for name, value in zip(("cx", "cy"), self.size)
            if value is not None
        )
        zf.writestr(
            "ppt/presentation.xml",
            f"<p:presentation {NAMESPACE_DECLARATIONS}>"
            '<p:sldMasterIdLst><p:sldMasterId id="2147483648" r:id="rId1"/></p:sldMasterIdLst>'
            f"<p:sldIdLst>{slide_ids}</p:sldIdLst>"
            f'<p:sldSz{size_attrs}/><p:notesSz cx="6858000" cy="9144000"/>'
            f"{self.default_text_style}</p:presentation>",
        )
        entries = [("rId1", "slideMaster", "slideMasters/slideMaster1.xml")]
        entries += [
            (f"rId{10 + number}", "slide", f"slides/slide{number}.xml")
            for number, *_ in self.slides
        ]
        zf.writestr("ppt/_rels/presentation.xml.rels", _rels(entries))

    def _write_slide(
        self, zf, number, shapes, rels, with_layout, notes, extra, background
    ):
        zf.writestr(
            f"ppt/slides/slide{number}.xml",
            f"<p:sld {NAMESPACE_DECLARATIONS}>{_sp_tree(shapes, background)}{extra}</p:sld>",
        )
        entries = list(rels)
        if with_layout:
            entries.append(("rIdLayout", "slideLayout", "../slideLayouts/slideLayout1.xml"))
        if notes is not None:
            entries.append(("rIdNotes", "notesSlide", f"../notesSlides/notesSlide{number}.xml"))
            zf.writestr(f"ppt/notesSlides/notesSlide{number}.xml", notes)
        zf.writestr(f"ppt/slides/_rels/slide{number}.xml.rels", _rels(entries))


@pytest.fixture
def pptx_builder() -> PptxBuilder:
    return PptxBuilder()


@pytest.fixture
def parse_xml():
    """Parse a snippet using the usual OOXML prefixes; returns its first element."""

    def parse(snippet: str) -> ET.Element:
        return ET.fromstring(f"<root {NAMESPACE_DECLARATIONS}>{snippet}</root>")[0]

    return parse


@pytest.fixture
def namespace_declarations() -> str:
    return NAMESPACE_DECLARATIONS


@pytest.fixture
def theme_root() -> ET.Element:
    return ET.fromstring(THEME_XML)


@pytest.fixture
def theme(theme_root):
    from pptx2json.extractors.theme import load_theme

    return load_theme(theme_root)
