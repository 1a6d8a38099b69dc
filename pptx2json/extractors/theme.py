import logging
from dataclasses import dataclass, field
from xml.etree import ElementTree as ET

from pptx2json.namespaces import children, find, findall, local_name

logger = logging.getLogger(__name__)

# Color map used when a master declares none
DEFAULT_COLOR_MAP = {
    "bg1": "lt1",
    "tx1": "dk1",
    "bg2": "lt2",
    "tx2": "dk2",
    "accent1": "accent1",
    "accent2": "accent2",
    "accent3": "accent3",
    "accent4": "accent4",
    "accent5": "accent5",
    "accent6": "accent6",
    "hlink": "hlink",
    "folHlink": "folHlink",
}


@dataclass
class Theme:
    """
    Scheme values of one theme, as seen through one master's color map.

    colors maps scheme names (dk1, lt1, accent1, ...) to RRGGBB hex strings.
    """

    colors: dict[str, str] = field(default_factory=dict)
    color_map: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_COLOR_MAP))
    major_font: str = ""
    minor_font: str = ""
    fill_styles: list[ET.Element] = field(default_factory=list)
    bg_fill_styles: list[ET.Element] = field(default_factory=list)
    line_styles: list[ET.Element] = field(default_factory=list)

    def scheme_color(self, name: str) -> str | None:
        """Resolve a scheme color name, mapping tx1/bg1/... through the color map."""
        mapped = self.color_map.get(name, name)
        return self.colors.get(mapped)

    def with_color_map(self, overrides: dict[str, str]) -> "Theme":
        if not overrides:
            return self
        merged = dict(self.color_map)
        merged.update(overrides)
        return Theme(
            colors=self.colors,
            color_map=merged,
            major_font=self.major_font,
            minor_font=self.minor_font,
            fill_styles=self.fill_styles,
            bg_fill_styles=self.bg_fill_styles,
            line_styles=self.line_styles,
        )


def read_color_map(node: ET.Element | None) -> dict[str, str]:
    """Read the attributes of a ``p:clrMap`` or ``a:overrideClrMapping`` element."""
    if node is None:
        return {}
    return dict(node.attrib)


def _scheme_entry_hex(entry: ET.Element) -> str | None:
    srgb = find(entry, "a:srgbClr")
    if srgb is not None and srgb.get("val"):
        return srgb.get("val").upper()
    sys_clr = find(entry, "a:sysClr")
    if sys_clr is not None and sys_clr.get("lastClr"):
        return sys_clr.get("lastClr").upper()
    return None


def _typeface(latin: ET.Element | None) -> str:
    return latin.get("typeface", "") if latin is not None else ""


def load_theme(theme_root: ET.Element, master_root: ET.Element | None = None) -> Theme:
    """
    Build a Theme from a theme part and the color map of its master.

    Args:
        theme_root: Root of ``ppt/theme/themeN.xml``.
        master_root: Root of the slide master referencing the theme; its
            ``p:clrMap`` maps text/background names onto scheme colors.
    """
    theme = Theme()
    elements = find(theme_root, "a:themeElements")

    for entry in children(find(elements, "a:clrScheme")):
        value = _scheme_entry_hex(entry)
        if value:
            theme.colors[local_name(entry.tag)] = value

    theme.major_font = _typeface(find(elements, "a:fontScheme/a:majorFont/a:latin"))
    theme.minor_font = _typeface(find(elements, "a:fontScheme/a:minorFont/a:latin"))

    fmt = find(elements, "a:fmtScheme")
    theme.fill_styles = children(find(fmt, "a:fillStyleLst"))
    theme.bg_fill_styles = children(find(fmt, "a:bgFillStyleLst"))
    theme.line_styles = findall(fmt, "a:lnStyleLst/a:ln")

    master_map = read_color_map(find(master_root, "p:clrMap"))
    if master_map:
        theme.color_map = master_map

    logger.debug(
        f"Loaded theme: {len(theme.colors)} scheme colors, "
        f"fonts {theme.major_font!r}/{theme.minor_font!r}"
    )
    return theme
