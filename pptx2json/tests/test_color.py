from unittest import TestCase
from xml.etree import ElementTree as ET

from pptx2json.extractors.color import find_color_element, resolve_color
from pptx2json.extractors.theme import DEFAULT_COLOR_MAP, load_theme

tc = TestCase()


def _fill(parse_xml, color: str):
    return parse_xml(f"<a:solidFill>{color}</a:solidFill>")


def test_srgb_is_normalized(parse_xml, theme) -> None:
    tc.assertEqual("#FF00AA", resolve_color(_fill(parse_xml, '<a:srgbClr val="ff00aa"/>'), theme))


def test_scheme_colors_go_through_color_map(parse_xml, theme) -> None:
    tc.assertEqual("#000000", resolve_color(_fill(parse_xml, '<a:schemeClr val="tx1"/>'), theme))
    tc.assertEqual("#FFFFFF", resolve_color(_fill(parse_xml, '<a:schemeClr val="bg1"/>'), theme))
    tc.assertEqual(
        "#4472C4", resolve_color(_fill(parse_xml, '<a:schemeClr val="accent1"/>'), theme)
    )

    swapped = theme.with_color_map({"tx1": "lt1", "bg1": "dk1"})
    tc.assertEqual("#FFFFFF", resolve_color(_fill(parse_xml, '<a:schemeClr val="tx1"/>'), swapped))
    # the original mapping is untouched
    tc.assertEqual("#000000", resolve_color(_fill(parse_xml, '<a:schemeClr val="tx1"/>'), theme))


def test_other_color_kinds(parse_xml, theme) -> None:
    cases = {
        '<a:sysClr val="windowText" lastClr="000000"/>': "#000000",
        '<a:prstClr val="red"/>': "#FF0000",
        '<a:scrgbClr r="100000" g="0" b="0"/>': "#FF0000",
        '<a:hslClr hue="0" sat="100000" lum="50000"/>': "#FF0000",
    }
    for color, expected in cases.items():
        tc.assertEqual(expected, resolve_color(_fill(parse_xml, color), theme), color)


def test_transforms(parse_xml, theme) -> None:
    shade = _fill(parse_xml, '<a:srgbClr val="FFFFFF"><a:shade val="50000"/></a:srgbClr>')
    tint = _fill(parse_xml, '<a:srgbClr val="000000"><a:tint val="50000"/></a:srgbClr>')
    lum_mod = _fill(parse_xml, '<a:srgbClr val="FF0000"><a:lumMod val="50000"/></a:srgbClr>')

    tc.assertEqual("#808080", resolve_color(shade, theme))
    tc.assertEqual("#808080", resolve_color(tint, theme))
    tc.assertEqual("#800000", resolve_color(lum_mod, theme))


def test_placeholder_color(parse_xml, theme) -> None:
    fill = _fill(parse_xml, '<a:schemeClr val="phClr"/>')

    tc.assertEqual("#123456", resolve_color(fill, theme, "#123456"))
    tc.assertIsNone(resolve_color(fill, theme))


def test_unresolvable_colors(parse_xml, theme) -> None:
    tc.assertIsNone(resolve_color(None, theme))
    tc.assertIsNone(resolve_color(parse_xml("<a:solidFill/>"), theme))
    tc.assertIsNone(resolve_color(_fill(parse_xml, '<a:schemeClr val="nope"/>'), theme))
    tc.assertIsNone(resolve_color(_fill(parse_xml, '<a:prstClr val="chartreuse"/>'), theme))


def test_find_color_element_takes_direct_children_only(parse_xml) -> None:
    nested = parse_xml('<a:fillRef idx="1"><a:solidFill><a:srgbClr val="000000"/></a:solidFill></a:fillRef>')
    tc.assertIsNone(find_color_element(nested))
    tc.assertIsNone(find_color_element(None))


def test_load_theme(theme) -> None:
    tc.assertEqual("4472C4", theme.colors["accent1"])
    tc.assertEqual("000000", theme.colors["dk1"])
    tc.assertEqual("Calibri Light", theme.major_font)
    tc.assertEqual("Calibri", theme.minor_font)
    tc.assertEqual(3, len(theme.fill_styles))
    tc.assertEqual(3, len(theme.bg_fill_styles))
    tc.assertEqual(3, len(theme.line_styles))
    tc.assertEqual(DEFAULT_COLOR_MAP, theme.color_map)


def test_load_theme_uses_master_color_map(theme_root, namespace_declarations) -> None:
    master = ET.fromstring(
        f'<p:sldMaster {namespace_declarations}><p:clrMap bg1="dk1" tx1="lt1"/></p:sldMaster>'
    )
    theme = load_theme(theme_root, master)

    tc.assertEqual("000000", theme.scheme_color("bg1"))
    tc.assertEqual("FFFFFF", theme.scheme_color("tx1"))
