from unittest import TestCase

from pptx2json.extractors.text import TextContext, format_text_body, has_valid_text
from pptx2json.namespaces import find
from pptx2json.resolve.placeholders import PlaceholderChain
from pptx2json.resolve.relationships import Relationship

tc = TestCase()


def _shape(parse_xml, paragraphs: str, nv_pr: str = "<p:nvPr/>", extra: str = ""):
    return parse_xml(
        '<p:sp><p:nvSpPr><p:cNvPr id="2" name="Text"/><p:cNvSpPr/>'
        f"{nv_pr}</p:nvSpPr><p:spPr/>{extra}"
        f"<p:txBody><a:bodyPr/>{paragraphs}</p:txBody></p:sp>"
    )


def _format(node, ctx, ph_type=None, layout=None, master=None) -> str:
    chain = PlaceholderChain(node, layout, master)
    return format_text_body(find(node, "p:txBody"), chain, ph_type, ctx)


def test_has_valid_text() -> None:
    tc.assertTrue(has_valid_text("<p><span>Hi</span></p>"))
    tc.assertTrue(has_valid_text("<p>&amp;</p>"))
    tc.assertFalse(has_valid_text("<p><span>  \n </span></p>"))
    tc.assertFalse(has_valid_text("<p>&nbsp;</p>"))
    tc.assertFalse(has_valid_text(""))


def test_no_text_body(theme) -> None:
    tc.assertEqual("", format_text_body(None, None, None, TextContext(theme)))


def test_run_properties(parse_xml, theme) -> None:
    node = _shape(
        parse_xml,
        '<a:p><a:pPr algn="r"/><a:r><a:rPr sz="1800" b="1" i="1" u="sng" '
        'strike="sngStrike" baseline="30000"><a:solidFill><a:srgbClr val="00FF00"/>'
        '</a:solidFill><a:latin typeface="+mn-lt"/></a:rPr><a:t>Styled</a:t></a:r></a:p>',
    )

    tc.assertEqual(
        '<p style="text-align: right"><span style="font-size: 18pt; color: #00FF00; '
        "font-weight: bold; font-style: italic; text-decoration: underline line-through; "
        'font-family: Calibri; vertical-align: super">Styled</span></p>',
        _format(node, TextContext(theme)),
    )


def test_text_is_escaped_and_breaks_kept(parse_xml, theme) -> None:
    node = _shape(
        parse_xml,
        "<a:p><a:r><a:t>a &lt; b &amp; c</a:t></a:r><a:br/>"
        "<a:fld type=\"slidenum\"><a:t>7</a:t></a:fld></a:p>",
    )

    tc.assertEqual(
        '<p style="text-align: left"><span>a &lt; b &amp; c</span><br><span>7</span></p>',
        _format(node, TextContext(theme)),
    )


def test_hyperlink(parse_xml, theme) -> None:
    node = _shape(
        parse_xml,
        '<a:p><a:r><a:rPr><a:hlinkClick r:id="rId1"/></a:rPr><a:t>link</a:t></a:r></a:p>',
    )
    rels = {"rId1": Relationship("rId1", "hyperlink", "https://x.test/?a=1&b=2", True)}

    tc.assertEqual(
        '<p style="text-align: left"><a href="https://x.test/?a=1&amp;b=2" target="_blank">'
        "<span>link</span></a></p>",
        _format(node, TextContext(theme, rels=rels)),
    )


def test_bullet_lists(parse_xml, theme) -> None:
    node = _shape(
        parse_xml,
        '<a:p><a:pPr><a:buChar char="*"/></a:pPr><a:r><a:t>one</a:t></a:r></a:p>'
        '<a:p><a:pPr><a:buChar char="*"/></a:pPr><a:r><a:t>two</a:t></a:r></a:p>'
        '<a:p><a:pPr><a:buAutoNum type="arabicPeriod"/></a:pPr><a:r><a:t>three</a:t></a:r></a:p>'
        '<a:p><a:pPr><a:buNone/></a:pPr><a:r><a:t>four</a:t></a:r></a:p>',
    )

    tc.assertEqual(
        '<ul><li><p style="text-align: left"><span>one</span></p></li>'
        '<li><p style="text-align: left"><span>two</span></p></li></ul>'
        '<ol><li><p style="text-align: left"><span>three</span></p></li></ol>'
        '<p style="text-align: left"><span>four</span></p>',
        _format(node, TextContext(theme)),
    )


def test_list_styles_inherit_by_level(parse_xml, theme) -> None:
    layout = _shape(
        parse_xml,
        "<a:lstStyle><a:lvl2pPr algn=\"ctr\"><a:defRPr sz=\"1400\"/></a:lvl2pPr></a:lstStyle><a:p/>",
    )
    node = _shape(
        parse_xml,
        '<a:p><a:r><a:t>top</a:t></a:r></a:p>'
        '<a:p><a:pPr lvl="1"/><a:r><a:t>nested</a:t></a:r></a:p>',
    )

    tc.assertEqual(
        '<p style="text-align: left"><span>top</span></p>'
        '<p style="text-align: center"><span style="font-size: 14pt">nested</span></p>',
        _format(node, TextContext(theme), layout=layout),
    )


def test_master_text_styles(parse_xml, theme) -> None:
    tx_styles = parse_xml(
        "<p:txStyles>"
        '<p:titleStyle><a:lvl1pPr><a:defRPr sz="4400"><a:latin typeface="+mj-lt"/></a:defRPr></a:lvl1pPr></p:titleStyle>'
        '<p:bodyStyle><a:lvl1pPr><a:buChar char="-"/><a:defRPr sz="2800"/></a:lvl1pPr></p:bodyStyle>'
        '<p:otherStyle><a:lvl1pPr><a:defRPr sz="1800"/></a:lvl1pPr></p:otherStyle>'
        "</p:txStyles>"
    )
    default_style = parse_xml(
        '<p:defaultTextStyle><a:lvl1pPr algn="just"><a:defRPr sz="1000"/></a:lvl1pPr></p:defaultTextStyle>'
    )
    ctx = TextContext(theme, master_text_styles=tx_styles, default_text_style=default_style)
    paragraph = "<a:p><a:r><a:t>x</a:t></a:r></a:p>"

    title = _shape(parse_xml, paragraph, '<p:nvPr><p:ph type="title"/></p:nvPr>')
    body = _shape(parse_xml, paragraph, '<p:nvPr><p:ph idx="1"/></p:nvPr>')
    text_box = _shape(parse_xml, paragraph)

    tc.assertEqual(
        '<p style="text-align: justify"><span style="font-size: 44pt; '
        'font-family: Calibri Light">x</span></p>',
        _format(title, ctx, "title"),
    )
    tc.assertEqual(
        '<ul><li><p style="text-align: justify"><span style="font-size: 28pt">x</span></p></li></ul>',
        _format(body, ctx, "body"),
    )
    tc.assertEqual(
        '<p style="text-align: justify"><span style="font-size: 18pt">x</span></p>',
        _format(text_box, ctx, "text"),
    )


def test_font_reference_color(parse_xml, theme) -> None:
    node = _shape(
        parse_xml,
        "<a:p><a:r><a:t>x</a:t></a:r></a:p>",
        extra='<p:style><a:fontRef idx="minor"><a:schemeClr val="lt1"/></a:fontRef></p:style>',
    )

    tc.assertEqual(
        '<p style="text-align: left"><span style="color: #FFFFFF">x</span></p>',
        _format(node, TextContext(theme)),
    )


def test_table_cell_body_without_chain(parse_xml, theme) -> None:
    tx_body = parse_xml("<a:txBody><a:bodyPr/><a:p><a:r><a:t>cell</a:t></a:r></a:p></a:txBody>")

    tc.assertEqual(
        '<p style="text-align: left"><span>cell</span></p>',
        format_text_body(tx_body, None, None, TextContext(theme)),
    )
