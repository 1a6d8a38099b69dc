"""
Text body to HTML.

Paragraph and run properties are looked up along a list of sources, most
specific first: the paragraph's own ``a:pPr``/``a:rPr``, the list styles of
the shape and its layout and master counterparts, the master's text styles
(title, body or other) and finally the presentation default text style.
"""

import html
import logging
import re
from dataclasses import dataclass, field
from xml.etree import ElementTree as ET

from pptx2json.extractors.color import resolve_color
from pptx2json.extractors.theme import Theme
from pptx2json.namespaces import R_ID, find, findall, get_attr, is_on, local_name
from pptx2json.resolve.geometry import first_defined
from pptx2json.resolve.placeholders import PlaceholderChain
from pptx2json.resolve.relationships import RelationshipTable

logger = logging.getLogger(__name__)

_TAG_RE = re.compile(r"<[^>]*>")

_ALIGNMENTS = {
    "l": "left",
    "ctr": "center",
    "r": "right",
    "just": "justify",
    "dist": "justify",
}

_TITLE_TYPES = frozenset(["title", "ctrTitle"])


@dataclass
class TextContext:
    """Document-level inputs of the text formatter for one slide."""

    theme: Theme
    master_text_styles: ET.Element | None = None
    default_text_style: ET.Element | None = None
    rels: RelationshipTable = field(default_factory=dict)


def has_valid_text(content: str) -> bool:
    """True when HTML content has visible text once tags and whitespace are gone."""
    return bool(html.unescape(_TAG_RE.sub("", content or "")).strip())


def _master_style_name(node: ET.Element | None, ph_type: str | None) -> str:
    if node is None or find(node, "p:nvSpPr/p:nvPr/p:ph") is None:
        return "p:otherStyle"
    if ph_type in _TITLE_TYPES:
        return "p:titleStyle"
    return "p:bodyStyle"


def _level_sources(
    paragraph: ET.Element,
    chain: PlaceholderChain | None,
    ph_type: str | None,
    ctx: TextContext,
) -> list[ET.Element | None]:
    """Paragraph property elements applying to a paragraph, most specific first."""
    level = int(get_attr(paragraph, "a:pPr", "lvl") or 0) + 1
    lvl_name = f"a:lvl{level}pPr"

    sources = [find(paragraph, "a:pPr")]
    levels = chain.levels() if chain is not None else (None, None, None)
    for counterpart in levels:
        sources.append(find(counterpart, f"p:txBody/a:lstStyle/{lvl_name}"))
    style_name = _master_style_name(levels[0], ph_type)
    sources.append(find(ctx.master_text_styles, f"{style_name}/{lvl_name}"))
    sources.append(find(ctx.default_text_style, lvl_name))
    return sources


def _run_style(
    r_pr: ET.Element | None,
    sources: list[ET.Element | None],
    ctx: TextContext,
    font_ref_color: str | None,
) -> str:
    run_sources = [r_pr] + [find(src, "a:defRPr") for src in sources]

    def attr(name: str) -> str | None:
        return first_defined(run_sources, lambda props: props.get(name))

    styles = []
    size = attr("sz")
    if size:
        styles.append(f"font-size: {int(size) / 100:g}pt")

    color = first_defined(
        run_sources,
        lambda props: resolve_color(find(props, "a:solidFill"), ctx.theme),
    )
    color = color or font_ref_color
    if color:
        styles.append(f"color: {color}")

    if is_on(attr("b")):
        styles.append("font-weight: bold")
    if is_on(attr("i")):
        styles.append("font-style: italic")

    decorations = []
    underline = attr("u")
    if underline and underline != "none":
        decorations.append("underline")
    strike = attr("strike")
    if strike and strike != "noStrike":
        decorations.append("line-through")
    if decorations:
        styles.append(f"text-decoration: {' '.join(decorations)}")

    typeface = first_defined(
        run_sources, lambda props: get_attr(props, "a:latin", "typeface")
    )
    if typeface == "+mj-lt":
        typeface = ctx.theme.major_font
    elif typeface == "+mn-lt":
        typeface = ctx.theme.minor_font
    if typeface:
        styles.append(f"font-family: {typeface}")

    baseline = attr("baseline")
    if baseline and int(baseline) > 0:
        styles.append("vertical-align: super")
    elif baseline and int(baseline) < 0:
        styles.append("vertical-align: sub")

    return "; ".join(styles)


def _run_html(
    run: ET.Element,
    sources: list[ET.Element | None],
    ctx: TextContext,
    font_ref_color: str | None,
) -> str:
    text = html.escape("".join(t.text or "" for t in findall(run, "a:t")), quote=False)
    r_pr = find(run, "a:rPr")
    style = _run_style(r_pr, sources, ctx, font_ref_color)
    span = f'<span style="{style}">{text}</span>' if style else f"<span>{text}</span>"

    link_id = get_attr(r_pr, "a:hlinkClick", R_ID)
    rel = ctx.rels.get(link_id) if link_id else None
    if rel is not None:
        href = html.escape(rel.target)
        return f'<a href="{href}" target="_blank">{span}</a>'
    return span


def _bullet_kind(sources: list[ET.Element | None]) -> str | None:
    """Return "ul", "ol" or None for the first bullet declaration along the sources."""
    for props in sources:
        if props is None:
            continue
        if find(props, "a:buNone") is not None:
            return None
        if find(props, "a:buAutoNum") is not None:
            return "ol"
        if find(props, "a:buChar") is not None:
            return "ul"
    return None


def format_text_body(
    tx_body: ET.Element | None,
    chain: PlaceholderChain | None,
    ph_type: str | None,
    ctx: TextContext,
) -> str:
    """
    Format a ``p:txBody``/``a:txBody`` as HTML.

    Args:
        tx_body: The text body; None formats to "".
        chain: The shape and its layout/master counterparts, for inherited
            list styles. None for table cells.
        ph_type: Resolved placeholder type of the shape.
        ctx: Theme, master text styles, default text style and relationships.

    Returns:
        One ``<p>`` per paragraph with ``<span>`` runs; bulleted paragraphs
        are wrapped in ``<ul>``/``<ol>`` lists.
    """
    if tx_body is None:
        return ""

    node = chain.slide if chain is not None else None
    font_ref_color = resolve_color(find(node, "p:style/a:fontRef"), ctx.theme)

    parts = []
    open_list = None
    for paragraph in findall(tx_body, "a:p"):
        sources = _level_sources(paragraph, chain, ph_type, ctx)
        algn = first_defined(sources, lambda props: props.get("algn"))
        align = _ALIGNMENTS.get(algn, "left")

        content = []
        for child in paragraph:
            kind = local_name(child.tag)
            if kind in ("r", "fld"):
                content.append(_run_html(child, sources, ctx, font_ref_color))
            elif kind == "br":
                content.append("<br>")

        bullet = _bullet_kind(sources) if content else None
        if bullet != open_list:
            if open_list:
                parts.append(f"</{open_list}>")
            if bullet:
                parts.append(f"<{bullet}>")
            open_list = bullet

        paragraph_html = f'<p style="text-align: {align}">{"".join(content)}</p>'
        parts.append(f"<li>{paragraph_html}</li>" if bullet else paragraph_html)

    if open_list:
        parts.append(f"</{open_list}>")
    return "".join(parts)
