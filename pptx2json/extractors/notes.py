from xml.etree import ElementTree as ET

from pptx2json.namespaces import find, findall, get_attr


def extract_note(notes_root: ET.Element | None) -> str:
    """
    Collect the speaker notes text of a notes slide.

    Runs are concatenated per paragraph and non-empty paragraphs joined with
    newlines. The slide number placeholder is skipped.
    """
    if notes_root is None:
        return ""

    paragraphs = []
    for sp in findall(notes_root, "p:cSld/p:spTree/p:sp"):
        if get_attr(sp, "p:nvSpPr/p:nvPr/p:ph", "type") == "sldNum":
            continue
        for paragraph in findall(find(sp, "p:txBody"), "a:p"):
            text = "".join(t.text or "" for t in findall(paragraph, "a:r/a:t"))
            if text:
                paragraphs.append(text)
    return "\n".join(paragraphs)
