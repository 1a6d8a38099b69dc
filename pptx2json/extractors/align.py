from pptx2json.namespaces import get_attr
from pptx2json.resolve.geometry import first_defined
from pptx2json.resolve.placeholders import PlaceholderChain

_ANCHORS = {"ctr": "mid", "b": "down"}


def resolve_vertical_align(chain: PlaceholderChain) -> str:
    """Map the first ``a:bodyPr@anchor`` along the chain to up/mid/down."""
    anchor = first_defined(
        chain.levels(), lambda level: get_attr(level, "p:txBody/a:bodyPr", "anchor")
    )
    return _ANCHORS.get(anchor, "up")
