import html
import logging
from xml.etree import ElementTree as ET

from pptx2json.data_types import AudioElement, ImageElement, VideoElement, VisualElement
from pptx2json.exceptions import UnsupportedNodeError
from pptx2json.extractors.media import (
    AUDIO_EXTENSIONS,
    VIDEO_EXTENSIONS,
    file_extension,
    is_video_link,
)
from pptx2json.namespaces import R_EMBED, R_LINK, find, get_attr
from pptx2json.resolve.context import SlideContext
from pptx2json.resolve.geometry import (
    resolve_flips,
    resolve_position,
    resolve_rotation,
    resolve_size,
)
from pptx2json.resolve.placeholders import placeholder_of

logger = logging.getLogger(__name__)


def _geometry(node: ET.Element, ctx: SlideContext) -> dict:
    _, ph_idx, ph_type = placeholder_of(node)
    xfrms = [
        find(node, "p:spPr/a:xfrm"),
        find(ctx.layout_index.lookup(ph_type, ph_idx), "p:spPr/a:xfrm"),
        find(ctx.master_index.lookup(ph_type, ph_idx), "p:spPr/a:xfrm"),
    ]
    position = resolve_position(*xfrms)
    size = resolve_size(*xfrms)
    return dict(
        left=position.left,
        top=position.top,
        width=size.width,
        height=size.height,
        rotate=resolve_rotation(xfrms[0]),
    )


def _media_target(ctx: SlideContext, media_node: ET.Element) -> tuple[str | None, bool]:
    """Return (target, external) of the ``r:link`` of a video/audio node."""
    rel = ctx.relationship(media_node.get(R_LINK) or media_node.get(R_EMBED))
    if rel is None:
        logger.warning(f"Media relationship missing in {ctx.part_path}")
        return None, False
    return rel.target, rel.external or is_video_link(rel.target)


def generate_picture(node: ET.Element, ctx: SlideContext) -> VisualElement:
    """
    Build the video, audio or image element of a ``p:pic`` node.

    Video wins over audio, audio over image. Linked videos keep their URL;
    embedded media of a playable format is inlined as a data URI.

    Raises:
        UnsupportedNodeError: An image without an embedded picture part.
    """
    nv_pr = find(node, "p:nvPicPr/p:nvPr")

    video = find(nv_pr, "a:videoFile")
    if video is not None:
        target, external = _media_target(ctx, video)
        element = VideoElement(order=ctx.next_order(), **_geometry(node, ctx))
        if target and external:
            element.src = html.escape(target)
        elif target and file_extension(target) in VIDEO_EXTENSIONS:
            element.blob = ctx.media.load(target)
        return element

    audio = find(nv_pr, "a:audioFile")
    if audio is not None:
        target, external = _media_target(ctx, audio)
        element = AudioElement(order=ctx.next_order(), **_geometry(node, ctx))
        if target and not external and file_extension(target) in AUDIO_EXTENSIONS:
            element.blob = ctx.media.load(target)
        return element

    rel = ctx.relationship(get_attr(node, "p:blipFill/a:blip", R_EMBED))
    if rel is None or rel.external:
        raise UnsupportedNodeError(node.tag, "Picture without an embedded image")

    flip_h, flip_v = resolve_flips(find(node, "p:spPr/a:xfrm"))
    return ImageElement(
        order=ctx.next_order(),
        src=ctx.media.load(rel.target),
        is_flip_h=flip_h,
        is_flip_v=flip_v,
        **_geometry(node, ctx),
    )
