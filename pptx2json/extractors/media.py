import base64
import logging
import mimetypes
import posixpath
from functools import lru_cache

from pptx2json.util.part_reader import PackageReader

logger = logging.getLogger(__name__)

# Office formats missing from the platform type tables
_OFFICE_MIME_TYPES = {
    "emf": "image/x-emf",
    "wmf": "image/x-wmf",
}

VIDEO_EXTENSIONS = frozenset(["mp4", "webm", "ogg"])
AUDIO_EXTENSIONS = frozenset(["mp3", "wav", "ogg"])


def file_extension(path: str) -> str:
    return posixpath.splitext(path)[1].lstrip(".").lower()


@lru_cache(maxsize=512)
def mime_type_for(path: str) -> str:
    office_type = _OFFICE_MIME_TYPES.get(file_extension(path))
    if office_type:
        return office_type
    return mimetypes.guess_type(path)[0] or "application/octet-stream"


def to_data_uri(payload: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(payload).decode('ascii')}"


def is_video_link(target: str) -> bool:
    """True for video targets hosted outside the package."""
    return target.lower().startswith(("http://", "https://", "ftp://", "//"))


class MediaLoader:
    """
    Turns media parts into data URIs.

    With ``include_media`` disabled every load returns None, so elements are
    still emitted with their geometry but without payload.
    """

    def __init__(self, reader: PackageReader, include_media: bool = True):
        self.reader = reader
        self.include_media = include_media

    def load(self, part_path: str | None) -> str | None:
        if not part_path or not self.include_media:
            return None
        if not self.reader.exists(part_path):
            logger.warning(f"Media part missing from package: {part_path}")
            return None
        payload = self.reader.read_bytes(part_path)
        logger.debug(f"Embedding media {part_path} ({len(payload)} bytes)")
        return to_data_uri(payload, mime_type_for(part_path))
