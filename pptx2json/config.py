from dataclasses import dataclass, field

from pptx2json.util.zip_bomb import DEFAULT_ZIP_BOMB_LIMITS, ZipBombLimits


@dataclass(frozen=True)
class ConverterOptions:
    """
    Options controlling a single conversion.

    include_media: embed image, video and audio payloads as base64 data URIs.
        When False, media elements are still produced (with their geometry)
        but carry no payload.
    zip_limits: ZIP-bomb thresholds applied when the archive is opened.
    """

    include_media: bool = True
    zip_limits: ZipBombLimits = field(default=DEFAULT_ZIP_BOMB_LIMITS)


DEFAULT_OPTIONS = ConverterOptions()
