import io
import logging
import zipfile
from xml.etree import ElementTree as ET

from pptx2json.exceptions import ConversionError, PartNotFoundError
from pptx2json.util.zip_bomb import DEFAULT_ZIP_BOMB_LIMITS, ZipBombLimits, open_zipfile

logger = logging.getLogger(__name__)


class PackageReader:
    """
    Read-only access to the parts of a presentation package.

    Opens the ZIP archive once and caches every parsed XML part by its
    archive path, so layouts, masters and themes shared by many slides are
    decoded a single time. Cached elements are treated as immutable by all
    callers.
    """

    def __init__(
        self,
        file_like: io.BytesIO,
        *,
        limits: ZipBombLimits = DEFAULT_ZIP_BOMB_LIMITS,
        source: str | None = None,
    ):
        try:
            self._zip = open_zipfile(file_like, limits=limits, source=source)
        except zipfile.BadZipFile as exc:
            raise ConversionError(
                f"Not a presentation package: {source or 'stream'}", cause=exc
            ) from exc
        self._namelist = set(self._zip.namelist())
        self._parts: dict[str, ET.Element] = {}

    def exists(self, path: str) -> bool:
        return path in self._namelist

    def read_part(self, path: str) -> ET.Element:
        """Return the parsed root of an XML part, raising if it is absent."""
        root = self._parts.get(path)
        if root is not None:
            return root
        if path not in self._namelist:
            raise PartNotFoundError(path)
        logger.debug(f"Parsing part: {path}")
        with self._zip.open(path) as f:
            root = ET.parse(f).getroot()
        self._parts[path] = root
        return root

    def read_optional_part(self, path: str | None) -> ET.Element | None:
        """Return the parsed root of an XML part, or None if it is absent."""
        if not path or path not in self._namelist:
            return None
        return self.read_part(path)

    def read_bytes(self, path: str) -> bytes:
        if path not in self._namelist:
            raise PartNotFoundError(path)
        return self._zip.read(path)

    def close(self) -> None:
        self._zip.close()

    def __enter__(self) -> "PackageReader":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
