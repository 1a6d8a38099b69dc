from __future__ import annotations

import io
import zipfile
from dataclasses import dataclass

from pptx2json.exceptions import ZipBombError


@dataclass(frozen=True)
class ZipBombLimits:
    """
    Heuristics for rejecting probable ZIP bombs before any part is parsed.

    A presentation rarely holds more than a few thousand members; media
    members are already compressed, so their ratio stays close to one.
    """

    max_entries: int = 20_000
    max_total_uncompressed_bytes: int = 2 * 1024 * 1024 * 1024  # 2 GiB
    max_single_uncompressed_bytes: int = 1 * 1024 * 1024 * 1024  # 1 GiB
    max_total_compression_ratio: float = 200.0
    max_entry_compression_ratio: float = 500.0


DEFAULT_ZIP_BOMB_LIMITS = ZipBombLimits()


def _suffix(source: str | None) -> str:
    return f" [{source}]" if source else ""


def _check_entry(
    info: zipfile.ZipInfo, limits: ZipBombLimits, source: str | None
) -> None:
    size = int(info.file_size or 0)
    compressed = int(info.compress_size or 0)

    if size > limits.max_single_uncompressed_bytes:
        raise ZipBombError(
            f"Archive member {info.filename} too large "
            f"({size} bytes > {limits.max_single_uncompressed_bytes})" + _suffix(source)
        )
    if size == 0:
        return
    if compressed <= 0:
        raise ZipBombError(
            f"Archive member {info.filename} has zero compressed size"
            + _suffix(source)
        )
    ratio = size / compressed
    if ratio > limits.max_entry_compression_ratio:
        raise ZipBombError(
            f"Archive member {info.filename} compression ratio too high "
            f"({ratio:.1f} > {limits.max_entry_compression_ratio})" + _suffix(source)
        )


def validate_zipfile(
    zf: zipfile.ZipFile,
    *,
    limits: ZipBombLimits = DEFAULT_ZIP_BOMB_LIMITS,
    source: str | None = None,
) -> None:
    """
    Validate an opened archive against high-confidence ZIP-bomb indicators.

    This is a best-effort DoS mitigation, not a complete sandbox.
    """
    try:
        infos = [info for info in zf.infolist() if not info.is_dir()]
    except Exception as exc:
        raise ZipBombError("Failed to inspect archive", cause=exc) from exc

    if len(infos) > limits.max_entries:
        raise ZipBombError(
            f"Archive has too many members ({len(infos)} > {limits.max_entries})"
            + _suffix(source)
        )

    total_size = 0
    total_compressed = 0
    for info in infos:
        _check_entry(info, limits, source)
        total_size += int(info.file_size or 0)
        total_compressed += int(info.compress_size or 0)
        if total_size > limits.max_total_uncompressed_bytes:
            raise ZipBombError(
                f"Archive uncompressed size too large "
                f"({total_size} bytes > {limits.max_total_uncompressed_bytes})"
                + _suffix(source)
            )

    if total_size and total_compressed:
        total_ratio = total_size / total_compressed
        if total_ratio > limits.max_total_compression_ratio:
            raise ZipBombError(
                f"Archive compression ratio too high "
                f"({total_ratio:.1f} > {limits.max_total_compression_ratio})"
                + _suffix(source)
            )


def open_zipfile(
    file_like: io.BytesIO,
    *,
    limits: ZipBombLimits = DEFAULT_ZIP_BOMB_LIMITS,
    source: str | None = None,
) -> zipfile.ZipFile:
    """
    Open a presentation archive and validate it for ZIP-bomb indicators.

    Caller owns the returned ZipFile and must close it.
    """
    file_like.seek(0)
    zf = zipfile.ZipFile(file_like, "r")
    try:
        validate_zipfile(zf, limits=limits, source=source)
    except Exception:
        zf.close()
        raise
    return zf
