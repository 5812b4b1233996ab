"""Magic-byte format detection.

Checks run in catalog order and the first match wins. Only the shortest
prefix each format needs is examined, and SVG sniffing looks at no more than
the first ``SVG_SNIFF_WINDOW`` bytes.
"""

from __future__ import annotations

import codecs
from typing import TYPE_CHECKING

from .byteview import matches_at, read_u8
from .constants import (
    BMP_SIGNATURE,
    GIF_SIGNATURE,
    GIF_SUFFIX,
    GIF_VERSIONS,
    ICO_SIGNATURE,
    JPEG_SIGNATURE,
    PNG_SIGNATURE,
    RIFF_SIGNATURE,
    SVG_MIN_SNIFF,
    SVG_SNIFF_WINDOW,
    WEBP_SIGNATURE,
    ImageFormat,
)

if TYPE_CHECKING:
    from collections.abc import Callable


def is_png(data: bytes) -> bool:
    return data.startswith(PNG_SIGNATURE)


def is_jpeg(data: bytes) -> bool:
    return data.startswith(JPEG_SIGNATURE)


def is_gif(data: bytes) -> bool:
    # GIF87a / GIF89a
    return data.startswith(GIF_SIGNATURE) and read_u8(data, 4) in GIF_VERSIONS and read_u8(data, 5) == GIF_SUFFIX


def is_webp(data: bytes) -> bool:
    return data.startswith(RIFF_SIGNATURE) and matches_at(data, 8, WEBP_SIGNATURE)


def is_bmp(data: bytes) -> bool:
    return data.startswith(BMP_SIGNATURE)


def is_ico(data: bytes) -> bool:
    # Cursor files (00 00 02 00) are intentionally not matched.
    return data.startswith(ICO_SIGNATURE)


def is_svg(data: bytes) -> bool:
    """Heuristic text sniff for SVG markup in the leading bytes."""
    if len(data) < SVG_MIN_SNIFF:
        return False
    try:
        # A character cut by the window edge is dropped, not treated as invalid.
        preview = codecs.getincrementaldecoder("utf-8")().decode(data[:SVG_SNIFF_WINDOW], final=False)
    except UnicodeDecodeError:
        return False
    lowered = preview.lower()
    return "<svg" in lowered or "<!doctype svg" in lowered or ("<?xml" in lowered and "svg" in lowered)


_CHECKS: tuple[tuple[ImageFormat, Callable[[bytes], bool]], ...] = (
    (ImageFormat.PNG, is_png),
    (ImageFormat.JPEG, is_jpeg),
    (ImageFormat.GIF, is_gif),
    (ImageFormat.WEBP, is_webp),
    (ImageFormat.BMP, is_bmp),
    (ImageFormat.ICO, is_ico),
    (ImageFormat.SVG, is_svg),
)


def detect(data: bytes) -> ImageFormat | None:
    """Return the image format identified by ``data``'s signature, if any."""
    if not data:
        return None
    for fmt, check in _CHECKS:
        if check(data):
            return fmt
    return None


__all__ = ["detect", "is_bmp", "is_gif", "is_ico", "is_jpeg", "is_png", "is_svg", "is_webp"]
