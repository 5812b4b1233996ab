"""Header-only metadata extraction for each supported image format.

Every format parser returns ``ImageMetadata`` on success or ``None`` when the
header is truncated or inconsistent; :func:`extract` turns ``None`` into the
unknown sentinel labelled with the detected format, so callers always get a
value back.
"""

from __future__ import annotations

import re
from typing import Final

from . import webp
from .byteview import read_i32_le, read_u8, read_u16, read_u32
from .constants import (
    BMP_MIN_HEADER,
    GIF_MIN_HEADER,
    ICO_MIN_HEADER,
    JPEG_EOI,
    JPEG_MARKER_PREFIX,
    JPEG_MIN_HEADER,
    JPEG_MIN_SEG_LEN,
    JPEG_SOF_MARKERS,
    JPEG_STANDALONE_MARKERS,
    PNG_MIN_HEADER,
    WEBP_MIN_HEADER,
    ImageFormat,
)
from .logging_utils import StructuredLogEvent, get_logger, log_event
from .models import ImageMetadata

logger = get_logger(__name__)

# ---- PNG (IHDR follows the 8-byte signature and 8-byte chunk header) ----
PNG_WIDTH_OFFSET: Final = 16
PNG_HEIGHT_OFFSET: Final = 20
PNG_BIT_DEPTH_OFFSET: Final = 24
PNG_COLOR_TYPE_OFFSET: Final = 25
PNG_COLOR_TYPES: Final[dict[int, tuple[str, bool]]] = {
    0: ("Grayscale", False),
    2: ("RGB", False),
    3: ("Indexed", False),
    4: ("Grayscale", True),
    6: ("RGBA", True),
}

JPEG_COMPONENT_SPACES: Final[dict[int, str]] = {1: "Grayscale", 3: "YCbCr", 4: "CMYK"}

# ---- GIF logical screen descriptor ----
GIF_WIDTH_OFFSET: Final = 6
GIF_HEIGHT_OFFSET: Final = 8
GIF_BIT_DEPTH: Final = 8

# ---- BMP (14-byte file header, then BITMAPINFOHEADER) ----
BMP_WIDTH_OFFSET: Final = 18
BMP_HEIGHT_OFFSET: Final = 22
BMP_BIT_COUNT_OFFSET: Final = 28
BMP_ALPHA_BIT_COUNT: Final = 32
BMP_INDEXED_MAX_BITS: Final = 8

# ---- ICO (6-byte ICONDIR, then 16-byte entries) ----
ICO_COUNT_OFFSET: Final = 4
ICO_ENTRY_OFFSET: Final = 6
ICO_BIT_COUNT_OFFSET: Final = 12
ICO_ZERO_MEANS: Final = 256

_SVG_UNITS = r"(?:px|em|%|pt|cm|mm|in)?"
SVG_TAG_RE: Final = re.compile(r"<svg[^>]*>", re.IGNORECASE)
# Guard against matching stroke-width=, data-height= and friends.
SVG_WIDTH_RE: Final = re.compile(r"""(?<![\w:-])width\s*=\s*["']?\s*(\d+(?:\.\d+)?)""" + _SVG_UNITS, re.IGNORECASE)
SVG_HEIGHT_RE: Final = re.compile(r"""(?<![\w:-])height\s*=\s*["']?\s*(\d+(?:\.\d+)?)""" + _SVG_UNITS, re.IGNORECASE)
_NUM = r"([-+]?\d*\.?\d+)"
SVG_VIEWBOX_RE: Final = re.compile(
    r"""viewBox\s*=\s*["']?\s*""" + r"[\s,]+".join([_NUM] * 4),
    re.IGNORECASE,
)


def _floor_number(text: str) -> int:
    try:
        return max(int(float(text)), 0)
    except (ValueError, OverflowError):
        return 0


def _parse_png(data: bytes) -> ImageMetadata | None:
    if len(data) < PNG_MIN_HEADER:
        return None
    width = read_u32(data, PNG_WIDTH_OFFSET, "big")
    height = read_u32(data, PNG_HEIGHT_OFFSET, "big")
    bit_depth = read_u8(data, PNG_BIT_DEPTH_OFFSET)
    color_type = read_u8(data, PNG_COLOR_TYPE_OFFSET)
    if width is None or height is None or bit_depth is None or color_type is None:
        return None
    color_space, has_alpha = PNG_COLOR_TYPES.get(color_type, (None, False))
    return ImageMetadata(
        width=width,
        height=height,
        format=ImageFormat.PNG.display_name,
        file_size=len(data),
        color_space=color_space,
        has_alpha=has_alpha,
        bit_depth=bit_depth,
    )


def _read_jpeg_frame(data: bytes, seg: int) -> ImageMetadata | None:
    # segment layout: len(2) precision(1) height(2) width(2) components(1) ...
    precision = read_u8(data, seg + 2)
    height = read_u16(data, seg + 3, "big")
    width = read_u16(data, seg + 5, "big")
    components = read_u8(data, seg + 7)
    if precision is None or height is None or width is None or components is None:
        return None
    return ImageMetadata(
        width=width,
        height=height,
        format=ImageFormat.JPEG.display_name,
        file_size=len(data),
        color_space=JPEG_COMPONENT_SPACES.get(components),
        has_alpha=False,
        bit_depth=precision,
    )


def _parse_jpeg(data: bytes) -> ImageMetadata | None:
    """Walk marker segments after SOI until a start-of-frame is found."""
    if len(data) < JPEG_MIN_HEADER:
        return None
    i = 2
    data_len = len(data)
    while i < data_len:
        if data[i] != JPEG_MARKER_PREFIX:
            i += 1
            continue
        # skip fill bytes
        while i < data_len and data[i] == JPEG_MARKER_PREFIX:
            i += 1
        if i >= data_len:
            break
        marker = data[i]
        i += 1
        if marker == JPEG_EOI:
            break
        if marker in JPEG_STANDALONE_MARKERS:
            continue
        seg_len = read_u16(data, i, "big")
        if seg_len is None or seg_len < JPEG_MIN_SEG_LEN:
            break
        if marker in JPEG_SOF_MARKERS:
            return _read_jpeg_frame(data, i)
        i += seg_len
    return None


def _parse_gif(data: bytes) -> ImageMetadata | None:
    if len(data) < GIF_MIN_HEADER:
        return None
    width = read_u16(data, GIF_WIDTH_OFFSET, "little")
    height = read_u16(data, GIF_HEIGHT_OFFSET, "little")
    if width is None or height is None:
        return None
    return ImageMetadata(
        width=width,
        height=height,
        format=ImageFormat.GIF.display_name,
        file_size=len(data),
        color_space="Indexed",
        has_alpha=True,
        bit_depth=GIF_BIT_DEPTH,
    )


def _parse_webp(data: bytes) -> ImageMetadata | None:
    if len(data) < WEBP_MIN_HEADER:
        return None
    tag = webp.chunk_tag(data)
    if tag == webp.VP8_TAG:
        size = webp.vp8_frame_size(data)
        if size is None:
            return None
        width, height = size
        color_space, has_alpha = "YUV", False
    elif tag == webp.VP8L_TAG:
        header = webp.vp8l_header(data)
        if header is None:
            return None
        width, height, has_alpha = header
        color_space = "RGBA"
    elif tag == webp.VP8X_TAG:
        canvas = webp.vp8x_canvas(data)
        if canvas is None:
            return None
        width, height, has_alpha = canvas
        color_space = "RGBA" if has_alpha else "RGB"
    else:
        return None
    return ImageMetadata(
        width=width,
        height=height,
        format=ImageFormat.WEBP.display_name,
        file_size=len(data),
        color_space=color_space,
        has_alpha=has_alpha,
    )


def _parse_bmp(data: bytes) -> ImageMetadata | None:
    if len(data) < BMP_MIN_HEADER:
        return None
    width = read_i32_le(data, BMP_WIDTH_OFFSET)
    height = read_i32_le(data, BMP_HEIGHT_OFFSET)
    bit_count = read_u16(data, BMP_BIT_COUNT_OFFSET, "little")
    if width is None or height is None or bit_count is None or width < 0:
        return None
    return ImageMetadata(
        width=width,
        # negative height marks top-down row order
        height=abs(height),
        format=ImageFormat.BMP.display_name,
        file_size=len(data),
        color_space="Indexed" if bit_count <= BMP_INDEXED_MAX_BITS else "RGB",
        has_alpha=bit_count == BMP_ALPHA_BIT_COUNT,
        bit_depth=bit_count,
    )


def _parse_ico(data: bytes) -> ImageMetadata | None:
    if len(data) < ICO_MIN_HEADER:
        return None
    count = read_u16(data, ICO_COUNT_OFFSET, "little")
    width = read_u8(data, ICO_ENTRY_OFFSET)
    height = read_u8(data, ICO_ENTRY_OFFSET + 1)
    bit_count = read_u16(data, ICO_BIT_COUNT_OFFSET, "little")
    if count is None or width is None or height is None or bit_count is None or count < 1:
        return None
    return ImageMetadata(
        width=width or ICO_ZERO_MEANS,
        height=height or ICO_ZERO_MEANS,
        format=f"{ImageFormat.ICO.display_name} ({count} images)",
        file_size=len(data),
        color_space=None,
        # Entries are assumed to carry an AND mask or alpha channel.
        has_alpha=True,
        bit_depth=bit_count or None,
    )


def _svg_dimensions(tag: str) -> tuple[int, int]:
    width_match = SVG_WIDTH_RE.search(tag)
    height_match = SVG_HEIGHT_RE.search(tag)
    width = _floor_number(width_match[1]) if width_match else 0
    height = _floor_number(height_match[1]) if height_match else 0
    if width and height:
        return width, height
    viewbox = SVG_VIEWBOX_RE.search(tag)
    if viewbox is None:
        return width, height
    return _floor_number(viewbox[3]), _floor_number(viewbox[4])


def _parse_svg(data: bytes) -> ImageMetadata | None:
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        return None
    tag = SVG_TAG_RE.search(text)
    width, height = _svg_dimensions(tag[0]) if tag else (0, 0)
    return ImageMetadata(
        width=width,
        height=height,
        format=ImageFormat.SVG.display_name,
        file_size=len(data),
        color_space=None,
        has_alpha=True,
    )


def unknown_for(fmt: ImageFormat, file_size: int) -> ImageMetadata:
    """Return the sentinel for a detected ``fmt`` whose header was unreadable."""
    sentinel = ImageMetadata.unknown(file_size, fmt.display_name)
    if fmt is ImageFormat.SVG:
        # SVG always supports transparency, readable or not.
        return ImageMetadata(width=0, height=0, format=sentinel.format, file_size=file_size, has_alpha=True)
    return sentinel


def _dispatch(data: bytes, fmt: ImageFormat) -> ImageMetadata | None:
    match fmt:
        case ImageFormat.PNG:
            return _parse_png(data)
        case ImageFormat.JPEG:
            return _parse_jpeg(data)
        case ImageFormat.GIF:
            return _parse_gif(data)
        case ImageFormat.WEBP:
            return _parse_webp(data)
        case ImageFormat.BMP:
            return _parse_bmp(data)
        case ImageFormat.ICO:
            return _parse_ico(data)
        case ImageFormat.SVG:
            return _parse_svg(data)


def extract(data: bytes, fmt: ImageFormat) -> ImageMetadata:
    """Read ``fmt``'s header from ``data``; never raises."""
    try:
        parsed = _dispatch(data, fmt)
    except Exception as err:  # noqa: BLE001 - any parser fault degrades to the sentinel
        log_event(
            logger,
            StructuredLogEvent(
                name="extract.unexpected_error",
                message="header parser raised; reporting unknown metadata",
                context={"format": fmt, "size": len(data), "error": repr(err)},
            ),
        )
        parsed = None
    if parsed is None:
        log_event(
            logger,
            StructuredLogEvent(
                name="extract.unreadable_header",
                message="header truncated or malformed",
                context={"format": fmt, "size": len(data)},
            ),
        )
        return unknown_for(fmt, len(data))
    return parsed


__all__ = ["extract", "unknown_for"]
