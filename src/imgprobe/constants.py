"""Project-wide constants, enums, and the image format catalog."""

from __future__ import annotations

from enum import Enum, StrEnum
from typing import Final


class ContentType(StrEnum):
    """Body classifications understood by the surrounding inspection tool."""

    JSON = "json"
    XML = "xml"
    HTML = "html"
    PROTOBUF = "protobuf"
    FORM_DATA = "form_data"
    MULTIPART = "multipart"
    PLAIN_TEXT = "plain_text"
    BINARY = "binary"
    PDF = "pdf"
    IMAGE_PNG = "image_png"
    IMAGE_JPEG = "image_jpeg"
    IMAGE_GIF = "image_gif"
    IMAGE_WEBP = "image_webp"
    IMAGE_SVG = "image_svg"
    IMAGE_BMP = "image_bmp"
    IMAGE_ICO = "image_ico"
    IMAGE_OTHER = "image_other"
    UNKNOWN = "unknown"


class ImageFormat(Enum):
    """Closed catalog of recognised image containers.

    Members are listed in detection priority order; each carries its display
    name, body classification, and the MIME types it is registered under.
    """

    PNG = ("PNG", ContentType.IMAGE_PNG, ("image/png",))
    JPEG = ("JPEG", ContentType.IMAGE_JPEG, ("image/jpeg", "image/jpg"))
    GIF = ("GIF", ContentType.IMAGE_GIF, ("image/gif",))
    WEBP = ("WebP", ContentType.IMAGE_WEBP, ("image/webp",))
    BMP = ("BMP", ContentType.IMAGE_BMP, ("image/bmp", "image/x-bmp"))
    ICO = ("ICO", ContentType.IMAGE_ICO, ("image/x-icon", "image/vnd.microsoft.icon", "image/ico"))
    SVG = ("SVG", ContentType.IMAGE_SVG, ("image/svg+xml",))

    def __init__(self, display_name: str, content_type: ContentType, mime_types: tuple[str, ...]) -> None:
        self.display_name = display_name
        self.content_type = content_type
        self.mime_types = mime_types


class SummaryFormat(StrEnum):
    """Valid summary formats for the inspect command."""

    HUMAN = "human"
    JSON = "json"
    NONE = "none"


class TableStyle(StrEnum):
    """Valid table styles for summary printing."""

    AUTO = "auto"
    FULL = "full"
    COMPACT = "compact"
    NONE = "none"


SUPPORTED_CONTENT_TYPES: Final[tuple[str, ...]] = tuple(mime for fmt in ImageFormat for mime in fmt.mime_types)

# Binary formats sit at 100-199 and structured text at 200-299.
IMAGE_PARSER_PRIORITY: Final = 150

UNKNOWN_FORMAT_LABEL: Final = "Unknown"

# ---- Signatures ----
PNG_SIGNATURE: Final = b"\x89PNG\r\n\x1a\n"
JPEG_SIGNATURE: Final = b"\xff\xd8\xff"
GIF_SIGNATURE: Final = b"GIF8"
GIF_VERSIONS: Final = frozenset(b"79")
GIF_SUFFIX: Final = ord("a")
RIFF_SIGNATURE: Final = b"RIFF"
WEBP_SIGNATURE: Final = b"WEBP"
BMP_SIGNATURE: Final = b"BM"
ICO_SIGNATURE: Final = b"\x00\x00\x01\x00"

SVG_SNIFF_WINDOW: Final = 1000
SVG_MIN_SNIFF: Final = 5

# ---- Minimum header sizes ----
PNG_MIN_HEADER: Final = 26
JPEG_MIN_HEADER: Final = 4
GIF_MIN_HEADER: Final = 10
WEBP_MIN_HEADER: Final = 30
BMP_MIN_HEADER: Final = 30
ICO_MIN_HEADER: Final = 22

# ---- JPEG markers ----
JPEG_MARKER_PREFIX: Final = 0xFF
JPEG_EOI: Final = 0xD9
JPEG_TEM: Final = 0x01
# RST0-RST7 plus a stray SOI carry no length field.
JPEG_STANDALONE_MARKERS: Final = frozenset(range(0xD0, 0xD9)) | {JPEG_TEM}
# SOF0-SOF15 minus DHT (C4), JPG (C8) and DAC (CC).
JPEG_SOF_MARKERS: Final = frozenset(range(0xC0, 0xD0)) - {0xC4, 0xC8, 0xCC}
JPEG_MIN_SEG_LEN: Final = 2

# ---- Size formatting ----
KIB: Final = 1024
MIB: Final = 1024 * 1024

# ---- CLI exit codes ----
EXIT_USAGE: Final = 2
EXIT_CONFIG: Final = 3
EXIT_PATH: Final = 4

# Config keys
CONFIG_MAX_BODY_BYTES = "max_body_bytes"
CONFIG_SUMMARY_STYLE = "summary_style"
CONFIG_SHOW_INVALID = "show_invalid"

DEFAULT_MAX_BODY_BYTES: Final = 16 * MIB
