"""Builders for minimal, structurally valid image headers used across tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

from imgprobe.constants import ImageFormat

if TYPE_CHECKING:
    from collections.abc import Iterator


def png_bytes(width: int, height: int, *, bit_depth: int = 8, color_type: int = 6) -> bytes:
    # signature + length(13) + "IHDR" + width + height + bit_depth + color_type + misc + crc
    sig = b"\x89PNG\r\n\x1a\n"
    ihdr_len = (13).to_bytes(4, "big")
    ihdr = b"IHDR"
    w = width.to_bytes(4, "big")
    h = height.to_bytes(4, "big")
    rest = b"\x00\x00\x00"  # compression, filter, interlace
    crc = b"\x00\x00\x00\x00"  # ignored
    return sig + ihdr_len + ihdr + w + h + bytes((bit_depth, color_type)) + rest + crc


JFIF_APP0 = b"\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00"
COMMENT = b"\xff\xfe\x00\x05hey"
EOI = b"\xff\xd9"


def sof_segment(width: int, height: int, *, components: int = 3, precision: int = 8, marker: int = 0xC0) -> bytes:
    specs = b"".join(bytes((i + 1, 0x11, 0x00)) for i in range(components))
    length = 8 + len(specs)
    return (
        bytes((0xFF, marker))
        + length.to_bytes(2, "big")
        + bytes((precision,))
        + height.to_bytes(2, "big")
        + width.to_bytes(2, "big")
        + bytes((components,))
        + specs
    )


def jpeg_bytes(width: int, height: int, *, components: int = 3, precision: int = 8) -> bytes:
    # SOI + APP0 + SOF0 + EOI
    sof = sof_segment(width, height, components=components, precision=precision)
    return b"\xff\xd8" + JFIF_APP0 + sof + EOI


def jpeg_without_frame() -> bytes:
    return b"\xff\xd8" + JFIF_APP0 + COMMENT + EOI


def gif_bytes(width: int, height: int, *, version: bytes = b"89a") -> bytes:
    # Header (6) + Logical Screen Descriptor (7)
    return b"GIF" + version + width.to_bytes(2, "little") + height.to_bytes(2, "little") + b"\xf7\x00\x00"


def _riff(chunk: bytes) -> bytes:
    return b"RIFF" + (len(chunk) + 4).to_bytes(4, "little") + b"WEBP" + chunk


def webp_vp8_bytes(width: int, height: int, *, scale_bits: int = 0) -> bytes:
    frame = b"\x50\x02\x00" + b"\x9d\x01\x2a"
    frame += (width | scale_bits << 14).to_bytes(2, "little")
    frame += (height | scale_bits << 14).to_bytes(2, "little")
    frame += b"\x00" * 4
    return _riff(b"VP8 " + len(frame).to_bytes(4, "little") + frame)


def vp8l_bits(width: int, height: int, *, alpha: bool = False) -> int:
    return (width - 1) | (height - 1) << 14 | int(alpha) << 28


def webp_vp8l_bytes(width: int, height: int, *, alpha: bool = False) -> bytes:
    payload = b"\x2f" + vp8l_bits(width, height, alpha=alpha).to_bytes(4, "little") + b"\x00" * 5
    return _riff(b"VP8L" + len(payload).to_bytes(4, "little") + payload)


def webp_vp8x_bytes(width: int, height: int, *, alpha: bool = False) -> bytes:
    flags = 0x10 if alpha else 0x00
    payload = bytes((flags, 0, 0, 0)) + (width - 1).to_bytes(3, "little") + (height - 1).to_bytes(3, "little")
    return _riff(b"VP8X" + len(payload).to_bytes(4, "little") + payload)


def bmp_bytes(width: int, height: int, *, bit_count: int = 24) -> bytes:
    # BITMAPFILEHEADER (14) + BITMAPINFOHEADER (40)
    b = bytearray(54)
    b[0:2] = b"BM"
    b[2:6] = (54).to_bytes(4, "little")
    b[10:14] = (54).to_bytes(4, "little")
    b[14:18] = (40).to_bytes(4, "little")
    b[18:22] = width.to_bytes(4, "little", signed=True)
    b[22:26] = height.to_bytes(4, "little", signed=True)
    b[26:28] = (1).to_bytes(2, "little")
    b[28:30] = bit_count.to_bytes(2, "little")
    return bytes(b)


def ico_bytes(width: int, height: int, *, count: int = 1, bit_count: int = 32) -> bytes:
    # ICONDIR (6) + one ICONDIRENTRY (16); 256 is stored as 0
    entry = bytes((width % 256, height % 256, 0, 0))
    entry += (1).to_bytes(2, "little") + bit_count.to_bytes(2, "little")
    entry += (0).to_bytes(4, "little") + (22).to_bytes(4, "little")
    return b"\x00\x00\x01\x00" + count.to_bytes(2, "little") + entry


def svg_bytes(attrs: str) -> bytes:
    return f'<?xml version="1.0"?>\n<svg xmlns="http://www.w3.org/2000/svg" {attrs}><rect/></svg>'.encode()


def golden_samples() -> Iterator[tuple[ImageFormat, bytes, int, int]]:
    """Yield (format, bytes, width, height) for one valid sample per variant."""
    yield ImageFormat.PNG, png_bytes(800, 600), 800, 600
    yield ImageFormat.JPEG, jpeg_bytes(640, 480), 640, 480
    yield ImageFormat.GIF, gif_bytes(320, 240), 320, 240
    yield ImageFormat.WEBP, webp_vp8_bytes(400, 300), 400, 300
    yield ImageFormat.WEBP, webp_vp8l_bytes(100, 50), 100, 50
    yield ImageFormat.WEBP, webp_vp8x_bytes(1024, 768, alpha=True), 1024, 768
    yield ImageFormat.BMP, bmp_bytes(64, -100), 64, 100
    yield ImageFormat.ICO, ico_bytes(256, 256), 256, 256
    yield ImageFormat.SVG, svg_bytes('viewBox="0 0 200 100"'), 200, 100
