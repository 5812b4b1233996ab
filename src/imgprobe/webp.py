"""Bit-field decoders for the three WebP bitstream headers.

Offsets are absolute positions in the RIFF file: the RIFF header takes 12
bytes and each chunk header another 8, so chunk payloads start at 20.
"""

from __future__ import annotations

from typing import Final

from .byteview import matches_at, read_u8, read_u16, read_u24_le, read_u32

CHUNK_TAG_OFFSET: Final = 12
CHUNK_PAYLOAD_OFFSET: Final = 20

VP8_TAG: Final = b"VP8 "
VP8L_TAG: Final = b"VP8L"
VP8X_TAG: Final = b"VP8X"

# VP8: 3-byte frame tag, then the keyframe start code.
VP8_START_CODE_OFFSET: Final = 23
VP8_START_CODE: Final = b"\x9d\x01\x2a"
VP8_DIMENSION_MASK: Final = 0x3FFF

VP8L_SIGNATURE: Final = 0x2F
VP8L_BITS_OFFSET: Final = 21
VP8L_FIELD_BITS: Final = 14
VP8L_FIELD_MASK: Final = (1 << VP8L_FIELD_BITS) - 1
VP8L_ALPHA_BIT: Final = 28

VP8X_ALPHA_FLAG: Final = 0x10
VP8X_WIDTH_OFFSET: Final = 24
VP8X_HEIGHT_OFFSET: Final = 27


def chunk_tag(data: bytes) -> bytes | None:
    """Return the first chunk's four-character tag."""
    raw = data[CHUNK_TAG_OFFSET : CHUNK_TAG_OFFSET + 4]
    return raw if len(raw) == 4 else None  # noqa: PLR2004


def mask14(value: int) -> int:
    return value & VP8_DIMENSION_MASK


def unpack_vp8l_bits(bits: int) -> tuple[int, int, bool]:
    """Split the packed VP8L header word into (width, height, alpha).

    Width and height are stored minus one in consecutive 14-bit fields,
    followed by the alpha hint bit.
    """
    width = (bits & VP8L_FIELD_MASK) + 1
    height = ((bits >> VP8L_FIELD_BITS) & VP8L_FIELD_MASK) + 1
    alpha = bool((bits >> VP8L_ALPHA_BIT) & 1)
    return width, height, alpha


def vp8_frame_size(data: bytes) -> tuple[int, int] | None:
    """Return (width, height) of a lossy keyframe, or None."""
    if not matches_at(data, VP8_START_CODE_OFFSET, VP8_START_CODE):
        return None
    width = read_u16(data, VP8_START_CODE_OFFSET + 3, "little")
    height = read_u16(data, VP8_START_CODE_OFFSET + 5, "little")
    if width is None or height is None:
        return None
    # Top two bits carry the scaling mode.
    return mask14(width), mask14(height)


def vp8l_header(data: bytes) -> tuple[int, int, bool] | None:
    """Return (width, height, alpha) of a lossless bitstream, or None."""
    if read_u8(data, CHUNK_PAYLOAD_OFFSET) != VP8L_SIGNATURE:
        return None
    bits = read_u32(data, VP8L_BITS_OFFSET, "little")
    if bits is None:
        return None
    return unpack_vp8l_bits(bits)


def vp8x_canvas(data: bytes) -> tuple[int, int, bool] | None:
    """Return (width, height, alpha) from an extended-format header, or None."""
    flags = read_u8(data, CHUNK_PAYLOAD_OFFSET)
    width = read_u24_le(data, VP8X_WIDTH_OFFSET)
    height = read_u24_le(data, VP8X_HEIGHT_OFFSET)
    if flags is None or width is None or height is None:
        return None
    return width + 1, height + 1, bool(flags & VP8X_ALPHA_FLAG)
