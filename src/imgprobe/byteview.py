"""Bounds-checked integer reads over raw header bytes.

Every reader returns ``None`` when the requested range does not fit inside the
buffer, so format parsers can treat a short read as "header unreadable"
without indexing past the end.
"""

from __future__ import annotations

from typing import Literal

type ByteOrder = Literal["big", "little"]


def _window(data: bytes, offset: int, size: int) -> bytes | None:
    if offset < 0 or offset + size > len(data):
        return None
    return data[offset : offset + size]


def read_u8(data: bytes, offset: int) -> int | None:
    if 0 <= offset < len(data):
        return data[offset]
    return None


def read_u16(data: bytes, offset: int, order: ByteOrder) -> int | None:
    raw = _window(data, offset, 2)
    return None if raw is None else int.from_bytes(raw, order)


def read_u24_le(data: bytes, offset: int) -> int | None:
    raw = _window(data, offset, 3)
    return None if raw is None else int.from_bytes(raw, "little")


def read_u32(data: bytes, offset: int, order: ByteOrder) -> int | None:
    raw = _window(data, offset, 4)
    return None if raw is None else int.from_bytes(raw, order)


def read_i32_le(data: bytes, offset: int) -> int | None:
    raw = _window(data, offset, 4)
    return None if raw is None else int.from_bytes(raw, "little", signed=True)


def matches_at(data: bytes, offset: int, signature: bytes) -> bool:
    """Return True if ``signature`` occurs at ``offset`` in ``data``."""
    return _window(data, offset, len(signature)) == signature


__all__ = ["ByteOrder", "matches_at", "read_i32_le", "read_u8", "read_u16", "read_u24_le", "read_u32"]
