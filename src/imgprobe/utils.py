"""Generic utility helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .errors import BodyReadError

if TYPE_CHECKING:
    from pathlib import Path


def read_body(path: Path, limit: int) -> bytes:
    """Read at most ``limit`` bytes from ``path``.

    Large non-image files would otherwise be decoded in full by the SVG
    sniffing path, so callers always pass a cap.
    """
    try:
        with path.open("rb") as f:
            return f.read(limit)
    except OSError as err:
        msg = f"Cannot read {path}: {err.strerror or err}"
        raise BodyReadError(msg) from err


def is_truncated(path: Path, limit: int) -> bool:
    """Return True if ``path`` is larger than ``limit`` bytes."""
    try:
        return path.stat().st_size > limit
    except OSError:
        return False
