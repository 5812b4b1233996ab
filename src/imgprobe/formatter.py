"""Output formatting helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .constants import KIB, MIB

if TYPE_CHECKING:
    from .models import ImageMetadata


def format_size(size: int) -> str:
    """Return ``size`` bytes as a short human-readable string."""
    if size < KIB:
        return f"{size} B"
    if size < MIB:
        return f"{size // KIB} KB"
    return f"{size / MIB:.2f} MB"


def build_display_text(meta: ImageMetadata) -> str:
    """Build the multi-line summary shown for an image body."""
    out: list[str] = [f"[{meta.format} Image]"]
    if meta.width > 0 and meta.height > 0:
        out.append(f"Dimensions: {meta.dimensions}")
    out.append(f"Size: {meta.file_size_formatted}")
    if meta.color_space is not None:
        out.append(f"Color Space: {meta.color_space}")
    if meta.has_alpha:
        out.append("Alpha Channel: Yes")
    if meta.bit_depth is not None:
        out.append(f"Bit Depth: {meta.bit_depth}-bit")
    return "\n".join(out) + "\n"


def build_metadata_map(meta: ImageMetadata) -> dict[str, str]:
    """Flatten ``meta`` into string pairs for machine consumers."""
    details = {
        "format": meta.format,
        "width": str(meta.width),
        "height": str(meta.height),
        "dimensions": meta.dimensions,
        "size": str(meta.file_size),
        "sizeFormatted": meta.file_size_formatted,
        "hasAlpha": "true" if meta.has_alpha else "false",
    }
    if meta.color_space is not None:
        details["colorSpace"] = meta.color_space
    if meta.bit_depth is not None:
        details["bitDepth"] = str(meta.bit_depth)
    return details


def size_details(size: int) -> dict[str, str]:
    """Return the metadata reported for bodies with no recognised format."""
    return {"size": str(size), "sizeFormatted": format_size(size)}
