"""Value records produced by the engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .constants import UNKNOWN_FORMAT_LABEL, ContentType
from .formatter import format_size


@dataclass(frozen=True, slots=True)
class ImageMetadata:
    """Structural facts read from an image header."""

    width: int
    height: int
    format: str
    file_size: int
    color_space: str | None = None
    has_alpha: bool = False
    bit_depth: int | None = None

    @classmethod
    def unknown(cls, file_size: int, fmt: str = UNKNOWN_FORMAT_LABEL) -> ImageMetadata:
        """Return the sentinel for a body whose header could not be read."""
        return cls(width=0, height=0, format=fmt, file_size=file_size)

    @property
    def dimensions(self) -> str:
        return f"{self.width}x{self.height}"

    @property
    def file_size_formatted(self) -> str:
        return format_size(self.file_size)

    @property
    def is_valid(self) -> bool:
        return self.width > 0 and self.height > 0


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Descriptor handed to the rendering layer."""

    formatted: str
    content_type: ContentType
    metadata: dict[str, str] = field(default_factory=dict)
    is_valid: bool = True
    error_message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly mapping of this result."""
        return {
            "formatted": self.formatted,
            "content_type": self.content_type.value,
            "metadata": dict(self.metadata),
            "is_valid": self.is_valid,
            "error_message": self.error_message,
        }
