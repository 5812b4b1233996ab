"""Priority-ordered selection among body parsers.

The registry is the boundary through which the image parser is offered to
the rest of an inspection tool: parsers advertise their MIME types and a
priority, and the first one (highest priority first) that accepts a body
handles it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from .constants import ContentType
from .models import ParseResult
from .parser import ImageParser

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

TEXT_SAMPLE_SIZE = 1024
MAX_CONTROL_RATIO = 0.1
HEX_PREVIEW_SIZE = 256
_TAB, _CR, _DEL, _SPACE = 9, 13, 127, 32


@runtime_checkable
class BodyParser(Protocol):
    """Strategy for parsing one family of HTTP bodies."""

    @property
    def supported_content_types(self) -> Sequence[str]: ...

    @property
    def priority(self) -> int: ...

    def can_parse(self, content_type: str | None, body: bytes) -> bool: ...

    def parse(self, body: bytes) -> ParseResult: ...


def is_likely_text(body: bytes) -> bool:
    """Return True if under 10% of the leading bytes are control characters."""
    if not body:
        return True
    sample = body[:TEXT_SAMPLE_SIZE]
    control = sum(1 for b in sample if b < _TAB or _CR < b < _SPACE or b == _DEL)
    return control / len(sample) < MAX_CONTROL_RATIO


def hex_preview(body: bytes) -> str:
    head = body[:HEX_PREVIEW_SIZE].hex(" ").upper()
    if len(body) > HEX_PREVIEW_SIZE:
        return f"{head}\n... ({len(body)} bytes total)"
    return head


def fallback_result(body: bytes) -> ParseResult:
    """Describe a body no registered parser accepted."""
    if is_likely_text(body):
        return ParseResult(
            formatted=body.decode("utf-8", errors="replace"),
            content_type=ContentType.PLAIN_TEXT,
        )
    return ParseResult(
        formatted=hex_preview(body),
        content_type=ContentType.BINARY,
        metadata={"size": str(len(body))},
    )


@dataclass(slots=True)
class ParserRegistry:
    """Registry that keeps parsers sorted by descending priority."""

    parsers: list[BodyParser] = field(default_factory=list)

    @classmethod
    def default(cls) -> ParserRegistry:
        registry = cls()
        registry.register(ImageParser())
        return registry

    def register(self, parser: BodyParser) -> None:
        self.parsers.append(parser)
        # stable: equal priorities keep registration order
        self.parsers.sort(key=lambda p: p.priority, reverse=True)

    def extend(self, parsers: Iterable[BodyParser]) -> ParserRegistry:
        for parser in parsers:
            self.register(parser)
        return self

    def find_parser(self, content_type: str | None, body: bytes) -> BodyParser | None:
        return next((p for p in self.parsers if p.can_parse(content_type, body)), None)

    def parse_body(self, content_type: str | None, body: bytes) -> ParseResult:
        if not body:
            return ParseResult(formatted="", content_type=ContentType.UNKNOWN)
        parser = self.find_parser(content_type, body)
        if parser is None:
            return fallback_result(body)
        return parser.parse(body)

    def detect_content_type(self, content_type: str | None, body: bytes) -> ContentType:
        if not body:
            return ContentType.UNKNOWN
        parser = self.find_parser(content_type, body)
        if parser is not None:
            return parser.parse(body).content_type
        return ContentType.PLAIN_TEXT if is_likely_text(body) else ContentType.BINARY


__all__ = ["BodyParser", "ParserRegistry", "fallback_result", "hex_preview", "is_likely_text"]
