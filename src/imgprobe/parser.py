"""Body parser that turns raw image bytes into a display-ready result.

Detection relies on magic bytes only; the declared content type is consulted
solely by :meth:`ImageParser.can_parse` when a registry is choosing a parser.
"""

from __future__ import annotations

from typing import ClassVar

from .constants import IMAGE_PARSER_PRIORITY, SUPPORTED_CONTENT_TYPES, ContentType, ImageFormat
from .detector import detect
from .errors import ERROR_MSG_EMPTY_BODY, ERROR_MSG_UNDETECTED, ERROR_MSG_UNREADABLE_HEADER
from .extractor import extract, unknown_for
from .formatter import build_display_text, build_metadata_map, size_details
from .logging_utils import StructuredLogEvent, get_logger, log_event
from .models import ImageMetadata, ParseResult

logger = get_logger(__name__)

EMPTY_BODY_TEXT = "[Empty image data]"
IMAGE_PREFIX = "image/"


def normalize_mime(content_type: str) -> str:
    """Lowercase ``content_type`` and drop any ``;`` parameters."""
    return content_type.lower().split(";", 1)[0].strip()


class ImageParser:
    """Parse image bodies from their headers without decoding pixels."""

    supported_content_types: ClassVar[tuple[str, ...]] = SUPPORTED_CONTENT_TYPES
    priority: ClassVar[int] = IMAGE_PARSER_PRIORITY

    @staticmethod
    def is_image_mime_type(content_type: str | None) -> bool:
        if content_type is None:
            return False
        return normalize_mime(content_type).startswith(IMAGE_PREFIX)

    def can_parse(self, content_type: str | None, body: bytes) -> bool:
        """Return True if the declared type or the body's signature looks like an image."""
        if content_type is not None:
            normalized = normalize_mime(content_type)
            if normalized.startswith(self.supported_content_types) or normalized.startswith(IMAGE_PREFIX):
                return True
        return detect(body) is not None

    @staticmethod
    def detect_format(body: bytes) -> ImageFormat | None:
        return detect(body)

    @staticmethod
    def detect_content_type(body: bytes) -> ContentType:
        fmt = detect(body)
        return ContentType.IMAGE_OTHER if fmt is None else fmt.content_type

    @staticmethod
    def _safe_extract(body: bytes, fmt: ImageFormat) -> ImageMetadata:
        try:
            return extract(body, fmt)
        except Exception as err:  # noqa: BLE001 - extract already guards; keep the contract if it regresses
            log_event(
                logger,
                StructuredLogEvent(
                    name="parse.extract_raised",
                    message="extract raised; reporting unknown metadata",
                    context={"format": fmt, "size": len(body), "error": repr(err)},
                ),
            )
            return unknown_for(fmt, len(body))

    def parse_metadata(self, body: bytes) -> ImageMetadata:
        """Return the full metadata record, or the unknown sentinel."""
        if not body:
            return ImageMetadata.unknown(0)
        fmt = detect(body)
        if fmt is None:
            return ImageMetadata.unknown(len(body))
        return self._safe_extract(body, fmt)

    def parse(self, body: bytes) -> ParseResult:
        """Classify ``body`` and summarise its header; never raises."""
        if not body:
            return ParseResult(
                formatted=EMPTY_BODY_TEXT,
                content_type=ContentType.BINARY,
                is_valid=False,
                error_message=ERROR_MSG_EMPTY_BODY,
            )

        fmt = detect(body)
        if fmt is None:
            log_event(
                logger,
                StructuredLogEvent(
                    name="parse.undetected",
                    message="no image signature matched",
                    context={"size": len(body)},
                ),
            )
            return ParseResult(
                formatted=f"[Unknown image format - {len(body)} bytes]",
                content_type=ContentType.IMAGE_OTHER,
                metadata=size_details(len(body)),
                is_valid=False,
                error_message=ERROR_MSG_UNDETECTED,
            )

        meta = self._safe_extract(body, fmt)
        valid = meta.is_valid
        log_event(
            logger,
            StructuredLogEvent(
                name="parse.parsed",
                message="parsed image header",
                context={"format": fmt, "dimensions": meta.dimensions, "size": meta.file_size},
            ),
        )
        return ParseResult(
            formatted=build_display_text(meta),
            content_type=fmt.content_type,
            metadata=build_metadata_map(meta),
            is_valid=valid,
            error_message=None if valid else ERROR_MSG_UNREADABLE_HEADER.format(fmt=fmt.display_name),
        )


_DEFAULT_PARSER = ImageParser()


def parse(body: bytes) -> ParseResult:
    return _DEFAULT_PARSER.parse(body)


def parse_metadata(body: bytes) -> ImageMetadata:
    return _DEFAULT_PARSER.parse_metadata(body)


def detect_format(body: bytes) -> ImageFormat | None:
    return _DEFAULT_PARSER.detect_format(body)


def detect_content_type(body: bytes) -> ContentType:
    return _DEFAULT_PARSER.detect_content_type(body)


__all__ = [
    "ImageParser",
    "detect_content_type",
    "detect_format",
    "normalize_mime",
    "parse",
    "parse_metadata",
]
