"""Custom exception classes and error messages."""

from __future__ import annotations

ERROR_MSG_EMPTY_BODY = "Empty body"
ERROR_MSG_UNDETECTED = "Could not detect image format from magic bytes"
ERROR_MSG_UNREADABLE_HEADER = "Could not read {fmt} header"


class ConfigLoadError(Exception):
    """Raised when a configuration file cannot be loaded."""


class BodyReadError(Exception):
    """Raised when an input body cannot be read from disk."""


__all__ = [
    "ERROR_MSG_EMPTY_BODY",
    "ERROR_MSG_UNDETECTED",
    "ERROR_MSG_UNREADABLE_HEADER",
    "BodyReadError",
    "ConfigLoadError",
]
