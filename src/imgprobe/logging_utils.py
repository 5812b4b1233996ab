"""Structured logging helpers with log-safe context payloads."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

type LogValue = str | int | float | bool | list[LogValue] | dict[str, LogValue] | None

# Bodies may be captured traffic; never put their bytes in a log record.
_BODY_KEYS = ("body", "payload", "data")


def _serialise_value(value: object) -> LogValue:
    """Convert ``value`` into a JSON/log-friendly representation."""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return f"<{len(value)} bytes>"
    if isinstance(value, Enum):
        return getattr(value, "display_name", None) or str(value.value)
    if isinstance(value, Path):
        return value.as_posix()
    if isinstance(value, (set, frozenset)):
        return sorted(str(_serialise_value(v)) for v in value)
    if isinstance(value, Sequence) and not isinstance(value, str):
        return [_serialise_value(v) for v in value]
    if isinstance(value, Mapping):
        return {str(k): _serialise_value(v) for k, v in value.items()}
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


def _redact_body(key: str, value: object) -> LogValue:
    """Summarise ``value`` by size when ``key`` names a captured body."""
    if key.lower() in _BODY_KEYS and isinstance(value, (str, bytes, bytearray)):
        return f"<{len(value)} redacted>"
    return _serialise_value(value)


@dataclass(frozen=True, slots=True)
class StructuredLogEvent:
    """Represents a structured log event for downstream handlers."""

    name: str
    message: str
    context: dict[str, object] = field(default_factory=dict)
    level: int = logging.DEBUG

    def sanitised_context(self) -> dict[str, LogValue]:
        """Return a copy of the context that is safe to log."""
        return {str(k): _redact_body(str(k), v) for k, v in self.context.items()}


def get_logger(name: str) -> logging.Logger:
    """Return the configured logger for ``name``."""
    return logging.getLogger(name)


def log_event(logger: logging.Logger, event: StructuredLogEvent) -> None:
    """Emit ``event`` to ``logger`` with structured metadata."""
    if not logger.isEnabledFor(event.level):
        return
    logger.log(event.level, event.message, extra={"event": event.name, "context": event.sanitised_context()})


__all__ = ["LogValue", "StructuredLogEvent", "get_logger", "log_event"]
