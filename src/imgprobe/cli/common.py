"""Shared CLI helpers used by multiple subcommands."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

from imgprobe.config import read_config
from imgprobe.constants import CONFIG_MAX_BODY_BYTES, EXIT_CONFIG, EXIT_PATH
from imgprobe.errors import BodyReadError, ConfigLoadError
from imgprobe.logging_utils import StructuredLogEvent, get_logger, log_event
from imgprobe.renderers import InspectedBody
from imgprobe.utils import is_truncated, read_body

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from imgprobe.models import ParseResult

logger = get_logger(__name__)


def exit_on_broken_pipe() -> None:
    """Silence the interpreter's flush on exit and leave with status 0."""
    try:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
    except (OSError, ValueError, AttributeError):  # pragma: no cover - stdout without a descriptor
        pass
    raise SystemExit(0)


def load_config_or_exit(config_path: Path | None) -> dict[str, Any]:
    try:
        return read_config(base_path=Path(), explicit_config=config_path)
    except ConfigLoadError as err:
        print(err, file=sys.stderr)
        raise SystemExit(EXIT_CONFIG) from err


def inspect_paths(
    paths: Iterable[Path],
    *,
    cfg: dict[str, Any],
    parse_fn: Callable[[bytes], ParseResult],
) -> list[InspectedBody]:
    """Read each path (capped by config) and parse it with ``parse_fn``."""
    limit = cfg[CONFIG_MAX_BODY_BYTES]
    items: list[InspectedBody] = []
    for path in paths:
        try:
            body = read_body(path, limit)
        except BodyReadError as err:
            print(err, file=sys.stderr)
            raise SystemExit(EXIT_PATH) from err
        truncated = is_truncated(path, limit)
        if truncated:
            log_event(
                logger,
                StructuredLogEvent(
                    name="cli.body_truncated",
                    message="input larger than max_body_bytes; parsing the prefix",
                    level=logging.WARNING,
                    context={"path": path, "limit": limit},
                ),
            )
        items.append(InspectedBody(path=path, result=parse_fn(body), truncated=truncated))
    return items
