"""CLI command reporting the detected format of each file."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from imgprobe.constants import EXIT_PATH
from imgprobe.detector import detect as detect_bytes
from imgprobe.errors import BodyReadError
from imgprobe.parser import detect_content_type
from imgprobe.utils import read_body

from .common import exit_on_broken_pipe

# Detection never looks past the SVG sniff window.
DETECT_READ_LIMIT = 4096


@click.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(path_type=Path))
def detect(*, paths: tuple[Path, ...]) -> None:
    """Print path, format and content type for each file (magic bytes only)."""
    try:
        for path in paths:
            try:
                head = read_body(path, DETECT_READ_LIMIT)
            except BodyReadError as err:
                print(err, file=sys.stderr)
                raise SystemExit(EXIT_PATH) from err
            fmt = detect_bytes(head)
            label = fmt.display_name if fmt is not None else "unknown"
            print(f"{path}\t{label}\t{detect_content_type(head).value}")
    except BrokenPipeError:
        exit_on_broken_pipe()
