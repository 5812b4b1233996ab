"""CLI command implementation for ``imgprobe inspect``."""

from __future__ import annotations

import json
from functools import partial
from pathlib import Path

import click

from imgprobe.constants import CONFIG_SHOW_INVALID, CONFIG_SUMMARY_STYLE, SummaryFormat, TableStyle
from imgprobe.parser import parse
from imgprobe.registry import ParserRegistry
from imgprobe.renderers import render_details, render_summary

from .common import exit_on_broken_pipe, inspect_paths, load_config_or_exit


@click.command()
@click.option(
    "--content-type",
    "content_type",
    help="Declared Content-Type; routes bodies through the parser registry",
)
@click.option(
    "--summary",
    type=click.Choice([s.value for s in SummaryFormat], case_sensitive=False),
    default=SummaryFormat.HUMAN.value,
    help="Summary format to display",
)
@click.option(
    "--style",
    type=click.Choice([t.value for t in TableStyle], case_sensitive=False),
    default=None,
    help="Summary table style (auto/full/compact/none); overrides config",
)
@click.option("--config", "config_path", type=click.Path(path_type=Path), help="Explicit config file path")
@click.argument("paths", nargs=-1, required=True, type=click.Path(path_type=Path))
def inspect(
    *,
    content_type: str | None,
    summary: str,
    style: str | None,
    config_path: Path | None,
    paths: tuple[Path, ...],
) -> None:
    """Describe image files from their headers."""
    cfg = load_config_or_exit(config_path)
    if content_type is None:
        parse_fn = parse
    else:
        parse_fn = partial(ParserRegistry.default().parse_body, content_type)

    items = inspect_paths(paths, cfg=cfg, parse_fn=parse_fn)
    fmt = SummaryFormat(summary)

    try:
        if fmt is SummaryFormat.JSON:
            print(json.dumps([item.to_dict() for item in items], sort_keys=True, indent=2))
            return
        if fmt is SummaryFormat.NONE:
            return
        shown = items if cfg[CONFIG_SHOW_INVALID] else [i for i in items if i.result.is_valid]
        print(render_details(shown), end="")
        table = render_summary(shown, TableStyle(style) if style else cfg[CONFIG_SUMMARY_STYLE])
        if table:
            print(table, end="")
    except BrokenPipeError:
        exit_on_broken_pipe()
