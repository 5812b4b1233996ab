"""Renderers for inspection results.

Collection (parsing bodies) and presentation stay separate: everything here
takes finished :class:`ParseResult` values and returns strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.table import Table

from .constants import TableStyle

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from .models import ParseResult


@dataclass(frozen=True, slots=True)
class InspectedBody:
    """A parse result paired with where the body came from."""

    path: Path
    result: ParseResult
    truncated: bool = False

    def to_dict(self) -> dict[str, Any]:
        payload = {"path": self.path.as_posix(), **self.result.to_dict()}
        if self.truncated:
            payload["truncated"] = True
        return payload


def _cell(result: ParseResult, key: str) -> str:
    return result.metadata.get(key, "")


def render_details(items: Sequence[InspectedBody]) -> str:
    """Return each body's display text under a path heading."""
    out: list[str] = []
    for item in items:
        out.append(f"== {item.path}")
        out.append(item.result.formatted.rstrip("\n"))
        if item.result.error_message:
            out.append(f"Error: {item.result.error_message}")
        if item.truncated:
            out.append("Note: body truncated to the configured max_body_bytes")
        out.append("")
    return "\n".join(out)


def render_compact(items: Sequence[InspectedBody]) -> str:
    """One tab-separated line per body: path, format, dimensions, size, validity."""
    lines = [
        "\t".join((
            str(item.path),
            _cell(item.result, "format") or item.result.content_type.value,
            _cell(item.result, "dimensions") or "-",
            _cell(item.result, "sizeFormatted"),
            "ok" if item.result.is_valid else "invalid",
        ))
        for item in items
    ]
    return "\n".join(lines) + ("\n" if lines else "")


def render_table(items: Sequence[InspectedBody], *, width: int | None = None) -> str:
    """Render a rich summary table and return it as plain text."""
    console = Console(width=width, force_terminal=False, color_system=None)
    table = Table(title="Image Summary", show_lines=False)
    table.add_column("Path", style="cyan", no_wrap=True)
    table.add_column("Format")
    table.add_column("Dimensions", justify="right")
    table.add_column("Size", justify="right")
    table.add_column("Color Space")
    table.add_column("Alpha")
    table.add_column("Valid")
    for item in items:
        r = item.result
        table.add_row(
            str(item.path),
            _cell(r, "format") or r.content_type.value,
            _cell(r, "dimensions") if r.is_valid else "-",
            _cell(r, "sizeFormatted"),
            _cell(r, "colorSpace") or "-",
            "yes" if _cell(r, "hasAlpha") == "true" else "no",
            "yes" if r.is_valid else "no",
        )
    with console.capture() as capture:
        console.print(table)
    return capture.get()


def summary_style_for(style: TableStyle, console: Console | None = None) -> TableStyle:
    """Pick the table for terminals and tab-separated lines for pipes when ``style`` is auto."""
    if style is not TableStyle.AUTO:
        return style
    console = console or Console()
    return TableStyle.FULL if console.is_terminal else TableStyle.COMPACT


def render_summary(items: Sequence[InspectedBody], style: TableStyle, *, console: Console | None = None) -> str:
    """Render the summary in ``style``; ``console`` decides what auto means."""
    style = summary_style_for(style, console)
    if style is TableStyle.NONE or not items:
        return ""
    if style is TableStyle.COMPACT:
        return render_compact(items)
    return render_table(items, width=console.width if console is not None else None)
