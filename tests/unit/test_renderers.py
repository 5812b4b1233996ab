from __future__ import annotations

import io
from pathlib import Path

import pytest
from rich.console import Console

from imgprobe.constants import TableStyle
from imgprobe.parser import parse
from imgprobe.renderers import (
    InspectedBody,
    render_compact,
    render_details,
    render_summary,
    render_table,
    summary_style_for,
)
from tests.support import png_bytes

pytestmark = pytest.mark.small


@pytest.fixture
def items() -> list[InspectedBody]:
    return [
        InspectedBody(path=Path("a.png"), result=parse(png_bytes(800, 600))),
        InspectedBody(path=Path("junk.bin"), result=parse(b"hello world"), truncated=True),
    ]


def test_to_dict(items: list[InspectedBody]) -> None:
    first, second = (item.to_dict() for item in items)
    assert first["path"] == "a.png"
    assert first["content_type"] == "image_png"
    assert "truncated" not in first
    assert second["truncated"] is True
    assert second["error_message"] == "Could not detect image format from magic bytes"


def test_render_details(items: list[InspectedBody]) -> None:
    out = render_details(items)
    assert out.startswith("== a.png\n[PNG Image]\nDimensions: 800x600\n")
    assert "== junk.bin\n[Unknown image format - 11 bytes]\n" in out
    assert "Error: Could not detect image format from magic bytes" in out
    assert "Note: body truncated" in out


def test_render_compact(items: list[InspectedBody]) -> None:
    assert render_compact(items) == "a.png\tPNG\t800x600\t33 B\tok\njunk.bin\timage_other\t-\t11 B\tinvalid\n"
    assert render_compact([]) == ""


def test_render_table(items: list[InspectedBody]) -> None:
    out = render_table(items, width=200)
    assert "Image Summary" in out
    assert "800x600" in out
    assert "RGBA" in out
    assert "junk.bin" in out
    assert "\x1b[" not in out


def test_render_summary_dispatch(items: list[InspectedBody]) -> None:
    assert render_summary(items, TableStyle.NONE) == ""
    assert render_summary([], TableStyle.FULL) == ""
    assert render_summary(items, TableStyle.COMPACT) == render_compact(items)
    assert "Image Summary" in render_summary(items, TableStyle.FULL)


@pytest.mark.parametrize(("is_terminal", "expected"), [(True, TableStyle.FULL), (False, TableStyle.COMPACT)])
def test_auto_style_follows_console(*, is_terminal: bool, expected: TableStyle) -> None:
    console = Console(file=io.StringIO(), force_terminal=is_terminal, width=200)
    assert summary_style_for(TableStyle.AUTO, console) is expected


def test_explicit_style_ignores_console() -> None:
    console = Console(file=io.StringIO(), force_terminal=True)
    assert summary_style_for(TableStyle.NONE, console) is TableStyle.NONE
    assert summary_style_for(TableStyle.COMPACT, console) is TableStyle.COMPACT


def test_auto_summary_off_terminal_is_compact(items: list[InspectedBody]) -> None:
    console = Console(file=io.StringIO(), force_terminal=False)
    assert render_summary(items, TableStyle.AUTO, console=console) == render_compact(items)


def test_auto_summary_on_terminal_is_table(items: list[InspectedBody]) -> None:
    console = Console(file=io.StringIO(), force_terminal=True, width=200)
    out = render_summary(items, TableStyle.AUTO, console=console)
    assert "Image Summary" in out
    assert "800x600" in out
