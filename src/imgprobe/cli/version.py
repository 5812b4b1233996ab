"""CLI command reporting the installed imgprobe version."""

from __future__ import annotations

import click

from imgprobe import VERSION_SOURCE, __version__


@click.command()
@click.option("--verbose", "-v", "show_source", is_flag=True, help="Also show where the version was resolved from")
def version(*, show_source: bool) -> None:
    """Print version and exit."""
    print(f"{__version__} ({VERSION_SOURCE})" if show_source else __version__)
