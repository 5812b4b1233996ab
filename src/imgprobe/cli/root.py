"""Top-level Click group wiring together all imgprobe commands."""

from __future__ import annotations

import logging
import sys

import click

from imgprobe import __version__

from .common import exit_on_broken_pipe
from .detect import detect
from .init import init
from .inspect import inspect
from .version import version

# Threshold for -vv to map to DEBUG
VERBOSE_DEBUG_THRESHOLD = 2

CLI_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def resolve_log_level(verbose: int, log_level: str | None) -> int:
    """Map ``--log-level`` (which wins) or the ``-v`` count to a logging level."""
    if log_level:
        return getattr(logging, log_level.upper())
    if verbose >= VERBOSE_DEBUG_THRESHOLD:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.WARNING


@click.group(context_settings=CLI_CONTEXT_SETTINGS)
@click.option("-v", "--verbose", count=True, help="Increase verbosity (use -vv for debug)")
@click.option(
    "--log-level",
    type=click.Choice(["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"], case_sensitive=False),
    help="Set log level explicitly",
)
@click.version_option(__version__, "-V", "--version")
def cli(verbose: int, log_level: str | None) -> None:
    """Detect image formats and read header metadata without decoding pixels."""
    logging.basicConfig(
        level=resolve_log_level(verbose, log_level),
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


cli.add_command(inspect)
cli.add_command(detect)
cli.add_command(init)
cli.add_command(version)


def main(argv: list[str] | None = None) -> None:
    """Entry point for the console script and ``python -m imgprobe``."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        cli.main(args=args, prog_name="imgprobe", standalone_mode=True)
    except BrokenPipeError:
        exit_on_broken_pipe()
