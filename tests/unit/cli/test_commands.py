from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest
from click.testing import CliRunner

from imgprobe import VERSION_SOURCE, __version__
from imgprobe.cli import root as cli_root
from imgprobe.cli.root import main as module_main
from imgprobe.cli.root import resolve_log_level
from imgprobe.config import TOML_CONFIG, load_default_config_text
from imgprobe.constants import EXIT_PATH
from tests.support import svg_bytes, webp_vp8x_bytes

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = pytest.mark.small


def test_detect_prints_format_per_path(in_tmp: Path) -> None:
    (in_tmp / "pic.webp").write_bytes(webp_vp8x_bytes(4, 4))
    (in_tmp / "logo.svg").write_bytes(svg_bytes('width="1" height="1"'))
    (in_tmp / "notes.txt").write_bytes(b"just text")

    result = CliRunner().invoke(cli_root.cli, ["detect", "pic.webp", "logo.svg", "notes.txt"])

    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == [
        "pic.webp\tWebP\timage_webp",
        "logo.svg\tSVG\timage_svg",
        "notes.txt\tunknown\timage_other",
    ]


def test_detect_missing_path(in_tmp: Path) -> None:
    result = CliRunner().invoke(cli_root.cli, ["detect", "gone.png"])
    assert result.exit_code == EXIT_PATH


def test_init_writes_default_config(in_tmp: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(cli_root.cli, ["init", "--path", str(in_tmp)])
    assert result.exit_code == 0, result.output
    assert (in_tmp / TOML_CONFIG).read_text(encoding="utf-8") == load_default_config_text()

    again = runner.invoke(cli_root.cli, ["init", "--path", str(in_tmp)])
    assert again.exit_code == 1
    assert "already exists" in again.output

    forced = runner.invoke(cli_root.cli, ["init", "--path", str(in_tmp), "--force"])
    assert forced.exit_code == 0


def test_version_command() -> None:
    runner = CliRunner()
    assert runner.invoke(cli_root.cli, ["version"]).output == f"{__version__}\n"
    assert runner.invoke(cli_root.cli, ["version", "--verbose"]).output == f"{__version__} ({VERSION_SOURCE})\n"


@pytest.mark.parametrize("flag", ["--version", "-V"])
def test_version_flag(flag: str) -> None:
    result = CliRunner().invoke(cli_root.cli, [flag])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_help_lists_commands() -> None:
    result = CliRunner().invoke(cli_root.cli, ["--help"])
    assert result.exit_code == 0
    for name in ("inspect", "detect", "init", "version"):
        assert name in result.output


@pytest.mark.parametrize(
    ("verbose", "log_level", "expected"),
    [
        (0, None, logging.WARNING),
        (1, None, logging.INFO),
        (2, None, logging.DEBUG),
        (5, None, logging.DEBUG),
        (2, "error", logging.ERROR),
    ],
)
def test_resolve_log_level(verbose: int, log_level: str | None, expected: int) -> None:
    assert resolve_log_level(verbose, log_level) == expected


class _DummyCLI:
    def __init__(self) -> None:
        self.called_with: list[str] | None = None

    def main(self, *, args: list[str], prog_name: str, standalone_mode: bool) -> None:
        self.called_with = list(args)


def test_main_passes_arguments_through(monkeypatch: pytest.MonkeyPatch) -> None:
    dummy = _DummyCLI()
    monkeypatch.setattr(cli_root, "cli", dummy, raising=True)
    module_main(["detect", "x.png"])
    assert dummy.called_with == ["detect", "x.png"]


def test_main_handles_broken_pipe(monkeypatch: pytest.MonkeyPatch) -> None:
    class BrokenCLI:
        def main(self, *, args: list[str], prog_name: str, standalone_mode: bool) -> None:
            raise BrokenPipeError

    def fake_exit() -> None:
        raise SystemExit(0)

    monkeypatch.setattr(cli_root, "cli", BrokenCLI(), raising=True)
    monkeypatch.setattr(cli_root, "exit_on_broken_pipe", fake_exit, raising=True)
    with pytest.raises(SystemExit) as excinfo:
        module_main(["inspect", "x.png"])
    assert excinfo.value.code == 0
