"""Utilities for loading and writing configuration files."""

from __future__ import annotations

import importlib.resources
import os
import tomllib
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import TOMLKitError

from .constants import (
    CONFIG_MAX_BODY_BYTES,
    CONFIG_SHOW_INVALID,
    CONFIG_SUMMARY_STYLE,
    DEFAULT_MAX_BODY_BYTES,
    TableStyle,
)
from .errors import ConfigLoadError

TOML_CONFIG = ".imgprobe.toml"
ENV_CONFIG_PATH = "IMGPROBE_CONFIG_PATH"


def load_default_config_text() -> str:
    """Return the bundled default configuration text, comments included."""
    try:
        cfg_path = importlib.resources.files("imgprobe.resources").joinpath("default_config.toml")
        with cfg_path.open("r", encoding="utf-8") as f:
            return f.read()
    except OSError as err:  # pragma: no cover - packaging error
        msg = f"Error loading default configuration: {err}"
        raise ConfigLoadError(msg) from err


def load_default_config() -> dict[str, Any]:
    """Return the bundled default configuration as a Python dict."""
    return tomllib.loads(load_default_config_text())


def write_default_config(target_dir: Path) -> Path:
    """Write the bundled default configuration into ``target_dir``."""
    toml_path = target_dir / TOML_CONFIG
    toml_path.write_text(load_default_config_text(), encoding="utf-8")
    return toml_path


def load_toml_config(path: Path) -> dict[str, Any]:
    """Load one TOML configuration file."""
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        msg = f"Error reading {path}: {e}"
        raise ConfigLoadError(msg) from e
    try:
        data = tomlkit.loads(raw)
    except TOMLKitError as e:
        msg = f"Error parsing {path.name}: {e}"
        raise ConfigLoadError(msg) from e
    return data.unwrap()


def _xdg_config_path() -> Path:
    xdg_home = os.environ.get("XDG_CONFIG_HOME")
    xdg_dir = Path(xdg_home) if xdg_home else Path.home() / ".config"
    return xdg_dir / "imgprobe" / "config.toml"


def _merge_pyproject_cfg(pyproject_path: Path, cfg: dict[str, Any]) -> dict[str, Any]:
    if not pyproject_path.exists():
        return cfg
    try:
        data = tomlkit.loads(pyproject_path.read_text(encoding="utf-8")).unwrap()
    except TOMLKitError as e:
        msg = f"Error parsing pyproject.toml: {e}"
        raise ConfigLoadError(msg) from e
    tool = data.get("tool", {})
    if isinstance(tool, dict):
        tool_cfg = tool.get("imgprobe")
        if isinstance(tool_cfg, dict):
            cfg |= tool_cfg
    return cfg


def read_config(
    *,
    base_path: Path,
    ignore_default: bool = False,
    explicit_config: Path | None = None,
) -> dict[str, Any]:
    """Read configuration merging multiple sources with clear precedence.

    Precedence (low to high):
      1. bundled defaults (unless ``ignore_default``)
      2. XDG config: $XDG_CONFIG_HOME/imgprobe/config.toml (or ~/.config/imgprobe/config.toml)
      3. .imgprobe.toml in ``base_path``
      4. [tool.imgprobe] table in pyproject.toml at ``base_path``
      5. $IMGPROBE_CONFIG_PATH (if set)
      6. ``explicit_config`` (from --config)
    Later sources override earlier ones.
    """
    cfg: dict[str, Any] = {} if ignore_default else load_default_config()

    for p in (_xdg_config_path(), base_path / TOML_CONFIG):
        if p.exists():
            cfg |= load_toml_config(p)

    cfg = _merge_pyproject_cfg(base_path / "pyproject.toml", cfg)

    env_path = os.environ.get(ENV_CONFIG_PATH)
    if env_path:
        p = Path(env_path)
        if p.exists():
            cfg |= load_toml_config(p)

    if explicit_config:
        if not explicit_config.exists():
            msg = f"Explicit config file not found: {explicit_config}"
            raise ConfigLoadError(msg)
        cfg |= load_toml_config(explicit_config)

    return validate_config(cfg)


def validate_config(cfg: dict[str, Any]) -> dict[str, Any]:
    """Check known keys and fill in defaults; unknown keys pass through."""
    cfg = dict(cfg)
    max_bytes = cfg.get(CONFIG_MAX_BODY_BYTES, DEFAULT_MAX_BODY_BYTES)
    if isinstance(max_bytes, bool) or not isinstance(max_bytes, int) or max_bytes <= 0:
        msg = f"{CONFIG_MAX_BODY_BYTES} must be a positive integer, got {max_bytes!r}"
        raise ConfigLoadError(msg)
    cfg[CONFIG_MAX_BODY_BYTES] = max_bytes

    style = cfg.get(CONFIG_SUMMARY_STYLE, TableStyle.AUTO.value)
    try:
        cfg[CONFIG_SUMMARY_STYLE] = TableStyle(style)
    except ValueError as e:
        choices = ", ".join(s.value for s in TableStyle)
        msg = f"{CONFIG_SUMMARY_STYLE} must be one of {choices}, got {style!r}"
        raise ConfigLoadError(msg) from e

    show_invalid = cfg.get(CONFIG_SHOW_INVALID, True)
    if not isinstance(show_invalid, bool):
        msg = f"{CONFIG_SHOW_INVALID} must be true or false, got {show_invalid!r}"
        raise ConfigLoadError(msg)
    cfg[CONFIG_SHOW_INVALID] = show_invalid
    return cfg


__all__ = [
    "ENV_CONFIG_PATH",
    "TOML_CONFIG",
    "load_default_config",
    "load_default_config_text",
    "load_toml_config",
    "read_config",
    "validate_config",
    "write_default_config",
]
