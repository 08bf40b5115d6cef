from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ._version import __version__
from .envelope import DEFAULT_PRIORITY_ORDER
from .errors import ConfigError

CONFIG_FILENAME = "changeinfo.toml"


@dataclass(frozen=True)
class ChangeInfoConfig:
    priority_order: tuple[str, ...] = DEFAULT_PRIORITY_ORDER
    version: str = __version__
    source: Path | None = None


def _table(data: dict[str, Any], path: Path) -> dict[str, Any] | None:
    if path.name == "pyproject.toml":
        table = data.get("tool", {}).get("changeinfo")
    else:
        table = data.get("changeinfo", data)
    return table if isinstance(table, dict) else None


def parse_config(data: dict[str, Any], source: Path | None = None) -> ChangeInfoConfig:
    """
    Build a config from an already-parsed ``[changeinfo]`` table.

    Unknown keys are ignored; known keys with the wrong shape are errors.
    """
    priority_order = DEFAULT_PRIORITY_ORDER
    raw_order = data.get("priority_order")
    if raw_order is not None:
        if not isinstance(raw_order, list) or not all(isinstance(c, str) for c in raw_order):
            raise ConfigError("priority_order must be a list of category names")
        order = tuple(c.strip().lower() for c in raw_order)
        if not order or any(not c for c in order):
            raise ConfigError("priority_order must not be empty or contain empty names")
        duplicates = sorted({c for c in order if order.count(c) > 1})
        if duplicates:
            raise ConfigError(f"priority_order lists categories more than once: {', '.join(duplicates)}")
        priority_order = order

    version = __version__
    raw_version = data.get("version")
    if raw_version is not None:
        if not isinstance(raw_version, str) or not raw_version.strip() or "\n" in raw_version:
            raise ConfigError("version must be a non-empty single-line string")
        version = raw_version.strip()

    return ChangeInfoConfig(priority_order=priority_order, version=version, source=source)


def load_config(path: Path | None) -> ChangeInfoConfig:
    """
    Load configuration from `changeinfo.toml` or a pyproject's `[tool.changeinfo]`.

    A missing file or table yields the defaults.
    """
    if path is None or not path.exists():
        return ChangeInfoConfig()

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{path}: invalid TOML: {e}") from e

    table = _table(data, path)
    if table is None:
        return ChangeInfoConfig()
    try:
        return parse_config(table, source=path)
    except ConfigError as e:
        raise ConfigError(f"{path}: {e}") from e


def find_config(start: Path) -> Path | None:
    """Find the nearest config file by walking up from `start`."""
    cur = start.resolve()
    for p in (cur, *cur.parents):
        candidate = p / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        pyproject = p / "pyproject.toml"
        if pyproject.is_file() and _has_tool_table(pyproject):
            return pyproject
    return None


def _has_tool_table(pyproject: Path) -> bool:
    try:
        data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError):
        return False
    return _table(data, pyproject) is not None
