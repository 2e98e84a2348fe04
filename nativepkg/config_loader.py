"""Locating and reading ``native-package.*`` configuration files."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, Mapping

import json
import tomllib

import yaml


ConfigLoader = Callable[[Path], Any]

CONFIG_STEM = "native-package"
PACKAGE_TABLE = "package"


def _load_toml(path: Path) -> Any:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _load_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def _load_yaml(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as handle:
        # An empty document reads as an empty configuration.
        return yaml.safe_load(handle) or {}


FILE_LOADERS: Dict[str, ConfigLoader] = {
    ".toml": _load_toml,
    ".json": _load_json,
    ".yaml": _load_yaml,
    ".yml": _load_yaml,
}
"""Configuration readers keyed by file suffix, in lookup order."""


def load_config_file(path: Path) -> Mapping[str, Any]:
    """Read ``path`` and check that it holds a table with an optional ``[package]`` table.

    Raises ``ValueError`` for an unknown suffix and ``TypeError`` when the
    document or its ``package`` entry is not a table.
    """

    loader = FILE_LOADERS.get(path.suffix.lower())
    if loader is None:
        raise ValueError(
            f"Unsupported configuration file '{path.name}'; use one of {', '.join(FILE_LOADERS)}")

    data = loader(path)
    if not isinstance(data, Mapping):
        raise TypeError(f"Configuration file '{path}' must contain a table at the root")
    package = data.get(PACKAGE_TABLE)
    if package is not None and not isinstance(package, Mapping):
        raise TypeError(f"Entry '{PACKAGE_TABLE}' in '{path}' must be a table")
    return data


def find_config_file(directory: Path) -> Path | None:
    """Return the ``native-package.*`` configuration file within ``directory``."""

    found = [directory / f"{CONFIG_STEM}{suffix}" for suffix in FILE_LOADERS]
    found = [candidate for candidate in found if candidate.is_file()]
    if len(found) > 1:
        names = ", ".join(f"'{path.name}'" for path in found)
        raise ValueError(f"Multiple configuration files found in '{directory}': {names}")
    return found[0] if found else None


def merge_mappings(base: Mapping[str, Any], overlay: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``base`` with ``overlay`` applied; nested tables merge key by key."""

    merged: Dict[str, Any] = dict(base)
    for key, value in overlay.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            value = merge_mappings(current, value)
        merged[key] = value
    return merged


__all__ = [
    "CONFIG_STEM",
    "ConfigLoader",
    "FILE_LOADERS",
    "PACKAGE_TABLE",
    "find_config_file",
    "load_config_file",
    "merge_mappings",
]
