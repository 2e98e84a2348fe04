"""Package configuration loading and validation."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping
import codecs
import os

import yaml

from .archive import FORMAT_EXTENSIONS, normalize_format
from .config_loader import find_config_file, load_config_file, merge_mappings
from .errors import ConfigurationError
from .placeholders import PlaceholderError, PlaceholderResolver


DEFAULT_ENCODING = "UTF-8"
DEFAULT_CLASSIFIER = "native-src"
DEFAULT_FORMAT = "zip"

_DEFAULTS: Dict[str, Any] = {
    "build_dir": "{{project.base_dir}}/target",
    "package_dir": "{{project.build_dir}}/native-package",
    "native_src": "{{project.build_dir}}/generated-sources/hawtjni/native",
    "resources": "{{project.base_dir}}/src/main/native-package",
    "encoding": DEFAULT_ENCODING,
    "classifier": DEFAULT_CLASSIFIER,
    "format": DEFAULT_FORMAT,
}


@dataclass(slots=True, frozen=True)
class PackageConfig:
    artifact_id: str
    version: str
    name: str
    base_dir: Path
    build_dir: Path
    package_dir: Path
    native_src: Path | None = None
    resources: Path | None = None
    encoding: str = DEFAULT_ENCODING
    classifier: str = DEFAULT_CLASSIFIER
    archive_format: str = DEFAULT_FORMAT

    @property
    def package_name(self) -> str:
        """Root entry name of the archive, ``<artifact>-<version>-<classifier>``."""
        return f"{self.artifact_id}-{self.version}-{self.classifier}"

    @property
    def archive_path(self) -> Path:
        return self.build_dir / f"{self.package_name}{FORMAT_EXTENSIONS[self.archive_format]}"


def _require_string(table: Mapping[str, Any], key: str) -> str:
    value = table.get(key)
    if value is None:
        raise ConfigurationError(f"Package configuration is missing '{key}'")
    if not isinstance(value, (str, int, float)) or isinstance(value, bool):
        raise ConfigurationError(f"Package setting '{key}' must be a string")
    text = str(value).strip()
    if not text:
        raise ConfigurationError(f"Package setting '{key}' must not be empty")
    return text


def _resolve_path(base_dir: Path, value: str) -> Path:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = base_dir / path
    return path


def build_config(data: Mapping[str, Any], *, base_dir: Path) -> PackageConfig:
    """Create a :class:`PackageConfig` from a raw configuration mapping.

    The mapping must contain a ``package`` table. Missing settings fall back to
    the defaults in ``_DEFAULTS``; path settings may use ``{{project.*}}`` and
    ``{{env.*}}`` placeholders and are resolved relative to ``base_dir``.
    """

    raw_table = data.get("package")
    if not isinstance(raw_table, Mapping):
        raise ConfigurationError("Package configuration must contain a 'package' table")

    table = merge_mappings(_DEFAULTS, raw_table)
    artifact_id = _require_string(table, "artifact_id")
    version = _require_string(table, "version")
    name = str(table.get("name") or artifact_id)

    base_text = str(table.get("base_dir") or base_dir)
    effective_base = _resolve_path(base_dir, base_text)
    table["base_dir"] = str(effective_base)
    table["name"] = name

    resolver = PlaceholderResolver({"project": table, "env": dict(os.environ)})

    def path_setting(key: str) -> Path:
        try:
            resolved = resolver.resolve(_require_string(table, key))
        except PlaceholderError as exc:
            raise ConfigurationError(f"Invalid package setting '{key}': {exc}") from exc
        return _resolve_path(effective_base, resolved)

    def optional_path_setting(key: str) -> Path | None:
        raw = table.get(key)
        if raw is None or str(raw).strip() == "":
            return None
        return path_setting(key)

    encoding = _require_string(table, "encoding")
    try:
        codecs.lookup(encoding)
    except LookupError as exc:
        raise ConfigurationError(f"Unknown text encoding '{encoding}'") from exc

    try:
        archive_format = normalize_format(_require_string(table, "format"))
    except ValueError as exc:
        raise ConfigurationError(str(exc)) from exc

    return PackageConfig(
        artifact_id=artifact_id,
        version=version,
        name=name,
        base_dir=effective_base,
        build_dir=path_setting("build_dir"),
        package_dir=path_setting("package_dir"),
        native_src=optional_path_setting("native_src"),
        resources=optional_path_setting("resources"),
        encoding=encoding,
        classifier=_require_string(table, "classifier"),
        archive_format=archive_format,
    )


def load_package_config(
    config_path: Path | None = None,
    *,
    overrides: Mapping[str, Any] | None = None,
    workspace: Path | None = None,
) -> PackageConfig:
    """Load the package configuration file and apply ``overrides``.

    When ``config_path`` is omitted, ``native-package.{toml,json,yaml,yml}`` is
    looked up in ``workspace`` (default: the current directory). A missing file
    is allowed as long as ``overrides`` supply the required settings.
    """

    root = (workspace or Path.cwd()).resolve()
    if config_path is None:
        try:
            config_path = find_config_file(root)
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc
    elif not config_path.is_file():
        raise ConfigurationError(f"Configuration file '{config_path}' does not exist")

    data: Mapping[str, Any] = {}
    base_dir = root
    if config_path is not None:
        try:
            data = load_config_file(config_path)
        except (OSError, ValueError, TypeError, yaml.YAMLError) as exc:
            raise ConfigurationError(f"Could not load configuration '{config_path}': {exc}") from exc
        base_dir = config_path.resolve().parent

    package_overrides = {key: value for key, value in (overrides or {}).items() if value is not None}
    merged = merge_mappings(data, {"package": package_overrides})
    return build_config(merged, base_dir=base_dir)


__all__ = [
    "DEFAULT_CLASSIFIER",
    "DEFAULT_ENCODING",
    "DEFAULT_FORMAT",
    "PackageConfig",
    "build_config",
    "load_package_config",
]
