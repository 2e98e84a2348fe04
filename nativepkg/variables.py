"""Substitution variables for the generated autoconf/automake files."""
from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Iterator, List, Mapping, Sequence
import fnmatch
import os
import re


SOURCE_PATTERNS: tuple[str, ...] = ("*.c", "*.cpp", "*.cxx")
SOURCE_PREFIX = "src/"
SOURCE_INDENT = "  "
CONTINUATION = "\\\n"

_NON_WORD = re.compile(r"[^A-Za-z0-9_]")


def underscore_name(name: str) -> str:
    """Replace every character outside ``[A-Za-z0-9_]`` with ``_``."""
    return _NON_WORD.sub("_", name)


def _walk_files(root: Path) -> Iterator[str]:
    # Raw directory-walk order: neither directories nor files are sorted.
    for dirpath, _dirnames, filenames in os.walk(root):
        relative_dir = Path(dirpath).relative_to(root)
        for filename in filenames:
            yield (relative_dir / filename).as_posix()


def scan_sources(source_dir: Path, patterns: Sequence[str] = SOURCE_PATTERNS) -> List[str]:
    """Return the relative paths of native sources below *source_dir*.

    Each pattern is a separate pass over the tree, so all ``*.c`` files come
    before any ``*.cpp`` file. Within a pass files keep the order in which
    the directory walk reports them. A missing directory yields no files.
    """

    if not source_dir.is_dir():
        return []

    found: List[str] = []
    for pattern in patterns:
        for relative in _walk_files(source_dir):
            if fnmatch.fnmatchcase(Path(relative).name, pattern):
                found.append(relative)
    return found


def render_sources(files: Sequence[str]) -> str:
    """Render *files* as the body of a multi-line Makefile assignment."""
    return CONTINUATION.join(f"{SOURCE_INDENT}{SOURCE_PREFIX}{relative}" for relative in files)


def build_variables(*, name: str, version: str, sources: Sequence[str]) -> Mapping[str, str]:
    """Build the read-only variable map used to filter templates."""

    values = {
        "PROJECT_NAME": name,
        "PROJECT_NAME_UNDER_SCORE": underscore_name(name),
        "VERSION": version,
        "PROJECT_SOURCES": render_sources(sources),
    }
    if sources:
        values["FIRST_SOURCE_FILE"] = f"{SOURCE_PREFIX}{sources[0]}"
    return MappingProxyType(values)


class VariableResolver:
    """Computes template variables from project metadata and the staged sources."""

    def __init__(self, *, name: str, version: str) -> None:
        self._name = name
        self._version = version

    def resolve(self, source_dir: Path) -> Mapping[str, str]:
        return build_variables(
            name=self._name,
            version=self._version,
            sources=scan_sources(source_dir),
        )


__all__ = [
    "SOURCE_PATTERNS",
    "VariableResolver",
    "build_variables",
    "render_sources",
    "scan_sources",
    "underscore_name",
]
