"""Archive creation for staged package directories.

The package is a zip by default. The tar family (plain, gzip, xz and
zstandard compressed) is available for hosts that ship source packages as
tarballs. Every format stores the staged tree under one root entry and keeps
empty directories.
"""
from __future__ import annotations

from contextlib import ExitStack
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, Protocol, runtime_checkable
import gzip
import lzma
import os
import tarfile
import zipfile

import zstandard as zstd

_FORMAT_ALIASES: dict[str, str] = {
    "zip": "zip",
    "tar": "tar",
    "gztar": "gztar",
    "tar.gz": "gztar",
    "tgz": "gztar",
    "xztar": "xztar",
    "tar.xz": "xztar",
    "zst": "zst",
    "tar.zst": "zst",
}

FORMAT_EXTENSIONS: dict[str, str] = {
    "zip": ".zip",
    "tar": ".tar",
    "gztar": ".tar.gz",
    "xztar": ".tar.xz",
    "zst": ".tar.zst",
}
"""Canonical file extension for each archive format."""

ZSTD_LEVEL = 19


@runtime_checkable
class ArchiveConsole(Protocol):
    """Minimal console interface required by :class:`ArchiveManager`."""

    def info(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...

    def debug(self, message: str) -> None:
        ...


@dataclass(slots=True)
class ArchiveArtifact:
    """Description of filesystem content to package into an archive.

    ``root_name`` is the single top-level directory entry under which the
    contents of ``source_dir`` are stored. When omitted, the contents are
    stored at the archive root.
    """

    source_dir: Path
    root_name: str | None = None
    label: str | None = None


def normalize_format(value: str) -> str:
    """Return the canonical archive format for ``value``."""

    normalized = value.strip().lower()
    if normalized in _FORMAT_ALIASES:
        return _FORMAT_ALIASES[normalized]
    raise ValueError(f"Unsupported archive format '{value}'")


def iter_entries(source_dir: Path, root_name: str | None = None) -> Iterator[tuple[Path, str]]:
    """Yield ``(path, arcname)`` for every directory and file below *source_dir*.

    Entries come in sorted walk order, parents before children. With a
    *root_name*, the root directory itself is the first entry.
    """

    prefix = Path(root_name) if root_name else Path()
    if root_name:
        yield source_dir, prefix.as_posix()

    for dirpath, dirnames, filenames in os.walk(source_dir):
        dirnames.sort()
        current = Path(dirpath)
        relative = prefix / current.relative_to(source_dir)
        for name in dirnames + sorted(filenames):
            yield current / name, (relative / name).as_posix()


class ArchiveManager:
    """Writes a staged directory into a single archive file."""

    def __init__(self, console: ArchiveConsole) -> None:
        self._console = console

    def create_archive(
        self,
        *,
        artifact: ArchiveArtifact,
        target_path: Path | str,
        archive_format: str = "zip",
    ) -> Path:
        """Archive ``artifact.source_dir`` into *target_path*, replacing any existing file."""

        target = Path(target_path).expanduser()
        source_dir = Path(artifact.source_dir).expanduser()
        if not source_dir.is_dir():
            raise FileNotFoundError(f"Archive source directory '{source_dir}' does not exist")

        archive_format = normalize_format(archive_format)
        target.parent.mkdir(parents=True, exist_ok=True)
        self._console.debug(f"Archiving {artifact.label or source_dir.name} to {target} ({archive_format})")

        entries = iter_entries(source_dir, artifact.root_name)
        if archive_format == "zip":
            self._write_zip(target, entries)
        else:
            self._write_tar(target, entries, archive_format)
        return target

    @staticmethod
    def _write_zip(target: Path, entries: Iterator[tuple[Path, str]]) -> None:
        with zipfile.ZipFile(
            target,
            mode="w",
            compression=zipfile.ZIP_DEFLATED,
            compresslevel=9,
            allowZip64=True,
            strict_timestamps=False,
        ) as archive:
            # Directories are written as "name/" entries, so empty ones survive.
            for path, arcname in entries:
                archive.write(path, arcname)

    @staticmethod
    def _write_tar(target: Path, entries: Iterator[tuple[Path, str]], archive_format: str) -> None:
        with ExitStack() as stack:
            stream: Any = stack.enter_context(target.open("wb"))
            if archive_format == "gztar":
                stream = stack.enter_context(gzip.GzipFile(fileobj=stream, mode="wb", compresslevel=9, mtime=0))
            elif archive_format == "xztar":
                stream = stack.enter_context(lzma.LZMAFile(stream, "wb", preset=9))
            elif archive_format == "zst":
                compressor = zstd.ZstdCompressor(level=ZSTD_LEVEL, write_checksum=True)
                stream = stack.enter_context(compressor.stream_writer(stream, closefd=False))

            tar = stack.enter_context(tarfile.open(fileobj=stream, mode="w|", format=tarfile.PAX_FORMAT))
            for path, arcname in entries:
                tar.add(path, arcname=arcname, recursive=False)


__all__ = [
    "ArchiveArtifact",
    "ArchiveConsole",
    "ArchiveManager",
    "FORMAT_EXTENSIONS",
    "iter_entries",
    "normalize_format",
]
