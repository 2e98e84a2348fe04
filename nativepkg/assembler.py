"""Copying of the input trees into the staging root."""
from __future__ import annotations

from pathlib import Path
import shutil

from .archive import ArchiveConsole
from .context import StagingContext
from .errors import TreeCopyError


def copy_tree(source: Path | None, destination: Path, *, console: ArchiveConsole) -> bool:
    """Copy *source* recursively into *destination*.

    Existing files in *destination* are overwritten when paths collide. A
    ``None``, missing or non-directory *source* is skipped and ``False`` is
    returned.
    """

    if source is None:
        return False
    if not source.is_dir():
        console.debug(f"Skipping missing directory {source}")
        return False

    console.debug(f"Copying {source} to {destination}")
    try:
        shutil.copytree(source, destination, dirs_exist_ok=True)
    except OSError as exc:
        raise TreeCopyError(source, destination, str(exc)) from exc
    return True


class TreeAssembler:
    """Populates the staging root from the native-source and resource trees."""

    def __init__(self, console: ArchiveConsole) -> None:
        self._console = console

    def assemble(self, context: StagingContext) -> None:
        # Resources are copied last so they win on path collisions.
        copy_tree(context.native_src_dir, context.source_staging_dir, console=self._console)
        copy_tree(context.resource_dir, context.staging_root, console=self._console)


__all__ = ["TreeAssembler", "copy_tree"]
