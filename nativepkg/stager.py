"""Materialization of the generated autoconf/automake files."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Sequence
import os
import shutil
import tempfile

from .archive import ArchiveConsole
from .context import StagingContext
from .errors import TemplateLoadError, TemplateWriteError
from .interpolation import interpolate_stream
from .resources import TemplateProvider
from .variables import VariableResolver


@dataclass(frozen=True, slots=True)
class TemplateSpec:
    """One generated file: where it goes, where it comes from, whether it is filtered."""

    logical_name: str
    resource_id: str
    filterable: bool = False


AUTOMAKE_TEMPLATES: tuple[TemplateSpec, ...] = (
    TemplateSpec("configure.ac", "configure.ac", filterable=True),
    TemplateSpec("Makefile.am", "Makefile.am", filterable=True),
    TemplateSpec("autogen.sh", "autogen.sh"),
    TemplateSpec("m4/jni.m4", "m4/jni.m4"),
    TemplateSpec("m4/osx-universal.m4", "m4/osx-universal.m4"),
)


def is_staged(target: Path) -> bool:
    """Whether *target* is an existing readable file that must be left alone."""
    return target.is_file() and os.access(target, os.R_OK)


class TemplateStager:
    """Writes each template into the staging root unless a file is already there.

    Files copied in from the resource tree therefore override the generated
    ones. Filterable templates go through ``@NAME@`` interpolation using the
    variables computed from the staged sources; the others are copied byte for
    byte.
    """

    def __init__(
        self,
        *,
        provider: TemplateProvider,
        resolver: VariableResolver,
        console: ArchiveConsole,
        templates: Sequence[TemplateSpec] = AUTOMAKE_TEMPLATES,
    ) -> None:
        self._provider = provider
        self._resolver = resolver
        self._console = console
        self._templates = tuple(templates)

    @property
    def templates(self) -> tuple[TemplateSpec, ...]:
        return self._templates

    def stage(self, context: StagingContext) -> List[Path]:
        """Stage every template and return the paths that were written."""

        variables = self._resolver.resolve(context.source_staging_dir)
        written: List[Path] = []
        for spec in self._templates:
            target = context.staging_root / spec.logical_name
            if is_staged(target):
                self._console.debug(f"Keeping existing {spec.logical_name}")
                continue
            self._copy_template(spec, target, context, variables)
            self._console.debug(f"Generated {spec.logical_name}")
            written.append(target)
        return written

    def _copy_template(
        self,
        spec: TemplateSpec,
        target: Path,
        context: StagingContext,
        variables: Mapping[str, str],
    ) -> None:
        try:
            data = self._provider.load(spec.resource_id)
        except OSError as exc:
            raise TemplateLoadError(spec.logical_name, str(exc)) from exc

        temp_path: Path | None = None
        try:
            context.work_dir.mkdir(parents=True, exist_ok=True)
            handle = tempfile.NamedTemporaryFile(
                dir=context.work_dir, prefix="tmp", suffix=".txt", delete=False)
            temp_path = Path(handle.name)
            with handle:
                handle.write(data)

            target.parent.mkdir(parents=True, exist_ok=True)
            if spec.filterable:
                with temp_path.open("r", encoding=context.encoding, newline="") as src, \
                        target.open("w", encoding=context.encoding, newline="") as dst:
                    interpolate_stream(src, dst, variables)
            else:
                shutil.copyfile(temp_path, target)
        except (OSError, UnicodeError) as exc:
            raise TemplateWriteError(spec.logical_name, target, str(exc)) from exc
        finally:
            if temp_path is not None:
                temp_path.unlink(missing_ok=True)


__all__ = ["AUTOMAKE_TEMPLATES", "TemplateSpec", "TemplateStager", "is_staged"]
