"""Staging and archiving of the native source package."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Protocol
import shutil
import tarfile

import zstandard as zstd

from .archive import FORMAT_EXTENSIONS, ArchiveArtifact, ArchiveConsole, ArchiveManager
from .assembler import TreeAssembler
from .config import PackageConfig
from .context import StagingContext
from .errors import ArchiveCreationError, StagingResetError
from .resources import TemplateProvider, default_template_provider
from .stager import TemplateStager
from .variables import VariableResolver


@dataclass(frozen=True, slots=True)
class PackageArtifact:
    """The archive produced by a packaging run."""

    archive_path: Path
    classifier: str
    format: str = "zip"


class ArtifactRegistry(Protocol):
    """Receives the finished artifact on behalf of the surrounding build."""

    def attach(self, artifact: PackageArtifact) -> None:
        ...


class RecordingArtifactRegistry:
    """Artifact registry that keeps attached artifacts in memory."""

    def __init__(self) -> None:
        self.artifacts: List[PackageArtifact] = []

    def attach(self, artifact: PackageArtifact) -> None:
        self.artifacts.append(artifact)

    def iter_formatted(self) -> Iterable[str]:
        for artifact in self.artifacts:
            yield f"{artifact.format} {artifact.classifier} {artifact.archive_path}"


def reset_staging(context: StagingContext) -> None:
    """Delete the staging root and recreate it with its ``m4`` and ``src`` directories."""

    root = context.staging_root
    try:
        if root.is_dir() and not root.is_symlink():
            shutil.rmtree(root)
        elif root.exists() or root.is_symlink():
            root.unlink()
        for directory in context.required_dirs():
            directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StagingResetError(root, str(exc)) from exc


class PackageBuilder:
    """Builds the native source package described by a :class:`PackageConfig`.

    Every call to :meth:`build` starts from an empty staging directory, so the
    staged tree only ever reflects the current inputs and templates. Runs
    targeting the same staging directory must not overlap.
    """

    def __init__(
        self,
        *,
        config: PackageConfig,
        console: ArchiveConsole,
        provider: TemplateProvider | None = None,
        archive_manager: ArchiveManager | None = None,
        registry: ArtifactRegistry | None = None,
    ) -> None:
        self._config = config
        self._console = console
        self._provider = provider or default_template_provider()
        self._archive_manager = archive_manager or ArchiveManager(console)
        self._registry = registry

    def staging_context(self) -> StagingContext:
        config = self._config
        return StagingContext(
            staging_root=config.package_dir,
            work_dir=config.build_dir,
            native_src_dir=config.native_src,
            resource_dir=config.resources,
            encoding=config.encoding,
        )

    def stage(self) -> StagingContext:
        """Reset the staging root, copy the input trees and write the templates."""

        context = self.staging_context()
        self._console.info(f"Staging native package in {context.staging_root}")
        reset_staging(context)
        TreeAssembler(self._console).assemble(context)

        stager = TemplateStager(
            provider=self._provider,
            resolver=VariableResolver(name=self._config.name, version=self._config.version),
            console=self._console,
        )
        stager.stage(context)
        return context

    def build(self) -> PackageArtifact:
        """Stage the package, archive it and register the resulting artifact."""

        config = self._config
        context = self.stage()

        target = config.archive_path
        self._console.info(f"Creating {target}")
        try:
            self._archive_manager.create_archive(
                artifact=ArchiveArtifact(
                    source_dir=context.staging_root,
                    root_name=config.package_name,
                    label=config.package_name,
                ),
                target_path=target,
                archive_format=config.archive_format,
            )
        except (OSError, ValueError, tarfile.TarError, zstd.ZstdError) as exc:
            raise ArchiveCreationError(target, str(exc)) from exc

        artifact = PackageArtifact(
            archive_path=target,
            classifier=config.classifier,
            format=FORMAT_EXTENSIONS[config.archive_format].lstrip("."),
        )
        if self._registry is not None:
            self._registry.attach(artifact)
        return artifact


__all__ = [
    "ArtifactRegistry",
    "PackageArtifact",
    "PackageBuilder",
    "RecordingArtifactRegistry",
    "reset_staging",
]
