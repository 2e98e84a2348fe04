"""Autotools source packages for native (JNI) code."""
from __future__ import annotations

from .archive import ArchiveArtifact, ArchiveConsole, ArchiveManager
from .config import PackageConfig, build_config, load_package_config
from .console import Console
from .context import StagingContext
from .errors import (
    ArchiveCreationError,
    ConfigurationError,
    PackagingError,
    StagingResetError,
    TemplateLoadError,
    TemplateWriteError,
    TreeCopyError,
)
from .interpolation import interpolate, interpolate_stream
from .package import ArtifactRegistry, PackageArtifact, PackageBuilder, RecordingArtifactRegistry
from .resources import DirectoryTemplateProvider, TemplateProvider, default_template_provider
from .stager import AUTOMAKE_TEMPLATES, TemplateSpec, TemplateStager
from .variables import VariableResolver, build_variables, scan_sources

__version__ = "1.0.0"

__all__ = [
    "AUTOMAKE_TEMPLATES",
    "ArchiveArtifact",
    "ArchiveConsole",
    "ArchiveCreationError",
    "ArchiveManager",
    "ArtifactRegistry",
    "ConfigurationError",
    "Console",
    "DirectoryTemplateProvider",
    "PackageArtifact",
    "PackageBuilder",
    "PackageConfig",
    "PackagingError",
    "RecordingArtifactRegistry",
    "StagingContext",
    "StagingResetError",
    "TemplateLoadError",
    "TemplateProvider",
    "TemplateSpec",
    "TemplateStager",
    "TemplateWriteError",
    "TreeCopyError",
    "VariableResolver",
    "build_config",
    "build_variables",
    "default_template_provider",
    "interpolate",
    "interpolate_stream",
    "load_package_config",
    "scan_sources",
]
