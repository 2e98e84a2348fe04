"""Exception hierarchy raised while staging and packaging native sources."""
from __future__ import annotations

from pathlib import Path


class PackagingError(RuntimeError):
    """Base class for every failure that aborts a packaging run."""


class ConfigurationError(PackagingError):
    """Raised when the package configuration is missing or invalid."""


class StagingResetError(PackagingError):
    """Raised when the staging root cannot be deleted or recreated."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Could not reset staging directory '{path}': {reason}")
        self.path = path


class TreeCopyError(PackagingError):
    """Raised when an input tree cannot be copied into the staging root."""

    def __init__(self, source: Path, destination: Path, reason: str):
        super().__init__(f"Could not copy '{source}' to '{destination}': {reason}")
        self.source = source
        self.destination = destination


class TemplateLoadError(PackagingError):
    """Raised when an embedded template resource is missing or unreadable."""

    def __init__(self, logical_name: str, reason: str):
        super().__init__(f"Could not extract template resource: {logical_name} ({reason})")
        self.logical_name = logical_name


class TemplateWriteError(PackagingError):
    """Raised when a template cannot be materialized at its destination."""

    def __init__(self, logical_name: str, destination: Path, reason: str):
        super().__init__(
            f"Could not write template resource {logical_name} to '{destination}': {reason}"
        )
        self.logical_name = logical_name
        self.destination = destination


class ArchiveCreationError(PackagingError):
    """Raised when the staging root cannot be archived."""

    def __init__(self, target: Path, reason: str):
        super().__init__(f"Could not create archive '{target}': {reason}")
        self.target = target


__all__ = [
    "ArchiveCreationError",
    "ConfigurationError",
    "PackagingError",
    "StagingResetError",
    "TemplateLoadError",
    "TemplateWriteError",
    "TreeCopyError",
]
