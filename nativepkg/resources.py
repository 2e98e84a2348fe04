"""Lookup of the template resources bundled with native-package."""
from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import Protocol, runtime_checkable


TEMPLATE_ROOT = Path(__file__).resolve().parent / "templates" / "automake"


@runtime_checkable
class TemplateProvider(Protocol):
    """Read-only source of template resources addressed by logical name."""

    def load(self, resource_id: str) -> bytes:
        """Return the raw bytes of *resource_id*.

        Raises :class:`FileNotFoundError` when the resource does not exist.
        """
        ...


class DirectoryTemplateProvider:
    """Serves templates from a directory, ``m4/jni.m4`` style names map to files."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def _resolve(self, resource_id: str) -> Path:
        relative = PurePosixPath(resource_id)
        if relative.is_absolute() or ".." in relative.parts:
            raise FileNotFoundError(f"Template resource '{resource_id}' is outside {self.root}")
        return self.root.joinpath(*relative.parts)

    def load(self, resource_id: str) -> bytes:
        path = self._resolve(resource_id)
        if not path.is_file():
            raise FileNotFoundError(f"Template resource '{resource_id}' not found in {self.root}")
        return path.read_bytes()

    def __repr__(self) -> str:
        return f"DirectoryTemplateProvider({str(self.root)!r})"


def default_template_provider() -> DirectoryTemplateProvider:
    """Return the provider for the automake templates shipped with the package."""
    return DirectoryTemplateProvider(TEMPLATE_ROOT)


__all__ = [
    "DirectoryTemplateProvider",
    "TEMPLATE_ROOT",
    "TemplateProvider",
    "default_template_provider",
]
