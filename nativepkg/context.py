"""
Staging context shared by the packaging steps.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class StagingContext:
    """Paths and settings of one staging run.

    ``staging_root`` is rebuilt from scratch on every run; ``work_dir`` holds
    the temporary files written while templates are staged. Either input
    tree may be ``None`` when the package has no such content.
    """

    staging_root: Path
    work_dir: Path
    native_src_dir: Optional[Path] = None
    resource_dir: Optional[Path] = None
    encoding: str = "UTF-8"

    @property
    def source_staging_dir(self) -> Path:
        return self.staging_root / "src"

    @property
    def m4_dir(self) -> Path:
        return self.staging_root / "m4"

    def required_dirs(self) -> tuple[Path, ...]:
        """Directories that exist before any template is staged."""
        return (self.staging_root, self.m4_dir, self.source_staging_dir)


__all__ = ["StagingContext"]
