# model.py
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class RepositoryReference:
    """A remote source tree: what the user typed, and what we fetch."""
    raw: str
    url: str          # always https://..., version suffix stripped
    short_name: str   # last path segment of url

    @property
    def module_path(self) -> str:
        # go mod init wants the import path, not a URL
        return self.url[len("https://"):] if self.url.startswith("https://") else self.url


@dataclass(frozen=True)
class OutputSpec:
    """
    Where the compiled artifact lands.

    directory=None means "go install" into the toolchain's default bin dir.
    Otherwise the artifact is built to <directory>/<name or short name>.
    """
    directory: str | None = None
    name: str | None = None

    @property
    def installs(self) -> bool:
        return self.directory is None

    def artifact_path(self, original_dir: str | Path, short_name: str) -> Path:
        """
        Resolve the absolute artifact path.

        Args:
            original_dir: Working directory captured before the run; relative
                          output directories are joined against it.
            short_name: Default artifact name when no custom name is set.

        Returns:
            Absolute path of the artifact to build.
        """
        if self.directory is None:
            raise ValueError("artifact_path() called on an install-only OutputSpec")
        directory = Path(os.path.expanduser(self.directory))
        if not directory.is_absolute():
            directory = Path(original_dir) / directory
        return Path(os.path.normpath(directory / (self.name or short_name)))


@dataclass(frozen=True)
class BuildTarget:
    path: Path
    rule: str  # which candidate rule picked it: custom | v2-cmd | cmd | root


@dataclass
class RunResult:
    """Outcome of one pipeline run."""
    reference: str
    status: str  # "ok" | "failed"
    target: Optional[BuildTarget] = None
    artifact: Optional[Path] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"
