# errors.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


# ----------------------------------------------------------------------
# Pipeline errors
# ----------------------------------------------------------------------

@dataclass
class PipelineError(Exception):
    """
    Structured pipeline error with enough context for:
      - a single-line report in the batch loop
      - debugging without full tracebacks (details)
    """
    reference: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict)

    kind = "pipeline"
    step = "pipeline"

    def __str__(self) -> str:
        return f"{self.step}: {self.message} ({self.reference})"

    def detail_lines(self) -> List[str]:
        return [f"{k}={v}" for k, v in self.details.items()]


class RepositoryUnreachable(PipelineError):
    kind = "reachability"
    step = "validate"


class CloneFailed(PipelineError):
    kind = "clone"
    step = "clone"


class PathResolutionFailure(PipelineError):
    kind = "path_resolution"
    step = "resolve"


class CustomPathNotFound(PathResolutionFailure):
    pass


class DirectoryChangeFailed(PathResolutionFailure):
    pass


class BootstrapFailed(PipelineError):
    kind = "bootstrap"
    step = "bootstrap"


class BuildFailed(PipelineError):
    kind = "build"
    step = "build"


class InstallFailed(PipelineError):
    kind = "install"
    step = "install"


class RestoreFailed(PipelineError):
    kind = "restore"
    step = "restore"


class CleanupFailed(PipelineError):
    kind = "cleanup"
    step = "cleanup"


# ----------------------------------------------------------------------
# Capability errors (raised by fetch / toolchain / probe / inputs)
# ----------------------------------------------------------------------

@dataclass
class ToolFailure(Exception):
    command: List[str]
    exit_code: int

    def __str__(self) -> str:
        return f"`{' '.join(self.command)}` exited with status {self.exit_code}"


@dataclass
class ToolNotFound(Exception):
    tool: str
    hint: Optional[str] = None

    def __str__(self) -> str:
        msg = f"{self.tool} executable not found"
        if self.hint:
            msg += f". {self.hint}"
        return msg


class ProbeError(Exception):
    """Raised when a reachability probe cannot get any HTTP response."""
    pass


class InputError(Exception):
    """Raised when a reference list file cannot be read."""
    pass
