# go.py
from __future__ import annotations

import subprocess
from pathlib import Path
from typing import List, Optional

from .. import settings
from ..errors import ToolFailure, ToolNotFound


class GoToolchain:
    """
    Toolchain capability backed by the `go` command.

    Every operation runs in the current working directory (the pipeline has
    already changed into the build target) and inherits stdout/stderr, so
    the user sees go's own diagnostics as they happen.
    """

    def __init__(self, go_bin: Optional[str] = None):
        self.go_bin = go_bin or settings.GO_BIN

    def _go(self, args: List[str]) -> None:
        cmd = [self.go_bin, *args]
        try:
            proc = subprocess.run(cmd)
        except FileNotFoundError as e:
            raise ToolNotFound("go", settings.TOOL_HINTS.get("go")) from e
        if proc.returncode != 0:
            raise ToolFailure(command=cmd, exit_code=proc.returncode)

    def tidy(self) -> None:
        self._go(["mod", "tidy"])

    def init(self, module_path: str) -> None:
        self._go(["mod", "init", module_path])

    def build(self, output_path: str | Path) -> None:
        """Build the package in the current directory to `output_path`."""
        self._go(["build", "-o", str(output_path)])

    def install(self) -> None:
        """Install into go's default bin dir ($GOBIN or $GOPATH/bin)."""
        self._go(["install"])
