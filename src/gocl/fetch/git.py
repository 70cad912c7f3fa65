# git.py
# Small, focused wrapper around the Git CLI.
# The pipeline never calls subprocess("git ...") directly; it goes through
# GitFetcher so tests can swap in a fake.

from __future__ import annotations

import os
import subprocess
from pathlib import Path
from typing import Optional

from .. import settings
from ..errors import ToolFailure, ToolNotFound


def _git(args: list[str], cwd: Optional[str] = None, git_bin: Optional[str] = None) -> None:
    """
    Execute a git command with all of its output discarded.

    Args:
        args: List of git arguments (e.g. ["clone", "--depth", "1", url])
        cwd: Optional working directory in which to run the git command.
        git_bin: git executable (defaults to settings.GIT_BIN).

    Raises:
        ToolNotFound: git is not installed / not on PATH.
        ToolFailure: git exited non-zero.
    """
    git = git_bin or settings.GIT_BIN
    cmd = [git, *args]

    # never stop to ask for credentials; a private repo should just fail
    env = os.environ.copy()
    env["GIT_TERMINAL_PROMPT"] = "0"

    try:
        proc = subprocess.run(
            cmd,
            cwd=cwd,
            env=env,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except FileNotFoundError as e:
        raise ToolNotFound("git", settings.TOOL_HINTS.get("git")) from e

    if proc.returncode != 0:
        raise ToolFailure(command=cmd, exit_code=proc.returncode)


class GitFetcher:
    """Source-control fetch capability backed by the git CLI."""

    def __init__(self, git_bin: Optional[str] = None):
        self.git_bin = git_bin

    def clone(self, url: str, destination: str | Path, depth: int = 1) -> None:
        """
        Shallow-clone `url` into `destination` without printing anything.

        Args:
            url: Normalized repository URL.
            destination: Directory to create; must not exist yet.
            depth: History depth (1 = latest commit only).
        """
        _git(["clone", "--depth", str(depth), url, str(destination)], git_bin=self.git_bin)
