from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, List, Optional

import pytest

from gocl.errors import ProbeError, ToolFailure
from gocl.ui.console import Console, set_console


class FakeFetcher:
    """Creates the given directories/files instead of running git clone."""

    def __init__(self, dirs: Optional[List[str]] = None, files: Optional[Dict[str, str]] = None, fail: bool = False):
        self.dirs = dirs or []
        self.files = files or {}
        self.fail = fail
        self.calls: list[tuple[str, Path, int]] = []

    def clone(self, url: str, destination, depth: int = 1) -> None:
        self.calls.append((url, Path(destination), depth))
        if self.fail:
            raise ToolFailure(command=["git", "clone", url], exit_code=128)
        dest = Path(destination)
        dest.mkdir(parents=True)
        for d in self.dirs:
            (dest / d).mkdir(parents=True, exist_ok=True)
        for rel, content in self.files.items():
            (dest / rel).parent.mkdir(parents=True, exist_ok=True)
            (dest / rel).write_text(content)


class FakeToolchain:
    """
    Records every call together with the working directory it ran in.

    tidy_results: one bool per expected tidy call (True = success).
    """

    def __init__(
        self,
        tidy_results: Optional[List[bool]] = None,
        init_ok: bool = True,
        build_ok: bool = True,
        install_ok: bool = True,
    ):
        self.tidy_results = list(tidy_results) if tidy_results is not None else []
        self.init_ok = init_ok
        self.build_ok = build_ok
        self.install_ok = install_ok
        self.calls: list[tuple] = []

    def tidy(self) -> None:
        self.calls.append(("tidy", os.getcwd()))
        ok = self.tidy_results.pop(0) if self.tidy_results else True
        if not ok:
            raise ToolFailure(command=["go", "mod", "tidy"], exit_code=1)

    def init(self, module_path: str) -> None:
        self.calls.append(("init", module_path))
        if not self.init_ok:
            raise ToolFailure(command=["go", "mod", "init", module_path], exit_code=1)

    def build(self, output_path) -> None:
        self.calls.append(("build", Path(output_path), os.getcwd()))
        if not self.build_ok:
            raise ToolFailure(command=["go", "build", "-o", str(output_path)], exit_code=2)
        Path(output_path).write_text("binary")

    def install(self) -> None:
        self.calls.append(("install", os.getcwd()))
        if not self.install_ok:
            raise ToolFailure(command=["go", "install"], exit_code=2)

    @property
    def names(self) -> list[str]:
        return [c[0] for c in self.calls]


class FakeProber:
    def __init__(self, status: int = 200, error: Optional[str] = None):
        self.status = status
        self.error = error
        self.calls: list[tuple[str, float]] = []

    def probe(self, url: str, timeout: float) -> int:
        self.calls.append((url, timeout))
        if self.error:
            raise ProbeError(self.error)
        return self.status


@pytest.fixture(autouse=True)
def quiet_console():
    console = Console(debug=False)
    set_console(console)
    return console


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """A fresh current directory; monkeypatch puts the old one back afterwards."""
    cwd = tmp_path / "cwd"
    cwd.mkdir()
    monkeypatch.chdir(cwd)
    return cwd
