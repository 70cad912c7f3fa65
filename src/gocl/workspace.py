# workspace.py
from __future__ import annotations

import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class LocalFilesystem:
    """Filesystem capability: thin layer over os/shutil so tests can fake it."""

    def exists(self, path: str | Path) -> bool:
        return os.path.exists(path)

    def isdir(self, path: str | Path) -> bool:
        return os.path.isdir(path)

    def getcwd(self) -> str:
        return os.getcwd()

    def chdir(self, path: str | Path) -> None:
        os.chdir(path)

    def makedirs(self, path: str | Path) -> None:
        os.makedirs(path, exist_ok=True)

    def rmtree(self, path: str | Path) -> None:
        shutil.rmtree(path)

    def mkdtemp(self, prefix: str, parent: Optional[str] = None) -> str:
        if parent:
            os.makedirs(parent, exist_ok=True)
        return tempfile.mkdtemp(prefix=prefix, dir=parent)


# ----------------------------------------------------------------------
# Working directory
# ----------------------------------------------------------------------

class WorkingContext:
    """
    Captures the process working directory and restores it on exit.

        with WorkingContext(fs) as ctx:
            fs.chdir(somewhere)
            ...
        # back in ctx.original_dir, whatever happened inside

    Restoration errors are recorded on `restore_error` instead of raised, so
    they never mask an exception already propagating out of the block. Call
    `restore()` explicitly to get the error raised on the success path.
    """

    def __init__(self, fs: LocalFilesystem):
        self.fs = fs
        self.original_dir: str = ""
        self.restored = False
        self.restore_error: Optional[OSError] = None

    def __enter__(self) -> "WorkingContext":
        self.original_dir = self.fs.getcwd()
        return self

    def restore(self) -> None:
        if self.restored:
            return
        self.fs.chdir(self.original_dir)
        self.restored = True

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            self.restore()
        except OSError as e:
            self.restore_error = e
        return False


# ----------------------------------------------------------------------
# Disposable clone
# ----------------------------------------------------------------------

CLONE_MODES = ("temp", "cwd")


@dataclass
class DisposableClone:
    """
    Where the clone lives and what to delete afterwards.

    temp mode: root = <mkdtemp>/<short_name>, the whole mkdtemp dir is ours.
    cwd mode:  root = <original_dir>/<short_name>, only root is ours.
    """
    root: Path
    removable: Path
    created: bool = False
    owns_removable: bool = False  # removable was made by us (mkdtemp), delete it regardless

    @classmethod
    def allocate(
        cls,
        fs: LocalFilesystem,
        short_name: str,
        *,
        mode: str = "temp",
        original_dir: str | Path = ".",
        work_dir: Optional[str] = None,
    ) -> "DisposableClone":
        if mode not in CLONE_MODES:
            raise ValueError(f"Unknown clone mode: {mode!r} (expected one of {CLONE_MODES})")

        if mode == "temp":
            parent = Path(fs.mkdtemp(prefix="gocl-", parent=work_dir))
            return cls(root=parent / short_name, removable=parent, owns_removable=True)

        root = Path(original_dir) / short_name
        return cls(root=root, removable=root)

    def cleanup(self, fs: LocalFilesystem) -> None:
        """
        Remove the clone. A temp root is always ours; in cwd mode nothing is
        removed unless the clone step actually created the directory.
        """
        if not self.owns_removable and not self.created:
            return
        if fs.exists(self.removable):
            fs.rmtree(self.removable)
