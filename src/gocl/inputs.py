# inputs.py
from __future__ import annotations

import os
from pathlib import Path
from typing import List

from .errors import InputError


def read_references(path: str | Path) -> List[str]:
    """
    Read a newline-delimited list of references.

    Each line is trimmed; blank lines are skipped.

    Raises:
        InputError: the file cannot be read.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"Error reading file {path}: {e}") from e

    refs: List[str] = []
    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue
        refs.append(line)
    return refs


def iter_references(value: str) -> List[str]:
    """A path to an existing file is a list of references; anything else is one reference."""
    if os.path.isfile(value):
        return read_references(value)
    value = value.strip()
    return [value] if value else []
