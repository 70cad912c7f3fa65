# settings.py
from __future__ import annotations
import os

GIT_BIN = os.environ.get("GOCL_GIT", "git")
GO_BIN = os.environ.get("GOCL_GO", "go")
WORK_DIR = os.environ.get("GOCL_WORK_DIR") or None

DEFAULT_PROBE_TIMEOUT = 10

TOOL_HINTS = {
    "git": "Install Git or fix PATH (or point GOCL_GIT at it).",
    "go": "Install Go from https://go.dev/dl/ or fix PATH (or point GOCL_GO at it).",
}


def probe_timeout() -> float:
    """
    GOCL_PROBE_TIMEOUT in seconds, read when a probe is about to run.

    Raises:
        ValueError: the variable is set but is not a positive number.
    """
    raw = os.environ.get("GOCL_PROBE_TIMEOUT", "").strip()
    if not raw:
        return DEFAULT_PROBE_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"GOCL_PROBE_TIMEOUT must be a number of seconds, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"GOCL_PROBE_TIMEOUT must be positive, got {raw!r}")
    return value
