# reference.py
from __future__ import annotations

from .model import RepositoryReference

SCHEME = "https://"


def normalize(raw: str) -> RepositoryReference:
    """
    Turn a user-supplied reference into a fetchable URL and a short name.

    Accepts bare host/path references ("github.com/owner/tool"), references
    copied from `go install` notation ("github.com/owner/tool@v1.2.0") and
    full URLs. Nothing is validated here: a malformed reference surfaces later
    as a reachability or clone failure.

    Args:
        raw: Reference as typed by the user or read from a list file.

    Returns:
        RepositoryReference with an https:// URL and the last path segment
        as short name.
    """
    ref = raw.strip()

    # everything from the first "@" is a version qualifier
    ref = ref.split("@", 1)[0]
    for scheme in ("http://", SCHEME):
        if ref.startswith(scheme):
            ref = ref[len(scheme):]
            break
    ref = SCHEME + ref.rstrip("/")

    short_name = ref.rsplit("/", 1)[-1]
    return RepositoryReference(raw=raw, url=ref, short_name=short_name)
