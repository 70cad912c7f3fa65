# resolve.py
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Sequence

from .errors import CustomPathNotFound, DirectoryChangeFailed
from .model import BuildTarget

# (root, short_name, custom_path) -> candidate dir, or None if the rule does not apply
Locator = Callable[[Path, str, Optional[str]], Optional[Path]]


@dataclass(frozen=True)
class CandidateRule:
    name: str
    locate: Locator
    required: bool = False  # a required candidate that does not exist is an error, not a miss
    check: bool = True      # False: accept without an existence check


def _within(root: Path, candidate: Path) -> bool:
    rel = os.path.relpath(os.path.normpath(candidate), os.path.normpath(root))
    return rel != ".." and not rel.startswith(".." + os.sep)


def _custom(root: Path, short_name: str, custom_path: Optional[str]) -> Optional[Path]:
    if not custom_path:
        return None
    return root / custom_path


def _v2_cmd(root: Path, short_name: str, custom_path: Optional[str]) -> Optional[Path]:
    return root / "v2" / "cmd" / short_name


def _cmd(root: Path, short_name: str, custom_path: Optional[str]) -> Optional[Path]:
    return root / "cmd" / short_name


def _root(root: Path, short_name: str, custom_path: Optional[str]) -> Optional[Path]:
    return root


# Priority order: custom path > v2/cmd/<name> > cmd/<name> > clone root
DEFAULT_RULES: tuple[CandidateRule, ...] = (
    CandidateRule("custom", _custom, required=True),
    CandidateRule("v2-cmd", _v2_cmd),
    CandidateRule("cmd", _cmd),
    CandidateRule("root", _root, check=False),
)


def resolve_build_target(
    root: str | Path,
    short_name: str,
    custom_path: Optional[str] = None,
    *,
    exists: Callable[[Path], bool] = os.path.isdir,
    rules: Sequence[CandidateRule] = DEFAULT_RULES,
    reference: str = "",
) -> BuildTarget:
    """
    Pick the directory to build from, first matching rule wins.

    Args:
        root: Clone root.
        short_name: Repository short name (used by the cmd/<name> rules).
        custom_path: Optional caller override, relative to the clone root.
        exists: Existence predicate; injectable so the policy can be tested
                without a filesystem.
        rules: Candidate rules in priority order.
        reference: Only used to label errors.

    Raises:
        CustomPathNotFound: the custom path was given and does not exist.
            No fallback is attempted.
    """
    root_p = Path(root)
    for rule in rules:
        candidate = rule.locate(root_p, short_name, custom_path)
        if candidate is None:
            continue
        if not rule.check:
            return BuildTarget(path=candidate, rule=rule.name)
        # a candidate escaping the clone (absolute or ..) never matches
        if _within(root_p, candidate) and exists(candidate):
            return BuildTarget(path=candidate, rule=rule.name)
        if rule.required:
            raise CustomPathNotFound(
                reference,
                f"custom path {custom_path!r} does not exist",
                {"custom_path": custom_path, "looked_in": str(candidate)},
            )

    # only reachable with a custom rule set that has no unchecked fallback
    raise DirectoryChangeFailed(reference, "no candidate directory matched", {"root": str(root_p)})


def enter_build_target(target: BuildTarget, chdir: Callable[[Path], None], reference: str = "") -> None:
    """Change into the build target; OSError becomes DirectoryChangeFailed."""
    try:
        chdir(target.path)
    except OSError as e:
        raise DirectoryChangeFailed(
            reference,
            f"cannot change into {target.rule} directory {target.path}: {e.strerror or e}",
            {"rule": target.rule, "path": str(target.path)},
        ) from e
