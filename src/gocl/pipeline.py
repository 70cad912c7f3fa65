# pipeline.py
from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union

from . import settings
from .errors import (
    BootstrapFailed,
    BuildFailed,
    CleanupFailed,
    CloneFailed,
    InstallFailed,
    PipelineError,
    ProbeError,
    RepositoryUnreachable,
    RestoreFailed,
    ToolFailure,
    ToolNotFound,
)
from .fetch.git import GitFetcher
from .model import OutputSpec, RepositoryReference, RunResult
from .probe import HttpProber, is_reachable
from .reference import normalize
from .resolve import enter_build_target, resolve_build_target
from .toolchain.go import GoToolchain
from .ui.console import Console, get_console
from .workspace import DisposableClone, LocalFilesystem, WorkingContext

# fetch -> resolve -> bootstrap -> build, one reference at a time.
#
#   Normalized -> Validated -> Cloned -> Resolved -> Bootstrapped -> Built -> Cleaned
#
# Any step can fail; whatever was already acquired (working dir, clone dir)
# is released on the way out. Nothing is retried except the one bootstrap
# retry (go mod init, then go mod tidy again).


def _tool_details(operation: str, err: Exception) -> Dict[str, object]:
    details: Dict[str, object] = {"operation": operation}
    if isinstance(err, ToolFailure):
        details["command"] = " ".join(err.command)
        details["exit_code"] = err.exit_code
    elif isinstance(err, ToolNotFound) and err.hint:
        details["hint"] = err.hint
    return details


# ----------------------------------------------------------------------
# Steps
# ----------------------------------------------------------------------

def validate_reachable(ref: RepositoryReference, prober, timeout: float) -> int:
    """Probe the repository URL; 200/204 pass, anything else is RepositoryUnreachable."""
    try:
        status = prober.probe(ref.url, timeout)
    except ProbeError as e:
        raise RepositoryUnreachable(
            ref.url, f"repository validation failed: {e}", {"timeout": timeout}
        ) from e

    if not is_reachable(status):
        raise RepositoryUnreachable(
            ref.url,
            f"repository validation failed: received status code {status}",
            {"status": status},
        )
    return status


def clone_repository(
    ref: RepositoryReference,
    clone: DisposableClone,
    fetcher,
    fs: LocalFilesystem,
) -> None:
    if fs.exists(clone.root):
        # never clone over (and later delete) a directory we did not create
        raise CloneFailed(
            ref.url,
            f"destination {clone.root} already exists",
            {"destination": str(clone.root)},
        )
    try:
        fetcher.clone(ref.url, clone.root, depth=1)
    except (ToolFailure, ToolNotFound) as e:
        raise CloneFailed(ref.url, f"error cloning repository: {e}", _tool_details("clone", e)) from e
    clone.created = True


def bootstrap_manifest(
    directory: Union[str, Path],
    module_path: str,
    toolchain,
    *,
    exists: Callable[[Path], bool] = os.path.exists,
    reference: str = "",
    console: Optional[Console] = None,
) -> None:
    """
    Make sure the build target has a usable go.mod / go.sum.

    - go.sum present: nothing to do.
    - otherwise `go mod tidy`.
    - tidy failed, no go.mod: `go mod init <module_path>`, then tidy again.
    - tidy failed, go.mod present: BootstrapFailed (init would clobber it).

    A BootstrapFailed always reports the last operation that failed, in
    details["operation"].
    """
    console = console or get_console()
    directory = Path(directory)

    if exists(directory / "go.sum"):
        console.print_debug(f"go.sum found in {directory}, skipping go mod tidy")
        return

    def attempt(operation: str, fn: Callable[..., None], *args) -> Optional[ToolFailure]:
        console.print_step(operation)
        try:
            fn(*args)
        except ToolNotFound as e:
            raise BootstrapFailed(reference, str(e), _tool_details(operation, e)) from e
        except ToolFailure as e:
            return e
        return None

    tidy_err = attempt("go mod tidy", toolchain.tidy)
    if tidy_err is None:
        return

    if exists(directory / "go.mod"):
        raise BootstrapFailed(
            reference,
            f"go mod tidy failed (exit {tidy_err.exit_code}) and go.mod already exists",
            _tool_details("tidy", tidy_err),
        ) from tidy_err

    init_err = attempt(f"go mod init {module_path}", toolchain.init, module_path)
    if init_err is not None:
        raise BootstrapFailed(
            reference,
            f"go mod init {module_path} failed (exit {init_err.exit_code})",
            _tool_details("init", init_err),
        ) from init_err

    retry_err = attempt("go mod tidy (after init)", toolchain.tidy)
    if retry_err is not None:
        raise BootstrapFailed(
            reference,
            f"go mod tidy failed after go mod init (exit {retry_err.exit_code})",
            _tool_details("tidy (after init)", retry_err),
        ) from retry_err


def build_or_install(
    ref: RepositoryReference,
    output: OutputSpec,
    original_dir: str,
    toolchain,
    fs: LocalFilesystem,
    console: Console,
) -> Optional[Path]:
    """
    `go install` when no output directory was asked for, otherwise
    `go build -o <abs path>`.

    Returns:
        The artifact path for builds, None for installs.
    """
    if output.installs:
        console.print_step("go install")
        try:
            toolchain.install()
        except (ToolFailure, ToolNotFound) as e:
            raise InstallFailed(ref.url, f"error running go install: {e}", _tool_details("install", e)) from e
        return None

    artifact = output.artifact_path(original_dir, ref.short_name)
    try:
        fs.makedirs(artifact.parent)
    except OSError as e:
        raise BuildFailed(
            ref.url,
            f"cannot create output directory {artifact.parent}: {e.strerror or e}",
            {"output": str(artifact)},
        ) from e

    console.print_step("go build", str(artifact))
    try:
        toolchain.build(artifact)
    except (ToolFailure, ToolNotFound) as e:
        details = _tool_details("build", e)
        details["output"] = str(artifact)
        raise BuildFailed(ref.url, f"error running go build: {e}", details) from e
    return artifact


def _teardown(
    ref: RepositoryReference,
    ctx: WorkingContext,
    clone: DisposableClone,
    fs: LocalFilesystem,
    console: Console,
    *,
    raise_errors: bool,
) -> None:
    """
    Go back to the original directory, then delete the clone.

    With raise_errors=False (an earlier step already failed) problems are
    printed as warnings so the original failure is the one reported.
    """
    errors: list[PipelineError] = []

    try:
        ctx.restore()
    except OSError as e:
        errors.append(RestoreFailed(
            ref.url,
            f"error returning to {ctx.original_dir}: {e.strerror or e}",
            {"original_dir": ctx.original_dir},
        ))

    try:
        clone.cleanup(fs)
    except OSError as e:
        errors.append(CleanupFailed(
            ref.url,
            f"error removing cloned repository {clone.removable}: {e.strerror or e}",
            {"clone": str(clone.removable)},
        ))
    else:
        console.print_debug(f"removed {clone.removable}")

    if not errors:
        return
    if raise_errors:
        for extra in errors[1:]:
            console.print_warning(str(extra))
        raise errors[0]
    for err in errors:
        console.print_warning(str(err))


# ----------------------------------------------------------------------
# Public API
# ----------------------------------------------------------------------

def run_or_raise(
    reference: Union[str, RepositoryReference],
    custom_path: Optional[str] = None,
    output: Optional[OutputSpec] = None,
    *,
    fetcher=None,
    toolchain=None,
    prober=None,
    fs: Optional[LocalFilesystem] = None,
    check_reachable: bool = True,
    probe_timeout: Optional[float] = None,
    clone_mode: str = "temp",
    work_dir: Optional[str] = None,
    console: Optional[Console] = None,
) -> RunResult:
    """
    Fetch, resolve, bootstrap and build one repository.

    Args:
        reference: Raw reference string or an already normalized reference.
        custom_path: Sub-path inside the clone to build from; must exist.
        output: Where the artifact goes (default: go install).
        fetcher / toolchain / prober / fs: Capabilities; real implementations
            are used when omitted.
        check_reachable: Probe the URL over HTTP before cloning.
        probe_timeout: Seconds (default settings.probe_timeout()).
        clone_mode: "temp" (unique temp dir) or "cwd" (./<short_name>).
        work_dir: Parent for temp clones (default settings.WORK_DIR).
        console: Output sink (default: global console).

    Returns:
        RunResult with status "ok".

    Raises:
        PipelineError: subclass naming the step that failed. The working
            directory is restored and the clone removed before it propagates.
    """
    ref = reference if isinstance(reference, RepositoryReference) else normalize(reference)
    output = output or OutputSpec()
    fetcher = fetcher or GitFetcher()
    toolchain = toolchain or GoToolchain()
    prober = prober or HttpProber()
    fs = fs or LocalFilesystem()
    console = console or get_console()
    console.print_run_started(ref.raw.strip(), ref.url)

    if not ref.short_name:
        # nothing to name the clone, module or artifact after
        raise CloneFailed(
            ref.url,
            f"cannot derive a repository name from {ref.raw.strip()!r}",
            {"raw": ref.raw},
        )

    if check_reachable:
        timeout = probe_timeout if probe_timeout is not None else settings.probe_timeout()
        console.print_step("validate", ref.url)
        validate_reachable(ref, prober, timeout)

    with WorkingContext(fs) as ctx:
        try:
            clone = DisposableClone.allocate(
                fs,
                ref.short_name,
                mode=clone_mode,
                original_dir=ctx.original_dir,
                work_dir=work_dir if work_dir is not None else settings.WORK_DIR,
            )
        except OSError as e:
            raise CloneFailed(ref.url, f"cannot create clone directory: {e.strerror or e}") from e

        try:
            console.print_step("clone", str(clone.root))
            clone_repository(ref, clone, fetcher, fs)

            target = resolve_build_target(
                clone.root, ref.short_name, custom_path, exists=fs.isdir, reference=ref.url
            )
            console.print_step("resolve", f"{target.rule}: {target.path}")
            enter_build_target(target, fs.chdir, reference=ref.url)

            bootstrap_manifest(
                target.path, ref.module_path, toolchain,
                exists=fs.exists, reference=ref.url, console=console,
            )
            artifact = build_or_install(ref, output, ctx.original_dir, toolchain, fs, console)
        except BaseException:
            _teardown(ref, ctx, clone, fs, console, raise_errors=False)
            raise

        _teardown(ref, ctx, clone, fs, console, raise_errors=True)

    console.print_success(ref.short_name, str(artifact) if artifact else None)
    return RunResult(reference=ref.url, status="ok", target=target, artifact=artifact)


def run(
    reference: Union[str, RepositoryReference],
    custom_path: Optional[str] = None,
    output: Optional[OutputSpec] = None,
    **kwargs,
) -> RunResult:
    """
    Same as run_or_raise(), but a PipelineError is reported on the console
    and returned as a failed RunResult instead of raised.
    """
    console = kwargs.get("console") or get_console()
    try:
        return run_or_raise(reference, custom_path, output, **kwargs)
    except PipelineError as e:
        console.print_failure(
            e.reference,
            str(e),
            details=e.detail_lines(),
            hint=e.details.get("hint"),
        )
        return RunResult(reference=e.reference, status="failed", error=e)


def run_batch(
    references: Iterable[str],
    custom_path: Optional[str] = None,
    output: Optional[OutputSpec] = None,
    **kwargs,
) -> List[Tuple[str, str]]:
    """
    Run every reference in order. A failing reference never stops the batch.

    Returns:
        [(reference, "ok" | "failed"), ...], one entry per run in input
        order; a reference listed twice appears twice.
    """
    console = kwargs.get("console") or get_console()
    results: List[Tuple[str, str]] = []

    for raw in references:
        try:
            result = run(raw, custom_path, output, **kwargs)
            results.append((raw, result.status))
        except Exception as e:
            # not a pipeline failure: a bug or an environment problem, keep going
            results.append((raw, "failed"))
            console.print_exception(e)

    return results
