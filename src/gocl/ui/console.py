"""Console output formatting utilities for gocl."""

from __future__ import annotations

import sys
from typing import Optional


class Console:
    """Centralized console output formatting."""

    def __init__(self, debug: bool = False):
        """
        Initialize console formatter.

        Args:
            debug: If True, show detailed output including stack traces
        """
        self.debug = debug

    def print_run_started(self, reference: str, url: str) -> None:
        """Print the header for one reference."""
        print(f"\nREPOSITORY: {reference}")
        if url != reference:
            print(f"URL: {url}")

    def print_step(self, name: str, detail: Optional[str] = None) -> None:
        """Print step start message."""
        if detail:
            print(f"STEP: {name} ({detail})")
        else:
            print(f"STEP: {name}")

    def print_success(self, name: str, artifact: Optional[str] = None) -> None:
        """Print success message."""
        print("STATUS: success")
        if artifact:
            print(f"Artifact: {artifact}")

    def print_failure(
        self,
        name: str,
        reason: str,
        details: Optional[list[str]] = None,
        hint: Optional[str] = None,
    ) -> None:
        """
        Print failure message for one reference.

        Args:
            name: Reference that failed
            reason: Single-line failure reason
            details: Optional detail lines (shown in debug mode)
            hint: Optional hint for user
        """
        print(f"FAILED: {name}", file=sys.stderr)
        print(f"Error: {reason}", file=sys.stderr)
        if hint:
            print(f"Hint: {hint}", file=sys.stderr)
        if self.debug and details:
            for detail in details:
                print(f"  {detail}", file=sys.stderr)

    def print_results(self, results: list[tuple[str, str]]) -> None:
        """Print final results summary, one line per run in input order."""
        print("\n" + "=" * 40)
        print("RESULTS")
        print("=" * 40)
        for reference, status in results:
            status_display = status.upper() if status != "ok" else "SUCCESS"
            print(f"  {reference}: {status_display}")

    def print_error(
        self,
        title: str,
        message: str,
        details: Optional[list[str]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Print structured error message.

        Args:
            title: Error title
            message: Main error message
            details: Optional list of detail lines
            suggestion: Optional suggestion for user
        """
        print(f"\nERROR: {title}", file=sys.stderr)
        print(f"{message}", file=sys.stderr)
        if details:
            for detail in details:
                print(f"  {detail}", file=sys.stderr)
        if suggestion:
            print(f"\n{suggestion}", file=sys.stderr)

    def print_warning(self, message: str) -> None:
        """Print a non-fatal warning."""
        print(f"WARNING: {message}", file=sys.stderr)

    def print_exception(self, exc: Exception) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            traceback.print_exc()
        else:
            print(f"Error: {exc}", file=sys.stderr)

    def print_info(self, message: str) -> None:
        """Print informational message."""
        print(message)

    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            print(f"[DEBUG] {message}", file=sys.stderr)


# Global console instance (will be initialized by CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
