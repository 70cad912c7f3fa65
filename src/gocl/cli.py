# cli.py
from __future__ import annotations

import sys

import click

from gocl import __version__, settings
from gocl.errors import InputError
from gocl.inputs import iter_references
from gocl.model import OutputSpec
from gocl.pipeline import run_batch
from gocl.ui.console import Console, set_console

USAGE_EXAMPLES = """\
Usage:
 gocl -i github.com/rix4uni/gocl
 gocl -i github.com/projectdiscovery/interactsh -c cmd/interactsh-client
 gocl -i github.com/rix4uni/gocl@latest -o ./bin -n gocl-dev
 gocl -i urls.txt

urls.txt:
 github.com/rix4uni/gocl
 github.com/rix4uni/unew"""


def print_version() -> None:
    click.echo(f"Current gocl version {__version__}")


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-i", "--input", "input_", default=None, help="Repository reference, or a file containing one reference per line.")
@click.option("-c", "--custom-path", default=None, help="Sub-path inside the repository to build (e.g. cmd/interactsh-client).")
@click.option("-o", "--output", "output_dir", default=None, help="Build into this directory instead of running go install.")
@click.option("-n", "--name", "output_name", default=None, help="Artifact name when building with --output (defaults to the repository name).")
@click.option("--check/--no-check", default=True, show_default=True, help="Check that the repository URL is reachable before cloning.")
@click.option("--in-place", is_flag=True, default=False, help="Clone into ./<name> instead of a temporary directory.")
@click.option("--debug", is_flag=True, default=False, help="Enable debug mode (show stack traces and detailed output)")
@click.option("--version", "show_version", is_flag=True, default=False, help="Print the version of the tool and exit.")
def cli(input_, custom_path, output_dir, output_name, check, in_place, debug, show_version):
    """gocl: clone a Go repository, build or install it, clean up."""
    console = Console(debug=debug)
    set_console(console)

    if show_version:
        print_version()
        return

    if not input_:
        console.print_info(USAGE_EXAMPLES)
        return

    if check:
        try:
            settings.probe_timeout()
        except ValueError as e:
            console.print_error("Invalid configuration", str(e))
            sys.exit(1)

    if output_name and not output_dir:
        console.print_warning("--name only applies with --output; ignoring it for go install")
        output_name = None

    try:
        references = iter_references(input_)
    except InputError as e:
        console.print_error("Cannot read input", str(e))
        sys.exit(1)

    if not references:
        console.print_info(f"No references found in {input_}")
        return

    try:
        results = run_batch(
            references,
            custom_path,
            OutputSpec(directory=output_dir, name=output_name),
            check_reachable=check,
            clone_mode="cwd" if in_place else "temp",
            console=console,
        )
    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(130)

    if len(results) > 1:
        console.print_results(results)

    if any(status == "failed" for _, status in results):
        sys.exit(1)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
