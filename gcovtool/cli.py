"""command line interface for gcovtool"""

import logging
from pathlib import Path
from typing import List, Optional

import typer

from .core import CoverageReport
from .gcov import GcovError
from .analysis import (
    print_function_table,
    print_line_listing,
    print_report_stats,
    print_summary_json,
    print_summary_rich,
)


app = typer.Typer(
    help="reconstruct line coverage from gcov notes and data files",
    no_args_is_help=True,
    context_settings=dict(help_option_names=["-h", "--help"]),
    pretty_exceptions_short=True,
    pretty_exceptions_show_locals=False,
    add_completion=False,
)

# global state for verbose option
verbose_enabled = False


@app.callback()
def main_callback(
    verbose: bool = typer.Option(
        False, "-v", "--verbose", help="enable verbose output for all operations"
    ),
):
    """global options for gcovtool"""
    global verbose_enabled
    verbose_enabled = verbose
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_report(files: List[Path]) -> CoverageReport:
    try:
        return CoverageReport.from_files(files)
    except (GcovError, OSError) as e:
        typer.echo(f"error loading coverage: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def summary(
    files: List[Path] = typer.Argument(
        ..., help="compilation units (base path, .gcno or .gcda)"
    ),
    source: Optional[str] = typer.Option(
        None, "--file", "-f", help="filter to source files containing this string"
    ),
    json_output: bool = typer.Option(
        False, "--json", help="output the summary as JSON"
    ),
):
    """display instrumented and executed line counts per source file"""
    report = _load_report(files)

    if verbose_enabled:
        print_report_stats(report, f"{len(files)} compilation unit(s)")

    if json_output:
        print_summary_json(report, source)
    else:
        print_summary_rich(report, source)


@app.command()
def lines(
    files: List[Path] = typer.Argument(
        ..., help="compilation units (base path, .gcno or .gcda)"
    ),
    source: Optional[str] = typer.Option(
        None, "--file", "-f", help="filter to source files containing this string"
    ),
    missed: bool = typer.Option(
        False, "--missed", "-m", help="only list lines that were never executed"
    ),
):
    """list instrumented lines with their execution counts"""
    report = _load_report(files)
    print_line_listing(report, source, missed_only=missed)


@app.command()
def functions(
    files: List[Path] = typer.Argument(
        ..., help="compilation units (base path, .gcno or .gcda)"
    ),
):
    """display decoded functions and their arc graphs"""
    report = _load_report(files)

    if verbose_enabled:
        print_report_stats(report)

    print_function_table(report)


def main():
    """entry point for the console script"""
    app()


if __name__ == "__main__":
    main()
