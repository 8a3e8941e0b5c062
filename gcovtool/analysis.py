"""analysis and display helpers for reconstructed coverage"""

import json
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .core import CoverageReport, FileCoverage

# Constants
DEFAULT_BAR_WIDTH = 20
LOW_COVERAGE_PERCENT = 50.0
HIGH_COVERAGE_PERCENT = 90.0
SEPARATOR_LENGTH = 60


def print_report_stats(report: CoverageReport, name: str = ""):
    """display basic statistics about a coverage report"""
    if name:
        typer.echo(f"{name}:")

    typer.echo(f"  source files: {len(report)}")
    typer.echo(f"  functions: {len(report.functions)}")
    typer.echo(f"  lines: {report.executed}/{report.instrumented} executed")


def _coverage_style(percent: float) -> str:
    if percent >= HIGH_COVERAGE_PERCENT:
        return "green"
    if percent >= LOW_COVERAGE_PERCENT:
        return "yellow"
    return "red"


def _coverage_bar(percent: float, width: int = DEFAULT_BAR_WIDTH) -> str:
    filled = int(round(percent / 100 * width))
    return "█" * filled + "░" * (width - filled)


def _file_data(coverage: FileCoverage) -> Dict[str, Any]:
    return {
        "file": coverage.file,
        "instrumented": coverage.instrumented,
        "executed": coverage.executed,
        "percentage": round(coverage.percent, 1),
        "missed_lines": [line.line for line in coverage.lines if not line.executed],
    }


def _generate_summary_data(
    report: CoverageReport, file_filter: Optional[str] = None
) -> Dict[str, Any]:
    """generate the summary structure shared by the rich and json renderers"""
    if file_filter:
        report = report.filter_by_file(file_filter)

    instrumented = report.instrumented
    executed = report.executed
    return {
        "filter": file_filter,
        "summary": {
            "files": len(report),
            "functions": len(report.functions),
            "instrumented": instrumented,
            "executed": executed,
            "percentage": round(executed / instrumented * 100, 1)
            if instrumented
            else 0.0,
        },
        "files": [_file_data(coverage) for coverage in report],
    }


def print_summary_rich(report: CoverageReport, file_filter: Optional[str] = None):
    """display per-file line coverage using Rich"""
    console = Console()
    data = _generate_summary_data(report, file_filter)

    filter_text = f" (filtered to: {file_filter})" if file_filter else ""
    console.print(
        Panel(f"[bold cyan]Line Coverage[/bold cyan]{filter_text}", expand=False)
    )

    table = Table(title="[bold]Source Files[/bold]")
    table.add_column("File", style="cyan", no_wrap=True)
    table.add_column("Lines", justify="right", style="yellow")
    table.add_column("Executed", justify="right", style="yellow")
    table.add_column("Coverage", justify="right")
    table.add_column("Bar")

    for item in data["files"]:
        style = _coverage_style(item["percentage"])
        table.add_row(
            item["file"],
            f"{item['instrumented']:,}",
            f"{item['executed']:,}",
            f"[{style}]{item['percentage']:.1f}%[/{style}]",
            f"[{style}]{_coverage_bar(item['percentage'])}[/{style}]",
        )

    console.print(table)

    summary = data["summary"]
    totals = Table(show_header=False, box=None)
    totals.add_column("Metric", style="bold")
    totals.add_column("Value", style="cyan")
    totals.add_row("Files", f"{summary['files']:,}")
    totals.add_row("Functions", f"{summary['functions']:,}")
    totals.add_row(
        "Lines Executed",
        f"{summary['executed']:,} of {summary['instrumented']:,} "
        f"({summary['percentage']:.1f}%)",
    )
    console.print(totals)


def print_summary_json(report: CoverageReport, file_filter: Optional[str] = None):
    """output the coverage summary as JSON"""
    data = _generate_summary_data(report, file_filter)
    print(json.dumps(data, indent=2))


def print_line_listing(
    report: CoverageReport, file_filter: Optional[str] = None, missed_only: bool = False
):
    """list every instrumented line with its execution count"""
    console = Console()
    if file_filter:
        report = report.filter_by_file(file_filter)

    if not len(report):
        typer.echo("no matching source files")
        return

    for coverage in report:
        console.print(Text(coverage.file, style="bold cyan"))
        for line in coverage.lines:
            if missed_only and line.executed:
                continue
            if line.executed:
                console.print(f"  {line.count:>10,}  {line.line:>6}")
            else:
                console.print(f"  [red]{'#####':>10}[/red]  {line.line:>6}")
        console.print()


def _function_rows(report: CoverageReport) -> List[Dict[str, Any]]:
    rows = []
    for function in report.functions:
        arcs = function.arcs
        rows.append(
            {
                "name": function.name,
                "source": function.source,
                "line": function.first_line,
                "blocks": len(function.blocks),
                "arcs": len(arcs),
                "measured": sum(1 for arc in arcs if not arc.on_tree),
                "unresolved": sum(1 for arc in arcs if not arc.resolved),
                "calls": function.blocks[0].count if function.blocks else 0,
            }
        )
    return rows


def print_function_table(report: CoverageReport):
    """display decoded functions and the state of their arc graphs"""
    console = Console()
    rows = _function_rows(report)
    if not rows:
        typer.echo("no functions decoded")
        return

    table = Table(title="[bold]Functions[/bold]")
    table.add_column("Function", style="cyan", no_wrap=True)
    table.add_column("Location", style="dim", max_width=50)
    table.add_column("Calls", justify="right", style="green")
    table.add_column("Blocks", justify="right", style="yellow")
    table.add_column("Arcs", justify="right", style="yellow")
    table.add_column("Measured", justify="right", style="blue")
    table.add_column("Unresolved", justify="right", style="red")

    for row in rows:
        table.add_row(
            row["name"],
            f"{row['source']}:{row['line']}",
            f"{row['calls']:,}",
            str(row["blocks"]),
            str(row["arcs"]),
            str(row["measured"]),
            str(row["unresolved"]),
        )
    console.print(table)
