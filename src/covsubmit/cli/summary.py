from __future__ import annotations

from pathlib import Path  # noqa: TC003
from typing import TYPE_CHECKING, Annotated

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from covsubmit.cli._shared import (
    coverage_input,
    exit_on_error,
    resolve_use_color,
    stdout_allows_color,
)
from covsubmit.cli.exit_codes import EXIT_OK
from covsubmit.engine.report import analyse

if TYPE_CHECKING:
    from covsubmit.model import Report


def _style_percent(pct: float | None) -> str:
    if pct is None:
        return "n/a"
    v = round(pct)
    if v >= 90:  # noqa: PLR2004
        return f"[green]{v}%[/green]"
    if v >= 75:  # noqa: PLR2004
        return f"[yellow]{v}%[/yellow]"
    return f"[red]{v}%[/red]"


def _pct(covered: int, relevant: int) -> float | None:
    return 100.0 * covered / relevant if relevant else None


def build_table(report: Report) -> Table:
    table = Table(title="Coveralls Job", box=box.SIMPLE_HEAVY, header_style="bold", expand=True)
    table.add_column("File", style="cyan", overflow="fold")
    table.add_column("Lines", justify="right")
    table.add_column("Relevant", justify="right")
    table.add_column("Hit", justify="right")
    table.add_column("Cov.", justify="right")

    total_relevant = total_hit = 0
    for f in sorted(report.source_files, key=lambda f: f.name):
        total_relevant += f.relevant_lines
        total_hit += f.covered_lines
        table.add_row(
            f.name,
            str(len(f.coverage)),
            str(f.relevant_lines),
            str(f.covered_lines),
            _style_percent(_pct(f.covered_lines, f.relevant_lines)),
        )
    table.add_section()
    table.add_row(
        "[bold]TOTAL[/bold]",
        "",
        str(total_relevant),
        str(total_hit),
        _style_percent(_pct(total_hit, total_relevant)),
    )
    return table


def register(app: typer.Typer) -> None:
    @app.command("summary")
    def summary_cmd(
        coverage: Annotated[
            Path | None,
            typer.Argument(help="Coverage XML file. If omitted, discovery is used."),
        ] = None,
        color: Annotated[
            bool,
            typer.Option("--color", help="Force color output"),
        ] = False,
        no_color: Annotated[
            bool,
            typer.Option("--no-color", help="Disable color output"),
        ] = False,
    ) -> None:
        """Show what would be uploaded, one row per source file."""
        path = coverage_input(coverage)
        with exit_on_error():
            report = analyse(path)
        allowed = stdout_allows_color()
        use_color = resolve_use_color(color=color, no_color=no_color, color_allowed=allowed)
        console = Console(
            force_terminal=use_color,
            no_color=not use_color,
            color_system="auto" if allowed else "standard",
            width=120,
        )
        console.print(build_table(report))
        raise typer.Exit(code=EXIT_OK)


__all__ = ["build_table", "register"]
