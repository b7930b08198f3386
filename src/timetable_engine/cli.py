"""CLI entry point for the timetable engine."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import SlotConfig, load_slot_config
from .exceptions import TimetableError
from .exporters import export_result_json, load_result_json
from .models import ScheduleResult, ValidationResult
from .scheduler import generate_schedules, teacher_workload, validate_schedules

app = typer.Typer(
    name="timetable-engine",
    help="Generate weekly MWF and TT timetables for a language school",
    add_completion=False,
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _show_grid(result: ScheduleResult) -> None:
    """Print one table per day-group: days as rows, periods as columns."""
    group = result.day_group
    table = Table(title=f"{group.value} Timetable")
    table.add_column("Day", style="cyan")
    for period in group.periods:
        table.add_column(f"P{period}\n{group.period_times[period]}")
    table.add_column("Word tests", style="magenta")

    for day, schedule in result.days.items():
        cells = []
        for period in group.periods:
            lines = [
                f"{a.class_id} {a.role.value} {a.teacher}"
                for a in schedule.periods.get(period, [])
            ]
            cells.append("\n".join(lines) or "[dim]-[/dim]")
        exams = "\n".join(f"{w.class_id} {w.teacher} {w.time}" for w in schedule.word_tests)
        table.add_row(day.value, *cells, exams or "[dim]-[/dim]")

    console.print(table)


def _show_diagnostics(validation: ValidationResult, verbose: bool) -> None:
    if validation.is_valid:
        console.print("[bold green]✓ Timetable is valid[/bold green]")
    else:
        console.print("[bold red]✗ Timetable has errors[/bold red]")

    if validation.errors:
        console.print(f"\n[bold red]Errors ({len(validation.errors)}):[/bold red]")
        for error in validation.errors:
            console.print(f"  [red]• {error}[/red]")

    if validation.warnings:
        console.print(f"\n[bold yellow]Warnings ({len(validation.warnings)}):[/bold yellow]")
        shown = validation.warnings if verbose else validation.warnings[:10]
        for warning in shown:
            console.print(f"  [yellow]• {warning}[/yellow]")
        if len(shown) < len(validation.warnings):
            console.print(f"  ... and {len(validation.warnings) - len(shown)} more (use -v)")

    if validation.infos:
        console.print(f"\n[bold]Info ({len(validation.infos)}):[/bold]")
        for info in validation.infos:
            console.print(f"  • {info}")


def _show_workload(*results: ScheduleResult) -> None:
    workload = teacher_workload(*results)
    if workload.empty:
        return

    table = Table(title="Teacher Workload")
    table.add_column("Teacher", style="cyan")
    for column in workload.columns:
        table.add_column(column, justify="right", style="green" if column == "total" else None)

    for teacher, row in workload.iterrows():
        table.add_row(str(teacher), *(str(int(row[c])) for c in workload.columns))

    console.print(table)


@app.command()
def generate(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the slot configuration JSON file"),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option("-o", "--output", help="Output JSON file path"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Show detailed output"),
    ] = False,
) -> None:
    """Generate MWF and TT timetables from a slot configuration."""
    _setup_logging(verbose)

    if not config_file.exists():
        console.print(f"[bold red]Error:[/bold red] File not found: {config_file}")
        raise typer.Exit(1)

    try:
        with console.status("[bold green]Generating timetables..."):
            config = load_slot_config(config_file)
            result = generate_schedules(config)
    except TimetableError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    console.print(f"\n[bold]Timetables for:[/bold] {config.name or config_file.name}")
    console.print(f"  MWF assignments: {result.mwf.total_assignments}")
    console.print(f"  TT assignments: {result.tt.total_assignments}")
    console.print(f"  Word tests: {result.validation.metrics.get('word_tests', 0)}")

    if verbose:
        _show_grid(result.mwf)
        _show_grid(result.tt)

    console.print()
    _show_diagnostics(result.validation, verbose)
    console.print()
    _show_workload(result.mwf, result.tt)

    if output:
        if not output.suffix:
            output = output.with_suffix(".json")
        with console.status("[bold green]Exporting to JSON..."):
            export_result_json(result, output)
        console.print(f"\n[bold green]✓[/bold green] Exported to: {output}")

    if not result.validation.is_valid:
        raise typer.Exit(1)


@app.command()
def validate(
    result_file: Annotated[
        Path,
        typer.Argument(help="Timetable JSON written by the generate command"),
    ],
    config_file: Annotated[
        Optional[Path],
        typer.Option("--config", help="Slot configuration to check constraints against"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Show detailed output"),
    ] = False,
) -> None:
    """Re-validate a saved timetable."""
    _setup_logging(verbose)

    try:
        result = load_result_json(result_file)
        config: SlotConfig | None = load_slot_config(config_file) if config_file else None
    except TimetableError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    with console.status("[bold green]Validating timetables..."):
        validation = validate_schedules(result.mwf, result.tt, config)

    console.print(f"\n[bold]Validation Results for:[/bold] {result_file.name}")
    _show_diagnostics(validation, verbose)

    if not validation.is_valid:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
