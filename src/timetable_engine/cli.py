"""CLI entry point for the timetable engine."""

import logging
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from .exceptions import TimetableError
from .exporters import get_exporter
from .scheduler import (
    GenerationResult,
    JsonWorkloadStore,
    ScheduleEntry,
    SchedulingConfig,
    SnapshotLoader,
    TimetableExcelGenerator,
    TimetableGenerator,
    WorkloadStatus,
    WorkloadSummary,
    WorkloadUpdater,
    analyze_constraints,
    load_schedule,
    summarize_workload,
)

app = typer.Typer(
    name="timetable-engine",
    help="Generate weekly class timetables from course, faculty and room data",
    add_completion=False,
)
console = Console()


class OutputFormat(str, Enum):
    """Output format options."""

    json = "json"
    csv = "csv"
    excel = "excel"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _open_loader(data_dir: Path) -> SnapshotLoader:
    try:
        return SnapshotLoader(data_dir)
    except TimetableError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def generate(
    data_dir: Annotated[
        Path,
        typer.Argument(help="Directory with courses.json, faculty.json and rooms.csv"),
    ],
    department: Annotated[
        str,
        typer.Option("-d", "--department", help="Department to schedule"),
    ],
    semester: Annotated[
        int,
        typer.Option("-s", "--semester", help="Semester to schedule"),
    ],
    seed: Annotated[
        Optional[int],
        typer.Option("--seed", help="Random seed for reproducible runs"),
    ] = None,
    time_limit: Annotated[
        Optional[float],
        typer.Option("--time-limit", help="Wall-clock limit in seconds"),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("-o", "--output", help="Output file or directory path"),
    ] = None,
    format: Annotated[
        OutputFormat,
        typer.Option("-f", "--format", help="Output format"),
    ] = OutputFormat.json,
    grid: Annotated[
        Optional[Path],
        typer.Option("--grid", help="Also write the weekly grid to this Excel file"),
    ] = None,
    update_workload: Annotated[
        bool,
        typer.Option("--update-workload", help="Write assigned hours back to faculty.json"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Show detailed output"),
    ] = False,
) -> None:
    """Generate a timetable for one department and semester."""
    _configure_logging(verbose)
    loader = _open_loader(data_dir)

    try:
        config = loader.build_config(seed=seed, time_limit=time_limit)
        snapshot = loader.load(department, semester)
    except TimetableError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    with console.status("[bold green]Generating timetable..."):
        result = TimetableGenerator(config).generate(snapshot)

    workload = summarize_workload(
        snapshot.faculty, result.faculty_hours, config.default_max_hours_per_week
    )
    _show_summary(result, workload)

    if verbose and result.unplaced:
        console.print(f"\n[bold yellow]Unplaced sessions ({result.total_unplaced}):[/bold yellow]")
        for item in result.unplaced[:10]:
            console.print(
                f"  [yellow]- {item.course_code} {item.session_type.value} "
                f"({item.reason.value}): {item.details}[/yellow]"
            )
        if result.total_unplaced > 10:
            console.print(f"  [yellow]... and {result.total_unplaced - 10} more[/yellow]")

    if output:
        exporter = get_exporter(format.value)

        if format == OutputFormat.csv:
            # CSV exports to directory
            output_path = output if output.is_dir() else output.parent / output.stem
        else:
            if not output.suffix:
                output = output.with_suffix(".xlsx" if format == OutputFormat.excel else ".json")
            output_path = output

        with console.status(f"[bold green]Exporting to {format.value}..."):
            exporter.export(result, output_path)
        console.print(f"\n[bold green]✓[/bold green] Exported to: {output_path}")

    if grid:
        course_names = {course.code: course.name for course in snapshot.courses}
        generator = TimetableExcelGenerator(config, course_names)
        grid_path = generator.generate(list(result.schedule), grid)
        console.print(f"[bold green]✓[/bold green] Grid written to: {grid_path}")

    if update_workload and result.feasible:
        updater = WorkloadUpdater(JsonWorkloadStore(loader.faculty_path))
        hours = updater.update_faculty_workload(
            result.schedule, [f.id for f in snapshot.faculty]
        )
        console.print(f"[bold green]✓[/bold green] Updated workload for {len(hours)} instructors")

    if result.hard_conflicts:
        console.print(
            f"\n[bold red]✗ {result.hard_conflicts} hard conflicts detected[/bold red]"
        )
        raise typer.Exit(1)


@app.command()
def analyze(
    data_dir: Annotated[
        Path,
        typer.Argument(help="Directory with courses.json, faculty.json and rooms.csv"),
    ],
    department: Annotated[
        str,
        typer.Option("-d", "--department", help="Department to analyze"),
    ],
    semester: Annotated[
        int,
        typer.Option("-s", "--semester", help="Semester to analyze"),
    ],
) -> None:
    """Check whether a department/semester is likely to be schedulable."""
    _configure_logging(False)
    loader = _open_loader(data_dir)

    try:
        config = loader.build_config()
        snapshot = loader.load(department, semester)
    except TimetableError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    analysis = analyze_constraints(snapshot, config)

    console.print(f"\n[bold]Constraint analysis for:[/bold] {department} sem {semester}")

    overview_table = Table(title="Overview", show_header=False)
    overview_table.add_column("Metric", style="cyan")
    overview_table.add_column("Value", style="green")
    overview_table.add_row("Courses", str(analysis.courses))
    overview_table.add_row("Faculty", str(analysis.faculty))
    overview_table.add_row("Rooms", str(analysis.rooms))
    overview_table.add_row("Hours Needed", str(analysis.total_hours_needed))
    overview_table.add_row("Available Slots", str(analysis.available_slots))
    console.print(overview_table)

    if analysis.feasible:
        console.print("[bold green]✓ Looks feasible[/bold green]")
    else:
        console.print("[bold red]✗ Likely infeasible[/bold red]")

    if analysis.warnings:
        console.print(f"\n[bold yellow]Warnings ({len(analysis.warnings)}):[/bold yellow]")
        for warning in analysis.warnings:
            console.print(f"  [yellow]• {warning}[/yellow]")

    if analysis.recommendations:
        console.print("\n[bold]Recommendations:[/bold]")
        for recommendation in analysis.recommendations:
            console.print(f"  • {recommendation}")


@app.command()
def show(
    result_file: Annotated[
        Path,
        typer.Argument(help="Result JSON file written by the generate command"),
    ],
    faculty: Annotated[
        Optional[str],
        typer.Option("--faculty", help="Only show sessions taught by this instructor"),
    ] = None,
) -> None:
    """Print the weekly grid of an exported result."""
    if not result_file.exists():
        console.print(f"[bold red]Error:[/bold red] File not found: {result_file}")
        raise typer.Exit(1)

    schedule = load_schedule(result_file)
    if not schedule:
        console.print("[bold yellow]Warning:[/bold yellow] Result has no schedule entries")
        raise typer.Exit(1)

    if faculty:
        schedule = [entry for entry in schedule if entry.faculty_id == faculty]
        if not schedule:
            console.print(
                f"[bold yellow]Warning:[/bold yellow] No sessions for instructor {faculty}"
            )
            raise typer.Exit(1)

    config = SchedulingConfig()
    groups: dict[tuple[str, int], list[ScheduleEntry]] = {}
    for entry in schedule:
        groups.setdefault(entry.group_key, []).append(entry)

    for (department, semester), entries in groups.items():
        title = f"{department} - Semester {semester}"
        if faculty:
            title += f" - {faculty}"
        console.print(_grid_table(config, title, entries))


def _grid_table(config: SchedulingConfig, title: str, entries: list[ScheduleEntry]) -> Table:
    """Build a rich day x slot table for one group."""
    cells: dict[tuple, str] = {}
    for entry in entries:
        for offset, slot_id in enumerate(entry.slot_ids):
            label = f"{entry.course_code} {entry.session_type.value[:3]}"
            if offset == 0:
                label += f"\n{entry.faculty_id} / {entry.room_id}"
            else:
                label += " (cont.)"
            cells[(entry.day, slot_id)] = label

    table = Table(title=title, show_lines=True)
    table.add_column("Time", style="cyan")
    for day in config.working_days:
        table.add_column(day.value.title(), style="green")

    for slot in config.time_slots:
        if slot.is_break:
            table.add_row(slot.label, *(["[dim]Break[/dim]"] * len(config.working_days)))
            continue
        table.add_row(
            slot.label,
            *(cells.get((day, slot.id), "") for day in config.working_days),
        )
    return table


def _show_summary(result: GenerationResult, workload: list[WorkloadSummary]) -> None:
    """Show a generation summary."""
    console.print(f"\n[bold]Timetable for:[/bold] {result.department} sem {result.semester}")

    summary_table = Table(title="Summary", show_header=False)
    summary_table.add_column("Metric", style="cyan")
    summary_table.add_column("Value", style="green")
    summary_table.add_row("Sessions Placed", str(result.total_assigned))
    summary_table.add_row("Sessions Unplaced", str(result.total_unplaced))
    summary_table.add_row("Score", str(result.score))
    summary_table.add_row("Hard Conflicts", str(result.hard_conflicts))
    summary_table.add_row("Iterations", str(result.iterations))
    summary_table.add_row("Conflicts Resolved", str(result.conflicts_resolved))
    summary_table.add_row("Local Search Passes", str(result.local_search_passes))
    summary_table.add_row("Duration (ms)", str(result.duration_ms))
    console.print(summary_table)

    if not result.feasible:
        console.print("[bold red]✗ Input has no courses, faculty or rooms[/bold red]")

    if workload:
        workload_table = Table(title="Faculty Hours")
        workload_table.add_column("Faculty", style="cyan")
        workload_table.add_column("Hours", style="green")
        workload_table.add_column("Max", style="green")
        workload_table.add_column("Utilization", style="green")
        workload_table.add_column("Status")
        for summary in workload:
            workload_table.add_row(
                summary.faculty_id,
                str(summary.current_hours),
                str(summary.max_hours),
                f"{summary.utilization}%",
                _status_label(summary.status),
            )
        console.print(workload_table)


def _status_label(status: WorkloadStatus) -> str:
    color = {
        WorkloadStatus.OVERLOADED: "red",
        WorkloadStatus.HIGH: "yellow",
    }.get(status, "green")
    return f"[{color}]{status.value}[/{color}]"


if __name__ == "__main__":
    app()
