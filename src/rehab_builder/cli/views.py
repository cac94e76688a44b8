"""
CLI view formatters using Rich for pretty console output.

Handles table formatting of the exercise list, catalog listings and program
payloads, plus the coloured notification helpers.
"""

from typing import Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..core.models import Category, ExerciseEntry, ExerciseTemplate, ProgramPayload, ProgramSchedule

console = Console()

SIDE_LABELS = {"left": "Left", "right": "Right", "both": "Both"}


def format_exercise_table(entries: Sequence[ExerciseEntry], title: str | None = None) -> Table:
    """
    Build the exercise list table, one row per entry in list order.

    Args:
        entries: Exercise list snapshot
        title: Optional table title

    Returns:
        Rich Table
    """
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Exercise", style="cyan")
    table.add_column("Side")
    table.add_column("Sets", justify="right")
    table.add_column("Reps", justify="right")
    table.add_column("Hold (s)", justify="right")
    table.add_column("Weight", justify="right")
    table.add_column("Equipment")
    table.add_column("Stage", style="magenta")

    for i, entry in enumerate(entries, 1):
        table.add_row(
            str(i),
            escape(entry.name) if entry.name else "[dim](unnamed)[/dim]",
            SIDE_LABELS.get(entry.side, entry.side),
            str(entry.sets),
            str(entry.reps),
            str(entry.hold_time),
            str(entry.weight),
            entry.equipment,
            entry.stage,
        )

    return table


def format_schedule(schedule: ProgramSchedule) -> str:
    """One-line summary of a schedule."""
    days = ", ".join(schedule.selected_days) if schedule.selected_days else "no days selected"
    return (
        f"{days} · {schedule.frequency}x daily · "
        f"{schedule.break_interval} min between sessions"
    )


def print_exercise_list(entries: Sequence[ExerciseEntry]) -> None:
    """
    Print the exercise programme table.

    Args:
        entries: Exercise list snapshot
    """
    if not entries:
        console.print("[yellow]No exercises added yet.[/yellow]")
        return
    console.print(format_exercise_table(entries, title="Exercise Programme"))


def print_program_header(name: str, schedule: ProgramSchedule, notes: str) -> None:
    """Print the program form fields above the exercise list."""
    console.print()
    shown = escape(name) if name else "[dim](no name)[/dim]"
    console.print(f"[bold]Programme:[/bold] {shown}")
    console.print(f"[bold]Schedule:[/bold] {format_schedule(schedule)}")
    if notes:
        console.print(f"[bold]Notes:[/bold] {escape(notes)}")


def print_categories(categories: Sequence[Category]) -> None:
    """Print the category list with 1-based choice numbers."""
    if not categories:
        console.print("[yellow]No categories available.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("ID", style="dim")
    table.add_column("Category", style="cyan")
    for i, category in enumerate(categories, 1):
        table.add_row(str(i), escape(category.id), escape(category.name))
    console.print(table)


def print_templates(templates: Sequence[ExerciseTemplate]) -> None:
    """Print available exercise templates with their default dosage."""
    if not templates:
        console.print("[yellow]No exercises in this category.[/yellow]")
        return

    table = Table(title="Available Exercises", show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Exercise", style="cyan")
    table.add_column("Sets", justify="right")
    table.add_column("Reps", justify="right")
    table.add_column("Hold (s)", justify="right")
    for i, template in enumerate(templates, 1):
        table.add_row(
            str(i),
            escape(template.name),
            str(template.default_sets),
            str(template.default_reps),
            str(template.default_hold_time),
        )
    console.print(table)


def print_payload(payload: ProgramPayload) -> None:
    """Print an assembled program: header, schedule, notes and exercise table."""
    schedule = ProgramSchedule(
        selected_days=list(payload.selected_days),
        frequency=payload.frequency,
        break_interval=payload.break_interval,
    )
    print_program_header(payload.name, schedule, payload.therapist_notes)
    print_exercise_list(payload.exercises)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{escape(message)}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {escape(message)}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {escape(message)}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{escape(message)}[/blue]")


def confirm_action(message: str) -> bool:
    """
    Prompt user for confirmation.

    Args:
        message: Confirmation message

    Returns:
        True if confirmed, False otherwise
    """
    response = console.input(f"{message} \\[y/N]: ")
    return response.lower() in ("y", "yes")
