"""Programme editing commands: build (interactive editor), show-payload."""

import asyncio
from pathlib import Path
from typing import Annotated, Optional

import typer

from ...core.assembler import ProgramValidationError
from ...core.config import WEEKDAYS
from ...core.models import CHOICE_FIELDS, EntryField, ExerciseTemplate
from ...core.session import EditingSession, SaveInProgressError
from ...core.store import Entries
from ...io.api_client import CatalogClient, CatalogClientError
from ...io.serializers import ValidationError, json_to_program, program_to_json
from .. import views
from ..app import ApiUrlOption, app, get_client, get_settings

MENU: dict[str, tuple[str, str]] = {
    "1": ("category",  "Choose exercise combo (category)"),
    "2": ("add",       "Add exercise from combo"),
    "3": ("blank",     "Add blank exercise"),
    "4": ("edit",      "Edit a field"),
    "5": ("step",      "Step a number up/down"),
    "6": ("duplicate", "Duplicate for opposite side"),
    "7": ("remove",    "Remove exercise"),
    "8": ("move",      "Move exercise"),
    "n": ("name",      "Programme name"),
    "s": ("schedule",  "Schedule (days, frequency, break)"),
    "t": ("notes",     "Therapist notes"),
    "x": ("clear",     "Clear all"),
    "w": ("save",      "Save programme"),
    "0": ("quit",      "Quit"),
}

FIELD_HELP = ", ".join(f.value for f in EntryField)
NUMERIC_HELP = ", ".join(f.value for f in EntryField if f.is_numeric)


# ---------------------------------------------------------------------------
# Prompt helpers
# ---------------------------------------------------------------------------


def _ask(prompt: str) -> str:
    return views.console.input(prompt).strip()


def _ask_int(prompt: str) -> int | None:
    """Prompt for an integer; None (with an error printed) on bad input."""
    raw = _ask(prompt)
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        views.print_error("Enter a whole number")
        return None


def _ask_position(prompt: str, count: int) -> int | None:
    """Prompt for a 1-based list position; returns the 0-based index."""
    if count == 0:
        views.print_info("The programme has no exercises yet.")
        return None
    number = _ask_int(f"{prompt} (1-{count}): ")
    if number is None:
        return None
    if number < 1 or number > count:
        views.print_error(f"Enter a number between 1 and {count}")
        return None
    return number - 1


def _ask_field(numeric_only: bool = False) -> EntryField | None:
    options = NUMERIC_HELP if numeric_only else FIELD_HELP
    raw = _ask(f"Field ({options}): ")
    entry_field = EntryField.parse(raw)
    if entry_field is None or (numeric_only and not entry_field.is_numeric):
        views.print_error(f"Unknown field: {raw}")
        return None
    return entry_field


def _report(before: Entries, after: Entries, message: str) -> None:
    """Tell the user whether a mutation changed the list."""
    if after is before:
        views.print_warning("Nothing changed.")
    else:
        views.print_success(message)


# ---------------------------------------------------------------------------
# Menu actions
# ---------------------------------------------------------------------------


def _choose_category(session: EditingSession, client: CatalogClient) -> list[ExerciseTemplate]:
    try:
        found = asyncio.run(client.list_categories())
    except CatalogClientError as e:
        views.print_error(f"Failed to load categories. Please try again. ({e})")
        return []
    views.print_categories(found)
    if not found:
        return []
    index = _ask_position("Combo #", len(found))
    if index is None:
        return []
    return _load_templates(session, client, found[index].id)


def _load_templates(session: EditingSession, client: CatalogClient, category_id: str) -> list[ExerciseTemplate]:
    try:
        templates = asyncio.run(client.list_templates(category_id))
    except CatalogClientError as e:
        views.print_error(f"Failed to load exercises. Please try again. ({e})")
        return []
    session.selected_category = category_id
    views.print_templates(templates)
    return templates


def _add_from_template(session: EditingSession, templates: list[ExerciseTemplate]) -> None:
    if not templates:
        views.print_info("Choose a combo first (option 1).")
        return
    views.print_templates(templates)
    index = _ask_position("Exercise #", len(templates))
    if index is None:
        return
    session.add_template(templates[index])
    views.print_success(f"Added {templates[index].name}")


def _edit_field(session: EditingSession) -> None:
    index = _ask_position("Exercise #", len(session.entries))
    if index is None:
        return
    entry_field = _ask_field()
    if entry_field is None:
        return

    value: int | str | None
    if entry_field.is_numeric:
        value = _ask_int(f"New {entry_field.value}: ")
        if value is None:
            return
        if value < 0:
            views.print_warning(f"{entry_field.value} cannot be negative.")
            return
    elif entry_field in CHOICE_FIELDS:
        choices = CHOICE_FIELDS[entry_field]
        value = _ask(f"New {entry_field.value} ({', '.join(choices)}): ")
    else:
        value = views.console.input(f"New {entry_field.value}: ")

    before = session.entries
    after = session.store.update_field(index, entry_field, value)
    _report(before, after, f"Updated {entry_field.value} of exercise #{index + 1}")


def _step_field(session: EditingSession) -> None:
    index = _ask_position("Exercise #", len(session.entries))
    if index is None:
        return
    entry_field = _ask_field(numeric_only=True)
    if entry_field is None:
        return
    delta = _ask_int("Change by (e.g. 1 or -1): ")
    if delta is None:
        return
    before = session.entries
    after = session.store.step_field(index, entry_field, delta)
    _report(before, after, f"{entry_field.value} is now {after[index].get(entry_field)}")


def _duplicate(session: EditingSession) -> None:
    index = _ask_position("Exercise #", len(session.entries))
    if index is None:
        return
    if not session.entries[index].is_unilateral:
        views.print_warning("Only left or right exercises can be duplicated for the other side.")
        return
    before = session.entries
    after = session.store.duplicate_for_opposite_side(index)
    _report(before, after, f"Added {after[index + 1].side} side as #{index + 2}")


def _remove(session: EditingSession) -> None:
    index = _ask_position("Exercise #", len(session.entries))
    if index is None:
        return
    target = session.entries[index]
    before = session.entries
    after = session.store.remove(index)
    _report(before, after, f"Removed #{index + 1} {target.name}".rstrip())


def _move(session: EditingSession) -> None:
    count = len(session.entries)
    source = _ask_position("Move exercise #", count)
    if source is None:
        return
    destination = _ask_position("To position #", count)
    before = session.entries
    after = session.store.on_reorder(source, destination)
    _report(before, after, f"Moved exercise #{source + 1} to #{(destination or 0) + 1}")


def _edit_schedule(session: EditingSession) -> None:
    schedule = session.schedule
    views.console.print(
        "Days: " + "  ".join(f"{i}={day[:3]}" for i, day in enumerate(WEEKDAYS, 1))
    )
    raw = _ask("Toggle days (e.g. 1,3,5; Enter to keep): ")
    for part in [p.strip() for p in raw.split(",") if p.strip()]:
        day = _resolve_day(part)
        if day is None:
            views.print_error(f"Unknown day: {part}")
            continue
        schedule.toggle_day(day)

    frequency = _ask_int(f"Times per day [{schedule.frequency}]: ")
    if frequency is not None:
        if frequency < 1:
            views.print_error("Frequency must be at least 1")
        else:
            schedule.frequency = frequency

    interval = _ask_int(f"Break between sessions, minutes [{schedule.break_interval}]: ")
    if interval is not None:
        if interval < 0:
            views.print_error("Break interval cannot be negative")
        else:
            schedule.break_interval = interval

    views.print_info(views.format_schedule(schedule))


def _resolve_day(token: str) -> str | None:
    if token.isdigit():
        n = int(token)
        return WEEKDAYS[n - 1] if 1 <= n <= len(WEEKDAYS) else None
    for day in WEEKDAYS:
        if day.lower().startswith(token.lower()) and len(token) >= 2:
            return day
    return None


def _save(session: EditingSession, dry_run: bool) -> bool:
    """Save (or print) the programme. Returns True when the session was reset."""
    if dry_run:
        try:
            payload = session.build_payload()
        except ProgramValidationError as e:
            views.print_error(str(e))
            return False
        views.console.print_json(program_to_json(payload))
        return False

    try:
        saved = asyncio.run(session.save())
    except ProgramValidationError as e:
        views.print_error(str(e))
        return False
    except SaveInProgressError as e:
        views.print_warning(str(e))
        return False
    except CatalogClientError as e:
        views.print_error(f"Failed to save program. Please try again. ({e})")
        return False

    views.print_success(f"Program saved successfully (id {saved.id})")
    return True


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def build(
    name: Annotated[
        Optional[str],
        typer.Option("--name", "-n", help="Programme name"),
    ] = None,
    category: Annotated[
        Optional[str],
        typer.Option("--category", "-c", help="Category ID to load exercises from"),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Print the payload JSON instead of saving"),
    ] = False,
    api_url: ApiUrlOption = None,
) -> None:
    """
    Interactively assemble an exercise programme and save it.

    Exercises are added from a catalog combo or blank, tuned field by field,
    reordered, and finally posted to the programs API.
    """
    settings = get_settings(api_url)
    client = get_client(settings)
    session = EditingSession(
        client,
        default_frequency=settings.default_frequency,
        default_break_interval=settings.default_break_interval,
    )
    if name:
        session.name = name

    templates: list[ExerciseTemplate] = []
    if category:
        templates = _load_templates(session, client, category)

    views.console.print("[bold cyan]rehab-builder[/bold cyan]: exercise programme editor")

    while True:
        views.print_program_header(session.name, session.schedule, session.therapist_notes)
        views.print_exercise_list(session.entries)
        views.console.print()
        for key, (_, desc) in MENU.items():
            views.console.print(f"  \\[{key}] {desc}")

        try:
            choice = _ask("Choose: ")
            action = MENU.get(choice, (None, ""))[0]

            if action is None:
                views.print_error(f"Unknown choice: {choice}")
            elif action == "quit":
                return
            elif action == "category":
                templates = _choose_category(session, client) or templates
            elif action == "add":
                _add_from_template(session, templates)
            elif action == "blank":
                session.add_blank()
                views.print_success(f"Added blank exercise #{len(session.entries)}")
            elif action == "edit":
                _edit_field(session)
            elif action == "step":
                _step_field(session)
            elif action == "duplicate":
                _duplicate(session)
            elif action == "remove":
                _remove(session)
            elif action == "move":
                _move(session)
            elif action == "name":
                session.name = _ask("Programme name: ")
            elif action == "schedule":
                _edit_schedule(session)
            elif action == "notes":
                session.therapist_notes = views.console.input("Therapist notes: ")
            elif action == "clear":
                if views.confirm_action("Clear the whole programme?"):
                    session.clear_all()
                    templates = []
                    views.print_info("Cleared.")
            elif action == "save":
                if _save(session, dry_run):
                    templates = []
        except EOFError:
            views.console.print()
            return


@app.command("show-payload")
def show_payload(
    path: Annotated[Path, typer.Argument(help="Programme payload JSON file")],
) -> None:
    """
    Validate a programme payload JSON file and display it.
    """
    try:
        payload = json_to_program(path.read_text(encoding="utf-8"))
    except OSError as e:
        views.print_error(f"Cannot read {path}: {e.strerror or e}")
        raise typer.Exit(1)
    except UnicodeDecodeError:
        views.print_error(f"Cannot read {path}: not a UTF-8 text file")
        raise typer.Exit(1)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_payload(payload)
    views.print_info(f"{payload.exercise_count} exercises")
