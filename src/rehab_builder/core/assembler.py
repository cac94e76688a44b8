"""
Program assembler.

Takes a read-only snapshot of the exercise list together with the program
form fields and produces the immutable ProgramPayload sent on save.
"""

from typing import Iterable

from .config import DEFAULT_BREAK_INTERVAL, DEFAULT_FREQUENCY, MIN_BREAK_INTERVAL, MIN_FREQUENCY
from .models import ExerciseEntry, ProgramPayload, ProgramSchedule


class ProgramValidationError(Exception):
    """Raised when a program cannot be submitted (e.g. it has no name)."""

    pass


def assemble_program(
    name: str,
    exercises: Iterable[ExerciseEntry],
    schedule: ProgramSchedule | None = None,
    therapist_notes: str = "",
) -> ProgramPayload:
    """
    Build the persistable payload for a program.

    Only the name is validated.  Frequency below 1 is raised to 1 and a
    negative break interval to 0; selected days and notes pass through
    as given.

    Args:
        name: Program name (must contain a non-whitespace character)
        exercises: Current exercise list snapshot, in display order
        schedule: Days / frequency / break interval; defaults when None
        therapist_notes: Free-text notes

    Returns:
        ProgramPayload

    Raises:
        ProgramValidationError: If name is empty
    """
    if not name or not name.strip():
        raise ProgramValidationError("Please enter a program name")

    if schedule is None:
        schedule = ProgramSchedule(frequency=DEFAULT_FREQUENCY, break_interval=DEFAULT_BREAK_INTERVAL)

    return ProgramPayload(
        name=name,
        exercises=tuple(exercises),
        frequency=max(MIN_FREQUENCY, schedule.frequency),
        break_interval=max(MIN_BREAK_INTERVAL, schedule.break_interval),
        selected_days=tuple(schedule.selected_days),
        therapist_notes=therapist_notes or "",
    )
