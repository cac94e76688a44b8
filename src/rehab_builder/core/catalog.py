"""
Template catalog adapter.

Turns catalog templates into fresh exercise entries and builds blank entries
for manual adds.  Both are pure apart from id generation, which can be
swapped out through the ``id_factory`` argument.
"""

from typing import Callable
from uuid import uuid4

from .config import DEFAULT_EQUIPMENT, DEFAULT_SIDE, DEFAULT_STAGE, DEFAULT_WEIGHT, ENTRY_ID_PREFIX
from .models import ExerciseEntry, ExerciseTemplate

IdFactory = Callable[[], str]


def new_entry_id() -> str:
    """Return a fresh, globally unique entry id such as ``exercise-3f9c0a1b2d4e``."""
    return f"{ENTRY_ID_PREFIX}-{uuid4().hex[:12]}"


def _non_negative_int(value: object) -> int:
    """Coerce a template default to a non-negative int (malformed → 0)."""
    if isinstance(value, bool):
        return 0
    try:
        number = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0
    return max(0, number)


def template_to_entry(
    template: ExerciseTemplate,
    id_factory: IdFactory = new_entry_id,
) -> ExerciseEntry:
    """
    Seed a new exercise entry from a catalog template.

    Dosage comes from the template defaults; negative defaults clamp to 0.
    Weight starts at 0, side at "both", stage and equipment at their defaults.

    Args:
        template: Catalog template to copy defaults from
        id_factory: Callable producing the new entry's id

    Returns:
        New ExerciseEntry
    """
    return ExerciseEntry(
        id=id_factory(),
        name=template.name or "",
        sets=_non_negative_int(template.default_sets),
        reps=_non_negative_int(template.default_reps),
        hold_time=_non_negative_int(template.default_hold_time),
        weight=DEFAULT_WEIGHT,
        side=DEFAULT_SIDE,  # type: ignore[arg-type]
        stage=DEFAULT_STAGE,
        equipment=DEFAULT_EQUIPMENT,  # type: ignore[arg-type]
    )


def blank_entry(id_factory: IdFactory = new_entry_id) -> ExerciseEntry:
    """Return an empty manual entry: no name, all numeric fields 0, defaults elsewhere."""
    return ExerciseEntry(
        id=id_factory(),
        name="",
        sets=0,
        reps=0,
        hold_time=0,
        weight=DEFAULT_WEIGHT,
        side=DEFAULT_SIDE,  # type: ignore[arg-type]
        stage=DEFAULT_STAGE,
        equipment=DEFAULT_EQUIPMENT,  # type: ignore[arg-type]
    )
