"""
JSON serialization for program data models.

Handles conversion between dataclasses and the camelCase JSON dicts used by
the programs API.  Exercise entries serialize every field verbatim,
including ``id``.
"""

import json
from typing import Any

from ..core.config import EQUIPMENT, SIDES, STAGES
from ..core.models import (
    Category,
    ExerciseEntry,
    ExerciseTemplate,
    ProgramPayload,
    SavedProgram,
)


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


def validate_non_negative_int(value: Any, name: str) -> int:
    """
    Validate that a value is a non-negative integer.

    Args:
        value: Value to validate
        name: Name for error message

    Returns:
        The value as int

    Raises:
        ValidationError: If value is not an integer or is negative
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise ValidationError(f"{name} must be non-negative, got {value}")
    return value


def validate_choice(value: Any, allowed: tuple[str, ...], name: str) -> str:
    """
    Validate that a value is one of an enumerated set.

    Raises:
        ValidationError: If value is not allowed
    """
    if value not in allowed:
        raise ValidationError(f"Invalid {name}: {value!r}. Must be one of {allowed}")
    return value


def validate_non_empty(value: Any, name: str) -> str:
    """
    Validate that a value is a non-empty string.

    Raises:
        ValidationError: If value is empty or not a string
    """
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Invalid {name}: {value!r}. Must be a non-empty string.")
    return value


def _require(data: Any, key: str, what: str) -> Any:
    if not isinstance(data, dict):
        raise ValidationError(f"{what} must be an object, got {type(data).__name__}")
    if key not in data:
        raise ValidationError(f"{what} is missing '{key}'")
    return data[key]


def _opaque_id(value: Any, name: str) -> str:
    """Ids arrive as strings or numbers depending on the backend; keep them as str."""
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ValidationError(f"Invalid {name}: {value!r}")
    return validate_non_empty(str(value), name)


# ---------------------------------------------------------------------------
# Exercise entries
# ---------------------------------------------------------------------------


def entry_to_dict(entry: ExerciseEntry) -> dict[str, Any]:
    """
    Convert ExerciseEntry to JSON-compatible dict.

    Args:
        entry: ExerciseEntry to convert

    Returns:
        Dict representation with wire (camelCase) keys
    """
    return {
        "id": entry.id,
        "name": entry.name,
        "sets": entry.sets,
        "reps": entry.reps,
        "holdTime": entry.hold_time,
        "weight": entry.weight,
        "side": entry.side,
        "stage": entry.stage,
        "equipment": entry.equipment,
    }


def dict_to_entry(data: dict[str, Any]) -> ExerciseEntry:
    """
    Convert dict to ExerciseEntry.

    Args:
        data: Dict representation

    Returns:
        ExerciseEntry instance

    Raises:
        ValidationError: If data is invalid
    """
    entry_id = _opaque_id(_require(data, "id", "exercise"), "id")
    name = data.get("name", "")
    if not isinstance(name, str):
        raise ValidationError(f"Invalid name: {name!r}")

    return ExerciseEntry(
        id=entry_id,
        name=name,
        sets=validate_non_negative_int(data.get("sets", 0), "sets"),
        reps=validate_non_negative_int(data.get("reps", 0), "reps"),
        hold_time=validate_non_negative_int(data.get("holdTime", 0), "holdTime"),
        weight=validate_non_negative_int(data.get("weight", 0), "weight"),
        side=validate_choice(data.get("side", "both"), SIDES, "side"),  # type: ignore[arg-type]
        stage=validate_choice(data.get("stage", STAGES[0]), STAGES, "stage"),
        equipment=validate_choice(data.get("equipment", "bodyweight"), EQUIPMENT, "equipment"),  # type: ignore[arg-type]
    )


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


def dict_to_category(data: dict[str, Any]) -> Category:
    """
    Convert an API category dict ``{id, name, ...}`` to Category.

    Extra keys (some backends embed the category's exercises) are ignored.

    Raises:
        ValidationError: If data is invalid
    """
    return Category(
        id=_opaque_id(_require(data, "id", "category"), "category id"),
        name=str(_require(data, "name", "category")),
    )


def dict_to_template(data: dict[str, Any]) -> ExerciseTemplate:
    """
    Convert an API template dict to ExerciseTemplate.

    Default dosage values are taken as given, negatives included; the
    catalog adapter clamps them when seeding an entry.

    Raises:
        ValidationError: If id/name are missing or a default is not a whole number
    """
    defaults: dict[str, int] = {}
    for key in ("defaultSets", "defaultReps", "defaultHoldTime"):
        value = data.get(key, 0) if isinstance(data, dict) else 0
        if value is None:
            value = 0
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValidationError(f"template {key} must be a number, got {value!r}")
        # NaN, Infinity and fractions are all rejected here
        if isinstance(value, float) and not value.is_integer():
            raise ValidationError(f"template {key} must be a whole number, got {value!r}")
        defaults[key] = int(value)

    return ExerciseTemplate(
        id=_opaque_id(_require(data, "id", "template"), "template id"),
        name=str(_require(data, "name", "template")),
        default_sets=defaults["defaultSets"],
        default_reps=defaults["defaultReps"],
        default_hold_time=defaults["defaultHoldTime"],
    )


# ---------------------------------------------------------------------------
# Programs
# ---------------------------------------------------------------------------


def program_to_dict(payload: ProgramPayload) -> dict[str, Any]:
    """
    Convert ProgramPayload to the save request body.

    Args:
        payload: Program to convert

    Returns:
        Dict representation
    """
    return {
        "name": payload.name,
        "exercises": [entry_to_dict(e) for e in payload.exercises],
        "frequency": payload.frequency,
        "breakInterval": payload.break_interval,
        "selectedDays": list(payload.selected_days),
        "therapistNotes": payload.therapist_notes,
    }


def dict_to_program(data: dict[str, Any]) -> ProgramPayload:
    """
    Convert a save request body back to ProgramPayload.

    Raises:
        ValidationError: If data is invalid
    """
    name = validate_non_empty(_require(data, "name", "program"), "program name")

    raw_exercises = data.get("exercises", [])
    if not isinstance(raw_exercises, list):
        raise ValidationError("exercises must be a list")
    exercises: list[ExerciseEntry] = []
    for i, raw in enumerate(raw_exercises, 1):
        try:
            exercises.append(dict_to_entry(raw))
        except (ValidationError, ValueError) as e:
            raise ValidationError(f"Exercise #{i}: {e}") from e

    days = data.get("selectedDays", [])
    if not isinstance(days, list) or not all(isinstance(d, str) for d in days):
        raise ValidationError("selectedDays must be a list of strings")

    notes = data.get("therapistNotes", "") or ""
    if not isinstance(notes, str):
        raise ValidationError("therapistNotes must be a string")

    return ProgramPayload(
        name=name,
        exercises=tuple(exercises),
        frequency=validate_non_negative_int(data.get("frequency", 1), "frequency"),
        break_interval=validate_non_negative_int(data.get("breakInterval", 30), "breakInterval"),
        selected_days=tuple(days),
        therapist_notes=notes,
    )


def dict_to_saved_program(data: dict[str, Any]) -> SavedProgram:
    """
    Convert the save response ``{id, name, ...}`` to SavedProgram.

    Raises:
        ValidationError: If id is missing
    """
    return SavedProgram(
        id=_opaque_id(_require(data, "id", "saved program"), "program id"),
        name=str(data.get("name", "")),
        raw=dict(data),
    )


def program_to_json(payload: ProgramPayload, indent: int | None = 2) -> str:
    """Serialize a program payload to a JSON document."""
    return json.dumps(program_to_dict(payload), indent=indent)


def json_to_program(text: str) -> ProgramPayload:
    """
    Deserialize a JSON document to a ProgramPayload.

    Raises:
        ValidationError: If JSON is invalid or data validation fails
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON: {e}") from e

    return dict_to_program(data)
