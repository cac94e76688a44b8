"""
Data models for rehab-builder.

Exercise entries are immutable snapshots: the list store produces a
replaced copy for every field change, so a snapshot handed to a renderer
never changes underneath it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal

from .config import EQUIPMENT, SIDES, STAGES

Side = Literal["left", "right", "both"]
Equipment = Literal["dumbbell", "bodyweight", "machine"]
Stage = str  # one of config.STAGES


class EntryField(str, Enum):
    """Editable fields of an exercise entry, keyed by their wire names."""

    NAME = "name"
    SETS = "sets"
    REPS = "reps"
    HOLD_TIME = "holdTime"
    WEIGHT = "weight"
    SIDE = "side"
    STAGE = "stage"
    EQUIPMENT = "equipment"

    @property
    def attribute(self) -> str:
        """Dataclass attribute backing this field."""
        return _FIELD_ATTRIBUTES[self]

    @property
    def is_numeric(self) -> bool:
        return self in NUMERIC_FIELDS

    @classmethod
    def parse(cls, value: "EntryField | str") -> "EntryField | None":
        """
        Resolve a field from its enum, wire name or attribute name.

        Returns None for anything that does not name a field.
        """
        if isinstance(value, EntryField):
            return value
        if not isinstance(value, str):
            return None
        for member in cls:
            if value in (member.value, member.attribute):
                return member
        return None


_FIELD_ATTRIBUTES: dict[EntryField, str] = {
    EntryField.NAME: "name",
    EntryField.SETS: "sets",
    EntryField.REPS: "reps",
    EntryField.HOLD_TIME: "hold_time",
    EntryField.WEIGHT: "weight",
    EntryField.SIDE: "side",
    EntryField.STAGE: "stage",
    EntryField.EQUIPMENT: "equipment",
}

NUMERIC_FIELDS: frozenset[EntryField] = frozenset(
    {EntryField.SETS, EntryField.REPS, EntryField.HOLD_TIME, EntryField.WEIGHT}
)

# Allowed values for the enumerated string fields
CHOICE_FIELDS: dict[EntryField, tuple[str, ...]] = {
    EntryField.SIDE: SIDES,
    EntryField.STAGE: STAGES,
    EntryField.EQUIPMENT: EQUIPMENT,
}


@dataclass(frozen=True)
class ExerciseEntry:
    """
    One configured exercise within a program.

    ``id`` is the stable reorder key and never changes for the lifetime of
    the entry.  Numeric dosage fields are non-negative integers.
    """

    id: str
    name: str
    sets: int = 0
    reps: int = 0
    hold_time: int = 0  # seconds
    weight: int = 0
    side: Side = "both"
    stage: Stage = "Stage 1"
    equipment: Equipment = "bodyweight"

    def __post_init__(self) -> None:
        """Validate entry data."""
        if not isinstance(self.id, str) or not self.id:
            raise ValueError("id must be a non-empty string")
        for f in NUMERIC_FIELDS:
            value = getattr(self, f.attribute)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{f.attribute} must be an integer, got {value!r}")
            if value < 0:
                raise ValueError(f"{f.attribute} must be non-negative")
        for f, allowed in CHOICE_FIELDS.items():
            value = getattr(self, f.attribute)
            if value not in allowed:
                raise ValueError(f"Invalid {f.attribute}: {value!r}. Must be one of {allowed}")

    @property
    def is_unilateral(self) -> bool:
        """True when the entry trains one side only (left or right)."""
        return self.side != "both"

    def get(self, entry_field: EntryField) -> Any:
        return getattr(self, entry_field.attribute)


@dataclass(frozen=True)
class ExerciseTemplate:
    """A catalog-provided default configuration for an exercise."""

    id: str
    name: str
    default_sets: int = 0
    default_reps: int = 0
    default_hold_time: int = 0


@dataclass(frozen=True)
class Category:
    """A catalog category grouping exercise templates."""

    id: str
    name: str


@dataclass
class ProgramSchedule:
    """
    When and how often the program is performed.

    ``selected_days`` keeps the order in which days were picked.
    """

    selected_days: list[str] = field(default_factory=list)
    frequency: int = 1  # sessions per day
    break_interval: int = 30  # minutes between sessions

    def toggle_day(self, day: str) -> None:
        """Add the day if absent, remove it if present."""
        if day in self.selected_days:
            self.selected_days.remove(day)
        else:
            self.selected_days.append(day)


@dataclass(frozen=True)
class ProgramPayload:
    """
    Immutable persistable program: ordered exercises plus schedule and notes.
    """

    name: str
    exercises: tuple[ExerciseEntry, ...]
    frequency: int
    break_interval: int
    selected_days: tuple[str, ...] = ()
    therapist_notes: str = ""

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("Program name must not be empty")

    @property
    def exercise_count(self) -> int:
        return len(self.exercises)


@dataclass(frozen=True)
class SavedProgram:
    """Program record returned by the programs API after saving."""

    id: str
    name: str
    raw: dict[str, Any] = field(default_factory=dict, compare=False)
