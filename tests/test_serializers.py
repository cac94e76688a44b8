"""
Tests for JSON serialization of entries, catalog records and programs.
"""

import json

import pytest

from rehab_builder.core.assembler import assemble_program
from rehab_builder.core.models import ExerciseEntry, ProgramSchedule
from rehab_builder.io.serializers import (
    ValidationError,
    dict_to_category,
    dict_to_entry,
    dict_to_program,
    dict_to_saved_program,
    dict_to_template,
    entry_to_dict,
    json_to_program,
    program_to_dict,
    program_to_json,
)


@pytest.fixture
def entries() -> list[ExerciseEntry]:
    return [
        ExerciseEntry(id="exercise-1", name="Squat", sets=3, reps=10),
        ExerciseEntry(
            id="exercise-2",
            name="Lunge",
            sets=2,
            reps=8,
            hold_time=0,
            weight=5,
            side="left",
            stage="Stage 2",
            equipment="dumbbell",
        ),
        ExerciseEntry(id="exercise-2-right", name="Lunge", sets=2, reps=8, weight=5, side="right"),
        ExerciseEntry(id="exercise-3", name="Plank", hold_time=30, equipment="machine", stage="Stage 3"),
    ]


class TestEntrySerialization:
    def test_wire_keys(self, entries):
        d = entry_to_dict(entries[1])
        assert d == {
            "id": "exercise-2",
            "name": "Lunge",
            "sets": 2,
            "reps": 8,
            "holdTime": 0,
            "weight": 5,
            "side": "left",
            "stage": "Stage 2",
            "equipment": "dumbbell",
        }

    def test_missing_optional_fields_use_defaults(self):
        entry = dict_to_entry({"id": "e1"})
        assert entry.name == ""
        assert entry.side == "both"
        assert entry.sets == 0

    def test_numeric_id_kept_as_string(self):
        assert dict_to_entry({"id": 17, "name": "x"}).id == "17"

    @pytest.mark.parametrize(
        "bad",
        [
            {"name": "no id"},
            {"id": "e1", "sets": -1},
            {"id": "e1", "reps": "ten"},
            {"id": "e1", "side": "up"},
            {"id": "e1", "equipment": "band"},
            {"id": "e1", "name": 5},
            "not a dict",
        ],
    )
    def test_invalid_entry(self, bad):
        with pytest.raises(ValidationError):
            dict_to_entry(bad)


class TestCatalogParsing:
    def test_category_ignores_extra_keys(self):
        category = dict_to_category({"id": 4, "name": "Knee", "exercises": []})
        assert (category.id, category.name) == ("4", "Knee")

    def test_template(self):
        template = dict_to_template(
            {"id": "t1", "name": "Squat", "defaultSets": 3, "defaultReps": 10, "defaultHoldTime": 0}
        )
        assert (template.default_sets, template.default_reps, template.default_hold_time) == (3, 10, 0)

    def test_template_negative_defaults_pass_through(self):
        template = dict_to_template({"id": "t1", "name": "x", "defaultSets": -1})
        assert template.default_sets == -1

    def test_template_missing_defaults(self):
        template = dict_to_template({"id": "t1", "name": "x", "defaultHoldTime": None})
        assert (template.default_sets, template.default_hold_time) == (0, 0)

    def test_template_bad_default(self):
        with pytest.raises(ValidationError):
            dict_to_template({"id": "t1", "name": "x", "defaultReps": "lots"})

    def test_template_whole_float_default(self):
        template = dict_to_template({"id": "t1", "name": "x", "defaultSets": 3.0})
        assert template.default_sets == 3

    @pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan"), 3.7])
    def test_template_non_integral_default(self, value):
        with pytest.raises(ValidationError, match="whole number"):
            dict_to_template({"id": "t1", "name": "x", "defaultSets": value})

    def test_template_infinity_from_json_body(self):
        data = json.loads('{"id": "t", "name": "S", "defaultSets": Infinity}')
        with pytest.raises(ValidationError):
            dict_to_template(data)

    def test_saved_program(self):
        saved = dict_to_saved_program({"id": "p1", "name": "Knee", "createdAt": "2026-01-01"})
        assert saved.id == "p1"
        assert saved.raw["createdAt"] == "2026-01-01"

    def test_saved_program_without_id(self):
        with pytest.raises(ValidationError):
            dict_to_saved_program({"name": "Knee"})


class TestProgramSerialization:
    def test_payload_keys(self, entries):
        payload = assemble_program(
            "Knee Rehab Programme",
            entries,
            ProgramSchedule(selected_days=["Monday", "Thursday"], frequency=2, break_interval=45),
            "Ice after",
        )
        d = program_to_dict(payload)
        assert set(d) == {
            "name",
            "exercises",
            "frequency",
            "breakInterval",
            "selectedDays",
            "therapistNotes",
        }
        assert d["breakInterval"] == 45
        assert d["selectedDays"] == ["Monday", "Thursday"]
        assert [e["id"] for e in d["exercises"]] == [e.id for e in entries]

    def test_round_trip_keeps_order_and_fields(self, entries):
        payload = assemble_program("Shoulder", entries)
        parsed = json_to_program(program_to_json(payload))

        assert len(parsed.exercises) == len(entries)
        assert list(parsed.exercises) == entries
        assert parsed == payload

    def test_round_trip_of_empty_list(self):
        payload = assemble_program("Empty", [])
        assert json_to_program(program_to_json(payload)).exercises == ()

    def test_compact_json(self, entries):
        text = program_to_json(assemble_program("x", entries), indent=None)
        assert "\n" not in text
        assert json.loads(text)["name"] == "x"

    def test_invalid_json(self):
        with pytest.raises(ValidationError, match="Invalid JSON"):
            json_to_program("{not json")

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            dict_to_program({"name": "  ", "exercises": []})

    def test_bad_exercise_reports_position(self):
        with pytest.raises(ValidationError, match="Exercise #2"):
            dict_to_program(
                {"name": "x", "exercises": [{"id": "a"}, {"id": "b", "weight": -4}]}
            )

    def test_bad_days(self):
        with pytest.raises(ValidationError):
            dict_to_program({"name": "x", "selectedDays": "Monday"})
