"""
Tests for the program assembler and the editing session save flow.
"""

import asyncio

import pytest

from rehab_builder.core.assembler import ProgramValidationError, assemble_program
from rehab_builder.core.models import ExerciseEntry, ExerciseTemplate, ProgramSchedule, SavedProgram
from rehab_builder.core.session import EditingSession, SaveInProgressError
from rehab_builder.io.api_client import CatalogAPIError

SQUAT = ExerciseTemplate(id="t1", name="Squat", default_sets=3, default_reps=10)


class RecordingSaver:
    """Saver that records payloads and can be told to fail or block."""

    def __init__(self, fail: Exception | None = None):
        self.payloads = []
        self.fail = fail
        self.release: asyncio.Event | None = None

    async def save_program(self, payload):
        self.payloads.append(payload)
        if self.release is not None:
            await self.release.wait()
        if self.fail is not None:
            raise self.fail
        return SavedProgram(id="p-1", name=payload.name)


def _counter():
    n = 0

    def next_id() -> str:
        nonlocal n
        n += 1
        return f"exercise-{n}"

    return next_id


class TestAssembleProgram:
    def test_defaults(self):
        payload = assemble_program("Knee", [])
        assert payload.frequency == 1
        assert payload.break_interval == 30
        assert payload.selected_days == ()
        assert payload.therapist_notes == ""

    @pytest.mark.parametrize("name", ["", "   "])
    def test_empty_name_blocks(self, name):
        with pytest.raises(ProgramValidationError, match="program name"):
            assemble_program(name, [])

    def test_schedule_floors(self):
        payload = assemble_program(
            "Knee", [], ProgramSchedule(frequency=0, break_interval=-5)
        )
        assert payload.frequency == 1
        assert payload.break_interval == 0

    def test_list_is_snapshotted_not_mutated(self):
        entries = [ExerciseEntry(id="a", name="A"), ExerciseEntry(id="b", name="B")]
        payload = assemble_program("Knee", entries, therapist_notes="note")
        entries.pop()
        assert [e.id for e in payload.exercises] == ["a", "b"]
        assert payload.therapist_notes == "note"

    def test_days_pass_through_in_order(self):
        schedule = ProgramSchedule(selected_days=["Friday", "Monday"])
        assert assemble_program("x", [], schedule).selected_days == ("Friday", "Monday")


class TestEditingSession:
    def test_add_template_and_blank(self):
        session = EditingSession(RecordingSaver(), id_factory=_counter())
        session.add_template(SQUAT)
        session.add_blank()
        assert [e.id for e in session.entries] == ["exercise-1", "exercise-2"]
        assert session.entries[0].name == "Squat"
        assert session.entries[1].name == ""

    def test_schedule_defaults_from_settings(self):
        session = EditingSession(RecordingSaver(), default_frequency=3, default_break_interval=60)
        assert (session.schedule.frequency, session.schedule.break_interval) == (3, 60)

    @pytest.mark.asyncio
    async def test_save_sends_payload_and_resets(self):
        saver = RecordingSaver()
        session = EditingSession(saver, id_factory=_counter())
        session.name = "Knee"
        session.therapist_notes = "Slow tempo"
        session.schedule.toggle_day("Tuesday")
        session.add_template(SQUAT)

        saved = await session.save()

        assert saved.id == "p-1"
        sent = saver.payloads[0]
        assert sent.name == "Knee"
        assert [e.name for e in sent.exercises] == ["Squat"]
        assert sent.selected_days == ("Tuesday",)
        assert session.entries == ()
        assert session.name == ""
        assert session.therapist_notes == ""
        assert session.schedule.selected_days == []
        assert not session.saving

    @pytest.mark.asyncio
    async def test_empty_name_never_reaches_saver(self):
        saver = RecordingSaver()
        session = EditingSession(saver)
        session.add_template(SQUAT)
        with pytest.raises(ProgramValidationError):
            await session.save()
        assert saver.payloads == []
        assert len(session.entries) == 1

    @pytest.mark.asyncio
    async def test_failed_save_keeps_state(self):
        saver = RecordingSaver(fail=CatalogAPIError("boom", 500))
        session = EditingSession(saver)
        session.name = "Knee"
        session.add_template(SQUAT)
        before = session.entries

        with pytest.raises(CatalogAPIError):
            await session.save()

        assert session.entries is before
        assert session.name == "Knee"
        assert not session.saving

        saver.fail = None
        await session.save()
        assert len(saver.payloads) == 2

    @pytest.mark.asyncio
    async def test_second_save_while_pending_is_refused(self):
        saver = RecordingSaver()
        saver.release = asyncio.Event()
        session = EditingSession(saver)
        session.name = "Knee"

        first = asyncio.create_task(session.save())
        await asyncio.sleep(0)
        assert session.saving

        with pytest.raises(SaveInProgressError):
            await session.save()

        saver.release.set()
        await first
        assert len(saver.payloads) == 1
        assert not session.saving

    def test_clear_all(self):
        session = EditingSession(RecordingSaver())
        session.name = "Knee"
        session.selected_category = "c1"
        session.schedule.frequency = 4
        session.add_blank()
        session.clear_all()
        assert session.entries == ()
        assert session.name == ""
        assert session.selected_category is None
        assert session.schedule.frequency == 1
