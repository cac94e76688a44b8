"""
Program editing session.

Binds one exercise list store to the program form (name, schedule, notes,
selected category) and to a program-saving backend.  Saving is the only
asynchronous step; at most one save is in flight at a time.
"""

import logging
from typing import Protocol

from .assembler import assemble_program
from .catalog import IdFactory, blank_entry, new_entry_id, template_to_entry
from .config import DEFAULT_BREAK_INTERVAL, DEFAULT_FREQUENCY
from .models import ExerciseTemplate, ProgramPayload, ProgramSchedule, SavedProgram
from .store import Entries, ExerciseListStore

logger = logging.getLogger(__name__)


class ProgramSaver(Protocol):
    async def save_program(self, payload: ProgramPayload) -> SavedProgram: ...


class SaveInProgressError(Exception):
    """Raised when a save is requested while another one is pending."""

    pass


class EditingSession:
    """
    State of one program being edited.

    A failed save leaves the list and the form untouched so the user can
    retry.  A successful save resets the session, like "Clear All".
    """

    def __init__(
        self,
        saver: ProgramSaver,
        default_frequency: int = DEFAULT_FREQUENCY,
        default_break_interval: int = DEFAULT_BREAK_INTERVAL,
        id_factory: IdFactory = new_entry_id,
    ):
        self.saver = saver
        self.store = ExerciseListStore()
        self._default_frequency = default_frequency
        self._default_break_interval = default_break_interval
        self._id_factory = id_factory
        self.name = ""
        self.therapist_notes = ""
        self.selected_category: str | None = None
        self.schedule = self._fresh_schedule()
        self._saving = False

    def _fresh_schedule(self) -> ProgramSchedule:
        return ProgramSchedule(
            selected_days=[],
            frequency=self._default_frequency,
            break_interval=self._default_break_interval,
        )

    @property
    def saving(self) -> bool:
        """True while a save request is in flight."""
        return self._saving

    @property
    def entries(self) -> Entries:
        return self.store.entries

    def add_template(self, template: ExerciseTemplate) -> Entries:
        """Append a new entry seeded from a catalog template."""
        return self.store.append(template_to_entry(template, self._id_factory))

    def add_blank(self) -> Entries:
        """Append an empty entry for manual editing."""
        return self.store.append(blank_entry(self._id_factory))

    def build_payload(self) -> ProgramPayload:
        """
        Assemble the current state into a payload without saving.

        Raises:
            ProgramValidationError: If the program has no name
        """
        return assemble_program(
            self.name,
            self.store.entries,
            self.schedule,
            self.therapist_notes,
        )

    async def save(self) -> SavedProgram:
        """
        Validate, then send the program to the saver.

        Raises:
            SaveInProgressError: If another save is still pending
            ProgramValidationError: If the program has no name (nothing is sent)
            CatalogClientError: From the saver when the request fails
        """
        if self._saving:
            raise SaveInProgressError("A save is already in progress")

        payload = self.build_payload()

        self._saving = True
        try:
            saved = await self.saver.save_program(payload)
        finally:
            self._saving = False

        logger.debug("Program %r saved with %d exercises", payload.name, payload.exercise_count)
        self.clear_all()
        return saved

    def clear_all(self) -> None:
        """Reset the whole program: list, name, category, notes and schedule."""
        self.store.clear()
        self.name = ""
        self.selected_category = None
        self.therapist_notes = ""
        self.schedule = self._fresh_schedule()
