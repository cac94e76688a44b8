"""
Exercise list store: the ordered exercise entries of one editing session.

Every mutation is available twice:

* as a pure function taking a tuple of entries and returning a new tuple
  (``append``, ``insert_after``, ``update_field``, ...), and
* as a method on ExerciseListStore, which swaps its current snapshot and
  notifies subscribers.

All operations are total.  Bad indexes and invalid values degrade to a
no-op that returns the *same* tuple object, so callers can detect "nothing
changed" with an identity check and skip re-rendering.  Negative indexes
are out of range; Python's from-the-end indexing never applies.
"""

from dataclasses import replace
from typing import Any, Callable, Iterable, Iterator

from .config import OPPOSITE_SIDE
from .models import CHOICE_FIELDS, EntryField, ExerciseEntry

Entries = tuple[ExerciseEntry, ...]
Listener = Callable[[Entries], None]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _in_range(entries: Entries, index: Any) -> bool:
    return _is_int(index) and 0 <= index < len(entries)


def _unique_id(base: str, taken: set[str]) -> str:
    """Return ``base`` or the first free ``base-N`` (N = 2, 3, ...)."""
    candidate = base
    n = 2
    while candidate in taken:
        candidate = f"{base}-{n}"
        n += 1
    return candidate


def _admit(entries: Entries, entry: ExerciseEntry) -> ExerciseEntry:
    """Re-key an incoming entry whose id is already in the list."""
    taken = {e.id for e in entries}
    if entry.id not in taken:
        return entry
    return replace(entry, id=_unique_id(entry.id, taken))


# ---------------------------------------------------------------------------
# Pure list operations
# ---------------------------------------------------------------------------


def append(entries: Entries, entry: ExerciseEntry) -> Entries:
    """Add ``entry`` at the end of the list."""
    return entries + (_admit(entries, entry),)


def insert_after(entries: Entries, index: int, entry: ExerciseEntry) -> Entries:
    """
    Insert ``entry`` immediately after position ``index``.

    ``index`` is clamped to [-1, len - 1]: -1 (or anything lower) inserts at
    the start, anything past the end appends.
    """
    if not _is_int(index):
        return entries
    position = min(max(index, -1), len(entries) - 1) + 1
    entry = _admit(entries, entry)
    return entries[:position] + (entry,) + entries[position:]


def update_field(
    entries: Entries,
    index: int,
    entry_field: EntryField | str,
    value: Any,
) -> Entries:
    """
    Set one field of the entry at ``index``.

    Numeric fields accept non-negative ints only; a negative (or non-int)
    value is rejected and the list is returned unchanged.  ``name`` accepts
    any string.  ``side``, ``stage`` and ``equipment`` accept their
    enumerated values only.
    """
    resolved = EntryField.parse(entry_field)
    if resolved is None or not _in_range(entries, index):
        return entries

    if resolved.is_numeric:
        if not _is_int(value) or value < 0:
            return entries
    elif resolved in CHOICE_FIELDS:
        if value not in CHOICE_FIELDS[resolved]:
            return entries
    elif not isinstance(value, str):
        return entries

    current = entries[index]
    if current.get(resolved) == value:
        return entries
    updated = replace(current, **{resolved.attribute: value})
    return entries[:index] + (updated,) + entries[index + 1:]


def step_field(
    entries: Entries,
    index: int,
    entry_field: EntryField | str,
    delta: int,
) -> Entries:
    """
    Add ``delta`` to a numeric field, clamping the result at 0.

    Backs the -/+ stepper buttons: decrementing 0 stays at 0.
    """
    resolved = EntryField.parse(entry_field)
    if resolved is None or not resolved.is_numeric or not _is_int(delta):
        return entries
    if not _in_range(entries, index):
        return entries
    current = entries[index].get(resolved)
    return update_field(entries, index, resolved, max(0, current + delta))


def duplicate_for_opposite_side(entries: Entries, index: int) -> Entries:
    """
    Insert a copy of a unilateral entry for the other side, right after it.

    The copy's id is ``<source id>-<new side>`` (suffixed with -2, -3, ...
    if already taken).  Bilateral ("both") entries have no opposite side;
    for them this is a no-op.  The two entries are independent afterwards.
    """
    if not _in_range(entries, index):
        return entries
    source = entries[index]
    opposite = OPPOSITE_SIDE.get(source.side)
    if opposite is None:
        return entries
    taken = {e.id for e in entries}
    copy = replace(source, id=_unique_id(f"{source.id}-{opposite}", taken), side=opposite)
    return entries[: index + 1] + (copy,) + entries[index + 1:]


def remove(entries: Entries, index: int) -> Entries:
    """Delete the entry at ``index``."""
    if not _in_range(entries, index):
        return entries
    return entries[:index] + entries[index + 1:]


def reorder(entries: Entries, from_index: int, to_index: int) -> Entries:
    """
    Move the entry at ``from_index`` so it ends up at ``to_index``.

    Entries in between shift by one slot (move-and-shift, not swap):
    [A, B, C] with reorder(0, 2) gives [B, C, A].
    """
    if from_index == to_index:
        return entries
    if not _in_range(entries, from_index) or not _in_range(entries, to_index):
        return entries
    items = list(entries)
    moved = items.pop(from_index)
    items.insert(to_index, moved)
    return tuple(items)


def index_of(entries: Entries, entry_id: str) -> int | None:
    """Return the position of the entry with ``entry_id``, or None."""
    for i, entry in enumerate(entries):
        if entry.id == entry_id:
            return i
    return None


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class ExerciseListStore:
    """
    Sole owner of the ordered exercise list for one editing session.

    Mutating methods return the resulting snapshot.  Subscribers are called
    with the new snapshot only when a mutation actually changed the list.
    """

    def __init__(self, entries: Iterable[ExerciseEntry] = ()):
        self._entries: Entries = ()
        for entry in entries:
            self._entries = append(self._entries, entry)
        self._listeners: list[Listener] = []

    # -- read -------------------------------------------------------------

    @property
    def entries(self) -> Entries:
        """Current immutable snapshot."""
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ExerciseEntry]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> ExerciseEntry:
        return self._entries[index]

    def index_of(self, entry_id: str) -> int | None:
        return index_of(self._entries, entry_id)

    # -- change notification ------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, snapshot: Entries) -> Entries:
        if snapshot is self._entries:
            return snapshot
        self._entries = snapshot
        for listener in list(self._listeners):
            listener(snapshot)
        return snapshot

    # -- write --------------------------------------------------------------

    def append(self, entry: ExerciseEntry) -> Entries:
        return self._commit(append(self._entries, entry))

    def insert_after(self, index: int, entry: ExerciseEntry) -> Entries:
        return self._commit(insert_after(self._entries, index, entry))

    def update_field(self, index: int, entry_field: EntryField | str, value: Any) -> Entries:
        return self._commit(update_field(self._entries, index, entry_field, value))

    def step_field(self, index: int, entry_field: EntryField | str, delta: int) -> Entries:
        return self._commit(step_field(self._entries, index, entry_field, delta))

    def duplicate_for_opposite_side(self, index: int) -> Entries:
        return self._commit(duplicate_for_opposite_side(self._entries, index))

    def remove(self, index: int) -> Entries:
        return self._commit(remove(self._entries, index))

    def reorder(self, from_index: int, to_index: int) -> Entries:
        return self._commit(reorder(self._entries, from_index, to_index))

    def on_reorder(self, from_index: int, to_index: int | None) -> Entries:
        """
        Handle a completed drag gesture.

        A gesture dropped outside the list (``to_index`` None) or back on its
        own slot does not reach ``reorder``.
        """
        if to_index is None or from_index == to_index:
            return self._entries
        return self.reorder(from_index, to_index)

    def clear(self) -> Entries:
        """Discard every entry."""
        if not self._entries:
            return self._entries
        return self._commit(())
