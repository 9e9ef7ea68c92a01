"""In-memory note collection with write-through persistence."""

from __future__ import annotations

import threading
from typing import Callable, Iterable, List, Optional, Protocol

from ..logger import configure_logging
from .models import Note

_LOG = configure_logging()

NotesListener = Callable[[List[Note]], None]

FIRST_ID = 1


def move_target(notes: List[Note], position: int, offset: int, pin_first: bool) -> Optional[int]:
    """Index of the listed note ``position`` swaps with, or None if the move would not show.

    With pin-first ordering a note can only change places with a neighbour of
    the same pinned state.
    """
    target = position + offset
    if not (0 <= position < len(notes) and 0 <= target < len(notes)):
        return None
    if pin_first and notes[target].pinned != notes[position].pinned:
        return None
    return target


class NoteBackend(Protocol):
    def load(self) -> List[Note]:
        ...

    def save(self, notes: Iterable[Note]) -> None:
        ...


class NoteStore:
    """Sole owner of the note collection.

    Every operation runs under one re-entrant lock: the mutation, the disk write
    and the listener callbacks for a call complete before the next call starts.
    Listeners are handed copies, in the same order ``list_notes`` returns.
    """

    def __init__(self, storage: NoteBackend, *, pin_first: bool = True) -> None:
        self._storage = storage
        self.pin_first = pin_first
        self._lock = threading.RLock()
        self._listeners: List[NotesListener] = []
        self._notes: List[Note] = list(storage.load())
        self._next_id = max((note.id for note in self._notes), default=FIRST_ID - 1) + 1

    @property
    def next_id(self) -> int:
        with self._lock:
            return self._next_id

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------
    def add_listener(self, listener: NotesListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: NotesListener) -> None:
        with self._lock:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def list_notes(self) -> List[Note]:
        with self._lock:
            return self._snapshot()

    def add_note(self, content: str) -> Note:
        with self._lock:
            note = Note(id=self._next_id, content=content, pinned=False)
            self._next_id += 1
            self._notes.append(note)
            _LOG.info("Added note %s", note.id)
            self._commit()
            return note.copy()

    def delete_note(self, note_id: int) -> None:
        with self._lock:
            before = len(self._notes)
            self._notes = [note for note in self._notes if note.id != note_id]
            if len(self._notes) == before:
                _LOG.debug("Delete requested for unknown note %s", note_id)
            else:
                _LOG.info("Deleted note %s", note_id)
            self._commit()

    def toggle_pin(self, note_id: int) -> None:
        with self._lock:
            note = self._find(note_id)
            if note is None:
                _LOG.debug("Pin toggle requested for unknown note %s", note_id)
            else:
                note.pinned = not note.pinned
                _LOG.info("Note %s pinned=%s", note_id, note.pinned)
            self._commit()

    def reorder_notes(self, ordered_ids: Iterable[int]) -> None:
        with self._lock:
            remaining = list(self._notes)
            reordered: List[Note] = []
            for note_id in ordered_ids:
                for index, note in enumerate(remaining):
                    if note.id == note_id:
                        reordered.append(remaining.pop(index))
                        break
            reordered.extend(remaining)
            self._notes = reordered
            _LOG.info("Reordered %s notes", len(reordered))
            self._commit()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _find(self, note_id: int) -> Optional[Note]:
        for note in self._notes:
            if note.id == note_id:
                return note
        return None

    def _snapshot(self) -> List[Note]:
        notes = [note.copy() for note in self._notes]
        if self.pin_first:
            # sorted() is stable, so each group keeps collection order
            notes = sorted(notes, key=lambda note: not note.pinned)
        return notes

    def _commit(self) -> None:
        try:
            self._storage.save(self._notes)
        except (OSError, ValueError) as exc:
            _LOG.error("Failed to save notes; in-memory changes are not on disk: %s", exc)
        self._emit(self._snapshot())

    def _emit(self, notes: List[Note]) -> None:
        for listener in list(self._listeners):
            try:
                listener([note.copy() for note in notes])
            except Exception:
                _LOG.exception("Notes listener %r failed", listener)


__all__ = ["FIRST_ID", "NoteBackend", "NoteStore", "NotesListener", "move_target"]
