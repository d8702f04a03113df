"""
Note Store.

The process-wide table of post-it notes plus their expiry bookkeeping.
Every note lives for NOTE_TTL after creation and is then removed by two
cooperating mechanisms:

- a per-note expiry action armed on the scheduler at creation, and
- a sweep at the top of every read or mutation, so a note whose timer
  has not run yet is still never observed past its deadline.

Both mappings (`_notes` and `_timers`) are only touched under `_lock`, and
always together: every id in the note table has exactly one live handle.
Expiry callbacks take the same lock, so an operation and an expiry firing
never interleave.

Usage:
    from postit.backend.store.note_store import NoteStore

    store = NoteStore()
    note = store.create("Standup", "9am sync", "Ana")
    store.list_notes()
    store.update(note.id, description="9:30am sync")
    store.delete(note.id)
"""

import threading
import uuid
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, timedelta
from functools import partial
from typing import Any

from postit.backend.core.logging import get_logger
from postit.backend.core.utils import minutes_left, utc_now
from postit.backend.models.note import Note
from postit.backend.store.scheduler import (
    ExpiryHandle,
    ExpiryScheduler,
    ThreadingTimerScheduler,
)

logger = get_logger(__name__)

NOTE_TTL = timedelta(minutes=10)

BOARD_HEADING = "# Post-it Board"
EMPTY_BOARD = "_Empty_"


def new_note_id() -> str:
    """Short random id: the first 8 hex digits of a UUID4."""
    return uuid.uuid4().hex[:8]


def _clean(value: str | None) -> str:
    return (value or "").strip()


def render_board(notes: list[Note], now: datetime) -> str:
    """Render notes as the compact markdown listing handed to agents."""
    lines = [BOARD_HEADING]
    if not notes:
        lines.append(EMPTY_BOARD)
    for note in notes:
        mins = minutes_left(note.expires_at, now)
        lines.append(
            f"- [{note.id}] **{note.title}** — {note.description} "
            f"*(by {note.author}, expires in ~{mins}m)*"
        )
    return "\n".join(lines)


class NoteStore:
    """
    Thread-safe in-memory note table with per-note expiry.

    Create one per process and hand it to whatever serves requests. All
    public methods are safe to call from any thread or from the event loop;
    none of them block beyond an in-memory table update.

    Args:
        scheduler: Arms the per-note expiry actions. Defaults to daemon
            `threading.Timer`s.
        clock: Returns the current naive-UTC time.
        id_factory: Returns candidate note ids; collisions are retried.
    """

    def __init__(
        self,
        scheduler: ExpiryScheduler | None = None,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = new_note_id,
    ) -> None:
        self._scheduler = scheduler or ThreadingTimerScheduler()
        self._clock = clock
        self._id_factory = id_factory
        self._lock = threading.Lock()
        self._notes: dict[str, Note] = {}
        self._timers: dict[str, ExpiryHandle] = {}

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def create(self, title: str, description: str, author: str) -> Note:
        """Add a note that expires NOTE_TTL from now."""
        with self._lock:
            now = self._clock()
            self._sweep(now)

            note_id = self._id_factory()
            while note_id in self._notes:
                note_id = self._id_factory()

            note = Note(
                id=note_id,
                title=_clean(title),
                description=_clean(description),
                author=_clean(author),
                created_at=now,
                updated_at=now,
                expires_at=now + NOTE_TTL,
            )
            self._arm(note_id, note.expires_at, now)
            self._notes[note_id] = note

        logger.debug("Note created", extra={"note_id": note_id, "expires_at": note.expires_at.isoformat()})
        return note

    def list_notes(self) -> list[Note]:
        """Live notes, newest first; notes created at the same instant keep insertion order."""
        with self._lock:
            self._sweep(self._clock())
            return self._ordered()

    def get(self, note_id: str) -> Note | None:
        """Return the note, or None if it does not exist or has expired."""
        with self._lock:
            self._sweep(self._clock())
            return self._notes.get(note_id)

    def update(
        self,
        note_id: str,
        title: str | None = None,
        description: str | None = None,
        author: str | None = None,
    ) -> Note | None:
        """
        Replace the given fields of a note with their trimmed values.

        Fields that are omitted, or empty after trimming, keep their current
        value. The expiry deadline never moves; the expiry action is re-armed
        against the same deadline.

        Returns:
            The updated note, or None if the id is unknown or expired.
        """
        changes = {
            name: value.strip()
            for name, value in (("title", title), ("description", description), ("author", author))
            if value is not None and value.strip()
        }

        with self._lock:
            now = self._clock()
            self._sweep(now)

            current = self._notes.get(note_id)
            if current is None:
                return None

            note = replace(current, **changes, updated_at=max(now, current.created_at))
            self._arm(note_id, note.expires_at, now)
            self._notes[note_id] = note

        logger.debug("Note updated", extra={"note_id": note_id, "fields": sorted(changes)})
        return note

    def delete(self, note_id: str) -> bool:
        """Remove a note and disarm its expiry. Returns whether it was present."""
        with self._lock:
            self._sweep(self._clock())
            existed = self._discard(note_id)

        if existed:
            logger.debug("Note deleted", extra={"note_id": note_id})
        return existed

    def clear(self) -> int:
        """Disarm every pending expiry and empty the board. Returns how many notes were removed."""
        with self._lock:
            for handle in self._timers.values():
                handle.cancel()
            removed = len(self._notes)
            self._timers.clear()
            self._notes.clear()

        logger.debug("Board cleared", extra={"removed": removed})
        return removed

    def snapshot(self) -> str:
        """Markdown listing of the live notes with minutes left until expiry."""
        with self._lock:
            now = self._clock()
            self._sweep(now)
            notes = self._ordered()
        return render_board(notes, now)

    def count(self) -> int:
        with self._lock:
            self._sweep(self._clock())
            return len(self._notes)

    def stats(self) -> dict[str, Any]:
        """Counts for health checks."""
        with self._lock:
            self._sweep(self._clock())
            return {
                "notes": len(self._notes),
                "pending_expiries": len(self._timers),
                "ttl_seconds": int(NOTE_TTL.total_seconds()),
            }

    def shutdown(self) -> None:
        """Disarm all timers at process exit."""
        removed = self.clear()
        logger.info("Note store shut down", extra={"discarded": removed})

    # ------------------------------------------------------------------
    # Internals (caller holds _lock)
    # ------------------------------------------------------------------

    def _ordered(self) -> list[Note]:
        return sorted(self._notes.values(), key=lambda n: n.created_at, reverse=True)

    def _arm(self, note_id: str, expires_at: datetime, now: datetime) -> None:
        """Schedule removal at `expires_at`, replacing any pending handle for the id."""
        delay = (expires_at - now).total_seconds()
        handle = self._scheduler.schedule(delay, partial(self._expire, note_id))
        previous = self._timers.get(note_id)
        if previous is not None:
            previous.cancel()
        self._timers[note_id] = handle

    def _discard(self, note_id: str) -> bool:
        handle = self._timers.pop(note_id, None)
        if handle is not None:
            handle.cancel()
        return self._notes.pop(note_id, None) is not None

    def _sweep(self, now: datetime) -> int:
        expired = [note_id for note_id, note in self._notes.items() if note.is_expired(now)]
        for note_id in expired:
            self._discard(note_id)
        if expired:
            logger.debug("Swept expired notes", extra={"note_ids": expired})
        return len(expired)

    # ------------------------------------------------------------------
    # Scheduler callback
    # ------------------------------------------------------------------

    def _expire(self, note_id: str, handle: ExpiryHandle) -> None:
        """Remove the note when its own, still-current expiry action fires."""
        with self._lock:
            if self._timers.get(note_id) is not handle:
                # disarmed by delete/clear, or replaced by a re-arm
                return

            now = self._clock()
            note = self._notes[note_id]
            if not note.is_expired(now):
                # fired ahead of the wall clock; try again at the deadline
                self._arm(note_id, note.expires_at, now)
                return

            self._discard(note_id)

        logger.debug("Note expired", extra={"note_id": note_id})
