"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Expiry is tested against a fake clock and a manual scheduler: nothing
sleeps for real, and a test decides exactly when a pending expiry fires.

    def test_note_expires(store, clock, scheduler):
        note = store.create("Standup", "9am sync", "Ana")
        clock.advance(minutes=10)
        scheduler.run_due()
        assert store.get(note.id) is None
"""

from datetime import datetime, timedelta

import pytest

from postit.backend.core.utils import utc_now
from postit.backend.store.note_store import NoteStore


# =============================================================================
# Clock and Scheduler Doubles
# =============================================================================


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or utc_now().replace(microsecond=0)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


class ManualHandle:
    """Pending action recorded by ManualScheduler."""

    def __init__(self, due: datetime, callback) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        """Invoke the callback now, whatever the clock says."""
        self.fired = True
        self.callback(self)


class ManualScheduler:
    """Records scheduled actions; `run_due` fires those whose time has come."""

    def __init__(self, clock: FakeClock) -> None:
        self.clock = clock
        self.handles: list[ManualHandle] = []

    def schedule(self, delay: float, callback) -> ManualHandle:
        handle = ManualHandle(self.clock.now + timedelta(seconds=delay), callback)
        self.handles.append(handle)
        return handle

    @property
    def pending(self) -> list[ManualHandle]:
        return [h for h in self.handles if not h.cancelled and not h.fired]

    def run_due(self) -> int:
        """Fire every pending action that is due. Returns how many fired."""
        due = [h for h in self.pending if h.due <= self.clock.now]
        for handle in due:
            if not handle.cancelled:
                handle.fire()
        return len(due)


# =============================================================================
# Store Fixtures
# =============================================================================


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scheduler(clock: FakeClock) -> ManualScheduler:
    return ManualScheduler(clock)


@pytest.fixture
def store(clock: FakeClock, scheduler: ManualScheduler) -> NoteStore:
    """NoteStore driven by the fake clock and manual scheduler."""
    return NoteStore(scheduler=scheduler, clock=clock)
