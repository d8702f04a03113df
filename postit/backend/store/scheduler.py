"""
Expiry Scheduling.

One-shot deferred callbacks used by the note store to remove a note at its
expiry instant. The store only depends on the two protocols below, so the
backing mechanism can be swapped (tests use a manual scheduler driven by a
fake clock).

The callback receives its own handle when it fires. The store compares that
handle with the one it currently holds for the note, which is how a fired
timer recognises that it was cancelled or replaced while it waited for the
store lock.
"""

import threading
from collections.abc import Callable
from typing import Protocol


class ExpiryHandle(Protocol):
    """A pending expiry action."""

    def cancel(self) -> None:
        """Disarm the action. Cancelling a fired or cancelled handle is a no-op."""


ExpiryCallback = Callable[[ExpiryHandle], None]


class ExpiryScheduler(Protocol):
    """Arms one-shot expiry actions."""

    def schedule(self, delay: float, callback: ExpiryCallback) -> ExpiryHandle:
        """Run `callback(handle)` once, no sooner than `delay` seconds from now."""


class TimerHandle:
    """Handle for a `threading.Timer` armed by `ThreadingTimerScheduler`."""

    def __init__(self) -> None:
        self._timer: threading.Timer | None = None
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True
        if self._timer is not None:
            self._timer.cancel()


class ThreadingTimerScheduler:
    """
    Scheduler backed by one daemon `threading.Timer` per pending expiry.

    Timers fire on their own threads, so the callback must take whatever
    lock guards the state it touches. Daemon threads never block process
    exit.
    """

    def schedule(self, delay: float, callback: ExpiryCallback) -> TimerHandle:
        handle = TimerHandle()
        timer = threading.Timer(max(0.0, delay), callback, args=(handle,))
        timer.daemon = True
        # bound before start so a zero delay still sees a complete handle
        handle._timer = timer
        timer.start()
        return handle
