"""Single-slot undo for the most recently logged meal."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from calorie_snap.services.logs import DailyLogStore

_logger = logging.getLogger(__name__)


class Cancellable(Protocol):
    """Handle for a deferred action."""

    def cancel(self) -> None:
        """Prevent the action from running."""


class Scheduler(Protocol):
    """Runs callbacks after a delay."""

    def call_later(
        self, delay_seconds: float, callback: Callable[[], None]
    ) -> Cancellable:
        """Schedule ``callback`` and return a handle to cancel it."""


@dataclass
class AsyncioScheduler(Scheduler):
    """Scheduler backed by the running asyncio event loop."""

    def call_later(
        self, delay_seconds: float, callback: Callable[[], None]
    ) -> Cancellable:
        """Schedule on the current event loop."""
        return asyncio.get_running_loop().call_later(delay_seconds, callback)


@dataclass(frozen=True)
class PendingUndo:
    """Meal that can still be undone."""

    day: str
    meal_id: str


@dataclass
class UndoCoordinator:
    """Tracks one undoable meal add at a time.

    Arming replaces any pending undo and cancels its timer. When the window
    elapses the meal stays logged.
    """

    store: DailyLogStore
    scheduler: Scheduler
    window_seconds: float = 5.0
    _pending: PendingUndo | None = field(default=None, init=False)
    _handle: Cancellable | None = field(default=None, init=False)

    @property
    def pending(self) -> PendingUndo | None:
        """Return the armed undo, if any."""
        return self._pending

    def arm(self, day: str, meal_id: str) -> None:
        """Make ``meal_id`` the undoable meal."""
        self._cancel_timer()
        pending = PendingUndo(day=day, meal_id=meal_id)
        self._pending = pending
        self._handle = self.scheduler.call_later(
            self.window_seconds, lambda: self._expire(pending)
        )
        _logger.debug("Undo armed for meal %s", meal_id)

    def undo(self) -> PendingUndo | None:
        """Remove the armed meal; no-op when nothing is armed."""
        pending = self._pending
        if pending is None:
            return None
        self._cancel_timer()
        self._pending = None
        self.store.remove_meal(pending.day, pending.meal_id)
        _logger.info("Undid meal %s", pending.meal_id)
        return pending

    def _expire(self, pending: PendingUndo) -> None:
        if self._pending is not pending:
            return
        self._pending = None
        self._handle = None
        _logger.debug("Undo window closed for meal %s", pending.meal_id)

    def _cancel_timer(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
