"""Midnight rollover timer."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from calorie_tracker.services.day_keys import next_local_midnight
from calorie_tracker.services.scheduler import ScheduledTask, Scheduler

_logger = logging.getLogger(__name__)


@dataclass
class RolloverTimer:
    """One-shot timer that fires shortly after the next local midnight.

    Arming always cancels the pending task first, so at most one callback is
    outstanding. The deadline is recomputed from the clock on every arm.
    """

    scheduler: Scheduler
    clock: Callable[[], datetime]
    on_rollover: Callable[[], None]
    margin_seconds: float = 1.0
    _task: ScheduledTask | None = field(default=None, init=False, repr=False)
    _deadline: datetime | None = field(default=None, init=False, repr=False)

    @property
    def armed(self) -> bool:
        """Return True while a callback is pending."""
        return self._task is not None

    @property
    def deadline(self) -> datetime | None:
        """Return the wall-clock time the pending callback targets."""
        return self._deadline

    def arm(self) -> None:
        """Schedule the rollover callback for the next local midnight."""
        self.cancel()
        now = self.clock()
        deadline = next_local_midnight(now) + timedelta(seconds=self.margin_seconds)
        delay = (deadline - now).total_seconds()
        self._deadline = deadline
        self._task = self.scheduler.call_later(delay, self._fire)
        _logger.debug("Rollover armed for %s (in %.0fs)", deadline, delay)

    def cancel(self) -> None:
        """Cancel the pending callback, if any."""
        if self._task is not None:
            self._task.cancel()
        self._task = None
        self._deadline = None

    def _fire(self) -> None:
        self._task = None
        self._deadline = None
        self.on_rollover()
