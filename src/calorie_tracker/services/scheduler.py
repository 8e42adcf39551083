"""Scheduled-task abstraction over the event loop."""

import asyncio
from collections.abc import Callable
from typing import Protocol


class ScheduledTask(Protocol):
    """Handle to a pending callback."""

    def cancel(self) -> None:
        """Prevent the callback from running if it has not run yet."""


class Scheduler(Protocol):
    """Schedules one-shot callbacks on the application's event loop."""

    def call_later(
        self, delay_seconds: float, callback: Callable[[], None]
    ) -> ScheduledTask:
        """Run callback once after delay_seconds."""


class AsyncioScheduler(Scheduler):
    """Scheduler backed by the running asyncio event loop."""

    def call_later(
        self, delay_seconds: float, callback: Callable[[], None]
    ) -> ScheduledTask:
        """Schedule callback on the running loop."""
        loop = asyncio.get_running_loop()
        return loop.call_later(max(delay_seconds, 0.0), callback)
