"""Shared test fixtures."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from calorie_tracker.config import Settings
from calorie_tracker.containers import AppContainer
from calorie_tracker.services.scheduler import Scheduler
from calorie_tracker.services.storage import JsonStore, StringStore
from calorie_tracker.services.tracker import TrackerService

EVENING = datetime(2026, 10, 19, 21, 30)


@dataclass
class InMemoryStringStore(StringStore):
    """In-memory string store for tests."""

    items: dict[str, str] = field(default_factory=dict)
    writes: list[str] = field(default_factory=list)

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value
        self.writes.append(key)


@dataclass
class FakeClock:
    """Settable wall clock."""

    now: datetime = EVENING

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta: float) -> None:
        self.now += timedelta(**delta)


@dataclass
class ManualTask:
    """Pending callback held by the manual scheduler."""

    due: datetime
    callback: Callable[[], None]
    cancelled: bool = False
    fired: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class ManualScheduler(Scheduler):
    """Scheduler that runs callbacks only when time is advanced explicitly."""

    clock: FakeClock
    tasks: list[ManualTask] = field(default_factory=list)

    def call_later(
        self, delay_seconds: float, callback: Callable[[], None]
    ) -> ManualTask:
        task = ManualTask(
            due=self.clock.now + timedelta(seconds=delay_seconds), callback=callback
        )
        self.tasks.append(task)
        return task

    @property
    def pending(self) -> list[ManualTask]:
        return [task for task in self.tasks if not task.cancelled and not task.fired]

    def advance(self, **delta: float) -> int:
        """Move the clock forward and run every callback that came due."""
        self.clock.advance(**delta)
        fired = 0
        while True:
            due = [task for task in self.pending if task.due <= self.clock.now]
            if not due:
                return fired
            task = min(due, key=lambda item: item.due)
            task.fired = True
            task.callback()
            fired += 1


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def strings() -> InMemoryStringStore:
    return InMemoryStringStore()


@pytest.fixture
def store(strings: InMemoryStringStore) -> JsonStore:
    return JsonStore(strings)


@pytest.fixture
def scheduler(clock: FakeClock) -> ManualScheduler:
    return ManualScheduler(clock)


@pytest.fixture
def tracker(
    store: JsonStore, scheduler: ManualScheduler, clock: FakeClock
) -> TrackerService:
    return TrackerService(store=store, scheduler=scheduler, clock=clock)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(storage_dir=tmp_path / "store")


@pytest.fixture
def container(
    settings: Settings, store: JsonStore, tracker: TrackerService
) -> AppContainer:
    async def close_resources() -> None:
        tracker.close()

    return AppContainer(
        settings=settings,
        store=store,
        tracker=tracker,
        close_resources=close_resources,
    )
