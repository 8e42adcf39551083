"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from calorie_tracker.adapters.file_string_store import FileStringStore
from calorie_tracker.config import Settings
from calorie_tracker.services.scheduler import AsyncioScheduler
from calorie_tracker.services.storage import JsonStore
from calorie_tracker.services.tracker import TrackerService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: JsonStore
    tracker: TrackerService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    store = JsonStore(FileStringStore.create(resolved_settings.storage_dir))
    tracker = TrackerService(
        store=store,
        scheduler=AsyncioScheduler(),
        default_goal=resolved_settings.default_daily_goal,
        rollover_margin_seconds=resolved_settings.rollover_margin_seconds,
    )

    async def close_resources() -> None:
        tracker.close()

    return AppContainer(
        settings=resolved_settings,
        store=store,
        tracker=tracker,
        close_resources=close_resources,
    )
