"""Tests for container wiring."""

import asyncio

from calorie_tracker.config import Settings
from calorie_tracker.containers import build_container


def test_build_container_creates_tracker(settings: Settings) -> None:
    container = build_container(settings)

    assert container.tracker.goal == 2000
    assert settings.storage_dir.is_dir()
    asyncio.run(container.close_resources())


def test_container_state_persists_on_disk(settings: Settings) -> None:
    first = build_container(settings)
    food = first.tracker.add_food("Quinoa", 120)

    second = build_container(settings)

    assert food is not None
    assert [item.id for item in second.tracker.foods] == [food.id]
