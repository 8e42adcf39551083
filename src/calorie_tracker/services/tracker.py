"""Daily calorie tracking state and its mutators."""

import json
import logging
import math
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import TypeVar
from uuid import uuid4

from pydantic import TypeAdapter, ValidationError

from calorie_tracker.domain.catalog import (
    STORED_ENTRIES,
    STORED_FOODS,
    STORED_GOAL,
    CatalogImportError,
    parse_catalog_document,
)
from calorie_tracker.domain.entries import Entry
from calorie_tracker.domain.foods import FoodItem
from calorie_tracker.domain.summary import DailySummary
from calorie_tracker.services.day_keys import local_now, today_key
from calorie_tracker.services.rollover import RolloverTimer
from calorie_tracker.services.scheduler import Scheduler
from calorie_tracker.services.storage import CATALOG_KEY, GOAL_KEY, JsonStore
from calorie_tracker.services.summary import summarize

T = TypeVar("T")

_logger = logging.getLogger(__name__)


@dataclass
class TrackerService:
    """Single source of truth for the goal, the food catalog and today's log.

    State is read from the store on construction. Every mutation replaces the
    in-memory value and writes it straight through to the store. Reads and
    mutations first check the clock so that the active day key is always the
    current calendar day.
    """

    store: JsonStore
    scheduler: Scheduler
    clock: Callable[[], datetime] = local_now
    default_goal: float = 2000
    rollover_margin_seconds: float = 1.0
    _goal: float = field(default=0, init=False, repr=False)
    _foods: list[FoodItem] = field(default_factory=list, init=False, repr=False)
    _entries: list[Entry] = field(default_factory=list, init=False, repr=False)
    _active_key: str = field(default="", init=False, repr=False)
    _armed_key: str | None = field(default=None, init=False, repr=False)
    _running: bool = field(default=False, init=False, repr=False)
    _timer: RolloverTimer = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._timer = RolloverTimer(
            scheduler=self.scheduler,
            clock=self.clock,
            on_rollover=self._handle_rollover,
            margin_seconds=self.rollover_margin_seconds,
        )
        self.load()

    def load(self) -> None:
        """Reconstruct the goal, catalog and today's log from the store."""
        self._goal = self._load_typed(GOAL_KEY, STORED_GOAL, self.default_goal)
        stored_foods = self._load_typed(CATALOG_KEY, STORED_FOODS, [])
        self._foods = [food.to_domain() for food in stored_foods]
        self._active_key = today_key(self.clock())
        self._entries = self._load_entries(self._active_key)

    def start(self) -> None:
        """Begin a session: arm the midnight rollover."""
        self._running = True
        self._sync_day()
        self._rearm()

    def close(self) -> None:
        """End the session and cancel any pending rollover."""
        self._running = False
        self._timer.cancel()
        self._armed_key = None

    @property
    def goal(self) -> float:
        """Return the daily calorie goal."""
        return self._goal

    @property
    def foods(self) -> list[FoodItem]:
        """Return the catalog in insertion order."""
        return list(self._foods)

    @property
    def entries(self) -> list[Entry]:
        """Return today's entries in insertion order."""
        self._sync_day()
        return list(self._entries)

    @property
    def active_key(self) -> str:
        """Return the storage key of today's log."""
        self._sync_day()
        return self._active_key

    @property
    def rollover_timer(self) -> RolloverTimer:
        """Return the timer that clears the log at midnight."""
        return self._timer

    def sorted_foods(self) -> list[FoodItem]:
        """Return the catalog ordered alphabetically by name."""
        return sorted(self._foods, key=lambda food: (food.name.casefold(), food.name))

    def get_food(self, food_id: str) -> FoodItem | None:
        """Return a catalog item by id, if present."""
        return next((food for food in self._foods if food.id == food_id), None)

    def summary(self) -> DailySummary:
        """Return today's totals against the goal."""
        return summarize(self._goal, self.entries)

    def set_goal(self, value: object) -> bool:
        """Replace the daily goal. Returns False for non-numeric or negative input."""
        goal = _parse_number(value)
        if goal is None or goal < 0:
            return False
        self._goal = goal
        self.store.save(GOAL_KEY, goal)
        return True

    def add_food(self, name: str, kcal_per_100g: object) -> FoodItem | None:
        """Add a catalog item, or return None when the input is invalid."""
        cleaned = name.strip() if isinstance(name, str) else ""
        kcal = _parse_number(kcal_per_100g)
        if not cleaned or kcal is None or kcal < 0:
            return None
        food = FoodItem(id=_new_id(), name=cleaned, kcal_per_100g=kcal)
        self._foods = [*self._foods, food]
        self._save_foods()
        return food

    def remove_food(self, food_id: str) -> bool:
        """Remove a catalog item. Logged entries keep their snapshot."""
        remaining = [food for food in self._foods if food.id != food_id]
        if len(remaining) == len(self._foods):
            return False
        self._foods = remaining
        self._save_foods()
        return True

    def add_entry_from_catalog(self, food_id: str, grams: object) -> Entry | None:
        """Log grams of a catalog food, snapshotting its name and calories."""
        food = self.get_food(food_id)
        amount = _parse_number(grams)
        if food is None or amount is None or amount <= 0:
            return None
        entry = Entry(
            id=_new_id(),
            food_id=food.id,
            name=food.name,
            grams=amount,
            kcal=round_half_up(food.kcal_per_100g * amount / 100),
        )
        self._append_entry(entry)
        return entry

    def add_custom_entry(self, name: str, kcal: object) -> Entry | None:
        """Log a free-form entry that is not linked to the catalog."""
        cleaned = name.strip() if isinstance(name, str) else ""
        value = _parse_number(kcal)
        if not cleaned or value is None or value < 0:
            return None
        entry = Entry(id=_new_id(), name=cleaned, kcal=round_half_up(value))
        self._append_entry(entry)
        return entry

    def remove_entry(self, entry_id: str) -> bool:
        """Remove an entry from today's log."""
        self._sync_day()
        remaining = [entry for entry in self._entries if entry.id != entry_id]
        if len(remaining) == len(self._entries):
            return False
        self._replace_entries(remaining)
        return True

    def reset_entries(self) -> None:
        """Clear today's log."""
        self._sync_day()
        self._replace_entries([])

    def import_catalog(self, payload: object) -> list[FoodItem]:
        """Replace the catalog with an imported document.

        Accepts raw file bytes, JSON text, or an already decoded sequence.
        Raises CatalogImportError without touching the catalog when the
        document is malformed.
        """
        foods = parse_catalog_document(_decode_document(payload))
        self._foods = foods
        self._save_foods()
        _logger.info("Imported catalog with %s foods", len(foods))
        return list(foods)

    def export_catalog(self) -> list[dict[str, object]]:
        """Return the catalog as a re-importable document."""
        return [food.to_payload() for food in self._foods]

    def export_catalog_json(self) -> str:
        """Return the exported catalog as JSON text."""
        return json.dumps(self.export_catalog(), indent=2, ensure_ascii=False)

    def _append_entry(self, entry: Entry) -> None:
        self._sync_day()
        self._replace_entries([*self._entries, entry])

    def _replace_entries(self, entries: list[Entry]) -> None:
        self._entries = entries
        self._save_entries()
        self._rearm()

    def _save_foods(self) -> None:
        self.store.save(CATALOG_KEY, self.export_catalog())

    def _save_entries(self) -> None:
        self.store.save(
            self._active_key, [entry.to_payload() for entry in self._entries]
        )

    def _load_entries(self, key: str) -> list[Entry]:
        stored = self._load_typed(key, STORED_ENTRIES, [])
        return [entry.to_domain() for entry in stored]

    def _load_typed(self, key: str, adapter: TypeAdapter[T], fallback: T) -> T:
        raw = self.store.load(key, None)
        if raw is None:
            return fallback
        try:
            return adapter.validate_python(raw)
        except ValidationError:
            _logger.warning("Ignoring malformed value for key %s", key)
            return fallback

    def _sync_day(self) -> None:
        key = today_key(self.clock())
        if key == self._active_key:
            return
        _logger.info("Active day changed from %s to %s", self._active_key, key)
        self._active_key = key
        self._entries = self._load_entries(key)

    def _rearm(self) -> None:
        if not self._running:
            return
        self._armed_key = self._active_key
        self._timer.arm()

    def _handle_rollover(self) -> None:
        key = today_key(self.clock())
        if key == self._armed_key:
            _logger.info("Rollover fired before midnight, rearming")
            self._rearm()
            return
        if key == self._active_key:
            # A read after midnight already switched to the new day's log.
            self._rearm()
            return
        _logger.info("Day rolled over, clearing entries for %s", key)
        self._active_key = key
        self._replace_entries([])


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up."""
    return math.floor(value + 0.5)


def _new_id() -> str:
    return str(uuid4())


def _parse_number(value: object) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        if not value.strip():
            return None
        try:
            number = float(value)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def _decode_document(payload: object) -> object:
    if isinstance(payload, bytes | bytearray):
        try:
            payload = bytes(payload).decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise CatalogImportError("Catalog file is not UTF-8 text") from exc
    if isinstance(payload, str):
        try:
            return json.loads(payload)
        except ValueError as exc:
            raise CatalogImportError("Catalog file is not valid JSON") from exc
    return payload
