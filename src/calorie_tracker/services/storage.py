"""JSON key-value storage on top of a raw string store."""

import json
import logging
from dataclasses import dataclass
from typing import Protocol, TypeVar

T = TypeVar("T")

GOAL_KEY = "dailyLimit"
CATALOG_KEY = "foodDb"

_logger = logging.getLogger(__name__)


class StringStore(Protocol):
    """Persistent string-keyed store shared by the whole process."""

    def get_item(self, key: str) -> str | None:
        """Return the raw string stored under key, if any."""

    def set_item(self, key: str, value: str) -> None:
        """Store a raw string under key, replacing any prior value."""


@dataclass
class JsonStore:
    """Loads and saves JSON values, treating corrupt data as missing."""

    strings: StringStore

    def load(self, key: str, fallback: T) -> object | T:
        """Return the decoded value for key, or fallback if absent or corrupt."""
        raw = self.strings.get_item(key)
        if not raw:
            return fallback
        try:
            return json.loads(raw)
        except ValueError:
            _logger.warning("Ignoring corrupt value for key %s", key)
            return fallback

    def save(self, key: str, value: object) -> None:
        """Encode value as JSON and overwrite key."""
        self.strings.set_item(key, json.dumps(value))
