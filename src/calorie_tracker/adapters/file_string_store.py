"""File-backed string store, one file per key."""

import re
from dataclasses import dataclass
from pathlib import Path

from calorie_tracker.services.storage import StringStore

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_-]+$")


@dataclass
class FileStringStore(StringStore):
    """Local directory implementation of the string store."""

    directory: Path

    @classmethod
    def create(cls, directory: Path | str) -> "FileStringStore":
        """Build a store rooted at directory, creating it if needed."""
        path = Path(directory).expanduser()
        path.mkdir(parents=True, exist_ok=True)
        return cls(path)

    def get_item(self, key: str) -> str | None:
        """Return the stored text for key, or None when absent."""
        path = self._path_for(key)
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            return None
        return raw.decode("utf-8", errors="replace")

    def set_item(self, key: str, value: str) -> None:
        """Write value for key, replacing the previous file."""
        path = self._path_for(key)
        tmp_path = path.with_suffix(".tmp")
        tmp_path.write_text(value, encoding="utf-8")
        tmp_path.replace(path)

    def _path_for(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise ValueError(f"Unsupported storage key: {key!r}")
        return self.directory / f"{key}.json"
