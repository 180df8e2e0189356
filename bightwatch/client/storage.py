"""Key/value persistence for the dashboard client.

A JSON file stands in for browser local storage; with no path the store
lives in memory only. The dashboard's widgets share one store across
threads, so every access goes through a lock and the file is replaced
atomically.
"""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path

logger = logging.getLogger(__name__)

REGION_KEY = "bightwatch_selected_region"
PREFERENCE_KEYS = (
    REGION_KEY,
    "boatsafe_weather_zone",
    "boatsafe_coastal_location",
    "boatsafe_discussion_office",
    "boatsafe_tide_station",
    "boatsafe_current_station",
    "boatsafe_buoy_station",
)


class LocalStorage:
    def __init__(self, path: str | Path | None = None):
        self.path = Path(path) if path else None
        self._items: dict[str, str] = {}
        self._lock = threading.Lock()
        if self.path and self.path.exists():
            try:
                loaded = json.loads(self.path.read_text())
            except (OSError, ValueError) as e:
                logger.warning("Ignoring unreadable storage file %s: %s", self.path, e)
                loaded = {}
            if isinstance(loaded, dict):
                self._items = {str(k): str(v) for k, v in loaded.items()}

    def _flush(self) -> None:
        # Caller holds the lock.
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(self._items, f, indent=2)
            os.replace(tmp, self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def get_item(self, key: str) -> str | None:
        with self._lock:
            return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            self._items[key] = value
            self._flush()

    def remove_item(self, key: str) -> None:
        with self._lock:
            if self._items.pop(key, None) is not None:
                self._flush()

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._items)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


class Preferences:
    """User selections that survive restarts (region, stations, office)."""

    def __init__(self, storage: LocalStorage):
        self.storage = storage

    def get(self, key: str) -> str | None:
        return self.storage.get_item(key)

    def set(self, key: str, value: str | None) -> None:
        if key not in PREFERENCE_KEYS:
            raise KeyError(f"Unknown preference: {key}")
        if value is None:
            self.storage.remove_item(key)
        else:
            self.storage.set_item(key, value)

    def all(self) -> dict[str, str]:
        return {k: v for k in PREFERENCE_KEYS if (v := self.get(k)) is not None}
