"""TTL response cache layered over LocalStorage.

Entries are JSON `{data, expiry, timestamp}` under `<prefix><key>`; times are
epoch seconds. Expired or unparseable entries read as a miss and are removed.
"""

import json
import logging
import time
from collections.abc import Callable
from typing import Any

from bightwatch.client.storage import PREFERENCE_KEYS, LocalStorage

logger = logging.getLogger(__name__)

CACHE_PREFIX = "bightwatch_"
DEFAULT_TTL_MINUTES = 30


class ResponseCache:
    def __init__(
        self,
        storage: LocalStorage,
        prefix: str = CACHE_PREFIX,
        clock: Callable[[], float] = time.time,
    ):
        self.storage = storage
        self.prefix = prefix
        self.clock = clock

    def _keys(self) -> list[str]:
        # The saved region shares the prefix but is not a cache entry.
        return [
            k for k in self.storage.keys()
            if k.startswith(self.prefix) and k not in PREFERENCE_KEYS
        ]

    def _entry(self, full_key: str) -> dict | None:
        raw = self.storage.get_item(full_key)
        if raw is None:
            return None
        try:
            entry = json.loads(raw)
        except ValueError:
            return None
        if not isinstance(entry, dict) or "expiry" not in entry:
            return None
        return entry

    def set(self, key: str, data: Any, ttl_minutes: float = DEFAULT_TTL_MINUTES) -> bool:
        now = self.clock()
        entry = {"data": data, "expiry": now + ttl_minutes * 60, "timestamp": now}
        try:
            self.storage.set_item(self.prefix + key, json.dumps(entry))
        except (TypeError, ValueError, OSError) as e:
            logger.warning("Cache set failed for %s: %s", key, e)
            return False
        return True

    def get(self, key: str) -> Any | None:
        full_key = self.prefix + key
        if self.storage.get_item(full_key) is None:
            return None
        entry = self._entry(full_key)
        if entry is None:
            logger.warning("Corrupt cache entry %s, removing", key)
            self.storage.remove_item(full_key)
            return None
        if self.clock() > entry["expiry"]:
            self.storage.remove_item(full_key)
            return None
        return entry.get("data")

    def remove(self, key: str) -> None:
        self.storage.remove_item(self.prefix + key)

    def clear(self) -> int:
        keys = self._keys()
        for k in keys:
            self.storage.remove_item(k)
        return len(keys)

    def stats(self) -> dict[str, Any]:
        now = self.clock()
        total = valid = expired = size = 0
        for k in self._keys():
            raw = self.storage.get_item(k) or ""
            total += 1
            size += len(raw)
            entry = self._entry(k)
            if entry is not None and now <= entry["expiry"]:
                valid += 1
            else:
                expired += 1
        return {
            "totalItems": total,
            "validItems": valid,
            "expiredItems": expired,
            "totalSize": size,
            "sizeKB": round(size / 1024, 2),
        }

    def cleanup(self) -> int:
        """Drop expired and corrupt entries; returns how many were removed."""
        now = self.clock()
        removed = 0
        for k in self._keys():
            entry = self._entry(k)
            if entry is None or now > entry["expiry"]:
                self.storage.remove_item(k)
                removed += 1
        if removed:
            logger.info("Cache cleanup removed %d entries", removed)
        return removed
