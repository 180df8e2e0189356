"""Fixed-window per-client rate limiting with a bounded entry store."""

import logging
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from cachetools import TTLCache

logger = logging.getLogger(__name__)

LOOPBACK = "127.0.0.1"
DEFAULT_MAX_CLIENTS = 10_000


@dataclass
class RateLimitEntry:
    count: int
    window_reset_at: float


class RateLimiter:
    """Allows `max_requests` per `window_seconds` for each client key.

    Entries sit in a TTL/LRU cache so idle clients are evicted; the window
    itself is still reset explicitly once `now > window_reset_at`.
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: float = 3600.0,
        max_clients: int = DEFAULT_MAX_CLIENTS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        # Twice the window so an entry never disappears mid-window.
        self._entries: TTLCache = TTLCache(
            maxsize=max_clients, ttl=window_seconds * 2, timer=clock
        )

    def allow(self, key: str) -> bool:
        now = self._clock()
        entry = self._entries.get(key)

        if entry is None or now > entry.window_reset_at:
            self._entries[key] = RateLimitEntry(
                count=1, window_reset_at=now + self.window_seconds
            )
            return True

        if entry.count >= self.max_requests:
            logger.warning(
                "Rate limit exceeded for %s (%d requests)", key, entry.count
            )
            return False

        entry.count += 1
        return True

    def entry(self, key: str) -> RateLimitEntry | None:
        return self._entries.get(key)

    def __len__(self) -> int:
        return len(self._entries)


def client_key(
    headers: Mapping[str, str],
    remote_addr: str | None = None,
    trusted_header: str | None = None,
) -> str:
    """Derive the rate-limit key for a request.

    Without a trusted header this takes X-Forwarded-For, then X-Real-IP,
    both client-controlled. With one configured, only that header (set by
    the reverse proxy) is consulted.
    """
    lowered = {k.lower(): v for k, v in headers.items()}
    if trusted_header:
        candidates = [lowered.get(trusted_header.lower())]
    else:
        candidates = [lowered.get("x-forwarded-for"), lowered.get("x-real-ip")]
    candidates.append(remote_addr)
    for value in candidates:
        if value:
            return value
    return LOOPBACK
