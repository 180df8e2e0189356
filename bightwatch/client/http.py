"""Cached HTTP client with retry for the dashboard widgets."""

import base64
import logging
import re
import time
from typing import Any

import httpx

from bightwatch.client.cache import DEFAULT_TTL_MINUTES, ResponseCache

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
DEFAULT_RETRIES = 3


class RequestTimeout(Exception):
    def __init__(self, url: str):
        self.url = url
        super().__init__("Request timeout")


def cache_key(url: str) -> str:
    encoded = base64.b64encode(url.encode()).decode()
    return "http_" + re.sub(r"[^a-zA-Z0-9]", "", encoded)


class HttpClient:
    def __init__(
        self,
        cache: ResponseCache,
        base_timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        self.cache = cache
        self.base_timeout = base_timeout
        self._transport = transport

    def _fetch(self, url: str, timeout: float) -> Any:
        try:
            with httpx.Client(timeout=timeout, transport=self._transport) as client:
                resp = client.get(url)
        except httpx.TimeoutException as e:
            raise RequestTimeout(url) from e
        resp.raise_for_status()
        if "application/json" in resp.headers.get("content-type", ""):
            return resp.json()
        return resp.text

    def get(
        self,
        url: str,
        cache_ttl_minutes: float = DEFAULT_TTL_MINUTES,
        skip_cache: bool = False,
        timeout: float | None = None,
        retries: int = DEFAULT_RETRIES,
    ) -> Any:
        """GET with cache lookup first; `retries` counts total attempts.

        Waits 2**attempt seconds between attempts and re-raises the last
        error once they are exhausted.
        """
        key = cache_key(url)
        if not skip_cache:
            cached = self.cache.get(key)
            if cached is not None:
                logger.debug("Cache hit for %s", url)
                return cached

        attempts = max(1, retries)
        last_error: Exception | None = None
        for attempt in range(attempts):
            try:
                data = self._fetch(url, timeout or self.base_timeout)
                self.cache.set(key, data, cache_ttl_minutes)
                return data
            except (httpx.HTTPError, RequestTimeout, ValueError) as e:
                last_error = e
                if attempt < attempts - 1:
                    delay = 2**attempt
                    logger.warning(
                        "Request to %s failed (%s), retrying in %ds (attempt %d/%d)",
                        url, e, delay, attempt + 1, attempts,
                    )
                    time.sleep(delay)

        assert last_error is not None
        logger.error("Request to %s failed after %d attempts: %s", url, attempts, last_error)
        raise last_error

    def request_status(self, url: str) -> dict[str, Any]:
        key = cache_key(url)
        return {
            "url": url,
            "cached": self.cache.get(key) is not None,
            "cacheKey": key,
            "timestamp": time.time(),
        }
