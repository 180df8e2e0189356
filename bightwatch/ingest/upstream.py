"""Async fetcher for NOAA/NDBC endpoints with a fixed identifying User-Agent."""

import logging
from typing import Any

import httpx

from bightwatch.config.schema import DEFAULT_USER_AGENT

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Upstream failure: non-2xx status, timeout or transport error."""

    def __init__(
        self,
        url: str,
        kind: str = "http",
        status: int | None = None,
        status_text: str = "",
    ):
        self.url = url
        self.kind = kind
        self.status = status
        self.status_text = status_text
        if kind == "http":
            msg = f"HTTP {status} from {url}"
        else:
            msg = f"{kind} error fetching {url}"
        super().__init__(msg)


class UpstreamFetcher:
    """One GET per call, no retries. Retrying is the client's job."""

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.user_agent = user_agent
        self.timeout = timeout
        self._transport = transport

    async def _get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        merged = {"User-Agent": self.user_agent}
        if headers:
            merged.update(headers)

        logger.info("Fetching %s", url)
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                resp = await client.get(url, params=params, headers=merged)
        except httpx.TimeoutException as e:
            logger.warning("Timeout fetching %s: %s", url, e)
            raise FetchError(url, kind="timeout") from e
        except httpx.RequestError as e:
            logger.warning("Network error fetching %s: %s", url, e)
            raise FetchError(url, kind="network") from e

        if not resp.is_success:
            logger.warning("Upstream %s returned %d", url, resp.status_code)
            raise FetchError(
                url,
                kind="http",
                status=resp.status_code,
                status_text=resp.reason_phrase,
            )
        return resp

    async def fetch_text(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> str:
        resp = await self._get(url, params, headers)
        text = resp.text
        logger.info("Got %d chars from %s", len(text), url)
        return text

    async def fetch_json(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        resp = await self._get(url, params, headers)
        try:
            return resp.json()
        except ValueError as e:
            logger.warning("Invalid JSON from %s", url)
            raise FetchError(url, kind="invalid_json", status=resp.status_code) from e
