"""Proxy handler state machine shared by every data family.

received -> OPTIONS preflight | method -> rate limit -> identifier -> date
-> fetch upstream -> extract/reshape -> 200. Every exit carries CORS headers
and a JSON body; no exception escapes `handle`.
"""

import logging
import re
import time
from collections.abc import Callable
from typing import Any

from bightwatch.config.schema import FamilyConfig, RateLimitConfig
from bightwatch.extract.bulletin import SectionNotFound
from bightwatch.guard.gate import RequestGate
from bightwatch.guard.rate_limiter import RateLimiter
from bightwatch.ingest.upstream import FetchError, UpstreamFetcher
from bightwatch.models.common import FailurePolicy, Family
from bightwatch.models.proxy import (
    GateResult,
    ProxyRequest,
    ProxyResponse,
    RejectReason,
)

logger = logging.getLogger(__name__)

FUNCTIONS_PREFIX = "/.netlify/functions"

CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}
JSON_HEADERS = {**CORS_HEADERS, "Content-Type": "application/json"}
PREFLIGHT_HEADERS = {
    **CORS_HEADERS,
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Max-Age": "86400",
}


def preflight() -> ProxyResponse:
    return ProxyResponse(status_code=200, headers=dict(PREFLIGHT_HEADERS), body=None)


def error_response(status_code: int, error: str, message: str | None = None, **extra: Any) -> ProxyResponse:
    body: dict[str, Any] = {"error": error}
    if message is not None:
        body["message"] = message
    body.update(extra)
    return ProxyResponse(status_code=status_code, headers=dict(JSON_HEADERS), body=body)


class ProxyHandler:
    """Base for one data family. Subclasses set the class attributes and
    implement `fetch`; families with a fallback policy implement `fallback`.
    """

    name: str = ""
    family: Family | None = None
    # "path" takes the segment after /<name>/, "query" takes `query_param`.
    identifier_source: str | None = "path"
    query_param: str | None = None
    default_identifier: str | None = None
    identifier_required: bool = True
    accepts_date: bool = False

    missing_message: str = ""
    invalid_error: str = "Invalid request"
    invalid_message: str = ""
    failure_message: str = "Unable to fetch data"

    def __init__(
        self,
        config: FamilyConfig,
        fetcher: UpstreamFetcher,
        rate_limit: RateLimitConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        rate_limit = rate_limit or RateLimitConfig()
        self.config = config
        self.fetcher = fetcher
        self.limiter = RateLimiter(
            max_requests=config.max_requests,
            window_seconds=rate_limit.window_minutes * 60,
            max_clients=rate_limit.max_clients,
            clock=clock,
        )
        self.gate = RequestGate(
            self.limiter,
            family=self.family,
            identifier_required=self.identifier_required,
            trusted_header=rate_limit.trusted_ip_header,
        )

    def identifier(self, request: ProxyRequest) -> str | None:
        if self.identifier_source == "path":
            m = re.search(rf"/{re.escape(self.name)}/([^/]+)", request.path)
            return m.group(1) if m else self.default_identifier
        if self.identifier_source == "query" and self.query_param:
            return request.query.get(self.query_param) or self.default_identifier
        return None

    async def handle(self, request: ProxyRequest) -> ProxyResponse:
        logger.info("%s called: %s %s", self.name, request.method, request.path)
        if request.method.upper() == "OPTIONS":
            return preflight()

        ident: str | None = None
        try:
            ident = self.identifier(request)
            date_param = (request.query.get("date") or None) if self.accepts_date else None
            verdict = self.gate.evaluate(request, ident, date_param)
            if not verdict.passed:
                return self.reject(verdict.failure, request)

            body = await self.fetch(ident.upper() if ident else None, request)
            return self.ok(body)

        except SectionNotFound as e:
            logger.warning("%s: %s", self.name, e)
            return error_response(500, "Internal server error", str(e))
        except FetchError as e:
            logger.warning("%s upstream failure: %s", self.name, e)
            if self.config.on_upstream_failure == FailurePolicy.FALLBACK:
                body = self.fallback(ident.upper() if ident else None, request, e)
                if body is not None:
                    return self.ok(body)
            return error_response(500, "Internal server error", self.failure_message)
        except Exception:
            logger.exception("%s proxy error", self.name)
            return error_response(500, "Internal server error", self.failure_message)

    def reject(self, failure: GateResult | None, request: ProxyRequest) -> ProxyResponse:
        reason = failure.reject_reason if failure else None
        logger.info("%s rejected: %s", self.name, failure.detail if failure else "?")
        if reason == RejectReason.METHOD_NOT_ALLOWED:
            return error_response(405, "Method not allowed")
        if reason == RejectReason.RATE_LIMITED:
            return error_response(
                429,
                "Rate limit exceeded",
                "Too many requests. Please try again later.",
            )
        if reason == RejectReason.MISSING_IDENTIFIER:
            return error_response(400, "Invalid request", self.missing_message, path=request.path)
        if reason == RejectReason.INVALID_IDENTIFIER:
            return error_response(400, self.invalid_error, self.invalid_message)
        if reason == RejectReason.INVALID_DATE:
            return error_response(400, "Invalid date parameter", "Invalid date format. Use YYYYMMDD")
        return error_response(400, "Invalid request")

    def ok(self, body: dict) -> ProxyResponse:
        headers = dict(JSON_HEADERS)
        headers["Cache-Control"] = f"public, max-age={self.config.cache_max_age_seconds}"
        return ProxyResponse(status_code=200, headers=headers, body=body)

    async def fetch(self, identifier: str | None, request: ProxyRequest) -> dict:
        raise NotImplementedError

    def fallback(
        self, identifier: str | None, request: ProxyRequest, error: FetchError
    ) -> dict | None:
        """Body served instead of a 500 under the fallback policy; None to fail."""
        return None
