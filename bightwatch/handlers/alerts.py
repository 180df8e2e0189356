"""Marine alerts and weather warnings: concurrent multi-source fetches.

Both families fan out with `asyncio.gather(return_exceptions=True)` and keep
whatever settled. Only when every source fails does the family raise, so the
fallback policy can serve the degraded body instead.
"""

import asyncio
import logging
from typing import Any

from bightwatch.data.stations import WARNING_TYPES
from bightwatch.extract.alerts import parse_alerts, sort_by_severity
from bightwatch.extract.fields import parse_issue_time
from bightwatch.extract.zone_text import product_text
from bightwatch.handlers.base import ProxyHandler
from bightwatch.ingest.upstream import FetchError
from bightwatch.models.common import Family, utc_now_iso
from bightwatch.models.proxy import ProxyRequest

logger = logging.getLogger(__name__)

PRODUCT_URL = "https://forecast.weather.gov/product.php"
WARNING_OFFICE = "AJK"
WARNING_OFFICE_NAME = "NOAA Weather Service Juneau"
MIN_CONTENT_CHARS = 100


def product_params(product: str, office: str = WARNING_OFFICE) -> dict[str, str]:
    return {
        "site": "NWS",
        "issuedby": office,
        "product": product,
        "format": "txt",
        "version": "1",
        "glossary": "0",
    }


ALERT_SOURCES: list[tuple[str, str, dict[str, str] | None]] = [
    ("CFW", "https://tgftp.nws.noaa.gov/data/raw/wh/whak47.pajk.cfw.ajk.txt", None),
    ("SMW", PRODUCT_URL, product_params("SMW")),
]


class SourcesUnavailable(FetchError):
    """Every source of a multi-source family failed."""

    def __init__(
        self,
        family: str,
        statuses: list[dict[str, Any]],
        degraded: dict[str, Any] | None = None,
    ):
        self.statuses = statuses
        self.degraded = degraded
        super().__init__(family, kind="all_sources")


class MarineAlertsHandler(ProxyHandler):
    name = "marine-alerts"
    family = None
    identifier_source = None
    failure_message = "Unable to fetch marine alerts"

    async def _source(self, url: str, params: dict[str, str] | None) -> str:
        text = await self.fetcher.fetch_text(url, params=params)
        return product_text(text) if params else text

    async def fetch(self, identifier: str | None, request: ProxyRequest) -> dict:
        results = await asyncio.gather(
            *(self._source(url, params) for _name, url, params in ALERT_SOURCES),
            return_exceptions=True,
        )

        alerts: list[dict] = []
        statuses: list[dict[str, Any]] = []
        for (source, _url, _params), result in zip(ALERT_SOURCES, results):
            if isinstance(result, BaseException):
                logger.warning("Alert source %s failed: %s", source, result)
                statuses.append({"source": source, "status": "error", "error": str(result)})
                continue
            found = [a.to_dict() for a in parse_alerts(result, source)]
            alerts.extend(found)
            statuses.append(
                {
                    "source": source,
                    "status": "success",
                    "alertCount": len(found),
                    "text": result[:200],
                }
            )

        if not any(s["status"] == "success" for s in statuses):
            raise SourcesUnavailable(self.name, statuses)
        return self._body(sort_by_severity(alerts), statuses)

    def _body(self, alerts: list[dict], statuses: list[dict[str, Any]]) -> dict:
        return {
            "alerts": alerts,
            "sources": statuses,
            "timestamp": utc_now_iso(),
            "totalAlerts": len(alerts),
        }

    def fallback(self, identifier: str | None, request: ProxyRequest, error: FetchError) -> dict | None:
        statuses = getattr(error, "statuses", [])
        return self._body([], statuses)


class WeatherWarningsHandler(ProxyHandler):
    name = "weather-warnings"
    family = Family.WARNING_TYPE
    identifier_required = False
    invalid_error = "Invalid warning type"
    invalid_message = "Warning type must be one of: " + ", ".join(WARNING_TYPES)
    failure_message = "Unable to fetch weather warnings"

    async def _product(self, product: str) -> dict[str, Any]:
        page = await self.fetcher.fetch_text(PRODUCT_URL, params=product_params(product))
        content = product_text(page)
        return {
            "name": WARNING_TYPES[product],
            "content": content,
            "timestamp": parse_issue_time(content),
            "updated": utc_now_iso(),
            "hasContent": len(content) > MIN_CONTENT_CHARS,
        }

    @staticmethod
    def _failed(product: str, error: BaseException) -> dict[str, Any]:
        name = WARNING_TYPES[product]
        if isinstance(error, FetchError) and error.kind == "http":
            content = f"No {name.lower()} currently active."
        else:
            content = f"Error loading {name.lower()}."
        return {
            "name": name,
            "content": content,
            "timestamp": None,
            "updated": utc_now_iso(),
            "hasContent": False,
            "error": str(error),
        }

    def _products(self, identifier: str | None) -> list[str]:
        return [identifier] if identifier else list(WARNING_TYPES)

    def _body(self, warnings: dict[str, Any]) -> dict:
        return {
            "warnings": warnings,
            "updated": utc_now_iso(),
            "office": WARNING_OFFICE,
            "officeName": WARNING_OFFICE_NAME,
        }

    async def fetch(self, identifier: str | None, request: ProxyRequest) -> dict:
        products = self._products(identifier)
        results = await asyncio.gather(
            *(self._product(p) for p in products), return_exceptions=True
        )

        warnings: dict[str, Any] = {}
        failures = 0
        for product, result in zip(products, results):
            if isinstance(result, BaseException):
                logger.warning("Warning product %s failed: %s", product, result)
                warnings[product] = self._failed(product, result)
                failures += 1
            else:
                warnings[product] = result

        if failures == len(products):
            raise SourcesUnavailable(
                self.name,
                [{"source": p, "status": "error", "error": w["error"]} for p, w in warnings.items()],
                degraded=warnings,
            )
        return self._body(warnings)

    def fallback(self, identifier: str | None, request: ProxyRequest, error: FetchError) -> dict | None:
        degraded = getattr(error, "degraded", None)
        if degraded is None:
            degraded = {p: self._failed(p, error) for p in self._products(identifier)}
        return self._body(degraded)
