"""Weather zone forecast proxy: api.weather.gov JSON, then the zone product page."""

import logging

from bightwatch.data.zones import zone_name
from bightwatch.extract.zone_text import extract_zone_forecast, unavailable_text
from bightwatch.handlers.base import ProxyHandler
from bightwatch.ingest.upstream import FetchError
from bightwatch.models.common import Family, utc_now_iso
from bightwatch.models.proxy import ProxyRequest

logger = logging.getLogger(__name__)

NWS_API_BASE = "https://api.weather.gov"
ZONE_PRODUCT_URL = (
    "https://forecast.weather.gov/product.php"
    "?site=NWS&issuedby={office}&product=ZFP&format=txt&version=1&glossary=0"
)
ZONE_PRODUCT_OFFICE = "AFC"


def _short(text: str) -> str:
    first = text.split(". ")[0].strip()
    return first.rstrip(".") if first else ""


class WeatherForecastHandler(ProxyHandler):
    name = "weather-forecast"
    family = Family.LAND_ZONE
    missing_message = "Zone ID is required in path: /weather-forecast/{zoneId}"
    invalid_error = "Invalid zone ID"
    invalid_message = "Zone ID must be a valid Alaska weather zone (AKZ317-AKZ332)"
    failure_message = "Unable to fetch weather forecast data"

    def _body(self, zone: str, periods: list[dict], source: str) -> dict:
        return {
            "properties": {
                "zone": zone,
                "zoneName": zone_name(zone),
                "updated": utc_now_iso(),
                "source": source,
                "periods": periods,
            }
        }

    async def _from_api(self, zone: str) -> list[dict]:
        data = await self.fetcher.fetch_json(
            f"{NWS_API_BASE}/zones/forecast/{zone}/forecast",
            headers={"Accept": "application/geo+json"},
        )
        periods = (data.get("properties") or {}).get("periods") or []
        return [
            {
                "name": p.get("name", ""),
                "detailedForecast": p.get("detailedForecast", ""),
                "shortForecast": p.get("shortForecast") or _short(p.get("detailedForecast", "")),
            }
            for p in periods
            if p.get("detailedForecast")
        ]

    async def fetch(self, identifier: str | None, request: ProxyRequest) -> dict:
        assert identifier is not None
        try:
            periods = await self._from_api(identifier)
            if periods:
                return self._body(identifier, periods, "api.weather.gov")
            logger.info("No API periods for %s, trying zone product", identifier)
        except FetchError as e:
            logger.warning("API forecast for %s failed (%s), trying zone product", identifier, e)

        page = await self.fetcher.fetch_text(
            ZONE_PRODUCT_URL.format(office=ZONE_PRODUCT_OFFICE),
            headers={"Accept": "text/plain"},
        )
        text = extract_zone_forecast(page, identifier)
        return self._body(
            identifier,
            [{"name": "Forecast", "detailedForecast": text, "shortForecast": _short(text)}],
            "zone-product",
        )

    def fallback(self, identifier: str | None, request: ProxyRequest, error: FetchError) -> dict | None:
        if identifier is None:
            return None
        text = unavailable_text(identifier)
        return self._body(
            identifier,
            [{"name": "Forecast", "detailedForecast": text, "shortForecast": "Forecast unavailable"}],
            "fallback",
        )
