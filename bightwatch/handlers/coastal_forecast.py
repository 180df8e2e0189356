"""Coastal forecast proxy: Alaska land-zone forecast sliced to one AKZ zone."""

from bightwatch.data.zones import LAND_FORECAST_URL, zone_name
from bightwatch.extract.bulletin import LAND_ZONE_MARKER, section_for
from bightwatch.extract.fields import parse_issue_time, parse_periods
from bightwatch.handlers.base import ProxyHandler
from bightwatch.models.common import Family, utc_now_iso
from bightwatch.models.proxy import ProxyRequest


class CoastalForecastHandler(ProxyHandler):
    name = "coastal-forecast"
    family = Family.LAND_ZONE
    missing_message = "Zone ID is required in path: /coastal-forecast/{zoneId}"
    invalid_error = "Invalid zone ID"
    invalid_message = "Zone ID must be a valid Alaska coastal forecast zone (AKZ317-AKZ332)"
    failure_message = "Unable to fetch coastal forecast data"

    async def fetch(self, identifier: str | None, request: ProxyRequest) -> dict:
        assert identifier is not None
        text = await self.fetcher.fetch_text(LAND_FORECAST_URL)
        section = section_for(text, identifier, LAND_ZONE_MARKER)
        name = zone_name(identifier)
        return {
            "properties": {
                "updated": utc_now_iso(),
                "zone": identifier,
                "zoneName": name,
                "periods": [
                    {
                        "name": "Coastal Forecast",
                        "detailedForecast": section,
                        "shortForecast": f"Coastal conditions for {name}",
                        "issueTime": parse_issue_time(text),
                    }
                ],
                "forecastPeriods": [p.to_dict() for p in parse_periods(section)],
            }
        }
