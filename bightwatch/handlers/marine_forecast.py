"""Marine forecast proxy: CWF/ZFP bulletin sliced to one zone."""

from bightwatch.data.zones import MARINE_ZONE_URLS, zone_name
from bightwatch.extract.bulletin import SectionNotFound, marker_for, section_for
from bightwatch.extract.fields import parse_issue_time, parse_periods
from bightwatch.handlers.base import ProxyHandler
from bightwatch.models.common import Family, utc_now_iso
from bightwatch.models.proxy import ProxyRequest


class MarineForecastHandler(ProxyHandler):
    name = "marine-forecast"
    family = Family.MARINE_ZONE
    missing_message = "Zone ID is required in path: /marine-forecast/{zoneId}"
    invalid_error = "Invalid zone ID"
    invalid_message = (
        "Zone ID must be a valid Alaska marine zone (PKZ###) "
        "or coastal zone (AKZ317-AKZ332)"
    )
    failure_message = "Unable to fetch marine forecast data"

    async def fetch(self, identifier: str | None, request: ProxyRequest) -> dict:
        assert identifier is not None
        text = await self.fetcher.fetch_text(MARINE_ZONE_URLS[identifier])
        try:
            section = section_for(text, identifier, marker_for(identifier))
        except SectionNotFound:
            # Region views slice every zone from fullText themselves.
            if request.query.get("scope") != "region":
                raise
            section = ""
        return {
            "properties": {
                "updated": utc_now_iso(),
                "zone": identifier,
                "zoneName": zone_name(identifier),
                "periods": [
                    {
                        "name": "Marine Forecast",
                        "detailedForecast": section,
                        "shortForecast": f"Marine conditions for zone {identifier}",
                        "issueTime": parse_issue_time(text),
                    }
                ],
                "forecastPeriods": [p.to_dict() for p in parse_periods(section)],
                "fullText": text,
            }
        }
