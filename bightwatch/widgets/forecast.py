"""Marine, coastal and weather forecast widgets."""

from typing import Any

from bightwatch.data.zones import MarineRegion, zone_name
from bightwatch.extract.bulletin import SectionNotFound, marker_for, section_for
from bightwatch.extract.fields import parse_periods
from bightwatch.extract.formatting import sentence_paragraphs, wrap
from bightwatch.widgets.base import Widget, header


class ForecastSummary(Widget):
    """Region view: one bulletin fetch, sliced locally into each zone."""

    function = "marine-forecast"
    title = "Marine Forecast"

    def fetch(self, region: MarineRegion) -> Any:  # type: ignore[override]
        first_zone = next(iter(region.zones))
        data = self.get(self.url(first_zone, scope="region"))
        return region, data

    def zone_lines(self, bulletin: str, zone: str) -> list[str]:
        lines = [f"{zone} {zone_name(zone)}"]
        try:
            section = section_for(bulletin, zone, marker_for(zone))
        except SectionNotFound:
            lines.append("  Forecast not available for this zone.")
            return lines
        periods = parse_periods(section)
        if not periods:
            lines.append(wrap(section, indent="  "))
        for p in periods:
            lines.append(f"  {p.name}: {p.summary}")
        return lines

    def render(self, data: Any) -> str:
        region, body = data
        props = body.get("properties", {})
        bulletin = props.get("fullText") or ""
        lines = [header(f"{self.title}: {region.name}")]
        issued = (props.get("periods") or [{}])[0].get("issueTime")
        if issued:
            lines.append(f"Issued: {issued}")
        for zone in region.zones:
            lines.append("")
            lines.extend(self.zone_lines(bulletin, zone))
        return "\n".join(lines)


class CoastalForecast(Widget):
    function = "coastal-forecast"
    title = "Coastal Forecast"

    def render(self, data: Any) -> str:
        props = data.get("properties", {})
        periods = props.get("periods") or []
        detailed = periods[0].get("detailedForecast", "") if periods else ""
        lines = [header(f"{self.title}: {props.get('zoneName', props.get('zone', ''))}")]
        forecast_periods = props.get("forecastPeriods") or []
        if forecast_periods:
            for p in forecast_periods:
                lines.append(f"{p['name']}: {p['summary']}")
        else:
            lines.append(sentence_paragraphs(detailed))
        return "\n".join(lines)


class Weather(Widget):
    function = "weather-forecast"
    title = "Weather"
    cache_ttl_minutes = 60

    def render(self, data: Any) -> str:
        props = data.get("properties", {})
        lines = [header(f"{self.title}: {props.get('zoneName', props.get('zone', ''))}")]
        periods = props.get("periods") or []
        if not periods:
            lines.append("No forecast available")
        for p in periods:
            lines.append("")
            lines.append(p.get("name") or "Forecast")
            lines.append(sentence_paragraphs(p.get("detailedForecast", "")))
        return "\n".join(lines)
