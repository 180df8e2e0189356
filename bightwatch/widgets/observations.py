"""Buoy readings and the Southeast Alaska observation roundup."""

from typing import Any

from bightwatch.extract.ndbc import MISSING
from bightwatch.widgets.base import Widget, header

BUOY_FIELDS = [
    ("WSPD", "Wind Speed"),
    ("WDIR", "Wind Dir"),
    ("GST", "Gust"),
    ("WVHT", "Wave Height"),
    ("DPD", "Wave Period"),
    ("PRES", "Pressure"),
    ("ATMP", "Air Temp"),
    ("WTMP", "Water Temp"),
]

SEAK_FIELDS = ["Temperature", "Temp", "Wind Speed", "WindSpeed", "Wind Direction", "WindDir"]
MAX_STATIONS = 15


class Observations(Widget):
    function = "buoy-data"
    title = "Observations"
    cache_ttl_minutes = 5

    def fetch(self, station_id: str | None = None) -> Any:  # type: ignore[override]
        buoy = None
        if station_id:
            buoy = self.get(self.url(station_id))
        roundup_url = f"{self.base_url}/seak-observations"
        roundup = self.get(roundup_url, cache_ttl_minutes=10)
        return buoy, roundup

    @staticmethod
    def buoy_lines(buoy: dict) -> list[str]:
        lines = [f"Buoy {buoy.get('stationId', '')} at {buoy.get('timestamp', '')}"]
        data = buoy.get("data") or {}
        for key, label in BUOY_FIELDS:
            field = data.get(key)
            if not field or field.get("value") == MISSING:
                continue
            lines.append(f"  {label:<12} {field['value']} {field.get('unit', '')}".rstrip())
        return lines

    @staticmethod
    def station_line(obs: dict) -> str:
        parts = [obs.get("stationName") or obs.get("stationId", "")]
        for key in SEAK_FIELDS:
            field = obs.get(key)
            if isinstance(field, dict):
                parts.append(f"{key} {field['value']}{field.get('unit', '')}")
        return "  " + " | ".join(str(p) for p in parts)

    def render(self, data: Any) -> str:
        buoy, roundup = data
        lines = [header(self.title)]
        if buoy:
            lines.extend(self.buoy_lines(buoy))
            lines.append("")
        observations = (roundup or {}).get("observations") or []
        lines.append(f"SEAK stations ({len(observations)}) as of {(roundup or {}).get('timestamp', '')}")
        for obs in observations[:MAX_STATIONS]:
            lines.append(self.station_line(obs))
        return "\n".join(lines)
