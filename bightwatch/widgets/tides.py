"""Tide high/low and current flood/ebb/slack widgets."""

from typing import Any

from bightwatch.data.stations import CURRENT_STATIONS, tide_station_names
from bightwatch.widgets.base import Widget, header

MAX_EVENTS = 8

_CURRENT_LABELS = {
    "flood": "Max Flood",
    "max flood": "Max Flood",
    "ebb": "Max Ebb",
    "max ebb": "Max Ebb",
    "slack": "Slack",
}


class Tides(Widget):
    function = "tide-data"
    title = "Tides"

    def fetch(self, station_id: str, date: str | None = None) -> Any:  # type: ignore[override]
        return self.get(self.url(station_id, date=date))

    def render(self, data: Any) -> str:
        station = data.get("stationId", "")
        name = tide_station_names().get(station, station)
        lines = [header(f"{self.title}: {name}"), f"Date: {data.get('date', '')}"]
        predictions = (data.get("data") or {}).get("predictions") or []
        if not predictions:
            lines.append("No tide predictions found for this date")
        for p in predictions[:MAX_EVENTS]:
            kind = "High" if p.get("type") == "H" else "Low"
            lines.append(f"  {kind:<5} {p.get('t', '')}  {float(p.get('v', 0)):.1f} ft")
        return "\n".join(lines)


class Currents(Widget):
    function = "current-data"
    title = "Currents"

    def fetch(self, station_id: str, date: str | None = None) -> Any:  # type: ignore[override]
        return self.get(self.url(station_id, date=date))

    @staticmethod
    def predictions(payload: dict) -> list[dict]:
        raw = (
            payload.get("current_predictions")
            or payload.get("predictions")
            or payload.get("currents_predictions")
            or []
        )
        # CO-OPS nests the list under "cp"
        if isinstance(raw, dict):
            raw = raw.get("cp") or []
        return sorted(raw, key=lambda p: p.get("Time") or p.get("t") or "")

    def render(self, data: Any) -> str:
        station = data.get("stationId", "")
        lines = [
            header(f"{self.title}: {CURRENT_STATIONS.get(station, station)}"),
            f"Date: {data.get('date', '')}",
        ]
        events = self.predictions(data.get("data") or {})
        if not events:
            lines.append("No current predictions found for this date")
        for p in events:
            kind = str(p.get("Type") or p.get("type") or "unknown").lower()
            label = _CURRENT_LABELS.get(kind, kind.title())
            velocity = float(p.get("Velocity_Major") or p.get("v") or 0)
            time = p.get("Time") or p.get("t") or ""
            if label == "Slack":
                lines.append(f"  {label:<9} {time}")
            else:
                lines.append(f"  {label:<9} {time}  {abs(velocity):.1f} kt")
        return "\n".join(lines)
