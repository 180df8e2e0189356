"""Reshape the Southeast Alaska observation roundup JSON."""

from typing import Any

from bightwatch.models.common import utc_now_iso

FIELD_UNITS = {
    "Temperature": "°F",
    "Temp": "°F",
    "Dew Point": "°F",
    "DewPoint": "°F",
    "Relative Humidity": "%",
    "RH": "%",
    "Wind Speed": "mph",
    "WindSpeed": "mph",
    "Wind Direction": "°",
    "WindDir": "°",
    "Gust Speed": "mph",
    "GustSpeed": "mph",
    "Pressure": "mb",
    "SeaLevelPressure": "mb",
    "Visibility": "mi",
    "Ceiling": "ft",
}

_NAME_KEYS = ("Station Name", "station")
_ID_KEYS = ("StationId", "station_id")


def reshape_station(station: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key, value in station.items():
        if key in _NAME_KEYS:
            out["stationName"] = value
        elif key in _ID_KEYS:
            out["stationId"] = value
        elif value is not None and value not in ("-", ""):
            out[key] = {"value": value, "unit": FIELD_UNITS.get(key, "")}
    return out


def reshape_roundup(raw: list) -> dict[str, Any]:
    """First element is the roundup timestamp, the rest are stations."""
    if not isinstance(raw, list):
        raise ValueError("SEAK roundup must be a JSON array")
    timestamp = raw[0] if raw and raw[0] else utc_now_iso()
    observations = [
        reshaped
        for reshaped in (reshape_station(s) for s in raw[1:] if isinstance(s, dict))
        if reshaped.get("stationId") or reshaped.get("stationName")
    ]
    return {
        "timestamp": timestamp,
        "updated": utc_now_iso(),
        "count": len(observations),
        "observations": observations,
        "status": "success",
    }
