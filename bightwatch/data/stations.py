"""Closed identifier sets for stations, offices and warning products."""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

TIDE_STATIONS_PATH = Path(__file__).parent / "tide_stations.json"

# Used when the bundled tide-station dataset cannot be read.
FALLBACK_TIDE_STATIONS: frozenset[str] = frozenset({
    "9452210",  # Juneau
    "9452400",  # Skagway, Taiya Inlet
    "9450460",  # Ketchikan, Tongass Narrows
    "9455920",  # Anchorage
    "9455500",  # Seldovia
    "9455760",  # Nikiski
    "9454050",  # Cordova
    "9454240",  # Valdez
    "9453220",  # Yakutat
    "9459450",  # Sand Point
    "9462450",  # Nikolski
})

CURRENT_STATIONS: dict[str, str] = {
    "ACT6146": "Clarence Strait",
    "ACT6151": "Stephens Passage",
    "ACT6276": "Wrangell Narrows",
    "ACT5506": "Port Wells",
    "ACT5511": "Valdez Arm",
    "ACT4831": "Knik Arm",
    "ACT4841": "Turnagain Arm",
    "ACT4856": "Kachemak Bay",
    "PWS1501": "Prince William Sound",
    "CI0301": "Cook Inlet",
    "SE1201": "Southeast Alaska",
}

BUOY_STATIONS: frozenset[str] = frozenset({
    # Offshore buoys
    "46001", "46004", "46035", "46036", "46060", "46061", "46066", "46072",
    "46073", "46075", "46076", "46077", "46078", "46080", "46081", "46082",
    "46083", "46084", "46085", "46108", "46131", "46132", "46145", "46146",
    "46147", "46181", "46183", "46184", "46185", "46204", "46205", "46206",
    "46207", "46208", "46246", "46267", "46303", "46304",
    # Coastal (C-MAN) stations
    "ABYA2", "ADKA2", "AJXA2", "AKXA2", "ANTA2", "NMTA2", "UNLA2", "UQXA2",
})

OFFICES: dict[str, dict[str, str]] = {
    "AJK": {
        "name": "Southeast Alaska (Juneau)",
        "region": "Southeast Alaska",
        "full_name": "NWS Juneau, AK",
    },
    "AFC": {
        "name": "Southcentral Alaska (Anchorage)",
        "region": "Southcentral Alaska",
        "full_name": "NWS Anchorage, AK",
    },
    "AFG": {
        "name": "Northern Alaska (Fairbanks)",
        "region": "Northern Alaska",
        "full_name": "NWS Fairbanks, AK",
    },
}

WARNING_TYPES: dict[str, str] = {
    "NPW": "Non-Precipitation Warnings",
    "WSW": "Winter Storm Warnings",
    "WCN": "Weather Conditions",
    "SPS": "Special Weather Statements",
    "HWO": "Hazardous Weather Outlook",
    "AFD": "Area Forecast Discussion",
    "NOW": "Short Term Forecast",
}

_tide_stations: frozenset[str] | None = None


def load_tide_stations(path: Path = TIDE_STATIONS_PATH) -> frozenset[str]:
    """Alaska tide station ids from the bundled dataset, loaded once."""
    global _tide_stations
    if _tide_stations is not None:
        return _tide_stations
    try:
        with open(path) as f:
            dataset = json.load(f)
        _tide_stations = frozenset(
            station_id
            for station_id, station in dataset.items()
            if station.get("region") == "Alaska"
        )
        logger.info("Loaded %d Alaska tide stations", len(_tide_stations))
    except (OSError, ValueError, AttributeError):
        logger.exception("Failed to load tide stations, using fallback set")
        _tide_stations = FALLBACK_TIDE_STATIONS
    return _tide_stations


def reset_tide_stations() -> None:
    global _tide_stations
    _tide_stations = None


def tide_station_names(path: Path = TIDE_STATIONS_PATH) -> dict[str, str]:
    try:
        with open(path) as f:
            dataset = json.load(f)
    except (OSError, ValueError):
        return {sid: sid for sid in FALLBACK_TIDE_STATIONS}
    return {
        sid: station.get("name", sid)
        for sid, station in dataset.items()
        if station.get("region") == "Alaska"
    }
