"""Closed-set identifier validation per family."""

from bightwatch.data.stations import (
    BUOY_STATIONS,
    CURRENT_STATIONS,
    OFFICES,
    WARNING_TYPES,
    load_tide_stations,
)
from bightwatch.data.zones import COASTAL_ZONE_NAMES, MARINE_ZONE_URLS, REGIONS_BY_CODE
from bightwatch.models.common import Family


def allowed_set(family: Family) -> frozenset[str]:
    if family == Family.MARINE_ZONE:
        return frozenset(MARINE_ZONE_URLS)
    if family == Family.LAND_ZONE:
        return frozenset(COASTAL_ZONE_NAMES)
    if family == Family.TIDE_STATION:
        return load_tide_stations()
    if family == Family.CURRENT_STATION:
        return frozenset(CURRENT_STATIONS)
    if family == Family.BUOY_STATION:
        return BUOY_STATIONS
    if family == Family.OFFICE:
        return frozenset(OFFICES)
    if family == Family.WARNING_TYPE:
        return frozenset(WARNING_TYPES)
    if family == Family.REGION:
        return frozenset(REGIONS_BY_CODE)
    return frozenset()


def validate(identifier: object, family: Family) -> bool:
    """True when the identifier, upper-cased, is in the family's allowed set."""
    if not identifier or not isinstance(identifier, str):
        return False
    return identifier.upper() in allowed_set(family)
