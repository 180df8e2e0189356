"""Common types and helpers shared across models."""

from datetime import UTC, datetime
from enum import StrEnum
from zoneinfo import ZoneInfo

ALASKA_TZ = ZoneInfo("America/Anchorage")


class Family(StrEnum):
    """Identifier families; each has its own closed whitelist."""

    MARINE_ZONE = "marine_zone"
    LAND_ZONE = "land_zone"
    TIDE_STATION = "tide_station"
    CURRENT_STATION = "current_station"
    BUOY_STATION = "buoy_station"
    OFFICE = "office"
    WARNING_TYPE = "warning_type"
    REGION = "region"


class FailurePolicy(StrEnum):
    FAIL = "fail"
    FALLBACK = "fallback"


def utc_now() -> datetime:
    return datetime.now(UTC)


def utc_now_iso() -> str:
    return utc_now().isoformat()


def alaska_today() -> datetime:
    return datetime.now(ALASKA_TZ)
