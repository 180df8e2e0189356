"""Default per-family limits, cache lifetimes and failure policies."""

from bightwatch.config.schema import FamilyConfig
from bightwatch.models.common import FailurePolicy

DEFAULT_FAMILIES: list[FamilyConfig] = [
    FamilyConfig(
        name="marine-forecast",
        max_requests=60,
        cache_max_age_seconds=1800,
    ),
    FamilyConfig(
        name="weather-forecast",
        max_requests=60,
        cache_max_age_seconds=3600,
        on_upstream_failure=FailurePolicy.FALLBACK,
    ),
    FamilyConfig(
        name="coastal-forecast",
        max_requests=60,
        cache_max_age_seconds=1800,
    ),
    FamilyConfig(
        name="tide-data",
        max_requests=100,
        cache_max_age_seconds=1800,
    ),
    FamilyConfig(
        name="current-data",
        max_requests=100,
        cache_max_age_seconds=1800,
    ),
    FamilyConfig(
        name="buoy-data",
        max_requests=120,
        cache_max_age_seconds=300,
    ),
    FamilyConfig(
        name="seak-observations",
        max_requests=120,
        cache_max_age_seconds=600,
    ),
    FamilyConfig(
        name="marine-alerts",
        max_requests=60,
        cache_max_age_seconds=300,
        on_upstream_failure=FailurePolicy.FALLBACK,
    ),
    FamilyConfig(
        name="forecast-discussion",
        max_requests=60,
        cache_max_age_seconds=1800,
    ),
    FamilyConfig(
        name="weather-warnings",
        max_requests=60,
        cache_max_age_seconds=900,
        on_upstream_failure=FailurePolicy.FALLBACK,
    ),
]
