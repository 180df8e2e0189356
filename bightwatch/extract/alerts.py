"""Marine alert detection in free-text NWS products."""

import re
import time

from bightwatch.models.marine import MarineAlert

ALERT_WORDS = ("warning", "advisory", "watch", "alert")

# Ordered: first match is the effective time, the next rule's match the expiration.
TIME_RULES: list[re.Pattern] = [
    re.compile(r"\d{1,2}:\d{2}\s*(?:AM|PM)\s*(?:AKDT|AKST)", re.IGNORECASE),
    re.compile(r"until\s+\d{1,2}:\d{2}\s*(?:AM|PM)", re.IGNORECASE),
    re.compile(r"effective\s+\d{1,2}:\d{2}\s*(?:AM|PM)", re.IGNORECASE),
]

SEVERITY_ORDER = {"high": 0, "medium": 1, "low": 2}


def classify(text: str) -> str:
    lowered = text.lower()
    if "special marine warning" in lowered:
        return "Special Marine Warning"
    if "marine weather statement" in lowered:
        return "Marine Weather Statement"
    if "coastal flood" in lowered:
        return "Coastal Flood Alert"
    return "Marine Alert"


def severity(text: str) -> str:
    lowered = text.lower()
    if "warning" in lowered or "emergency" in lowered:
        return "high"
    if "watch" in lowered or "advisory" in lowered:
        return "medium"
    return "low"


def alert_id(alert_type: str, source: str, now_ms: int | None = None) -> str:
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    key = re.sub(r"\s+", "", alert_type).lower() + "_" + re.sub(r"\s+", "", source).lower()
    return f"{key}_{now_ms}"


def alert_times(text: str) -> tuple[str | None, str | None]:
    effective: str | None = None
    expiration: str | None = None
    for rule in TIME_RULES:
        m = rule.search(text)
        if m is None:
            continue
        if effective is None:
            effective = m.group(0)
        elif expiration is None:
            expiration = m.group(0)
    return effective, expiration


def clean_text(text: str) -> str:
    return re.sub(r"\s+", " ", text.replace("$$", "")).strip()


def parse_alerts(text: str, source: str) -> list[MarineAlert]:
    """At most one alert per product: the product is either an alert or not."""
    if not text or not text.strip():
        return []
    lowered = text.lower()
    if not any(word in lowered for word in ALERT_WORDS):
        return []

    alert_type = classify(text)
    effective, expiration = alert_times(text)
    return [
        MarineAlert(
            id=alert_id(alert_type, source),
            type=alert_type,
            source=source,
            text=clean_text(text),
            effective_time=effective,
            expiration_time=expiration,
            severity=severity(text),
        )
    ]


def sort_by_severity(alerts: list[dict]) -> list[dict]:
    return sorted(alerts, key=lambda a: SEVERITY_ORDER.get(a.get("severity", "low"), 3))
