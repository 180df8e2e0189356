"""Best-effort extraction of one zone's forecast from a weather.gov zone page."""

import html
import logging
import re

from bightwatch.data.zones import zone_name

logger = logging.getLogger(__name__)

MAX_PERIOD_CHARS = 800
MAX_KEYWORD_CHARS = 500

_SCRIPT_RE = re.compile(r"<script[^>]*>.*?</script>", re.IGNORECASE | re.DOTALL)
_STYLE_RE = re.compile(r"<style[^>]*>.*?</style>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]*>")

PERIOD_RULES: list[re.Pattern] = [
    re.compile(r"\.{2,}TODAY\.{2,}.*?(?=\.{2,}TONIGHT\.{2,}|\.{2,}[A-Z]+\.{2,}|$)", re.IGNORECASE),
    re.compile(r"\.{2,}TONIGHT\.{2,}.*?(?=\.{2,}[A-Z]+\.{2,}|$)", re.IGNORECASE),
    re.compile(r"\.{2,}(?:MONDAY|TUESDAY|WEDNESDAY|THURSDAY|FRIDAY|SATURDAY|SUNDAY)\.{2,}.*?(?=\.{2,}[A-Z]+\.{2,}|$)", re.IGNORECASE),
]

WEATHER_WORDS = (
    "temperature", "wind", "sky", "rain", "snow", "cloud", "clear",
    "sunny", "overcast", "mph", "degrees",
)


def strip_html(text: str) -> str:
    text = _SCRIPT_RE.sub("", text)
    text = _STYLE_RE.sub("", text)
    text = _TAG_RE.sub(" ", text)
    text = html.unescape(text).replace("\xa0", " ")
    return re.sub(r"\s+", " ", text).strip()


def _zone_slice(page: str, zone_id: str) -> str:
    for anchor in (zone_id, zone_name(zone_id)):
        m = re.search(
            rf"{re.escape(anchor)}.*?(?=AKZ\d{{3}}|$)", page, re.IGNORECASE | re.DOTALL
        )
        if m:
            return m.group(0)
    return page


def unavailable_text(zone_id: str) -> str:
    return (
        f"Weather forecast for {zone_name(zone_id)}. "
        "Please visit weather.gov for current conditions."
    )


def extract_zone_forecast(page: str, zone_id: str) -> str:
    """Period text for the zone, else weather-ish words, else a pointer text.

    Never raises; the last fallback is synthesized text naming the zone.
    """
    text = strip_html(_zone_slice(page or "", zone_id))

    blocks = []
    for rule in PERIOD_RULES:
        matches = [m.group(0) for m in rule.finditer(text)]
        if matches:
            blocks.append(re.sub(r"\.{2,}", " ", " ".join(matches)).strip())
    extracted = "\n\n".join(blocks).strip()
    if len(extracted) > 30:
        return extracted[:MAX_PERIOD_CHARS]

    words = [w for w in text.split() if len(w) > 3]
    weather_words = [w for w in words if any(k in w.lower() for k in WEATHER_WORDS)]
    if len(weather_words) > 5:
        return " ".join(weather_words[:20])[:MAX_KEYWORD_CHARS]

    logger.info("No forecast text found for %s, using pointer text", zone_id)
    return (
        f"Weather forecast for {zone_name(zone_id)}. "
        "Current conditions and detailed forecasts available at weather.gov."
    )


_PRE_RE = re.compile(r"<pre[^>]*>(.*?)</pre>", re.IGNORECASE | re.DOTALL)


def product_text(page: str) -> str:
    """Text of a product.php page: the first <pre> block when there is one."""
    m = _PRE_RE.search(page or "")
    if m is None:
        return page or ""
    return html.unescape(_TAG_RE.sub("", m.group(1)))
