"""Pull wind, waves, weather and issue time out of forecast period text.

Each field is an ordered list of regex rules; the first rule that matches
wins. Rules are data, so new phrasings are added by appending a pattern.
"""

import re

from bightwatch.models.forecast import ForecastPeriod, WaveInfo, WeatherInfo, WindInfo

DIRECTION_NAMES = {
    "N": "North", "NNE": "North-Northeast", "NE": "Northeast",
    "ENE": "East-Northeast", "E": "East", "ESE": "East-Southeast",
    "SE": "Southeast", "SSE": "South-Southeast", "S": "South",
    "SSW": "South-Southwest", "SW": "Southwest", "WSW": "West-Southwest",
    "W": "West", "WNW": "West-Northwest", "NW": "Northwest",
    "NNW": "North-Northwest", "VAR": "Variable", "VRB": "Variable",
}

_SPELLED_DIRECTIONS = {
    "NORTH": "N", "NORTHEAST": "NE", "EAST": "E", "SOUTHEAST": "SE",
    "SOUTH": "S", "SOUTHWEST": "SW", "WEST": "W", "NORTHWEST": "NW",
    "VARIABLE": "VAR",
}

# Longest alternatives first so "NNE" is not read as "N".
_DIR = (
    r"(?P<dir>north(?:east|west)?|south(?:east|west)?|east|west|variable"
    r"|NNE|ENE|ESE|SSE|SSW|WSW|WNW|NNW|NE|SE|SW|NW|VAR|VRB|N|E|S|W)"
)
_SPEED = r"(?P<speed>\d+)(?:\s*to\s*(?P<max>\d+))?"

WIND_RULES: list[re.Pattern] = [
    # "N wind 10 to 15 kt", "Southeast winds 20 mph"
    re.compile(rf"\b{_DIR}\s+winds?\s+{_SPEED}\s*(?:kt|knots?|mph)\b", re.IGNORECASE),
    # "winds SE 15 kt"
    re.compile(rf"\bwinds?\s+{_DIR}\s+{_SPEED}\s*(?:kt|knots?|mph)\b", re.IGNORECASE),
    # "wind 5 kt S"
    re.compile(rf"\bwinds?\s+{_SPEED}\s*(?:kt|knots?|mph)\s+{_DIR}\b", re.IGNORECASE),
    # CWF shorthand: "SE 25 kt"
    re.compile(rf"\b{_DIR}\s+{_SPEED}\s*(?:kt|knots?)\b", re.IGNORECASE),
]

_HEIGHT = r"(?P<height>\d+)(?:\s*to\s*(?P<max>\d+))?"

WAVE_RULES: list[re.Pattern] = [
    # "seas 3 to 5 ft", "waves around 2 feet"
    re.compile(rf"\b(?:waves?|seas?)\s+(?:around\s+)?{_HEIGHT}\s*(?:ft|feet)\b", re.IGNORECASE),
    # "4 ft seas"
    re.compile(rf"\b{_HEIGHT}\s*(?:ft|feet)\s+(?:waves?|seas?)\b", re.IGNORECASE),
]

WEATHER_KEYWORDS = [
    "rain", "showers", "drizzle", "thunderstorms", "fog", "snow", "sleet",
    "hail", "freezing", "clear", "cloudy", "sunny", "overcast", "haze", "smoke",
]

ISSUE_TIME_RULES: list[re.Pattern] = [
    re.compile(r"ISSUED.*?(\d{1,2}:\d{2}\s*(AM|PM)\s*(AKDT|AKST))", re.IGNORECASE),
    re.compile(r"(\d{1,2}:\d{2}\s*(AM|PM)\s*(AKDT|AKST)\s*\w+\s*\w+\s*\d{1,2}\s*\d{4})", re.IGNORECASE),
    re.compile(r"(\d{3,4}\s*(AM|PM)\s*(AKDT|AKST)\s*\w+\s*\w+\s*\d{1,2}\s*\d{4})", re.IGNORECASE),
    re.compile(
        r"National Weather Service.*?(\d{1,2}:\d{2}\s*(AM|PM)\s*(AKDT|AKST).*?\d{4})",
        re.IGNORECASE | re.DOTALL,
    ),
    re.compile(r"(\d{1,2}/\d{1,2}/\d{4}.*?\d{1,2}:\d{2}\s*(AM|PM))", re.IGNORECASE),
    re.compile(r"(\w+\s*\w+\s*\d{1,2}\s*\d{4}.*?\d{1,2}:\d{2}\s*(AM|PM))", re.IGNORECASE),
]

_PERIOD_HEADER = re.compile(
    r"^\.(?P<name>[A-Za-z][A-Za-z0-9 /]*?)\.\.\.(?P<rest>.*)$"
)
_NOT_PERIODS = ("SYNOPSIS", "DISCUSSION")


def wind_description(speed: int) -> str:
    """Qualitative band for a wind speed in knots."""
    if speed < 7:
        return "Light"
    if speed < 17:
        return "Moderate"
    if speed < 27:
        return "Fresh"
    if speed < 34:
        return "Strong"
    if speed < 48:
        return "Gale"
    return "Storm"


def wave_description(height: int) -> str:
    if height < 2:
        return "Calm"
    if height < 4:
        return "Light"
    if height < 6:
        return "Moderate"
    if height < 10:
        return "Rough"
    return "Very rough"


def _normalize_direction(raw: str) -> str:
    raw = raw.upper()
    return _SPELLED_DIRECTIONS.get(raw, raw)


def parse_wind(text: str) -> WindInfo | None:
    if not text:
        return None
    for rule in WIND_RULES:
        m = rule.search(text)
        if m is None:
            continue
        direction = _normalize_direction(m.group("dir"))
        speed = int(m.group("speed"))
        max_speed = int(m.group("max")) if m.group("max") else None
        return WindInfo(
            direction=direction,
            direction_name=DIRECTION_NAMES.get(direction, direction),
            speed=speed,
            max_speed=max_speed,
            description=wind_description(speed),
            raw=m.group(0),
        )
    return None


def parse_waves(text: str) -> WaveInfo | None:
    if not text:
        return None
    for rule in WAVE_RULES:
        m = rule.search(text)
        if m is None:
            continue
        height = int(m.group("height"))
        return WaveInfo(
            height=height,
            max_height=int(m.group("max")) if m.group("max") else None,
            description=wave_description(height),
            raw=m.group(0),
        )
    return None


def parse_weather(text: str) -> WeatherInfo | None:
    if not text:
        return None
    lowered = text.lower()
    found = [kw for kw in WEATHER_KEYWORDS if kw in lowered]
    if not found:
        return None
    return WeatherInfo(conditions=found, description=", ".join(found))


def weather_outlook(conditions: list[str]) -> str:
    if "thunderstorms" in conditions:
        return "Thunderstorms possible"
    if "rain" in conditions or "showers" in conditions:
        return "Rain expected"
    if "fog" in conditions:
        return "Fog possible"
    if "clear" in conditions or "sunny" in conditions:
        return "Clear conditions"
    return "Weather conditions as described"


def parse_issue_time(text: str) -> str | None:
    if not text:
        return None
    for rule in ISSUE_TIME_RULES:
        m = rule.search(text)
        if m is not None:
            return m.group(1).strip()
    return None


def summarize(
    wind: WindInfo | None,
    waves: WaveInfo | None,
    weather: WeatherInfo | None,
) -> str:
    parts = []
    if wind:
        span = f"{wind.speed}-{wind.max_speed}" if wind.max_speed else str(wind.speed)
        parts.append(
            f"{wind.description} {wind.direction_name.lower()} winds at {span} knots."
        )
    if waves:
        span = f"{waves.height}-{waves.max_height}" if waves.max_height else str(waves.height)
        parts.append(f"{waves.description} seas {span} feet.")
    if weather:
        parts.append(f"{weather_outlook(weather.conditions)}.")
    return " ".join(parts) or "Conditions as described in forecast."


def build_period(name: str, text: str, issue_time: str | None = None) -> ForecastPeriod:
    text = text.strip()
    wind = parse_wind(text)
    waves = parse_waves(text)
    weather = parse_weather(text)
    return ForecastPeriod(
        name=name,
        text=text,
        wind=wind,
        waves=waves,
        weather=weather,
        issue_time=issue_time,
        summary=summarize(wind, waves, weather),
    )


def parse_periods(text: str) -> list[ForecastPeriod]:
    """Split a zone section into `.TODAY...`, `.TONIGHT...` style periods."""
    if not text:
        return []
    issue_time = parse_issue_time(text)
    periods: list[ForecastPeriod] = []
    name: str | None = None
    body: list[str] = []

    for raw in text.split("\n"):
        line = raw.strip()
        m = _PERIOD_HEADER.match(line)
        if m:
            if name is not None:
                periods.append(build_period(name, " ".join(body), issue_time))
            title = m.group("name").strip().upper()
            if title.startswith(_NOT_PERIODS):
                name, body = None, []
                continue
            name = title
            body = [m.group("rest").strip()] if m.group("rest").strip() else []
        elif name is not None and line and _is_body_line(line):
            body.append(line)

    if name is not None:
        periods.append(build_period(name, " ".join(body), issue_time))
    return periods


def _is_body_line(line: str) -> bool:
    return "$$" not in line and not line.startswith("Expires:")
