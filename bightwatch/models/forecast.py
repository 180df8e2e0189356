"""Structured forecast data extracted from NOAA text bulletins."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class WindInfo:
    direction: str
    direction_name: str
    speed: int
    max_speed: int | None
    description: str
    raw: str

    def to_dict(self) -> dict:
        return {
            "direction": self.direction,
            "directionName": self.direction_name,
            "speed": self.speed,
            "maxSpeed": self.max_speed,
            "description": self.description,
            "raw": self.raw,
        }


@dataclass(frozen=True)
class WaveInfo:
    height: int
    max_height: int | None
    description: str
    raw: str

    def to_dict(self) -> dict:
        return {
            "height": self.height,
            "maxHeight": self.max_height,
            "description": self.description,
            "raw": self.raw,
        }


@dataclass(frozen=True)
class WeatherInfo:
    conditions: list[str]
    description: str

    def to_dict(self) -> dict:
        return {"conditions": list(self.conditions), "description": self.description}


@dataclass(frozen=True)
class ForecastPeriod:
    name: str
    text: str
    wind: WindInfo | None = None
    waves: WaveInfo | None = None
    weather: WeatherInfo | None = None
    issue_time: str | None = None
    summary: str = ""

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "text": self.text,
            "wind": self.wind.to_dict() if self.wind else None,
            "waves": self.waves.to_dict() if self.waves else None,
            "weather": self.weather.to_dict() if self.weather else None,
            "issueTime": self.issue_time,
            "summary": self.summary,
        }


@dataclass(frozen=True)
class Section:
    """One zone's slice of a multi-zone bulletin."""

    identifiers: list[str]
    name: str
    text: str


@dataclass(frozen=True)
class DiscussionSection:
    title: str
    content: str


@dataclass(frozen=True)
class Discussion:
    text: str
    issued_time: str | None
    author: str | None
    sections: list[DiscussionSection] = field(default_factory=list)
