"""Observation and alert models reshaped from NOAA/NDBC products."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldValue:
    value: str
    unit: str

    def to_dict(self) -> dict:
        return {"value": self.value, "unit": self.unit}


@dataclass(frozen=True)
class BuoyObservation:
    station_id: str
    timestamp: str
    data: dict[str, FieldValue]

    def to_dict(self) -> dict:
        return {
            "stationId": self.station_id,
            "timestamp": self.timestamp,
            "data": {k: v.to_dict() for k, v in self.data.items()},
            "status": "success",
        }


@dataclass(frozen=True)
class MarineAlert:
    id: str
    type: str
    source: str
    text: str
    effective_time: str | None
    expiration_time: str | None
    severity: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type,
            "source": self.source,
            "text": self.text,
            "effectiveTime": self.effective_time,
            "expirationTime": self.expiration_time,
            "severity": self.severity,
        }
