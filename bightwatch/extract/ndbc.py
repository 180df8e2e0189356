"""NDBC realtime2 fixed-width observation parsing."""

from datetime import UTC, datetime

from bightwatch.models.common import utc_now
from bightwatch.models.marine import BuoyObservation, FieldValue

MISSING = "MM"


def _int_field(data: dict[str, FieldValue], key: str) -> int | None:
    field = data.get(key)
    if field is None:
        return None
    try:
        return int(field.value)
    except ValueError:
        return None


def observation_time(data: dict[str, FieldValue]) -> datetime:
    """UTC observation time from the YY/MM/DD/hh/mm columns."""
    year = _int_field(data, "YY") or _int_field(data, "YYYY") or utc_now().year
    if year < 100:
        year += 2000
    try:
        return datetime(
            year,
            _int_field(data, "MM") or 1,
            _int_field(data, "DD") or 1,
            _int_field(data, "hh") or 0,
            _int_field(data, "mm") or 0,
            tzinfo=UTC,
        )
    except ValueError:
        return utc_now()


def parse_ndbc(text: str, station_id: str) -> BuoyObservation:
    """Most recent row of a realtime2 file: header, units, then data rows.

    Raises ValueError when fewer than three non-blank lines are present.
    """
    lines = [line for line in (text or "").split("\n") if line.strip()]
    if len(lines) < 3:
        raise ValueError("Invalid NDBC data format")

    headers = lines[0].lstrip("#").split()
    units = lines[1].lstrip("#").split()
    values = lines[2].split()

    data = {
        header: FieldValue(
            value=values[i] if i < len(values) else MISSING,
            unit=units[i] if i < len(units) else "",
        )
        for i, header in enumerate(headers)
    }
    return BuoyObservation(
        station_id=station_id,
        timestamp=observation_time(data).isoformat(),
        data=data,
    )
