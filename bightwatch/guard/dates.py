"""YYYYMMDD date parameter validation."""

import re
from datetime import date, datetime

from bightwatch.models.common import alaska_today

_DATE_RE = re.compile(r"^\d{8}$")


class InvalidDate(ValueError):
    def __init__(self, value: str):
        super().__init__(f"Invalid date: {value!r}")
        self.value = value


def parse_date(value: str) -> date:
    """Parse a YYYYMMDD string, rejecting impossible calendar dates."""
    if not isinstance(value, str) or not _DATE_RE.match(value):
        raise InvalidDate(value)
    try:
        return datetime.strptime(value, "%Y%m%d").date()
    except ValueError as e:
        raise InvalidDate(value) from e


def is_valid_date(value: str) -> bool:
    try:
        parse_date(value)
    except InvalidDate:
        return False
    return True


def today_param() -> str:
    """Today's date in Alaska as a YYYYMMDD string."""
    return alaska_today().strftime("%Y%m%d")
