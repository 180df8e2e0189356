"""Date check: optional `date` query parameter must be a real YYYYMMDD date."""

from bightwatch.guard.dates import is_valid_date
from bightwatch.models.proxy import GateResult, RejectReason


def check(value: str | None) -> GateResult:
    if value is not None and not is_valid_date(value):
        return GateResult(
            check_name="date",
            passed=False,
            reject_reason=RejectReason.INVALID_DATE,
            detail=f"{value!r} is not YYYYMMDD",
        )
    return GateResult(check_name="date", passed=True, reject_reason=None, detail="ok")
