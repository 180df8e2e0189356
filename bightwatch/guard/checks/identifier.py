"""Identifier check: path/query identifier present and whitelisted."""

from bightwatch.guard.whitelist import validate
from bightwatch.models.common import Family
from bightwatch.models.proxy import GateResult, RejectReason


def check(identifier: str | None, family: Family, required: bool = True) -> GateResult:
    if not identifier:
        if not required:
            return GateResult(
                check_name="identifier", passed=True, reject_reason=None, detail="none"
            )
        return GateResult(
            check_name="identifier",
            passed=False,
            reject_reason=RejectReason.MISSING_IDENTIFIER,
            detail=f"no {family} identifier",
        )
    if not validate(identifier, family):
        return GateResult(
            check_name="identifier",
            passed=False,
            reject_reason=RejectReason.INVALID_IDENTIFIER,
            detail=f"{identifier!r} is not a known {family}",
        )
    return GateResult(check_name="identifier", passed=True, reject_reason=None, detail="ok")
