"""Method check: only GET reaches the handler body."""

from bightwatch.models.proxy import GateResult, RejectReason


def check(method: str) -> GateResult:
    if method.upper() != "GET":
        return GateResult(
            check_name="method",
            passed=False,
            reject_reason=RejectReason.METHOD_NOT_ALLOWED,
            detail=f"{method} not allowed",
        )
    return GateResult(check_name="method", passed=True, reject_reason=None, detail="ok")
