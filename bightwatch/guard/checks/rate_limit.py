"""Rate limit check: blocks once a client exhausts its window."""

from bightwatch.guard.rate_limiter import RateLimiter
from bightwatch.models.proxy import GateResult, RejectReason


def check(limiter: RateLimiter, key: str) -> GateResult:
    if not limiter.allow(key):
        return GateResult(
            check_name="rate_limit",
            passed=False,
            reject_reason=RejectReason.RATE_LIMITED,
            detail=f"{key} over {limiter.max_requests} requests per window",
        )
    return GateResult(
        check_name="rate_limit", passed=True, reject_reason=None, detail="ok"
    )
