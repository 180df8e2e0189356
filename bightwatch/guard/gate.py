"""Request gate: method, rate limit, identifier and date checks in order.

Short-circuits on the first failed check; later checks do not run.
"""

from collections.abc import Callable

from bightwatch.guard.checks import date, identifier, method, rate_limit
from bightwatch.guard.rate_limiter import RateLimiter, client_key
from bightwatch.models.common import Family
from bightwatch.models.proxy import GateResult, GateVerdict, ProxyRequest


class RequestGate:
    def __init__(
        self,
        limiter: RateLimiter,
        family: Family | None = None,
        identifier_required: bool = True,
        trusted_header: str | None = None,
    ):
        self.limiter = limiter
        self.family = family
        self.identifier_required = identifier_required
        self.trusted_header = trusted_header

    def client_key(self, request: ProxyRequest) -> str:
        return client_key(request.headers, request.remote_addr, self.trusted_header)

    def evaluate(
        self,
        request: ProxyRequest,
        ident: str | None = None,
        date_param: str | None = None,
    ) -> GateVerdict:
        steps: list[Callable[[], GateResult]] = [
            lambda: method.check(request.method),
            lambda: rate_limit.check(self.limiter, self.client_key(request)),
        ]
        if self.family is not None:
            steps.append(
                lambda: identifier.check(ident, self.family, self.identifier_required)
            )
        steps.append(lambda: date.check(date_param))

        checks: list[GateResult] = []
        for step in steps:
            result = step()
            checks.append(result)
            if not result.passed:
                return GateVerdict(passed=False, checks=checks)
        return GateVerdict(passed=True, checks=checks)
