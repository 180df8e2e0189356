"""Tests for the individual gate checks, date parsing and the request gate."""

from unittest.mock import patch

import pytest

from bightwatch.guard.checks import date, identifier, method, rate_limit
from bightwatch.guard.dates import InvalidDate, is_valid_date, parse_date, today_param
from bightwatch.guard.gate import RequestGate
from bightwatch.guard.rate_limiter import RateLimiter
from bightwatch.models.common import Family
from bightwatch.models.proxy import RejectReason
from bightwatch.tests.helpers import FakeClock, make_request


class TestMethodCheck:
    def test_get_passes(self):
        assert method.check("GET").passed is True
        assert method.check("get").passed is True

    def test_post_fails(self):
        r = method.check("POST")
        assert r.passed is False
        assert r.reject_reason == RejectReason.METHOD_NOT_ALLOWED


class TestRateLimitCheck:
    def test_fail_after_limit(self, clock: FakeClock):
        limiter = RateLimiter(max_requests=1, window_seconds=60, clock=clock)
        assert rate_limit.check(limiter, "k").passed is True
        r = rate_limit.check(limiter, "k")
        assert r.passed is False
        assert r.reject_reason == RejectReason.RATE_LIMITED


class TestIdentifierCheck:
    def test_missing(self):
        r = identifier.check(None, Family.MARINE_ZONE)
        assert r.reject_reason == RejectReason.MISSING_IDENTIFIER

    def test_missing_optional(self):
        r = identifier.check(None, Family.WARNING_TYPE, required=False)
        assert r.passed is True
        assert r.detail == "none"

    def test_invalid(self):
        r = identifier.check("AKZ999", Family.MARINE_ZONE)
        assert r.reject_reason == RejectReason.INVALID_IDENTIFIER

    def test_valid(self):
        assert identifier.check("pkz012", Family.MARINE_ZONE).passed is True


class TestDates:
    def test_parse(self):
        assert parse_date("20261018").isoformat() == "2026-10-18"

    @pytest.mark.parametrize("bad", ["2026-10-18", "20261340", "20260230", "2026101", "abcdefgh", ""])
    def test_invalid(self, bad: str):
        assert is_valid_date(bad) is False
        with pytest.raises(InvalidDate):
            parse_date(bad)

    def test_date_check_none_passes(self):
        assert date.check(None).passed is True

    def test_date_check_bad(self):
        assert date.check("20261340").reject_reason == RejectReason.INVALID_DATE

    def test_today_param_format(self):
        assert is_valid_date(today_param())


class TestRequestGate:
    def _gate(self, clock: FakeClock, max_requests: int = 5, **kwargs) -> RequestGate:
        limiter = RateLimiter(max_requests=max_requests, window_seconds=3600, clock=clock)
        return RequestGate(limiter, **kwargs)

    def test_all_pass(self, clock: FakeClock):
        gate = self._gate(clock, family=Family.MARINE_ZONE)
        verdict = gate.evaluate(make_request("/marine-forecast/PKZ012"), "PKZ012")
        assert verdict.passed is True
        assert [c.check_name for c in verdict.checks] == ["method", "rate_limit", "identifier", "date"]
        assert verdict.failure is None

    def test_method_short_circuits(self, clock: FakeClock):
        gate = self._gate(clock, family=Family.MARINE_ZONE)
        with patch.object(gate.limiter, "allow") as allow:
            verdict = gate.evaluate(make_request("/x", method="POST"), "PKZ012")
        allow.assert_not_called()
        assert verdict.failure.reject_reason == RejectReason.METHOD_NOT_ALLOWED
        assert len(verdict.checks) == 1

    def test_rate_limit_before_identifier(self, clock: FakeClock):
        gate = self._gate(clock, max_requests=1, family=Family.MARINE_ZONE)
        gate.evaluate(make_request("/x"), "PKZ012")
        verdict = gate.evaluate(make_request("/x"), "AKZ999")
        assert verdict.failure.reject_reason == RejectReason.RATE_LIMITED

    def test_no_family_skips_identifier(self, clock: FakeClock):
        gate = self._gate(clock)
        verdict = gate.evaluate(make_request("/seak-observations"))
        assert verdict.passed is True
        assert "identifier" not in [c.check_name for c in verdict.checks]

    def test_bad_date(self, clock: FakeClock):
        gate = self._gate(clock, family=Family.TIDE_STATION)
        verdict = gate.evaluate(make_request("/tide-data/9452210"), "9452210", "2026-10-18")
        assert verdict.failure.reject_reason == RejectReason.INVALID_DATE

    def test_client_key_uses_trusted_header(self, clock: FakeClock):
        gate = self._gate(clock, trusted_header="X-Edge-Ip")
        req = make_request("/x", headers={"X-Edge-Ip": "198.51.100.4", "X-Forwarded-For": "spoof"})
        assert gate.client_key(req) == "198.51.100.4"
