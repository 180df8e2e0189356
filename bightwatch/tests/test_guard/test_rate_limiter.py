"""Tests for the fixed-window rate limiter and client key derivation."""

from bightwatch.guard.rate_limiter import RateLimiter, client_key
from bightwatch.tests.helpers import FakeClock


class TestRateLimiter:
    def test_allows_up_to_max(self, clock: FakeClock):
        limiter = RateLimiter(max_requests=3, window_seconds=60, clock=clock)
        assert [limiter.allow("a") for _ in range(3)] == [True, True, True]
        assert limiter.allow("a") is False

    def test_window_resets_with_fresh_count(self, clock: FakeClock):
        limiter = RateLimiter(max_requests=2, window_seconds=60, clock=clock)
        limiter.allow("a")
        limiter.allow("a")
        assert limiter.allow("a") is False

        clock.advance(61)
        assert limiter.allow("a") is True
        assert limiter.entry("a").count == 1

    def test_not_reset_at_window_boundary(self, clock: FakeClock):
        limiter = RateLimiter(max_requests=1, window_seconds=60, clock=clock)
        limiter.allow("a")
        clock.advance(60)
        assert limiter.allow("a") is False

    def test_denied_calls_do_not_count(self, clock: FakeClock):
        limiter = RateLimiter(max_requests=1, window_seconds=60, clock=clock)
        limiter.allow("a")
        for _ in range(5):
            limiter.allow("a")
        assert limiter.entry("a").count == 1

    def test_keys_independent(self, clock: FakeClock):
        limiter = RateLimiter(max_requests=1, window_seconds=60, clock=clock)
        assert limiter.allow("a") is True
        assert limiter.allow("b") is True
        assert limiter.allow("a") is False

    def test_bounded_store(self, clock: FakeClock):
        limiter = RateLimiter(max_requests=5, window_seconds=60, max_clients=3, clock=clock)
        for key in ("a", "b", "c", "d"):
            limiter.allow(key)
        assert len(limiter) == 3

    def test_idle_entries_evicted(self, clock: FakeClock):
        limiter = RateLimiter(max_requests=5, window_seconds=60, clock=clock)
        limiter.allow("a")
        clock.advance(121)
        assert limiter.entry("a") is None


class TestClientKey:
    def test_forwarded_for_first(self):
        headers = {"X-Forwarded-For": "198.51.100.1", "X-Real-IP": "198.51.100.2"}
        assert client_key(headers, "10.0.0.1") == "198.51.100.1"

    def test_real_ip_second(self):
        assert client_key({"x-real-ip": "198.51.100.2"}, "10.0.0.1") == "198.51.100.2"

    def test_remote_addr_third(self):
        assert client_key({}, "10.0.0.1") == "10.0.0.1"

    def test_loopback_default(self):
        assert client_key({}) == "127.0.0.1"

    def test_trusted_header_ignores_forwarded_for(self):
        headers = {"X-Forwarded-For": "spoofed", "X-Nf-Client-Connection-Ip": "198.51.100.9"}
        key = client_key(headers, "10.0.0.1", trusted_header="X-Nf-Client-Connection-Ip")
        assert key == "198.51.100.9"

    def test_trusted_header_missing_uses_remote(self):
        key = client_key({"X-Forwarded-For": "spoofed"}, "10.0.0.1", trusted_header="X-Edge-Ip")
        assert key == "10.0.0.1"
