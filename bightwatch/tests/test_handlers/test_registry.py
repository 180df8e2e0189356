"""Tests for handler wiring and dispatch."""

import asyncio

import pytest

from bightwatch.config.schema import AppConfig
from bightwatch.handlers.registry import HANDLER_TYPES, build_handlers, dispatch
from bightwatch.ingest.upstream import UpstreamFetcher
from bightwatch.tests.helpers import FakeClock, make_request


class TestBuildHandlers:
    def test_every_family(self, default_config: AppConfig):
        handlers = build_handlers(default_config)
        assert set(handlers) == {cls.name for cls in HANDLER_TYPES}
        assert len(handlers) == 10

    def test_fetcher_from_config(self, default_config: AppConfig):
        handlers = build_handlers(default_config)
        fetcher = handlers["buoy-data"].fetcher
        assert fetcher.user_agent == default_config.fetch.user_agent
        assert fetcher.timeout == default_config.fetch.timeout_seconds

    def test_shared_fetcher_separate_limits(self, default_config: AppConfig, clock: FakeClock):
        fetcher = UpstreamFetcher()
        handlers = build_handlers(default_config, fetcher=fetcher, clock=clock)
        assert handlers["tide-data"].fetcher is fetcher
        assert handlers["tide-data"].limiter is not handlers["current-data"].limiter
        assert handlers["tide-data"].limiter.max_requests == 100
        assert handlers["buoy-data"].limiter.max_requests == 120


class TestDispatch:
    def test_routes_by_name(self, default_config: AppConfig, clock: FakeClock):
        handlers = build_handlers(default_config, clock=clock)
        resp = asyncio.run(
            dispatch(handlers, "buoy-data", make_request("/buoy-data/xyz", method="OPTIONS"))
        )
        assert resp.status_code == 200
        assert resp.headers["Access-Control-Max-Age"] == "86400"

    def test_unknown_name(self, default_config: AppConfig):
        handlers = build_handlers(default_config)
        with pytest.raises(KeyError):
            asyncio.run(dispatch(handlers, "nope", make_request("/nope")))
