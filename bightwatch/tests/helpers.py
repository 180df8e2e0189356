"""Test doubles shared across test packages."""

from typing import Any

from bightwatch.models.proxy import ProxyRequest


class FakeClock:
    """Manually advanced clock for rate-limit and cache tests."""

    def __init__(self, start: float = 1_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_request(
    path: str,
    method: str = "GET",
    query: dict | None = None,
    headers: dict | None = None,
    remote_addr: str | None = "203.0.113.7",
) -> ProxyRequest:
    return ProxyRequest(
        method=method,
        path=path,
        headers=headers or {},
        query=query or {},
        remote_addr=remote_addr,
    )


class StubClient:
    """HttpClient stand-in: maps URL substrings to payloads or exceptions."""

    def __init__(self, routes: dict[str, Any]):
        self.routes = routes
        self.calls: list[str] = []

    def get(self, url: str, **kwargs: Any) -> Any:
        self.calls.append(url)
        for fragment, result in self.routes.items():
            if fragment in url:
                if isinstance(result, Exception):
                    raise result
                return result
        raise RuntimeError(f"no stub for {url}")
