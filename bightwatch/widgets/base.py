"""Dashboard widget base: fetch through the cached client, render plain text."""

import logging
from typing import Any
from urllib.parse import quote, urlencode

from bightwatch.client.cache import DEFAULT_TTL_MINUTES
from bightwatch.client.http import DEFAULT_RETRIES, HttpClient

logger = logging.getLogger(__name__)


def header(title: str) -> str:
    return f"=== {title} ==="


def error_block(title: str, message: str) -> str:
    return "\n".join([header(title), f"Error: {message}"])


class Widget:
    """Subclasses set `function` and `title` and implement `render`.

    `load` never raises; any failure becomes the widget's error block so one
    broken feed does not take the dashboard down.
    """

    function: str = ""
    title: str = ""
    # Widgets whose feed changes faster or slower than the configured default
    # pin their own TTL here.
    cache_ttl_minutes: float | None = None

    def __init__(
        self,
        client: HttpClient,
        base_url: str,
        retries: int = DEFAULT_RETRIES,
        default_ttl_minutes: float = DEFAULT_TTL_MINUTES,
    ):
        self.client = client
        self.base_url = base_url.rstrip("/")
        self.retries = retries
        self.default_ttl_minutes = default_ttl_minutes
        self.output = ""
        self.error: str | None = None

    def url(self, identifier: str | None = None, **query: str | None) -> str:
        url = f"{self.base_url}/{self.function}"
        if identifier:
            url += "/" + quote(identifier)
        params = {k: v for k, v in query.items() if v}
        if params:
            url += "?" + urlencode(params)
        return url

    def get(self, url: str, cache_ttl_minutes: float | None = None) -> Any:
        ttl = cache_ttl_minutes
        if ttl is None:
            ttl = self.cache_ttl_minutes if self.cache_ttl_minutes is not None else self.default_ttl_minutes
        return self.client.get(url, cache_ttl_minutes=ttl, retries=self.retries)

    def fetch(self, *args: Any, **kwargs: Any) -> Any:
        return self.get(self.url(*args, **kwargs))

    def load(self, *args: Any, **kwargs: Any) -> str:
        try:
            data = self.fetch(*args, **kwargs)
            self.output = self.render(data)
            self.error = None
        except Exception as e:
            logger.warning("%s widget failed: %s", self.title, e)
            self.error = str(e) or type(e).__name__
            self.output = error_block(self.title, self.error)
        return self.output

    def render(self, data: Any) -> str:
        raise NotImplementedError
