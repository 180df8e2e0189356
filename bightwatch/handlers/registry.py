"""Name -> handler wiring for every data family."""

import logging
import time
from collections.abc import Callable

from bightwatch.config.schema import AppConfig
from bightwatch.handlers.alerts import MarineAlertsHandler, WeatherWarningsHandler
from bightwatch.handlers.base import ProxyHandler
from bightwatch.handlers.coastal_forecast import CoastalForecastHandler
from bightwatch.handlers.discussion import ForecastDiscussionHandler
from bightwatch.handlers.marine_forecast import MarineForecastHandler
from bightwatch.handlers.observations import BuoyDataHandler, SeakObservationsHandler
from bightwatch.handlers.tides import CurrentDataHandler, TideDataHandler
from bightwatch.handlers.weather_forecast import WeatherForecastHandler
from bightwatch.ingest.upstream import UpstreamFetcher
from bightwatch.models.proxy import ProxyRequest, ProxyResponse

logger = logging.getLogger(__name__)

HANDLER_TYPES: list[type[ProxyHandler]] = [
    MarineForecastHandler,
    WeatherForecastHandler,
    CoastalForecastHandler,
    TideDataHandler,
    CurrentDataHandler,
    BuoyDataHandler,
    SeakObservationsHandler,
    MarineAlertsHandler,
    ForecastDiscussionHandler,
    WeatherWarningsHandler,
]


def build_handlers(
    config: AppConfig,
    fetcher: UpstreamFetcher | None = None,
    clock: Callable[[], float] = time.monotonic,
) -> dict[str, ProxyHandler]:
    if fetcher is None:
        fetcher = UpstreamFetcher(
            user_agent=config.fetch.user_agent,
            timeout=config.fetch.timeout_seconds,
        )
    handlers = {
        cls.name: cls(config.family(cls.name), fetcher, config.rate_limit, clock)
        for cls in HANDLER_TYPES
    }
    logger.info("Built %d handlers: %s", len(handlers), ", ".join(handlers))
    return handlers


async def dispatch(
    handlers: dict[str, ProxyHandler], name: str, request: ProxyRequest
) -> ProxyResponse:
    """Route to the named family; unknown names raise KeyError."""
    return await handlers[name].handle(request)
