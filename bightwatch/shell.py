"""Terminal dashboard shell: region selection, concurrent widget loads, refresh loop.

Usage:
    bightwatch dashboard --region CWFAJK
    bightwatch dashboard --once
"""

import logging
import signal
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime

from bightwatch.client.cache import ResponseCache
from bightwatch.client.http import HttpClient
from bightwatch.client.storage import LocalStorage, Preferences
from bightwatch.config.schema import AppConfig
from bightwatch.data.zones import MARINE_REGIONS, MarineRegion
from bightwatch.widgets.alerts import Alerts
from bightwatch.widgets.base import Widget
from bightwatch.widgets.discussion import Discussion
from bightwatch.widgets.forecast import CoastalForecast, ForecastSummary, Weather
from bightwatch.widgets.location import LocationSelector
from bightwatch.widgets.observations import Observations
from bightwatch.widgets.tides import Currents, Tides

logger = logging.getLogger(__name__)

MAX_WORKERS = 8

DEFAULT_SELECTIONS = {
    "boatsafe_weather_zone": "AKZ325",
    "boatsafe_coastal_location": "AKZ325",
    "boatsafe_discussion_office": "AJK",
    "boatsafe_tide_station": "9452210",
    "boatsafe_current_station": "ACT6151",
    "boatsafe_buoy_station": "46083",
}


class DashboardShell:
    """Loads every widget for the selected region and keeps them fresh."""

    def __init__(
        self,
        config: AppConfig,
        client: HttpClient | None = None,
        storage: LocalStorage | None = None,
    ):
        self.config = config
        self.storage = storage or LocalStorage(config.client.storage_path)
        self.cache = ResponseCache(self.storage)
        self.client = client or HttpClient(self.cache, base_timeout=config.client.timeout_seconds)
        self.preferences = Preferences(self.storage)
        self.selector = LocationSelector(self.preferences)

        widget_args = (
            self.client,
            config.client.base_url,
            config.client.retries,
            config.client.cache_ttl_minutes,
        )
        self.widgets: dict[str, Widget] = {
            "forecast": ForecastSummary(*widget_args),
            "discussion": Discussion(*widget_args),
            "alerts": Alerts(*widget_args),
            "tides": Tides(*widget_args),
            "currents": Currents(*widget_args),
            "observations": Observations(*widget_args),
            "coastal": CoastalForecast(*widget_args),
            "weather": Weather(*widget_args),
        }
        self._running = False
        self._refreshes = 0

    def selection(self, key: str) -> str:
        return self.preferences.get(key) or DEFAULT_SELECTIONS[key]

    def select_region(self, code: str | None = None) -> MarineRegion:
        if code:
            return self.selector.select(code)
        region = self.selector.restore()
        if region is None:
            region = self.selector.select(MARINE_REGIONS[0].code)
        return region

    def load_region(self, region: MarineRegion) -> dict[str, str]:
        """Load every widget concurrently; a failing widget shows its error block."""
        jobs = {
            "forecast": (region,),
            "discussion": (self.selection("boatsafe_discussion_office"),),
            "alerts": (),
            "tides": (self.selection("boatsafe_tide_station"),),
            "currents": (self.selection("boatsafe_current_station"),),
            "observations": (self.selection("boatsafe_buoy_station"),),
            "coastal": (self.selection("boatsafe_coastal_location"),),
            "weather": (self.selection("boatsafe_weather_zone"),),
        }
        with ThreadPoolExecutor(max_workers=MAX_WORKERS) as pool:
            futures = {
                name: pool.submit(self.widgets[name].load, *args)
                for name, args in jobs.items()
            }
            outputs = {name: f.result() for name, f in futures.items()}

        failed = [name for name, w in self.widgets.items() if w.error]
        if failed:
            logger.warning("Widgets with errors: %s", ", ".join(failed))
        logger.info("Loaded %s (%d/%d widgets ok)", region.code, len(jobs) - len(failed), len(jobs))
        return outputs

    def render(self, outputs: dict[str, str]) -> str:
        stamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M UTC")
        blocks = [self.selector.render(), *outputs.values(), f"Last updated: {stamp}"]
        return "\n\n".join(blocks)

    def refresh(self, region: MarineRegion) -> str:
        self._refreshes += 1
        removed = self.cache.cleanup()
        logger.info("Refresh #%d for %s (%d stale cache entries removed)", self._refreshes, region.code, removed)
        screen = self.render(self.load_region(region))
        print(screen)
        return screen

    def run(self, region_code: str | None = None, once: bool = False) -> int:
        region = self.select_region(region_code)
        self.refresh(region)
        if once:
            return 0

        self._setup_signals()
        self._running = True
        interval = self.config.client.refresh_minutes * 60
        logger.info("Dashboard refresh every %ds", interval)
        while self._running:
            # Sleep in 1-second increments so we can respond to signals
            sleep_until = time.monotonic() + interval
            while self._running and time.monotonic() < sleep_until:
                time.sleep(1)
            if self._running:
                self.refresh(region)

        logger.info("Dashboard stopped after %d refreshes", self._refreshes)
        return 0

    def stop(self) -> None:
        self._running = False

    def _setup_signals(self) -> None:
        def _stop(signum: int, frame: object) -> None:
            logger.info("Received %s, shutting down", signal.Signals(signum).name)
            self.stop()

        signal.signal(signal.SIGTERM, _stop)
        signal.signal(signal.SIGINT, _stop)
