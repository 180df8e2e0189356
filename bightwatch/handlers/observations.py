"""Buoy and Southeast Alaska observation proxies."""

from bightwatch.extract.ndbc import parse_ndbc
from bightwatch.extract.seak import reshape_roundup
from bightwatch.handlers.base import ProxyHandler
from bightwatch.models.common import Family
from bightwatch.models.proxy import ProxyRequest

NDBC_REALTIME_URL = "https://www.ndbc.noaa.gov/data/realtime2/{station}.txt"
SEAK_ROUNDUP_URL = "https://www.weather.gov/source/ajk/obs/roundup/allSEAKobs.json"


class BuoyDataHandler(ProxyHandler):
    name = "buoy-data"
    family = Family.BUOY_STATION
    missing_message = "Station ID is required in path: /buoy-data/{stationId}"
    invalid_error = "Invalid station ID"
    invalid_message = "Station ID must be a valid Alaska buoy station"
    failure_message = "Unable to fetch buoy data"

    async def fetch(self, identifier: str | None, request: ProxyRequest) -> dict:
        assert identifier is not None
        text = await self.fetcher.fetch_text(NDBC_REALTIME_URL.format(station=identifier))
        return parse_ndbc(text, identifier).to_dict()


class SeakObservationsHandler(ProxyHandler):
    name = "seak-observations"
    family = None
    identifier_source = None
    failure_message = "Unable to fetch SEAK observations data"

    async def fetch(self, identifier: str | None, request: ProxyRequest) -> dict:
        raw = await self.fetcher.fetch_json(
            SEAK_ROUNDUP_URL, headers={"Accept": "application/json"}
        )
        return reshape_roundup(raw)
