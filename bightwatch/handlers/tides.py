"""Tide and current prediction proxies over the CO-OPS data getter."""

from bightwatch.guard.dates import today_param
from bightwatch.handlers.base import ProxyHandler
from bightwatch.models.common import Family
from bightwatch.models.proxy import ProxyRequest

COOPS_DATAGETTER = "https://api.tidesandcurrents.noaa.gov/api/prod/datagetter"


class _PredictionHandler(ProxyHandler):
    accepts_date = True
    invalid_error = "Invalid station ID"

    def params(self, station_id: str, day: str) -> dict[str, str]:
        raise NotImplementedError

    async def fetch(self, identifier: str | None, request: ProxyRequest) -> dict:
        assert identifier is not None
        day = request.query.get("date") or today_param()
        data = await self.fetcher.fetch_json(COOPS_DATAGETTER, params=self.params(identifier, day))
        return {
            "stationId": identifier,
            "date": day,
            "data": data,
            "status": "success",
        }


class TideDataHandler(_PredictionHandler):
    name = "tide-data"
    family = Family.TIDE_STATION
    missing_message = "Station ID is required in path: /tide-data/{stationId}"
    invalid_message = "Station ID must be a valid Alaska tide station"
    failure_message = "Unable to fetch tide data"

    def params(self, station_id: str, day: str) -> dict[str, str]:
        return {
            "begin_date": day,
            "end_date": day,
            "station": station_id,
            "product": "predictions",
            "datum": "MLLW",
            "time_zone": "lst_ldt",
            "units": "english",
            "format": "json",
            "interval": "hilo",
        }


class CurrentDataHandler(_PredictionHandler):
    name = "current-data"
    family = Family.CURRENT_STATION
    missing_message = "Station ID is required in path: /current-data/{stationId}"
    invalid_message = "Station ID must be a valid Alaska current station"
    failure_message = "Unable to fetch current data"

    def params(self, station_id: str, day: str) -> dict[str, str]:
        return {
            "begin_date": day,
            "end_date": day,
            "station": station_id,
            "product": "currents_predictions",
            "time_zone": "lst_ldt",
            "units": "english",
            "format": "json",
            "interval": "MAX_SLACK",
        }
