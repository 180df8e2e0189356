"""Tests for the marine, coastal and weather forecast proxies."""

import asyncio
import json

import httpx
import pytest
import respx

from bightwatch.config.schema import AppConfig, FamilyConfig
from bightwatch.data.zones import LAND_FORECAST_URL, MARINE_ZONE_URLS
from bightwatch.handlers.coastal_forecast import CoastalForecastHandler
from bightwatch.handlers.marine_forecast import MarineForecastHandler
from bightwatch.handlers.weather_forecast import NWS_API_BASE, WeatherForecastHandler
from bightwatch.ingest.upstream import UpstreamFetcher
from bightwatch.tests.helpers import FakeClock, make_request

PREFIX = "/.netlify/functions"
CWFAJK_URL = MARINE_ZONE_URLS["PKZ012"]
PRODUCT_URL = "https://forecast.weather.gov/product.php"
ZONE_PAGE = (
    "<html><body><h2>AKZ317</h2>"
    "<p>...TODAY...Rain. Highs around 50. Southeast wind 15 to 25 mph. "
    "...TONIGHT...Showers. Lows around 42.</p></body></html>"
)


@pytest.fixture
def marine(default_config: AppConfig, clock: FakeClock) -> MarineForecastHandler:
    return MarineForecastHandler(
        default_config.family("marine-forecast"), UpstreamFetcher(), default_config.rate_limit, clock
    )


@pytest.fixture
def coastal(default_config: AppConfig, clock: FakeClock) -> CoastalForecastHandler:
    return CoastalForecastHandler(
        default_config.family("coastal-forecast"), UpstreamFetcher(), default_config.rate_limit, clock
    )


@pytest.fixture
def weather(default_config: AppConfig, clock: FakeClock) -> WeatherForecastHandler:
    return WeatherForecastHandler(
        default_config.family("weather-forecast"), UpstreamFetcher(), default_config.rate_limit, clock
    )


def call(handler, path: str, **kwargs):
    return asyncio.run(handler.handle(make_request(path, **kwargs)))


class TestMarineForecast:
    @respx.mock
    def test_akz317_end_to_end(self, marine: MarineForecastHandler, zfp_text: str):
        respx.get(LAND_FORECAST_URL).mock(return_value=httpx.Response(200, text=zfp_text))
        resp = call(marine, f"{PREFIX}/marine-forecast/AKZ317")

        assert resp.status_code == 200
        period = resp.body["properties"]["periods"][0]
        assert period["name"] == "Marine Forecast"
        assert period["detailedForecast"].startswith("AKZ317-182100-")
        assert "AKZ318" not in period["detailedForecast"]
        assert period["shortForecast"] == "Marine conditions for zone AKZ317"
        assert period["issueTime"] == "500 AM AKDT Sat Oct 18 2026"
        assert resp.headers["Access-Control-Allow-Origin"] == "*"
        assert resp.headers["Cache-Control"] == "public, max-age=1800"

    @respx.mock
    def test_ugc_listed_zone_lowercase(self, marine: MarineForecastHandler, cwf_text: str):
        respx.get(CWFAJK_URL).mock(return_value=httpx.Response(200, text=cwf_text))
        resp = call(marine, f"{PREFIX}/marine-forecast/pkz012")

        assert resp.status_code == 200
        props = resp.body["properties"]
        assert props["zone"] == "PKZ012"
        assert props["zoneName"] == "Northern Lynn Canal"
        assert [p["name"] for p in props["forecastPeriods"]] == ["TODAY", "TONIGHT"]
        assert props["forecastPeriods"][0]["wind"]["direction"] == "SE"
        assert props["fullText"] == cwf_text

    def test_invalid_zone_never_fetches(self, marine: MarineForecastHandler):
        with respx.mock(assert_all_called=False) as router:
            route = router.get(LAND_FORECAST_URL).mock(return_value=httpx.Response(200, text=""))
            resp = call(marine, f"{PREFIX}/marine-forecast/AKZ999")

        assert resp.status_code == 400
        assert resp.body["error"] == "Invalid zone ID"
        assert not route.called
        assert len(router.calls) == 0

    def test_missing_zone(self, marine: MarineForecastHandler):
        resp = call(marine, f"{PREFIX}/marine-forecast")
        assert resp.status_code == 400
        assert resp.body["error"] == "Invalid request"
        assert "/marine-forecast/{zoneId}" in resp.body["message"]
        assert resp.body["path"] == f"{PREFIX}/marine-forecast"

    def test_post_not_allowed(self, marine: MarineForecastHandler):
        resp = call(marine, f"{PREFIX}/marine-forecast/PKZ012", method="POST")
        assert resp.status_code == 405
        assert resp.body == {"error": "Method not allowed"}
        assert resp.headers["Access-Control-Allow-Origin"] == "*"

    def test_options_preflight(self, marine: MarineForecastHandler):
        resp = call(marine, f"{PREFIX}/marine-forecast/AKZ999", method="OPTIONS")
        assert resp.status_code == 200
        assert resp.body is None
        assert resp.headers["Access-Control-Allow-Methods"] == "GET, OPTIONS"
        assert resp.headers["Access-Control-Max-Age"] == "86400"
        # preflight does not consume the rate limit
        assert len(marine.limiter) == 0

    @respx.mock
    def test_61st_request_rate_limited(self, marine: MarineForecastHandler, zfp_text: str):
        respx.get(LAND_FORECAST_URL).mock(return_value=httpx.Response(200, text=zfp_text))
        for _ in range(60):
            assert call(marine, f"{PREFIX}/marine-forecast/AKZ317").status_code == 200

        resp = call(marine, f"{PREFIX}/marine-forecast/AKZ317")
        assert resp.status_code == 429
        assert resp.body["error"] == "Rate limit exceeded"
        assert resp.body["message"] == "Too many requests. Please try again later."

        # another client is unaffected
        other = call(marine, f"{PREFIX}/marine-forecast/AKZ317", remote_addr="198.51.100.99")
        assert other.status_code == 200

    @respx.mock
    def test_window_elapses(self, marine: MarineForecastHandler, clock: FakeClock, zfp_text: str):
        respx.get(LAND_FORECAST_URL).mock(return_value=httpx.Response(200, text=zfp_text))
        for _ in range(61):
            call(marine, f"{PREFIX}/marine-forecast/AKZ317")
        clock.advance(3601)
        assert call(marine, f"{PREFIX}/marine-forecast/AKZ317").status_code == 200

    @respx.mock
    def test_upstream_failure(self, marine: MarineForecastHandler):
        respx.get(CWFAJK_URL).mock(return_value=httpx.Response(503))
        resp = call(marine, f"{PREFIX}/marine-forecast/PKZ012")
        assert resp.status_code == 500
        assert resp.body == {
            "error": "Internal server error",
            "message": "Unable to fetch marine forecast data",
        }

    @respx.mock
    def test_zone_missing_from_bulletin(self, marine: MarineForecastHandler, cwf_text: str):
        respx.get(CWFAJK_URL).mock(return_value=httpx.Response(200, text=cwf_text))
        resp = call(marine, f"{PREFIX}/marine-forecast/PKZ013")
        assert resp.status_code == 500
        assert resp.body["message"] == "Forecast for zone PKZ013 not found"

    @respx.mock
    def test_region_scope_tolerates_missing_zone(
        self, marine: MarineForecastHandler, cwf_text: str
    ):
        without_taku = cwf_text.replace(cwf_text[cwf_text.index("PKZ098-"):cwf_text.index("PKZ011-")], "")
        respx.get(CWFAJK_URL).mock(return_value=httpx.Response(200, text=without_taku))
        resp = call(marine, f"{PREFIX}/marine-forecast/PKZ098", query={"scope": "region"})

        assert resp.status_code == 200
        props = resp.body["properties"]
        assert props["fullText"] == without_taku
        assert props["forecastPeriods"] == []
        assert props["periods"][0]["detailedForecast"] == ""
        assert props["periods"][0]["issueTime"] == "400 AM AKDT Sat Oct 18 2026"

    @respx.mock
    def test_lambda_shape(self, marine: MarineForecastHandler, zfp_text: str):
        respx.get(LAND_FORECAST_URL).mock(return_value=httpx.Response(200, text=zfp_text))
        out = call(marine, f"{PREFIX}/marine-forecast/AKZ317").to_dict()
        assert out["statusCode"] == 200
        assert json.loads(out["body"])["properties"]["zone"] == "AKZ317"


class TestCoastalForecast:
    @respx.mock
    def test_success(self, coastal: CoastalForecastHandler, zfp_text: str):
        respx.get(LAND_FORECAST_URL).mock(return_value=httpx.Response(200, text=zfp_text))
        resp = call(coastal, f"{PREFIX}/coastal-forecast/AKZ318")

        assert resp.status_code == 200
        props = resp.body["properties"]
        assert props["zoneName"] == "Central Prince of Wales Island"
        assert props["periods"][0]["name"] == "Coastal Forecast"
        assert props["periods"][0]["shortForecast"] == "Coastal conditions for Central Prince of Wales Island"
        assert props["periods"][0]["detailedForecast"].endswith("Lows around 44.")

    def test_marine_zone_rejected(self, coastal: CoastalForecastHandler):
        resp = call(coastal, f"{PREFIX}/coastal-forecast/PKZ012")
        assert resp.status_code == 400
        assert resp.body["message"] == "Zone ID must be a valid Alaska coastal forecast zone (AKZ317-AKZ332)"

    @respx.mock
    def test_failure_message(self, coastal: CoastalForecastHandler):
        respx.get(LAND_FORECAST_URL).mock(side_effect=httpx.ConnectError("down"))
        resp = call(coastal, f"{PREFIX}/coastal-forecast/AKZ317")
        assert resp.status_code == 500
        assert resp.body["message"] == "Unable to fetch coastal forecast data"


class TestWeatherForecast:
    API_URL = f"{NWS_API_BASE}/zones/forecast/AKZ317/forecast"

    @respx.mock
    def test_api_periods(self, weather: WeatherForecastHandler):
        respx.get(self.API_URL).mock(
            return_value=httpx.Response(
                200,
                json={"properties": {"periods": [
                    {"name": "Today", "detailedForecast": "Rain. Highs around 50."},
                    {"name": "Tonight", "detailedForecast": ""},
                ]}},
            )
        )
        resp = call(weather, f"{PREFIX}/weather-forecast/AKZ317")

        assert resp.status_code == 200
        props = resp.body["properties"]
        assert props["source"] == "api.weather.gov"
        assert props["periods"] == [
            {"name": "Today", "detailedForecast": "Rain. Highs around 50.", "shortForecast": "Rain"}
        ]
        assert resp.headers["Cache-Control"] == "public, max-age=3600"

    @respx.mock
    def test_zone_product_when_api_fails(self, weather: WeatherForecastHandler):
        respx.get(self.API_URL).mock(return_value=httpx.Response(500))
        respx.get(PRODUCT_URL).mock(return_value=httpx.Response(200, text=ZONE_PAGE))
        resp = call(weather, f"{PREFIX}/weather-forecast/AKZ317")

        props = resp.body["properties"]
        assert props["source"] == "zone-product"
        assert props["periods"][0]["detailedForecast"].startswith("TODAY Rain.")

    @respx.mock
    def test_fallback_when_everything_fails(self, weather: WeatherForecastHandler):
        respx.get(self.API_URL).mock(return_value=httpx.Response(500))
        respx.get(PRODUCT_URL).mock(side_effect=httpx.ReadTimeout("slow"))
        resp = call(weather, f"{PREFIX}/weather-forecast/AKZ317")

        assert resp.status_code == 200
        props = resp.body["properties"]
        assert props["source"] == "fallback"
        assert "Please visit weather.gov" in props["periods"][0]["detailedForecast"]

    @respx.mock
    def test_fail_policy_returns_500(self, default_config: AppConfig, clock: FakeClock):
        handler = WeatherForecastHandler(
            FamilyConfig(name="weather-forecast"), UpstreamFetcher(), default_config.rate_limit, clock
        )
        respx.get(self.API_URL).mock(return_value=httpx.Response(500))
        respx.get(PRODUCT_URL).mock(return_value=httpx.Response(502))
        resp = call(handler, f"{PREFIX}/weather-forecast/AKZ317")

        assert resp.status_code == 500
        assert resp.body["message"] == "Unable to fetch weather forecast data"
