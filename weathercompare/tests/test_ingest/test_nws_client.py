"""Tests for NWS API client with mocked httpx."""

import asyncio

import httpx
import pytest
import respx

from weathercompare.errors import CoverageError, ForecastUnavailableError
from weathercompare.ingest.nws_client import NwsClient

BASE = "https://test-nws.example.com"
FORECAST_URL = f"{BASE}/gridpoints/LOT/76,73/forecast"


@pytest.fixture
def nws() -> NwsClient:
    return NwsClient(base_url=BASE, max_retries=1, retry_base_delay=0.0)


class TestGetPoint:
    @respx.mock
    def test_success(self, nws: NwsClient, points_payload: dict):
        respx.get(f"{BASE}/points/41.8781,-87.6298").mock(
            return_value=httpx.Response(200, json=points_payload)
        )
        result = asyncio.run(nws.get_point(41.8781, -87.6298))
        assert result["properties"]["gridId"] == "LOT"

    @respx.mock
    def test_headers(self, nws: NwsClient, points_payload: dict):
        route = respx.get(f"{BASE}/points/41.8781,-87.6298").mock(
            return_value=httpx.Response(200, json=points_payload)
        )
        asyncio.run(nws.get_point(41.8781, -87.6298))
        request = route.calls[0].request
        assert "weathercompare" in request.headers["user-agent"]
        assert request.headers["accept"] == "application/geo+json"

    @respx.mock
    def test_outside_coverage(self, nws: NwsClient):
        respx.get(f"{BASE}/points/51.5074,-0.1278").mock(
            return_value=httpx.Response(404, json={"title": "Data Unavailable For Requested Point"})
        )
        with pytest.raises(CoverageError, match="U.S. only"):
            asyncio.run(nws.get_point(51.5074, -0.1278))

    @respx.mock
    def test_maintenance_page(self, nws: NwsClient):
        respx.get(f"{BASE}/points/41.8781,-87.6298").mock(
            return_value=httpx.Response(200, text="<html>maintenance</html>")
        )
        with pytest.raises(CoverageError):
            asyncio.run(nws.get_point(41.8781, -87.6298))


class TestGetForecast:
    @respx.mock
    def test_success(self, nws: NwsClient, forecast_payload: dict):
        respx.get(FORECAST_URL).mock(return_value=httpx.Response(200, json=forecast_payload))
        result = asyncio.run(nws.get_forecast(FORECAST_URL))
        assert len(result["properties"]["periods"]) == 4

    @respx.mock
    def test_retry_on_503(self, nws: NwsClient, forecast_payload: dict):
        route = respx.get(FORECAST_URL).mock(
            side_effect=[
                httpx.Response(503),
                httpx.Response(200, json=forecast_payload),
            ]
        )
        result = asyncio.run(nws.get_forecast(FORECAST_URL))
        assert "properties" in result
        assert route.call_count == 2

    @respx.mock
    def test_exhausted_retries(self, nws: NwsClient):
        route = respx.get(FORECAST_URL).mock(return_value=httpx.Response(503))
        with pytest.raises(ForecastUnavailableError):
            asyncio.run(nws.get_forecast(FORECAST_URL))
        assert route.call_count == 2

    @respx.mock
    def test_connection_error(self, nws: NwsClient):
        respx.get(FORECAST_URL).mock(side_effect=httpx.ConnectError("boom"))
        with pytest.raises(ForecastUnavailableError):
            asyncio.run(nws.get_forecast(FORECAST_URL))

    @respx.mock
    def test_no_retries_configured(self, forecast_payload: dict):
        client = NwsClient(base_url=BASE, max_retries=0)
        route = respx.get(FORECAST_URL).mock(return_value=httpx.Response(429))
        with pytest.raises(ForecastUnavailableError):
            asyncio.run(client.get_forecast(FORECAST_URL))
        assert route.call_count == 1

    @respx.mock
    def test_maintenance_page(self, nws: NwsClient):
        respx.get(FORECAST_URL).mock(
            return_value=httpx.Response(200, text="<html>maintenance</html>")
        )
        with pytest.raises(ForecastUnavailableError):
            asyncio.run(nws.get_forecast(FORECAST_URL))


class TestGetActiveAlerts:
    @respx.mock
    def test_by_point(self, nws: NwsClient, alerts_payload: dict):
        route = respx.get(f"{BASE}/alerts/active", params={"point": "41.8781,-87.6298"}).mock(
            return_value=httpx.Response(200, json=alerts_payload)
        )
        result = asyncio.run(nws.get_active_alerts(41.8781, -87.6298))
        assert route.called
        assert len(result["features"]) == 2

    @respx.mock
    def test_by_zone(self, nws: NwsClient, alerts_payload: dict):
        route = respx.get(f"{BASE}/alerts/active", params={"zone": "ILZ014"}).mock(
            return_value=httpx.Response(200, json=alerts_payload)
        )
        asyncio.run(nws.get_active_alerts(41.8781, -87.6298, zone="ILZ014"))
        assert route.called

    @respx.mock
    def test_failure_yields_empty(self, nws: NwsClient):
        respx.get(f"{BASE}/alerts/active").mock(return_value=httpx.Response(500))
        result = asyncio.run(nws.get_active_alerts(41.8781, -87.6298))
        assert result["features"] == []
