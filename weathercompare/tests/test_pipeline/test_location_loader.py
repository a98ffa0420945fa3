"""Tests for slot loading with mocked upstream clients."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from weathercompare.config.schema import WeatherCompareConfig
from weathercompare.errors import CoverageError, ForecastUnavailableError, LocationNotFoundError
from weathercompare.ingest.geocoding_client import GeocodingClient
from weathercompare.ingest.nws_client import NwsClient
from weathercompare.models.forecast import DailySummary
from weathercompare.models.location import ResolvedLocation
from weathercompare.pipeline.location_loader import LocationLoader
from weathercompare.state import AppState
from weathercompare.tests.factories import CHICAGO


@pytest.fixture
def nws(points_payload, forecast_payload, alerts_payload) -> MagicMock:
    mock = MagicMock(spec=NwsClient)
    mock.get_point = AsyncMock(return_value=points_payload)
    mock.get_forecast = AsyncMock(return_value=forecast_payload)
    mock.get_active_alerts = AsyncMock(return_value=alerts_payload)
    return mock


@pytest.fixture
def geocoder() -> MagicMock:
    async def geocode(query: str) -> ResolvedLocation:
        if query == "Atlantis":
            raise LocationNotFoundError("Unable to find location: Atlantis")
        if query.startswith("slow"):
            await asyncio.sleep(0.05)
        return ResolvedLocation(name=f"{query}, Illinois", lat=41.8781, lon=-87.6298, state="Illinois")

    mock = MagicMock(spec=GeocodingClient)
    mock.geocode = AsyncMock(side_effect=geocode)
    return mock


@pytest.fixture
def loader(geocoder, nws) -> LocationLoader:
    return LocationLoader(geocoder, nws, WeatherCompareConfig())


class TestLoad:
    def test_builds_complete_slot(self, loader: LocationLoader, nws: MagicMock):
        slot = asyncio.run(loader.load(1, "Chicago"))
        assert slot.index == 1
        assert slot.name == "Chicago, Illinois"
        assert slot.timezone == "America/Chicago"
        assert slot.city == "Chicago"
        assert slot.state == "IL"
        assert slot.forecast_zone == "ILZ014"
        assert len(slot.periods) == 4
        assert len(slot.alerts) == 2
        assert slot.summaries["2024-06-01"] == DailySummary(88, 70, 95, 70)
        assert slot.fetched_at
        nws.get_forecast.assert_awaited_once_with(
            "https://api.weather.gov/gridpoints/LOT/76,73/forecast"
        )

    def test_resolved_location_skips_geocoding(self, loader: LocationLoader, geocoder: MagicMock):
        slot = asyncio.run(loader.load(0, CHICAGO))
        assert slot.location is CHICAGO
        geocoder.geocode.assert_not_awaited()

    def test_display_timezone_override(self, geocoder, nws):
        config = WeatherCompareConfig(display={"timezone": "Asia/Tokyo"})
        slot = asyncio.run(LocationLoader(geocoder, nws, config).load(0, "Chicago"))
        assert slot.timezone == "Asia/Tokyo"
        # 18:00-05:00 is 08:00 the next morning in Tokyo
        assert "2024-06-03" in slot.summaries

    def test_coverage_error_propagates(self, loader: LocationLoader, nws: MagicMock):
        nws.get_point.side_effect = CoverageError("Location outside NWS coverage (U.S. only)")
        with pytest.raises(CoverageError):
            asyncio.run(loader.load(0, "London"))


class TestUpdate:
    def test_publishes(self, loader: LocationLoader):
        state = AppState()
        slot = asyncio.run(loader.update(state, 2, "Chicago"))
        assert slot is not None
        assert state.get(2) is slot

    def test_failed_update_leaves_slot_untouched(self, loader: LocationLoader):
        state = AppState()
        asyncio.run(loader.update(state, 0, "Chicago"))
        before = state.get(0)
        with pytest.raises(LocationNotFoundError):
            asyncio.run(loader.update(state, 0, "Atlantis"))
        assert state.get(0) is before

    def test_newer_update_wins(self, loader: LocationLoader):
        async def run():
            state = AppState()
            slow = asyncio.create_task(loader.update(state, 0, "slow town"))
            await asyncio.sleep(0)
            fast = await loader.update(state, 0, "Evanston")
            return state, fast, await slow

        state, fast, slow = asyncio.run(run())
        assert fast is not None
        assert slow is None
        assert state.get(0).name == "Evanston, Illinois"


class TestUpdateMany:
    def test_partial_failure(self, loader: LocationLoader):
        state = AppState()
        result = asyncio.run(loader.update_many(state, {0: "Chicago", 1: "Atlantis", 2: "Evanston"}))
        assert set(result.published) == {0, 2}
        assert "Atlantis" in result.errors[1]
        assert state.get(1) is None
        assert state.get(2).name == "Evanston, Illinois"

    def test_unavailable_forecast_is_collected(self, loader: LocationLoader, nws: MagicMock):
        nws.get_forecast.side_effect = ForecastUnavailableError("Weather data unavailable: bad body")
        state = AppState()
        result = asyncio.run(loader.update_many(state, {0: CHICAGO, 1: CHICAGO}))
        assert result.published == {}
        assert set(result.errors) == {0, 1}
        assert "unavailable" in result.errors[0]
        assert state.slots == (None, None, None)
