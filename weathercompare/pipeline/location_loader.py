"""Resolve a location and assemble a fully populated comparison slot."""

import asyncio
import logging
from dataclasses import dataclass, field

from weathercompare.config.schema import WeatherCompareConfig
from weathercompare.errors import WeatherCompareError
from weathercompare.ingest.geocoding_client import GeocodingClient
from weathercompare.ingest.normalize import parse_alerts, parse_forecast_periods, parse_point
from weathercompare.ingest.nws_client import NwsClient
from weathercompare.metrics.daily import build_daily_summaries
from weathercompare.models.common import resolve_tz, utc_now_iso
from weathercompare.models.location import LocationSlot, ResolvedLocation
from weathercompare.state import AppState

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    published: dict[int, LocationSlot] = field(default_factory=dict)
    errors: dict[int, str] = field(default_factory=dict)
    stale: list[int] = field(default_factory=list)


class LocationLoader:
    def __init__(
        self,
        geocoder: GeocodingClient,
        nws: NwsClient,
        config: WeatherCompareConfig | None = None,
    ):
        self.geocoder = geocoder
        self.nws = nws
        self.config = config or WeatherCompareConfig()

    @classmethod
    def from_config(cls, config: WeatherCompareConfig) -> "LocationLoader":
        return cls(
            GeocodingClient.from_config(config.geocoding),
            NwsClient.from_config(config.nws),
            config,
        )

    async def resolve(self, query: str | ResolvedLocation) -> ResolvedLocation:
        if isinstance(query, ResolvedLocation):
            return query
        return await self.geocoder.geocode(query)

    async def load(self, index: int, query: str | ResolvedLocation) -> LocationSlot:
        """Geocode, fetch forecast and alerts, and summarize into one slot.

        Nothing is returned until every piece is in hand.
        """
        location = await self.resolve(query)
        point = parse_point(await self.nws.get_point(location.lat, location.lon))

        raw_forecast, raw_alerts = await asyncio.gather(
            self.nws.get_forecast(point.forecast_url),
            self.nws.get_active_alerts(location.lat, location.lon),
        )
        periods = parse_forecast_periods(raw_forecast)
        alerts = parse_alerts(raw_alerts, location.lat, location.lon)

        timezone = self.config.display.timezone or point.timezone
        summaries = build_daily_summaries(periods, resolve_tz(timezone))
        logger.info(
            "Loaded slot %d: %s (%d periods, %d days, %d alerts)",
            index, location.name, len(periods), len(summaries), len(alerts),
        )
        return LocationSlot(
            index=index,
            location=location,
            periods=tuple(periods),
            summaries=summaries,
            alerts=tuple(alerts),
            timezone=timezone,
            city=point.city,
            state=point.state or location.state,
            forecast_zone=point.forecast_zone,
            fetched_at=utc_now_iso(),
        )

    async def update(
        self, state: AppState, index: int, query: str | ResolvedLocation
    ) -> LocationSlot | None:
        """Load a slot and publish it unless a newer update overtook it."""
        ticket = state.begin_update(index)
        slot = await self.load(index, query)
        if not state.publish(index, slot, ticket):
            return None
        return slot

    async def update_many(
        self, state: AppState, queries: dict[int, str | ResolvedLocation]
    ) -> LoadResult:
        """Update several slots concurrently; one failure doesn't stop the rest."""
        result = LoadResult()
        indexes = list(queries)
        outcomes = await asyncio.gather(
            *(self.update(state, i, queries[i]) for i in indexes),
            return_exceptions=True,
        )
        for index, outcome in zip(indexes, outcomes):
            if isinstance(outcome, WeatherCompareError):
                logger.warning("Slot %d failed: %s", index, outcome)
                result.errors[index] = str(outcome)
            elif isinstance(outcome, BaseException):
                raise outcome
            elif outcome is None:
                result.stale.append(index)
            else:
                result.published[index] = outcome
        return result
