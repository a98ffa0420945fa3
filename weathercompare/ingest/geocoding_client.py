"""Open-Meteo geocoding and IP-based location lookup."""

import logging

import httpx

from weathercompare.config.schema import FallbackLocation, GeocodingConfig
from weathercompare.errors import LocationNotFoundError
from weathercompare.models.location import ResolvedLocation

logger = logging.getLogger(__name__)

GEOCODING_BASE_URL = "https://geocoding-api.open-meteo.com/v1"
IP_LOOKUP_URL = "http://ip-api.com/json/"


class GeocodingClient:
    def __init__(
        self,
        base_url: str = GEOCODING_BASE_URL,
        ip_lookup_url: str = IP_LOOKUP_URL,
        timeout: float = 5.0,
        fallback: FallbackLocation | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.ip_lookup_url = ip_lookup_url
        self.timeout = timeout
        self.fallback = fallback or FallbackLocation()
        self._transport = transport

    @classmethod
    def from_config(cls, config: GeocodingConfig) -> "GeocodingClient":
        return cls(
            base_url=config.base_url,
            ip_lookup_url=config.ip_lookup_url,
            timeout=config.timeout_seconds,
            fallback=config.fallback_location,
        )

    async def geocode(self, query: str) -> ResolvedLocation:
        """Resolve a city name or ZIP code to coordinates."""
        query = query.strip()
        if not query:
            raise LocationNotFoundError("Unable to find location: empty query")
        params = {"name": query, "count": 1, "language": "en", "format": "json"}
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                resp = await client.get(f"{self.base_url}/search", params=params)
                resp.raise_for_status()
                data = resp.json()
        except (httpx.HTTPStatusError, httpx.RequestError, ValueError) as e:
            logger.warning("Geocoding failed for %r: %s", query, e)
            raise LocationNotFoundError(f"Unable to find location: {query}") from e

        results = data.get("results") if isinstance(data, dict) else None
        if not results:
            raise LocationNotFoundError(f"Unable to find location: {query}")

        top = results[0]
        try:
            lat, lon = float(top["latitude"]), float(top["longitude"])
        except (KeyError, TypeError, ValueError) as e:
            raise LocationNotFoundError(f"Unable to find location: {query}") from e
        region = top.get("admin1") or top.get("country") or ""
        name = f"{top.get('name', query)}, {region}" if region else top.get("name", query)
        return ResolvedLocation(name=name, lat=lat, lon=lon, state=top.get("admin1"))

    async def locate_by_ip(self) -> ResolvedLocation:
        """Approximate the caller's location, falling back to a fixed city."""
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                resp = await client.get(self.ip_lookup_url)
                resp.raise_for_status()
                data = resp.json()
            return ResolvedLocation(
                name=f"{data['city']}, {data['regionName']}",
                lat=float(data["lat"]),
                lon=float(data["lon"]),
                state=data["regionName"],
            )
        except (httpx.HTTPStatusError, httpx.RequestError, ValueError, KeyError, TypeError) as e:
            logger.warning("IP geolocation failed, using %s: %s", self.fallback.name, e)
            return ResolvedLocation(
                name=self.fallback.name,
                lat=self.fallback.lat,
                lon=self.fallback.lon,
                state=self.fallback.state,
            )
