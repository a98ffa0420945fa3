"""NWS API client: points, forecasts and active alerts."""

import asyncio
import logging

import httpx

from weathercompare.config.schema import NwsConfig
from weathercompare.errors import CoverageError, ForecastUnavailableError

logger = logging.getLogger(__name__)

NWS_BASE_URL = "https://api.weather.gov"
DEFAULT_USER_AGENT = "weathercompare/0.1.0"


class NwsClient:
    def __init__(
        self,
        base_url: str = NWS_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 5.0,
        max_retries: int = 1,
        retry_base_delay: float = 1.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay
        self._transport = transport

    @classmethod
    def from_config(cls, config: NwsConfig) -> "NwsClient":
        return cls(
            base_url=config.base_url,
            user_agent=config.user_agent,
            timeout=config.timeout_seconds,
            max_retries=config.max_retries,
            retry_base_delay=config.retry_base_delay,
        )

    @property
    def headers(self) -> dict[str, str]:
        return {"User-Agent": self.user_agent, "Accept": "application/geo+json"}

    async def _get(self, url: str, params: dict | None = None) -> httpx.Response:
        """GET with retries on 503/429 and exponential backoff."""
        async with httpx.AsyncClient(
            headers=self.headers, timeout=self.timeout, transport=self._transport
        ) as client:
            for attempt in range(self.max_retries + 1):
                try:
                    resp = await client.get(url, params=params)
                except httpx.RequestError as e:
                    if attempt < self.max_retries:
                        delay = self.retry_base_delay * (2**attempt)
                        logger.warning(
                            "NWS request error, retrying in %.1fs: %s", delay, e
                        )
                        await asyncio.sleep(delay)
                        continue
                    raise
                if resp.status_code in (503, 429) and attempt < self.max_retries:
                    delay = self.retry_base_delay * (2**attempt)
                    logger.warning(
                        "NWS %s returned %d, retrying in %.1fs (attempt %d/%d)",
                        url, resp.status_code, delay, attempt + 1, self.max_retries,
                    )
                    await asyncio.sleep(delay)
                    continue
                resp.raise_for_status()
                return resp
        raise AssertionError("unreachable")

    async def get_point(self, lat: float, lon: float) -> dict:
        """Resolve coordinates to NWS grid metadata.

        Any failure here means the point is outside NWS coverage.
        """
        url = f"{self.base_url}/points/{lat:.4f},{lon:.4f}"
        try:
            resp = await self._get(url)
            return resp.json()
        except (httpx.HTTPStatusError, httpx.RequestError, ValueError) as e:
            logger.warning("NWS points lookup failed for %.4f,%.4f: %s", lat, lon, e)
            raise CoverageError("Location outside NWS coverage (U.S. only)") from e

    async def get_forecast(self, forecast_url: str) -> dict:
        """Fetch the forecast linked from a points response."""
        try:
            resp = await self._get(forecast_url)
            return resp.json()
        except (httpx.HTTPStatusError, httpx.RequestError, ValueError) as e:
            logger.error("NWS forecast fetch failed for %s: %s", forecast_url, e)
            raise ForecastUnavailableError(f"Weather data unavailable: {e}") from e

    async def get_active_alerts(
        self, lat: float, lon: float, zone: str | None = None
    ) -> dict:
        """Fetch active alerts by zone, or by point when no zone is known.

        Failures are logged and yield an empty collection.
        """
        url = f"{self.base_url}/alerts/active"
        params = {"zone": zone} if zone else {"point": f"{lat:.4f},{lon:.4f}"}
        try:
            resp = await self._get(url, params=params)
            return resp.json()
        except (httpx.HTTPStatusError, httpx.RequestError, ValueError) as e:
            logger.warning("NWS alerts fetch failed for %s: %s", params, e)
            return {"type": "FeatureCollection", "features": []}
