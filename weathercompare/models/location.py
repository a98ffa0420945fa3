"""Location and comparison-slot models."""

from dataclasses import dataclass, field

from weathercompare.models.alert import Alert
from weathercompare.models.forecast import DailySummary, ForecastPeriod


@dataclass(frozen=True)
class ResolvedLocation:
    name: str
    lat: float
    lon: float
    state: str | None = None


@dataclass(frozen=True)
class PointMetadata:
    forecast_url: str
    forecast_hourly_url: str | None = None
    city: str | None = None
    state: str | None = None
    timezone: str | None = None  # IANA name, e.g. "America/Chicago"
    forecast_zone: str | None = None
    county: str | None = None
    grid_id: str | None = None


@dataclass(frozen=True)
class LocationSlot:
    """One fully populated comparison column."""

    index: int
    location: ResolvedLocation
    periods: tuple[ForecastPeriod, ...] = ()
    summaries: dict[str, DailySummary] = field(default_factory=dict)
    alerts: tuple[Alert, ...] = ()
    timezone: str | None = None
    city: str | None = None
    state: str | None = None
    forecast_zone: str | None = None
    fetched_at: str = ""

    @property
    def name(self) -> str:
        return self.location.name
