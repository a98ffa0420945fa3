"""NWS active alert model."""

from dataclasses import dataclass, field
from enum import StrEnum
from urllib.parse import urlencode

NWS_SITE_URL = "https://www.weather.gov/"
NWS_ALERTS_URL = "https://alerts.weather.gov/search"
NWS_POINT_FORECAST_URL = "https://forecast.weather.gov/MapClick.php"


class Severity(StrEnum):
    EXTREME = "Extreme"
    SEVERE = "Severe"
    MODERATE = "Moderate"
    MINOR = "Minor"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: str | None) -> "Severity":
        if not isinstance(value, str) or not value.strip():
            return cls.UNKNOWN
        for member in cls:
            if member.value.lower() == value.strip().lower():
                return member
        return cls.UNKNOWN

    @property
    def rank(self) -> int:
        """Lower rank is more severe."""
        return list(Severity).index(self)


@dataclass(frozen=True)
class Alert:
    event: str
    headline: str = ""
    severity: Severity = Severity.UNKNOWN
    effective: str | None = None
    onset: str | None = None
    sent: str | None = None
    expires: str | None = None
    ends: str | None = None
    url: str | None = None
    alert_id: str | None = None
    zone_codes: tuple[str, ...] = field(default_factory=tuple)
    county_codes: tuple[str, ...] = field(default_factory=tuple)
    lat: float | None = None
    lon: float | None = None

    @property
    def start(self) -> str | None:
        return self.effective or self.onset or self.sent

    @property
    def end(self) -> str | None:
        return self.expires or self.ends

    @property
    def label(self) -> str:
        return self.headline or self.event

    @property
    def detail_url(self) -> str:
        """Link to the issuing office's page for this alert."""
        if self.url:
            return self.url
        if self.zone_codes:
            return f"{NWS_ALERTS_URL}?{urlencode({'zone': self.zone_codes[0]})}"
        if self.county_codes:
            return f"{NWS_ALERTS_URL}?{urlencode({'county': self.county_codes[0]})}"
        if self.lat is not None and self.lon is not None:
            query = urlencode({"lat": f"{self.lat:.4f}", "lon": f"{self.lon:.4f}"})
            return f"{NWS_POINT_FORECAST_URL}?{query}"
        return NWS_SITE_URL
