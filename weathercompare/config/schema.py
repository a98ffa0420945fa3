"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field

from weathercompare.alignment.alerts import AlertPolicy


class FallbackLocation(BaseModel):
    model_config = {"extra": "forbid"}

    name: str = "Chicago, IL"
    lat: float = Field(default=41.8781, ge=-90.0, le=90.0)
    lon: float = Field(default=-87.6298, ge=-180.0, le=180.0)
    state: str = "Illinois"


class NwsConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = "https://api.weather.gov"
    user_agent: str = "weathercompare/0.1.0"
    timeout_seconds: float = Field(default=5.0, gt=0.0)
    max_retries: int = Field(default=1, ge=0)
    retry_base_delay: float = Field(default=1.0, ge=0.0)


class GeocodingConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = "https://geocoding-api.open-meteo.com/v1"
    ip_lookup_url: str = "http://ip-api.com/json/"
    timeout_seconds: float = Field(default=5.0, gt=0.0)
    fallback_location: FallbackLocation = FallbackLocation()


class DisplayConfig(BaseModel):
    model_config = {"extra": "forbid"}

    max_days: int = Field(default=7, ge=1, le=14)
    alert_policy: AlertPolicy = AlertPolicy.FIRST_MATCH
    timezone: str | None = None  # overrides each location's own zone


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    max_locations: int = Field(default=3, ge=1, le=3)
    db_path: str = "data/weathercompare.db"


class WeatherCompareConfig(BaseModel):
    model_config = {"extra": "forbid"}

    nws: NwsConfig = NwsConfig()
    geocoding: GeocodingConfig = GeocodingConfig()
    display: DisplayConfig = DisplayConfig()
    app: AppConfig = AppConfig()
