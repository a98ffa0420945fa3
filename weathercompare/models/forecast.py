"""NWS forecast data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ApparentTemperature:
    value: float | None
    unit_code: str | None = None  # e.g. "wmoUnit:degC"; None means °F


@dataclass(frozen=True)
class ForecastPeriod:
    start_time: str
    temperature: float | None  # °F
    wind_speed: str = ""
    relative_humidity: float | None = None
    apparent_temperature: ApparentTemperature | None = None
    name: str = ""
    end_time: str = ""
    is_daytime: bool = False
    icon: str = ""
    short_forecast: str = ""


@dataclass(frozen=True)
class DailySummary:
    high: int | None
    low: int | None
    real_feel_high: int | None
    real_feel_low: int | None

    @property
    def is_empty(self) -> bool:
        return self.high is None and self.real_feel_high is None

    def to_dict(self) -> dict[str, int | None]:
        return {
            "high": self.high,
            "low": self.low,
            "realFeelHigh": self.real_feel_high,
            "realFeelLow": self.real_feel_low,
        }
