"""Map NWS response shapes onto the canonical forecast and alert models.

Upstream payloads come as GeoJSON (``properties`` / ``features``), as bare
lists, or with quantities either as plain numbers or as
``{"value": ..., "unitCode": ...}`` objects. Everything downstream of this
module sees only ForecastPeriod, Alert and PointMetadata.
"""

import logging
import math
from typing import Any

from weathercompare.errors import ForecastUnavailableError
from weathercompare.metrics.realfeel import to_fahrenheit
from weathercompare.models.alert import Alert, Severity
from weathercompare.models.forecast import ApparentTemperature, ForecastPeriod
from weathercompare.models.location import PointMetadata

logger = logging.getLogger(__name__)


def _properties(raw: Any) -> dict:
    if isinstance(raw, dict):
        props = raw.get("properties")
        return props if isinstance(props, dict) else raw
    return {}


def _number(value: Any) -> float | None:
    """Plain or ``{"value": x}`` quantity as a finite float."""
    if isinstance(value, dict):
        value = value.get("value")
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _unit(value: Any) -> str | None:
    if isinstance(value, dict):
        return value.get("unitCode")
    return None


def _last_segment(url: Any) -> str | None:
    if not url or not isinstance(url, str):
        return None
    return url.rstrip("/").split("/")[-1] or None


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


# --- Points ---

def parse_point(raw: dict) -> PointMetadata:
    """Extract grid metadata from a /points response."""
    props = _properties(raw)
    forecast_url = props.get("forecast")
    if not forecast_url:
        raise ForecastUnavailableError("Forecast unavailable: no forecast link for point")

    relative = _properties(props.get("relativeLocation"))
    return PointMetadata(
        forecast_url=forecast_url,
        forecast_hourly_url=props.get("forecastHourly"),
        city=relative.get("city"),
        state=relative.get("state"),
        timezone=props.get("timeZone"),
        forecast_zone=_last_segment(props.get("forecastZone")),
        county=_last_segment(props.get("county")),
        grid_id=props.get("gridId") or props.get("cwa"),
    )


# --- Forecast periods ---

def _temperature_f(p: dict) -> float | None:
    raw_temp = p.get("temperature")
    value = _number(raw_temp)
    if value is None:
        return None
    unit = _unit(raw_temp) or p.get("temperatureUnit")
    return to_fahrenheit(value, unit)


def _apparent(p: dict) -> ApparentTemperature | None:
    raw = p.get("apparentTemperature")
    if raw is None:
        return None
    value = _number(raw)
    if value is None:
        return None
    return ApparentTemperature(value=value, unit_code=_unit(raw))


def parse_period(p: dict) -> ForecastPeriod:
    return ForecastPeriod(
        start_time=_text(p.get("startTime")),
        temperature=_temperature_f(p),
        wind_speed=_text(p.get("windSpeed")) or _wind_from_quantity(p.get("windSpeed")),
        relative_humidity=_number(p.get("relativeHumidity")),
        apparent_temperature=_apparent(p),
        name=_text(p.get("name")),
        end_time=_text(p.get("endTime")),
        is_daytime=bool(p.get("isDaytime", False)),
        icon=_text(p.get("icon")),
        short_forecast=_text(p.get("shortForecast")),
    )


def _wind_from_quantity(value: Any) -> str:
    """Render a numeric wind quantity as mph text for parse_wind_speed."""
    speed = _number(value)
    if speed is None:
        return ""
    unit = (_unit(value) or "").lower()
    if "km_h" in unit:
        speed = speed / 1.609344
    return f"{speed:g} mph"


def parse_forecast_periods(raw: Any) -> list[ForecastPeriod]:
    """Forecast periods from a GeoJSON forecast, a ``{"periods"}`` dict or a list."""
    if isinstance(raw, list):
        items = raw
    else:
        items = _properties(raw).get("periods") or []

    periods: list[ForecastPeriod] = []
    for p in items:
        if not isinstance(p, dict):
            logger.debug("Skipping non-object forecast period: %r", p)
            continue
        periods.append(parse_period(p))
    return periods


# --- Alerts ---

def _codes(props: dict) -> tuple[tuple[str, ...], tuple[str, ...]]:
    """Zone and county codes from UGC geocodes and affectedZones links."""
    zones: list[str] = []
    counties: list[str] = []
    geocode = props.get("geocode") or {}
    ugc = geocode.get("UGC") if isinstance(geocode, dict) else None
    candidates = list(ugc or [])
    candidates.extend(
        code for code in (_last_segment(u) for u in props.get("affectedZones") or []) if code
    )
    for code in candidates:
        if not isinstance(code, str) or len(code) < 3:
            continue
        target = counties if code[2].upper() == "C" else zones
        if code not in target:
            target.append(code)
    return tuple(zones), tuple(counties)


def parse_alert(props: dict, lat: float | None = None, lon: float | None = None) -> Alert:
    zones, counties = _codes(props)
    return Alert(
        event=_text(props.get("event")) or "Weather Alert",
        headline=_text(props.get("headline")),
        severity=Severity.parse(props.get("severity")),
        effective=props.get("effective") or None,
        onset=props.get("onset") or None,
        sent=props.get("sent") or None,
        expires=props.get("expires") or None,
        ends=props.get("ends") or None,
        url=props.get("url") or None,
        alert_id=props.get("id") or None,
        zone_codes=zones,
        county_codes=counties,
        lat=lat,
        lon=lon,
    )


def parse_alerts(raw: Any, lat: float | None = None, lon: float | None = None) -> list[Alert]:
    """Alerts from a FeatureCollection, a feature list, or flat alert dicts."""
    if isinstance(raw, dict):
        items = raw.get("features") or []
    elif isinstance(raw, list):
        items = raw
    else:
        items = []

    alerts: list[Alert] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        alerts.append(parse_alert(_properties(item), lat, lon))
    return alerts
