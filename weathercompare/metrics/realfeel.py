"""Apparent ("RealFeel") temperature from NWS-style forecast samples.

Wind chill and heat index are only valid inside their own bands:

* wind chill: T <= 50°F and wind >= 3 mph
* heat index: T >= 80°F and RH >= 40%

Outside both bands the apparent temperature is the air temperature.
"""

import math
import re

from weathercompare.models.forecast import ForecastPeriod

DEFAULT_HUMIDITY_PCT = 50.0

WIND_CHILL_MAX_TEMP_F = 50.0
WIND_CHILL_MIN_WIND_MPH = 3.0
HEAT_INDEX_MIN_TEMP_F = 80.0
HEAT_INDEX_MIN_HUMIDITY_PCT = 40.0

_NUMBER_RE = re.compile(r"\d+(?:\.\d+)?")
_CELSIUS_RE = re.compile(r"degc", re.IGNORECASE)


def _clamp(n: float, low: float, high: float) -> float:
    return min(high, max(low, n))


def _is_finite(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def normalize_humidity(humidity_pct: float | None) -> float:
    """Default absent/non-finite humidity to 50% and clamp to [0, 100]."""
    if not _is_finite(humidity_pct):
        return DEFAULT_HUMIDITY_PCT
    return _clamp(float(humidity_pct), 0.0, 100.0)


def parse_wind_speed(text: str | None) -> float:
    """Mean of every number in a wind-speed description, in mph.

    "5 to 10 mph" -> 7.5, "10G20 mph" -> 15.0, "" -> 0.0.
    """
    if not text:
        return 0.0
    nums = [float(n) for n in _NUMBER_RE.findall(str(text))]
    if not nums:
        return 0.0
    return max(0.0, sum(nums) / len(nums))


def wind_chill(temp_f: float, wind_mph: float) -> float:
    """NWS wind chill. Returns temp_f unchanged outside T <= 50, W >= 3."""
    if temp_f > WIND_CHILL_MAX_TEMP_F or wind_mph < WIND_CHILL_MIN_WIND_MPH:
        return temp_f
    w = wind_mph**0.16
    return 35.74 + 0.6215 * temp_f - 35.75 * w + 0.4275 * temp_f * w


def heat_index(temp_f: float, humidity_pct: float | None) -> float:
    """Rothfusz heat index with the NWS low/high humidity adjustments.

    Returns temp_f unchanged outside T >= 80, RH >= 40.
    """
    t = temp_f
    rh = normalize_humidity(humidity_pct)
    if t < HEAT_INDEX_MIN_TEMP_F or rh < HEAT_INDEX_MIN_HUMIDITY_PCT:
        return t

    hi = (
        -42.379
        + 2.04901523 * t
        + 10.14333127 * rh
        - 0.22475541 * t * rh
        - 0.00683783 * t * t
        - 0.05481717 * rh * rh
        + 0.00122874 * t * t * rh
        + 0.00085282 * t * rh * rh
        - 0.00000199 * t * t * rh * rh
    )

    if rh < 13 and 80 <= t <= 112:
        hi -= ((13 - rh) / 4) * math.sqrt((17 - abs(t - 95)) / 17)
    if rh > 85 and 80 <= t <= 87:
        hi += ((rh - 85) / 10) * ((87 - t) / 5)

    return hi


def compute_apparent_temperature(
    temp_f: float | None, wind_mph: float | None, humidity_pct: float | None = None
) -> float:
    """Apparent temperature in °F. Non-finite temp_f yields nan."""
    if not _is_finite(temp_f):
        return math.nan
    t = float(temp_f)
    w = max(0.0, float(wind_mph)) if _is_finite(wind_mph) else 0.0
    rh = normalize_humidity(humidity_pct)

    if t <= WIND_CHILL_MAX_TEMP_F and w >= WIND_CHILL_MIN_WIND_MPH:
        return wind_chill(t, w)
    if t >= HEAT_INDEX_MIN_TEMP_F and rh >= HEAT_INDEX_MIN_HUMIDITY_PCT:
        return heat_index(t, rh)
    return t


def to_fahrenheit(value: float | None, unit_code: str | None) -> float | None:
    """Normalize a temperature to °F. Unrecognized units are assumed °F."""
    if not _is_finite(value):
        return None
    if unit_code and (_CELSIUS_RE.search(unit_code) or unit_code.strip().upper() == "C"):
        return value * 9 / 5 + 32
    return float(value)


def resolve_apparent_temperature(period: ForecastPeriod) -> float:
    """Provided apparent temperature if usable, else the computed one."""
    provided = period.apparent_temperature
    if provided is not None:
        apparent_f = to_fahrenheit(provided.value, provided.unit_code)
        if apparent_f is not None:
            return apparent_f
    return compute_apparent_temperature(
        period.temperature,
        parse_wind_speed(period.wind_speed),
        period.relative_humidity,
    )
