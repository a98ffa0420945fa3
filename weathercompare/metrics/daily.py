"""Bucket forecast periods into local calendar days and aggregate them."""

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import tzinfo

from weathercompare.metrics.realfeel import resolve_apparent_temperature
from weathercompare.models.common import DayKey, parse_timestamp
from weathercompare.models.forecast import DailySummary, ForecastPeriod

logger = logging.getLogger(__name__)


def calendar_day_key(timestamp: str | None, tz: tzinfo | None = None) -> DayKey | None:
    """Local YYYY-MM-DD of an ISO timestamp.

    With no tz the timestamp's own offset is the local time. Naive timestamps
    are taken as already local.
    """
    dt = parse_timestamp(timestamp)
    if dt is None:
        return None
    if tz is not None and dt.tzinfo is not None:
        dt = dt.astimezone(tz)
    return dt.date().isoformat()


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


@dataclass
class _DayBucket:
    temps: list[float] = field(default_factory=list)
    real_feels: list[float] = field(default_factory=list)

    def summarize(self) -> DailySummary:
        return DailySummary(
            high=round_half_up(max(self.temps)) if self.temps else None,
            low=round_half_up(min(self.temps)) if self.temps else None,
            real_feel_high=round_half_up(max(self.real_feels)) if self.real_feels else None,
            real_feel_low=round_half_up(min(self.real_feels)) if self.real_feels else None,
        )


def build_daily_summaries(
    periods: Iterable[ForecastPeriod], tz: tzinfo | None = None
) -> dict[DayKey, DailySummary]:
    """Map each local calendar day to its high/low and RealFeel high/low.

    Temperatures and RealFeel values are aggregated separately, on unrounded
    values, and rounded once at the end. Periods without a finite
    temperature are left out of high/low; a bad period never affects other
    days.
    """
    buckets: dict[DayKey, _DayBucket] = {}

    for period in periods:
        day = calendar_day_key(period.start_time, tz)
        if day is None:
            logger.debug("Skipping period with unparseable start %r", period.start_time)
            continue
        bucket = buckets.setdefault(day, _DayBucket())

        temp = period.temperature
        if temp is not None and math.isfinite(temp):
            bucket.temps.append(float(temp))

        real_feel = resolve_apparent_temperature(period)
        if math.isfinite(real_feel):
            bucket.real_feels.append(real_feel)

    return {day: bucket.summarize() for day, bucket in buckets.items()}
