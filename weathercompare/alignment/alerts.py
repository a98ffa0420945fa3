"""Match alerts to the calendar days they touch."""

from collections.abc import Sequence
from datetime import datetime, tzinfo
from enum import StrEnum

from weathercompare.alignment.days import day_window
from weathercompare.models.alert import Alert
from weathercompare.models.common import DayKey, local_tz, parse_timestamp


class AlertPolicy(StrEnum):
    FIRST_MATCH = "first-match"
    MOST_SEVERE = "most-severe"


def _aware(dt: datetime | None, tz: tzinfo) -> datetime | None:
    if dt is not None and dt.tzinfo is None:
        return dt.replace(tzinfo=tz)
    return dt


def alert_applies_on_day(alert: Alert, day_key: DayKey, tz: tzinfo | None = None) -> bool:
    """True if the alert's validity overlaps the day's local window.

    Both intervals are closed. A missing start defaults to the day's start
    and a missing end to the day's end. Without an explicit tz the day is
    measured in the alert's own offset.
    """
    start = parse_timestamp(alert.start)
    end = parse_timestamp(alert.end)

    if tz is None:
        anchor = start or end
        tz = anchor.tzinfo if anchor is not None and anchor.tzinfo is not None else local_tz()

    day_start, day_end = day_window(day_key, tz)
    alert_start = _aware(start, tz) or day_start
    alert_end = _aware(end, tz) or day_end

    return day_start <= alert_end and day_end >= alert_start


def select_alert_for_cell(
    alerts: Sequence[Alert],
    day_key: DayKey,
    tz: tzinfo | None = None,
    policy: AlertPolicy = AlertPolicy.FIRST_MATCH,
) -> Alert | None:
    """Pick the single alert shown in a grid cell.

    FIRST_MATCH keeps upstream list order. MOST_SEVERE ranks applicable
    alerts by severity, keeping list order among equals.
    """
    applicable = (a for a in alerts if alert_applies_on_day(a, day_key, tz))
    if policy == AlertPolicy.MOST_SEVERE:
        ranked = sorted(applicable, key=lambda a: a.severity.rank)
        return ranked[0] if ranked else None
    return next(applicable, None)
