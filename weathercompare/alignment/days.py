"""Canonical display-day rows for the comparison grid."""

from collections.abc import Iterable
from datetime import date, datetime, time, tzinfo

from weathercompare.metrics.daily import calendar_day_key
from weathercompare.models.common import DayKey, local_tz, resolve_tz
from weathercompare.models.location import LocationSlot


def today_key(tz: tzinfo | None = None, now: datetime | None = None) -> DayKey:
    """Local date key for now."""
    tz = tz or local_tz()
    if now is None:
        now = datetime.now(tz)
    elif now.tzinfo is not None:
        now = now.astimezone(tz)
    return now.date().isoformat()


def day_window(day_key: DayKey, tz: tzinfo) -> tuple[datetime, datetime]:
    """Local [00:00:00, 23:59:59] bounds of a day."""
    day = date.fromisoformat(day_key)
    return (
        datetime.combine(day, time(0, 0, 0), tzinfo=tz),
        datetime.combine(day, time(23, 59, 59), tzinfo=tz),
    )


def slot_day_keys(slot: LocationSlot) -> set[DayKey]:
    """Day keys for one slot, from its summaries or else its raw periods."""
    if slot.summaries:
        return set(slot.summaries)
    tz = resolve_tz(slot.timezone)
    keys = {calendar_day_key(p.start_time, tz) for p in slot.periods}
    keys.discard(None)
    return keys


def derive_display_days(
    slots: Iterable[LocationSlot | None],
    today: DayKey | None = None,
    max_days: int | None = None,
) -> list[DayKey]:
    """Union of day keys across non-empty slots, today or later, ascending.

    Keys are fixed-width YYYY-MM-DD so string comparison orders them by date.
    """
    if today is None:
        today = today_key()
    keys: set[DayKey] = set()
    for slot in slots:
        if slot is None:
            continue
        keys.update(slot_day_keys(slot))
    days = sorted(k for k in keys if k >= today)
    if max_days is not None:
        days = days[:max_days]
    return days
