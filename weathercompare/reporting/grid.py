"""Date × location comparison grid."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date, timedelta

from weathercompare.alignment.alerts import AlertPolicy, select_alert_for_cell
from weathercompare.alignment.days import derive_display_days, today_key
from weathercompare.metrics.daily import calendar_day_key
from weathercompare.models.alert import Alert
from weathercompare.models.common import DayKey, resolve_tz
from weathercompare.models.forecast import DailySummary, ForecastPeriod
from weathercompare.models.location import LocationSlot


@dataclass(frozen=True)
class GridCell:
    summary: DailySummary | None
    period: ForecastPeriod | None = None
    alert: Alert | None = None

    @property
    def has_data(self) -> bool:
        return self.summary is not None and not self.summary.is_empty


@dataclass(frozen=True)
class GridRow:
    day: DayKey
    label: str
    cells: list[GridCell]


@dataclass(frozen=True)
class ComparisonGrid:
    today: DayKey
    headers: list[str]
    rows: list[GridRow] = field(default_factory=list)


def format_date_label(day_key: DayKey, today: DayKey) -> str:
    """'Today', 'Tomorrow', else e.g. 'Sat, Jun 1'."""
    day = date.fromisoformat(day_key)
    base = date.fromisoformat(today)
    if day == base:
        return "Today"
    if day == base + timedelta(days=1):
        return "Tomorrow"
    return f"{day:%a}, {day:%b} {day.day}"


def _first_period(slot: LocationSlot, day: DayKey) -> ForecastPeriod | None:
    tz = resolve_tz(slot.timezone)
    for period in slot.periods:
        if calendar_day_key(period.start_time, tz) == day:
            return period
    return None


def build_cell(slot: LocationSlot, day: DayKey, policy: AlertPolicy) -> GridCell:
    summary = slot.summaries.get(day)
    if summary is None:
        return GridCell(summary=None)
    return GridCell(
        summary=summary,
        period=_first_period(slot, day),
        alert=select_alert_for_cell(slot.alerts, day, resolve_tz(slot.timezone), policy),
    )


def build_grid(
    slots: Sequence[LocationSlot | None],
    today: DayKey | None = None,
    max_days: int | None = 7,
    policy: AlertPolicy = AlertPolicy.FIRST_MATCH,
) -> ComparisonGrid:
    """One row per display day, one column per populated slot."""
    if today is None:
        today = today_key()
    columns = [s for s in slots if s is not None]
    days = derive_display_days(columns, today=today, max_days=max_days)
    rows = [
        GridRow(
            day=day,
            label=format_date_label(day, today),
            cells=[build_cell(slot, day, policy) for slot in columns],
        )
        for day in days
    ]
    return ComparisonGrid(today=today, headers=[s.name for s in columns], rows=rows)
