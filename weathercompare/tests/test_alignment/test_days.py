"""Tests for display-day derivation."""

from datetime import UTC, datetime, timedelta, timezone

from weathercompare.alignment.days import day_window, derive_display_days, today_key
from weathercompare.models.forecast import DailySummary
from weathercompare.tests.factories import make_period, make_slot

S = DailySummary(70, 60, 70, 60)


class TestDeriveDisplayDays:
    def test_union_filtered_and_sorted(self):
        slots = [
            make_slot(0, {"2024-05-30": S, "2024-06-01": S}),
            make_slot(1, {"2024-06-01": S, "2024-06-02": S}),
            make_slot(2, {}),
        ]
        assert derive_display_days(slots, today="2024-06-01") == ["2024-06-01", "2024-06-02"]

    def test_empty_slots_ignored(self):
        slots = [None, make_slot(1, {"2024-06-03": S, "2024-06-02": S}), None]
        assert derive_display_days(slots, today="2024-06-01") == ["2024-06-02", "2024-06-03"]

    def test_no_slots(self):
        assert derive_display_days([None, None, None], today="2024-06-01") == []

    def test_falls_back_to_raw_periods(self):
        slot = make_slot(
            0, {},
            periods=(
                make_period("2024-06-01T20:00:00-05:00", 70),
                make_period("2024-06-02T08:00:00-05:00", 72),
            ),
            timezone="America/Chicago",
        )
        assert derive_display_days([slot], today="2024-06-01") == ["2024-06-01", "2024-06-02"]

    def test_location_missing_a_day_does_not_shrink_rows(self):
        slots = [
            make_slot(0, {"2024-06-01": S, "2024-06-02": S, "2024-06-03": S}),
            make_slot(1, {"2024-06-01": S}),
        ]
        assert len(derive_display_days(slots, today="2024-06-01")) == 3

    def test_max_days(self):
        summaries = {f"2024-06-{d:02d}": S for d in range(1, 11)}
        days = derive_display_days([make_slot(0, summaries)], today="2024-06-02", max_days=7)
        assert days == [f"2024-06-{d:02d}" for d in range(2, 9)]


class TestTodayKey:
    def test_explicit_now_and_zone(self):
        now = datetime(2024, 6, 2, 3, 0, tzinfo=UTC)
        assert today_key(timezone(timedelta(hours=-5)), now) == "2024-06-01"
        assert today_key(UTC, now) == "2024-06-02"

    def test_default_is_a_key(self):
        key = today_key()
        assert len(key) == 10 and key[4] == "-" and key[7] == "-"


class TestDayWindow:
    def test_bounds(self):
        tz = timezone(timedelta(hours=-4))
        start, end = day_window("2024-06-01", tz)
        assert start.isoformat() == "2024-06-01T00:00:00-04:00"
        assert end.isoformat() == "2024-06-01T23:59:59-04:00"
