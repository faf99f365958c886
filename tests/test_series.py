"""Tests for the per-day series builder and the chart gap-fill policy."""

from datetime import date

import pytest

from moodbuddy.models.journal import MoodEntry
from moodbuddy.models.stat import SeriesPoint, WindowKind
from moodbuddy.services import date_keys
from moodbuddy.services.series import (
    build_series, entries_for_day, fill_for_chart, latest_entry_per_day,
    resolve_window, should_connect,
)


def make_entry(date_key, mood="good", score=None, ts="2024-01-01T09:00:00"):
    return MoodEntry(mood_id=mood, mood_score=score, date_key=date_key, timestamp=ts)


def test_weekly_series_spans_monday_to_sunday():
    """Should always emit 7 consecutive days, Monday first."""
    series = build_series([], WindowKind.WEEKLY, "2024-01-03")

    assert [p.date_key for p in series] == [f"2024-01-0{d}" for d in range(1, 8)]
    assert all(p.value is None for p in series)


@pytest.mark.parametrize("anchor,days", [
    (date(2024, 2, 10), 29),
    (date(2023, 2, 10), 28),
    (date(2024, 4, 30), 30),
    (date(2024, 1, 1), 31),
])
def test_monthly_series_spans_whole_month(anchor, days):
    """Should emit every day of the anchored month."""
    series = build_series([], "monthly", anchor)

    assert len(series) == days
    assert series[0].date_key.endswith("-01")


def test_current_period_is_not_truncated():
    """The current week should still have 7 points, future days included."""
    series = build_series([], WindowKind.WEEKLY, None)

    assert len(series) == 7
    assert date_keys.today_key() in [p.date_key for p in series]


def test_daily_average_and_score_derivation():
    """Should average all entries of a day, deriving scores from mood kind."""
    entries = [
        make_entry("2024-01-02", "good"),
        make_entry("2024-01-02", "bad"),
        make_entry("2024-01-03", "okay", score=4.5),
        make_entry("2024-01-04", "confused"),
        make_entry("2024-01-20", "great"),
    ]
    values = [p.value for p in build_series(entries, WindowKind.WEEKLY, "2024-01-01")]

    assert values == [None, 3.0, 4.5, 3.0, None, None, None]


def test_build_series_is_deterministic():
    """Same input should give identical output."""
    entries = [make_entry("2024-01-02", "great"), make_entry("2024-01-05", "bad")]

    first = build_series(entries, WindowKind.MONTHLY, "2024-01-15")
    second = build_series(entries, WindowKind.MONTHLY, "2024-01-15")

    assert first == second


def test_resolve_window():
    """Should accept enum, strings and range days, defaulting to weekly."""
    assert resolve_window(WindowKind.MONTHLY) is WindowKind.MONTHLY
    assert resolve_window("MONTHLY") is WindowKind.MONTHLY
    assert resolve_window(30) is WindowKind.MONTHLY
    assert resolve_window(7) is WindowKind.WEEKLY
    assert resolve_window("yearly") is WindowKind.WEEKLY
    assert resolve_window(None) is WindowKind.WEEKLY


def test_invalid_anchor_falls_back_to_today():
    """Should build the current week for an unparseable anchor."""
    assert build_series([], WindowKind.WEEKLY, "soon") == build_series([], WindowKind.WEEKLY, None)


def test_fill_carries_forward_between_real_values():
    """Interior gaps carry the last value; outer gaps stay empty."""
    assert fill_for_chart([None, 3, None, None, 5, None]) == [None, 3, 3, 3, 5, None]


def test_fill_with_single_value_does_not_connect():
    """One real value should leave only that day plotted."""
    values = [None, 4, None, None, None, None]

    assert not should_connect(values)
    assert fill_for_chart(values) == [None, 4, None, None, None, None]


def test_fill_accepts_series_points():
    """Should read values straight from SeriesPoint lists."""
    series = [SeriesPoint(date_key="2024-01-01", value=2), SeriesPoint(date_key="2024-01-02"),
              SeriesPoint(date_key="2024-01-03", value=4)]

    assert fill_for_chart(series) == [2, 2, 4]
    assert fill_for_chart([]) == []


def test_latest_entry_per_day_uses_timestamp():
    """The latest check-in of a day should win."""
    morning = make_entry("2024-01-02", "bad", ts="2024-01-02T08:00:00")
    evening = make_entry("2024-01-02", "great", ts="2024-01-02T21:00:00")

    latest = latest_entry_per_day([evening, morning])

    assert latest["2024-01-02"] is evening


def test_invalid_timestamp_counts_as_now():
    """An entry with a broken timestamp should sort as the newest."""
    old = make_entry("2024-01-02", "bad", ts="2024-01-02T08:00:00")
    broken = make_entry("2024-01-02", "good", ts="???")

    assert latest_entry_per_day([broken, old])["2024-01-02"] is broken
    assert entries_for_day([old, broken], "2024-01-02")[0] is broken
    assert entries_for_day([old, broken], "2024-01-03") == []
