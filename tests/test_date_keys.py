"""Tests for local-calendar dateKey helpers."""

from datetime import date, datetime, timedelta

from moodbuddy.services import date_keys


def test_encode_zero_pads_local_date():
    """Should encode year-month-day zero-padded."""
    assert date_keys.encode(datetime(2024, 1, 5, 23, 59)) == "2024-01-05"
    assert date_keys.encode(date(2024, 11, 30)) == "2024-11-30"


def test_encode_aware_datetime_uses_local_wall_clock():
    """Should attribute an aware instant to the local day, not the UTC day."""
    late_evening = datetime(2024, 1, 5, 23, 30).astimezone()

    assert date_keys.encode(late_evening) == "2024-01-05"


def test_encode_invalid_input_is_empty():
    """Should return an empty key for anything that is not a date."""
    assert date_keys.encode(None) == ""
    assert date_keys.encode("2024-01-01") == ""


def test_decode_builds_local_noon():
    """Should parse a key into local noon of that day."""
    assert date_keys.decode("2024-03-09") == datetime(2024, 3, 9, 12)


def test_decode_defaults_and_rollover():
    """Should default missing parts to 1 and roll overflowing days into the next month."""
    assert date_keys.decode("2024") == datetime(2024, 1, 1, 12)
    assert date_keys.decode("2024-02-30") == datetime(2024, 3, 1, 12)
    assert date_keys.decode("2024-13-01") == datetime(2025, 1, 1, 12)


def test_decode_garbage_is_none():
    """Should return None instead of raising for unparseable keys."""
    assert date_keys.decode("not-a-date") is None
    assert date_keys.decode("") is None
    assert date_keys.decode(None) is None
    assert date_keys.decode(20240101) is None


def test_add_days_crosses_month_and_year():
    """Should step days across month and year boundaries at noon."""
    assert date_keys.add_days(datetime(2023, 12, 31, 8), 1) == datetime(2024, 1, 1, 12)
    assert date_keys.add_days(date(2024, 3, 1), -1) == datetime(2024, 2, 29, 12)


def test_add_months_pins_day_to_fifteen():
    """Jan 31 plus one month should land in February, not March."""
    assert date_keys.add_months(datetime(2024, 1, 31), 1) == datetime(2024, 2, 15, 12)
    assert date_keys.add_months(datetime(2024, 12, 10), 1) == datetime(2025, 1, 15, 12)
    assert date_keys.add_months(datetime(2024, 1, 10), -1) == datetime(2023, 12, 15, 12)


def test_weekday_monday_zero():
    """Monday should be 0 and Sunday 6."""
    assert date_keys.weekday_monday_zero(date(2024, 1, 1)) == 0
    assert date_keys.weekday_monday_zero(date(2024, 1, 7)) == 6


def test_week_bounds_monday_to_sunday():
    """Should align any day to its Monday-Sunday week."""
    wednesday = datetime(2024, 1, 3, 18)
    sunday = datetime(2024, 1, 7, 1)

    assert date_keys.start_of_week_monday(wednesday) == datetime(2024, 1, 1, 12)
    assert date_keys.end_of_week_sunday(wednesday) == datetime(2024, 1, 7, 12)
    assert date_keys.start_of_week_monday(sunday) == datetime(2024, 1, 1, 12)


def test_month_bounds():
    """Should cover the whole calendar month, leap years included."""
    assert date_keys.start_of_month(date(2024, 2, 17)) == datetime(2024, 2, 1, 12)
    assert date_keys.end_of_month(date(2024, 2, 17)) == datetime(2024, 2, 29, 12)
    assert date_keys.end_of_month(date(2023, 2, 17)) == datetime(2023, 2, 28, 12)
    assert date_keys.days_in_month(date(2024, 4, 2)) == 30


def test_same_week_and_month():
    """Should compare periods by calendar, not by distance."""
    assert date_keys.same_week_monday(date(2024, 1, 1), date(2024, 1, 7))
    assert not date_keys.same_week_monday(date(2024, 1, 7), date(2024, 1, 8))
    assert date_keys.same_month(date(2024, 1, 1), datetime(2024, 1, 31, 23))
    assert not date_keys.same_month(date(2024, 1, 31), date(2024, 2, 1))


def test_add_days_key():
    """Should step keys and return None for bad keys."""
    assert date_keys.add_days_key("2024-03-01", -1) == "2024-02-29"
    assert date_keys.add_days_key("garbage", 1) is None


def test_parse_timestamp_iso_and_fallback():
    """Should parse ISO timestamps and fall back to now for bad values."""
    assert date_keys.parse_timestamp("2024-01-05T10:00:00") == datetime(2024, 1, 5, 10)

    parsed = date_keys.parse_timestamp("2024-01-05T10:00:00Z")
    assert parsed.tzinfo is None

    for bad in ("yesterday-ish", None, {}, True):
        result = date_keys.parse_timestamp(bad)
        assert abs(result - datetime.now()) < timedelta(seconds=5)


def test_format_mmdd():
    """Should render a key as MM/DD."""
    assert date_keys.format_mmdd("2024-01-05") == "01/05"
    assert date_keys.format_mmdd("") == ""


def test_date_key_for_instant_uses_local_day():
    """Should key a stored timestamp by its local calendar day."""
    instant = datetime(2024, 6, 30, 23, 45).astimezone().isoformat()

    assert date_keys.date_key_for_instant(instant) == "2024-06-30"
