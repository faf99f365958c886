"""Local-calendar helpers for dateKeys (``YYYY-MM-DD``).

Every helper works on naive local datetimes pinned to 12:00 so that comparing
two days never depends on the time of day, and a daylight-saving jump can't
push a date across midnight.
"""
import calendar
import logging
from datetime import date, datetime, timedelta
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)

NOON = 12

DateLike = Union[date, datetime]


def _local(d: DateLike) -> datetime:
    if isinstance(d, datetime):
        if d.tzinfo is not None:
            d = d.astimezone().replace(tzinfo=None)
        return d
    return datetime(d.year, d.month, d.day)


def set_noon(d: DateLike) -> datetime:
    return _local(d).replace(hour=NOON, minute=0, second=0, microsecond=0)


def _at_noon(year: int, month: int, day: int) -> datetime:
    # Tháng/ngày vượt giới hạn thì cuộn sang tháng sau (2024-02-30 -> 2024-03-01)
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    return datetime(year, month, 1, NOON) + timedelta(days=day - 1)


def encode(d: Optional[DateLike]) -> str:
    if not isinstance(d, date):
        return ""
    x = _local(d)
    return f"{x.year:04d}-{x.month:02d}-{x.day:02d}"


def decode(key: Any) -> Optional[datetime]:
    if not isinstance(key, str):
        return None
    parts = key.strip().split("-")
    try:
        year = int(parts[0])
        month = int(parts[1]) if len(parts) > 1 and parts[1] else 0
        day = int(parts[2]) if len(parts) > 2 and parts[2] else 0
        return _at_noon(year, month or 1, day or 1)
    except (ValueError, OverflowError):
        return None


def add_days(d: DateLike, n: int) -> datetime:
    return set_noon(d) + timedelta(days=n)


def add_months(d: DateLike, n: int) -> datetime:
    # Ghim về ngày 15 trước khi đổi tháng để 31/1 + 1 tháng không nhảy sang tháng 3
    x = set_noon(d).replace(day=15)
    total = x.month - 1 + n
    return x.replace(year=x.year + total // 12, month=total % 12 + 1)


def weekday_monday_zero(d: DateLike) -> int:
    return set_noon(d).weekday()


def start_of_week_monday(d: DateLike) -> datetime:
    return add_days(d, -weekday_monday_zero(d))


def end_of_week_sunday(d: DateLike) -> datetime:
    return add_days(start_of_week_monday(d), 6)


def start_of_month(d: DateLike) -> datetime:
    return set_noon(d).replace(day=1)


def end_of_month(d: DateLike) -> datetime:
    x = set_noon(d)
    return x.replace(day=calendar.monthrange(x.year, x.month)[1])


def days_in_month(d: DateLike) -> int:
    return end_of_month(d).day


def same_week_monday(a: DateLike, b: DateLike) -> bool:
    return encode(start_of_week_monday(a)) == encode(start_of_week_monday(b))


def same_month(a: DateLike, b: DateLike) -> bool:
    x, y = _local(a), _local(b)
    return x.year == y.year and x.month == y.month


def add_days_key(key: str, n: int) -> Optional[str]:
    d = decode(key)
    if d is None:
        return None
    return encode(add_days(d, n))


def today() -> datetime:
    return set_noon(datetime.now())


def today_key() -> str:
    return encode(datetime.now())


def parse_timestamp(value: Any) -> datetime:
    """Parse a stored timestamp into a naive local datetime.

    ISO strings (with or without offset), epoch milliseconds and datetime
    objects are accepted; anything else falls back to "now" so that sorting
    and latest-per-day selection always complete.
    """
    if isinstance(value, datetime):
        return _local(value)
    try:
        if isinstance(value, bool):
            raise TypeError("bool is not a timestamp")
        if isinstance(value, (int, float)):
            return datetime.fromtimestamp(value / 1000)
        if isinstance(value, str) and value.strip():
            s = value.strip()
            if s.endswith("Z"):
                s = s[:-1] + "+00:00"
            return _local(datetime.fromisoformat(s))
    except (TypeError, ValueError, OverflowError, OSError):
        logger.debug("Unparseable timestamp %r, using now", value)
    return datetime.now()


def date_key_for_instant(value: Any) -> str:
    return encode(parse_timestamp(value))


def format_mmdd(key: Optional[str]) -> str:
    if not key:
        return ""
    return f"{key[5:7]}/{key[8:10]}"
