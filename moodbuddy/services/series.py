from collections import defaultdict
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from moodbuddy.models.journal import MoodEntry
from moodbuddy.models.stat import SeriesPoint, WindowKind
from moodbuddy.services import date_keys

# Số ngày của khung xem cũ (7 = tuần, 30 = tháng) vẫn được chấp nhận
RANGE_DAYS = {7: WindowKind.WEEKLY, 30: WindowKind.MONTHLY}


def resolve_window(kind: Any) -> WindowKind:
    if isinstance(kind, WindowKind):
        return kind
    if isinstance(kind, int) and not isinstance(kind, bool):
        return RANGE_DAYS.get(kind, WindowKind.WEEKLY)
    try:
        return WindowKind(str(kind).strip().lower())
    except ValueError:
        return WindowKind.WEEKLY


def resolve_anchor(anchor: Any):
    if isinstance(anchor, date):
        return date_keys.set_noon(anchor)
    decoded = date_keys.decode(anchor)
    return decoded if decoded is not None else date_keys.today()


def window_bounds(kind: Any, anchor: Any) -> Tuple:
    """First and last day (local noon) of the window containing ``anchor``."""
    a = resolve_anchor(anchor)
    if resolve_window(kind) is WindowKind.WEEKLY:
        return date_keys.start_of_week_monday(a), date_keys.end_of_week_sunday(a)
    return date_keys.start_of_month(a), date_keys.end_of_month(a)


def daily_scores(entries: Iterable[MoodEntry]) -> Dict[str, List[float]]:
    scores: Dict[str, List[float]] = defaultdict(list)
    for entry in entries:
        scores[entry.date_key].append(entry.score)
    return scores


def build_series(entries: Iterable[MoodEntry], window_kind: Any = WindowKind.WEEKLY, anchor: Any = None) -> List[SeriesPoint]:
    """Per-day average score for every day of the anchored week or month.

    The window is always complete, also for the current period: days after
    today and days without a check-in are emitted with ``value=None``.
    """
    scores = daily_scores(entries or [])
    start, end = window_bounds(window_kind, anchor)

    points = []
    day = start
    while day <= end:
        key = date_keys.encode(day)
        values = scores.get(key)
        points.append(SeriesPoint(
            date_key=key,
            value=sum(values) / len(values) if values else None,
        ))
        day = date_keys.add_days(day, 1)
    return points


def _values(series: Sequence[Any]) -> List[Optional[float]]:
    return [p.value if isinstance(p, SeriesPoint) else p for p in series]


def real_count(series: Sequence[Any]) -> int:
    return sum(1 for v in _values(series) if v is not None)


def should_connect(series: Sequence[Any]) -> bool:
    return real_count(series) >= 2


def fill_for_chart(series: Sequence[Any]) -> List[Optional[float]]:
    """Values to plot for the trend line.

    With fewer than two real values nothing is connected and only real days
    keep a value. Otherwise the gaps between the first and last real day
    carry the previous value forward; days outside that span stay empty.
    """
    raw = _values(series)
    filled: List[Optional[float]] = [None] * len(raw)

    if not should_connect(raw):
        for i, v in enumerate(raw):
            filled[i] = v
        return filled

    first = next(i for i, v in enumerate(raw) if v is not None)
    last = max(i for i, v in enumerate(raw) if v is not None)

    last_known = None
    for i in range(first, last + 1):
        if raw[i] is not None:
            last_known = raw[i]
        filled[i] = last_known

    first_known = next((v for v in filled[first:last + 1] if v is not None), None)
    if first_known is not None:
        for i in range(first, last + 1):
            if filled[i] is not None:
                break
            filled[i] = first_known
    return filled


def latest_entry_per_day(entries: Iterable[MoodEntry]) -> Dict[str, MoodEntry]:
    latest: Dict[str, MoodEntry] = {}
    for entry in entries or []:
        prev = latest.get(entry.date_key)
        if prev is None or entry.created_at > prev.created_at:
            latest[entry.date_key] = entry
    return latest


def entries_for_day(entries: Iterable[MoodEntry], key: str) -> List[MoodEntry]:
    day = [e for e in entries or [] if e.date_key == key]
    day.sort(key=lambda e: e.created_at, reverse=True)
    return day
