"""Completion counts and streaks for the gentle-action log.

The log is a plain list of dateKeys on which the day's suggestions were
completed. It is independent of mood entries; the two only meet on dateKey.
"""
from typing import Iterable, Mapping, Optional

from moodbuddy.models.journal import CompletionStats
from moodbuddy.services import date_keys

# Giới hạn vòng lặp, không phải giới hạn ý nghĩa
MAX_STREAK_DAYS = 365


def count_in_range(history: Iterable[str], start_key: str, end_key_inclusive: str) -> int:
    start = date_keys.decode(start_key)
    end = date_keys.decode(end_key_inclusive)
    if start is None or end is None:
        return 0

    n = 0
    for key in history or []:
        t = date_keys.decode(key)
        if t is not None and start <= t <= end:
            n += 1
    return n


def compute_streak(history: Iterable[str], today_key: str) -> int:
    done = set(history or [])
    streak = 0
    cursor: Optional[str] = today_key
    while cursor is not None and cursor in done and streak < MAX_STREAK_DAYS:
        streak += 1
        cursor = date_keys.add_days_key(cursor, -1)
    return streak


def longest_streak(history: Iterable[str]) -> int:
    days = sorted({d for d in (date_keys.decode(k) for k in history or []) if d is not None})
    if not days:
        return 0

    longest = 1
    current_run = 1
    for i in range(1, len(days)):
        delta = (days[i] - days[i - 1]).days
        if delta == 1:
            current_run += 1
        else:
            if current_run > longest:
                longest = current_run
            current_run = 1
    if current_run > longest:
        longest = current_run
    return longest


def trend_phrase(last7: int, prev7: int) -> str:
    diff = last7 - prev7
    if diff > 0:
        return f"up {diff} vs last week"
    if diff < 0:
        return f"down {abs(diff)} vs last week"
    return "same as last week"


def streak_phrase(streak: int) -> str:
    return "a 1-day streak" if streak == 1 else f"{streak}-day streak"


def trend_one_liner(history: Iterable[str], today_key: str) -> str:
    history = list(history or [])
    last7 = count_in_range(history, date_keys.add_days_key(today_key, -6), today_key)
    prev7 = count_in_range(
        history,
        date_keys.add_days_key(today_key, -13),
        date_keys.add_days_key(today_key, -7),
    )
    streak = compute_streak(history, today_key)
    return f"Suggestions: {last7}/7 days ({trend_phrase(last7, prev7)}) · {streak_phrase(streak)}"


def completion_text(stats: Optional[CompletionStats]) -> str:
    if stats is None:
        return "—/— completed"
    return f"{stats.completed}/{stats.total} completed"


def completion_for_day(
    key: str,
    history: Iterable[str],
    stats: Mapping[str, CompletionStats],
) -> Optional[str]:
    """Suggestions line for one day, or None when nothing was logged that day."""
    stats = stats or {}
    if key not in set(history or []) and key not in stats:
        return None
    return completion_text(stats.get(key))
