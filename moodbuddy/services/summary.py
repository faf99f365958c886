from collections import OrderedDict
from typing import Optional, Sequence

from moodbuddy.models.journal import NEUTRAL_SCORE, icon_for_score
from moodbuddy.models.stat import SeriesPoint, Summary
from moodbuddy.services.numbers import clamp, is_finite_number, round_half_up

NO_VALUE_ICON = "—"


def score_for_value(value: float) -> int:
    if not is_finite_number(value):
        return NEUTRAL_SCORE
    return clamp(round_half_up(value), 1, 5)


def emoji_for_value(value: Optional[float]) -> str:
    if value is None:
        return NO_VALUE_ICON
    return icon_for_score(score_for_value(value))


def compute_summary(series: Sequence[SeriesPoint]) -> Summary:
    values = [p.value for p in series if p.value is not None]
    avg = sum(values) / len(values) if values else None
    last = values[-1] if values else None

    # Đếm theo thứ tự thời gian: khi hoà, điểm xuất hiện trước thắng
    score_counts: "OrderedDict[int, int]" = OrderedDict()
    for v in values:
        s = score_for_value(v)
        score_counts[s] = score_counts.get(s, 0) + 1

    top_score = None
    top_count = -1
    for s, c in score_counts.items():
        if c > top_count:
            top_count = c
            top_score = s

    return Summary(
        avg=avg,
        last=last,
        tracked_days=len(values),
        total_days=len(series),
        top_mood_score=top_score,
        top_mood_icon=icon_for_score(top_score) if top_score is not None else None,
    )
