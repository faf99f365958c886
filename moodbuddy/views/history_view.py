import logging
from typing import Any, Dict, List, Optional, Sequence

from moodbuddy.models.journal import CompletionStats, MoodEntry, WeatherSnapshot
from moodbuddy.models.stat import (
    CalendarCell, ChartPoint, DayDetail, HistoryStatsResponse, SeriesPoint, Summary, WindowKind
)
from moodbuddy.services import date_keys
from moodbuddy.services.chart import ChartIndexer, ChartInteraction
from moodbuddy.services.series import (
    build_series, entries_for_day, latest_entry_per_day, resolve_anchor, resolve_window
)
from moodbuddy.services.streaks import completion_for_day, compute_streak, trend_one_liner
from moodbuddy.services.numbers import round_half_up
from moodbuddy.services.summary import compute_summary

logger = logging.getLogger(__name__)

WEEKDAYS_3 = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


# ==========================================
# HELPER FUNCTIONS
# ==========================================

def c_to_f(c: float) -> int:
    return round_half_up(c * 9 / 5 + 32)


def format_temp(temp_c: float, unit: str = "celsius") -> str:
    if unit == "fahrenheit":
        return f"{c_to_f(temp_c)}°F"
    return f"{round_half_up(temp_c)}°C"


def format_weather(weather: Optional[WeatherSnapshot], unit: str = "celsius") -> Optional[str]:
    if weather is None:
        return None
    parts = []
    if weather.city:
        parts.append(weather.city)
    parts.append(" ".join(x for x in (weather.icon, weather.label) if x))
    return f"{' · '.join(parts)} {format_temp(weather.temp_c, unit)}"


def day_label(key: str) -> str:
    d = date_keys.decode(key)
    if d is None:
        return ""
    return f"{d:%a}, {d:%b} {d.day}"


def build_history_stats(
    entries: Sequence[MoodEntry],
    window: Any = WindowKind.WEEKLY,
    anchor: Any = None,
    completion_days: Sequence[str] = (),
    today_key: Optional[str] = None,
    indexer: Optional[ChartIndexer] = None,
) -> HistoryStatsResponse:
    today_key = today_key or date_keys.today_key()
    indexer = indexer or ChartIndexer()

    series = build_series(entries, window, anchor)
    points = indexer.plot_points(series)

    return HistoryStatsResponse(
        window=resolve_window(window),
        series=series,
        chart_points=points,
        chart_path=indexer.line_path(points),
        summary=compute_summary(series),
        gentle_one_liner=trend_one_liner(completion_days, today_key),
        gentle_streak=compute_streak(completion_days, today_key),
    )


class HistoryPage:
    """State of the history screen: trend window, calendar month, selected day.

    Everything shown is derived from the loaded collections on demand. The
    trend series is memoized on (entries revision, window, anchor day).
    """

    def __init__(
        self,
        entries: Optional[Sequence[MoodEntry]] = None,
        completion_days: Optional[Sequence[str]] = None,
        completion_stats: Optional[Dict[str, CompletionStats]] = None,
        today: Any = None,
        indexer: Optional[ChartIndexer] = None,
    ):
        self.today = resolve_anchor(today)
        self.today_key = date_keys.encode(self.today)
        self.indexer = indexer or ChartIndexer()
        self.interaction = ChartInteraction()

        self.window = WindowKind.WEEKLY
        self.trend_anchor = self.today
        self.month_cursor = date_keys.start_of_month(self.today)
        self.selected_date_key: Optional[str] = None

        self._revision = 0
        self._series_key = None
        self._series: List[SeriesPoint] = []
        self.set_entries(entries or [])
        self.set_completion(completion_days or [], completion_stats or {})

    # --- inputs ---

    def set_entries(self, entries: Sequence[MoodEntry]) -> None:
        self.entries = list(entries)
        self._latest = latest_entry_per_day(self.entries)
        self._revision += 1

    def set_completion(self, days: Sequence[str], stats: Dict[str, CompletionStats]) -> None:
        self.completion_days = list(days)
        self.completion_stats = dict(stats)
        self._completion_set = set(self.completion_days)

    # --- trend window ---

    def set_window(self, kind: Any) -> None:
        self.window = resolve_window(kind)
        self.trend_anchor = self.today
        self.interaction.reset()

    @property
    def can_go_next(self) -> bool:
        if self.window is WindowKind.WEEKLY:
            return not date_keys.same_week_monday(self.trend_anchor, self.today)
        return not date_keys.same_month(self.trend_anchor, self.today)

    def _shift(self, direction: int):
        if self.window is WindowKind.WEEKLY:
            return date_keys.add_days(self.trend_anchor, 7 * direction)
        return date_keys.add_months(self.trend_anchor, direction)

    def previous_period(self) -> None:
        self.trend_anchor = self._shift(-1)
        self.interaction.reset()

    def next_period(self) -> None:
        if not self.can_go_next:
            return
        self.trend_anchor = self._shift(1)
        self.interaction.reset()

    def series(self) -> List[SeriesPoint]:
        key = (self._revision, self.window, date_keys.encode(self.trend_anchor))
        if key != self._series_key:
            logger.debug("Rebuilding %s series anchored at %s", self.window.value, key[2])
            self._series = build_series(self.entries, self.window, self.trend_anchor)
            self._series_key = key
        return self._series

    def summary(self) -> Summary:
        return compute_summary(self.series())

    def chart_points(self) -> List[ChartPoint]:
        return self.indexer.plot_points(self.series())

    def chart_path(self) -> str:
        return self.indexer.line_path(self.chart_points())

    def active_point(self) -> Optional[ChartPoint]:
        i = self.interaction.active_index
        points = self.chart_points()
        if i is None or not 0 <= i < len(points):
            return None
        return points[i]

    def hover(self, x: float) -> None:
        self.interaction.pointer_move(self.indexer.pick(x, len(self.series())))

    def gentle_one_liner(self) -> str:
        return trend_one_liner(self.completion_days, self.today_key)

    def gentle_streak(self) -> int:
        return compute_streak(self.completion_days, self.today_key)

    def stats(self) -> HistoryStatsResponse:
        return build_history_stats(
            self.entries, self.window, self.trend_anchor,
            self.completion_days, self.today_key, self.indexer,
        )

    # --- calendar ---

    def previous_month(self) -> None:
        self.month_cursor = date_keys.start_of_month(date_keys.add_months(self.month_cursor, -1))

    def next_month(self) -> None:
        self.month_cursor = date_keys.start_of_month(date_keys.add_months(self.month_cursor, 1))

    def calendar_cells(self) -> List[CalendarCell]:
        start = date_keys.start_of_month(self.month_cursor)
        end = date_keys.end_of_month(self.month_cursor)
        day = date_keys.add_days(start, -date_keys.weekday_monday_zero(start))
        grid_end = date_keys.add_days(end, 6 - date_keys.weekday_monday_zero(end))

        cells = []
        while day <= grid_end:
            key = date_keys.encode(day)
            cells.append(CalendarCell(
                date_key=key,
                day=day.day,
                in_month=day.month == self.month_cursor.month,
                is_today=key == self.today_key,
                entry=self._latest.get(key),
                gentle_done=key in self._completion_set,
            ))
            day = date_keys.add_days(day, 1)
        return cells

    def select_day(self, key: Optional[str]) -> None:
        self.selected_date_key = None if key is None or key == self.selected_date_key else key

    def selected_entry(self) -> Optional[MoodEntry]:
        if not self.selected_date_key:
            return None
        day = entries_for_day(self.entries, self.selected_date_key)
        return day[0] if day else None

    def day_detail(self, temp_unit: str = "celsius") -> Optional[DayDetail]:
        key = self.selected_date_key
        if not key:
            return None
        entry = self.selected_entry()
        return DayDetail(
            date_key=key,
            label=day_label(key) or "Day details",
            entry=entry,
            mood_icon=entry.icon if entry else None,
            weather_text=format_weather(entry.weather, temp_unit) if entry else None,
            suggestions_text=(
                completion_for_day(key, self.completion_days, self.completion_stats) if entry else None
            ),
        )
