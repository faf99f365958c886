from enum import Enum
from pydantic import BaseModel
from typing import List, Optional

from moodbuddy.models.journal import MoodEntry


class WindowKind(str, Enum):
    WEEKLY = "weekly"    # Thứ 2 -> Chủ nhật
    MONTHLY = "monthly"  # ngày 1 -> ngày cuối tháng


class SeriesPoint(BaseModel):
    date_key: str
    value: Optional[float] = None


class Summary(BaseModel):
    avg: Optional[float] = None
    last: Optional[float] = None
    tracked_days: int = 0
    total_days: int = 0
    top_mood_score: Optional[int] = None
    top_mood_icon: Optional[str] = None


class ChartPoint(BaseModel):
    x: float
    y: Optional[float] = None
    plot_value: Optional[float] = None
    date_key: str
    value: Optional[float] = None


class CalendarCell(BaseModel):
    date_key: str
    day: int
    in_month: bool
    is_today: bool = False
    entry: Optional[MoodEntry] = None
    gentle_done: bool = False

    @property
    def mood_icon(self) -> Optional[str]:
        return self.entry.icon if self.entry else None


class DayDetail(BaseModel):
    date_key: str
    label: str
    entry: Optional[MoodEntry] = None
    mood_icon: Optional[str] = None
    weather_text: Optional[str] = None
    suggestions_text: Optional[str] = None


class HistoryStatsResponse(BaseModel):
    # 1. Khung biểu đồ đường
    window: WindowKind
    series: List[SeriesPoint]
    chart_points: List[ChartPoint]
    chart_path: str

    # 2. Khung tổng kết
    summary: Summary

    # 3. Khung gợi ý (gentle actions)
    gentle_one_liner: str
    gentle_streak: int
