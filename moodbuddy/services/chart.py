"""Trend chart layout and pointer hit-testing.

Coordinates are in the chart's own viewport (``width`` x ``height``), the
same space the line path and markers are drawn in. ``ChartInteraction``
keeps the hover/lock state of one chart.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from moodbuddy.models.stat import ChartPoint, SeriesPoint
from moodbuddy.services.numbers import clamp, is_finite_number, round_half_up
from moodbuddy.services.series import fill_for_chart, should_connect

logger = logging.getLogger(__name__)

TOOLTIP_WIDTH = 86
TOOLTIP_MARGIN = 6
TOOLTIP_OFFSET = 40


@dataclass(frozen=True)
class ChartIndexer:
    width: float = 320
    height: float = 150
    pad_x: float = 12
    pad_y: float = 12

    def step_x(self, n: int) -> float:
        return (self.width - self.pad_x * 2) / max(1, n - 1)

    def x_for_index(self, i: int, n: int) -> float:
        return self.pad_x + i * self.step_x(n)

    def y_for_value(self, value: float) -> float:
        return self.pad_y + (5 - value) * ((self.height - self.pad_y * 2) / 4)

    def pick(self, x: float, n: int) -> Optional[int]:
        """Index of the series point nearest to viewport coordinate ``x``."""
        if n <= 0 or not is_finite_number(x):
            return None
        return clamp(round_half_up((x - self.pad_x) / self.step_x(n)), 0, n - 1)

    def pick_client(self, client_x: float, left: float, rendered_width: float, n: int) -> Optional[int]:
        # Toạ độ màn hình -> toạ độ viewport (biểu đồ có thể bị co giãn khi hiển thị)
        if not all(is_finite_number(v) for v in (client_x, left, rendered_width)) or rendered_width <= 0:
            return None
        return self.pick((client_x - left) / rendered_width * self.width, n)

    def plot_points(self, series: Sequence[SeriesPoint]) -> List[ChartPoint]:
        filled = fill_for_chart(series)
        n = len(series)
        points = []
        for i, p in enumerate(series):
            plot_value = filled[i]
            points.append(ChartPoint(
                x=self.x_for_index(i, n),
                y=self.y_for_value(plot_value) if plot_value is not None else None,
                plot_value=plot_value,
                date_key=p.date_key,
                value=p.value,
            ))
        return points

    def line_path(self, points: Sequence[ChartPoint]) -> str:
        if not should_connect([p.value for p in points]):
            return ""
        parts = []
        for i, p in enumerate(points):
            if p.y is None:
                continue
            prev = i > 0 and points[i - 1].y is not None
            parts.append(f"{'L' if prev else 'M'} {p.x:g} {p.y:g}")
        return " ".join(parts)

    def tooltip_x(self, point: Optional[ChartPoint]) -> float:
        if point is None:
            return TOOLTIP_MARGIN
        return clamp(point.x - TOOLTIP_OFFSET, TOOLTIP_MARGIN, self.width - TOOLTIP_WIDTH)


def marker_indices(points: Sequence[ChartPoint]) -> List[int]:
    # Chỉ vẽ chấm ở những ngày thật sự có check-in
    return [i for i, p in enumerate(points) if p.value is not None and p.y is not None]


IDLE = "idle"
HOVERING = "hovering"
LOCKED = "locked"


@dataclass
class ChartInteraction:
    hover_index: Optional[int] = None
    locked_index: Optional[int] = None

    @property
    def state(self) -> str:
        if self.locked_index is not None:
            return LOCKED
        if self.hover_index is not None:
            return HOVERING
        return IDLE

    @property
    def active_index(self) -> Optional[int]:
        return self.locked_index if self.locked_index is not None else self.hover_index

    def pointer_move(self, index: Optional[int]) -> None:
        if self.locked_index is None:
            self.hover_index = index

    def pointer_leave(self) -> None:
        if self.locked_index is None:
            self.hover_index = None

    def tap(self) -> None:
        if self.hover_index is None:
            return
        if self.locked_index == self.hover_index:
            self.locked_index = None
            self.hover_index = None
        else:
            self.locked_index = self.hover_index
        logger.debug("Chart tap -> %s(%s)", self.state, self.active_index)

    def touch_move(self, index: Optional[int]) -> None:
        # Cảm ứng luôn cập nhật hover, điểm đang khoá vẫn được hiển thị
        self.hover_index = index

    def touch_end(self) -> None:
        if self.hover_index is not None:
            self.locked_index = self.hover_index

    def reset(self) -> None:
        self.hover_index = None
        self.locked_index = None
