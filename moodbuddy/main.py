from __future__ import annotations

import argparse
import logging
from pathlib import Path

from moodbuddy import config
from moodbuddy.db import storage
from moodbuddy.models.stat import WindowKind
from moodbuddy.services import date_keys
from moodbuddy.services.summary import emoji_for_value
from moodbuddy.views.history_view import WEEKDAYS_3, HistoryPage

logger = logging.getLogger(__name__)


def _date_key_arg(value: str) -> str:
    if date_keys.decode(value) is None:
        raise argparse.ArgumentTypeError(f"not a date (YYYY-MM-DD): {value!r}")
    return date_keys.encode(date_keys.decode(value))


def render_calendar(page: HistoryPage) -> list[str]:
    lines = [f"{page.month_cursor:%B %Y}", " ".join(f"{d:>4}" for d in WEEKDAYS_3)]
    row = []
    for cell in page.calendar_cells():
        if not cell.in_month:
            text = "."
        else:
            text = f"{cell.day}{cell.mood_icon or ''}{'*' if cell.gentle_done else ''}"
        row.append(f"{text:>4}")
        if len(row) == 7:
            lines.append(" ".join(row))
            row = []
    return lines


def render_history(page: HistoryPage, temp_unit: str = "celsius") -> str:
    stats = page.stats()
    summary = stats.summary
    title = "Weekly" if stats.window is WindowKind.WEEKLY else "Monthly"

    lines = ["Mood Calendar"]
    lines += render_calendar(page)

    detail = page.day_detail(temp_unit)
    if detail is not None:
        lines += ["", detail.label]
        if detail.entry is None:
            lines.append("No check-in for this day.")
        else:
            lines.append(f"Mood: {detail.mood_icon}")
            if detail.weather_text:
                lines.append(f"Weather: {detail.weather_text}")
            if detail.suggestions_text:
                lines.append(f"Suggestions: {detail.suggestions_text}")
            if detail.entry.note.strip():
                lines.append(f"Memo: {detail.entry.note}")

    if page.entries:
        lines += ["", f"Mood Trend ({title})"]
        for p in stats.series:
            value = "--" if p.value is None else f"{p.value:.1f}"
            lines.append(f"  {date_keys.format_mmdd(p.date_key)}  {emoji_for_value(p.value)}  {value}")

        lines += [
            "",
            "Summary",
            f"  Tracked: {summary.tracked_days}/{summary.total_days}",
            f"  Avg: {emoji_for_value(summary.avg)}",
            f"  Last: {emoji_for_value(summary.last)} "
            + ("--" if summary.last is None else f"{summary.last:.1f}/5"),
            f"  Most common: {summary.top_mood_icon or '—'} "
            + ("--" if summary.top_mood_score is None else f"{summary.top_mood_score}/5"),
            f"  {stats.gentle_one_liner}",
        ]
    else:
        lines += ["", "No records yet."]
    return "\n".join(lines)


def cmd_history(args: argparse.Namespace) -> None:
    data_dir = Path(args.data_dir).expanduser() if args.data_dir else config.get_data_dir()
    logger.info("Reading history from %s", data_dir)

    page = HistoryPage(
        entries=storage.load_entries(data_dir),
        completion_days=storage.load_completion_days(data_dir),
        completion_stats=storage.load_completion_stats(data_dir),
    )
    if args.monthly:
        page.set_window(WindowKind.MONTHLY)
    if args.anchor:
        page.trend_anchor = date_keys.decode(args.anchor)
        page.month_cursor = date_keys.start_of_month(page.trend_anchor)
    if args.day:
        page.select_day(args.day)

    unit = "fahrenheit" if args.fahrenheit else config.get_temp_unit()
    print(render_history(page, unit))


def main(argv=None) -> None:
    p = argparse.ArgumentParser(prog="moodbuddy", description="MoodBuddy mood journal history")
    p.add_argument("--data-dir", help="Directory holding the stored JSON files")
    sub = p.add_subparsers(dest="cmd", required=True)

    history = sub.add_parser("history", help="Show calendar, trend and summary")
    history.add_argument("--data-dir", default=argparse.SUPPRESS,
                         help="Directory holding the stored JSON files")
    history.add_argument("--monthly", action="store_true", help="Monthly window instead of weekly")
    history.add_argument("--anchor", type=_date_key_arg, help="Any day inside the period to show")
    history.add_argument("--day", type=_date_key_arg, help="Show details for this day")
    history.add_argument("--fahrenheit", action="store_true", help="Show temperatures in °F")
    history.set_defaults(func=cmd_history)

    args = p.parse_args(argv)
    logging.basicConfig(level=config.get_log_level(), format=config.LOG_FORMAT)
    args.func(args)


if __name__ == "__main__":
    main()
