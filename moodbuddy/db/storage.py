import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from moodbuddy.config import get_data_dir
from moodbuddy.models.journal import CompletionStats, MoodEntry

logger = logging.getLogger(__name__)

# Tên file giữ nguyên theo key lưu trữ của ứng dụng
ENTRIES_FILE = "moodEntries.json"
GENTLE_ACTIONS_HISTORY_FILE = "moodbuddy.gentleActions.history.v1.json"
GENTLE_ACTIONS_COMPLETION_STATS_FILE = "moodbuddy.gentleActions.completionStats.v1.json"


def _loads(raw: Optional[str]) -> Any:
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as e:
        logger.warning("Stored value is not valid JSON: %s", e)
        return None


def parse_entries(raw: Optional[str]) -> List[MoodEntry]:
    data = _loads(raw)
    if not isinstance(data, list):
        if data is not None:
            logger.warning("Mood entries are not an array (%s), ignoring", type(data).__name__)
        return []

    entries = []
    for i, item in enumerate(data):
        try:
            entries.append(MoodEntry.model_validate(item))
        except ValidationError as e:
            logger.warning("Skipping malformed mood entry #%d: %s", i, e.error_count())
    return entries


def parse_completion_days(raw: Optional[str]) -> List[str]:
    data = _loads(raw)
    if isinstance(data, list):
        return [x for x in data if isinstance(x, str)]
    return []


def parse_completion_stats(raw: Optional[str]) -> Dict[str, CompletionStats]:
    data = _loads(raw)
    if not isinstance(data, dict):
        return {}

    stats = {}
    for key, value in data.items():
        try:
            stats[key] = CompletionStats.model_validate(value)
        except ValidationError:
            logger.warning("Skipping malformed completion stats for %s", key)
    return stats


def _read(path: Path) -> Optional[str]:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Could not read %s: %s", path, e)
        return None


def get_entries_path(data_dir: Optional[Path] = None) -> Path:
    return (data_dir or get_data_dir()) / ENTRIES_FILE


def get_completion_history_path(data_dir: Optional[Path] = None) -> Path:
    return (data_dir or get_data_dir()) / GENTLE_ACTIONS_HISTORY_FILE


def get_completion_stats_path(data_dir: Optional[Path] = None) -> Path:
    return (data_dir or get_data_dir()) / GENTLE_ACTIONS_COMPLETION_STATS_FILE


def load_entries(data_dir: Optional[Path] = None) -> List[MoodEntry]:
    return parse_entries(_read(get_entries_path(data_dir)))


def load_completion_days(data_dir: Optional[Path] = None) -> List[str]:
    return parse_completion_days(_read(get_completion_history_path(data_dir)))


def load_completion_stats(data_dir: Optional[Path] = None) -> Dict[str, CompletionStats]:
    return parse_completion_stats(_read(get_completion_stats_path(data_dir)))
