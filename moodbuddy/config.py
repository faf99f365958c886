import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

DEFAULT_DATA_DIR = Path.home() / ".moodbuddy"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

TEMP_UNITS = ("celsius", "fahrenheit")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_data_dir() -> Path:
    value = os.getenv("MOODBUDDY_DATA_DIR")
    return Path(value).expanduser() if value else DEFAULT_DATA_DIR


def get_log_level() -> str:
    level = (os.getenv("MOODBUDDY_LOG_LEVEL") or "INFO").upper()
    return level if level in LOG_LEVELS else "INFO"


def get_temp_unit() -> str:
    unit = (os.getenv("MOODBUDDY_TEMP_UNIT") or "celsius").lower()
    return unit if unit in TEMP_UNITS else "celsius"
