import math
from enum import Enum
from typing import Any, Optional
from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict, ValidationError, field_validator

from moodbuddy.services.date_keys import parse_timestamp
from moodbuddy.services.numbers import is_finite_number


class MoodKind(str, Enum):
    VERY_BAD = "very_bad"
    BAD = "bad"
    OKAY = "okay"
    GOOD = "good"
    GREAT = "great"


MOOD_SCORES = {
    MoodKind.VERY_BAD: 1,
    MoodKind.BAD: 2,
    MoodKind.OKAY: 3,
    MoodKind.GOOD: 4,
    MoodKind.GREAT: 5,
}

MOOD_ICONS = {
    MoodKind.VERY_BAD: "😞",
    MoodKind.BAD: "😕",
    MoodKind.OKAY: "😐",
    MoodKind.GOOD: "🙂",
    MoodKind.GREAT: "😄",
}

NEUTRAL_SCORE = 3
NEUTRAL_ICON = MOOD_ICONS[MoodKind.OKAY]


def mood_kind_for(value) -> Optional[MoodKind]:
    try:
        return MoodKind(value)
    except ValueError:
        return None


def icon_for_score(score: int) -> str:
    for kind, s in MOOD_SCORES.items():
        if s == score:
            return MOOD_ICONS[kind]
    return NEUTRAL_ICON


# Snapshot chụp lúc check-in, luôn lưu theo độ C
class WeatherSnapshot(BaseModel):
    temp_c: float = Field(alias="tempC")
    label: str = ""
    icon: str = ""
    city: Optional[str] = None
    code: Optional[int] = None

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("temp_c")
    @classmethod
    def finite_temp(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("tempC must be a finite number")
        return v


# Một lần check-in, đọc từ JSON đã lưu (key camelCase)
class MoodEntry(BaseModel):
    id: Optional[str] = None
    mood_id: str = Field(default="", alias="moodId")
    mood_score: Optional[float] = Field(default=None, alias="moodScore")
    note: str = ""
    date_key: str = Field(alias="dateKey")
    timestamp: Any = None
    image_data_url: Optional[str] = Field(default=None, alias="imageDataUrl")
    weather: Optional[WeatherSnapshot] = None

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("id", mode="before")
    @classmethod
    def id_as_text(cls, v: Any) -> Optional[str]:
        # id cũ có thể là số (epoch ms)
        if isinstance(v, bool):
            return None
        if isinstance(v, (int, float)):
            return str(v)
        return v if isinstance(v, str) else None

    @field_validator("mood_id", mode="before")
    @classmethod
    def unknown_mood_id(cls, v: Any) -> str:
        return v if isinstance(v, str) else ""

    @field_validator("mood_score", mode="before")
    @classmethod
    def drop_non_numeric_score(cls, v: Any) -> Optional[float]:
        # Chỉ nhận số thật, còn lại suy ra từ mood_id
        if not is_finite_number(v):
            return None
        return v

    @field_validator("note", mode="before")
    @classmethod
    def empty_note(cls, v: Any) -> str:
        return v if isinstance(v, str) else ""

    @field_validator("weather", mode="before")
    @classmethod
    def drop_bad_weather(cls, v: Any) -> Any:
        if isinstance(v, WeatherSnapshot):
            return v
        try:
            return WeatherSnapshot.model_validate(v)
        except ValidationError:
            return None

    @property
    def mood_kind(self) -> Optional[MoodKind]:
        return mood_kind_for(self.mood_id)

    @property
    def score(self) -> float:
        if self.mood_score is not None:
            return self.mood_score
        kind = self.mood_kind
        return MOOD_SCORES[kind] if kind is not None else NEUTRAL_SCORE

    @property
    def icon(self) -> str:
        kind = self.mood_kind
        return MOOD_ICONS[kind] if kind is not None else NEUTRAL_ICON

    @property
    def created_at(self) -> datetime:
        return parse_timestamp(self.timestamp)


class CompletionStats(BaseModel):
    total: int
    completed: int
