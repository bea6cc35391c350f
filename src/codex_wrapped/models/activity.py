"""Temporal activity models."""

from __future__ import annotations

from pydantic import BaseModel, Field

WEEKDAY_NAMES_FULL = [
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
]


class StreakResult(BaseModel):
    """Longest and current runs of consecutive active days."""

    max_streak: int = 0
    current_streak: int = 0
    max_streak_days: set[str] = Field(default_factory=set)


class MostActiveDay(BaseModel):
    """The single busiest calendar day."""

    date: str
    count: int
    formatted_date: str


class WeekdayActivity(BaseModel):
    """Activity bucketed by weekday, Sunday first."""

    counts: list[int] = Field(default_factory=lambda: [0] * 7)
    most_active_day: int = 0
    most_active_day_name: str = WEEKDAY_NAMES_FULL[0]
    max_count: int = 0
