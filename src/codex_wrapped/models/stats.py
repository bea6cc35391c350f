"""Year-in-review summary models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from codex_wrapped.models.activity import MostActiveDay, WeekdayActivity


class RankedEntry(BaseModel):
    """One row of a top-N ranking."""

    id: str
    name: str
    count: int
    percentage: float = 0.0


class ModelStats(RankedEntry):
    """Ranked model usage."""

    provider_id: str


class ProviderStats(RankedEntry):
    """Ranked provider usage."""

    logo_url: str = ""


class StatsSummary(BaseModel):
    """Everything the year-in-review image is drawn from."""

    year: int
    first_session_date: datetime
    days_since_first_session: int = 0
    total_sessions: int = 0
    total_messages: int = 0
    total_projects: int = 0
    total_input_tokens: int = 0
    total_cached_input_tokens: int = 0
    total_output_tokens: int = 0
    total_reasoning_tokens: int = 0
    total_tokens: int = 0
    total_cost: float = 0.0
    has_usage_cost: bool = False
    top_models: list[ModelStats] = Field(default_factory=list)
    top_providers: list[ProviderStats] = Field(default_factory=list)
    max_streak: int = 0
    current_streak: int = 0
    max_streak_days: set[str] = Field(default_factory=set)
    daily_activity: dict[str, int] = Field(default_factory=dict)
    most_active_day: MostActiveDay | None = None
    weekday_activity: WeekdayActivity = Field(default_factory=WeekdayActivity)
