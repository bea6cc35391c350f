"""Token usage models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UsageEvent(BaseModel):
    """One token_count snapshot recorded by the Codex CLI."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    model: str
    input_tokens: int = Field(default=0, ge=0)
    cached_input_tokens: int = Field(default=0, ge=0)
    output_tokens: int = Field(default=0, ge=0)
    reasoning_output_tokens: int = Field(default=0, ge=0)
    total_tokens: int = Field(default=0, ge=0)


def effective_total(event: UsageEvent) -> int:
    """Total tokens for an event, never below input + output."""
    return max(event.total_tokens, event.input_tokens + event.output_tokens)


class ModelUsageTotals(BaseModel):
    """Accumulated token counters for a single model (or the grand total)."""

    input_tokens: int = 0
    cached_input_tokens: int = 0
    output_tokens: int = 0
    reasoning_tokens: int = 0
    total_tokens: int = 0

    def add(self, event: UsageEvent) -> None:
        self.input_tokens += event.input_tokens
        self.cached_input_tokens += event.cached_input_tokens
        self.output_tokens += event.output_tokens
        self.reasoning_tokens += event.reasoning_output_tokens
        self.total_tokens += effective_total(event)

    def merge(self, other: ModelUsageTotals) -> None:
        self.input_tokens += other.input_tokens
        self.cached_input_tokens += other.cached_input_tokens
        self.output_tokens += other.output_tokens
        self.reasoning_tokens += other.reasoning_tokens
        self.total_tokens += other.total_tokens

    def is_empty(self) -> bool:
        """True when no billable tokens were recorded."""
        return (
            self.input_tokens == 0
            and self.cached_input_tokens == 0
            and self.output_tokens == 0
            and self.reasoning_tokens == 0
        )

    @property
    def token_total(self) -> int:
        """Token count used for ranking."""
        if self.total_tokens > 0:
            return self.total_tokens
        return self.input_tokens + self.output_tokens + self.reasoning_tokens


class UsageAggregate(BaseModel):
    """Grand totals plus per-model totals for a set of usage events."""

    totals: ModelUsageTotals = Field(default_factory=ModelUsageTotals)
    models: dict[str, ModelUsageTotals] = Field(default_factory=dict)

    def merge(self, other: UsageAggregate) -> UsageAggregate:
        """Combine two partial aggregates into a new one."""
        merged = UsageAggregate()
        for part in (self, other):
            merged.totals.merge(part.totals)
            for model_id, usage in part.models.items():
                merged.models.setdefault(model_id, ModelUsageTotals()).merge(usage)
        return merged


class ModelPricing(BaseModel):
    """Prices in USD per million tokens."""

    input: float
    cached_input: float
    output: float


class CollectedUsage(BaseModel):
    """Raw usage scanned from the Codex data directory for one year."""

    events: list[UsageEvent] = Field(default_factory=list)
    daily_activity: dict[str, int] = Field(default_factory=dict)
    total_sessions: int = 0
    total_messages: int = 0
    projects: set[str] = Field(default_factory=set)
    earliest_session_date: datetime | None = None
