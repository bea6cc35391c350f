"""Pydantic models for Codex Wrapped."""

from codex_wrapped.models.activity import (
    WEEKDAY_NAMES_FULL,
    MostActiveDay,
    StreakResult,
    WeekdayActivity,
)
from codex_wrapped.models.stats import ModelStats, ProviderStats, RankedEntry, StatsSummary
from codex_wrapped.models.terminal import TerminalCapability, TerminalType
from codex_wrapped.models.usage import (
    CollectedUsage,
    ModelPricing,
    ModelUsageTotals,
    UsageAggregate,
    UsageEvent,
    effective_total,
)

__all__ = [
    "CollectedUsage",
    "ModelPricing",
    "ModelStats",
    "ModelUsageTotals",
    "MostActiveDay",
    "ProviderStats",
    "RankedEntry",
    "StatsSummary",
    "StreakResult",
    "TerminalCapability",
    "TerminalType",
    "UsageAggregate",
    "UsageEvent",
    "WeekdayActivity",
    "WEEKDAY_NAMES_FULL",
    "effective_total",
]
