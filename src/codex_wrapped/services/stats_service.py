"""Stats service: builds the year-in-review summary."""

from __future__ import annotations

import asyncio
import logging
import math
from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from result import Err, Ok, Result

from codex_wrapped.models.stats import StatsSummary
from codex_wrapped.services.activity import (
    build_weekday_activity,
    calculate_streaks,
    find_most_active_day,
)
from codex_wrapped.services.aggregation import aggregate_events
from codex_wrapped.services.cost import calculate_cost_usd
from codex_wrapped.services.ranking import rank_usage

if TYPE_CHECKING:
    from codex_wrapped.models.usage import CollectedUsage, ModelUsageTotals
    from codex_wrapped.services.protocols import (
        ModelCatalogProtocol,
        PricingProtocol,
        UsageCollectorProtocol,
    )

logger = logging.getLogger(__name__)


def _local_now() -> datetime:
    return datetime.now().astimezone()


class StatsService:
    """Composes collection, aggregation, ranking and activity analysis."""

    def __init__(
        self,
        collector: UsageCollectorProtocol,
        catalog: ModelCatalogProtocol,
        pricing: PricingProtocol,
        clock: Callable[[], datetime] = _local_now,
    ) -> None:
        self._collector = collector
        self._catalog = catalog
        self._pricing = pricing
        self._clock = clock

    async def calculate_stats(self, year: int) -> Result[StatsSummary, str]:
        """Compute the summary for ``year``.

        Only a failure to collect usage is an error; missing catalog, history
        or pricing data just leaves the matching fields less precise.
        """
        try:
            usage = await self._collector.collect(year)
        except Exception as exc:
            logger.exception("Failed to collect usage for %d", year)
            return Err(f"Failed to collect usage: {exc}")

        await self._catalog.load()

        now = self._clock().astimezone()
        aggregate = aggregate_events(usage.events)
        totals = aggregate.totals
        top_models, top_providers = rank_usage(aggregate.models, totals.total_tokens, self._catalog)

        streaks = calculate_streaks(usage.daily_activity, year, today=now.date())
        first_session_date = await self._first_session_date(usage, now)
        total_cost = await self._total_cost(aggregate.models)

        return Ok(
            StatsSummary(
                year=year,
                first_session_date=first_session_date,
                days_since_first_session=max((now - first_session_date).days, 0),
                total_sessions=usage.total_sessions,
                total_messages=usage.total_messages,
                total_projects=len(usage.projects),
                total_input_tokens=totals.input_tokens,
                total_cached_input_tokens=totals.cached_input_tokens,
                total_output_tokens=totals.output_tokens,
                total_reasoning_tokens=totals.reasoning_tokens,
                total_tokens=totals.total_tokens,
                total_cost=total_cost,
                has_usage_cost=total_cost > 0,
                top_models=top_models,
                top_providers=top_providers,
                max_streak=streaks.max_streak,
                current_streak=streaks.current_streak,
                max_streak_days=streaks.max_streak_days,
                daily_activity=usage.daily_activity,
                most_active_day=find_most_active_day(usage.daily_activity),
                weekday_activity=build_weekday_activity(usage.daily_activity),
            )
        )

    async def _first_session_date(self, usage: CollectedUsage, now: datetime) -> datetime:
        """Earlier of the first logged session and the first history prompt."""
        try:
            history_ts = await self._collector.first_prompt_timestamp()
        except Exception as exc:
            logger.warning("History lookup failed: %s", exc)
            history_ts = None

        history_date = None
        if history_ts:
            try:
                history_date = datetime.fromtimestamp(history_ts).astimezone()
            except (ValueError, OverflowError, OSError) as exc:
                logger.warning("Ignoring invalid history timestamp %r: %s", history_ts, exc)

        # Naive values are taken as local time
        candidates = [
            date.astimezone()
            for date in (usage.earliest_session_date, history_date)
            if date is not None
        ]
        return min(candidates) if candidates else now

    async def _total_cost(self, models: dict[str, ModelUsageTotals]) -> float:
        billable = {model_id: usage for model_id, usage in models.items() if not usage.is_empty()}
        lookups = await asyncio.gather(
            *(self._pricing.get_model_pricing(model_id) for model_id in billable),
            return_exceptions=True,
        )

        total_cost = 0.0
        for (model_id, usage), pricing in zip(billable.items(), lookups, strict=True):
            if isinstance(pricing, BaseException):
                logger.warning("Pricing lookup failed for %s: %s", model_id, pricing)
                continue
            if pricing is None:
                logger.info("No pricing for %s; excluded from cost", model_id)
                continue
            cost = calculate_cost_usd(
                pricing,
                input_tokens=usage.input_tokens,
                cached_input_tokens=usage.cached_input_tokens,
                output_tokens=usage.output_tokens,
            )
            if math.isfinite(cost):
                total_cost += cost
        return total_cost
