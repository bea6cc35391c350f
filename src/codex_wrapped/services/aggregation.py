"""Fold usage events into per-model and grand token totals."""

from __future__ import annotations

from collections.abc import Iterable

from codex_wrapped.models.usage import (
    ModelUsageTotals,
    UsageAggregate,
    UsageEvent,
    effective_total,
)

__all__ = ["aggregate_events", "effective_total"]


def aggregate_events(events: Iterable[UsageEvent]) -> UsageAggregate:
    """Aggregate events in a single pass.

    The result does not depend on event order. Partial aggregates can be
    combined with :meth:`UsageAggregate.merge`.
    """
    aggregate = UsageAggregate()
    for event in events:
        aggregate.totals.add(event)
        usage = aggregate.models.get(event.model)
        if usage is None:
            usage = aggregate.models[event.model] = ModelUsageTotals()
        usage.add(event)
    return aggregate
