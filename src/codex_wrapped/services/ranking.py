"""Top model and provider rankings."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from codex_wrapped.models.stats import ModelStats, ProviderStats

if TYPE_CHECKING:
    from codex_wrapped.models.usage import ModelUsageTotals
    from codex_wrapped.services.protocols import ModelCatalogProtocol

DEFAULT_PROVIDER_ID = "openai"
TOP_N = 3


def resolve_provider_id(model_id: str, catalog: ModelCatalogProtocol) -> str:
    """Provider for a model, falling back to OpenAI for unknown models."""
    provider = catalog.model_provider(model_id)
    if provider and provider != "unknown":
        return provider
    return DEFAULT_PROVIDER_ID


def _percentage(count: int, denominator: int) -> float:
    return count / denominator * 100 if denominator > 0 else 0.0


def rank_usage(
    models: Mapping[str, ModelUsageTotals],
    grand_total: int,
    catalog: ModelCatalogProtocol,
    limit: int = TOP_N,
) -> tuple[list[ModelStats], list[ProviderStats]]:
    """Rank models and providers by token count.

    Percentages share one denominator: ``grand_total`` when positive,
    otherwise the sum of every ranked model's tokens. Models without usage
    are left out. Equal counts keep their encounter order.
    """
    provider_counts: dict[str, int] = {}
    model_stats: list[ModelStats] = []

    for model_id, usage in models.items():
        token_total = usage.token_total
        if token_total <= 0:
            continue
        provider_id = resolve_provider_id(model_id, catalog)
        provider_counts[provider_id] = provider_counts.get(provider_id, 0) + token_total
        model_stats.append(
            ModelStats(
                id=model_id,
                name=catalog.model_display_name(model_id),
                provider_id=provider_id,
                count=token_total,
            )
        )

    denominator = grand_total if grand_total > 0 else sum(m.count for m in model_stats)

    top_models = [
        model.model_copy(update={"percentage": _percentage(model.count, denominator)})
        for model in sorted(model_stats, key=lambda m: m.count, reverse=True)[:limit]
    ]
    top_providers = [
        ProviderStats(
            id=provider_id,
            name=catalog.provider_display_name(provider_id),
            count=count,
            logo_url=catalog.provider_logo_url(provider_id),
            percentage=_percentage(count, denominator),
        )
        for provider_id, count in sorted(
            provider_counts.items(), key=lambda item: item[1], reverse=True
        )[:limit]
    ]
    return top_models, top_providers
