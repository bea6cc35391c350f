"""Model pricing table and cost estimation."""

from __future__ import annotations

import re

from codex_wrapped.models.usage import ModelPricing

# Prices per million tokens (USD)
# Source: OpenAI API pricing page
MODEL_PRICING: dict[str, ModelPricing] = {
    "gpt-5": ModelPricing(input=1.25, cached_input=0.125, output=10.0),
    "gpt-5-codex": ModelPricing(input=1.25, cached_input=0.125, output=10.0),
    "gpt-5.1": ModelPricing(input=1.25, cached_input=0.125, output=10.0),
    "gpt-5.1-codex": ModelPricing(input=1.25, cached_input=0.125, output=10.0),
    "gpt-5.1-codex-max": ModelPricing(input=1.25, cached_input=0.125, output=10.0),
    "gpt-5-mini": ModelPricing(input=0.25, cached_input=0.025, output=2.0),
    "gpt-5.1-codex-mini": ModelPricing(input=0.25, cached_input=0.025, output=2.0),
    "gpt-5-nano": ModelPricing(input=0.05, cached_input=0.005, output=0.4),
    "gpt-4.1": ModelPricing(input=2.0, cached_input=0.5, output=8.0),
    "gpt-4.1-mini": ModelPricing(input=0.4, cached_input=0.1, output=1.6),
    "o3": ModelPricing(input=2.0, cached_input=0.5, output=8.0),
    "o4-mini": ModelPricing(input=1.1, cached_input=0.275, output=4.4),
    "codex-mini-latest": ModelPricing(input=1.5, cached_input=0.375, output=6.0),
}

_DATE_SUFFIX = re.compile(r"-\d{4}-\d{2}-\d{2}$")


def get_pricing(model: str) -> ModelPricing | None:
    """Get pricing for a model, or None when it is not in the table."""
    key = model.strip().lower().removeprefix("openai/")
    pricing = MODEL_PRICING.get(key)
    if pricing is None:
        pricing = MODEL_PRICING.get(_DATE_SUFFIX.sub("", key))
    return pricing


def calculate_cost_usd(
    pricing: ModelPricing,
    input_tokens: int = 0,
    cached_input_tokens: int = 0,
    output_tokens: int = 0,
) -> float:
    """Estimate cost in USD.

    Codex reports cached tokens as a subset of input tokens, so only the
    uncached remainder is billed at the full input rate. Reasoning tokens are
    already included in output tokens.
    """
    uncached = max(input_tokens - cached_input_tokens, 0)
    return (
        uncached / 1_000_000 * pricing.input
        + cached_input_tokens / 1_000_000 * pricing.cached_input
        + output_tokens / 1_000_000 * pricing.output
    )


class StaticPricing:
    """Pricing lookups backed by :data:`MODEL_PRICING`."""

    async def get_model_pricing(self, model_id: str) -> ModelPricing | None:
        return get_pricing(model_id)
