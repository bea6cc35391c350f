"""Protocol definitions for the stats collaborators."""

from __future__ import annotations

from typing import Protocol

from codex_wrapped.models.usage import CollectedUsage, ModelPricing


class UsageCollectorProtocol(Protocol):
    """Source of raw usage events."""

    async def collect(self, year: int) -> CollectedUsage: ...

    async def first_prompt_timestamp(self) -> float | None: ...


class ModelCatalogProtocol(Protocol):
    """Display names and providers for model ids."""

    async def load(self) -> None: ...

    def model_display_name(self, model_id: str) -> str: ...

    def model_provider(self, model_id: str) -> str: ...

    def provider_display_name(self, provider_id: str) -> str: ...

    def provider_logo_url(self, provider_id: str) -> str: ...


class PricingProtocol(Protocol):
    """Per-model price lookup."""

    async def get_model_pricing(self, model_id: str) -> ModelPricing | None: ...
