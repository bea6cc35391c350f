"""Service container with DI wiring."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from codex_wrapped.data.collector import CodexUsageCollector
from codex_wrapped.services.catalog import ModelCatalog
from codex_wrapped.services.cost import StaticPricing
from codex_wrapped.services.stats_service import StatsService

if TYPE_CHECKING:
    from codex_wrapped.config import Config


@dataclass
class ServiceContainer:
    """Holds all application services. Built once at startup, immutable."""

    collector: CodexUsageCollector
    catalog: ModelCatalog
    pricing: StaticPricing
    stats_service: StatsService

    @classmethod
    def create(cls, config: Config) -> ServiceContainer:
        """Factory that wires all dependencies."""
        collector = CodexUsageCollector(config)
        catalog = ModelCatalog(config.models_api_url, timeout=config.models_fetch_timeout)
        pricing = StaticPricing()
        stats_service = StatsService(collector, catalog, pricing)

        return cls(
            collector=collector,
            catalog=catalog,
            pricing=pricing,
            stats_service=stats_service,
        )
