"""Model and provider metadata from models.dev."""

from __future__ import annotations

import asyncio
import logging
import re

import httpx
from pydantic import BaseModel

logger = logging.getLogger(__name__)

MODELS_API_URL = "https://models.dev/api.json"
PROVIDER_LOGO_URL = "https://models.dev/logos/{provider_id}.svg"


class ModelInfo(BaseModel):
    id: str
    name: str
    provider: str


class ProviderInfo(BaseModel):
    id: str
    name: str


class ModelCatalog:
    """Cache of the models.dev catalog, populated at most once.

    A failed fetch leaves the catalog empty; every lookup then falls back to
    names derived from the ids themselves.
    """

    def __init__(
        self,
        url: str = MODELS_API_URL,
        timeout: float = 3.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._transport = transport
        self._lock = asyncio.Lock()
        self._loaded = False
        self.models: dict[str, ModelInfo] = {}
        self.providers: dict[str, ProviderInfo] = {}

    @classmethod
    def from_data(
        cls,
        models: dict[str, ModelInfo] | None = None,
        providers: dict[str, ProviderInfo] | None = None,
    ) -> ModelCatalog:
        """Build an already-loaded catalog (no network)."""
        catalog = cls()
        catalog.models = dict(models or {})
        catalog.providers = dict(providers or {})
        catalog._loaded = True
        return catalog

    @property
    def loaded(self) -> bool:
        return self._loaded

    async def load(self) -> None:
        """Fetch the catalog once; concurrent callers share the same fetch."""
        if self._loaded:
            return
        async with self._lock:
            if self._loaded:
                return
            try:
                async with httpx.AsyncClient(
                    timeout=self._timeout, transport=self._transport
                ) as client:
                    resp = await client.get(self._url)
                    resp.raise_for_status()
                    self.models, self.providers = parse_catalog(resp.json())
            except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
                logger.info("models.dev catalog unavailable: %s", exc)
                self.models, self.providers = {}, {}
            finally:
                self._loaded = True

    def model_display_name(self, model_id: str) -> str:
        info = self.models.get(model_id)
        if info and info.name:
            return normalize_model_name(info.name)
        return normalize_model_name(format_model_id_as_name(model_id))

    def model_provider(self, model_id: str) -> str:
        info = self.models.get(model_id)
        if info and info.provider:
            return info.provider
        return "unknown"

    def provider_display_name(self, provider_id: str) -> str:
        info = self.providers.get(provider_id)
        if info and info.name:
            return info.name
        return provider_id[:1].upper() + provider_id[1:]

    def provider_logo_url(self, provider_id: str) -> str:
        return PROVIDER_LOGO_URL.format(provider_id=provider_id)


def parse_catalog(data: object) -> tuple[dict[str, ModelInfo], dict[str, ProviderInfo]]:
    """Flatten the models.dev ``{provider: {name, models: {...}}}`` payload."""
    models: dict[str, ModelInfo] = {}
    providers: dict[str, ProviderInfo] = {}
    if not isinstance(data, dict):
        return models, providers

    for provider_id, provider_data in data.items():
        if not isinstance(provider_data, dict):
            continue

        provider_name = provider_data.get("name")
        if isinstance(provider_name, str) and provider_name:
            providers[provider_id] = ProviderInfo(id=provider_id, name=provider_name)

        provider_models = provider_data.get("models")
        if not isinstance(provider_models, dict):
            continue
        for model_id, model_data in provider_models.items():
            if not isinstance(model_data, dict):
                continue
            name = model_data.get("name")
            if isinstance(name, str) and name:
                models[model_id] = ModelInfo(id=model_id, name=name, provider=provider_id)

    return models, providers


def format_model_id_as_name(model_id: str) -> str:
    """``gpt-5-codex`` -> ``GPT 5 Codex``."""
    parts: list[str] = []
    for part in re.split(r"[-_]", model_id):
        if part[:1].isdigit():
            parts.append(part)
        elif part.lower() == "gpt":
            parts.append("GPT")
        else:
            parts.append(part[:1].upper() + part[1:])
    return " ".join(parts)


def normalize_model_name(name: str) -> str:
    name = re.sub(r"\bgpt\b", "GPT", name, flags=re.IGNORECASE)
    return re.sub(r"\bgpt(?=[-0-9])", "GPT", name, flags=re.IGNORECASE)
