"""Shared fixtures for Codex Wrapped tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from codex_wrapped.config import Config
from codex_wrapped.services.catalog import ModelCatalog, ModelInfo, ProviderInfo
from tests.factories import token_count, write_jsonl


@pytest.fixture
def tmp_codex_dir(tmp_path: Path) -> Path:
    """A Codex data directory with two 2025 sessions and one 2024 session."""
    codex_dir = tmp_path / ".codex"
    sessions = codex_dir / "sessions"

    write_jsonl(
        sessions / "2025" / "03" / "01" / "rollout-a.jsonl",
        [
            {
                "timestamp": "2025-03-01T09:00:00",
                "type": "session_meta",
                "payload": {"id": "a", "timestamp": "2025-03-01T09:00:00", "cwd": "/src/alpha"},
            },
            {
                "timestamp": "2025-03-01T09:00:01",
                "type": "turn_context",
                "payload": {"model": "gpt-5-codex"},
            },
            {
                "timestamp": "2025-03-01T09:00:02",
                "type": "response_item",
                "payload": {"type": "message", "role": "user", "content": []},
            },
            {
                "timestamp": "2025-03-01T09:00:05",
                "type": "response_item",
                "payload": {"type": "message", "role": "assistant", "content": []},
            },
            token_count(
                "2025-03-01T09:00:06", input_tokens=1000, cached=400, output=200, cumulative=1200
            ),
            # Repeated snapshot, must be ignored
            token_count(
                "2025-03-01T09:00:07", input_tokens=1000, cached=400, output=200, cumulative=1200
            ),
            {
                "timestamp": "2025-03-01T09:00:08",
                "type": "event_msg",
                "payload": {"type": "token_count", "info": None},
            },
            token_count(
                "2025-03-02T10:00:00", input_tokens=500, output=100, reasoning=50, cumulative=1800
            ),
        ],
    )
    write_jsonl(
        sessions / "2025" / "03" / "03" / "rollout-b.jsonl",
        [
            {
                "timestamp": "2025-03-03T08:00:00",
                "type": "session_meta",
                "payload": {"id": "b", "timestamp": "2025-03-03T08:00:00", "cwd": "/src/beta"},
            },
            token_count("2025-03-03T08:01:00", input_tokens=300, output=30, cumulative=330),
        ],
    )
    write_jsonl(
        sessions / "2024" / "12" / "30" / "rollout-c.jsonl",
        [
            {
                "timestamp": "2024-12-30T08:00:00",
                "type": "session_meta",
                "payload": {"id": "c", "timestamp": "2024-12-30T08:00:00", "cwd": "/src/old"},
            },
            token_count("2024-12-30T08:01:00", input_tokens=999, output=1, cumulative=1000),
        ],
    )
    write_jsonl(
        codex_dir / "history.jsonl",
        [
            {"session_id": "x", "ts": 1700000000, "text": "hello"},
            {"session_id": "y", "ts": 1600000000, "text": "earliest"},
            {"session_id": "z", "text": "no ts"},
        ],
    )
    return codex_dir


@pytest.fixture
def test_config(tmp_codex_dir: Path) -> Config:
    """Config pointing at the temporary Codex directory."""
    return Config(codex_dir=tmp_codex_dir)


@pytest.fixture
def catalog() -> ModelCatalog:
    """A pre-loaded catalog with a couple of OpenAI and Anthropic models."""
    return ModelCatalog.from_data(
        models={
            "gpt-5-codex": ModelInfo(id="gpt-5-codex", name="GPT-5-Codex", provider="openai"),
            "gpt-5": ModelInfo(id="gpt-5", name="gpt-5", provider="openai"),
            "claude-sonnet-4-5": ModelInfo(
                id="claude-sonnet-4-5", name="Claude Sonnet 4.5", provider="anthropic"
            ),
        },
        providers={
            "openai": ProviderInfo(id="openai", name="OpenAI"),
            "anthropic": ProviderInfo(id="anthropic", name="Anthropic"),
        },
    )
