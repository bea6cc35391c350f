"""Configuration for Codex Wrapped."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class Config:
    """Application configuration."""

    codex_dir: Path = field(default_factory=lambda: Path.home() / ".codex")
    models_api_url: str = "https://models.dev/api.json"
    models_fetch_timeout: float = 3.0
    default_model: str = "gpt-5"

    @property
    def sessions_dir(self) -> Path:
        return self.codex_dir / "sessions"

    @property
    def archived_sessions_dir(self) -> Path:
        return self.codex_dir / "archived_sessions"

    @property
    def history_path(self) -> Path:
        return self.codex_dir / "history.jsonl"
