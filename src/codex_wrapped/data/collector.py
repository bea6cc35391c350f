"""Scan Codex CLI session logs into usage events for a given year."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from codex_wrapped.config import Config
from codex_wrapped.dates import format_date_key
from codex_wrapped.models.usage import CollectedUsage, UsageEvent

logger = logging.getLogger(__name__)


@dataclass
class _SessionScan:
    """Per-file scan result before year filtering is merged in."""

    started_at: datetime | None = None
    project_path: str = ""
    events: list[UsageEvent] = field(default_factory=list)
    message_count: int = 0


class CodexUsageCollector:
    """Reads ``~/.codex`` session JSONL files and prompt history."""

    def __init__(self, config: Config) -> None:
        self._config = config

    async def collect(self, year: int) -> CollectedUsage:
        return await asyncio.to_thread(self.collect_sync, year)

    async def first_prompt_timestamp(self) -> float | None:
        return await asyncio.to_thread(self.first_prompt_timestamp_sync)

    def collect_sync(self, year: int) -> CollectedUsage:
        """Scan every session file, keeping events that fall in ``year``."""
        usage = CollectedUsage()
        for path in self._session_files():
            scan = _scan_session_file(path, self._config.default_model)
            if scan.started_at is not None and (
                usage.earliest_session_date is None
                or scan.started_at < usage.earliest_session_date
            ):
                usage.earliest_session_date = scan.started_at

            events = [e for e in scan.events if e.timestamp.year == year]
            if not events:
                continue

            usage.total_sessions += 1
            usage.total_messages += scan.message_count
            if scan.project_path:
                usage.projects.add(scan.project_path)
            for event in events:
                key = format_date_key(event.timestamp.date())
                usage.daily_activity[key] = usage.daily_activity.get(key, 0) + 1
            usage.events.extend(events)

        logger.info(
            "Collected %d usage events from %d sessions for %d",
            len(usage.events),
            usage.total_sessions,
            year,
        )
        return usage

    def first_prompt_timestamp_sync(self) -> float | None:
        """Earliest ``ts`` (unix seconds) in ``history.jsonl``, if any."""
        history_path = self._config.history_path
        if not history_path.is_file():
            return None

        earliest: float | None = None
        for raw in _iter_json_lines(history_path):
            ts = raw.get("ts")
            if isinstance(ts, bool) or not isinstance(ts, int | float) or ts <= 0:
                continue
            if earliest is None or ts < earliest:
                earliest = float(ts)
        return earliest

    def _session_files(self) -> list[Path]:
        files: list[Path] = []
        for directory in (self._config.sessions_dir, self._config.archived_sessions_dir):
            if not directory.is_dir():
                logger.info("Codex sessions directory not found: %s", directory)
                continue
            files.extend(sorted(directory.rglob("*.jsonl")))
        return files


def _scan_session_file(path: Path, default_model: str) -> _SessionScan:
    scan = _SessionScan()
    current_model = default_model
    last_total: dict[str, object] | None = None

    for raw in _iter_json_lines(path):
        msg_type = raw.get("type")
        payload = raw.get("payload")
        if not isinstance(payload, dict):
            continue
        timestamp = _parse_timestamp(raw.get("timestamp"))

        match msg_type:
            case "session_meta":
                started = _parse_timestamp(payload.get("timestamp")) or timestamp
                if started is not None and scan.started_at is None:
                    scan.started_at = started
                cwd = payload.get("cwd")
                if isinstance(cwd, str) and cwd:
                    scan.project_path = cwd
            case "turn_context":
                model = payload.get("model")
                if isinstance(model, str) and model:
                    current_model = model
            case "response_item":
                if payload.get("type") == "message" and payload.get("role") in {
                    "user",
                    "assistant",
                }:
                    scan.message_count += 1
            case "event_msg" if payload.get("type") == "token_count":
                info = payload.get("info")
                if not isinstance(info, dict) or timestamp is None:
                    continue
                last_usage = info.get("last_token_usage")
                if not isinstance(last_usage, dict):
                    continue
                total_usage = info.get("total_token_usage")
                if isinstance(total_usage, dict):
                    # Codex re-emits the same snapshot when nothing changed
                    if total_usage == last_total:
                        continue
                    last_total = total_usage
                scan.events.append(_usage_event(last_usage, current_model, timestamp))
            case _:
                continue

    return scan


def _usage_event(usage: dict[str, object], model: str, timestamp: datetime) -> UsageEvent:
    return UsageEvent(
        timestamp=timestamp,
        model=model,
        input_tokens=_count(usage.get("input_tokens")),
        cached_input_tokens=_count(usage.get("cached_input_tokens")),
        output_tokens=_count(usage.get("output_tokens")),
        reasoning_output_tokens=_count(usage.get("reasoning_output_tokens")),
        total_tokens=_count(usage.get("total_tokens")),
    )


def _iter_json_lines(path: Path) -> Iterator[dict[str, object]]:
    try:
        with open(path, encoding="utf-8") as file:
            for line_num, line in enumerate(file, 1):
                line = line.strip()
                if not line:
                    continue
                try:
                    raw = json.loads(line)
                except json.JSONDecodeError:
                    logger.warning("Invalid JSON at %s:%d", path, line_num)
                    continue
                if isinstance(raw, dict):
                    yield raw
    except OSError as exc:
        logger.warning("Failed to read %s: %s", path, exc)


def _parse_timestamp(value: object) -> datetime | None:
    """Parse an ISO timestamp into local time."""
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value).astimezone()
    except ValueError:
        return None


def _count(val: object) -> int:
    if isinstance(val, bool):
        return 0
    if isinstance(val, int | float):
        return max(int(val), 0)
    return 0
