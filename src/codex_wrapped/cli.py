"""Typer CLI for Codex Wrapped."""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from pathlib import Path
from typing import Annotated

import typer
from result import Err, Result

from codex_wrapped.config import Config
from codex_wrapped.dates import generate_weeks_for_year, get_intensity_level, is_wrapped_available
from codex_wrapped.models.stats import StatsSummary
from codex_wrapped.terminal import detect_terminal, display_in_terminal

app = typer.Typer(
    name="codex-wrapped",
    help="Codex Wrapped: your year of Codex CLI usage, in your terminal.",
)

HEATMAP_GLYPHS = "·░░▒▒▓█"
WEEKDAY_LABELS = ["Sun", "", "Tue", "", "Thu", "", "Sat"]


@app.command()
def main(
    year: Annotated[
        int | None, typer.Option("--year", "-y", help="Year to summarize (default: this year)")
    ] = None,
    codex_dir: Annotated[
        Path | None,
        typer.Option("--codex-dir", help="Path to Codex data directory"),
    ] = None,
    image: Annotated[
        Path | None,
        typer.Option("--image", help="Rendered PNG to show inline after the summary"),
    ] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print the summary as JSON")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Verbose logging")] = False,
) -> None:
    """Show your Codex year in review."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    year = year or date.today().year
    available, message = is_wrapped_available(year)
    if not available:
        typer.echo(message, err=True)
        raise typer.Exit(code=1)

    config = Config(codex_dir=codex_dir or Path.home() / ".codex")
    result = asyncio.run(_compute_summary(config, year))
    if isinstance(result, Err):
        typer.echo(f"Error: {result.err_value}", err=True)
        raise typer.Exit(code=1)

    summary = result.ok_value
    if as_json:
        typer.echo(summary.model_dump_json(indent=2))
        return

    if summary.total_tokens == 0 and not summary.daily_activity:
        typer.echo(f"No Codex usage found for {year}.")
        return

    typer.echo(format_summary(summary))
    typer.echo(format_heatmap(summary))

    if image is not None:
        _show_image(image)


async def _compute_summary(config: Config, year: int) -> Result[StatsSummary, str]:
    """Build the services and compute the summary."""
    from codex_wrapped.services.container import ServiceContainer

    container = ServiceContainer.create(config)
    return await container.stats_service.calculate_stats(year)


def _show_image(path: Path) -> None:
    try:
        png = path.read_bytes()
    except OSError as exc:
        typer.echo(f"Could not read image {path}: {exc}", err=True)
        return

    terminal = detect_terminal()
    if not display_in_terminal(png, terminal):
        typer.echo(f"Your terminal ({terminal.type}) can't show images inline.")
        typer.echo(f"Image saved at: {path}")


def format_summary(summary: StatsSummary) -> str:
    """Plain-text rendering of the summary."""
    lines = [
        f"Codex Wrapped {summary.year}",
        "",
        f"  Started      {summary.first_session_date:%b %d, %Y}"
        f" ({summary.days_since_first_session} days ago)",
        f"  Sessions     {summary.total_sessions:,}",
        f"  Messages     {summary.total_messages:,}",
        f"  Projects     {summary.total_projects:,}",
        f"  Tokens       {summary.total_tokens:,}",
        f"    input      {summary.total_input_tokens:,}"
        f" ({summary.total_cached_input_tokens:,} cached)",
        f"    output     {summary.total_output_tokens:,}"
        f" ({summary.total_reasoning_tokens:,} reasoning)",
    ]
    if summary.has_usage_cost:
        lines.append(f"  Est. cost    ${summary.total_cost:,.2f}")

    lines.append(f"  Max streak   {summary.max_streak} days")
    lines.append(f"  Streak now   {summary.current_streak} days")
    if summary.most_active_day is not None:
        day = summary.most_active_day
        lines.append(f"  Busiest day  {day.formatted_date} ({day.count:,} requests)")
    if summary.weekday_activity.max_count > 0:
        lines.append(f"  Favorite day {summary.weekday_activity.most_active_day_name}")

    if summary.top_models:
        lines += ["", "  Top models"]
        lines += [
            f"    {i}. {m.name:<24} {m.percentage:5.1f}%"
            for i, m in enumerate(summary.top_models, 1)
        ]
    if summary.top_providers:
        lines += ["", "  Top providers"]
        lines += [
            f"    {i}. {p.name:<24} {p.percentage:5.1f}%"
            for i, p in enumerate(summary.top_providers, 1)
        ]
    return "\n".join(lines)


def format_heatmap(summary: StatsSummary, today: date | None = None) -> str:
    """Text fallback for the activity heatmap: one row per weekday."""
    weeks = generate_weeks_for_year(summary.year, today)
    max_count = max(summary.daily_activity.values(), default=0)

    rows: list[str] = []
    for weekday in range(7):
        cells: list[str] = []
        for index, week in enumerate(weeks):
            # The first week is missing the days before Jan 1
            offset = 7 - len(week) if index == 0 else 0
            position = weekday - offset
            if position < 0 or position >= len(week) or not week[position]:
                cells.append(" ")
                continue
            count = summary.daily_activity.get(week[position], 0)
            cells.append(HEATMAP_GLYPHS[get_intensity_level(count, max_count)])
        rows.append(f"{WEEKDAY_LABELS[weekday]:>4} {''.join(cells)}")
    return "\n".join(["", *rows])
