"""Streaks, busiest day and weekday distribution from daily activity."""

from __future__ import annotations

from collections.abc import Collection, Mapping
from datetime import date, timedelta

from codex_wrapped.dates import format_date_key, format_short_date, parse_date_key, sunday_index
from codex_wrapped.models.activity import (
    WEEKDAY_NAMES_FULL,
    MostActiveDay,
    StreakResult,
    WeekdayActivity,
)


def _active_keys(daily_activity: Mapping[str, int]) -> set[str]:
    return {key for key, count in daily_activity.items() if count > 0}


def calculate_streaks(
    daily_activity: Mapping[str, int],
    year: int,
    today: date | None = None,
) -> StreakResult:
    """Compute the longest streak within ``year`` and the streak ending today."""
    active = _active_keys(daily_activity)
    active_dates = sorted(d for d in map(parse_date_key, active) if d.year == year)
    if not active_dates:
        return StreakResult()

    max_streak = 1
    run_length = 1
    run_start = 0
    max_start = max_end = 0
    for i in range(1, len(active_dates)):
        if (active_dates[i] - active_dates[i - 1]).days == 1:
            run_length += 1
            if run_length > max_streak:
                max_streak = run_length
                max_start, max_end = run_start, i
        else:
            run_length = 1
            run_start = i

    max_streak_days = {format_date_key(d) for d in active_dates[max_start : max_end + 1]}

    today = today or date.today()
    yesterday = today - timedelta(days=1)
    if format_date_key(today) in active:
        current_streak = count_streak_backwards(active, today)
    elif format_date_key(yesterday) in active:
        current_streak = count_streak_backwards(active, yesterday)
    else:
        current_streak = 0

    return StreakResult(
        max_streak=max_streak,
        current_streak=current_streak,
        max_streak_days=max_streak_days,
    )


def count_streak_backwards(active: Collection[str], start: date) -> int:
    """Count consecutive active days going backwards from ``start`` (inclusive)."""
    streak = 1
    check = start - timedelta(days=1)
    while format_date_key(check) in active:
        streak += 1
        check -= timedelta(days=1)
    return streak


def find_most_active_day(daily_activity: Mapping[str, int]) -> MostActiveDay | None:
    """Find the busiest day; ties go to the earliest date."""
    max_key = ""
    max_count = 0
    for key in sorted(daily_activity):
        count = daily_activity[key]
        if count > max_count:
            max_key, max_count = key, count

    if not max_key:
        return None
    return MostActiveDay(
        date=max_key,
        count=max_count,
        formatted_date=format_short_date(parse_date_key(max_key)),
    )


def build_weekday_activity(daily_activity: Mapping[str, int]) -> WeekdayActivity:
    """Bucket counts by weekday (Sunday=0); ties go to the lowest index."""
    counts = [0] * 7
    for key, count in daily_activity.items():
        counts[sunday_index(parse_date_key(key))] += count

    most_active = 0
    max_count = 0
    for index, count in enumerate(counts):
        if count > max_count:
            most_active, max_count = index, count

    return WeekdayActivity(
        counts=counts,
        most_active_day=most_active,
        most_active_day_name=WEEKDAY_NAMES_FULL[most_active],
        max_count=max_count,
    )
