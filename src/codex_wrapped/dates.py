"""Calendar helpers for heatmaps and date keys.

Date keys are ``YYYY-MM-DD`` strings in the local calendar. All arithmetic is
done on :class:`datetime.date` so there is no time-of-day or DST component.
"""

from __future__ import annotations

from datetime import date, timedelta

MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def format_date_key(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def parse_date_key(key: str) -> date:
    """Parse a ``YYYY-MM-DD`` key as a calendar date."""
    return date.fromisoformat(key)


def format_short_date(day: date) -> str:
    """Format as ``"Mon D"``, e.g. ``"Mar 7"``."""
    return f"{MONTH_NAMES[day.month - 1]} {day.day}"


def sunday_index(day: date) -> int:
    """Weekday index with Sunday=0 .. Saturday=6."""
    return day.isoweekday() % 7


def generate_weeks_for_year(year: int, today: date | None = None) -> list[list[str]]:
    """Build Sunday-first weeks of date keys for a heatmap.

    Days of the year past ``today`` (current year only) are padded with ``""``;
    days outside the year are omitted, so the first week may be short.
    """
    today = today or date.today()
    end = today if year == today.year else date(year, 12, 31)

    start = date(year, 1, 1)
    current = start - timedelta(days=sunday_index(start))

    weeks: list[list[str]] = []
    week: list[str] = []
    while current <= end or week:
        if current.year == year:
            week.append(format_date_key(current) if current <= end else "")

        if sunday_index(current) == 6:
            if any(week):
                weeks.append(week)
            week = []

        current += timedelta(days=1)
        if current.year > year + 1:
            break

    if any(week):
        weeks.append(week)
    return weeks


def get_intensity_level(count: int, max_count: int) -> int:
    """Bucket a day's count into heatmap levels 0-6."""
    if count == 0 or max_count == 0:
        return 0

    ratio = count / max_count
    if ratio <= 0.1:
        return 1
    if ratio <= 0.25:
        return 2
    if ratio <= 0.4:
        return 3
    if ratio <= 0.6:
        return 4
    if ratio <= 0.8:
        return 5
    return 6


def is_wrapped_available(year: int, today: date | None = None) -> tuple[bool, str]:
    """Whether a wrapped can be generated for ``year``.

    Returns:
        (available, message) where message explains why not.
    """
    today = today or date.today()
    if year > today.year:
        return False, f"Codex Wrapped {year} isn't available yet. The future hasn't been written!"
    return True, ""
