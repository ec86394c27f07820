"""Venue-local calendar helpers."""

from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from cinefeed.config import settings


def venue_today(timezone: str | None = None) -> date:
    """Return today's date in the venues' timezone (Melbourne by default)."""
    return datetime.now(ZoneInfo(timezone or settings.venue_timezone)).date()


def date_for_offset(day_offset: int, today: date | None = None) -> date:
    """Return the venue-local date ``day_offset`` days after today."""
    return (today or venue_today()) + timedelta(days=day_offset)


def display_date(day: date) -> str:
    """Format a date for the feed, e.g. "Sunday, 18 October 2026"."""
    return f"{day:%A}, {day.day} {day:%B %Y}"


def days_from_today(target_date: date, today: date | None = None) -> int:
    """Number of calendar days between venue-local today and ``target_date``."""
    return (target_date - (today or venue_today())).days


def relative_day_label(
    target_date: date,
    today: date | None = None,
    use_tomorrow: bool = True,
) -> str:
    """
    Return the label venues use to head a day's listings.

    Args:
        target_date: Day being scraped
        today: Venue-local today (computed if not given)
        use_tomorrow: Whether the venue says "tomorrow" or the weekday name

    Returns:
        "today", "tomorrow" or a lowercase weekday name such as "monday"
    """
    offset = days_from_today(target_date, today)
    if offset == 0:
        return "today"
    if offset == 1 and use_tomorrow:
        return "tomorrow"
    return f"{target_date:%A}".lower()
