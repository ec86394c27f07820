"""Showtime formatting utilities."""

import re

SEE_WEBSITE = "See website"

# Tried in order; the first pattern that matches wins.
_TWELVE_HOUR = re.compile(r"^(\d{1,2}):(\d{2})\s*(am|pm)$", re.IGNORECASE)
_TWELVE_HOUR_NO_MINUTES = re.compile(r"^(\d{1,2})\s*(am|pm)$", re.IGNORECASE)
_TWENTY_FOUR_HOUR = re.compile(r"^(\d{1,2}):(\d{2})$")


def format_clock(hour: int, minute: int) -> str:
    """
    Format 24-hour clock parts as a display time.

    Examples:
        format_clock(14, 5) → "2:05pm"
        format_clock(0, 30) → "12:30am"
        format_clock(12, 0) → "12:00pm"
    """
    period = "pm" if hour >= 12 else "am"
    hour12 = hour % 12 or 12
    return f"{hour12}:{minute:02d}{period}"


def normalise_time(time_str: str) -> str:
    """
    Standardise a showtime to the "H:MMam" / "H:MMpm" format.

    Accepts "2:30 PM", "2:30pm", "2pm", "2 PM" and 24-hour "14:30".
    Anything else (including the "See website" placeholder) is returned
    unchanged. The hour is reformatted, never shifted between timezones.

    Args:
        time_str: Time as scraped from a cinema website

    Returns:
        Canonical display time, or the input if it isn't a recognised format
    """
    if not time_str or "see website" in time_str.lower():
        return time_str

    text = time_str.strip()

    match = _TWELVE_HOUR.match(text)
    if match:
        hour = int(match.group(1))
        minute = int(match.group(2))
        return f"{hour}:{minute:02d}{match.group(3).lower()}"

    match = _TWELVE_HOUR_NO_MINUTES.match(text)
    if match:
        return f"{int(match.group(1))}:00{match.group(2).lower()}"

    match = _TWENTY_FOUR_HOUR.match(text)
    if match:
        hour = int(match.group(1))
        minute = int(match.group(2))
        if hour < 24 and minute < 60:
            return format_clock(hour, minute)

    return time_str
