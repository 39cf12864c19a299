"""Helpers for reading provider weekday descriptions.

Entries look like ``"Monday: 9:00 AM – 5:00 PM"``, ``"Friday: 5 pm–2 am"`` or
``"Sunday: Closed"``. Providers are inconsistent about the dash character and
about the spaces around it (U+202F / U+2009 are common), so the range pattern
accepts any whitespace and hyphen, en-dash or em-dash.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional

from venue_hours.domain.enums import Weekday
from venue_hours.domain.models import TimeRange

_RANGE_RE = re.compile(
    r"(\d{1,2})(?::(\d{2}))?\s*(am|pm)\s*[–\-—]\s*(\d{1,2})(?::(\d{2}))?\s*(am|pm)",
    re.IGNORECASE,
)
_CLOSED_MARKER = "closed"
_HOURS_SEPARATOR = ": "
NOON_MINUTES = 12 * 60


def clock_to_minutes(hour: int, minute: int, period: str) -> int:
    """12-hour clock reading to minutes since midnight."""
    minutes = hour * 60 + minute
    meridiem = period.lower()
    if meridiem == "pm" and hour != 12:
        minutes += NOON_MINUTES
    if meridiem == "am" and hour == 12:
        minutes = minute
    return minutes


def format_clock(hour_text: str, minute_text: Optional[str], period: str) -> str:
    return f"{hour_text}:{(minute_text or '00').rjust(2, '0')} {period.upper()}"


def parse_time_range(text: str) -> TimeRange | None:
    """Parse the first ``H[:MM] am|pm – H[:MM] am|pm`` clause in ``text``."""
    if not isinstance(text, str):
        return None
    match = _RANGE_RE.search(text)
    if match is None:
        return None
    open_hour, open_min, open_period, close_hour, close_min, close_period = match.groups()
    return TimeRange(
        open_minutes=clock_to_minutes(int(open_hour), int(open_min or 0), open_period),
        close_minutes=clock_to_minutes(int(close_hour), int(close_min or 0), close_period),
        opens_at=format_clock(open_hour, open_min, open_period),
        closes_at=format_clock(close_hour, close_min, close_period),
        close_period=close_period.lower(),
    )


def find_day_entry(schedule: Iterable[object], day: Weekday) -> str | None:
    # Substring match: "Monday" also matches "Mondayish". First hit wins.
    needle = day.name.lower()
    for entry in schedule:
        if isinstance(entry, str) and needle in entry.lower():
            return entry
    return None


def is_closed_entry(text: str) -> bool:
    return _CLOSED_MARKER in text.lower()


def entry_hours_text(text: str) -> str:
    parts = text.split(_HOURS_SEPARATOR)
    if len(parts) > 1 and parts[1]:
        return parts[1]
    return text


__all__ = [
    "NOON_MINUTES",
    "clock_to_minutes",
    "entry_hours_text",
    "find_day_entry",
    "format_clock",
    "is_closed_entry",
    "parse_time_range",
]
