"""Open-now evaluation for weekly opening-hours descriptions."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from venue_hours.domain.enums import Weekday
from venue_hours.domain.hours.parsing import (
    NOON_MINUTES,
    entry_hours_text,
    find_day_entry,
    is_closed_entry,
    parse_time_range,
)
from venue_hours.domain.models import CurrentPeriod, RealTimeStatus, TimeRange

HOURS_NOT_AVAILABLE = "Hours not available"


def _minutes_of_day(now: datetime) -> int:
    return now.hour * 60 + now.minute


def _yesterday_carryover(schedule: Sequence[str], today: Weekday, current: int) -> RealTimeStatus | None:
    yesterday = today.previous
    entry = find_day_entry(schedule, yesterday)
    if entry is None or is_closed_entry(entry):
        return None
    hours = parse_time_range(entry)
    if hours is None:
        return None
    # An AM close time before noon means yesterday's range ran past midnight.
    if hours.close_period != "am" or hours.close_minutes > NOON_MINUTES:
        return None
    if current > hours.close_minutes:
        return None

    day = yesterday.display_name
    return RealTimeStatus(
        is_open=True,
        current_period=CurrentPeriod(
            day=day,
            hours=entry_hours_text(entry),
            is_overnight_period=True,
            closes_at=hours.closes_at,
        ),
        message=f"Open until {hours.closes_at} ({day}'s overnight hours)",
    )


def _overnight_status(entry: str, day: str, hours: TimeRange, current: int) -> RealTimeStatus:
    is_open = hours.contains(current)
    if not is_open:
        message = f"Closed - Opens at {hours.opens_at}"
    elif current >= hours.open_minutes:
        message = f"Open until {hours.closes_at} tomorrow (overnight hours)"
    else:
        message = f"Open until {hours.closes_at} ({day}'s overnight hours)"
    return RealTimeStatus(
        is_open=is_open,
        current_period=CurrentPeriod(
            day=day,
            hours=entry_hours_text(entry),
            is_overnight_period=True,
            closes_at=hours.closes_at if is_open else None,
        ),
        message=message,
    )


def _same_day_status(entry: str, day: str, hours: TimeRange, current: int) -> RealTimeStatus:
    is_open = hours.contains(current)
    if is_open:
        message = f"Open until {hours.closes_at}"
    elif current < hours.open_minutes:
        message = f"Closed - Opens at {hours.opens_at}"
    else:
        message = f"Closed - Opens {hours.opens_at} tomorrow"
    return RealTimeStatus(
        is_open=is_open,
        current_period=CurrentPeriod(
            day=day,
            hours=entry_hours_text(entry),
            is_overnight_period=False,
            closes_at=hours.closes_at if is_open else None,
        ),
        message=message,
    )


def _today_status(schedule: Sequence[str], today: Weekday, current: int) -> RealTimeStatus | None:
    entry = find_day_entry(schedule, today)
    if entry is None:
        return None

    day = today.display_name
    if is_closed_entry(entry):
        return RealTimeStatus(
            is_open=False,
            current_period=CurrentPeriod(day=day, hours="Closed", is_overnight_period=False),
            message=f"Closed today ({day})",
        )

    hours = parse_time_range(entry)
    if hours is None:
        return None
    if hours.is_overnight:
        return _overnight_status(entry, day, hours, current)
    return _same_day_status(entry, day, hours, current)


def _fallback_status(fallback_open_now: Optional[bool]) -> RealTimeStatus:
    is_open = bool(fallback_open_now)
    return RealTimeStatus(
        is_open=is_open,
        message="Currently open" if is_open else "Currently closed",
    )


def evaluate(
    schedule: Optional[Sequence[str]],
    now: datetime,
    fallback_open_now: Optional[bool] = None,
) -> RealTimeStatus:
    """Decide whether a venue is open at ``now``.

    ``now`` must already be the venue's local wall-clock time; any tzinfo is
    ignored. Yesterday's overnight tail is checked before today's entry.
    ``fallback_open_now`` is used only when no usable entry exists for today.
    Malformed input never raises; it degrades to the fallback status.
    """
    if not schedule:
        return RealTimeStatus(is_open=False, message=HOURS_NOT_AVAILABLE)

    today = Weekday(now.weekday())
    current = _minutes_of_day(now)

    status = _yesterday_carryover(schedule, today, current)
    if status is not None:
        return status

    status = _today_status(schedule, today, current)
    if status is not None:
        return status

    return _fallback_status(fallback_open_now)


def is_open_now(schedule: Optional[Sequence[str]], now: datetime) -> bool:
    """Boolean verdict; schedules that cannot be read count as closed."""
    return evaluate(schedule, now, fallback_open_now=False).is_open


__all__ = ["HOURS_NOT_AVAILABLE", "evaluate", "is_open_now"]
