"""Opening-hours interpretation."""

from venue_hours.domain.hours.clock import local_time_for_offset, local_time_from_offsets
from venue_hours.domain.hours.evaluator import HOURS_NOT_AVAILABLE, evaluate, is_open_now
from venue_hours.domain.hours.parsing import find_day_entry, parse_time_range

__all__ = [
    "HOURS_NOT_AVAILABLE",
    "evaluate",
    "find_day_entry",
    "is_open_now",
    "local_time_for_offset",
    "local_time_from_offsets",
    "parse_time_range",
]
