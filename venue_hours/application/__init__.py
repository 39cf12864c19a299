"""Application orchestration layer."""

from venue_hours.application.open_venues import (
    adapt_payloads,
    evaluate_venue,
    filter_open_payloads,
    filter_open_venues,
)

__all__ = [
    "adapt_payloads",
    "evaluate_venue",
    "filter_open_payloads",
    "filter_open_venues",
]
