"""Places payload adapters.

Both provider generations map onto ``VenueHours`` so the evaluator has a
single input shape.
"""

from __future__ import annotations

from typing import Any, Callable

from venue_hours.adapters.places.legacy import to_venue_hours as legacy_to_venue_hours
from venue_hours.adapters.places.v1 import to_venue_hours as v1_to_venue_hours
from venue_hours.domain.enums import PlacesApiVersion
from venue_hours.domain.models import VenueHours

_ADAPTERS: dict[PlacesApiVersion, Callable[[Any], VenueHours]] = {
    PlacesApiVersion.LEGACY: legacy_to_venue_hours,
    PlacesApiVersion.V1: v1_to_venue_hours,
}


def to_venue_hours(payload: Any, api_version: PlacesApiVersion | str = PlacesApiVersion.V1) -> VenueHours:
    version = PlacesApiVersion(api_version)
    return _ADAPTERS[version](payload)


__all__ = [
    "legacy_to_venue_hours",
    "to_venue_hours",
    "v1_to_venue_hours",
]
