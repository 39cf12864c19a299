"""Places API (New) ``places/{id}`` payload adapter.

Only ``regularOpeningHours.weekdayDescriptions`` feeds the schedule;
``currentOpeningHours.openNow`` is the provider's own verdict and is kept as
the fallback flag.
"""

from __future__ import annotations

from typing import Any

from venue_hours.adapters.places.common import (
    business_status,
    safe_bool,
    safe_dict,
    safe_float,
    safe_int,
    safe_str,
    text_list,
)
from venue_hours.domain.enums import PlacesApiVersion
from venue_hours.domain.exceptions import PlacePayloadError
from venue_hours.domain.models import VenueHours

_SOURCE = PlacesApiVersion.V1.value
_RESOURCE_PREFIX = "places/"


def _place_id(raw: dict[str, Any]) -> str:
    place_id = safe_str(raw.get("id")).strip()
    if place_id:
        return place_id
    resource = safe_str(raw.get("name")).strip()
    if resource.startswith(_RESOURCE_PREFIX):
        return resource[len(_RESOURCE_PREFIX):]
    return ""


def _display_name(raw: dict[str, Any]) -> str:
    display = raw.get("displayName")
    if isinstance(display, dict):
        return safe_str(display.get("text"))
    return safe_str(display)


def _open_now(raw: dict[str, Any]) -> bool | None:
    current = safe_bool(safe_dict(raw.get("currentOpeningHours")).get("openNow"))
    if current is not None:
        return current
    return safe_bool(safe_dict(raw.get("regularOpeningHours")).get("openNow"))


def to_venue_hours(payload: Any) -> VenueHours:
    if not isinstance(payload, dict):
        raise PlacePayloadError(_SOURCE, f"expected an object, got {type(payload).__name__}")
    place_id = _place_id(payload)
    if not place_id:
        raise PlacePayloadError(_SOURCE, "missing id")

    regular = safe_dict(payload.get("regularOpeningHours"))
    location = safe_dict(payload.get("location"))

    return VenueHours(
        place_id=place_id,
        name=_display_name(payload),
        weekday_descriptions=text_list(regular.get("weekdayDescriptions")),
        open_now=_open_now(payload),
        business_status=business_status(payload.get("businessStatus")),
        lat=safe_float(location.get("latitude")),
        lon=safe_float(location.get("longitude")),
        utc_offset_minutes=safe_int(payload.get("utcOffsetMinutes")),
        source=_SOURCE,
    )


__all__ = ["to_venue_hours"]
