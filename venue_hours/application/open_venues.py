"""Batch open-now filtering for candidate venues.

Each venue is evaluated at its own wall-clock time. A venue that fails for any
reason is logged and skipped; the batch always completes.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable, Optional, Sequence

from venue_hours.adapters.places import to_venue_hours
from venue_hours.config.settings import ServiceSettings, load_settings
from venue_hours.domain.distance import haversine, within_radius
from venue_hours.domain.enums import BusinessStatus, PlacesApiVersion
from venue_hours.domain.exceptions import PlacePayloadError
from venue_hours.domain.hours.clock import local_time_for_offset
from venue_hours.domain.hours.evaluator import evaluate
from venue_hours.domain.models import GeoPoint, VenueAvailability, VenueHours
from venue_hours.infrastructure.logging import StructuredLogger, get_logger

_STAGE = "open_venues"
_CLOSED_STATUSES = {BusinessStatus.CLOSED_TEMPORARILY, BusinessStatus.CLOSED_PERMANENTLY}


def evaluate_venue(venue: VenueHours, utc_now: datetime) -> VenueAvailability:
    local_time = local_time_for_offset(utc_now, venue.utc_offset_minutes)
    status = evaluate(venue.weekday_descriptions, local_time, venue.open_now)
    return VenueAvailability(venue=venue, local_time=local_time, status=status)


def _skip_reason(venue: VenueHours) -> str | None:
    if not venue.weekday_descriptions:
        return "no_hours"
    if venue.business_status in _CLOSED_STATUSES:
        return venue.business_status.value.lower()
    return None


def _distance_km(venue: VenueHours, origin: Optional[GeoPoint]) -> float | None:
    if origin is None or not venue.has_location:
        return None
    return haversine(origin.lat, origin.lon, float(venue.lat), float(venue.lon))


def _filter(
    venues: Iterable[VenueHours],
    utc_now: datetime,
    *,
    origin: Optional[GeoPoint],
    radius_m: Optional[int],
    log_evaluations: bool,
    logger: StructuredLogger,
) -> list[VenueAvailability]:
    results: list[VenueAvailability] = []
    for venue in venues:
        reason = _skip_reason(venue)
        if reason is not None:
            logger.venue_skipped(venue.place_id, reason)
            continue
        try:
            availability = evaluate_venue(venue, utc_now)
            distance = _distance_km(venue, origin)
        except Exception as exc:
            logger.venue_skipped(venue.place_id, "error", error=str(exc))
            continue

        if log_evaluations:
            logger.evaluation(
                venue.place_id,
                is_open=availability.status.is_open,
                message=availability.status.message,
                local_time=availability.local_time.isoformat(),
            )
        if not availability.status.is_open:
            continue
        if distance is not None:
            if radius_m is not None and not within_radius(distance, radius_m):
                logger.venue_skipped(venue.place_id, "out_of_radius", distance_km=round(distance, 3))
                continue
            availability.distance_km = distance
        results.append(availability)
    return results


def _resolve_radius(origin: Optional[GeoPoint], radius_m: Optional[int], settings: ServiceSettings) -> int | None:
    if origin is None:
        return None
    return radius_m if radius_m is not None else settings.default_radius_m


def filter_open_venues(
    venues: Sequence[VenueHours],
    utc_now: datetime,
    *,
    origin: Optional[GeoPoint] = None,
    radius_m: Optional[int] = None,
    max_candidates: Optional[int] = None,
    settings: Optional[ServiceSettings] = None,
    logger: Optional[StructuredLogger] = None,
) -> list[VenueAvailability]:
    """Return the venues open at ``utc_now``, in input order."""
    settings = settings or load_settings()
    logger = logger or get_logger()
    cap = max_candidates if max_candidates is not None else settings.max_candidates
    venues = list(venues)
    candidates = venues[: max(0, cap)]
    if len(venues) > len(candidates):
        logger.warning(_STAGE, "candidate cap reached", cap=cap, dropped=len(venues) - len(candidates))

    logger.stage_start(_STAGE, venues_in=len(candidates))
    results = _filter(
        candidates,
        utc_now,
        origin=origin,
        radius_m=_resolve_radius(origin, radius_m, settings),
        log_evaluations=settings.log_evaluations,
        logger=logger,
    )
    logger.stage_end(_STAGE, venues_in=len(candidates), venues_open=len(results))
    return results


def adapt_payloads(
    payloads: Iterable[Any],
    api_version: PlacesApiVersion | str,
    *,
    logger: Optional[StructuredLogger] = None,
) -> list[VenueHours]:
    logger = logger or get_logger()
    venues: list[VenueHours] = []
    for idx, payload in enumerate(payloads):
        try:
            venues.append(to_venue_hours(payload, api_version))
        except PlacePayloadError as exc:
            logger.venue_skipped(f"payload_{idx}", "invalid_payload", error=str(exc))
        except Exception as exc:
            logger.venue_skipped(f"payload_{idx}", "invalid_payload", error=f"{type(exc).__name__}: {exc}")
    return venues


def filter_open_payloads(
    payloads: Sequence[Any],
    api_version: PlacesApiVersion | str,
    utc_now: datetime,
    *,
    origin: Optional[GeoPoint] = None,
    radius_m: Optional[int] = None,
    max_candidates: Optional[int] = None,
    settings: Optional[ServiceSettings] = None,
    logger: Optional[StructuredLogger] = None,
) -> list[VenueAvailability]:
    """Adapt raw provider payloads, then filter them like ``filter_open_venues``."""
    settings = settings or load_settings()
    logger = logger or get_logger()
    cap = max_candidates if max_candidates is not None else settings.max_candidates
    payloads = list(payloads)
    if len(payloads) > cap:
        logger.warning(_STAGE, "candidate cap reached", cap=cap, dropped=len(payloads) - max(0, cap))
    venues = adapt_payloads(payloads[: max(0, cap)], api_version, logger=logger)
    results = filter_open_venues(
        venues,
        utc_now,
        origin=origin,
        radius_m=radius_m,
        max_candidates=cap,
        settings=settings,
        logger=logger,
    )
    logger.summary(payloads_in=len(payloads), venues_adapted=len(venues), venues_open=len(results))
    return results


__all__ = [
    "adapt_payloads",
    "evaluate_venue",
    "filter_open_payloads",
    "filter_open_venues",
]
