"""Runtime settings snapshot helpers."""

from __future__ import annotations

import os

from pydantic import BaseModel, Field

from venue_hours.domain.enums import PlacesApiVersion

_TRUTHY = {"1", "true", "yes", "on"}

DEFAULT_MAX_CANDIDATES = 12
DEFAULT_RADIUS_M = 10000


def _is_enabled(value: str | None) -> bool:
    return bool(value and value.strip().lower() in _TRUTHY)


def _positive_int(value: str | None, default: int) -> int:
    if value is None or not value.strip():
        return default
    try:
        parsed = int(value.strip())
    except ValueError:
        return default
    return max(1, parsed)


def resolve_places_api() -> PlacesApiVersion:
    raw = str(os.getenv("VENUE_HOURS_PLACES_API") or "").strip().lower()
    try:
        return PlacesApiVersion(raw)
    except ValueError:
        return PlacesApiVersion.V1


def resolve_cors_origins() -> list[str]:
    raw = os.getenv("CORS_ORIGINS", "*")
    origins = [item.strip() for item in raw.split(",") if item.strip()]
    return origins or ["*"]


class ServiceSettings(BaseModel):
    max_candidates: int = Field(default=DEFAULT_MAX_CANDIDATES, ge=1)
    default_radius_m: int = Field(default=DEFAULT_RADIUS_M, ge=1)
    places_api: PlacesApiVersion = Field(default=PlacesApiVersion.V1)
    log_evaluations: bool = Field(default=False)
    enable_docs: bool = Field(default=False)
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


def load_settings() -> ServiceSettings:
    return ServiceSettings(
        max_candidates=_positive_int(os.getenv("VENUE_HOURS_MAX_CANDIDATES"), DEFAULT_MAX_CANDIDATES),
        default_radius_m=_positive_int(os.getenv("VENUE_HOURS_DEFAULT_RADIUS_M"), DEFAULT_RADIUS_M),
        places_api=resolve_places_api(),
        log_evaluations=_is_enabled(os.getenv("VENUE_HOURS_LOG_EVALUATIONS")),
        enable_docs=_is_enabled(os.getenv("ENABLE_DOCS")),
        cors_origins=resolve_cors_origins(),
    )


__all__ = [
    "DEFAULT_MAX_CANDIDATES",
    "DEFAULT_RADIUS_M",
    "ServiceSettings",
    "load_settings",
]
