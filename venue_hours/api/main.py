"""FastAPI application."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from venue_hours import __version__
from venue_hours.api.schemas import (
    HealthResponse,
    HoursStatusRequest,
    HoursStatusResponse,
    OpenVenuesRequest,
    OpenVenuesResponse,
)
from venue_hours.application.open_venues import filter_open_payloads
from venue_hours.config.settings import load_settings
from venue_hours.domain.hours.clock import utc_now
from venue_hours.domain.hours.evaluator import evaluate
from venue_hours.infrastructure.logging import get_logger, scrub_text

_api_logger = logging.getLogger("venue-hours.api")

load_dotenv()

_settings = load_settings()

app = FastAPI(
    title="venue-hours",
    version=__version__,
    docs_url="/docs" if _settings.enable_docs else None,
    redoc_url=None,
)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Cache-Control"] = "no-store"
        return response


app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.cors_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


@app.get("/health", response_model=HealthResponse)
def health():
    return HealthResponse(status="ok", version=__version__)


@app.post("/v1/hours/status", response_model=HoursStatusResponse)
def hours_status(req: HoursStatusRequest):
    """Open/closed verdict for one schedule at a venue-local instant."""
    return evaluate(req.weekday_descriptions, req.now, req.open_now)


@app.post("/v1/venues/open", response_model=OpenVenuesResponse)
def open_venues(req: OpenVenuesRequest):
    """Filter raw places payloads down to the venues open right now."""
    settings = load_settings()
    api_version = req.api_version or settings.places_api
    now = req.now_utc or utc_now()
    try:
        venues = filter_open_payloads(
            req.venues,
            api_version,
            now,
            origin=req.origin,
            radius_m=req.radius_m,
            settings=settings,
            logger=get_logger(),
        )
    except Exception as exc:
        _api_logger.error("open venues endpoint error: %s", scrub_text(str(exc)))
        get_logger().error("api.open_venues", f"{type(exc).__name__}: {exc}")
        return OpenVenuesResponse(venues=[], count=0, message="Failed to evaluate venues")

    message = "" if venues else "No open venues found"
    return OpenVenuesResponse(venues=venues, count=len(venues), message=message)
