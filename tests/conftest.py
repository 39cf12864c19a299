"""pytest global fixtures: environment isolation."""

import io

import pytest

from venue_hours.infrastructure.logging import StructuredLogger

_ENV_VARS = (
    "VENUE_HOURS_MAX_CANDIDATES",
    "VENUE_HOURS_DEFAULT_RADIUS_M",
    "VENUE_HOURS_PLACES_API",
    "VENUE_HOURS_LOG_EVALUATIONS",
    "ENABLE_DOCS",
    "CORS_ORIGINS",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Clear service env vars and the shared logger so tests do not leak into each other."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("venue_hours.infrastructure.logging._logger", None)
    yield


@pytest.fixture
def log_stream():
    return io.StringIO()


@pytest.fixture
def logger(log_stream):
    return StructuredLogger(trace_id="test", output=log_stream)
