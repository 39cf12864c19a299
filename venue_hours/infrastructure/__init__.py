"""Infrastructure services and cross-cutting utilities."""

from venue_hours.infrastructure.logging import StructuredLogger, get_logger, scrub_text

__all__ = ["StructuredLogger", "get_logger", "scrub_text"]
