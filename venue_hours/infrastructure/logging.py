"""Structured logging: one JSON object per line, with secret scrubbing."""

from __future__ import annotations

import json
import re
import sys
import time
import uuid
from typing import Any, Optional

_REDACTED = "***REDACTED***"
# Provider photo URLs carry ``key=...``; request dumps carry the header form.
_SECRET_PATTERNS = (
    re.compile(r"(?i)(?P<prefix>\b(?:key|api[_-]?key|token|secret)=)(?P<value>[^&\s\"']+)"),
    re.compile(r"(?i)(?P<prefix>\bx-goog-api-key[\"']?\s*[:=]\s*[\"']?)(?P<value>[^\s,;\"']+)"),
)


def scrub_text(text: str) -> str:
    if not text:
        return text
    for pattern in _SECRET_PATTERNS:
        text = pattern.sub(lambda m: f"{m.group('prefix')}{_REDACTED}", text)
    return text


class StructuredLogger:
    """JSON-line logger with per-stage timers."""

    def __init__(self, trace_id: Optional[str] = None, output=None):
        self.trace_id = trace_id or str(uuid.uuid4())[:8]
        self._output = output or sys.stderr
        self._timers: dict[str, float] = {}

    def _emit(self, data: dict[str, Any]) -> None:
        data["trace_id"] = self.trace_id
        data["timestamp"] = time.time()
        try:
            line = json.dumps(data, ensure_ascii=False, default=str)
            self._output.write(scrub_text(line) + "\n")
            self._output.flush()
        except Exception as exc:
            # Last-resort fallback to avoid silent logger failures.
            try:
                fallback = {
                    "event": "logger_internal_error",
                    "trace_id": self.trace_id,
                    "timestamp": time.time(),
                    "error": str(exc),
                }
                sys.stderr.write(json.dumps(fallback, ensure_ascii=False, default=str) + "\n")
                sys.stderr.flush()
            except Exception:
                return

    def stage_start(self, stage: str, **extra: Any) -> None:
        self._timers[stage] = time.time()
        self._emit({"event": "stage_start", "stage": stage, **extra})

    def stage_end(
        self,
        stage: str,
        *,
        venues_in: int = 0,
        venues_open: int = 0,
        **extra: Any,
    ) -> None:
        start = self._timers.pop(stage, time.time())
        duration_ms = round((time.time() - start) * 1000, 1)
        self._emit({
            "event": "stage_end",
            "stage": stage,
            "duration_ms": duration_ms,
            "venues_in": venues_in,
            "venues_open": venues_open,
            **extra,
        })

    def evaluation(self, place_id: str, *, is_open: bool, message: str, **extra: Any) -> None:
        self._emit({"event": "evaluation", "place_id": place_id, "is_open": is_open, "message": message, **extra})

    def venue_skipped(self, place_id: str, reason: str, **extra: Any) -> None:
        self._emit({"event": "venue_skipped", "place_id": place_id, "reason": reason, **extra})

    def error(self, stage: str, error: str, **extra: Any) -> None:
        self._emit({"event": "error", "stage": stage, "error": scrub_text(error), **extra})

    def warning(self, stage: str, message: str, **extra: Any) -> None:
        self._emit({"event": "warning", "stage": stage, "message": scrub_text(message), **extra})

    def summary(self, **extra: Any) -> None:
        self._emit({"event": "summary", **extra})


_logger: Optional[StructuredLogger] = None


def get_logger(trace_id: Optional[str] = None) -> StructuredLogger:
    global _logger
    if _logger is None or (trace_id and _logger.trace_id != trace_id):
        _logger = StructuredLogger(trace_id=trace_id)
    return _logger


__all__ = ["StructuredLogger", "get_logger", "scrub_text"]
