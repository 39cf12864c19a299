"""venue-hours CLI entry point."""

from __future__ import annotations

import argparse
import json
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Sequence

from dotenv import load_dotenv

from venue_hours.application.open_venues import filter_open_payloads
from venue_hours.config.settings import load_settings
from venue_hours.domain.enums import PlacesApiVersion
from venue_hours.domain.hours.clock import utc_now
from venue_hours.domain.hours.evaluator import evaluate
from venue_hours.domain.models import GeoPoint, VenueAvailability


def _parse_instant(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid ISO datetime: {value}") from exc


def _load_payloads(path: Path) -> list[Any]:
    with open(path, encoding="utf-8") as fh:
        payload = json.load(fh)
    if isinstance(payload, dict):
        for key in ("places", "results"):
            if isinstance(payload.get(key), list):
                return list(payload[key])
        return [payload]
    if isinstance(payload, list):
        return payload
    raise ValueError("expected a JSON list of places or an object with 'places' / 'results'")


def _format_venue(item: VenueAvailability) -> str:
    name = item.venue.name or item.venue.place_id
    line = f"{name}: {item.status.message}"
    if item.distance_km is not None:
        line += f" ({item.distance_km:.1f} km)"
    return line


def _cmd_status(args: argparse.Namespace) -> int:
    now = args.now or datetime.now()
    status = evaluate(args.entries, now, args.open_now)
    if args.json:
        print(json.dumps(status.model_dump(mode="json"), ensure_ascii=False, indent=2))
    else:
        print(status.message)
    return 0


def _cmd_venues(args: argparse.Namespace) -> int:
    try:
        payloads = _load_payloads(Path(args.file))
    except (OSError, ValueError) as exc:
        print(f"error: cannot read {args.file}: {exc}", file=sys.stderr)
        return 1

    settings = load_settings()
    origin = None
    if args.lat is not None and args.lon is not None:
        origin = GeoPoint(lat=args.lat, lon=args.lon)

    venues = filter_open_payloads(
        payloads,
        args.api_version or settings.places_api,
        args.now_utc or utc_now(),
        origin=origin,
        radius_m=args.radius_m,
        settings=settings,
    )
    if args.json:
        print(json.dumps([item.model_dump(mode="json") for item in venues], ensure_ascii=False, indent=2))
        return 0

    if not venues:
        print("No open venues found")
        return 0
    for item in venues:
        print(_format_venue(item))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="venue-hours", description="Open-now checks for places opening hours")
    sub = parser.add_subparsers(dest="command", required=True)

    status = sub.add_parser("status", help="Evaluate one weekly schedule")
    status.add_argument("entries", nargs="*", help="Weekday descriptions, e.g. 'Friday: 5:00 PM – 2:00 AM'")
    status.add_argument("--now", type=_parse_instant, default=None, help="Venue-local time (ISO 8601)")
    fallback = status.add_mutually_exclusive_group()
    fallback.add_argument("--open-now", dest="open_now", action="store_true", default=None)
    fallback.add_argument("--closed-now", dest="open_now", action="store_false")
    status.add_argument("--json", action="store_true", help="Print the full status as JSON")
    status.set_defaults(handler=_cmd_status, open_now=None)

    venues = sub.add_parser("venues", help="Filter a JSON file of places payloads to open venues")
    venues.add_argument("file", help="JSON file with a list of places payloads")
    venues.add_argument("--api-version", choices=[item.value for item in PlacesApiVersion], default=None)
    venues.add_argument("--now-utc", type=_parse_instant, default=None, help="Evaluation instant in UTC (ISO 8601)")
    venues.add_argument("--lat", type=float, default=None)
    venues.add_argument("--lon", type=float, default=None)
    venues.add_argument("--radius-m", type=int, default=None)
    venues.add_argument("--json", action="store_true", help="Print results as JSON")
    venues.set_defaults(handler=_cmd_venues)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    return args.handler(args)


if __name__ == "__main__":
    raise SystemExit(main())
