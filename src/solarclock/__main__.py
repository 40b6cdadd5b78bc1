"""Command-line entrypoint for solarclock."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from datetime import UTC, datetime

from solarclock.calculator import SolarCalculator, is_daytime
from solarclock.contracts import ALL_EVENT_KEYS, InvalidCoordinate, SolarResult, event_field_name
from solarclock.geo.validation import validate_coordinate
from solarclock.observability import LoggingSink
from solarclock.orchestrate.batch import calculate_date_range
from solarclock.time.calendar import to_utc, with_utc_offset

logger = logging.getLogger("solarclock")


def _parse_iso_datetime(value: str) -> datetime:
    """Parse ISO datetime string and normalize to aware UTC."""
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid datetime: {value}") from exc
    return to_utc(parsed)


def _parse_offset(value: str) -> float:
    """Parse a fixed UTC offset in hours."""
    try:
        hours = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid UTC offset: {value}") from exc
    if not -24.0 < hours < 24.0:
        raise argparse.ArgumentTypeError(f"UTC offset must be within (-24, 24): {value}")
    return hours


def _format_instant(value: datetime | None, offset_hours: float) -> str:
    if value is None:
        return "-"
    return with_utc_offset(value, offset_hours).isoformat(timespec="seconds")


def _add_location_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--lat", type=float, required=True)
    parser.add_argument("--lon", type=float, required=True)
    parser.add_argument(
        "--utc-offset",
        type=_parse_offset,
        default=0.0,
        help="Fixed UTC offset in hours used only to display results.",
    )


def build_parser() -> argparse.ArgumentParser:
    """Create and return the top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="solarclock",
        description="Sunrise, sunset and twilight times for a coordinate and date.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 0.1.0",
    )
    parser.add_argument("--log-level", default="WARNING")
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Log calculation events and batch timings.",
    )

    subparsers = parser.add_subparsers(dest="command")
    events = subparsers.add_parser(
        "events",
        help="Print all sunrise/sunset and twilight events for one day.",
    )
    _add_location_args(events)
    events.add_argument("--date", type=_parse_iso_datetime, default=None)

    day_range = subparsers.add_parser(
        "range",
        help="Print official sunrise and sunset for each day in [start, end).",
    )
    _add_location_args(day_range)
    day_range.add_argument("--start", type=_parse_iso_datetime, required=True)
    day_range.add_argument("--end", type=_parse_iso_datetime, required=True)

    return parser


def _print_events(result: SolarResult, offset_hours: float) -> None:
    for kind, zenith in ALL_EVENT_KEYS:
        name = event_field_name(kind, zenith)
        print(f"{name:<22} {_format_instant(result.events[(kind, zenith)], offset_hours)}")
    state = "day" if is_daytime(result) else "night"
    print(f"{'state':<22} {state}")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI application."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    sink = LoggingSink() if args.trace else None
    if sink is not None and not logger.isEnabledFor(logging.INFO):
        logger.setLevel(logging.DEBUG)

    if args.command is None:
        return 0

    try:
        coordinate = validate_coordinate(args.lat, args.lon)
    except InvalidCoordinate as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.command == "events":
        when = args.date or datetime.now(UTC)
        result = SolarCalculator(when, coordinate, sink=sink).calculate()
        print(f"location lat={coordinate.lat:.4f} lon={coordinate.lon:.4f}")
        print(f"date     {_format_instant(result.date, args.utc_offset)}")
        _print_events(result, args.utc_offset)
        return 0

    if args.command == "range":
        try:
            results = calculate_date_range(coordinate, args.start, args.end, sink=sink)
        except ValueError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2
        print("date       | sunrise                   | sunset")
        print("-----------+---------------------------+---------------------------")
        for result in results:
            day = with_utc_offset(result.date, args.utc_offset).date().isoformat()
            sunrise = _format_instant(result.sunrise, args.utc_offset)
            sunset = _format_instant(result.sunset, args.utc_offset)
            print(f"{day} | {sunrise:<25} | {sunset}")
        return 0

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
