"""Coordinate validation applied before any solar computation."""

from __future__ import annotations

from math import isfinite

from solarclock.contracts import Coordinate, InvalidCoordinate


def validate_coordinate(lat: float, lon: float) -> Coordinate:
    """Return a Coordinate for a finite, in-range latitude/longitude pair."""
    try:
        lat_f = float(lat)
        lon_f = float(lon)
    except (TypeError, ValueError) as exc:
        raise InvalidCoordinate(f"coordinate must be numeric: lat={lat!r}, lon={lon!r}") from exc

    if not isfinite(lat_f) or not isfinite(lon_f):
        raise InvalidCoordinate(f"coordinate must be finite: lat={lat_f}, lon={lon_f}")
    if not -90.0 <= lat_f <= 90.0:
        raise InvalidCoordinate(f"latitude must be within [-90, 90]: {lat_f}")
    if not -180.0 <= lon_f <= 180.0:
        raise InvalidCoordinate(f"longitude must be within [-180, 180]: {lon_f}")
    return Coordinate(lat=lat_f, lon=lon_f)


def validate(coordinate: Coordinate) -> Coordinate:
    """Validate an existing Coordinate, returning it unchanged when valid."""
    validate_coordinate(coordinate.lat, coordinate.lon)
    return coordinate
