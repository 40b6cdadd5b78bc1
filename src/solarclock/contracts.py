"""Core data contracts for sunrise/sunset calculation."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from types import MappingProxyType
from typing import Any


class InvalidCoordinate(ValueError):
    """Raised when a latitude/longitude pair is out of range or non-finite."""


@dataclass(frozen=True, slots=True)
class Coordinate:
    """WGS84 point in degrees (east and north positive)."""

    lat: float
    lon: float


class EventKind(StrEnum):
    """Which side of local noon an event falls on."""

    SUNRISE = "sunrise"
    SUNSET = "sunset"

    @property
    def base_hour(self) -> float:
        """Approximate local solar hour used to seed the calculation."""
        return 6.0 if self is EventKind.SUNRISE else 18.0


_ZENITH_DEGREES = {
    "official": 90.83,
    "civil": 96.0,
    "nautical": 102.0,
    "astronomical": 108.0,
}


class ZenithLevel(StrEnum):
    """Fixed elevation thresholds defining sunrise/sunset and twilights."""

    OFFICIAL = "official"
    CIVIL = "civil"
    NAUTICAL = "nautical"
    ASTRONOMICAL = "astronomical"

    @property
    def degrees(self) -> float:
        """Zenith angle of this threshold in degrees."""
        return _ZENITH_DEGREES[self.value]


class NoCrossing(StrEnum):
    """Why a zenith threshold is not crossed on a given day."""

    NEVER_RISES = "never_rises"
    NEVER_SETS = "never_sets"


EventKey = tuple[EventKind, ZenithLevel]

ALL_EVENT_KEYS: tuple[EventKey, ...] = tuple(
    (kind, zenith) for zenith in ZenithLevel for kind in EventKind
)


def event_field_name(kind: EventKind, zenith: ZenithLevel) -> str:
    """Return the public field name for an event, e.g. `civil_sunrise`."""
    if zenith is ZenithLevel.OFFICIAL:
        return kind.value
    return f"{zenith.value}_{kind.value}"


@dataclass(frozen=True, slots=True)
class CalculationInput:
    """Instant and location for one calculation request."""

    date: datetime
    coordinate: Coordinate


@dataclass(frozen=True)
class SolarResult:
    """Sunrise/sunset instants for all event kinds and zenith levels.

    Every one of the eight `(EventKind, ZenithLevel)` keys is always present in
    `events`. A `None` value means the threshold is not crossed that day at
    that location (polar day or polar night).
    """

    date: datetime
    coordinate: Coordinate
    events: Mapping[EventKey, datetime | None]

    def __post_init__(self) -> None:
        """Freeze the event mapping and check that it is complete."""
        missing = [key for key in ALL_EVENT_KEYS if key not in self.events]
        if missing:
            names = ", ".join(event_field_name(kind, zenith) for kind, zenith in missing)
            raise ValueError(f"events is missing entries: {names}")
        object.__setattr__(self, "events", MappingProxyType(dict(self.events)))

    def __hash__(self) -> int:
        return hash((self.date, self.coordinate, frozenset(self.events.items())))

    def event(self, kind: EventKind, zenith: ZenithLevel = ZenithLevel.OFFICIAL) -> datetime | None:
        """Return one event instant, or None when it does not occur."""
        return self.events[(kind, zenith)]

    @property
    def sunrise(self) -> datetime | None:
        return self.event(EventKind.SUNRISE, ZenithLevel.OFFICIAL)

    @property
    def sunset(self) -> datetime | None:
        return self.event(EventKind.SUNSET, ZenithLevel.OFFICIAL)

    @property
    def civil_sunrise(self) -> datetime | None:
        return self.event(EventKind.SUNRISE, ZenithLevel.CIVIL)

    @property
    def civil_sunset(self) -> datetime | None:
        return self.event(EventKind.SUNSET, ZenithLevel.CIVIL)

    @property
    def nautical_sunrise(self) -> datetime | None:
        return self.event(EventKind.SUNRISE, ZenithLevel.NAUTICAL)

    @property
    def nautical_sunset(self) -> datetime | None:
        return self.event(EventKind.SUNSET, ZenithLevel.NAUTICAL)

    @property
    def astronomical_sunrise(self) -> datetime | None:
        return self.event(EventKind.SUNRISE, ZenithLevel.ASTRONOMICAL)

    @property
    def astronomical_sunset(self) -> datetime | None:
        return self.event(EventKind.SUNSET, ZenithLevel.ASTRONOMICAL)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the result to a JSON-compatible dictionary."""
        events: dict[str, str | None] = {}
        for kind, zenith in ALL_EVENT_KEYS:
            value = self.events[(kind, zenith)]
            events[event_field_name(kind, zenith)] = value.isoformat() if value else None
        return {
            "date": self.date.isoformat(),
            "lat": self.coordinate.lat,
            "lon": self.coordinate.lon,
            "events": events,
        }
