"""Unit tests for data contracts."""

from __future__ import annotations

import json
from datetime import UTC, datetime

import pytest

from solarclock.contracts import (
    ALL_EVENT_KEYS,
    Coordinate,
    EventKind,
    SolarResult,
    ZenithLevel,
    event_field_name,
)

_DT = datetime(2024, 3, 20, 12, 0, tzinfo=UTC)


def _events(value: datetime | None = _DT) -> dict:
    return {key: value for key in ALL_EVENT_KEYS}


def test_zenith_levels_carry_fixed_degrees() -> None:
    """Each zenith level maps to its fixed threshold angle."""
    assert ZenithLevel.OFFICIAL.degrees == 90.83
    assert ZenithLevel.CIVIL.degrees == 96.0
    assert ZenithLevel.NAUTICAL.degrees == 102.0
    assert ZenithLevel.ASTRONOMICAL.degrees == 108.0


def test_event_kind_base_hours() -> None:
    """Sunrise seeds at 06h local solar time, sunset at 18h."""
    assert EventKind.SUNRISE.base_hour == 6.0
    assert EventKind.SUNSET.base_hour == 18.0


def test_event_field_names() -> None:
    """Official events use bare names; twilights are prefixed by level."""
    names = {event_field_name(kind, zenith) for kind, zenith in ALL_EVENT_KEYS}

    assert len(ALL_EVENT_KEYS) == 8
    assert names == {
        "sunrise",
        "sunset",
        "civil_sunrise",
        "civil_sunset",
        "nautical_sunrise",
        "nautical_sunset",
        "astronomical_sunrise",
        "astronomical_sunset",
    }


def test_solar_result_requires_all_events() -> None:
    """Missing keys are rejected so absence always means no crossing."""
    events = _events()
    events.pop((EventKind.SUNSET, ZenithLevel.CIVIL))

    with pytest.raises(ValueError, match="civil_sunset"):
        SolarResult(date=_DT, coordinate=Coordinate(0.0, 0.0), events=events)


def test_solar_result_events_are_read_only() -> None:
    """The event mapping cannot be modified after construction."""
    source = _events()
    result = SolarResult(date=_DT, coordinate=Coordinate(0.0, 0.0), events=source)
    source[(EventKind.SUNRISE, ZenithLevel.OFFICIAL)] = None

    assert result.sunrise == _DT
    with pytest.raises(TypeError):
        result.events[(EventKind.SUNRISE, ZenithLevel.OFFICIAL)] = None  # type: ignore[index]


def test_solar_result_named_accessors_project_the_mapping() -> None:
    """Named accessors read the keyed mapping."""
    events = _events(None)
    events[(EventKind.SUNSET, ZenithLevel.NAUTICAL)] = _DT
    result = SolarResult(date=_DT, coordinate=Coordinate(1.0, 2.0), events=events)

    assert result.nautical_sunset == _DT
    assert result.event(EventKind.SUNSET, ZenithLevel.NAUTICAL) == _DT
    assert result.sunrise is None
    assert result.astronomical_sunset is None


def test_solar_result_serializes_to_json() -> None:
    """to_dict produces ISO strings and nulls."""
    events = _events(None)
    events[(EventKind.SUNRISE, ZenithLevel.OFFICIAL)] = _DT
    payload = SolarResult(date=_DT, coordinate=Coordinate(10.0, 20.0), events=events).to_dict()

    decoded = json.loads(json.dumps(payload))
    assert decoded["lat"] == 10.0
    assert decoded["events"]["sunrise"] == "2024-03-20T12:00:00+00:00"
    assert decoded["events"]["astronomical_sunset"] is None


def test_equal_results_hash_equal() -> None:
    """Equal results can be used as set members and dict keys."""
    first = SolarResult(date=_DT, coordinate=Coordinate(0.0, 0.0), events=_events())
    second = SolarResult(date=_DT, coordinate=Coordinate(0.0, 0.0), events=_events())
    other = SolarResult(date=_DT, coordinate=Coordinate(0.0, 0.0), events=_events(None))

    assert first == second
    assert hash(first) == hash(second)
    assert len({first, second, other}) == 2
