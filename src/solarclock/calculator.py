"""Public sunrise/sunset calculation and day/night classification."""

from __future__ import annotations

from datetime import datetime

from solarclock.astro.solar import event_time
from solarclock.contracts import (
    ALL_EVENT_KEYS,
    CalculationInput,
    Coordinate,
    SolarResult,
)
from solarclock.geo.validation import validate, validate_coordinate
from solarclock.observability import ObservabilitySink, emit, trace
from solarclock.time.calendar import to_utc


def calculate(payload: CalculationInput, sink: ObservabilitySink | None = None) -> SolarResult:
    """Compute all eight sunrise/sunset events for one instant and location.

    The coordinate must already be valid; see `SolarCalculator` for the
    validating entry point.
    """
    dt = to_utc(payload.date)
    coordinate = payload.coordinate
    with trace(sink, "solar.calculate"):
        events = {
            (kind, zenith): event_time(dt, coordinate, kind, zenith, sink=sink)
            for kind, zenith in ALL_EVENT_KEYS
        }
    result = SolarResult(date=dt, coordinate=coordinate, events=events)
    emit(
        sink,
        "solar.calculated",
        lat=coordinate.lat,
        lon=coordinate.lon,
        day=dt.date().isoformat(),
        absent=sum(1 for value in events.values() if value is None),
    )
    return result


def is_daytime(result: SolarResult, instant: datetime | None = None) -> bool:
    """Return True when `instant` lies in [official sunrise, official sunset).

    `instant` defaults to the result's own date. When either official event is
    absent the answer is False, for polar day as well as polar night.
    """
    sunrise = result.sunrise
    sunset = result.sunset
    if sunrise is None or sunset is None:
        return False
    current = to_utc(instant) if instant is not None else result.date
    return sunrise <= current < sunset


def is_nighttime(result: SolarResult, instant: datetime | None = None) -> bool:
    """Logical complement of `is_daytime`."""
    return not is_daytime(result, instant)


class SolarCalculator:
    """Validated calculation request for one instant and coordinate."""

    def __init__(
        self,
        date: datetime,
        coordinate: Coordinate,
        sink: ObservabilitySink | None = None,
    ) -> None:
        """Validate inputs; raises InvalidCoordinate for a bad coordinate."""
        self._input = CalculationInput(date=to_utc(date), coordinate=validate(coordinate))
        self._sink = sink

    @classmethod
    def from_lat_lon(
        cls,
        date: datetime,
        lat: float,
        lon: float,
        sink: ObservabilitySink | None = None,
    ) -> SolarCalculator:
        return cls(date, validate_coordinate(lat, lon), sink=sink)

    @property
    def date(self) -> datetime:
        return self._input.date

    @property
    def coordinate(self) -> Coordinate:
        return self._input.coordinate

    def calculate(self) -> SolarResult:
        """Return a freshly computed result for this request."""
        return calculate(self._input, sink=self._sink)

    def is_daytime(self) -> bool:
        return is_daytime(self.calculate())

    def is_nighttime(self) -> bool:
        return is_nighttime(self.calculate())
