"""Batch orchestration of solar calculations over grids and date ranges."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from solarclock.calculator import calculate
from solarclock.contracts import CalculationInput, Coordinate, SolarResult
from solarclock.geo.validation import validate, validate_coordinate
from solarclock.observability import ObservabilitySink, trace
from solarclock.time.calendar import iter_days, to_utc


@dataclass(frozen=True)
class GridSpec:
    """Lat/lon grid specification for batch calculation."""

    lat_min: float
    lat_max: float
    lon_min: float
    lon_max: float
    step_deg: float
    max_points: int | None = None


def _frange_inclusive(start: float, stop: float, step: float) -> list[float]:
    """Build an inclusive floating-point range with deterministic rounding."""
    if step <= 0.0:
        raise ValueError("step must be positive.")
    if start > stop:
        raise ValueError("start must be <= stop.")

    values: list[float] = []
    current = start
    while current <= stop + 1e-9:
        values.append(round(current, 6))
        current += step
    return values


def generate_lat_lon_grid(spec: GridSpec) -> list[Coordinate]:
    """Generate validated coordinates from the input grid specification."""
    validate_coordinate(spec.lat_min, spec.lon_min)
    validate_coordinate(spec.lat_max, spec.lon_max)
    lats = _frange_inclusive(spec.lat_min, spec.lat_max, spec.step_deg)
    lons = _frange_inclusive(spec.lon_min, spec.lon_max, spec.step_deg)
    point_count = len(lats) * len(lons)
    if spec.max_points is not None and point_count > spec.max_points:
        raise ValueError("grid points exceed max_points safety cap")
    return [Coordinate(lat=lat, lon=lon) for lat in lats for lon in lons]


def calculate_grid(
    dt: datetime,
    spec: GridSpec,
    sink: ObservabilitySink | None = None,
) -> dict[Coordinate, SolarResult]:
    """Compute events for every grid point at one instant."""
    dt_utc = to_utc(dt)
    coordinates = generate_lat_lon_grid(spec)
    with trace(sink, "solar.batch.grid"):
        return {
            coordinate: calculate(CalculationInput(date=dt_utc, coordinate=coordinate), sink=sink)
            for coordinate in coordinates
        }


def calculate_date_range(
    coordinate: Coordinate,
    start: datetime,
    end: datetime,
    sink: ObservabilitySink | None = None,
) -> list[SolarResult]:
    """Compute events for one coordinate on each day in [start, end)."""
    validate(coordinate)
    with trace(sink, "solar.batch.range"):
        return [
            calculate(CalculationInput(date=day, coordinate=coordinate), sink=sink)
            for day in iter_days(start, end)
        ]
