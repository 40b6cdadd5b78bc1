"""FastAPI app exposing sunrise/sunset calculation endpoints."""

from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone
from typing import Literal

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field, model_validator

from solarclock.calculator import calculate, is_daytime
from solarclock.contracts import (
    ALL_EVENT_KEYS,
    CalculationInput,
    InvalidCoordinate,
    SolarResult,
    event_field_name,
)
from solarclock.geo.validation import validate_coordinate
from solarclock.index.store import ResultCacheKey, ResultStore
from solarclock.observability import LoggingSink, ObservabilitySink
from solarclock.orchestrate.batch import calculate_date_range
from solarclock.time.calendar import utc_day


class EventsRequest(BaseModel):
    """Request schema for one day's events at a point."""

    time_utc: datetime | None = None
    lat: float = Field(ge=-90.0, le=90.0)
    lon: float = Field(ge=-180.0, le=180.0)


class SolarEvents(BaseModel):
    """The eight sunrise/sunset instants; null when the threshold is not crossed."""

    sunrise: datetime | None
    sunset: datetime | None
    civil_sunrise: datetime | None
    civil_sunset: datetime | None
    nautical_sunrise: datetime | None
    nautical_sunset: datetime | None
    astronomical_sunrise: datetime | None
    astronomical_sunset: datetime | None


class EventsResponse(BaseModel):
    """Response schema for `POST /events`."""

    time_utc: datetime
    lat: float
    lon: float
    events: SolarEvents
    is_daytime: bool
    is_nighttime: bool
    cache_hit: bool


class RangeRequest(BaseModel):
    """Request schema for events on consecutive days."""

    lat: float = Field(ge=-90.0, le=90.0)
    lon: float = Field(ge=-180.0, le=180.0)
    start_utc: datetime
    end_utc: datetime

    @model_validator(mode="after")
    def validate_window(self) -> "RangeRequest":
        """Require start before end."""
        if _normalize_time(self.start_utc) >= _normalize_time(self.end_utc):
            raise ValueError("start_utc must be < end_utc")
        return self


class RangeEntry(BaseModel):
    """Events for one day of a range."""

    time_utc: datetime
    events: SolarEvents


class RangeResponse(BaseModel):
    """Response schema for `POST /events/range`."""

    lat: float
    lon: float
    days: list[RangeEntry]


def _normalize_time(dt: datetime | None) -> datetime:
    """Normalize optional datetime to timezone-aware UTC value."""
    if dt is None:
        return datetime.now(timezone.utc)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _to_events(result: SolarResult) -> SolarEvents:
    fields = {
        event_field_name(kind, zenith): result.events[(kind, zenith)]
        for kind, zenith in ALL_EVENT_KEYS
    }
    return SolarEvents(**fields)


def _resolve_observability(observability: str | None) -> Literal["off", "log"]:
    """Resolve observability mode from argument/environment with validation."""
    raw = observability or os.getenv("SOLARCLOCK_OBSERVABILITY", "off")
    mode = raw.strip().lower()
    if mode == "off":
        return "off"
    if mode == "log":
        return "log"
    raise ValueError("SOLARCLOCK_OBSERVABILITY must be one of: off, log")


def _positive_int_env(name: str, default: int) -> int:
    value = int(os.getenv(name, str(default)))
    if value <= 0:
        raise ValueError(f"{name} must be positive")
    return value


def create_app(observability: str | None = None, cache_entries: int | None = None) -> FastAPI:
    """Create and configure the FastAPI app."""
    app = FastAPI(title="Solarclock API", version="0.1.0")

    mode = _resolve_observability(observability)
    sink: ObservabilitySink | None = LoggingSink() if mode == "log" else None
    store = ResultStore(
        max_entries=cache_entries or _positive_int_env("SOLARCLOCK_CACHE_ENTRIES", 256)
    )
    max_days = _positive_int_env("SOLARCLOCK_RANGE_MAX_DAYS", 366)

    app.state.observability = mode
    app.state.result_store = store

    @app.post("/events", response_model=EventsResponse)
    def post_events(payload: EventsRequest) -> EventsResponse:
        """Compute sunrise/sunset events for the UTC day containing `time_utc`."""
        dt = _normalize_time(payload.time_utc)
        try:
            coordinate = validate_coordinate(payload.lat, payload.lon)
        except InvalidCoordinate as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc

        key = ResultCacheKey(day=utc_day(dt), lat=coordinate.lat, lon=coordinate.lon)
        result, was_built = store.get_or_build(
            key,
            lambda: calculate(CalculationInput(date=dt, coordinate=coordinate), sink=sink),
        )
        daytime = is_daytime(result, dt)
        return EventsResponse(
            time_utc=dt,
            lat=coordinate.lat,
            lon=coordinate.lon,
            events=_to_events(result),
            is_daytime=daytime,
            is_nighttime=not daytime,
            cache_hit=not was_built,
        )

    @app.post("/events/range", response_model=RangeResponse)
    def post_events_range(payload: RangeRequest) -> RangeResponse:
        """Compute events for each day in [start_utc, end_utc)."""
        start = _normalize_time(payload.start_utc)
        end = _normalize_time(payload.end_utc)
        try:
            coordinate = validate_coordinate(payload.lat, payload.lon)
        except InvalidCoordinate as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc

        if end - start > timedelta(days=max_days):
            raise HTTPException(status_code=422, detail=f"range must not exceed {max_days} days")

        results = calculate_date_range(coordinate, start, end, sink=sink)
        return RangeResponse(
            lat=coordinate.lat,
            lon=coordinate.lon,
            days=[RangeEntry(time_utc=result.date, events=_to_events(result)) for result in results],
        )

    return app


app = create_app()
