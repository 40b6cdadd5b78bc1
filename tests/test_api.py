"""API tests for sunrise/sunset endpoints."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest


def _client(**kwargs: object) -> object:
    """Create FastAPI TestClient with optional dependency guards."""
    pytest.importorskip("fastapi")
    testclient_module = pytest.importorskip("fastapi.testclient")
    from solarclock.api.app import create_app

    return testclient_module.TestClient(create_app(**kwargs))


def _parse(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def test_events_endpoint_returns_all_events() -> None:
    """`POST /events` returns the eight events and a day/night flag."""
    client = _client()

    response = client.post(
        "/events",
        json={
            "time_utc": datetime(2024, 6, 21, 19, 0, tzinfo=UTC).isoformat(),
            "lat": 37.7749,
            "lon": -122.4194,
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert set(body["events"]) == {
        "sunrise",
        "sunset",
        "civil_sunrise",
        "civil_sunset",
        "nautical_sunrise",
        "nautical_sunset",
        "astronomical_sunrise",
        "astronomical_sunset",
    }
    sunrise = _parse(body["events"]["sunrise"])
    assert abs(sunrise - datetime(2024, 6, 21, 12, 47, 54, tzinfo=UTC)) <= timedelta(minutes=2)
    assert body["is_daytime"] is True
    assert body["is_nighttime"] is False
    assert body["cache_hit"] is False


def test_events_endpoint_reuses_cached_day() -> None:
    """Requests on the same UTC day share one cached result."""
    client = _client()
    payload = {"time_utc": "2024-06-21T10:00:00+00:00", "lat": 37.7749, "lon": -122.4194}

    first = client.post("/events", json=payload)
    second = client.post("/events", json={**payload, "time_utc": "2024-06-21T19:00:00+00:00"})

    assert first.json()["cache_hit"] is False
    assert second.json()["cache_hit"] is True
    assert first.json()["events"] == second.json()["events"]
    assert first.json()["is_daytime"] is False
    assert second.json()["is_daytime"] is True


def test_events_endpoint_reports_polar_night_as_nulls() -> None:
    """Missing crossings are returned as null, not as errors."""
    client = _client()

    response = client.post(
        "/events",
        json={"time_utc": "2024-12-21T12:00:00+00:00", "lat": 78.0, "lon": 15.0},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["events"]["sunrise"] is None
    assert body["events"]["sunset"] is None
    assert body["is_daytime"] is False


def test_events_endpoint_rejects_out_of_range_coordinates() -> None:
    """Out-of-range latitude yields 422."""
    client = _client()

    response = client.post(
        "/events",
        json={"time_utc": "2024-06-21T12:00:00+00:00", "lat": 95.0, "lon": 0.0},
    )

    assert response.status_code == 422


def test_range_endpoint_returns_one_entry_per_day() -> None:
    """`POST /events/range` returns events for each day in the window."""
    client = _client()

    response = client.post(
        "/events/range",
        json={
            "lat": 0.0,
            "lon": 0.0,
            "start_utc": "2024-03-19T12:00:00+00:00",
            "end_utc": "2024-03-22T12:00:00+00:00",
        },
    )

    assert response.status_code == 200
    days = response.json()["days"]
    assert len(days) == 3
    assert all(day["events"]["sunrise"] is not None for day in days)


def test_range_endpoint_enforces_limits(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reversed or oversized windows are rejected."""
    monkeypatch.setenv("SOLARCLOCK_RANGE_MAX_DAYS", "2")
    client = _client()

    reversed_window = client.post(
        "/events/range",
        json={
            "lat": 0.0,
            "lon": 0.0,
            "start_utc": "2024-03-22T00:00:00+00:00",
            "end_utc": "2024-03-19T00:00:00+00:00",
        },
    )
    too_long = client.post(
        "/events/range",
        json={
            "lat": 0.0,
            "lon": 0.0,
            "start_utc": "2024-03-19T00:00:00+00:00",
            "end_utc": "2024-03-22T00:00:00+00:00",
        },
    )

    assert reversed_window.status_code == 422
    assert too_long.status_code == 422


def test_create_app_rejects_unknown_observability_mode() -> None:
    """Only `off` and `log` are accepted observability modes."""
    pytest.importorskip("fastapi")
    from solarclock.api.app import create_app

    with pytest.raises(ValueError, match="SOLARCLOCK_OBSERVABILITY"):
        create_app(observability="verbose")

    assert create_app(observability="log").state.observability == "log"
