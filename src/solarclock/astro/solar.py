"""Sunrise/sunset solver.

Fixed-form approximation of the sun's position for one day, accurate to
about a minute for non-polar latitudes. Angles are in degrees unless the
name says otherwise.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from math import acos, asin, atan, cos, degrees, floor, radians, sin, tan

from solarclock.contracts import Coordinate, EventKind, NoCrossing, ZenithLevel
from solarclock.observability import ObservabilitySink, emit
from solarclock.time.calendar import ONE_DAY, day_of_year, to_utc, utc_midnight

DEGREES_PER_HOUR = 15.0


def _normalize(value: float, maximum: float) -> float:
    """Wrap `value` into [0, maximum) with at most one add or subtract."""
    if value < 0.0:
        value += maximum
    if value >= maximum:
        value -= maximum
    return value


def seed_time(dt: datetime, lon_deg: float, kind: EventKind) -> float:
    """Return the approximate event time `t` in days since the start of the UTC year."""
    lng_hour = lon_deg / DEGREES_PER_HOUR
    return day_of_year(dt) + ((kind.base_hour - lng_hour) / 24.0)


def sun_coordinates(t: float) -> tuple[float, float, float]:
    """Compute the sun's equatorial position at approximate time `t`.

    Returns:
        Tuple of `(ra_hours, sin_dec, cos_dec)` where `ra_hours` is the right
        ascension placed in the same quadrant as the true longitude.
    """
    mean_anomaly = (0.9856 * t) - 3.289
    m_rad = radians(mean_anomaly)

    true_longitude = mean_anomaly + 1.916 * sin(m_rad) + 0.020 * sin(2.0 * m_rad) + 282.634
    true_longitude = _normalize(true_longitude, 360.0)
    l_rad = radians(true_longitude)

    right_ascension = _normalize(degrees(atan(0.91764 * tan(l_rad))), 360.0)
    # atan loses the quadrant; take it from the true longitude.
    l_quadrant = floor(true_longitude / 90.0) * 90.0
    ra_quadrant = floor(right_ascension / 90.0) * 90.0
    right_ascension += l_quadrant - ra_quadrant

    sin_dec = 0.39782 * sin(l_rad)
    cos_dec = cos(asin(sin_dec))
    return (right_ascension / DEGREES_PER_HOUR, sin_dec, cos_dec)


def local_hour_angle(
    zenith_deg: float,
    sin_dec: float,
    cos_dec: float,
    lat_deg: float,
    kind: EventKind,
) -> float | NoCrossing:
    """Return the local hour angle in hours at which the sun crosses `zenith_deg`.

    A `NoCrossing` is returned instead when the sun stays below (never rises)
    or above (never sets) the threshold for the whole day.
    """
    lat_rad = radians(lat_deg)
    cos_h = (cos(radians(zenith_deg)) - sin_dec * sin(lat_rad)) / (cos_dec * cos(lat_rad))

    if cos_h >= 1.0:
        return NoCrossing.NEVER_RISES
    if cos_h <= -1.0:
        return NoCrossing.NEVER_SETS

    angle = degrees(acos(cos_h))
    if kind is EventKind.SUNRISE:
        angle = 360.0 - angle
    return angle / DEGREES_PER_HOUR


def assemble_utc(
    h_hours: float,
    ra_hours: float,
    t: float,
    lng_hour: float,
    kind: EventKind,
    dt: datetime,
) -> datetime:
    """Convert a solved hour angle into an absolute UTC instant.

    The UTC hour is wrapped into [0, 24) and the event is moved to the
    neighbouring UTC day when the observer's longitude pushes it across
    midnight: east-of-Greenwich sunrises after 12 UTC belong to the previous
    day and west-of-Greenwich sunsets before 12 UTC to the next one.
    """
    local_mean_time = h_hours + ra_hours - (0.06571 * t) - 6.622
    ut = _normalize(local_mean_time - lng_hour, 24.0)

    hour = floor(ut)
    minute = floor((ut - hour) * 60.0)
    second = int((((ut - hour) * 60.0) - minute) * 60.0)

    base = to_utc(dt)
    if lng_hour > 0 and ut > 12 and kind is EventKind.SUNRISE:
        base = base - ONE_DAY
    elif lng_hour < 0 and ut < 12 and kind is EventKind.SUNSET:
        base = base + ONE_DAY

    return utc_midnight(base) + timedelta(hours=hour, minutes=minute, seconds=second)


def event_time(
    dt: datetime,
    coordinate: Coordinate,
    kind: EventKind,
    zenith: ZenithLevel,
    sink: ObservabilitySink | None = None,
) -> datetime | None:
    """Compute one sunrise/sunset instant, or None when it does not occur that day."""
    lng_hour = coordinate.lon / DEGREES_PER_HOUR
    t = seed_time(dt, coordinate.lon, kind)
    ra_hours, sin_dec, cos_dec = sun_coordinates(t)

    h_hours = local_hour_angle(zenith.degrees, sin_dec, cos_dec, coordinate.lat, kind)
    if isinstance(h_hours, NoCrossing):
        emit(
            sink,
            "solar.no_crossing",
            kind=kind.value,
            zenith=zenith.value,
            reason=h_hours.value,
            lat=coordinate.lat,
            lon=coordinate.lon,
            day=to_utc(dt).date().isoformat(),
        )
        return None

    return assemble_utc(h_hours, ra_hours, t, lng_hour, kind, dt)
