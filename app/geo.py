"""Distance and opening-hours predicates used by venue search.

All distances are in kilometers on a spherical Earth. Coordinates are in
decimal degrees.
"""
from datetime import datetime, time
from math import acos, atan2, cos, radians, sin, sqrt
from typing import Union

from app.models import QueryPoint, Venue

EARTH_RADIUS_KM = 6371.01


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points using the haversine formula.

    Args:
        lat1: Latitude of the first point
        lon1: Longitude of the first point
        lat2: Latitude of the second point
        lon2: Longitude of the second point

    Returns:
        Distance in kilometers
    """
    lat1, lon1, lat2, lon2 = map(radians, [lat1, lon1, lat2, lon2])
    dlat = lat2 - lat1
    dlon = lon2 - lon1

    a = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    # Rounding can push a slightly outside [0, 1] near antipodes
    a = min(1.0, max(0.0, a))
    c = 2 * atan2(sqrt(a), sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def distance_equirectangular_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Equirectangular approximation.

    Faster than haversine, accurate only for short distances away from the
    poles.
    """
    lat1, lon1, lat2, lon2 = map(radians, [lat1, lon1, lat2, lon2])
    x = (lon2 - lon1) * cos((lat1 + lat2) / 2)
    y = lat2 - lat1
    return EARTH_RADIUS_KM * sqrt(x * x + y * y)


def distance_spherical_cosines_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Spherical law of cosines.

    Loses precision for very small distances compared to haversine.
    """
    lat1, lon1, lat2, lon2 = map(radians, [lat1, lon1, lat2, lon2])
    cos_angle = sin(lat1) * sin(lat2) + cos(lat1) * cos(lat2) * cos(lon2 - lon1)
    return EARTH_RADIUS_KM * acos(min(1.0, max(-1.0, cos_angle)))


def seconds_since_midnight(value: Union[datetime, time]) -> int:
    """Clock portion of a datetime or time as whole seconds since midnight.

    Date, timezone and microseconds are ignored.
    """
    return value.hour * 3600 + value.minute * 60 + value.second


def is_within_radius(query: QueryPoint, venue: Venue) -> bool:
    """True when the query point is inside the venue's availability radius.

    The boundary is inclusive: a venue exactly at its radius is reachable.
    """
    distance = distance_km(query.latitude, query.longitude, venue.latitude, venue.longitude)
    return distance <= venue.availability_radius


def is_open_at(instant: Union[datetime, time], venue: Venue) -> bool:
    """True when the instant's time of day falls strictly inside opening hours.

    Both bounds are exclusive, so a venue reports closed at its exact opening
    and closing second. Windows that wrap past midnight (close <= open) are
    never open.
    """
    now = seconds_since_midnight(instant)
    opens = seconds_since_midnight(venue.open_hour)
    closes = seconds_since_midnight(venue.close_hour)
    return opens < now < closes
