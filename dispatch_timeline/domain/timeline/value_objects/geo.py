"""Great-circle distance and the travel duration inferred from it."""

import math

EARTH_RADIUS_KM = 6371.0
DEFAULT_SPEED_KMH = 40.0


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Distance in kilometres between two coordinates (haversine formula)."""
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(d_lng / 2) ** 2
    )
    a = min(1.0, a)  # rounding near antipodes
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def travel_minutes(
    distance_km: float,
    min_floor_minutes: float = 5.0,
    speed_kmh: float = DEFAULT_SPEED_KMH,
) -> float:
    """
    Minutes needed to cover `distance_km` at a constant average speed.

    Never less than `min_floor_minutes`, so co-located tasks still get a
    visible travel segment.
    """
    return max(distance_km / speed_kmh * 60, min_floor_minutes)
