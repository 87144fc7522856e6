"""
Great-circle distance helpers.
"""

import math

EARTH_RADIUS_METERS = 6_371_000


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Distance in meters between two points given in decimal degrees.

    Uses the haversine formula on a spherical Earth, which is accurate enough
    at neighbourhood scale but degrades for near-antipodal points.
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_phi = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_METERS * c


def format_distance(meters: float) -> str:
    """Render a distance for display: "850 m" or "1.2 km"."""
    meters = round(meters)
    if meters < 1000:
        return f"{meters} m"
    return f"{meters / 1000:.1f} km"
