import math

from my_trips.models import Coordinates

# Mean Earth radius (km)
EARTH_RADIUS_KM = 6371.0088


def haversine_km(origin: Coordinates, destination: Coordinates) -> float:
    """
    Great-circle distance between two points in decimal degrees, using the
    Haversine formula. Returns kilometers.
    """
    phi1 = math.radians(origin.latitude)
    phi2 = math.radians(destination.latitude)
    dphi = phi2 - phi1
    dlambda = math.radians(destination.longitude - origin.longitude)

    a = (
        math.sin(dphi / 2.0) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2.0) ** 2
    )
    c = 2.0 * math.atan2(math.sqrt(a), math.sqrt(1.0 - a))
    return EARTH_RADIUS_KM * c
