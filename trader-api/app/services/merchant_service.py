"""
Merchant lookup by position.
Plain radius filter over all merchants (the city has a handful of them).
"""
import math

from sqlalchemy.orm import Session

from app.models.merchant import Merchant

EARTH_RADIUS_M = 6_371_000
DEFAULT_SEARCH_RADIUS_M = 1000


def haversine_distance_m(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return 2 * EARTH_RADIUS_M * math.asin(math.sqrt(a))


def find_nearby_merchants(
    db: Session,
    latitude: float,
    longitude: float,
    radius_m: float = DEFAULT_SEARCH_RADIUS_M,
) -> list[tuple[Merchant, float]]:
    """Merchants within `radius_m` metres, nearest first."""
    nearby = []
    for merchant in db.query(Merchant).all():
        distance = haversine_distance_m(latitude, longitude, merchant.location_lat, merchant.location_lng)
        if distance <= radius_m:
            nearby.append((merchant, distance))
    nearby.sort(key=lambda pair: pair[1])
    return nearby
