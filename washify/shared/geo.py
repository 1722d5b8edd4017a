"""
Great-circle distance helpers.

The Haversine distance (spherical law of cosines form) is available both as a
plain Python function and as a SQLAlchemy expression, so radius filters and
ordering run in the database with bound parameters only.
"""

import math

from sqlalchemy import func, literal

from ..config import EARTH_RADIUS_KM


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Distance in kilometers between two latitude/longitude points"""
    cosine = math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.cos(
        math.radians(lng2) - math.radians(lng1)
    ) + math.sin(math.radians(lat1)) * math.sin(math.radians(lat2))
    return EARTH_RADIUS_KM * math.acos(max(-1.0, min(1.0, cosine)))


def distance_km_expr(lat: float, lng: float, lat_column, lng_column):
    """
    SQL expression for the distance in kilometers from (lat, lng) to a row's
    coordinates. The acos argument is clamped to [-1, 1] since rounding can
    push it just past 1 for identical points.
    """
    origin_lat = func.radians(literal(float(lat)))
    origin_lng = func.radians(literal(float(lng)))
    cosine = func.cos(origin_lat) * func.cos(func.radians(lat_column)) * func.cos(
        func.radians(lng_column) - origin_lng
    ) + func.sin(origin_lat) * func.sin(func.radians(lat_column))
    clamped = func.greatest(literal(-1.0), func.least(literal(1.0), cosine))
    return literal(float(EARTH_RADIUS_KM)) * func.acos(clamped)


def has_coordinates(lat: float | None, lng: float | None) -> bool:
    """
    Zero on either axis means "no location filter", mirroring how clients
    send lat=0/lng=0 when they have no position.
    """
    return bool(lat) and bool(lng)
