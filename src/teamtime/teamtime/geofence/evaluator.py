from __future__ import annotations

import math
from dataclasses import dataclass

from ..core.constants import EARTH_RADIUS_M


@dataclass(frozen=True)
class GeofenceResult:
    distance_m: float
    in_range: bool

    @property
    def display_distance_m(self) -> int | None:
        """Distance rounded to the nearest meter, None when it could not be computed."""
        if math.isnan(self.distance_m):
            return None
        return int(round(self.distance_m))


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate distance between two coordinates using Haversine formula

    Returns:
        float: Distance in meters (NaN when any input is not a number)
    """
    try:
        lat1_rad = math.radians(float(lat1))
        lat2_rad = math.radians(float(lat2))
        delta_lat = math.radians(float(lat2) - float(lat1))
        delta_lon = math.radians(float(lon2) - float(lon1))
    except (TypeError, ValueError):
        return math.nan

    a = (math.sin(delta_lat / 2) ** 2 +
         math.cos(lat1_rad) * math.cos(lat2_rad) *
         math.sin(delta_lon / 2) ** 2)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_M * c


def evaluate(user_lat: float, user_lng: float, office_lat: float, office_lng: float, radius_m: float) -> GeofenceResult:
    """Classify a position against a circular geofence.

    The boundary is inclusive. A NaN distance compares false and therefore
    classifies as out of range.
    """
    distance = haversine_distance(user_lat, user_lng, office_lat, office_lng)
    return GeofenceResult(distance_m=distance, in_range=distance <= radius_m)
