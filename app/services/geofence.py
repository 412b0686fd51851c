"""
Geofence - coordinate validation and great-circle distance checks
"""
import math
from dataclasses import dataclass

from app.core.errors import ErrorCode, validation_error

EARTH_RADIUS_M = 6371000


@dataclass(frozen=True)
class GeofenceResult:
    distance_m: float
    radius_m: float
    within_radius: bool


def validate_coordinates(lat, lon) -> None:
    """
    Reject missing, non-numeric, non-finite or out-of-range coordinates

    Raises:
        BadRequestException: code INVALID_COORDINATES
    """
    for name, value, bound in (("latitude", lat, 90), ("longitude", lon, 180)):
        if value is None or isinstance(value, bool) or not isinstance(value, (int, float)):
            raise validation_error(ErrorCode.INVALID_COORDINATES, f"Invalid {name}")
        if not math.isfinite(value) or not -bound <= value <= bound:
            raise validation_error(
                ErrorCode.INVALID_COORDINATES,
                f"Invalid {name}: must be between -{bound} and {bound}",
                **{name: value}
            )


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate distance between two coordinates using Haversine formula

    Returns:
        float: Distance in meters
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (math.sin(delta_lat / 2) ** 2 +
         math.cos(lat1_rad) * math.cos(lat2_rad) *
         math.sin(delta_lon / 2) ** 2)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_M * c


def check_geofence(
    user_lat: float,
    user_lon: float,
    office_lat: float,
    office_lon: float,
    radius_m: float
) -> GeofenceResult:
    """Distance of the user from the office; the boundary itself counts as inside"""
    validate_coordinates(user_lat, user_lon)
    validate_coordinates(office_lat, office_lon)
    if radius_m is None or radius_m <= 0:
        raise validation_error(ErrorCode.INVALID_INPUT, "Geofence radius must be positive")

    distance = haversine_distance(office_lat, office_lon, user_lat, user_lon)
    return GeofenceResult(distance_m=distance, radius_m=radius_m, within_radius=distance <= radius_m)
