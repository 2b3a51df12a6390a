"""
GeoFence Service - Circular geofence evaluation against tenant clinics
"""
import math
from dataclasses import dataclass
from typing import Optional, Sequence

from app.core.exceptions import NoClinicLocation, OutsideRange
from app.schemas.clinic import ClinicLocation

EARTH_RADIUS_M = 6371000


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class GeoFenceResult:
    inside: bool
    clinic: Optional[ClinicLocation]
    distance_meters: float


def calculate_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
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


def evaluate(point: GeoPoint, clinics: Sequence[ClinicLocation]) -> GeoFenceResult:
    """
    Find the first clinic whose geofence contains the point

    Clinics are tried in listing order; the first match wins even when a later
    clinic is nearer.

    Raises:
        NoClinicLocation: No clinic has a location configured
        OutsideRange: Point is outside every clinic; reports the distance to
            the first listed clinic and that clinic's radius
    """
    if not clinics:
        raise NoClinicLocation()

    for clinic in clinics:
        distance = calculate_distance(
            point.latitude, point.longitude,
            clinic.cl_latitude, clinic.cl_longitude
        )
        if distance <= clinic.cl_allowed_radius_meters:
            return GeoFenceResult(inside=True, clinic=clinic, distance_meters=distance)

    first = clinics[0]
    distance = calculate_distance(
        point.latitude, point.longitude,
        first.cl_latitude, first.cl_longitude
    )
    raise OutsideRange(first.cl_name, round(distance), first.cl_allowed_radius_meters)
