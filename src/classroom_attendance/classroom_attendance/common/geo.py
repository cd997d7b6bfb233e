from __future__ import annotations

import math

from ..core.exceptions import ValidationError

EARTH_RADIUS_METERS = 6371000


def parse_location(value: str) -> tuple[float, float]:
    """Parse a "lat, lng" string as captured by the browser geolocation API."""
    parts = [p.strip() for p in (value or "").split(",")]
    if len(parts) != 2:
        raise ValidationError(f"Invalid location: {value!r}")
    try:
        lat, lng = float(parts[0]), float(parts[1])
    except ValueError:
        raise ValidationError(f"Invalid location: {value!r}") from None
    if not (-90 <= lat <= 90 and -180 <= lng <= 180):
        raise ValidationError(f"Location out of bounds: {value!r}")
    return lat, lng


def format_location(lat: float, lng: float) -> str:
    return f"{lat}, {lng}"


def distance_meters(a: tuple[float, float], b: tuple[float, float]) -> float:
    """Great-circle distance (haversine)."""
    lat1, lng1 = map(math.radians, a)
    lat2, lng2 = map(math.radians, b)
    d_lat = lat2 - lat1
    d_lng = lng2 - lng1
    h = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lng / 2) ** 2
    return EARTH_RADIUS_METERS * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
