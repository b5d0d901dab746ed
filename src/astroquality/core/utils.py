"""Common utilities."""

import math

from astroquality.core.exceptions import InvalidLocationError


def validate_coordinates(lat: float, lon: float) -> tuple[float, float]:
    """Validate latitude/longitude.

    Args:
        lat: Latitude in degrees (-90 to 90)
        lon: Longitude in degrees (-180 to 180)

    Returns:
        Tuple of (latitude, longitude)

    Raises:
        InvalidLocationError: If coordinates are out of range
    """
    if not -90 <= lat <= 90:
        raise InvalidLocationError(lat=lat)
    if not -180 <= lon <= 180:
        raise InvalidLocationError(lon=lon)
    return (lat, lon)


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp a value between min and max."""
    return max(min_val, min(max_val, value))


def safe_acos_degrees(cosine: float) -> float:
    """Arc cosine in degrees with the argument clamped to [-1, 1]."""
    return math.degrees(math.acos(clamp(cosine, -1.0, 1.0)))
