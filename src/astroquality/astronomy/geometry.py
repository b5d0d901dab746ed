"""Spherical geometry on the local horizon."""

import math

from astroquality.core.utils import safe_acos_degrees


def calculate_moon_separation(
    alt_a: float,
    az_a: float,
    alt_b: float,
    az_b: float,
) -> float:
    """Angular separation between two horizon positions.

    Spherical law of cosines. The acos argument is clamped, so two
    identical positions return 0 rather than NaN.

    Args:
        alt_a, az_a: First object altitude/azimuth in degrees
        alt_b, az_b: Second object altitude/azimuth in degrees

    Returns:
        Separation in degrees (0-180)
    """
    alt_a_rad = math.radians(alt_a)
    alt_b_rad = math.radians(alt_b)
    az_diff_rad = math.radians(az_a - az_b)

    cosine = (
        math.sin(alt_a_rad) * math.sin(alt_b_rad)
        + math.cos(alt_a_rad) * math.cos(alt_b_rad) * math.cos(az_diff_rad)
    )
    return safe_acos_degrees(cosine)


def calculate_airmass(altitude: float) -> float:
    """Calculate atmospheric airmass.

    Uses the Pickering (2002) formula which is accurate to ~90% down to
    the horizon.

    Args:
        altitude: Object altitude in degrees

    Returns:
        Airmass value (1.0 at zenith, inf below the horizon)
    """
    if altitude <= 0:
        return float("inf")

    arg = altitude + 244 / (165 + 47 * altitude**1.1)
    return max(1.0, 1 / math.sin(math.radians(arg)))
