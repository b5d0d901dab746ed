"""Celestial geometry and ephemeris."""

from astroquality.astronomy.geometry import calculate_moon_separation
from astroquality.astronomy.models import CelestialPositions, Location, Target

__all__ = ["CelestialPositions", "Location", "Target", "calculate_moon_separation"]
