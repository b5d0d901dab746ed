"""Collaborator protocols (interfaces)."""

from datetime import datetime
from typing import Protocol

from astroquality.astronomy.models import CelestialPositions


class EphemerisProvider(Protocol):
    """Source of Sun/Moon positions."""

    def get_celestial_positions(
        self, latitude: float, longitude: float, time: datetime
    ) -> CelestialPositions:
        """Get Sun altitude and Moon altitude/azimuth/illumination.

        Args:
            latitude: Latitude in degrees
            longitude: Longitude in degrees
            time: Instant (timezone-aware)

        Returns:
            CelestialPositions for the instant
        """
        ...

