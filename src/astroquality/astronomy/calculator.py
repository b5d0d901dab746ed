"""Sun, Moon and target positions using Skyfield."""

import logging
from datetime import datetime, timezone
from pathlib import Path

from skyfield import almanac
from skyfield.api import Loader, Star, load, wgs84
from skyfield.timelib import Time

from astroquality.astronomy.geometry import calculate_airmass
from astroquality.astronomy.models import CelestialPositions, Location, Target, TargetPosition
from astroquality.core.utils import validate_coordinates

logger = logging.getLogger(__name__)


class AstronomyCalculator:
    """Ephemeris backed by the JPL DE421 kernel.

    Satisfies the EphemerisProvider protocol used by the conditions
    service.
    """

    EPHEMERIS_FILE = "de421.bsp"

    def __init__(self, data_dir: Path | None = None):
        """Initialize the calculator.

        Args:
            data_dir: Directory to store ephemeris files (default: ~/.astroquality/data)
        """
        self.data_dir = data_dir or Path.home() / ".astroquality" / "data"
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self.ts = load.timescale()

        self._ephemeris = None
        self._sun = None
        self._moon = None
        self._earth = None

    def _load_ephemeris(self) -> None:
        """Lazily load the ephemeris data."""
        if self._ephemeris is None:
            logger.debug("Loading %s from %s", self.EPHEMERIS_FILE, self.data_dir)
            loader = Loader(str(self.data_dir))
            self._ephemeris = loader(self.EPHEMERIS_FILE)
            self._sun = self._ephemeris["sun"]
            self._moon = self._ephemeris["moon"]
            self._earth = self._ephemeris["earth"]

    def _to_skyfield(self, dt: datetime) -> Time:
        """Convert datetime to Skyfield Time (naive times are UTC)."""
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return self.ts.from_datetime(dt)

    def _observer(self, latitude: float, longitude: float, elevation: float = 0):
        return self._earth + wgs84.latlon(latitude, longitude, elevation_m=elevation)

    def get_celestial_positions(
        self,
        latitude: float,
        longitude: float,
        time: datetime,
    ) -> CelestialPositions:
        """Get Sun altitude and Moon altitude/azimuth/illumination.

        Args:
            latitude: Observer latitude in degrees
            longitude: Observer longitude in degrees
            time: Instant of observation

        Returns:
            CelestialPositions for the instant
        """
        validate_coordinates(latitude, longitude)
        self._load_ephemeris()
        t = self._to_skyfield(time)
        observer = self._observer(latitude, longitude).at(t)

        sun_alt, _, _ = observer.observe(self._sun).apparent().altaz()
        moon_alt, moon_az, _ = observer.observe(self._moon).apparent().altaz()
        illumination = float(almanac.fraction_illuminated(self._ephemeris, "moon", t))

        return CelestialPositions(
            sun_altitude=sun_alt.degrees,
            moon_altitude=moon_alt.degrees,
            moon_azimuth=moon_az.degrees,
            moon_illumination=min(1.0, max(0.0, illumination)),
        )

    def get_target_position(
        self,
        target: Target,
        location: Location,
        time: datetime,
    ) -> TargetPosition:
        """Get altitude, azimuth and airmass of a fixed RA/Dec target.

        Args:
            target: Deep-sky target
            location: Observer location
            time: Instant of observation

        Returns:
            TargetPosition
        """
        self._load_ephemeris()
        t = self._to_skyfield(time)
        observer = self._observer(location.latitude, location.longitude, location.elevation)

        star = Star(ra_hours=target.ra / 15, dec_degrees=target.dec)
        alt, az, _ = observer.at(t).observe(star).apparent().altaz()

        return TargetPosition(
            altitude=alt.degrees,
            azimuth=az.degrees,
            airmass=calculate_airmass(alt.degrees),
        )
