"""Per-timestep assessment - optics, geometry and scoring for one sample."""

import logging
from datetime import datetime
from zoneinfo import ZoneInfo

from astroquality.astronomy.geometry import calculate_airmass, calculate_moon_separation
from astroquality.astronomy.models import CelestialPositions, Location
from astroquality.core.exceptions import EphemerisUnavailableError
from astroquality.optics.aod import resolve_aod
from astroquality.optics.calculations import (
    assess_jet_stream_risk,
    calculate_dynamic_sqm,
    calculate_true_transparency,
    check_milky_way_visibility,
)
from astroquality.optics.models import MilkyWayVisibility
from astroquality.scoring.engine import calculate_astro_quality_score, seeing_index_to_score
from astroquality.scoring.models import HourlyAssessment
from astroquality.weather.models import ObservationSample
from astroquality.weather.protocols import EphemerisProvider

logger = logging.getLogger(__name__)

# Moon-target separation assumed when no target azimuth is known
DEFAULT_MOON_SEPARATION = 60.0
# Local hours (inclusive) treated as daytime
DAYTIME_START_HOUR = 6
DAYTIME_END_HOUR = 18
# Sun/Moon fields a sample must carry to skip the ephemeris
REQUIRED_POSITION_FIELDS = frozenset({"sun_altitude", "moon_altitude", "moon_illumination"})


def to_local_time(timestamp: datetime, location: Location) -> datetime:
    """Express a timestamp in the site's timezone.

    Naive timestamps are already local and are returned unchanged.
    """
    if timestamp.tzinfo is None:
        return timestamp
    return timestamp.astimezone(ZoneInfo(location.timezone))


def is_daytime_hour(local_time: datetime) -> bool:
    """Check whether a local time falls in the 06:00-18:59 daytime block."""
    return DAYTIME_START_HOUR <= local_time.hour <= DAYTIME_END_HOUR


class ConditionsService:
    """Runs the full optics/scoring pipeline on a single sample.

    Holds configuration only; every call is independent, so one
    instance can be shared across locations and threads.
    """

    def __init__(
        self,
        ephemeris: EphemerisProvider | None = None,
        aod_override: float | None = None,
        default_separation: float = DEFAULT_MOON_SEPARATION,
    ):
        """Initialize the conditions service.

        Args:
            ephemeris: Fallback source of Sun/Moon positions for samples
                that do not carry them
            aod_override: User-configured AOD (wins over measurements)
            default_separation: Moon-target separation when unknown
        """
        self.ephemeris = ephemeris
        self.aod_override = aod_override
        self.default_separation = default_separation

    def get_positions(
        self,
        sample: ObservationSample,
        location: Location,
    ) -> CelestialPositions:
        """Sun/Moon state for a sample.

        Every field the sample carries is used as is; the ephemeris only
        fills in the ones it lacks.

        Raises:
            EphemerisUnavailableError: If the sample lacks positions and
                no ephemeris is configured
        """
        known = sample.known_positions
        missing = REQUIRED_POSITION_FIELDS - known.keys()
        if not missing:
            return CelestialPositions(**known)

        if self.ephemeris is None:
            raise EphemerisUnavailableError(sample.timestamp)

        timestamp = sample.timestamp
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=ZoneInfo(location.timezone))
        logger.debug(
            "Sample at %s lacks %s, using ephemeris", timestamp, ", ".join(sorted(missing))
        )
        computed = self.ephemeris.get_celestial_positions(
            location.latitude, location.longitude, timestamp
        )
        return computed.model_copy(update=known)

    def assess(
        self,
        sample: ObservationSample,
        location: Location,
    ) -> HourlyAssessment:
        """Assess one forecast step.

        Args:
            sample: Observation inputs for the step
            location: Observing site

        Returns:
            HourlyAssessment with score, veto and derived quantities
        """
        local_time = to_local_time(sample.timestamp, location)
        positions = self.get_positions(sample, location)

        aod = resolve_aod(self.aod_override, sample.aod)
        optics = calculate_true_transparency(sample.aqi, sample.humidity, aod.aod)

        separation = self.default_separation
        if (
            sample.target_altitude is not None
            and sample.target_azimuth is not None
            and positions.moon_azimuth is not None
        ):
            separation = calculate_moon_separation(
                positions.moon_altitude,
                positions.moon_azimuth,
                sample.target_altitude,
                sample.target_azimuth,
            )

        airmass = 1.0
        if sample.target_altitude is not None and sample.target_altitude > 0:
            airmass = calculate_airmass(sample.target_altitude)

        sqm = calculate_dynamic_sqm(
            location.base_sqm,
            positions.moon_altitude,
            positions.moon_illumination,
            optics.extinction_coefficient,
            separation,
            airmass,
        )
        seeing = seeing_index_to_score(sample.seeing_index)

        quality = calculate_astro_quality_score(
            cloud_cover=sample.cloud_cover,
            sun_altitude=positions.sun_altitude,
            transparency=optics.transparency,
            dynamic_sqm=sqm,
            seeing_score=seeing,
            delta_temp_dew=sample.temperature_differential,
        )

        jet_stream = None
        if sample.wind_speed_500hpa is not None:
            jet_stream = assess_jet_stream_risk(sample.wind_speed_500hpa)

        return HourlyAssessment(
            timestamp=sample.timestamp,
            local_time=local_time,
            is_daytime=is_daytime_hour(local_time),
            quality=quality,
            cloud_cover=sample.cloud_cover,
            cloud_cover_low=sample.cloud_cover_low,
            cloud_cover_mid=sample.cloud_cover_mid,
            cloud_cover_high=sample.cloud_cover_high,
            extinction_coefficient=optics.extinction_coefficient,
            transparency=optics.transparency,
            sqm=sqm,
            seeing_score=seeing,
            transparency_index=sample.transparency_index,
            aod_source=aod.source,
            jet_stream=jet_stream,
            positions=positions,
        )

    def zenith_sqm(self, sample: ObservationSample, location: Location) -> float:
        """Dynamic sky brightness straight up."""
        positions = self.get_positions(sample, location)
        aod = resolve_aod(self.aod_override, sample.aod)
        optics = calculate_true_transparency(sample.aqi, sample.humidity, aod.aod)
        return calculate_dynamic_sqm(
            location.base_sqm,
            positions.moon_altitude,
            positions.moon_illumination,
            optics.extinction_coefficient,
            90 - positions.moon_altitude,
            1.0,
        )

    def milky_way_visibility(
        self,
        sample: ObservationSample,
        location: Location,
        galactic_center_altitude: float,
    ) -> MilkyWayVisibility:
        """Whether the galactic core is worth photographing at this step."""
        return check_milky_way_visibility(
            galactic_center_altitude, self.zenith_sqm(sample, location)
        )
