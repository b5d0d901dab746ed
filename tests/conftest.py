"""Pytest fixtures for Astroquality tests."""

from datetime import datetime, timedelta, timezone

import pytest

from astroquality.astronomy.models import CelestialPositions, Location
from astroquality.scoring.models import HourlyAssessment, QualityResult
from astroquality.optics.models import AodSource
from astroquality.services.conditions import ConditionsService
from astroquality.services.forecast import ForecastAggregator
from astroquality.weather.models import ObservationSample

NIGHT_SUN = -30.0
DAY_SUN = 20.0


class FakeEphemeris:
    """Ephemeris returning fixed positions and recording the times asked for."""

    def __init__(self, positions: CelestialPositions):
        self.positions = positions
        self.calls: list[tuple[float, float, datetime]] = []

    def get_celestial_positions(self, latitude, longitude, time):
        self.calls.append((latitude, longitude, time))
        return self.positions


def make_sample(timestamp: datetime, cloud_cover: float = 0, **overrides) -> ObservationSample:
    """Night-time sample with a dark, moonless sky.

    With base SQM 21.5 and no overrides the score is 91
    (40 cloud + 14.8 transparency + 16.5 sky + 10 seeing + 10 dew).
    """
    hour = timestamp.hour
    fields = {
        "timestamp": timestamp,
        "temperature": 15.0,
        "dew_point": 5.0,
        "humidity": 50.0,
        "cloud_cover": cloud_cover,
        "seeing_index": 1,
        "aqi": 50.0,
        "aod": 0.1,
        "sun_altitude": DAY_SUN if 6 <= hour <= 18 else NIGHT_SUN,
        "moon_altitude": -10.0,
        "moon_azimuth": 90.0,
        "moon_illumination": 0.0,
    }
    fields.update(overrides)
    return ObservationSample(**fields)


def make_series(start: datetime, clouds: list[float], **overrides) -> list[ObservationSample]:
    """Hourly samples starting at ``start`` with the given cloud covers."""
    return [
        make_sample(start + timedelta(hours=i), cloud, **overrides)
        for i, cloud in enumerate(clouds)
    ]


def make_assessment(
    timestamp: datetime,
    score: int,
    is_vetoed: bool = False,
    is_daytime: bool = False,
    cloud_cover: float = 0.0,
) -> HourlyAssessment:
    """Assessment built directly, for window-scan tests."""
    quality = (
        QualityResult(score=0, is_vetoed=True, veto_reason="test veto")
        if is_vetoed
        else QualityResult(score=score)
    )
    return HourlyAssessment(
        timestamp=timestamp,
        local_time=timestamp,
        is_daytime=is_daytime,
        quality=quality,
        cloud_cover=cloud_cover,
        extinction_coefficient=0.3,
        transparency=74.0,
        sqm=21.0,
        seeing_score=100.0,
        aod_source=AodSource.MEASURED,
    )


@pytest.fixture
def dark_site() -> Location:
    """Dark-sky site in UTC so local hours equal UTC hours."""
    return Location(
        id="test-site",
        name="Test Observatory",
        latitude=22.336,
        longitude=103.844,
        base_sqm=21.5,
        elevation=1600,
        timezone="UTC",
    )


@pytest.fixture
def vietnam_site() -> Location:
    """Site at UTC+7."""
    return Location(
        id="da-lat",
        name="Da Lat",
        latitude=11.942,
        longitude=108.458,
        base_sqm=20.8,
        timezone="Asia/Ho_Chi_Minh",
    )


@pytest.fixture
def evening() -> datetime:
    """19:00 UTC, the first night-time hour."""
    return datetime(2026, 1, 10, 19, 0, tzinfo=timezone.utc)


@pytest.fixture
def conditions() -> ConditionsService:
    return ConditionsService()


@pytest.fixture
def aggregator(conditions: ConditionsService) -> ForecastAggregator:
    return ForecastAggregator(conditions)
