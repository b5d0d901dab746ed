"""Observation input models."""

from datetime import datetime

from pydantic import BaseModel, Field

DEFAULT_AQI = 50.0


class ObservationSample(BaseModel):
    """Meteorological and celestial inputs for one forecast timestep.

    Naive timestamps are taken to be in the site's local time, which is
    what forecast providers return when asked for ``timezone=auto``.
    """

    timestamp: datetime = Field(description="Time of the forecast step")

    # Temperature
    temperature: float = Field(description="Surface temperature in Celsius")
    dew_point: float = Field(description="Dew point temperature in Celsius")
    humidity: float = Field(ge=0, le=100, description="Relative humidity 0-100%")

    # Clouds
    cloud_cover: float = Field(ge=0, le=100, description="Total cloud cover 0-100%")
    cloud_cover_low: float | None = Field(default=None, ge=0, le=100)
    cloud_cover_mid: float | None = Field(default=None, ge=0, le=100)
    cloud_cover_high: float | None = Field(default=None, ge=0, le=100)

    # Upper atmosphere
    wind_speed_500hpa: float | None = Field(
        default=None, ge=0, description="Wind speed at ~500 hPa in km/h"
    )

    # Astro indices (1 best, 8 worst)
    seeing_index: float | None = Field(default=None, ge=1, le=8)
    transparency_index: float | None = Field(default=None, ge=1, le=8)

    # Air quality
    aqi: float = Field(default=DEFAULT_AQI, description="Air quality index")
    aod: float | None = Field(default=None, description="Measured aerosol optical depth")

    # Celestial state, when the caller already has it
    sun_altitude: float | None = None
    moon_altitude: float | None = None
    moon_azimuth: float | None = None
    moon_illumination: float | None = Field(default=None, ge=0, le=1)
    target_altitude: float | None = None
    target_azimuth: float | None = None

    @property
    def temperature_differential(self) -> float:
        """Temperature difference from dew point (higher = drier air)."""
        return self.temperature - self.dew_point

    @property
    def known_positions(self) -> dict[str, float]:
        """Sun/Moon fields the sample carries, keyed like CelestialPositions."""
        fields = {
            "sun_altitude": self.sun_altitude,
            "moon_altitude": self.moon_altitude,
            "moon_azimuth": self.moon_azimuth,
            "moon_illumination": self.moon_illumination,
        }
        return {name: value for name, value in fields.items() if value is not None}
