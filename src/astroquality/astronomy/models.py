"""Astronomy data models."""

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Location(BaseModel):
    """Observing site with its baseline sky darkness."""

    id: str = Field(description="Stable identifier (slug)")
    name: str = Field(description="Display name")
    local_name: str | None = Field(default=None, description="Name in the local language")
    latitude: float = Field(ge=-90, le=90, description="Latitude in degrees")
    longitude: float = Field(ge=-180, le=180, description="Longitude in degrees")
    base_sqm: float = Field(
        default=20.0,
        ge=0,
        le=25,
        description="Moonless zenith sky brightness (Bortle proxy) in mag/arcsec²",
    )
    elevation: float = Field(default=0, ge=0, description="Elevation in meters")
    timezone: str = Field(default="UTC", description="IANA timezone name")
    is_custom: bool = Field(default=False, description="User-added rather than preset")

    @field_validator("latitude")
    @classmethod
    def validate_latitude(cls, v: float) -> float:
        if not -90 <= v <= 90:
            raise ValueError("Latitude must be between -90 and 90")
        return v

    @field_validator("longitude")
    @classmethod
    def validate_longitude(cls, v: float) -> float:
        if not -180 <= v <= 180:
            raise ValueError("Longitude must be between -180 and 180")
        return v

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v

    @property
    def bortle_class(self) -> int:
        """Approximate Bortle class from the baseline SQM."""
        if self.base_sqm >= 21.75:
            return 1
        elif self.base_sqm >= 21.6:
            return 2
        elif self.base_sqm >= 21.3:
            return 3
        elif self.base_sqm >= 20.8:
            return 4
        elif self.base_sqm >= 20.3:
            return 5
        elif self.base_sqm >= 19.25:
            return 6
        elif self.base_sqm >= 18.5:
            return 7
        elif self.base_sqm >= 18.0:
            return 8
        return 9

    def __str__(self) -> str:
        lat_dir = "N" if self.latitude >= 0 else "S"
        lon_dir = "E" if self.longitude >= 0 else "W"
        return (
            f"{self.name} ({abs(self.latitude):.2f}{lat_dir}, "
            f"{abs(self.longitude):.2f}{lon_dir})"
        )


class Target(BaseModel):
    """A deep-sky target."""

    name: str = Field(description="Display name")
    ra: float = Field(ge=0, lt=360, description="Right ascension in degrees")
    dec: float = Field(ge=-90, le=90, description="Declination in degrees")
    aliases: list[str] = Field(default_factory=list, description="Alternative names")

    def matches_search(self, query: str) -> bool:
        """Check if target matches a search query."""
        query_lower = query.lower().strip()
        if query_lower in self.name.lower():
            return True
        return any(query_lower in alias.lower() for alias in self.aliases)


class CelestialPositions(BaseModel):
    """Sun and Moon state for one instant at one site."""

    model_config = ConfigDict(frozen=True)

    sun_altitude: float = Field(description="Sun altitude in degrees")
    moon_altitude: float = Field(description="Moon altitude in degrees")
    moon_azimuth: float | None = Field(default=None, description="Moon azimuth in degrees")
    moon_illumination: float = Field(ge=0, le=1, description="Illuminated fraction 0-1")

    @property
    def is_astronomical_night(self) -> bool:
        """Check if the sun is below astronomical twilight (-18 degrees)."""
        return self.sun_altitude < -18

    @property
    def is_moon_up(self) -> bool:
        """Check if moon is above horizon."""
        return self.moon_altitude > 0


class TargetPosition(BaseModel):
    """Position of a target in the local sky."""

    model_config = ConfigDict(frozen=True)

    altitude: float = Field(description="Altitude above horizon in degrees")
    azimuth: float = Field(description="Azimuth in degrees (0=N, 90=E)")
    airmass: float = Field(description="Atmospheric airmass")

    @property
    def is_visible(self) -> bool:
        return self.altitude > 0
