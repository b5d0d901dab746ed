"""Optics data models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class DispersionLevel(str, Enum):
    """Atmospheric dispersion severity near the horizon."""

    NONE = "none"
    MODERATE = "moderate"
    SEVERE = "severe"


class JetStreamLevel(str, Enum):
    """Scintillation risk from 500 hPa winds."""

    GOOD = "good"
    MODERATE = "moderate"
    HIGH = "high"
    SEVERE = "severe"


class AodSource(str, Enum):
    """Where the aerosol optical depth value came from."""

    MANUAL = "manual"
    MEASURED = "measured"
    DEFAULT = "default"


class TransparencyResult(BaseModel):
    """Beer-Lambert extinction and resulting transparency."""

    model_config = ConfigDict(frozen=True)

    extinction_coefficient: float = Field(description="Extinction coefficient k (mag/airmass)")
    transparency: float = Field(ge=0, le=100, description="Transmitted light percentage")


class RefractionResult(BaseModel):
    """Atmospheric refraction at a given altitude."""

    model_config = ConfigDict(frozen=True)

    refraction_arcmin: float = Field(description="Refraction in arcminutes")
    dispersion_level: DispersionLevel = DispersionLevel.NONE

    @property
    def dispersion_warning(self) -> bool:
        """Whether chromatic dispersion needs attention (ADC corrector)."""
        return self.dispersion_level != DispersionLevel.NONE


class JetStreamRisk(BaseModel):
    """Jet-stream scintillation assessment."""

    model_config = ConfigDict(frozen=True)

    level: JetStreamLevel
    fwhm_bloat_arcsec: float = Field(ge=0, description="Expected star FWHM growth")
    message: str
    color_hint: str = Field(description="Display color for the level")


class AodResolution(BaseModel):
    """Resolved aerosol optical depth and its source."""

    model_config = ConfigDict(frozen=True)

    aod: float = Field(ge=0)
    source: AodSource


class MilkyWayVisibility(BaseModel):
    """Whether the galactic core is worth photographing."""

    model_config = ConfigDict(frozen=True)

    is_visible: bool
    reason: str
