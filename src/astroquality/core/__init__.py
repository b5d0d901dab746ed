"""Core utilities and exceptions."""

from astroquality.core.exceptions import (
    AstroQualityError,
    CatalogNotFoundError,
    ConfigError,
    EphemerisUnavailableError,
    InvalidLocationError,
    ObservationDataError,
)

__all__ = [
    "AstroQualityError",
    "ConfigError",
    "CatalogNotFoundError",
    "EphemerisUnavailableError",
    "InvalidLocationError",
    "ObservationDataError",
]
