"""Custom exception hierarchy for Astroquality."""


class AstroQualityError(Exception):
    """Base exception for all Astroquality errors."""

    pass


class ConfigError(AstroQualityError):
    """Configuration-related errors."""

    pass


class CatalogNotFoundError(AstroQualityError):
    """Target not found in the preset catalog."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Target not found: {name}")


class InvalidLocationError(AstroQualityError):
    """Invalid coordinates provided."""

    def __init__(self, lat: float | None = None, lon: float | None = None):
        self.lat = lat
        self.lon = lon
        message = "Invalid coordinates"
        if lat is not None:
            message += f" (latitude: {lat})"
        if lon is not None:
            message += f" (longitude: {lon})"
        super().__init__(message)


class EphemerisUnavailableError(AstroQualityError):
    """Sun/Moon positions are missing and no ephemeris is configured."""

    def __init__(self, timestamp: object | None = None):
        self.timestamp = timestamp
        message = "Celestial positions unavailable"
        if timestamp is not None:
            message += f" for {timestamp}"
        super().__init__(message)


class ObservationDataError(AstroQualityError):
    """Malformed observation series."""

    pass
