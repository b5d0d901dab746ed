"""Observation inputs."""

from astroquality.weather.models import ObservationSample

__all__ = ["ObservationSample"]
