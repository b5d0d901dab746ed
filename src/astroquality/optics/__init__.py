"""Atmospheric optics models."""

from astroquality.optics.aod import resolve_aod
from astroquality.optics.calculations import (
    assess_jet_stream_risk,
    calculate_atmospheric_refraction,
    calculate_dynamic_sqm,
    calculate_true_transparency,
    check_milky_way_visibility,
)

__all__ = [
    "assess_jet_stream_risk",
    "calculate_atmospheric_refraction",
    "calculate_dynamic_sqm",
    "calculate_true_transparency",
    "check_milky_way_visibility",
    "resolve_aod",
]
