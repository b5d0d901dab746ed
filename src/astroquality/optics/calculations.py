"""Atmospheric optics calculations.

Pure functions over instantaneous inputs. None of them raise on odd
inputs: out-of-range values are clamped or special-cased so that a
partially bad forecast still produces usable numbers.
"""

import math

from astroquality.core.utils import clamp
from astroquality.optics.models import (
    DispersionLevel,
    JetStreamLevel,
    JetStreamRisk,
    MilkyWayVisibility,
    RefractionResult,
    TransparencyResult,
)

# Rayleigh + ozone extinction of a clean atmosphere at zenith
BASE_EXTINCTION = 0.15
# Relative humidity above which water vapour adds extinction
HUMIDITY_THRESHOLD = 60.0

LUNAR_PENALTY_SCALE = 5.0
LUNAR_PROXIMITY_OFFSET = 10.0
AIRGLOW_EXTINCTION_FACTOR = 1.25

GALACTIC_CENTER_MIN_ALTITUDE = 10.0
MILKY_WAY_MIN_SQM = 19.5

# (upper bound km/h, level, FWHM bloat arcsec, color)
JET_STREAM_BANDS = [
    (30.0, JetStreamLevel.GOOD, 0.0, "#34d399"),
    (60.0, JetStreamLevel.MODERATE, 1.5, "#fbbf24"),
    (90.0, JetStreamLevel.HIGH, 3.0, "#f97316"),
]
JET_STREAM_SEVERE = (JetStreamLevel.SEVERE, 5.0, "#ef4444")


def calculate_true_transparency(
    aqi: float,
    humidity: float,
    aerosol_optical_depth: float,
) -> TransparencyResult:
    """Calculate atmospheric transparency with the Beer-Lambert law.

    k = 0.15 + 0.001 * AQI + 0.002 * max(0, RH - 60) + AOD

    Args:
        aqi: Air quality index
        humidity: Relative humidity 0-100%
        aerosol_optical_depth: Aerosol optical depth (unitless)

    Returns:
        TransparencyResult with extinction coefficient and transparency %
    """
    k = (
        BASE_EXTINCTION
        + 0.001 * aqi
        + max(0.0, humidity - HUMIDITY_THRESHOLD) * 0.002
        + aerosol_optical_depth
    )
    transparency = clamp(math.exp(-k) * 100, 0.0, 100.0)
    return TransparencyResult(extinction_coefficient=k, transparency=transparency)


def calculate_dynamic_sqm(
    base_sqm: float,
    moon_altitude: float,
    moon_illumination: float,
    k: float,
    separation: float,
    target_airmass: float = 1.0,
) -> float:
    """Calculate sky brightness toward a target (modified Krisciunas-Schaefer).

    Moonlight scattered into the line of sight brightens the sky, and
    more so the closer the target sits to the Moon. The proximity
    multiplier is 1 + (180 / (sep + 10))^2, which peaks at 325 for a
    target on top of the Moon.

    Args:
        base_sqm: Moonless zenith sky brightness of the site (mag/arcsec²)
        moon_altitude: Moon altitude in degrees
        moon_illumination: Illuminated fraction 0-1
        k: Extinction coefficient
        separation: Moon-target angular separation in degrees
        target_airmass: Airmass toward the target (1.0 at zenith)

    Returns:
        Sky brightness in mag/arcsec² (never negative)
    """
    if moon_altitude <= 0:
        base_lunar_penalty = 0.0
    else:
        base_lunar_penalty = (
            moon_illumination
            * math.sin(math.radians(moon_altitude))
            * k
            * LUNAR_PENALTY_SCALE
        )

    proximity = 1 + (180 / (separation + LUNAR_PROXIMITY_OFFSET)) ** 2
    target_penalty = base_lunar_penalty * proximity

    sqm = base_sqm - target_penalty - AIRGLOW_EXTINCTION_FACTOR * k * target_airmass
    return max(0.0, sqm)


def calculate_atmospheric_refraction(
    altitude: float,
    pressure_hpa: float = 1013.25,
    temperature_c: float = 10.0,
) -> RefractionResult:
    """Calculate atmospheric refraction with Saemundsson's formula.

    R = 1.02 / tan(h + 10.3 / (h + 5.11)) * (P / 1010) * (283 / (273 + T))

    Below 15° chromatic dispersion calls for an ADC corrector; below 5°
    it is severe enough to make imaging impractical.

    Args:
        altitude: Apparent altitude in degrees
        pressure_hpa: Surface pressure in hPa
        temperature_c: Surface temperature in Celsius

    Returns:
        RefractionResult; zero refraction for objects below the horizon.
        Right at the zenith the formula dips a few thousandths of an
        arcminute below zero
    """
    if altitude < 0:
        return RefractionResult(refraction_arcmin=0.0)

    r0 = 1.02 / math.tan(math.radians(altitude + 10.3 / (altitude + 5.11)))
    correction = (pressure_hpa / 1010) * (283 / (273 + temperature_c))

    if altitude < 5:
        level = DispersionLevel.SEVERE
    elif altitude < 15:
        level = DispersionLevel.MODERATE
    else:
        level = DispersionLevel.NONE

    return RefractionResult(
        refraction_arcmin=r0 * correction,
        dispersion_level=level,
    )


def assess_jet_stream_risk(wind_speed_500hpa: float) -> JetStreamRisk:
    """Assess scintillation risk from the 500 hPa wind speed.

    Empirical bands used by astrophotographers:
    < 30 km/h negligible, 30-60 moderate, 60-90 high, >= 90 severe.

    Args:
        wind_speed_500hpa: Wind speed at ~500 hPa in km/h

    Returns:
        JetStreamRisk for the matching band
    """
    for upper, level, bloat, color in JET_STREAM_BANDS:
        if wind_speed_500hpa < upper:
            return JetStreamRisk(
                level=level,
                fwhm_bloat_arcsec=bloat,
                message=_jet_stream_message(level, wind_speed_500hpa),
                color_hint=color,
            )

    level, bloat, color = JET_STREAM_SEVERE
    return JetStreamRisk(
        level=level,
        fwhm_bloat_arcsec=bloat,
        message=_jet_stream_message(level, wind_speed_500hpa),
        color_hint=color,
    )


def _jet_stream_message(level: JetStreamLevel, speed: float) -> str:
    if level == JetStreamLevel.GOOD:
        return "Weak jet stream - stable seeing"
    elif level == JetStreamLevel.MODERATE:
        return f"Moderate jet stream ({speed:.0f} km/h) - seeing slightly affected"
    elif level == JetStreamLevel.HIGH:
        return f"Strong jet stream ({speed:.0f} km/h) - fast scintillation, planets blurred"
    else:
        return f"Very strong jet stream ({speed:.0f} km/h) - imaging not feasible"


def check_milky_way_visibility(
    galactic_center_altitude: float,
    zenith_sqm: float,
) -> MilkyWayVisibility:
    """Check whether the Milky Way core can be photographed.

    Args:
        galactic_center_altitude: Altitude of Sagittarius A* in degrees
        zenith_sqm: Dynamic sky brightness at the zenith

    Returns:
        MilkyWayVisibility with a human-readable reason
    """
    if galactic_center_altitude <= GALACTIC_CENTER_MIN_ALTITUDE:
        return MilkyWayVisibility(
            is_visible=False,
            reason=f"Galactic Center is too low (< {GALACTIC_CENTER_MIN_ALTITUDE:.0f}°)",
        )
    if zenith_sqm <= MILKY_WAY_MIN_SQM:
        return MilkyWayVisibility(
            is_visible=False,
            reason=f"Sky is too bright (SQM: {zenith_sqm:.2f})",
        )
    return MilkyWayVisibility(
        is_visible=True,
        reason="Optimal conditions for Milky Way photography",
    )
