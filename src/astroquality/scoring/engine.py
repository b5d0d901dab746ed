"""Observability quality scoring.

The point allocation is fixed: cloud 40, transparency 20, sky darkness 20,
seeing 10, dew margin 10. Two hard vetoes short-circuit to a score of 0.
"""

import math

from astroquality.core.utils import clamp
from astroquality.scoring.models import QualityResult

CLOUD_VETO_THRESHOLD = 70.0
ASTRONOMICAL_TWILIGHT = -18.0

CLOUD_POINTS = 40
TRANSPARENCY_POINTS = 20
SQM_POINTS = 20
SEEING_POINTS = 10
DEW_POINTS = 10

SQM_BRIGHT = 17.0
SQM_DARK = 22.0

DEFAULT_SEEING_INDEX = 4
SEEING_STEP = 14


def calculate_dew_margin_factor(delta_temp_dew: float) -> float:
    """Normalize the temperature/dew-point spread to 0-1.

    0 at or below 1°C (dew on optics), linear to 1 at 5°C.
    """
    if delta_temp_dew >= 5:
        return 1.0
    elif delta_temp_dew > 1:
        return (delta_temp_dew - 1) / 4
    return 0.0


def calculate_astro_quality_score(
    cloud_cover: float,
    sun_altitude: float,
    transparency: float,
    dynamic_sqm: float,
    seeing_score: float,
    delta_temp_dew: float,
) -> QualityResult:
    """Calculate the 0-100 observability score.

    Args:
        cloud_cover: Total cloud cover 0-100%
        sun_altitude: Sun altitude in degrees
        transparency: True transparency 0-100%
        dynamic_sqm: Sky brightness toward the target (mag/arcsec²)
        seeing_score: Seeing 0-100 (higher is better)
        delta_temp_dew: Temperature minus dew point in °C

    Returns:
        QualityResult; vetoed results always score 0
    """
    if cloud_cover > CLOUD_VETO_THRESHOLD:
        return QualityResult(
            score=0,
            is_vetoed=True,
            veto_reason=f"Cloud cover exceeds {CLOUD_VETO_THRESHOLD:.0f}%",
        )
    if sun_altitude > ASTRONOMICAL_TWILIGHT:
        return QualityResult(
            score=0,
            is_vetoed=True,
            veto_reason=f"Sun is above astronomical twilight ({ASTRONOMICAL_TWILIGHT:.0f}°)",
        )

    cloud = CLOUD_POINTS * max(0.0, 1 - cloud_cover / CLOUD_VETO_THRESHOLD)
    transparency_pts = TRANSPARENCY_POINTS * (transparency / 100)
    sqm_norm = clamp((dynamic_sqm - SQM_BRIGHT) / (SQM_DARK - SQM_BRIGHT), 0.0, 1.0)
    sqm_pts = SQM_POINTS * sqm_norm
    seeing_pts = SEEING_POINTS * (seeing_score / 100)
    dew_pts = DEW_POINTS * calculate_dew_margin_factor(delta_temp_dew)

    # round half up
    total = math.floor(cloud + transparency_pts + sqm_pts + seeing_pts + dew_pts + 0.5)
    return QualityResult(score=int(clamp(total, 0, 100)))


def seeing_index_to_score(index: float | None) -> float:
    """Convert a 1-8 seeing index (1 best) to a 0-100 score (100 best).

    A missing index is treated as average seeing (4).
    """
    if index is None:
        index = DEFAULT_SEEING_INDEX
    return max(0.0, 100.0 - (index - 1) * SEEING_STEP)
