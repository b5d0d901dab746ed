"""Observability quality scoring."""

from astroquality.scoring.engine import calculate_astro_quality_score, seeing_index_to_score
from astroquality.scoring.models import QualityResult, ScoreWeights

__all__ = [
    "QualityResult",
    "ScoreWeights",
    "calculate_astro_quality_score",
    "seeing_index_to_score",
]
