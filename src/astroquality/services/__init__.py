"""Services layer."""

from astroquality.services.conditions import ConditionsService
from astroquality.services.forecast import ForecastAggregator, estimate_uncertainty

__all__ = ["ConditionsService", "ForecastAggregator", "estimate_uncertainty"]
