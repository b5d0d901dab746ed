"""Aerosol optical depth source selection."""

import logging

from astroquality.optics.models import AodResolution, AodSource

logger = logging.getLogger(__name__)

DEFAULT_AOD = 0.1


def resolve_aod(
    manual_override: float | None,
    measured_aod: float | None,
) -> AodResolution:
    """Pick the AOD to use for extinction.

    Priority: manual override > real-time measurement > default 0.1.
    Negative values count as absent.

    Args:
        manual_override: User-configured AOD, if any
        measured_aod: Real-time AOD from an aerosol service, if any

    Returns:
        AodResolution with value and source
    """
    if manual_override is not None and manual_override >= 0:
        return AodResolution(aod=manual_override, source=AodSource.MANUAL)
    if measured_aod is not None and measured_aod >= 0:
        return AodResolution(aod=measured_aod, source=AodSource.MEASURED)

    logger.debug("No usable AOD value, falling back to default %.2f", DEFAULT_AOD)
    return AodResolution(aod=DEFAULT_AOD, source=AodSource.DEFAULT)
