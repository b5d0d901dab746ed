"""Building observation series from provider payloads."""

import logging
from datetime import datetime

from pydantic import ValidationError

from astroquality.core.exceptions import ObservationDataError
from astroquality.weather.models import ObservationSample

logger = logging.getLogger(__name__)

# Astro seeing forecasts are published on a 3-hour grid
SEEING_STEP_HOURS = 3

# Open-Meteo hourly variable -> sample field
HOURLY_FIELDS = {
    "temperature_2m": "temperature",
    "dew_point_2m": "dew_point",
    "relative_humidity_2m": "humidity",
    "cloud_cover": "cloud_cover",
    "cloud_cover_low": "cloud_cover_low",
    "cloud_cover_mid": "cloud_cover_mid",
    "cloud_cover_high": "cloud_cover_high",
    "wind_speed_500hPa": "wind_speed_500hpa",
}


def samples_from_hourly(
    hourly: dict,
    aod: list[float | None] | None = None,
) -> list[ObservationSample]:
    """Convert an Open-Meteo style columnar ``hourly`` block into samples.

    Rows that fail validation are skipped with a warning.

    Args:
        hourly: Mapping of variable name to per-hour values, including ``time``
        aod: Optional parallel series of measured AOD values

    Returns:
        Samples in time order

    Raises:
        ObservationDataError: If the block has no ``time`` column
    """
    times = hourly.get("time")
    if not times:
        raise ObservationDataError("Hourly data has no 'time' column")

    samples = []
    for i, time_str in enumerate(times):
        try:
            timestamp = datetime.fromisoformat(time_str.replace("Z", "+00:00"))
        except (AttributeError, ValueError):
            logger.warning(f"Skipping hourly sample at index {i}: bad time {time_str!r}")
            continue

        row: dict = {"timestamp": timestamp}
        for key, field in HOURLY_FIELDS.items():
            value = _get_value(hourly, key, i)
            if value is not None:
                row[field] = value
        if aod is not None and i < len(aod) and aod[i] is not None:
            row["aod"] = float(aod[i])

        try:
            samples.append(ObservationSample(**row))
        except ValidationError as e:
            logger.warning(f"Skipping hourly sample at index {i}: {e.error_count()} errors")
            continue

    return samples


def attach_seeing(
    samples: list[ObservationSample],
    seeing: list[float],
    transparency: list[float] | None = None,
    step_hours: int = SEEING_STEP_HOURS,
) -> list[ObservationSample]:
    """Attach 3-hourly seeing/transparency indices to hourly samples.

    Hourly sample ``i`` takes entry ``min(i // step_hours, len - 1)``.

    Args:
        samples: Hourly samples in time order
        seeing: Seeing indices (1-8) on the coarser grid
        transparency: Optional transparency indices on the same grid
        step_hours: Hours per seeing entry

    Returns:
        New list of samples; the input is left untouched
    """
    if not seeing:
        return list(samples)

    result = []
    for i, sample in enumerate(samples):
        idx = min(i // step_hours, len(seeing) - 1)
        update = {"seeing_index": seeing[idx]}
        if transparency:
            update["transparency_index"] = transparency[min(idx, len(transparency) - 1)]
        result.append(sample.model_copy(update=update))
    return result


def _get_value(hourly: dict, key: str, index: int) -> float | None:
    """Safely get a value from the hourly data."""
    values = hourly.get(key, [])
    if index < len(values) and values[index] is not None:
        return float(values[index])
    return None


def load_series(data: dict) -> list[ObservationSample]:
    """Build a series from a JSON document.

    Accepts either a ``samples`` list of sample records, or an Open-Meteo
    style ``hourly`` block with optional parallel ``aod``, ``seeing`` and
    ``transparency`` lists (the last two on the 3-hour grid).

    Raises:
        ObservationDataError: If neither form is present or a record is invalid
    """
    if "samples" in data:
        try:
            return [ObservationSample(**record) for record in data["samples"]]
        except (TypeError, ValidationError) as e:
            raise ObservationDataError(f"Invalid sample record: {e}") from e

    if "hourly" in data:
        samples = samples_from_hourly(data["hourly"], aod=data.get("aod"))
        return attach_seeing(
            samples,
            data.get("seeing") or [],
            transparency=data.get("transparency"),
        )

    raise ObservationDataError("Expected a 'samples' list or an 'hourly' block")
