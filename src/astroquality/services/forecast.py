"""Forecast aggregation - best window, daily summary and uncertainty."""

import logging
import statistics
from datetime import date, timedelta

from astroquality.astronomy.models import Location
from astroquality.scoring.models import (
    DailySummary,
    ForecastReport,
    ForecastWindow,
    HourlyAssessment,
    Uncertainty,
)
from astroquality.services.conditions import ConditionsService
from astroquality.weather.models import ObservationSample

logger = logging.getLogger(__name__)


def estimate_uncertainty(scores: list[float]) -> Uncertainty:
    """Estimate forecast spread from valid night-time scores.

    Args:
        scores: Scores of non-vetoed night-time samples

    Returns:
        Uncertainty with population standard deviation and its share
        of the mean; both 0 for an empty list
    """
    if not scores:
        return Uncertainty(sigma=0.0, sigma_percent=0.0)

    sigma = statistics.pstdev(scores)
    mean = statistics.fmean(scores)
    sigma_percent = 100 * sigma / mean if mean > 0 else 0.0
    return Uncertainty(sigma=sigma, sigma_percent=sigma_percent)


def should_alert(window: ForecastWindow | None, threshold: float) -> bool:
    """Check whether a best window is good enough to notify about."""
    return window is not None and window.peak_score >= threshold


class ForecastAggregator:
    """Scans an observation series for the best window and daily peaks.

    Every method is a single pass over its input with no state kept
    between calls, so identical series always give identical results.
    """

    def __init__(
        self,
        conditions: ConditionsService,
        window_horizon: int = 72,
        window_hours: int = 2,
        min_window_score: int = 50,
        min_consecutive_hours: int = 2,
        summary_days: int = 7,
    ):
        """Initialize the aggregator.

        Args:
            conditions: Per-timestep assessment service
            window_horizon: Number of samples searched for the best window
            window_hours: Duration reported for the best window
            min_window_score: Scores must exceed this to qualify
            min_consecutive_hours: Back-to-back qualifying hours needed
                before a peak is accepted
            summary_days: Days reported in the daily summary
        """
        self.conditions = conditions
        self.window_horizon = window_horizon
        self.window_hours = window_hours
        self.min_window_score = min_window_score
        self.min_consecutive_hours = min_consecutive_hours
        self.summary_days = summary_days

    def assess_series(
        self,
        series: list[ObservationSample],
        location: Location,
    ) -> list[HourlyAssessment]:
        """Assess every sample of a series, in order."""
        return [self.conditions.assess(sample, location) for sample in series]

    def find_best_window(
        self,
        series: list[ObservationSample],
        location: Location,
    ) -> ForecastWindow | None:
        """Find the best observation window in the next ``window_horizon`` samples.

        Args:
            series: Time-ordered samples
            location: Observing site

        Returns:
            ForecastWindow, or None if no sample qualifies
        """
        assessments = self.assess_series(series[: self.window_horizon], location)
        return self.best_window_from(assessments)

    def best_window_from(self, assessments: list[HourlyAssessment]) -> ForecastWindow | None:
        """Pick the best window from already assessed samples.

        Daytime hours reset the run of qualifying hours. A sample becomes
        the new best only if it beats the current best strictly and the
        run has reached ``min_consecutive_hours``, so a lone spike never
        wins. The window is expressed in the site's local time.
        """
        best_score = 0
        best: HourlyAssessment | None = None
        consecutive = 0

        for assessment in assessments[: self.window_horizon]:
            if assessment.is_daytime:
                consecutive = 0
                continue

            score = assessment.quality.score
            if not assessment.quality.is_vetoed and score > self.min_window_score:
                consecutive += 1
                if score > best_score and consecutive >= self.min_consecutive_hours:
                    best_score = score
                    best = assessment
            else:
                consecutive = 0

        if best is None:
            logger.debug("No observation window found in %d samples", len(assessments))
            return None

        return ForecastWindow(
            start=best.local_time,
            end=best.local_time + timedelta(hours=self.window_hours),
            peak_score=best_score,
        )

    def build_daily_summary(
        self,
        series: list[ObservationSample],
        location: Location,
    ) -> list[DailySummary]:
        """Summarize the series per local calendar day.

        Args:
            series: Time-ordered samples (up to 7 x 24)
            location: Observing site

        Returns:
            Per-day records in date order
        """
        return self.daily_summary_from(self.assess_series(series, location))

    def daily_summary_from(self, assessments: list[HourlyAssessment]) -> list[DailySummary]:
        """Group assessments by local date.

        The daily peak only considers scores above 0 (daytime and vetoed
        hours score 0) and is 0 when none are. Mean cloud cover covers
        every sample of the day.
        """
        days: dict[date, list[HourlyAssessment]] = {}
        for assessment in assessments:
            days.setdefault(assessment.local_time.date(), []).append(assessment)

        summaries = []
        for day, day_assessments in list(days.items())[: self.summary_days]:
            positive = [a.score for a in day_assessments if a.score > 0]
            summaries.append(
                DailySummary(
                    date=day,
                    peak_score=max(positive, default=0),
                    mean_cloud_cover=statistics.fmean(a.cloud_cover for a in day_assessments),
                )
            )
        return summaries

    def uncertainty_from(self, assessments: list[HourlyAssessment]) -> Uncertainty:
        """Uncertainty over the valid night-time samples."""
        return estimate_uncertainty(
            [a.quality.score for a in assessments if a.is_valid_night_sample]
        )

    def analyze(
        self,
        series: list[ObservationSample],
        location: Location,
    ) -> ForecastReport:
        """Run the full aggregation with a single assessment pass.

        Args:
            series: Time-ordered samples
            location: Observing site

        Returns:
            ForecastReport with timeline, best window, daily summary and
            uncertainty
        """
        assessments = self.assess_series(series, location)
        logger.debug("Assessed %d samples for %s", len(assessments), location.name)

        return ForecastReport(
            timeline=assessments,
            best_window=self.best_window_from(assessments),
            daily=self.daily_summary_from(assessments),
            uncertainty=self.uncertainty_from(assessments),
        )
