"""Scoring data models."""

from datetime import date, datetime, timedelta

from pydantic import BaseModel, ConfigDict, Field, model_validator

from astroquality.astronomy.models import CelestialPositions
from astroquality.optics.models import AodSource, JetStreamRisk


class QualityResult(BaseModel):
    """Observability score with optional veto."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0, le=100, description="Overall quality score 0-100")
    is_vetoed: bool = False
    veto_reason: str | None = None

    @model_validator(mode="after")
    def check_veto_zeroes_score(self) -> "QualityResult":
        if self.is_vetoed and self.score != 0:
            raise ValueError("A vetoed result must have score 0")
        return self

    @property
    def rating(self) -> str:
        """Get a human-readable rating."""
        if self.is_vetoed:
            return "Vetoed"
        if self.score >= 80:
            return "Excellent"
        elif self.score >= 60:
            return "Good"
        elif self.score > 50:
            return "Fair"
        elif self.score >= 25:
            return "Poor"
        else:
            return "Bad"

    @property
    def rating_color(self) -> str:
        """Get a color for the rating (for Rich display)."""
        if self.is_vetoed:
            return "bright_black"
        if self.score >= 80:
            return "bright_green"
        elif self.score >= 60:
            return "yellow"
        else:
            return "red"


class ScoreWeights(BaseModel):
    """User-adjustable weight percentages.

    Shown and validated in settings only. The scorer keeps its fixed
    40/20/20/10/10 point allocation and never reads these.
    """

    cloud: float = Field(default=35, ge=0)
    transparency: float = Field(default=20, ge=0)
    sqm: float = Field(default=20, ge=0)
    seeing: float = Field(default=15, ge=0)
    dew_point: float = Field(default=10, ge=0)

    @property
    def total(self) -> float:
        return self.cloud + self.transparency + self.sqm + self.seeing + self.dew_point

    @property
    def is_balanced(self) -> bool:
        """Whether the weights add up to 100%."""
        return abs(self.total - 100) < 0.01


class HourlyAssessment(BaseModel):
    """Everything derived for one forecast timestep."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    local_time: datetime = Field(description="Timestamp in the site's timezone")
    is_daytime: bool
    quality: QualityResult
    cloud_cover: float
    cloud_cover_low: float | None = None
    cloud_cover_mid: float | None = None
    cloud_cover_high: float | None = None
    extinction_coefficient: float
    transparency: float
    sqm: float
    seeing_score: float
    transparency_index: float | None = None
    aod_source: AodSource
    jet_stream: JetStreamRisk | None = None
    positions: CelestialPositions | None = None

    @property
    def score(self) -> int:
        """Score as shown on a timeline (0 during the day)."""
        return 0 if self.is_daytime else self.quality.score

    @property
    def is_valid_night_sample(self) -> bool:
        """Night-time and not vetoed; the only samples that count for uncertainty."""
        return not self.is_daytime and not self.quality.is_vetoed

    @property
    def cloud_layers(self) -> str:
        """Low/mid/high cloud cover as "L/M/H"; empty when no layer is known."""
        layers = (self.cloud_cover_low, self.cloud_cover_mid, self.cloud_cover_high)
        if all(layer is None for layer in layers):
            return ""
        return "/".join("-" if layer is None else f"{layer:.0f}" for layer in layers)


class ForecastWindow(BaseModel):
    """Best observation window."""

    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime
    peak_score: int = Field(ge=0, le=100)

    @property
    def duration(self) -> timedelta:
        """Duration of the window."""
        return self.end - self.start

    def __str__(self) -> str:
        return (
            f"{self.start.strftime('%H:%M')} - {self.end.strftime('%H:%M')} "
            f"(peak: {self.peak_score})"
        )


class DailySummary(BaseModel):
    """Per-day forecast digest."""

    model_config = ConfigDict(frozen=True)

    date: date
    peak_score: int = Field(ge=0, le=100)
    mean_cloud_cover: float = Field(ge=0, le=100)


class Uncertainty(BaseModel):
    """Spread of night-time scores."""

    model_config = ConfigDict(frozen=True)

    sigma: float = Field(ge=0, description="Population standard deviation")
    sigma_percent: float = Field(ge=0, description="Sigma relative to the mean, in %")

    def is_low_confidence(self, threshold: float = 25.0) -> bool:
        return self.sigma_percent > threshold


class ForecastReport(BaseModel):
    """Result of one aggregation run."""

    model_config = ConfigDict(frozen=True)

    timeline: list[HourlyAssessment]
    best_window: ForecastWindow | None
    daily: list[DailySummary]
    uncertainty: Uncertainty
