"""Rich-based display renderer."""

from datetime import datetime

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from astroquality.astronomy.models import CelestialPositions, Location
from astroquality.scoring.models import (
    DailySummary,
    ForecastWindow,
    HourlyAssessment,
    QualityResult,
    Uncertainty,
)


def format_timestamp(dt: datetime) -> str:
    return dt.strftime("%a %d/%m %H:%M")


def format_quality(quality: QualityResult) -> str:
    color = quality.rating_color
    return f"[{color}]{quality.score:>3} {quality.rating}[/{color}]"


def format_positions(positions: CelestialPositions) -> list[str]:
    sky = "astronomical night" if positions.is_astronomical_night else "twilight or day"
    if positions.is_moon_up:
        moon = (
            f"Moon: {positions.moon_altitude:.0f}° up, "
            f"{positions.moon_illumination * 100:.0f}% lit"
        )
    else:
        moon = "Moon: below horizon"
    return [f"Sun: {positions.sun_altitude:.1f}° ({sky})", moon]


class DisplayRenderer:
    """Renders assessments to the terminal using Rich."""

    def __init__(self, console: Console | None = None):
        """Initialize renderer.

        Args:
            console: Rich console (creates one if not provided)
        """
        self.console = console or Console()

    def render_assessment(self, assessment: HourlyAssessment, location: Location) -> None:
        """Render a single-instant assessment."""
        quality = assessment.quality
        lines = [
            f"[bold]{format_quality(quality)}[/bold]",
            f"Sky brightness: {assessment.sqm:.2f} mag/arcsec² (base {location.base_sqm:.1f})",
            f"Transparency: {assessment.transparency:.1f}% (k={assessment.extinction_coefficient:.3f}, "
            f"AOD from {assessment.aod_source.value})",
            f"Seeing: {assessment.seeing_score:.0f}/100",
            f"Cloud cover: {assessment.cloud_cover:.0f}%",
        ]
        if assessment.cloud_layers:
            lines[-1] += f" (low/mid/high {assessment.cloud_layers})"
        if assessment.transparency_index is not None:
            lines.append(f"Transparency index: {assessment.transparency_index:.0f}/8")
        if assessment.positions is not None:
            lines.extend(format_positions(assessment.positions))
        if quality.is_vetoed:
            lines.append(f"[red]Vetoed:[/red] {quality.veto_reason}")
        if assessment.jet_stream is not None:
            jet = assessment.jet_stream
            lines.append(f"[{jet.color_hint}]{jet.message}[/{jet.color_hint}]")

        self.console.print(
            Panel("\n".join(lines), title=str(location), border_style=quality.rating_color)
        )

    def render_timeline(self, timeline: list[HourlyAssessment], title: str = "Forecast") -> None:
        """Render night-time assessments as a table."""
        table = Table(title=title)
        table.add_column("Time", style="cyan")
        table.add_column("Score", justify="right")
        table.add_column("SQM", justify="right")
        table.add_column("Clouds", justify="right")
        table.add_column("L/M/H", justify="right")
        table.add_column("Note")

        for a in timeline:
            if a.is_daytime:
                continue
            table.add_row(
                format_timestamp(a.local_time),
                format_quality(a.quality),
                f"{a.sqm:.2f}",
                f"{a.cloud_cover:.0f}%",
                a.cloud_layers or "-",
                a.quality.veto_reason or "",
            )

        self.console.print(table)

    def render_daily_summary(self, daily: list[DailySummary]) -> None:
        """Render per-day peaks."""
        table = Table(title="7-Day Forecast")
        table.add_column("Date", style="cyan")
        table.add_column("Peak", justify="right")
        table.add_column("Clouds", justify="right")

        for day in daily:
            table.add_row(
                day.date.strftime("%a %d/%m"),
                str(day.peak_score) if day.peak_score else "-",
                f"{day.mean_cloud_cover:.0f}%",
            )
        self.console.print(table)

        if daily:
            best = max(daily, key=lambda d: d.peak_score)
            if best.peak_score > 50:
                self.console.print(
                    f"\nBest night: [bold]{best.date.strftime('%a %d/%m')}[/bold] "
                    f"(peak: {best.peak_score})"
                )

    def render_best_window(
        self, window: ForecastWindow | None, horizon_hours: int = 72
    ) -> None:
        """Render best observation window."""
        if window is None:
            self.console.print(
                Panel(
                    f"[yellow]No good observation window in the next "
                    f"{horizon_hours} hours.[/yellow]",
                    title="Best Window",
                    border_style="yellow",
                )
            )
            return

        self.console.print(
            Panel(
                f"[bold]Start:[/bold] {format_timestamp(window.start)}\n"
                f"[bold]End:[/bold] {format_timestamp(window.end)}\n"
                f"Peak score: {window.peak_score}",
                title="Best Observation Window",
                border_style="green",
            )
        )

    def render_uncertainty(self, uncertainty: Uncertainty, threshold: float) -> None:
        """Render forecast spread with a confidence flag."""
        flag = (
            "[yellow]low confidence[/yellow]"
            if uncertainty.is_low_confidence(threshold)
            else "[green]stable[/green]"
        )
        self.console.print(
            f"Forecast spread: σ={uncertainty.sigma:.1f} ({uncertainty.sigma_percent:.0f}%) {flag}"
        )

    def print_success(self, message: str) -> None:
        """Print success message."""
        self.console.print(f"[green]✓[/green] {message}")

    def print_warning(self, message: str) -> None:
        """Print warning message."""
        self.console.print(f"[yellow]⚠[/yellow] {message}")

    def print_error(self, message: str) -> None:
        """Print error message."""
        self.console.print(f"[red]✗[/red] {message}")
