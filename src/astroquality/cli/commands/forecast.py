"""Forecast command."""

import json
from pathlib import Path

import click

from astroquality.cli.context import CliContext
from astroquality.core.exceptions import AstroQualityError, ObservationDataError
from astroquality.services.forecast import should_alert
from astroquality.weather.series import load_series


pass_context = click.make_pass_decorator(CliContext)


@click.command()
@click.argument("series_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--location", "-l", type=str, help="Location id (uses default if not specified)")
@click.option(
    "--hourly/--no-hourly",
    default=False,
    help="Also show the night-time hourly timeline",
)
@pass_context
def forecast(
    ctx: CliContext,
    series_file: Path,
    location: str | None,
    hourly: bool,
) -> None:
    """Analyze a forecast series stored as JSON.

    The file holds either a "samples" list or an Open-Meteo "hourly"
    block with optional "seeing", "transparency" and "aod" lists.

    Examples:
        astroquality forecast forecast.json
        astroquality forecast forecast.json -l da-lat --hourly
    """
    try:
        loc = ctx.resolve_location(location)
        try:
            data = json.loads(series_file.read_text())
        except json.JSONDecodeError as e:
            raise ObservationDataError(f"Invalid JSON in {series_file}: {e}") from e

        series = load_series(data)
        if not series:
            ctx.renderer.print_warning("No forecast data available")
            return

        aggregator = ctx.get_aggregator()
        with ctx.console.status("Scoring forecast..."):
            report = aggregator.analyze(series, loc)

        if hourly:
            ctx.renderer.render_timeline(report.timeline, title=f"Nighttime Forecast - {loc.name}")

        ctx.renderer.render_best_window(report.best_window, aggregator.window_horizon)
        ctx.renderer.render_daily_summary(report.daily)
        ctx.renderer.render_uncertainty(report.uncertainty, ctx.config.low_confidence_threshold)

        if should_alert(report.best_window, ctx.config.alert_threshold):
            ctx.renderer.print_success(
                f"Great sky at {report.best_window.start:%H:%M}: "
                f"score {report.best_window.peak_score}/100 at {loc.name}"
            )

    except AstroQualityError as e:
        ctx.renderer.print_error(str(e))
        raise SystemExit(1)
