"""Instantaneous score command."""

from datetime import datetime, timezone

import click

from astroquality.astronomy.catalog import GALACTIC_CENTER, TargetCatalog
from astroquality.cli.context import CliContext
from astroquality.core.exceptions import AstroQualityError
from astroquality.weather.models import DEFAULT_AQI, ObservationSample


pass_context = click.make_pass_decorator(CliContext)


@click.command()
@click.option("--location", "-l", type=str, help="Location id (uses default if not specified)")
@click.option("--cloud", type=click.FloatRange(0, 100), required=True, help="Cloud cover %")
@click.option("--humidity", type=click.FloatRange(0, 100), required=True, help="Relative humidity %")
@click.option("--temp", type=float, required=True, help="Temperature in °C")
@click.option("--dew", type=float, required=True, help="Dew point in °C")
@click.option("--aqi", type=float, default=DEFAULT_AQI, show_default=True, help="Air quality index")
@click.option("--aod", type=float, help="Measured aerosol optical depth")
@click.option("--seeing", type=click.FloatRange(1, 8), help="Seeing index 1 (best) - 8")
@click.option("--wind-500", type=click.FloatRange(min=0), help="Wind at 500 hPa in km/h")
@click.option("--sun-alt", type=float, help="Sun altitude (ephemeris if omitted)")
@click.option("--moon-alt", type=float, help="Moon altitude (ephemeris if omitted)")
@click.option("--moon-az", type=float, help="Moon azimuth")
@click.option("--moon-illum", type=click.FloatRange(0, 1), help="Moon illuminated fraction")
@click.option("--target-alt", type=float, help="Target altitude")
@click.option("--target-az", type=float, help="Target azimuth")
@click.option("--target", "target_name", type=str, help="Preset target name (ephemeris position)")
@click.option("--milky-way", is_flag=True, help="Check Milky Way core visibility")
@click.option("--galactic-alt", type=float, help="Galactic centre altitude (ephemeris if omitted)")
@pass_context
def score(
    ctx: CliContext,
    location: str | None,
    cloud: float,
    humidity: float,
    temp: float,
    dew: float,
    aqi: float,
    aod: float | None,
    seeing: float | None,
    wind_500: float | None,
    sun_alt: float | None,
    moon_alt: float | None,
    moon_az: float | None,
    moon_illum: float | None,
    target_alt: float | None,
    target_az: float | None,
    target_name: str | None,
    milky_way: bool,
    galactic_alt: float | None,
) -> None:
    """Score observing conditions right now.

    Examples:
        astroquality score --cloud 10 --humidity 55 --temp 18 --dew 9
        astroquality score --cloud 0 --humidity 40 --temp 12 --dew 2 \\
            --sun-alt -30 --moon-alt -5 --moon-illum 0.2
        astroquality score --cloud 0 --humidity 40 --temp 12 --dew 2 --milky-way
    """
    try:
        loc = ctx.resolve_location(location)
        now = datetime.now(timezone.utc)

        if target_name:
            target = TargetCatalog().get(target_name)
            position = ctx.get_astronomy().get_target_position(target, loc, now)
            target_alt, target_az = position.altitude, position.azimuth
            if not position.is_visible:
                ctx.renderer.print_warning(f"{target.name} is below the horizon")

        sample = ObservationSample(
            timestamp=now,
            temperature=temp,
            dew_point=dew,
            humidity=humidity,
            cloud_cover=cloud,
            wind_speed_500hpa=wind_500,
            seeing_index=seeing,
            aqi=aqi,
            aod=aod,
            sun_altitude=sun_alt,
            moon_altitude=moon_alt,
            moon_azimuth=moon_az,
            moon_illumination=moon_illum,
            target_altitude=target_alt,
            target_azimuth=target_az,
        )
        assessment = ctx.get_conditions_service().assess(sample, loc)
        ctx.renderer.render_assessment(assessment, loc)

        if milky_way or galactic_alt is not None:
            if galactic_alt is None:
                galactic_alt = ctx.get_astronomy().get_target_position(
                    GALACTIC_CENTER, loc, now
                ).altitude
            visibility = ctx.get_conditions_service().milky_way_visibility(
                sample, loc, galactic_alt
            )
            if visibility.is_visible:
                ctx.renderer.print_success(visibility.reason)
            else:
                ctx.renderer.print_warning(visibility.reason)
    except AstroQualityError as e:
        ctx.renderer.print_error(str(e))
        raise SystemExit(1)

