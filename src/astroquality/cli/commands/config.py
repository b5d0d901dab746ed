"""Configuration command."""

import click
from pydantic import ValidationError
from rich.table import Table

from astroquality.astronomy.models import Location
from astroquality.cli.context import CliContext
from astroquality.core.exceptions import ConfigError
from astroquality.scoring.models import ScoreWeights


pass_context = click.make_pass_decorator(CliContext)


@click.group()
def config() -> None:
    """Manage locations and settings."""
    pass


@config.command("add")
@click.option("--id", "location_id", type=str, required=True, help="Location id (slug)")
@click.option("--name", type=str, required=True, help="Display name")
@click.option("--lat", type=float, required=True, help="Latitude in degrees")
@click.option("--lon", type=float, required=True, help="Longitude in degrees")
@click.option("--sqm", type=float, default=20.0, show_default=True, help="Baseline sky brightness")
@click.option("--elevation", type=float, default=0, help="Elevation in meters")
@click.option("--timezone", type=str, default="UTC", help="Timezone name")
@click.option("--default/--no-default", "set_default", default=False, help="Make it the default")
@pass_context
def add_location(
    ctx: CliContext,
    location_id: str,
    name: str,
    lat: float,
    lon: float,
    sqm: float,
    elevation: float,
    timezone: str,
    set_default: bool,
) -> None:
    """Add a custom observing site.

    Example: astroquality config add --id home --name "Backyard" --lat 21.0 --lon 105.8 --sqm 18.6
    """
    try:
        location = Location(
            id=location_id,
            name=name,
            latitude=lat,
            longitude=lon,
            base_sqm=sqm,
            elevation=elevation,
            timezone=timezone,
            is_custom=True,
        )
        ctx.config.add_location(location, set_default=set_default)
    except (ValidationError, ConfigError) as e:
        ctx.renderer.print_error(f"Failed to save location: {e}")
        raise SystemExit(1)

    ctx.renderer.print_success(f"Location '{location_id}' saved at ({lat:.4f}, {lon:.4f})")


@config.command("list")
@pass_context
def list_locations(ctx: CliContext) -> None:
    """List all saved locations."""
    locations = ctx.config.get_all_locations()
    default_loc = ctx.config.get_default_location()

    if not locations:
        ctx.renderer.print_warning("No locations saved.")
        return

    table = Table(title="Saved Locations")
    table.add_column("Id", style="cyan")
    table.add_column("Name")
    table.add_column("Latitude", justify="right")
    table.add_column("Longitude", justify="right")
    table.add_column("SQM", justify="right")
    table.add_column("Bortle", justify="right")
    table.add_column("Default", justify="center")

    for location_id, loc in locations.items():
        is_default = default_loc is not None and default_loc.id == location_id
        table.add_row(
            location_id,
            loc.name + (" *" if loc.is_custom else ""),
            f"{loc.latitude:.4f}",
            f"{loc.longitude:.4f}",
            f"{loc.base_sqm:.1f}",
            str(loc.bortle_class),
            "✓" if is_default else "",
        )

    ctx.console.print(table)


@config.command("remove")
@click.argument("location_id")
@pass_context
def remove_location(ctx: CliContext, location_id: str) -> None:
    """Remove a saved location."""
    if ctx.config.remove_location(location_id):
        ctx.renderer.print_success(f"Location '{location_id}' removed")
    else:
        ctx.renderer.print_error(f"Location '{location_id}' not found")
        raise SystemExit(1)


@config.command("default")
@click.argument("location_id")
@pass_context
def set_default(ctx: CliContext, location_id: str) -> None:
    """Set the default location."""
    try:
        ctx.config.set_default_location(location_id)
    except ConfigError as e:
        ctx.renderer.print_error(str(e))
        raise SystemExit(1)
    ctx.renderer.print_success(f"Default location set to '{location_id}'")


@config.command("aod")
@click.argument("value", type=float, required=False)
@pass_context
def set_aod(ctx: CliContext, value: float | None) -> None:
    """Set a manual AOD override, or clear it when no value is given."""
    if value is None or value < 0:
        ctx.config.set_setting("aod_override", None)
        ctx.renderer.print_success("AOD override cleared")
    else:
        ctx.config.set_setting("aod_override", value)
        ctx.renderer.print_success(f"AOD override set to {value:.3f}")


@config.command("weights")
@click.option("--cloud", type=float, help="Cloud weight %")
@click.option("--transparency", type=float, help="Transparency weight %")
@click.option("--sqm", type=float, help="Sky darkness weight %")
@click.option("--seeing", type=float, help="Seeing weight %")
@click.option("--dew-point", type=float, help="Dew-point margin weight %")
@pass_context
def weights(
    ctx: CliContext,
    cloud: float | None,
    transparency: float | None,
    sqm: float | None,
    seeing: float | None,
    dew_point: float | None,
) -> None:
    """Show or update the score weight percentages."""
    updates = {
        key: value
        for key, value in {
            "cloud": cloud,
            "transparency": transparency,
            "sqm": sqm,
            "seeing": seeing,
            "dew_point": dew_point,
        }.items()
        if value is not None
    }

    current = ctx.config.weights
    if updates:
        try:
            current = ScoreWeights(**{**current.model_dump(), **updates})
        except ValidationError as e:
            ctx.renderer.print_error(f"Invalid weights: {e}")
            raise SystemExit(1)
        ctx.config.set_weights(current)

    table = Table(title="Score Weights")
    table.add_column("Factor", style="cyan")
    table.add_column("Weight", justify="right")
    for key, value in current.model_dump().items():
        table.add_row(key, f"{value:.0f}%")
    ctx.console.print(table)

    if not current.is_balanced:
        ctx.renderer.print_warning(f"Weights add up to {current.total:.0f}%, not 100%")
