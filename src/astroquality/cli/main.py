"""Main CLI entry point."""

import logging
from pathlib import Path

import click
from rich.console import Console

from astroquality import __version__
from astroquality.cli.context import CliContext
from astroquality.core.exceptions import AstroQualityError


@click.group()
@click.option(
    "--config-dir",
    type=click.Path(path_type=Path),
    help="Custom configuration directory",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Enable verbose output",
)
@click.version_option(version=__version__, prog_name="astroquality")
@click.pass_context
def cli(ctx: click.Context, config_dir: Path | None, verbose: bool) -> None:
    """Astroquality - observability scoring for astrophotography.

    Turns weather and sky inputs into a 0-100 quality score, the best
    observation window and a 7-day outlook.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    ctx.obj = CliContext.create(config_dir=config_dir, verbose=verbose)


# Import and register commands
from astroquality.cli.commands import config, forecast, score

cli.add_command(config.config)
cli.add_command(score.score)
cli.add_command(forecast.forecast)


def main() -> None:
    """Main entry point."""
    try:
        cli()
    except AstroQualityError as e:
        console = Console()
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)
    except KeyboardInterrupt:
        raise SystemExit(0)


if __name__ == "__main__":
    main()
