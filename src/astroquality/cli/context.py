"""CLI context management."""

from dataclasses import dataclass
from pathlib import Path

from rich.console import Console

from astroquality.astronomy.calculator import AstronomyCalculator
from astroquality.astronomy.models import Location
from astroquality.display.renderer import DisplayRenderer
from astroquality.services.conditions import ConditionsService
from astroquality.services.forecast import ForecastAggregator
from astroquality.storage.config import ConfigManager


@dataclass
class CliContext:
    """Context object passed to all CLI commands."""

    config: ConfigManager
    console: Console
    renderer: DisplayRenderer
    verbose: bool = False

    # Lazily initialized services
    _astronomy: AstronomyCalculator | None = None
    _conditions: ConditionsService | None = None

    @classmethod
    def create(
        cls,
        config_dir: Path | None = None,
        verbose: bool = False,
    ) -> "CliContext":
        """Create a new CLI context.

        Args:
            config_dir: Custom config directory
            verbose: Enable verbose output

        Returns:
            Initialized CliContext
        """
        config = ConfigManager(config_dir)
        console = Console()
        renderer = DisplayRenderer(console)

        return cls(
            config=config,
            console=console,
            renderer=renderer,
            verbose=verbose,
        )

    def get_astronomy(self) -> AstronomyCalculator:
        """Get or create the Skyfield calculator."""
        if self._astronomy is None:
            self._astronomy = AstronomyCalculator(self.config.data_dir)
        return self._astronomy

    def get_conditions_service(self) -> ConditionsService:
        """Get or create conditions service."""
        if self._conditions is None:
            self._conditions = ConditionsService(
                ephemeris=self.get_astronomy(),
                aod_override=self.config.aod_override,
            )
        return self._conditions

    def get_aggregator(self) -> ForecastAggregator:
        """Create a forecast aggregator."""
        return ForecastAggregator(self.get_conditions_service())

    def resolve_location(self, location_id: str | None) -> Location:
        """Get a saved location, or the default one when no id is given.

        Prints an error and exits when nothing matches.
        """
        if location_id:
            loc = self.config.get_location(location_id)
            if not loc:
                self.renderer.print_error(f"Location '{location_id}' not found")
                raise SystemExit(1)
            return loc

        loc = self.config.get_default_location()
        if not loc:
            self.renderer.print_error(
                "No default location set. Use 'astroquality config add' first."
            )
            raise SystemExit(1)
        return loc
