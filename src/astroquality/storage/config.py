"""Configuration management using TOML."""

import sys
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import tomli_w
from pydantic import ValidationError

from astroquality.astronomy.models import Location
from astroquality.core.exceptions import ConfigError
from astroquality.scoring.models import ScoreWeights

PRESET_LOCATIONS: list[Location] = [
    Location(id="binh-minh", name="Binh Minh, Ha Noi", local_name="Bình Minh, Thanh Oai",
             latitude=20.866, longitude=105.783, base_sqm=19.5, elevation=15,
             timezone="Asia/Ho_Chi_Minh"),
    Location(id="cao-dai", name="Cao Dai, Vinh Phuc", local_name="Cao Đại, Vĩnh Tường",
             latitude=21.216, longitude=105.483, base_sqm=20.2, elevation=12,
             timezone="Asia/Ho_Chi_Minh"),
    Location(id="dong-van", name="Dong Van, Ha Giang", local_name="Đồng Văn, Hà Giang",
             latitude=23.272, longitude=105.363, base_sqm=21.6, elevation=1000,
             timezone="Asia/Ho_Chi_Minh"),
    Location(id="sapa", name="Sa Pa, Lao Cai", local_name="Sa Pa, Lào Cai",
             latitude=22.336, longitude=103.844, base_sqm=21.2, elevation=1600,
             timezone="Asia/Ho_Chi_Minh"),
    Location(id="da-lat", name="Da Lat, Lam Dong", local_name="Đà Lạt, Lâm Đồng",
             latitude=11.942, longitude=108.458, base_sqm=20.8, elevation=1500,
             timezone="Asia/Ho_Chi_Minh"),
    Location(id="ha-long", name="Ha Long, Quang Ninh", local_name="Hạ Long, Quảng Ninh",
             latitude=20.959, longitude=107.044, base_sqm=19.0, elevation=5,
             timezone="Asia/Ho_Chi_Minh"),
    Location(id="mui-ne", name="Mui Ne, Binh Thuan", local_name="Mũi Né, Bình Thuận",
             latitude=10.933, longitude=108.287, base_sqm=20.4, elevation=5,
             timezone="Asia/Ho_Chi_Minh"),
    Location(id="pu-luong", name="Pu Luong, Thanh Hoa", local_name="Pù Luông, Thanh Hóa",
             latitude=20.428, longitude=104.986, base_sqm=21.0, elevation=1000,
             timezone="Asia/Ho_Chi_Minh"),
]


class ConfigManager:
    """Manages user configuration stored in ~/.astroquality/."""

    DEFAULT_DIR = Path.home() / ".astroquality"
    CONFIG_FILENAME = "config.toml"

    def __init__(self, config_dir: Path | None = None):
        """Initialize config manager.

        Args:
            config_dir: Custom config directory (default: ~/.astroquality/)
        """
        self.config_dir = config_dir or self.DEFAULT_DIR
        self.config_file = self.config_dir / self.CONFIG_FILENAME
        self._config: dict[str, Any] = {}
        self._ensure_config_exists()
        self._load_config()

    def _ensure_config_exists(self) -> None:
        """Create config directory and default config if needed."""
        self.config_dir.mkdir(parents=True, exist_ok=True)

        if not self.config_file.exists():
            default_config = {
                "settings": {
                    "alert_threshold": 80,
                    "low_confidence_threshold": 25.0,
                    "weights": ScoreWeights().model_dump(),
                },
                "default_location": PRESET_LOCATIONS[0].id,
                "locations": {
                    loc.id: self._location_to_dict(loc) for loc in PRESET_LOCATIONS
                },
            }
            self._write_config(default_config)

    def _load_config(self) -> None:
        """Load configuration from file."""
        try:
            with open(self.config_file, "rb") as f:
                self._config = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigError(f"Failed to load config: {e}") from e

    def _write_config(self, config: dict[str, Any] | None = None) -> None:
        """Write configuration to file."""
        if config is not None:
            self._config = config
        try:
            with open(self.config_file, "wb") as f:
                tomli_w.dump(self._config, f)
        except (OSError, TypeError) as e:
            raise ConfigError(f"Failed to write config: {e}") from e

    def _save(self) -> None:
        """Save current config to file."""
        self._write_config()

    @staticmethod
    def _location_to_dict(location: Location) -> dict[str, Any]:
        # TOML has no null; drop unset optional fields
        return location.model_dump(exclude={"id"}, exclude_none=True)

    # Settings
    def get_setting(self, key: str, default: Any = None) -> Any:
        """Get a setting value."""
        return self._config.get("settings", {}).get(key, default)

    def set_setting(self, key: str, value: Any) -> None:
        """Set a setting value. ``None`` removes the key."""
        settings = self._config.setdefault("settings", {})
        if value is None:
            settings.pop(key, None)
        else:
            settings[key] = value
        self._save()

    @property
    def alert_threshold(self) -> int:
        """Minimum window peak score worth a notification."""
        return self.get_setting("alert_threshold", 80)

    @property
    def low_confidence_threshold(self) -> float:
        """Sigma percentage above which a forecast is flagged as uncertain."""
        return self.get_setting("low_confidence_threshold", 25.0)

    @property
    def aod_override(self) -> float | None:
        """Manually configured aerosol optical depth, if any."""
        value = self.get_setting("aod_override")
        return float(value) if value is not None else None

    @property
    def weights(self) -> ScoreWeights:
        """Configured score weights (display and validation only)."""
        try:
            return ScoreWeights(**self.get_setting("weights", {}))
        except ValidationError as e:
            raise ConfigError(f"Invalid score weights: {e}") from e

    def set_weights(self, weights: ScoreWeights) -> None:
        self.set_setting("weights", weights.model_dump())

    # Locations
    def get_default_location(self) -> Location | None:
        """Get the default location."""
        default_id = self._config.get("default_location")
        if default_id and default_id in self._config.get("locations", {}):
            return self.get_location(default_id)
        # Return first location if no default set
        locations = self._config.get("locations", {})
        if locations:
            return self.get_location(next(iter(locations)))
        return None

    def set_default_location(self, location_id: str) -> None:
        """Set the default location by id."""
        if location_id not in self._config.get("locations", {}):
            raise ConfigError(f"Location '{location_id}' not found")
        self._config["default_location"] = location_id
        self._save()

    def get_location(self, location_id: str) -> Location | None:
        """Get a location by id."""
        locations = self._config.get("locations", {})
        if location_id not in locations:
            return None
        try:
            return Location(id=location_id, **locations[location_id])
        except ValidationError as e:
            raise ConfigError(f"Invalid location '{location_id}': {e}") from e

    def get_all_locations(self) -> dict[str, Location]:
        """Get all saved locations."""
        result = {}
        for location_id in self._config.get("locations", {}):
            loc = self.get_location(location_id)
            if loc:
                result[location_id] = loc
        return result

    def add_location(self, location: Location, set_default: bool = False) -> Location:
        """Add or replace a location.

        Args:
            location: Location to store
            set_default: Whether to set this as the default location

        Returns:
            The stored Location
        """
        self._config.setdefault("locations", {})[location.id] = self._location_to_dict(location)

        if set_default or not self._config.get("default_location"):
            self._config["default_location"] = location.id

        self._save()
        return location

    def remove_location(self, location_id: str) -> bool:
        """Remove a location by id.

        Returns:
            True if location was removed, False if it didn't exist
        """
        if location_id not in self._config.get("locations", {}):
            return False

        del self._config["locations"][location_id]

        # Clear default if it was the removed location
        if self._config.get("default_location") == location_id:
            locations = self._config.get("locations", {})
            if locations:
                self._config["default_location"] = next(iter(locations))
            else:
                self._config.pop("default_location", None)

        self._save()
        return True

    @property
    def data_dir(self) -> Path:
        """Get the data directory for ephemeris files."""
        data_dir = self.config_dir / "data"
        data_dir.mkdir(exist_ok=True)
        return data_dir
