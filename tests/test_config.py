"""Tests for the TOML configuration store."""

import pytest

from astroquality.astronomy.models import Location
from astroquality.core.exceptions import ConfigError
from astroquality.scoring.models import ScoreWeights
from astroquality.storage.config import PRESET_LOCATIONS, ConfigManager


@pytest.fixture
def config(tmp_path) -> ConfigManager:
    return ConfigManager(tmp_path)


@pytest.fixture
def backyard() -> Location:
    return Location(
        id="backyard",
        name="Backyard",
        latitude=21.0,
        longitude=105.8,
        base_sqm=18.6,
        timezone="Asia/Ho_Chi_Minh",
        is_custom=True,
    )


class TestDefaults:
    def test_creates_file(self, tmp_path, config):
        assert (tmp_path / "config.toml").exists()

    def test_presets_loaded(self, config):
        locations = config.get_all_locations()
        assert list(locations) == [loc.id for loc in PRESET_LOCATIONS]
        assert config.get_default_location().id == "binh-minh"
        assert config.get_location("da-lat").base_sqm == 20.8

    def test_default_settings(self, config):
        assert config.alert_threshold == 80
        assert config.low_confidence_threshold == 25.0
        assert config.aod_override is None
        assert config.weights == ScoreWeights()


class TestSettings:
    def test_persisted(self, tmp_path, config):
        config.set_setting("aod_override", 0.35)
        assert ConfigManager(tmp_path).aod_override == 0.35

    def test_none_removes(self, config):
        config.set_setting("aod_override", 0.35)
        config.set_setting("aod_override", None)
        assert config.aod_override is None

    def test_weights_roundtrip(self, tmp_path, config):
        config.set_weights(ScoreWeights(cloud=40, seeing=10))
        weights = ConfigManager(tmp_path).weights
        assert weights.cloud == 40
        assert weights.is_balanced

    def test_invalid_weights(self, config):
        config.set_setting("weights", {"cloud": -5})
        with pytest.raises(ConfigError):
            config.weights

    def test_corrupt_file(self, tmp_path):
        (tmp_path / "config.toml").write_text("not = [valid")
        with pytest.raises(ConfigError):
            ConfigManager(tmp_path)


class TestLocations:
    def test_add_and_get(self, tmp_path, config, backyard):
        config.add_location(backyard)

        stored = ConfigManager(tmp_path).get_location("backyard")
        assert stored == backyard
        assert config.get_default_location().id == "binh-minh"

    def test_add_as_default(self, config, backyard):
        config.add_location(backyard, set_default=True)
        assert config.get_default_location().id == "backyard"

    def test_unknown_location(self, config):
        assert config.get_location("nowhere") is None

    def test_set_default_unknown(self, config):
        with pytest.raises(ConfigError):
            config.set_default_location("nowhere")

    def test_remove_reassigns_default(self, config):
        assert config.remove_location("binh-minh")
        assert config.get_default_location().id == "cao-dai"
        assert not config.remove_location("binh-minh")

    def test_remove_all(self, config):
        for location_id in list(config.get_all_locations()):
            config.remove_location(location_id)
        assert config.get_default_location() is None

    def test_invalid_stored_location(self, config):
        config._config["locations"]["broken"] = {"name": "Broken", "latitude": 200, "longitude": 0}
        with pytest.raises(ConfigError):
            config.get_location("broken")
