"""Tests for the command line interface."""

import io
import json

import pytest
from click.testing import CliRunner
from rich.console import Console

from conftest import make_sample

from astroquality.astronomy.models import CelestialPositions, TargetPosition
from astroquality.cli.context import CliContext
from astroquality.cli.main import cli
from astroquality.display.renderer import DisplayRenderer
from astroquality.storage.config import ConfigManager

NIGHT = {"sun_altitude": -30, "moon_altitude": -10, "moon_azimuth": 90, "moon_illumination": 0}


def sample_record(timestamp: str, cloud_cover: float = 0) -> dict:
    return {
        "timestamp": timestamp,
        "temperature": 15,
        "dew_point": 5,
        "humidity": 50,
        "cloud_cover": cloud_cover,
        "seeing_index": 1,
        **NIGHT,
    }


class FakeAstronomy:
    """Stands in for the Skyfield calculator."""

    def __init__(self, positions: CelestialPositions, target_altitude: float = 30.0):
        self.positions = positions
        self.target_altitude = target_altitude

    def get_celestial_positions(self, latitude, longitude, time):
        return self.positions

    def get_target_position(self, target, location, time):
        return TargetPosition(altitude=self.target_altitude, azimuth=180.0, airmass=1.5)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def invoke(runner, tmp_path):
    def _invoke(*args):
        return runner.invoke(cli, ["--config-dir", str(tmp_path), *args])

    return _invoke


@pytest.fixture
def fake_astronomy(monkeypatch) -> FakeAstronomy:
    astronomy = FakeAstronomy(
        CelestialPositions(sun_altitude=-30, moon_altitude=-10, moon_illumination=0)
    )
    monkeypatch.setattr(CliContext, "get_astronomy", lambda self: astronomy)
    return astronomy


@pytest.fixture
def series_file(tmp_path):
    samples = [sample_record(f"2026-01-10T{hour:02d}:00:00") for hour in range(19, 24)]
    path = tmp_path / "forecast.json"
    path.write_text(json.dumps({"samples": samples}))
    return path


class TestScore:
    def test_clear_moonless_sky(self, invoke):
        result = invoke(
            "score", "--cloud", "0", "--humidity", "50", "--temp", "15", "--dew", "5",
            "--sun-alt", "-30", "--moon-alt", "-10", "--moon-illum", "0",
        )
        assert result.exit_code == 0, result.output
        assert "79 Good" in result.output
        assert "Sun: -30.0° (astronomical night)" in result.output
        assert "Moon: below horizon" in result.output

    def test_cloud_veto(self, invoke):
        result = invoke(
            "score", "--cloud", "85", "--humidity", "50", "--temp", "15", "--dew", "5",
            "--sun-alt", "-30", "--moon-alt", "-10", "--moon-illum", "0",
        )
        assert result.exit_code == 0
        assert "Cloud cover exceeds 70%" in result.output

    def test_jet_stream_reported(self, invoke):
        result = invoke(
            "score", "--cloud", "0", "--humidity", "50", "--temp", "15", "--dew", "5",
            "--sun-alt", "-30", "--moon-alt", "-10", "--moon-illum", "0", "--wind-500", "95",
        )
        assert "Very strong jet stream (95 km/h)" in result.output

    def test_milky_way_check(self, invoke):
        result = invoke(
            "score", "-l", "dong-van", "--cloud", "0", "--humidity", "50", "--temp", "15",
            "--dew", "5", "--sun-alt", "-30", "--moon-alt", "-10", "--moon-illum", "0",
            "--galactic-alt", "5",
        )
        assert result.exit_code == 0
        assert "Galactic Center is too low" in result.output

    def test_given_sun_altitude_wins_over_ephemeris(self, invoke, fake_astronomy):
        result = invoke(
            "score", "--cloud", "0", "--humidity", "50", "--temp", "15", "--dew", "5",
            "--sun-alt", "10",
        )
        assert result.exit_code == 0, result.output
        assert "Sun is above astronomical twilight" in result.output

    def test_milky_way_altitude_from_ephemeris(self, invoke, fake_astronomy):
        args = (
            "score", "-l", "dong-van", "--cloud", "0", "--humidity", "50", "--temp", "15",
            "--dew", "5", "--milky-way",
        )
        fake_astronomy.target_altitude = 5.0
        assert "Galactic Center is too low" in invoke(*args).output

        fake_astronomy.target_altitude = 40.0
        assert "Optimal conditions for Milky Way photography" in invoke(*args).output

    def test_target_below_horizon(self, invoke, fake_astronomy):
        fake_astronomy.target_altitude = -10.0
        result = invoke(
            "score", "--cloud", "0", "--humidity", "50", "--temp", "15", "--dew", "5",
            "--target", "M42",
        )
        assert result.exit_code == 0, result.output
        assert "below the horizon" in result.output

    def test_unknown_location(self, invoke):
        result = invoke(
            "score", "-l", "nowhere", "--cloud", "0", "--humidity", "50",
            "--temp", "15", "--dew", "5",
        )
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_cloud_out_of_range(self, invoke):
        result = invoke("score", "--cloud", "120", "--humidity", "50", "--temp", "15", "--dew", "5")
        assert result.exit_code == 2


class TestForecast:
    def test_samples_file(self, invoke, series_file):
        result = invoke("forecast", str(series_file), "--hourly")
        assert result.exit_code == 0, result.output
        assert "Peak score: 83" in result.output
        assert "Great sky at 20:00" in result.output

    def test_window_in_site_time(self, invoke, tmp_path):
        samples = [sample_record(f"2026-01-10T{hour}:00:00+00:00") for hour in range(12, 16)]
        path = tmp_path / "utc.json"
        path.write_text(json.dumps({"samples": samples}))

        result = invoke("forecast", str(path), "-l", "da-lat", "--hourly")

        assert result.exit_code == 0, result.output
        assert "Sat 10/01 20:00" in result.output
        assert "Start: Sat 10/01 20:00" in result.output
        assert "Great sky at 20:00" in result.output

    def test_no_window(self, invoke, tmp_path):
        samples = [sample_record(f"2026-01-10T{hour}:00:00", 90) for hour in range(19, 23)]
        path = tmp_path / "overcast.json"
        path.write_text(json.dumps({"samples": samples}))

        result = invoke("forecast", str(path))

        assert result.exit_code == 0, result.output
        assert "No good observation window in the next 72 hours" in result.output

    def test_invalid_json(self, invoke, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        result = invoke("forecast", str(path))
        assert result.exit_code == 1
        assert "Invalid JSON" in result.output

    def test_unknown_shape(self, invoke, tmp_path):
        path = tmp_path / "daily.json"
        path.write_text(json.dumps({"daily": {}}))
        result = invoke("forecast", str(path))
        assert result.exit_code == 1


class TestConfigCommands:
    def test_add_and_list(self, invoke, tmp_path):
        result = invoke(
            "config", "add", "--id", "backyard", "--name", "Backyard",
            "--lat", "21.0", "--lon", "105.8", "--sqm", "18.6",
            "--timezone", "Asia/Ho_Chi_Minh", "--default",
        )
        assert result.exit_code == 0, result.output

        config = ConfigManager(tmp_path)
        assert config.get_default_location().id == "backyard"
        assert config.get_location("backyard").is_custom

        result = invoke("config", "list")
        assert "backyard" in result.output

    def test_add_invalid_timezone(self, invoke):
        result = invoke(
            "config", "add", "--id", "x", "--name", "X", "--lat", "0", "--lon", "0",
            "--timezone", "Mars/Olympus",
        )
        assert result.exit_code == 1

    def test_remove_unknown(self, invoke):
        assert invoke("config", "remove", "nowhere").exit_code == 1

    def test_default(self, invoke, tmp_path):
        assert invoke("config", "default", "sapa").exit_code == 0
        assert ConfigManager(tmp_path).get_default_location().id == "sapa"
        assert invoke("config", "default", "nowhere").exit_code == 1

    def test_aod_override(self, invoke, tmp_path):
        invoke("config", "aod", "0.4")
        assert ConfigManager(tmp_path).aod_override == 0.4

        invoke("config", "aod")
        assert ConfigManager(tmp_path).aod_override is None

    def test_weights_warning(self, invoke):
        result = invoke("config", "weights", "--cloud", "50")
        assert result.exit_code == 0
        assert "not 100%" in result.output


class TestRenderer:
    @pytest.fixture
    def output(self) -> io.StringIO:
        return io.StringIO()

    @pytest.fixture
    def renderer(self, output) -> DisplayRenderer:
        return DisplayRenderer(Console(file=output, width=120))

    def test_no_window_uses_horizon(self, renderer, output):
        renderer.render_best_window(None, horizon_hours=24)
        assert "next 24 hours" in output.getvalue()

    def test_assessment_details(self, renderer, output, conditions, dark_site, evening):
        sample = make_sample(
            evening,
            cloud_cover=20,
            cloud_cover_low=5,
            cloud_cover_high=15,
            transparency_index=3,
            moon_altitude=25.0,
            moon_illumination=0.45,
        )
        renderer.render_assessment(conditions.assess(sample, dark_site), dark_site)

        text = output.getvalue()
        assert "Cloud cover: 20% (low/mid/high 5/-/15)" in text
        assert "Transparency index: 3/8" in text
        assert "Moon: 25° up, 45% lit" in text

    def test_timeline_cloud_layers(self, renderer, output, conditions, dark_site, evening):
        sample = make_sample(
            evening, cloud_cover=30, cloud_cover_low=10, cloud_cover_mid=20, cloud_cover_high=0
        )
        renderer.render_timeline([conditions.assess(sample, dark_site)])
        assert "10/20/0" in output.getvalue()
