# SPDX-License-Identifier: Apache-2.0
from pathlib import Path

from thermomap.config import Layout, load_config_file, load_settings
from thermomap.data.loaders import WORLD_ATLAS_URL
from thermomap.processing.smoothing import CHART_TUNING, MAP_TUNING, Tuning


def _write_config(tmp_path, text: str) -> Path:
    path = tmp_path / "thermomap.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults():
    settings = load_settings()
    assert settings.data_source is None
    assert settings.geo_source == WORLD_ATLAS_URL
    assert settings.state_file == Path("~/.thermomap/state.json")
    assert settings.http_timeout == 30.0
    assert settings.map_tuning == MAP_TUNING
    assert settings.chart_tuning == CHART_TUNING
    assert settings.fields.country_code == "iso_num"


def test_layout_geometry():
    layout = Layout()
    assert layout.projection_translate == (480.0, 400.0)
    assert layout.chart_x_range == (50.0, 530.0)
    assert layout.chart_y_range == (240.0, 20.0)


def test_yaml_file_from_env(tmp_path, monkeypatch):
    cfg = _write_config(
        tmp_path,
        """
data: temps.csv
http_timeout: 5
fields:
  year: Year
  bogus: ignored
layout:
  map_width: 800
  chart_margin: [10, 10, 10, 10]
smoothing:
  chart:
    process_noise: 0.2
""",
    )
    monkeypatch.setenv("THERMOMAP_CONFIG", str(cfg))
    settings = load_settings()
    assert settings.data_source == "temps.csv"
    assert settings.http_timeout == 5.0
    assert settings.fields.year == "Year"
    assert settings.layout.map_width == 800
    assert settings.layout.chart_margin == (10, 10, 10, 10)
    assert settings.chart_tuning == Tuning(0.2, 0.5)
    assert settings.map_tuning == MAP_TUNING


def test_precedence_override_env_file(tmp_path, monkeypatch):
    cfg = _write_config(tmp_path, "data: from-file.csv\ngeo: from-file.json\n")
    monkeypatch.setenv("THERMOMAP_DATA", "from-env.csv")
    settings = load_settings(cfg)
    assert settings.data_source == "from-env.csv"
    assert settings.geo_source == "from-file.json"
    settings = load_settings(cfg, data_source="from-flag.csv", geo_source=None)
    assert settings.data_source == "from-flag.csv"
    assert settings.geo_source == "from-file.json"


def test_state_file_override_becomes_path(tmp_path):
    settings = load_settings(state_file=str(tmp_path / "s.json"))
    assert settings.state_file == tmp_path / "s.json"


def test_default_config_location(tmp_path):
    home = tmp_path / "home"
    home.mkdir()
    (home / ".thermomap.yaml").write_text("data: home.csv\n", encoding="utf-8")
    assert load_settings().data_source == "home.csv"


def test_unreadable_or_odd_config_is_ignored(tmp_path):
    assert load_config_file(tmp_path / "missing.yaml") == {}
    assert load_config_file(_write_config(tmp_path, "key: [unclosed\n")) == {}
    assert load_config_file(_write_config(tmp_path, "- a\n- b\n")) == {}


def test_non_numeric_timeout_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("THERMOMAP_HTTP_TIMEOUT", "soon")
    assert load_settings().http_timeout == 30.0


def test_non_numeric_smoothing_keeps_default_tuning(tmp_path, monkeypatch):
    cfg = _write_config(
        tmp_path,
        """
http_timeout: [1, 2]
smoothing:
  chart:
    process_noise: fast
    measurement_noise: 0.7
  map:
    measurement_noise: null
""",
    )
    monkeypatch.setenv("THERMOMAP_CONFIG", str(cfg))
    settings = load_settings()
    assert settings.http_timeout == 30.0
    assert settings.chart_tuning == Tuning(CHART_TUNING.process_noise, 0.7)
    assert settings.map_tuning == MAP_TUNING
