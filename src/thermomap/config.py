# SPDX-License-Identifier: Apache-2.0
"""Runtime settings: defaults, ``~/.thermomap.yaml`` and environment overrides.

Precedence, highest first: explicit keyword overrides, ``THERMOMAP_*``
environment variables, the YAML file (``THERMOMAP_CONFIG`` or
``~/.thermomap.yaml``), built-in defaults.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

import yaml

from thermomap.data.loaders import WORLD_ATLAS_URL
from thermomap.data.records import DEFAULT_FIELDS, FieldMap
from thermomap.processing.smoothing import CHART_TUNING, MAP_TUNING, Tuning
from thermomap.state.persistence import DEFAULT_STATE_FILE

LOGGER = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = Path("~/.thermomap.yaml")


@dataclass(frozen=True)
class Layout:
    """Pixel geometry of the map, legend and drill-down chart."""

    map_width: int = 960
    map_height: int = 600
    projection_scale: float = 140.0
    legend_width: int = 300
    legend_height: int = 20
    legend_ticks: int = 5
    legend_stops: int = 10
    chart_width: int = 560
    chart_height: int = 280
    chart_margin: tuple[int, int, int, int] = (20, 30, 40, 50)
    temperature_padding: float = 1.0

    @property
    def projection_translate(self) -> tuple[float, float]:
        return self.map_width / 2, self.map_height / 1.5

    @property
    def chart_x_range(self) -> tuple[float, float]:
        _top, right, _bottom, left = self.chart_margin
        return float(left), float(self.chart_width - right)

    @property
    def chart_y_range(self) -> tuple[float, float]:
        top, _right, bottom, _left = self.chart_margin
        # SVG y grows downward; higher temperatures sit nearer the top.
        return float(self.chart_height - bottom), float(top)


@dataclass(frozen=True)
class Settings:
    data_source: str | None = None
    geo_source: str | None = WORLD_ATLAS_URL
    state_file: Path = DEFAULT_STATE_FILE
    http_timeout: float = 30.0
    fields: FieldMap = DEFAULT_FIELDS
    layout: Layout = field(default_factory=Layout)
    map_tuning: Tuning = MAP_TUNING
    chart_tuning: Tuning = CHART_TUNING


def load_config_file(path: str | Path | None = None) -> dict[str, Any]:
    """Return the YAML config as a dict; empty when missing or unreadable."""

    cfg_path = Path(
        path or os.environ.get("THERMOMAP_CONFIG") or DEFAULT_CONFIG_FILE
    ).expanduser()
    if not cfg_path.exists():
        return {}
    try:
        with cfg_path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
    except (OSError, yaml.YAMLError) as exc:
        LOGGER.warning("Ignoring config file %s: %s", cfg_path, exc)
        return {}
    if not isinstance(data, dict):
        return {}
    return {str(k): v for k, v in data.items()}


def _known(cls: type, data: Any) -> dict[str, Any]:
    if not isinstance(data, dict):
        return {}
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in data.items() if k in names}


def _number(name: str, value: Any, default: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        LOGGER.warning("Ignoring non-numeric %s %r; using %s", name, value, default)
        return default


def _tuning(base: Tuning, data: Any) -> Tuning:
    values = {
        k: _number(f"smoothing {k}", v, getattr(base, k))
        for k, v in _known(Tuning, data).items()
    }
    return replace(base, **values)


def _layout(data: Any) -> Layout:
    values = _known(Layout, data)
    if "chart_margin" in values:
        values["chart_margin"] = tuple(int(v) for v in values["chart_margin"])
    return Layout(**values)


def load_settings(config_path: str | Path | None = None, **overrides: Any) -> Settings:
    cfg = load_config_file(config_path)
    env = os.environ
    smoothing = cfg.get("smoothing") if isinstance(cfg.get("smoothing"), dict) else {}

    values: dict[str, Any] = {
        "data_source": env.get("THERMOMAP_DATA") or cfg.get("data"),
        "geo_source": env.get("THERMOMAP_GEO") or cfg.get("geo") or WORLD_ATLAS_URL,
        "state_file": Path(
            env.get("THERMOMAP_STATE_FILE") or cfg.get("state_file") or DEFAULT_STATE_FILE
        ),
        "http_timeout": _number(
            "http_timeout",
            env.get("THERMOMAP_HTTP_TIMEOUT") or cfg.get("http_timeout") or 30.0,
            30.0,
        ),
        "fields": FieldMap(**_known(FieldMap, cfg.get("fields"))),
        "layout": _layout(cfg.get("layout")),
        "map_tuning": _tuning(MAP_TUNING, smoothing.get("map")),
        "chart_tuning": _tuning(CHART_TUNING, smoothing.get("chart")),
    }
    values.update({k: v for k, v in overrides.items() if v is not None})
    if not isinstance(values["state_file"], Path):
        values["state_file"] = Path(values["state_file"])
    return Settings(**values)
