# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from thermomap.render.surface import RenderSurface


def project_root(start: Path | None = None) -> Path:
    """Return the repository root by walking up to find pyproject.toml."""
    here = (start or Path(__file__)).resolve()
    for anc in [here, *here.parents]:
        if (anc / "pyproject.toml").exists():
            return anc
    return here.parents[-1] if here.parents else here


# year, iso_num, country, avg_temp_absolute, avg_temp_change (CSV-style strings)
SAMPLE_ROWS: list[dict[str, Any]] = [
    {"year": "1850", "iso_num": "4", "country": "Afghanistan", "avg_temp_absolute": "14.2", "avg_temp_change": ""},
    {"year": "1900", "iso_num": "4", "country": "Afghanistan", "avg_temp_absolute": "14.6", "avg_temp_change": "2.8"},
    {"year": "2014", "iso_num": "4", "country": "Afghanistan", "avg_temp_absolute": "15.1", "avg_temp_change": "3.4"},
    {"year": "1850", "iso_num": "250", "country": "France", "avg_temp_absolute": "10.5", "avg_temp_change": "-1.0"},
    {"year": "1900", "iso_num": "250", "country": "France", "avg_temp_absolute": "10.9", "avg_temp_change": "3.8"},
    {"year": "2014", "iso_num": "250", "country": "France", "avg_temp_absolute": "12.3", "avg_temp_change": "12.8"},
    {"year": "1850", "iso_num": "840", "country": "United States", "avg_temp_absolute": "", "avg_temp_change": ""},
    {"year": "1900", "iso_num": "840", "country": "United States", "avg_temp_absolute": "8.1", "avg_temp_change": "-4.2"},
    {"year": "2014", "iso_num": "840", "country": "United States", "avg_temp_absolute": "9.0", "avg_temp_change": "11.1"},
    {"year": "2014", "iso_num": "10", "country": "Antarctica", "avg_temp_absolute": "", "avg_temp_change": ""},
    {"year": "n/a", "iso_num": "250", "country": "France", "avg_temp_absolute": "11.0", "avg_temp_change": ""},
]

CSV_HEADER = "year,iso_num,country,avg_temp_absolute,avg_temp_change"


def sample_csv() -> str:
    lines = [CSV_HEADER]
    for row in SAMPLE_ROWS:
        lines.append(
            ",".join(
                row[k]
                for k in ("year", "iso_num", "country", "avg_temp_absolute", "avg_temp_change")
            )
        )
    return "\n".join(lines) + "\n"


def sample_topology() -> dict[str, Any]:
    """World-atlas shaped topology; arcs are irrelevant to the core."""
    return {
        "type": "Topology",
        "arcs": [],
        "objects": {
            "countries": {
                "type": "GeometryCollection",
                "geometries": [
                    {"type": "Polygon", "id": "004", "arcs": [], "properties": {"name": "Afghanistan"}},
                    {"type": "Polygon", "id": "250", "arcs": [], "properties": {"name": "France"}},
                    {"type": "Polygon", "id": "840", "arcs": [], "properties": {"name": "United States of America"}},
                    {"type": "Polygon", "id": "010", "arcs": [], "properties": {"name": "Antarctica"}},
                    {"type": "Polygon", "id": "-99", "arcs": [], "properties": {"name": "N. Cyprus"}},
                ],
            }
        },
    }


def write_sample_feeds(directory: Path) -> tuple[Path, Path]:
    csv_path = directory / "temps.csv"
    geo_path = directory / "countries.json"
    csv_path.write_text(sample_csv(), encoding="utf-8")
    geo_path.write_text(json.dumps(sample_topology()), encoding="utf-8")
    return csv_path, geo_path


class RecordingSurface(RenderSurface):
    """Surface double that records every call in order."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []

    def draw_map(self, frame):
        self.calls.append(("draw_map", frame))

    def draw_legend(self, legend):
        self.calls.append(("draw_legend", legend))

    def draw_drilldown(self, chart):
        self.calls.append(("draw_drilldown", chart))

    def close_drilldown(self):
        self.calls.append(("close_drilldown", None))

    def apply_zoom(self, view):
        self.calls.append(("apply_zoom", view))

    def show_tooltip(self, tooltip):
        self.calls.append(("show_tooltip", tooltip))

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def last(self, name: str) -> Any:
        for call, payload in reversed(self.calls):
            if call == name:
                return payload
        raise AssertionError(f"{name} was never called")

    def reset(self) -> None:
        self.calls.clear()
