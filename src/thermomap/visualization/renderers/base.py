# SPDX-License-Identifier: Apache-2.0
"""Base interfaces for renderers that write self-contained bundles."""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Sequence

from thermomap.render.models import DrilldownModel, LegendModel, MapFrame, Tooltip, ZoomView
from thermomap.render.surface import RenderSurface


@dataclass(slots=True)
class RenderBundle:
    """Describes the output artifacts produced by a bundle renderer."""

    output_dir: Path
    index_html: Path
    assets: Sequence[Path] = field(default_factory=tuple)


class BundleRenderer(RenderSurface):
    """Rendering surface that remembers what it was asked to draw.

    Each ``draw_*`` call replaces the previous value; :meth:`build` then
    writes the latest state to disk.
    """

    slug: str = "bundle"
    description: str = ""

    def __init__(self, **options: Any) -> None:
        self._options: dict[str, Any] = dict(options)
        self.frame: MapFrame | None = None
        self.legend: LegendModel | None = None
        self.drilldown: DrilldownModel | None = None
        self.tooltip: Tooltip | None = None
        self.zoom: dict[str, ZoomView] = {}

    def configure(self, **options: Any) -> None:
        """Update renderer options prior to bundle generation."""

        self._options.update(options)

    def draw_map(self, frame: MapFrame) -> None:
        self.frame = frame

    def draw_legend(self, legend: LegendModel) -> None:
        self.legend = legend

    def draw_drilldown(self, chart: DrilldownModel) -> None:
        self.drilldown = chart

    def close_drilldown(self) -> None:
        self.drilldown = None
        self.zoom.pop("chart", None)

    def apply_zoom(self, view: ZoomView) -> None:
        self.zoom[view.target] = view

    def show_tooltip(self, tooltip: Tooltip | None) -> None:
        self.tooltip = tooltip

    @abstractmethod
    def build(self, *, output_dir: Path) -> RenderBundle:
        """Generate the bundle inside ``output_dir``."""

    @classmethod
    def describe(cls) -> dict[str, Any]:
        """Return metadata about the renderer for CLI help text."""

        return {"slug": cls.slug, "description": cls.description}
