# SPDX-License-Identifier: Apache-2.0
"""Contract between the render coordinator and whatever actually draws."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .models import DrilldownModel, LegendModel, MapFrame, Tooltip, ZoomView


class RenderSurface(ABC):
    """Draws presentation values; never computes them.

    Implementations own geometry, projection and widgets. They receive
    country-keyed fills, legend stops and drill-down series, and apply
    pan/zoom independently to the map and the chart.
    """

    @abstractmethod
    def draw_map(self, frame: MapFrame) -> None:
        """Update polygon fills for the current year and mode."""

    @abstractmethod
    def draw_legend(self, legend: LegendModel) -> None:
        """Draw the gradient bar and its axis."""

    @abstractmethod
    def draw_drilldown(self, chart: DrilldownModel) -> None:
        """Open (or refresh) the per-country chart."""

    @abstractmethod
    def close_drilldown(self) -> None:
        """Dismiss the per-country chart."""

    def apply_zoom(self, view: ZoomView) -> None:  # noqa: B027 - optional hook
        """Apply a map or chart zoom; surfaces without zoom ignore it."""

    def show_tooltip(self, tooltip: Tooltip | None) -> None:  # noqa: B027
        """Show ``tooltip`` or hide it when ``None``."""


class NullSurface(RenderSurface):
    """Surface that discards everything (headless sessions)."""

    def draw_map(self, frame: MapFrame) -> None:
        pass

    def draw_legend(self, legend: LegendModel) -> None:
        pass

    def draw_drilldown(self, chart: DrilldownModel) -> None:
        pass

    def close_drilldown(self) -> None:
        pass
