# SPDX-License-Identifier: Apache-2.0
"""Turns the data index, scales and view state into presentation values.

The coordinator subscribes to :class:`~thermomap.state.ViewState` and
recomputes exactly what a change affects before the setter returns:

* year  -> map fills (and the open tooltip)
* mode  -> map fills and legend
* map / chart transform -> the matching zoom view
* selection -> drill-down open or close

Map zoom and chart zoom are independent and never touch each other.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable

from thermomap.config import Layout
from thermomap.data.index import DataIndex
from thermomap.data.loaders import GeoFeed
from thermomap.data.records import Mode
from thermomap.processing.smoothing import (
    CHART_TUNING,
    MAP_TUNING,
    KalmanSmoother,
    SmoothedPoint,
    Tuning,
)
from thermomap.state.transform import (
    IDENTITY,
    ZoomTarget,
    ZoomTransform,
    clamp_transform,
)
from thermomap.state.view_state import ViewState
from thermomap.visualization.axes import (
    LEGEND_TITLES,
    LinearScale,
    format_change,
    nice_ticks,
    tick_formatter,
)
from thermomap.visualization.scales import ScaleModel

from .models import (
    DrilldownModel,
    LegendModel,
    LegendTick,
    MapFrame,
    Tooltip,
    ZoomView,
)
from .surface import NullSurface, RenderSurface

LOGGER = logging.getLogger(__name__)


def rescale(scale: LinearScale, transform: ZoomTransform, axis: str) -> LinearScale:
    """Return ``scale`` with its domain narrowed to what ``transform`` shows."""

    invert = transform.invert_x if axis == "x" else transform.invert_y
    r0, r1 = scale.range
    return scale.with_domain((scale.invert(invert(r0)), scale.invert(invert(r1))))


class RenderCoordinator:
    def __init__(
        self,
        index: DataIndex,
        scales: ScaleModel,
        state: ViewState,
        *,
        surface: RenderSurface | None = None,
        geo: GeoFeed | None = None,
        layout: Layout | None = None,
        chart_tuning: Tuning = CHART_TUNING,
        map_tuning: Tuning = MAP_TUNING,
    ) -> None:
        self.index = index
        self.scales = scales
        self.state = state
        self.surface = surface if surface is not None else NullSurface()
        self.geo = geo
        self.layout = layout or Layout()
        self.chart_tuning = chart_tuning
        self.map_tuning = map_tuning
        self.hovered: str | None = None
        self._drilldown: DrilldownModel | None = None
        self._trend_cache: dict[str, dict[int, float]] = {}
        self._unsubscribe = state.subscribe(self._on_state_change)

    def close(self) -> None:
        """Stop reacting to view-state changes."""

        self._unsubscribe()

    # -- map ---------------------------------------------------------------

    def country_codes(self) -> Iterable[str]:
        if self.geo is not None:
            return self.geo.codes()
        return self.index.countries()

    def build_map_frame(self) -> MapFrame:
        year, mode = self.state.year, self.state.mode
        year_slice = self.index.year_slice(year)
        fills: dict[str, str] = {}
        for code in self.country_codes():
            rec = year_slice.get(code)
            value = rec.value_for(mode) if rec is not None else None
            fills[code] = self.scales.evaluate(mode, value)
        return MapFrame(year, mode, fills, self.state.map_transform)

    def render_map(self) -> MapFrame:
        frame = self.build_map_frame()
        self.surface.draw_map(frame)
        return frame

    # -- legend ------------------------------------------------------------

    def build_legend(self) -> LegendModel:
        mode = self.state.mode
        scale = self.scales.scale_for(mode)
        axis_domain = scale.extent
        axis = LinearScale(axis_domain, (0.0, float(self.layout.legend_width)))
        fmt = tick_formatter(mode)
        ticks = [
            LegendTick(value=v, label=fmt(v), position=axis(v))
            for v in nice_ticks(axis_domain, self.layout.legend_ticks)
        ]
        return LegendModel(
            mode=mode,
            title=LEGEND_TITLES[mode],
            stops=scale.legend_stops(self.layout.legend_stops),
            ticks=ticks,
            axis_domain=axis_domain,
            width=self.layout.legend_width,
            height=self.layout.legend_height,
        )

    def render_legend(self) -> LegendModel:
        legend = self.build_legend()
        self.surface.draw_legend(legend)
        return legend

    # -- drill-down --------------------------------------------------------

    def display_name(self, country_code: str) -> str:
        name = self.index.country_name(country_code)
        if not name and self.geo is not None:
            name = self.geo.name_for(country_code)
        return name or country_code

    def build_drilldown(self, country_code: str) -> DrilldownModel | None:
        """Raw and smoothed history with padded axes; ``None`` without data."""

        history = self.index.history_for(country_code)
        if not history:
            return None
        smoothed = tuple(KalmanSmoother.from_tuning(self.chart_tuning).smooth(history))
        years = [p.year for p in history]
        temps = [p.temperature for p in history]
        temps.extend(p.temperature for p in smoothed)
        pad = self.layout.temperature_padding
        x_domain = (float(min(years)), float(max(years)))
        y_domain = (min(temps) - pad, max(temps) + pad)
        x_scale = LinearScale(x_domain, self.layout.chart_x_range)
        y_scale = LinearScale(y_domain, self.layout.chart_y_range)
        transform = self.state.chart_transform
        if transform is not None:
            x_scale = rescale(x_scale, transform, "x")
            y_scale = rescale(y_scale, transform, "y")
        return DrilldownModel(
            country_code=country_code,
            country_name=self.display_name(country_code),
            raw=history,
            smoothed=smoothed,
            x_domain=x_domain,
            y_domain=y_domain,
            x_scale=x_scale,
            y_scale=y_scale,
            transform=transform,
        )

    def render_drilldown(self, country_code: str) -> DrilldownModel | None:
        chart = self.build_drilldown(country_code)
        if chart is None:
            LOGGER.debug("No history for %s; nothing to draw", country_code)
            return None
        self._drilldown = chart
        self.surface.draw_drilldown(chart)
        return chart

    @property
    def drilldown(self) -> DrilldownModel | None:
        return self._drilldown

    # -- zoom --------------------------------------------------------------

    def apply_zoom(
        self, transform: ZoomTransform, target: ZoomTarget | str
    ) -> ZoomView | None:
        """Rescale the map geometry or the chart axes for ``transform``.

        The scale factor is clamped into the target's zoom extent first. Chart
        zoom needs an open drill-down and returns ``None`` otherwise.
        """

        target = ZoomTarget(target)
        transform = clamp_transform(transform, target)
        if target is ZoomTarget.MAP:
            view = ZoomView(target.value, transform)
        else:
            if self._drilldown is None:
                return None
            base_x = LinearScale(self._drilldown.x_domain, self.layout.chart_x_range)
            base_y = LinearScale(self._drilldown.y_domain, self.layout.chart_y_range)
            view = ZoomView(
                target.value,
                transform,
                x_scale=rescale(base_x, transform, "x"),
                y_scale=rescale(base_y, transform, "y"),
            )
            self._drilldown = replace(
                self._drilldown,
                x_scale=view.x_scale,
                y_scale=view.y_scale,
                transform=transform,
            )
        self.surface.apply_zoom(view)
        return view

    # -- tooltip -----------------------------------------------------------

    def _trend_at(self, country_code: str, year: int) -> float | None:
        trend = self._trend_cache.get(country_code)
        if trend is None:
            smoother = KalmanSmoother.from_tuning(self.map_tuning)
            points: list[SmoothedPoint] = smoother.smooth(
                self.index.history_for(country_code)
            )
            trend = {p.year: p.temperature for p in points}
            self._trend_cache[country_code] = trend
        return trend.get(year)

    def describe(self, country_code: str) -> Tooltip:
        year, mode = self.state.year, self.state.mode
        rec = self.index.lookup(year, country_code)
        if rec is None:
            name = (self.geo.name_for(country_code) if self.geo else None) or "Unknown"
            return Tooltip(
                country_code, name, [f"Year: {year}", "No data available"], has_data=False
            )

        temperature = (
            f"{rec.absolute_value:.2f}°C" if rec.absolute_value is not None else "N/A"
        )
        lines = [f"Year: {year}"]
        if mode is Mode.ABSOLUTE:
            lines.append(f"Temperature: {temperature}")
            if rec.relative_change is not None:
                lines.append(f"Δ: {format_change(rec.relative_change)}")
        else:
            lines.append(f"Δ Temperature: {format_change(rec.relative_change)}")
            if rec.relative_change is not None:
                lines.append(f"Temperature: {temperature}")
        trend = self._trend_at(country_code, year)
        if trend is not None:
            lines.append(f"Trend: {trend:.2f}°C")
        return Tooltip(country_code, rec.country_name or self.display_name(country_code), lines)

    # -- events ------------------------------------------------------------

    def on_hover(self, country_code: str | None) -> Tooltip | None:
        self.hovered = country_code
        tooltip = self.describe(country_code) if country_code is not None else None
        self.surface.show_tooltip(tooltip)
        return tooltip

    def on_click(self, country_code: str) -> bool:
        return self.state.select_country(country_code)

    def on_dismiss(self) -> bool:
        return self.state.select_country(None)

    def on_zoom(self, transform: ZoomTransform, target: ZoomTarget | str) -> None:
        if ZoomTarget(target) is ZoomTarget.MAP:
            self.state.set_map_transform(transform)
        else:
            self.state.set_chart_transform(transform)

    def render_all(self) -> None:
        """Draw everything for the current state (initial paint)."""

        self.render_map()
        self.render_legend()
        self.apply_zoom(self.state.map_transform, ZoomTarget.MAP)
        if self.state.selected_country is not None:
            self.render_drilldown(self.state.selected_country)

    def _on_state_change(self, field: str, state: ViewState) -> None:
        if field in ("year", "mode"):
            self.render_map()
            if field == "mode":
                self.render_legend()
            if self.hovered is not None:
                self.on_hover(self.hovered)
        elif field == "map_transform":
            self.apply_zoom(state.map_transform, ZoomTarget.MAP)
        elif field == "chart_transform":
            self.apply_zoom(state.chart_transform or IDENTITY, ZoomTarget.CHART)
        elif field == "selected_country":
            if state.selected_country is None:
                self._drilldown = None
                self.surface.close_drilldown()
            else:
                self.render_drilldown(state.selected_country)
