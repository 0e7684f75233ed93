# SPDX-License-Identifier: Apache-2.0
"""Presentation values handed to a rendering surface."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from thermomap.data.index import HistoryPoint
from thermomap.data.records import Mode
from thermomap.processing.smoothing import SmoothedPoint
from thermomap.state.transform import ZoomTransform
from thermomap.visualization.axes import LinearScale
from thermomap.visualization.scales import LegendStop


@dataclass(frozen=True)
class MapFrame:
    year: int
    mode: Mode
    fills: dict[str, str]
    transform: ZoomTransform

    def to_dict(self) -> dict[str, Any]:
        return {
            "year": self.year,
            "mode": self.mode.value,
            "fills": dict(self.fills),
            "transform": self.transform.to_dict(),
        }


@dataclass(frozen=True)
class LegendTick:
    value: float
    label: str
    position: float


@dataclass(frozen=True)
class LegendModel:
    """Gradient swatch plus axis.

    ``axis_domain`` labels the outer extent; for the diverging scale the
    gradient still spans the full three-point domain, so its centre is zero.
    """

    mode: Mode
    title: str
    stops: list[LegendStop]
    ticks: list[LegendTick]
    axis_domain: tuple[float, float]
    width: int
    height: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "mode": self.mode.value,
            "title": self.title,
            "stops": [s._asdict() for s in self.stops],
            "ticks": [asdict(t) for t in self.ticks],
            "axis_domain": list(self.axis_domain),
            "width": self.width,
            "height": self.height,
        }


@dataclass(frozen=True)
class ZoomView:
    """Result of applying a zoom transform to one target.

    Map views carry the geometry transform only; chart views also carry the
    rescaled axes.
    """

    target: str
    transform: ZoomTransform
    x_scale: LinearScale | None = None
    y_scale: LinearScale | None = None


@dataclass(frozen=True)
class DrilldownModel:
    country_code: str
    country_name: str
    raw: tuple[HistoryPoint, ...]
    smoothed: tuple[SmoothedPoint, ...]
    x_domain: tuple[float, float]
    y_domain: tuple[float, float]
    x_scale: LinearScale
    y_scale: LinearScale
    transform: ZoomTransform | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "country_code": self.country_code,
            "country_name": self.country_name,
            "raw": [p._asdict() for p in self.raw],
            "smoothed": [p._asdict() for p in self.smoothed],
            "x_domain": list(self.x_domain),
            "y_domain": list(self.y_domain),
            "visible_x_domain": list(self.x_scale.domain),
            "visible_y_domain": list(self.y_scale.domain),
            "transform": self.transform.to_dict() if self.transform else None,
        }


@dataclass(frozen=True)
class Tooltip:
    country_code: str
    title: str
    lines: list[str] = field(default_factory=list)
    has_data: bool = True

    def to_text(self) -> str:
        return "\n".join([self.title, *self.lines])
