# SPDX-License-Identifier: Apache-2.0
"""Linear axis scales and tick labelling for the legend and drill-down chart."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from matplotlib.ticker import MaxNLocator

from thermomap.data.records import Mode

LEGEND_TITLES = {
    Mode.ABSOLUTE: "Average Temperature (°C)",
    Mode.RELATIVE: "Temperature Change (Δ)",
}


@dataclass(frozen=True)
class LinearScale:
    """Affine map from a data ``domain`` to a pixel ``range``."""

    domain: tuple[float, float]
    range: tuple[float, float]

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if d1 == d0:
            return (r0 + r1) / 2.0
        return r0 + (float(value) - d0) * (r1 - r0) / (d1 - d0)

    def invert(self, pixel: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if r1 == r0:
            return (d0 + d1) / 2.0
        return d0 + (float(pixel) - r0) * (d1 - d0) / (r1 - r0)

    def with_domain(self, domain: tuple[float, float]) -> LinearScale:
        return LinearScale((float(domain[0]), float(domain[1])), self.range)

    def ticks(self, count: int = 5) -> list[float]:
        return nice_ticks(self.domain, count)


def nice_ticks(domain: tuple[float, float], count: int = 5) -> list[float]:
    """Round tick values inside ``domain`` (either orientation)."""

    lo, hi = sorted((float(domain[0]), float(domain[1])))
    if lo == hi:
        return [lo]
    locator = MaxNLocator(nbins=count, steps=[1, 2, 2.5, 5, 10])
    eps = (hi - lo) * 1e-9
    # + 0.0 turns -0.0 into 0.0 so labels never read "-0.0"
    return [
        float(t) + 0.0 for t in locator.tick_values(lo, hi) if lo - eps <= t <= hi + eps
    ]


def format_absolute(value: float) -> str:
    return f"{value:.1f}°C"


def format_relative(value: float) -> str:
    sign = "+" if value > 0 else ""
    return f"{sign}{value:.1f}%"


def tick_formatter(mode: Mode) -> Callable[[float], str]:
    return format_absolute if Mode.parse(mode) is Mode.ABSOLUTE else format_relative


def format_change(value: float | None, digits: int = 2) -> str:
    """Signed percentage used in tooltips; ``N/A`` when missing."""

    if value is None:
        return "N/A"
    sign = "+" if value > 0 else ""
    return f"{sign}{value:.{digits}f}%"
