# SPDX-License-Identifier: Apache-2.0
"""Color scales for the choropleth and its legend.

Two variants share one contract: a sequential scale for absolute temperature
and a diverging scale, centred on zero, for relative change. Both domains are
fixed once from the whole dataset so a country's color is comparable across
years.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from typing import Iterable, NamedTuple

import numpy as np
from matplotlib import colormaps
from matplotlib.colors import Normalize, TwoSlopeNorm, to_hex

from thermomap.data.records import Mode

LOGGER = logging.getLogger(__name__)

NO_DATA_COLOR = "#cccccc"
# ColorBrewer ramps run red -> blue; the reversed variants put cold/cooling on
# the blue end.
ABSOLUTE_CMAP = "RdYlBu_r"
RELATIVE_CMAP = "RdBu_r"
DEFAULT_MAX_CHANGE = 5.0
DEFAULT_ABSOLUTE_DOMAIN = (0.0, 1.0)
DEFAULT_LEGEND_STOPS = 10


class LegendStop(NamedTuple):
    offset: float
    value: float
    color: str


class Scale(ABC):
    """Maps a numeric value to a hex color over a fixed domain."""

    def __init__(self, cmap: str) -> None:
        self.cmap_name = cmap
        self._cmap = colormaps[cmap]

    @property
    @abstractmethod
    def domain(self) -> tuple[float, ...]:
        """Control points of the scale, ascending."""

    @property
    def extent(self) -> tuple[float, float]:
        """Outer bounds of the domain."""

        return self.domain[0], self.domain[-1]

    @abstractmethod
    def position(self, value: float) -> float:
        """Return where ``value`` falls on the color ramp, clamped to [0, 1]."""

    def color_at(self, position: float) -> str:
        return to_hex(self._cmap(float(position)))

    def __call__(self, value: float) -> str:
        return self.color_at(self.position(value))

    def legend_stops(self, n: int = DEFAULT_LEGEND_STOPS) -> list[LegendStop]:
        """Return ``n + 1`` evenly spaced samples across :attr:`extent`."""

        if n < 1:
            raise ValueError("legend needs at least one interval")
        lo, hi = self.extent
        values = np.linspace(lo, hi, n + 1)
        return [
            LegendStop(offset=i / n, value=float(v), color=self(float(v)))
            for i, v in enumerate(values)
        ]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(domain={self.domain}, cmap={self.cmap_name!r})"


class SequentialScale(Scale):
    def __init__(self, vmin: float, vmax: float, cmap: str = ABSOLUTE_CMAP) -> None:
        super().__init__(cmap)
        if vmin > vmax:
            vmin, vmax = vmax, vmin
        self._domain = (float(vmin), float(vmax))
        self._norm = Normalize(vmin=self._domain[0], vmax=self._domain[1], clip=True)

    @classmethod
    def from_values(cls, values: Iterable[float], cmap: str = ABSOLUTE_CMAP):
        finite = [v for v in values if v is not None and math.isfinite(v)]
        if not finite:
            LOGGER.warning(
                "No absolute values; using fallback domain %s", DEFAULT_ABSOLUTE_DOMAIN
            )
            return cls(*DEFAULT_ABSOLUTE_DOMAIN, cmap=cmap)
        return cls(min(finite), max(finite), cmap=cmap)

    @property
    def domain(self) -> tuple[float, float]:
        return self._domain

    def position(self, value: float) -> float:
        return float(self._norm(float(value)))


class DivergingScale(Scale):
    def __init__(self, max_abs: float, cmap: str = RELATIVE_CMAP) -> None:
        super().__init__(cmap)
        max_abs = abs(float(max_abs))
        if max_abs == 0 or not math.isfinite(max_abs):
            max_abs = DEFAULT_MAX_CHANGE
        self._domain = (-max_abs, 0.0, max_abs)
        self._norm = TwoSlopeNorm(vcenter=0.0, vmin=-max_abs, vmax=max_abs)

    @classmethod
    def from_values(cls, values: Iterable[float], cmap: str = RELATIVE_CMAP):
        magnitudes = [abs(v) for v in values if v is not None and math.isfinite(v)]
        max_abs = max(magnitudes, default=0.0)
        if max_abs == 0:
            LOGGER.info("No relative change data; using ±%s", DEFAULT_MAX_CHANGE)
        return cls(max_abs, cmap=cmap)

    @property
    def domain(self) -> tuple[float, float, float]:
        return self._domain

    @property
    def max_abs(self) -> float:
        return self._domain[-1]

    @property
    def midpoint_color(self) -> str:
        return self.color_at(0.5)

    def position(self, value: float) -> float:
        return float(np.clip(self._norm(float(value)), 0.0, 1.0))


class ScaleModel:
    """The absolute/relative scale pair, selected by :class:`Mode`."""

    def __init__(self, absolute: Scale, relative: Scale) -> None:
        self.absolute = absolute
        self.relative = relative

    @classmethod
    def build(cls, index) -> ScaleModel:
        """Fit both scales to every value in ``index`` (a ``DataIndex``)."""

        return cls(
            SequentialScale.from_values(index.absolute_values()),
            DivergingScale.from_values(index.relative_changes()),
        )

    def scale_for(self, mode: Mode) -> Scale:
        return self.absolute if Mode.parse(mode) is Mode.ABSOLUTE else self.relative

    def evaluate(self, mode: Mode, value: float | None) -> str:
        """Color for ``value`` in ``mode``; :data:`NO_DATA_COLOR` when missing."""

        if value is None:
            return NO_DATA_COLOR
        try:
            number = float(value)
        except (TypeError, ValueError):
            return NO_DATA_COLOR
        if math.isnan(number):
            return NO_DATA_COLOR
        return self.scale_for(mode)(number)

    def legend_stops(
        self, mode: Mode, n: int = DEFAULT_LEGEND_STOPS
    ) -> list[LegendStop]:
        return self.scale_for(mode).legend_stops(n)
