# SPDX-License-Identifier: Apache-2.0
from .axes import LEGEND_TITLES, LinearScale, format_absolute, format_relative, nice_ticks
from .scales import (
    NO_DATA_COLOR,
    DivergingScale,
    LegendStop,
    Scale,
    ScaleModel,
    SequentialScale,
)

# Renderers (``thermomap.visualization.renderers``) depend on the render layer
# and are imported on demand.

__all__ = [
    "Scale",
    "SequentialScale",
    "DivergingScale",
    "ScaleModel",
    "LegendStop",
    "NO_DATA_COLOR",
    "LinearScale",
    "LEGEND_TITLES",
    "format_absolute",
    "format_relative",
    "nice_ticks",
]
