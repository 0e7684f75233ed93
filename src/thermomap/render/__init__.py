# SPDX-License-Identifier: Apache-2.0
from .coordinator import RenderCoordinator, rescale
from .models import (
    DrilldownModel,
    LegendModel,
    LegendTick,
    MapFrame,
    Tooltip,
    ZoomView,
)
from .surface import NullSurface, RenderSurface

__all__ = [
    "RenderCoordinator",
    "RenderSurface",
    "NullSurface",
    "MapFrame",
    "LegendModel",
    "LegendTick",
    "DrilldownModel",
    "Tooltip",
    "ZoomView",
    "rescale",
]
