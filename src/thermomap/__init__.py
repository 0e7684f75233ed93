# SPDX-License-Identifier: Apache-2.0
"""ThermoMap: per-country temperature choropleth with smoothed drill-down."""

from __future__ import annotations

from thermomap.data.index import DataIndex
from thermomap.data.records import Mode, Record
from thermomap.errors import LoadFailure, MalformedRecord, OutOfRange, ThermoMapError
from thermomap.processing.smoothing import KalmanSmoother
from thermomap.render.coordinator import RenderCoordinator
from thermomap.state.view_state import ViewState, YearBounds
from thermomap.visualization.scales import ScaleModel

__version__ = "0.1.0"

__all__ = [
    "DataIndex",
    "Record",
    "Mode",
    "ScaleModel",
    "KalmanSmoother",
    "ViewState",
    "YearBounds",
    "RenderCoordinator",
    "ThermoMapError",
    "MalformedRecord",
    "OutOfRange",
    "LoadFailure",
    "__version__",
]
