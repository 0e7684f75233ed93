# SPDX-License-Identifier: Apache-2.0
from .smoothing import (
    CHART_TUNING,
    MAP_TUNING,
    KalmanSmoother,
    SmoothedPoint,
    Tuning,
    smooth_series,
)

__all__ = [
    "KalmanSmoother",
    "SmoothedPoint",
    "Tuning",
    "MAP_TUNING",
    "CHART_TUNING",
    "smooth_series",
]
