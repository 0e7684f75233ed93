# SPDX-License-Identifier: Apache-2.0
"""Pan/zoom transforms for the map and the drill-down chart."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from thermomap.errors import OutOfRange

LOGGER = logging.getLogger(__name__)


class ZoomTarget(str, Enum):
    MAP = "map"
    CHART = "chart"


# Allowed scale factors per target.
ZOOM_EXTENTS: dict[ZoomTarget, tuple[float, float]] = {
    ZoomTarget.MAP: (1.0, 8.0),
    ZoomTarget.CHART: (1.0, 20.0),
}


@dataclass(frozen=True)
class ZoomTransform:
    """Uniform scale ``k`` followed by a translation ``(x, y)``.

    Applying the transform maps a point ``p`` to ``p * k + (x, y)``.
    """

    k: float = 1.0
    x: float = 0.0
    y: float = 0.0

    def apply(self, point: tuple[float, float]) -> tuple[float, float]:
        return point[0] * self.k + self.x, point[1] * self.k + self.y

    def invert(self, point: tuple[float, float]) -> tuple[float, float]:
        return (point[0] - self.x) / self.k, (point[1] - self.y) / self.k

    def apply_x(self, x: float) -> float:
        return x * self.k + self.x

    def apply_y(self, y: float) -> float:
        return y * self.k + self.y

    def invert_x(self, x: float) -> float:
        return (x - self.x) / self.k

    def invert_y(self, y: float) -> float:
        return (y - self.y) / self.k

    def to_dict(self) -> dict[str, float]:
        return {"k": self.k, "x": self.x, "y": self.y}


IDENTITY = ZoomTransform()


def check_transform(
    transform: ZoomTransform, extent: tuple[float, float]
) -> ZoomTransform:
    """Validate ``transform.k`` against ``extent``.

    Raises
    ------
    OutOfRange
        When the scale factor lies outside ``extent``; the exception carries
        the clamped transform as ``fallback``.
    """

    lo, hi = extent
    k = transform.k
    if not (k > 0) or k < lo or k > hi:
        clamped = min(max(k, lo), hi) if k > 0 else lo
        raise OutOfRange(
            f"zoom factor {k} outside [{lo}, {hi}]",
            value=k,
            fallback=ZoomTransform(clamped, transform.x, transform.y),
        )
    return transform


def clamp_transform(
    transform: ZoomTransform, target: ZoomTarget = ZoomTarget.MAP
) -> ZoomTransform:
    try:
        return check_transform(transform, ZOOM_EXTENTS[ZoomTarget(target)])
    except OutOfRange as exc:
        LOGGER.debug("Clamping %s zoom: %s", ZoomTarget(target).value, exc)
        return exc.fallback
