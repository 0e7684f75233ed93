# SPDX-License-Identifier: Apache-2.0
"""Recursive scalar estimator used to draw a trend line under a raw series.

The filter is a one-dimensional Kalman update with a constant-state model:

``predicted = error + q``; ``gain = predicted / (predicted + r)``;
``estimate += gain * (z - estimate)``; ``error = (1 - gain) * predicted``.

Points are consumed in the order given. Callers sort chronologically first.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, NamedTuple

INITIAL_ERROR = 1.0


class SmoothedPoint(NamedTuple):
    year: int
    temperature: float
    original_temperature: float


@dataclass(frozen=True)
class Tuning:
    process_noise: float
    measurement_noise: float


# The map and the drill-down chart use different tunings.
MAP_TUNING = Tuning(process_noise=0.01, measurement_noise=0.6)
CHART_TUNING = Tuning(process_noise=0.1, measurement_noise=0.5)


class KalmanSmoother:
    """Stateful smoother; :meth:`smooth` resets state on every call."""

    def __init__(
        self,
        process_noise: float = MAP_TUNING.process_noise,
        measurement_noise: float = MAP_TUNING.measurement_noise,
    ) -> None:
        if process_noise < 0 or measurement_noise <= 0:
            raise ValueError("noise parameters must be positive")
        self.process_noise = float(process_noise)
        self.measurement_noise = float(measurement_noise)
        self.estimate: float | None = None
        self.error_estimate = INITIAL_ERROR

    @classmethod
    def from_tuning(cls, tuning: Tuning) -> KalmanSmoother:
        return cls(tuning.process_noise, tuning.measurement_noise)

    def reset(self, initial: float | None = None) -> None:
        self.estimate = initial
        self.error_estimate = INITIAL_ERROR

    def update(self, measurement: float) -> float:
        """Fold one observation into the estimate and return the new estimate."""

        if self.estimate is None:
            self.estimate = float(measurement)
        predicted = self.error_estimate + self.process_noise
        gain = predicted / (predicted + self.measurement_noise)
        self.estimate = self.estimate + gain * (measurement - self.estimate)
        self.error_estimate = (1 - gain) * predicted
        return self.estimate

    def smooth(self, points: Iterable[tuple[int, float]]) -> list[SmoothedPoint]:
        """Smooth ``(year, temperature)`` pairs, one output per input."""

        out: list[SmoothedPoint] = []
        self.reset()
        for year, temperature in points:
            value = float(temperature)
            out.append(SmoothedPoint(year, self.update(value), value))
        return out

    def steady_state_error(self) -> float:
        """Fixed point of the error recursion for this tuning.

        Solves ``e = r (e + q) / (e + q + r)``, the limit the error estimate
        approaches as points are processed.
        """

        q, r = self.process_noise, self.measurement_noise
        return (-q + (q * q + 4 * q * r) ** 0.5) / 2


def smooth_series(
    points: Iterable[tuple[int, float]], tuning: Tuning = CHART_TUNING
) -> list[SmoothedPoint]:
    return KalmanSmoother.from_tuning(tuning).smooth(points)
