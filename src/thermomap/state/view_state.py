# SPDX-License-Identifier: Apache-2.0
"""User-controlled view parameters with persistence and change notification.

Every setter mutates, persists when the field is durable, and then calls each
listener synchronously before returning. There is no update queue.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from thermomap.data.records import Mode, coerce_year
from thermomap.errors import OutOfRange

from .persistence import MemoryStore, PreferenceStore
from .transform import IDENTITY, ZoomTarget, ZoomTransform, clamp_transform

LOGGER = logging.getLogger(__name__)

YEAR_KEY = "year"
MODE_KEY = "mode"

Listener = Callable[[str, "ViewState"], None]


@dataclass(frozen=True)
class YearBounds:
    """Supported year range; out-of-range requests fall back to ``default``."""

    min_year: int
    max_year: int
    default: int | None = None

    def __post_init__(self) -> None:
        if self.min_year > self.max_year:
            raise ValueError("min_year must not exceed max_year")

    @classmethod
    def from_index(cls, index) -> YearBounds:
        if index.min_year is None:
            raise ValueError("cannot derive year bounds from an empty index")
        return cls(index.min_year, index.max_year)

    @property
    def default_year(self) -> int:
        return self.max_year if self.default is None else self.default

    def check(self, value: Any) -> int:
        """Return ``value`` as a supported year.

        Raises
        ------
        OutOfRange
            When ``value`` is not an integer year inside the bounds. The
            exception's ``fallback`` is :attr:`default_year`.
        """

        year = coerce_year(value)
        if year is None or not (self.min_year <= year <= self.max_year):
            raise OutOfRange(
                f"year {value!r} outside [{self.min_year}, {self.max_year}]",
                value=value,
                fallback=self.default_year,
            )
        return year


class ViewState:
    """Current year, metric mode, zoom transforms and selected country."""

    def __init__(
        self,
        bounds: YearBounds,
        *,
        year: int | None = None,
        mode: Mode = Mode.ABSOLUTE,
        store: PreferenceStore | None = None,
        has_history: Callable[[str], bool] | None = None,
    ) -> None:
        self.bounds = bounds
        self.store = store if store is not None else MemoryStore()
        self._has_history = has_history or (lambda _code: True)
        self._year = bounds.default_year if year is None else bounds.check(year)
        self._mode = Mode.parse(mode)
        self._map_transform = IDENTITY
        self._chart_transform: ZoomTransform | None = None
        self._selected: str | None = None
        self._listeners: list[Listener] = []

    @classmethod
    def hydrate(
        cls,
        bounds: YearBounds,
        store: PreferenceStore,
        *,
        has_history: Callable[[str], bool] | None = None,
    ) -> ViewState:
        """Restore year and mode from ``store``.

        Malformed or out-of-range persisted values are replaced by the
        defaults, and the defaults are written back.
        """

        raw_year = store.get(YEAR_KEY)
        year = bounds.default_year
        if raw_year is not None:
            try:
                year = bounds.check(raw_year)
            except OutOfRange as exc:
                LOGGER.warning("Resetting persisted year: %s", exc)
                store.set(YEAR_KEY, year)

        raw_mode = store.get(MODE_KEY)
        mode = Mode.ABSOLUTE
        if raw_mode is not None:
            try:
                mode = Mode.parse(raw_mode)
            except ValueError:
                LOGGER.warning("Resetting persisted mode %r", raw_mode)
                store.set(MODE_KEY, mode.value)

        return cls(bounds, year=year, mode=mode, store=store, has_history=has_history)

    # -- read access ---------------------------------------------------------

    @property
    def year(self) -> int:
        return self._year

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def map_transform(self) -> ZoomTransform:
        return self._map_transform

    @property
    def chart_transform(self) -> ZoomTransform | None:
        return self._chart_transform

    @property
    def selected_country(self) -> str | None:
        return self._selected

    def snapshot(self) -> dict[str, Any]:
        return {
            "year": self._year,
            "mode": self._mode.value,
            "map_transform": self._map_transform.to_dict(),
            "chart_transform": (
                self._chart_transform.to_dict() if self._chart_transform else None
            ),
            "selected_country": self._selected,
        }

    # -- listeners -------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener(field, state)``; returns an unsubscribe callable."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self, field: str) -> None:
        for listener in list(self._listeners):
            listener(field, self)

    # -- setters -----------------------------------------------------------

    def set_year(self, year: Any) -> int:
        """Set the displayed year and return the year actually applied."""

        try:
            applied = self.bounds.check(year)
        except OutOfRange as exc:
            LOGGER.warning("%s; using %s", exc, exc.fallback)
            applied = exc.fallback
        self._year = applied
        self.store.set(YEAR_KEY, applied)
        self._notify("year")
        return applied

    def set_mode(self, mode: Mode | str) -> Mode:
        self._mode = Mode.parse(mode)
        self.store.set(MODE_KEY, self._mode.value)
        self._notify("mode")
        return self._mode

    def set_map_transform(self, transform: ZoomTransform) -> ZoomTransform:
        self._map_transform = clamp_transform(transform, ZoomTarget.MAP)
        self._notify("map_transform")
        return self._map_transform

    def set_chart_transform(self, transform: ZoomTransform | None) -> ZoomTransform | None:
        self._chart_transform = (
            None if transform is None else clamp_transform(transform, ZoomTarget.CHART)
        )
        self._notify("chart_transform")
        return self._chart_transform

    def select_country(self, country_code: str | None) -> bool:
        """Open (or with ``None`` close) the drill-down for a country.

        Returns ``False`` without notifying when nothing changes, including
        when the country has no history to show.
        """

        if country_code == self._selected:
            return False
        if country_code is not None and not self._has_history(country_code):
            LOGGER.debug("No history for %s; drill-down stays closed", country_code)
            return False
        self._selected = country_code
        self._chart_transform = None
        self._notify("selected_country")
        return True

    def __repr__(self) -> str:
        return (
            f"ViewState(year={self._year}, mode={self._mode.value}, "
            f"selected={self._selected!r})"
        )
