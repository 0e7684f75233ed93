# SPDX-License-Identifier: Apache-2.0
"""Interactive session: startup sequence and the event entry points.

Startup waits for both feeds, then builds the index, scales and view state
once and paints the first frame. If loading fails the session stays inert:
nothing is drawn, events are ignored, and there is no retry.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from thermomap.config import Settings, load_settings
from thermomap.data.loaders import Feeds, load_feeds
from thermomap.data.records import Mode
from thermomap.errors import LoadFailure
from thermomap.render.coordinator import RenderCoordinator
from thermomap.render.models import Tooltip
from thermomap.render.surface import RenderSurface
from thermomap.state.persistence import JsonFileStore, PreferenceStore
from thermomap.state.transform import ZoomTarget, ZoomTransform
from thermomap.state.view_state import ViewState, YearBounds
from thermomap.visualization.scales import ScaleModel

LOGGER = logging.getLogger(__name__)


class SessionStatus(str, Enum):
    PENDING = "pending"
    READY = "ready"
    FAILED = "failed"


class Session:
    def __init__(
        self,
        settings: Settings | None = None,
        *,
        surface: RenderSurface | None = None,
        store: PreferenceStore | None = None,
    ) -> None:
        self.settings = settings or load_settings()
        self.surface = surface
        self.store = store if store is not None else JsonFileStore(self.settings.state_file)
        self.status = SessionStatus.PENDING
        self.error: LoadFailure | None = None
        self.state: ViewState | None = None
        self.coordinator: RenderCoordinator | None = None
        self.scales: ScaleModel | None = None
        self.feeds: Feeds | None = None

    @property
    def ready(self) -> bool:
        return self.status is SessionStatus.READY

    def start(self) -> bool:
        """Fetch both feeds and paint the first frame.

        Returns ``False`` (and stays inert) on :class:`LoadFailure`.
        """

        if self.status is not SessionStatus.PENDING:
            return self.ready
        try:
            if not self.settings.data_source:
                raise LoadFailure("no tabular data source configured")
            feeds = load_feeds(
                self.settings.data_source,
                self.settings.geo_source,
                fields=self.settings.fields,
                timeout=self.settings.http_timeout,
            )
        except LoadFailure as exc:
            LOGGER.error("Load failed: %s", exc)
            self.status = SessionStatus.FAILED
            self.error = exc
            return False
        self.attach(feeds)
        return True

    def attach(self, feeds: Feeds) -> None:
        """Build the core objects from already loaded feeds and render."""

        self.feeds = feeds
        index = feeds.index
        self.scales = ScaleModel.build(index)
        self.state = ViewState.hydrate(
            YearBounds.from_index(index), self.store, has_history=index.has_history
        )
        self.coordinator = RenderCoordinator(
            index,
            self.scales,
            self.state,
            surface=self.surface,
            geo=feeds.geo,
            layout=self.settings.layout,
            chart_tuning=self.settings.chart_tuning,
            map_tuning=self.settings.map_tuning,
        )
        self.status = SessionStatus.READY
        LOGGER.info(
            "Session ready: %r, scales %s / %s",
            index,
            self.scales.absolute,
            self.scales.relative,
        )
        self.coordinator.render_all()

    # -- controls (ignored while inert) -------------------------------------

    def set_year(self, year: Any) -> int | None:
        return self.state.set_year(year) if self.ready else None

    def set_mode(self, mode: Mode | str) -> Mode | None:
        return self.state.set_mode(mode) if self.ready else None

    def on_hover(self, country_code: str | None) -> Tooltip | None:
        return self.coordinator.on_hover(country_code) if self.ready else None

    def on_click(self, country_code: str) -> bool:
        return self.coordinator.on_click(country_code) if self.ready else False

    def on_dismiss(self) -> bool:
        return self.coordinator.on_dismiss() if self.ready else False

    def on_zoom(self, transform: ZoomTransform, target: ZoomTarget | str) -> None:
        if self.ready:
            self.coordinator.on_zoom(transform, target)
