# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import json

import pytest

from tests.helpers import SAMPLE_ROWS, RecordingSurface, sample_topology
from thermomap.data.index import DataIndex
from thermomap.data.loaders import parse_geo
from thermomap.render.coordinator import RenderCoordinator
from thermomap.state.persistence import MemoryStore
from thermomap.state.view_state import ViewState, YearBounds
from thermomap.visualization.scales import ScaleModel


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Keep user config, preferences and verbosity out of every test."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    # Pinned so CLI runs that write the variable get restored afterwards.
    monkeypatch.setenv("THERMOMAP_VERBOSITY", "info")
    for var in (
        "THERMOMAP_CONFIG",
        "THERMOMAP_DATA",
        "THERMOMAP_GEO",
        "THERMOMAP_STATE_FILE",
        "THERMOMAP_HTTP_TIMEOUT",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture()
def index() -> DataIndex:
    return DataIndex.build(SAMPLE_ROWS)


@pytest.fixture()
def scales(index) -> ScaleModel:
    return ScaleModel.build(index)


@pytest.fixture()
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture()
def state(index, store) -> ViewState:
    return ViewState(YearBounds.from_index(index), store=store, has_history=index.has_history)


@pytest.fixture()
def geo():
    return parse_geo(json.dumps(sample_topology()).encode("utf-8"))


@pytest.fixture()
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture()
def coordinator(index, scales, state, surface, geo) -> RenderCoordinator:
    return RenderCoordinator(index, scales, state, surface=surface, geo=geo)
