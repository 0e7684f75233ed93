# SPDX-License-Identifier: Apache-2.0
from .persistence import DEFAULT_STATE_FILE, JsonFileStore, MemoryStore, PreferenceStore
from .transform import (
    IDENTITY,
    ZOOM_EXTENTS,
    ZoomTarget,
    ZoomTransform,
    clamp_transform,
)
from .view_state import MODE_KEY, YEAR_KEY, ViewState, YearBounds

__all__ = [
    "ViewState",
    "YearBounds",
    "YEAR_KEY",
    "MODE_KEY",
    "PreferenceStore",
    "MemoryStore",
    "JsonFileStore",
    "DEFAULT_STATE_FILE",
    "ZoomTransform",
    "ZoomTarget",
    "ZOOM_EXTENTS",
    "IDENTITY",
    "clamp_transform",
]
