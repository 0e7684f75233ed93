# SPDX-License-Identifier: Apache-2.0
"""JSON-friendly conversion for ThermoMap value objects.

Handles dataclasses, named tuples (``HistoryPoint``, ``SmoothedPoint``,
``LegendStop``), enums and paths so CLI output needs no per-type code.
"""

from __future__ import annotations

import json
from dataclasses import fields, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Mapping


def to_obj(x: Any) -> Any:
    """Recursively convert ``x`` into JSON-serializable primitives."""

    if hasattr(x, "to_dict") and callable(x.to_dict):
        return to_obj(x.to_dict())
    if is_dataclass(x) and not isinstance(x, type):
        return {f.name: to_obj(getattr(x, f.name)) for f in fields(x)}
    if isinstance(x, tuple) and hasattr(x, "_asdict"):
        return {k: to_obj(v) for k, v in x._asdict().items()}
    if isinstance(x, Enum):
        return x.value
    if isinstance(x, Path):
        return str(x)
    if isinstance(x, Mapping):
        return {str(k): to_obj(v) for k, v in x.items()}
    if isinstance(x, (list, tuple, set, frozenset)):
        return [to_obj(i) for i in x]
    return x


def dumps(x: Any, *, indent: int | None = 2) -> str:
    return json.dumps(to_obj(x), indent=indent, ensure_ascii=False)
