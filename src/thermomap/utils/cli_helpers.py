# SPDX-License-Identifier: Apache-2.0
"""Logging setup and small output helpers shared by CLI commands."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Any

VERBOSITY_ENV = "THERMOMAP_VERBOSITY"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "quiet": logging.ERROR,
}

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def apply_verbosity_flags(ns: Any) -> None:
    """Translate ``--verbose``/``--quiet`` into ``THERMOMAP_VERBOSITY``."""

    if getattr(ns, "verbose", False):
        os.environ[VERBOSITY_ENV] = "debug"
    elif getattr(ns, "quiet", False):
        os.environ[VERBOSITY_ENV] = "quiet"


def configure_logging_from_env(default: str = "info") -> int:
    """Configure root logging from ``THERMOMAP_VERBOSITY`` and return the level.

    Unknown values fall back to ``default``. Calling again reconfigures.
    """

    name = (os.environ.get(VERBOSITY_ENV) or default).strip().lower()
    level = _LEVELS.get(name, _LEVELS.get(default, logging.INFO))
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr, force=True)
    return level


def write_text(text: str, destination: str | None) -> None:
    """Write ``text`` to a file, or to stdout for ``None``/``"-"``."""

    if destination in (None, "-"):
        sys.stdout.write(text)
        sys.stdout.flush()
        return
    out = Path(destination)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text, encoding="utf-8")
