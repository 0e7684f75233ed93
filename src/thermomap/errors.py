# SPDX-License-Identifier: Apache-2.0
"""Exception taxonomy shared across ThermoMap components.

Only :class:`LoadFailure` is fatal, and only for startup. The other errors are
raised at a single boundary and recovered there (row skipped, value clamped).
"""

from __future__ import annotations

from typing import Any


class ThermoMapError(Exception):
    """Base class for ThermoMap errors."""


class MalformedRecord(ThermoMapError):
    """A single input row could not be interpreted."""

    def __init__(self, message: str, *, row: Any = None) -> None:
        super().__init__(message)
        self.row = row


class OutOfRange(ThermoMapError):
    """A requested value lies outside its supported bounds."""

    def __init__(self, message: str, *, value: Any = None, fallback: Any = None):
        super().__init__(message)
        self.value = value
        self.fallback = fallback


class LoadFailure(ThermoMapError):
    """An input feed could not be fetched or parsed."""

    def __init__(self, message: str, *, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source
