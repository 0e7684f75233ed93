# SPDX-License-Identifier: Apache-2.0
"""Per-country, per-year observation records and row parsing."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from thermomap.errors import MalformedRecord


@dataclass(frozen=True, slots=True)
class FieldMap:
    """Column names of the tabular feed."""

    year: str = "year"
    country_code: str = "iso_num"
    country_name: str = "country"
    absolute_value: str = "avg_temp_absolute"
    relative_change: str = "avg_temp_change"


DEFAULT_FIELDS = FieldMap()


class Mode(str, Enum):
    """Which measurement the map shows."""

    ABSOLUTE = "absolute"
    RELATIVE = "relative"

    @classmethod
    def parse(cls, value: Any) -> Mode:
        """Return the mode named by ``value``; ``"change"`` aliases relative.

        Raises ``ValueError`` for unknown names.
        """

        if isinstance(value, cls):
            return value
        token = str(value or "").strip().lower()
        if token == "change":
            return cls.RELATIVE
        return cls(token)


@dataclass(frozen=True, slots=True)
class Record:
    """One (country, year) observation.

    ``relative_change`` is carried exactly as the source supplies it.
    """

    country_code: str
    country_name: str
    year: int
    absolute_value: float | None = None
    relative_change: float | None = None

    def value_for(self, mode: Mode) -> float | None:
        """Return the measurement shown in ``mode``."""

        if mode is Mode.ABSOLUTE:
            return self.absolute_value
        return self.relative_change


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and not value.strip()


def coerce_year(value: Any) -> int | None:
    """Parse ``value`` as an integer year; ``None`` when not parseable."""

    if _is_blank(value) or isinstance(value, bool):
        return None
    try:
        number = float(str(value).strip())
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or not number.is_integer():
        return None
    return int(number)


def coerce_float(value: Any) -> float | None:
    """Parse ``value`` as a finite float; ``None`` for absent or non-numeric."""

    if _is_blank(value) or isinstance(value, bool):
        return None
    try:
        number = float(str(value).strip())
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def canonical_country_code(value: Any) -> str | None:
    """Return the canonical key for a country identifier.

    Numeric identifiers are zero-padded to the three-digit ISO 3166-1 form
    (``4``, ``"4.0"`` and ``"004"`` all become ``"004"``) so tabular rows line
    up with world-atlas geometry ids. Anything else is stripped and
    upper-cased.
    """

    if _is_blank(value) or isinstance(value, bool):
        return None
    token = str(value).strip()
    try:
        number = float(token)
    except ValueError:
        return token.upper()
    if math.isfinite(number) and number.is_integer() and number >= 0:
        return f"{int(number):03d}"
    return token.upper()


def parse_row(row: Mapping[str, Any], fields: FieldMap = DEFAULT_FIELDS) -> Record:
    """Convert one raw feed row into a :class:`Record`.

    Raises
    ------
    MalformedRecord
        When the year is not an integer or the country identifier is empty.
    """

    year = coerce_year(row.get(fields.year))
    if year is None:
        raise MalformedRecord(
            f"unparseable year: {row.get(fields.year)!r}", row=dict(row)
        )
    code = canonical_country_code(row.get(fields.country_code))
    if code is None:
        raise MalformedRecord("missing country identifier", row=dict(row))
    name = row.get(fields.country_name)
    return Record(
        country_code=code,
        country_name="" if _is_blank(name) else str(name).strip(),
        year=year,
        absolute_value=coerce_float(row.get(fields.absolute_value)),
        relative_change=coerce_float(row.get(fields.relative_change)),
    )
