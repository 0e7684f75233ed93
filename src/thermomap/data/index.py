# SPDX-License-Identifier: Apache-2.0
"""Year → country lookup built once from the tabular feed."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, NamedTuple

from thermomap.errors import MalformedRecord

from .records import DEFAULT_FIELDS, FieldMap, Record, parse_row

LOGGER = logging.getLogger(__name__)


class HistoryPoint(NamedTuple):
    year: int
    temperature: float


class DataIndex:
    """Immutable ``year -> country_code -> Record`` mapping.

    Per-country histories are derived lazily on first access and cached; the
    source mapping never changes, so repeated calls return equal tuples.
    """

    def __init__(self, records: Iterable[Record] = (), *, skipped: int = 0) -> None:
        by_year: dict[int, dict[str, Record]] = {}
        for rec in records:
            bucket = by_year.setdefault(rec.year, {})
            if rec.country_code in bucket:
                raise ValueError(
                    f"duplicate record for {rec.country_code} in {rec.year}"
                )
            bucket[rec.country_code] = rec
        self._by_year: Mapping[int, Mapping[str, Record]] = MappingProxyType(
            {year: MappingProxyType(bucket) for year, bucket in by_year.items()}
        )
        self._years: tuple[int, ...] = tuple(sorted(self._by_year))
        self._history_cache: dict[str, tuple[HistoryPoint, ...]] = {}
        self.skipped = skipped

    @classmethod
    def build(
        cls, rows: Iterable[Mapping[str, Any]], fields: FieldMap = DEFAULT_FIELDS
    ) -> DataIndex:
        """Build an index from raw feed rows, skipping rows that do not parse.

        A duplicate (year, country) row is skipped as well; the first one seen
        is kept.
        """

        records: list[Record] = []
        seen: set[tuple[int, str]] = set()
        skipped = 0
        for lineno, row in enumerate(rows, start=1):
            try:
                rec = parse_row(row, fields)
                key = (rec.year, rec.country_code)
                if key in seen:
                    raise MalformedRecord(
                        f"duplicate record for {rec.country_code} in {rec.year}",
                        row=dict(row),
                    )
            except MalformedRecord as exc:
                skipped += 1
                LOGGER.warning("Skipping row %d: %s", lineno, exc)
                continue
            seen.add(key)
            records.append(rec)
        if skipped:
            LOGGER.info("Indexed %d records (%d rows skipped)", len(records), skipped)
        return cls(records, skipped=skipped)

    # -- lookup -----------------------------------------------------------

    def lookup(self, year: int, country_code: str) -> Record | None:
        """Return the record for ``(year, country_code)`` or ``None``."""

        return self._by_year.get(year, {}).get(country_code)

    def year_slice(self, year: int) -> Mapping[str, Record]:
        return self._by_year.get(year, MappingProxyType({}))

    def history_for(self, country_code: str) -> tuple[HistoryPoint, ...]:
        """Chronological absolute temperatures for one country.

        Years without an absolute value are left out. Unknown countries yield
        an empty tuple.
        """

        cached = self._history_cache.get(country_code)
        if cached is None:
            cached = tuple(self._iter_history(country_code))
            self._history_cache[country_code] = cached
        return cached

    def _iter_history(self, country_code: str) -> Iterator[HistoryPoint]:
        for year in self._years:
            rec = self._by_year[year].get(country_code)
            if rec is not None and rec.absolute_value is not None:
                yield HistoryPoint(year, rec.absolute_value)

    def has_history(self, country_code: str) -> bool:
        return bool(self.history_for(country_code))

    def country_name(self, country_code: str) -> str | None:
        for year in reversed(self._years):
            rec = self._by_year[year].get(country_code)
            if rec is not None and rec.country_name:
                return rec.country_name
        return None

    # -- dataset-wide views -----------------------------------------------

    @property
    def years(self) -> tuple[int, ...]:
        return self._years

    @property
    def min_year(self) -> int | None:
        return self._years[0] if self._years else None

    @property
    def max_year(self) -> int | None:
        return self._years[-1] if self._years else None

    def countries(self) -> list[str]:
        codes: set[str] = set()
        for bucket in self._by_year.values():
            codes.update(bucket)
        return sorted(codes)

    def records(self) -> Iterator[Record]:
        for year in self._years:
            yield from self._by_year[year].values()

    def absolute_values(self) -> list[float]:
        return [r.absolute_value for r in self.records() if r.absolute_value is not None]

    def relative_changes(self) -> list[float]:
        return [
            r.relative_change for r in self.records() if r.relative_change is not None
        ]

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._by_year.values())

    def __repr__(self) -> str:
        span = f"{self.min_year}-{self.max_year}" if self._years else "empty"
        return f"DataIndex({len(self)} records, {span})"
