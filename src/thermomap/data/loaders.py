# SPDX-License-Identifier: Apache-2.0
"""Fetch and parse the tabular (CSV) and geographic (TopoJSON/GeoJSON) feeds.

Both feeds are fetched concurrently at startup; any failure surfaces as a
single :class:`~thermomap.errors.LoadFailure` and nothing is rendered.
"""

from __future__ import annotations

import io
import json
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pandas as pd
import requests

from thermomap.errors import LoadFailure

from .index import DataIndex
from .records import DEFAULT_FIELDS, FieldMap, canonical_country_code

LOGGER = logging.getLogger(__name__)

WORLD_ATLAS_URL = "https://cdn.jsdelivr.net/npm/world-atlas@2/countries-110m.json"


@dataclass(frozen=True, slots=True)
class CountryShape:
    """Identifier and display name of one polygon in the geographic feed."""

    country_code: str
    name: str = ""


@dataclass
class GeoFeed:
    """Parsed geographic feed.

    Only ids and names are interpreted; ``document`` is passed on to the
    rendering surface untouched.
    """

    document: dict[str, Any]
    shapes: list[CountryShape] = field(default_factory=list)
    kind: str = "topojson"
    object_name: str | None = None

    def codes(self) -> list[str]:
        return [s.country_code for s in self.shapes]

    def name_for(self, country_code: str) -> str | None:
        for shape in self.shapes:
            if shape.country_code == country_code:
                return shape.name or None
        return None


@dataclass
class Feeds:
    index: DataIndex
    geo: GeoFeed | None = None


def _is_url(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


def fetch_bytes(source: str | Path, *, timeout: float = 30.0) -> bytes:
    """Return the raw bytes behind a local path or an http(s) URL."""

    src = str(source)
    try:
        if _is_url(src):
            resp = requests.get(src, timeout=timeout)
            resp.raise_for_status()
            return resp.content
        return Path(src).expanduser().read_bytes()
    except (requests.RequestException, OSError) as exc:
        raise LoadFailure(f"failed to fetch {src}: {exc}", source=src) from exc


def read_table(content: bytes, *, source: str = "<bytes>") -> list[dict[str, Any]]:
    """Parse CSV bytes into row dicts with every cell kept as a string."""

    try:
        df = pd.read_csv(io.BytesIO(content), dtype=str, keep_default_na=False)
    except (ValueError, pd.errors.ParserError, UnicodeDecodeError) as exc:
        raise LoadFailure(f"failed to parse table {source}: {exc}", source=source) from exc
    return df.to_dict(orient="records")


def _shapes(items: Any, *, source: str) -> list[CountryShape]:
    """Read ids and names from geometries/features; reject non-object entries."""

    if not isinstance(items, list):
        raise LoadFailure(f"expected a list of shapes in {source}", source=source)
    shapes: list[CountryShape] = []
    for raw in items:
        if not isinstance(raw, dict):
            raise LoadFailure(f"malformed shape {raw!r} in {source}", source=source)
        props = raw.get("properties") or {}
        if not isinstance(props, dict):
            raise LoadFailure(f"malformed properties in {source}", source=source)
        code = canonical_country_code(raw.get("id", props.get("id")))
        if code is not None:
            shapes.append(CountryShape(code, str(props.get("name") or "")))
    return shapes


def parse_geo(content: bytes, *, source: str = "<bytes>") -> GeoFeed:
    """Parse a TopoJSON topology or a GeoJSON FeatureCollection.

    Raises
    ------
    LoadFailure
        When the bytes are not JSON or the document does not have the shape
        of either format.
    """

    try:
        doc = json.loads(content.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise LoadFailure(f"failed to parse geometry {source}: {exc}", source=source) from exc
    if not isinstance(doc, dict):
        raise LoadFailure(f"unsupported geometry document: {source}", source=source)

    gtype = doc.get("type")
    if gtype == "Topology":
        objects = doc.get("objects") or {}
        if not isinstance(objects, dict):
            raise LoadFailure(f"topology objects must be a mapping: {source}", source=source)
        name = "countries" if "countries" in objects else next(iter(objects), None)
        if name is None:
            raise LoadFailure(f"topology has no objects: {source}", source=source)
        collection = objects[name]
        if not isinstance(collection, dict):
            raise LoadFailure(f"topology object {name!r} is malformed: {source}", source=source)
        shapes = _shapes(collection.get("geometries") or [], source=source)
        return GeoFeed(doc, shapes, kind="topojson", object_name=name)
    if gtype == "FeatureCollection":
        shapes = _shapes(doc.get("features") or [], source=source)
        return GeoFeed(doc, shapes, kind="geojson")
    raise LoadFailure(f"unsupported geometry type {gtype!r}: {source}", source=source)


def load_index(
    source: str | Path, *, fields: FieldMap = DEFAULT_FIELDS, timeout: float = 30.0
) -> DataIndex:
    src = str(source)
    rows = read_table(fetch_bytes(src, timeout=timeout), source=src)
    index = DataIndex.build(rows, fields)
    LOGGER.debug("Loaded %r from %s", index, src)
    return index


def load_geo(source: str | Path, *, timeout: float = 30.0) -> GeoFeed:
    src = str(source)
    return parse_geo(fetch_bytes(src, timeout=timeout), source=src)


def load_feeds(
    table_source: str | Path,
    geo_source: str | Path | None = None,
    *,
    fields: FieldMap = DEFAULT_FIELDS,
    timeout: float = 30.0,
) -> Feeds:
    """Fetch both feeds concurrently and wait for both.

    Raises
    ------
    LoadFailure
        When either feed cannot be fetched or parsed.
    """

    with ThreadPoolExecutor(max_workers=2) as pool:
        table_future = pool.submit(
            lambda: read_table(
                fetch_bytes(table_source, timeout=timeout), source=str(table_source)
            )
        )
        geo_future = (
            pool.submit(load_geo, geo_source, timeout=timeout)
            if geo_source is not None
            else None
        )
        rows = table_future.result()
        geo = geo_future.result() if geo_future is not None else None
    index = DataIndex.build(rows, fields)
    if not len(index):
        raise LoadFailure(f"no usable rows in {table_source}", source=str(table_source))
    return Feeds(index=index, geo=geo)
