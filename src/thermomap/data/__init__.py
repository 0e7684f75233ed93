# SPDX-License-Identifier: Apache-2.0
from .index import DataIndex, HistoryPoint
from .loaders import (
    WORLD_ATLAS_URL,
    CountryShape,
    Feeds,
    GeoFeed,
    load_feeds,
    load_geo,
    load_index,
)
from .records import DEFAULT_FIELDS, FieldMap, Mode, Record, parse_row

__all__ = [
    "DataIndex",
    "HistoryPoint",
    "Record",
    "Mode",
    "FieldMap",
    "DEFAULT_FIELDS",
    "parse_row",
    "CountryShape",
    "GeoFeed",
    "Feeds",
    "WORLD_ATLAS_URL",
    "load_feeds",
    "load_geo",
    "load_index",
]
