# SPDX-License-Identifier: Apache-2.0
"""Command-line entry point: ``thermomap`` / ``python -m thermomap.cli``."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from thermomap.config import load_settings
from thermomap.data.loaders import load_index
from thermomap.data.records import Mode, canonical_country_code
from thermomap.errors import LoadFailure
from thermomap.render.coordinator import RenderCoordinator
from thermomap.session import Session
from thermomap.state.persistence import JsonFileStore, MemoryStore, PreferenceStore
from thermomap.state.view_state import ViewState, YearBounds
from thermomap.utils.cli_helpers import (
    apply_verbosity_flags,
    configure_logging_from_env,
    write_text,
)
from thermomap.utils.serialize import dumps
from thermomap.visualization.renderers import create, describe_all, help_text
from thermomap.visualization.scales import ScaleModel

EXIT_LOAD_FAILURE = 2


def _settings(ns: argparse.Namespace):
    return load_settings(
        getattr(ns, "config", None),
        data_source=getattr(ns, "data", None),
        geo_source=getattr(ns, "geo", None),
        state_file=getattr(ns, "state_file", None),
    )


def _store(ns: argparse.Namespace, settings) -> PreferenceStore:
    if getattr(ns, "no_persist", False):
        return MemoryStore()
    return JsonFileStore(settings.state_file)


def _is_url(source: str | None) -> bool:
    return bool(source) and str(source).lower().startswith(("http://", "https://"))


def _cmd_render(ns: argparse.Namespace) -> int:
    """Render the choropleth for a year/mode (and optional country) to a bundle."""

    settings = _settings(ns)
    renderer = create(
        ns.renderer, layout=settings.layout, drilldown_png=ns.drilldown_png
    )
    session = Session(settings, surface=renderer, store=_store(ns, settings))
    if not session.start():
        logging.error("Nothing rendered: %s", session.error)
        return EXIT_LOAD_FAILURE

    if ns.mode:
        session.set_mode(ns.mode)
    if ns.year is not None:
        applied = session.set_year(ns.year)
        if applied != ns.year:
            logging.warning("Year %s unavailable; rendered %s instead", ns.year, applied)
    country = canonical_country_code(ns.country)
    if country and not session.on_click(country):
        logging.warning("No history for country %s; drill-down not rendered", country)

    coordinator = session.coordinator
    geo = session.feeds.geo
    options: dict[str, Any] = {
        "tooltips": {
            code: coordinator.describe(code).to_text()
            for code in coordinator.country_codes()
        },
    }
    if geo is not None:
        options["geo_object"] = geo.object_name
        if _is_url(settings.geo_source):
            options["geo_source"] = settings.geo_source
        else:
            options["geo_document"] = geo.document
    renderer.configure(**options)

    bundle = renderer.build(output_dir=Path(ns.output))
    logging.info("Generated map bundle at %s", bundle.index_html)
    logging.debug(
        "Bundle assets: %s",
        ", ".join(str(p.relative_to(bundle.output_dir)) for p in bundle.assets),
    )
    return 0


def _cmd_history(ns: argparse.Namespace) -> int:
    """Print a country's raw and smoothed series as JSON."""

    settings = _settings(ns)
    if not settings.data_source:
        logging.error("No data source given (--data or THERMOMAP_DATA)")
        return EXIT_LOAD_FAILURE
    try:
        index = load_index(
            settings.data_source, fields=settings.fields, timeout=settings.http_timeout
        )
    except LoadFailure as exc:
        logging.error("Load failed: %s", exc)
        return EXIT_LOAD_FAILURE
    if not len(index):
        logging.error("No usable rows in %s", settings.data_source)
        return EXIT_LOAD_FAILURE

    state = ViewState(YearBounds.from_index(index), has_history=index.has_history)
    coordinator = RenderCoordinator(
        index,
        ScaleModel.build(index),
        state,
        layout=settings.layout,
        chart_tuning=settings.chart_tuning,
        map_tuning=settings.map_tuning,
    )
    country = canonical_country_code(ns.country) or ns.country
    chart = coordinator.build_drilldown(country)
    if chart is None:
        logging.warning("No history for country %s", country)
        write_text(dumps({"country_code": country, "raw": [], "smoothed": []}) + "\n", ns.output)
        return 0
    if ns.plot:
        from thermomap.visualization.timeseries import save_drilldown

        save_drilldown(chart, ns.plot)
        logging.info("Saved chart to %s", ns.plot)
    write_text(dumps(chart) + "\n", ns.output)
    return 0


def _cmd_state(ns: argparse.Namespace) -> int:
    """Show or clear the persisted year/mode preferences."""

    settings = _settings(ns)
    store = JsonFileStore(settings.state_file)
    if ns.action == "reset":
        store.clear()
        logging.info("Cleared %s", store.path)
        return 0
    write_text(dumps({"path": store.path, "values": store.snapshot()}) + "\n", None)
    return 0


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("--config", help="YAML config file (default: ~/.thermomap.yaml)")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    p.add_argument("-q", "--quiet", action="store_true", help="Errors only")


def _add_data(p: argparse.ArgumentParser) -> None:
    p.add_argument("--data", help="CSV path or URL (default: THERMOMAP_DATA)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="thermomap",
        description="Per-country temperature choropleth and drill-down charts.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_render = sub.add_parser("render", help="Write an interactive map bundle")
    _add_common(p_render)
    _add_data(p_render)
    p_render.add_argument("--geo", help="TopoJSON/GeoJSON path or URL")
    p_render.add_argument("--year", type=int, help="Year to show")
    p_render.add_argument(
        "--mode",
        choices=[m.value for m in Mode] + ["change"],
        help="absolute (°C) or relative (%% change)",
    )
    p_render.add_argument("--country", help="Open the drill-down for this country id")
    p_render.add_argument("--output", "-o", default="thermomap_bundle", help="Output dir")
    p_render.add_argument(
        "--renderer",
        default="choropleth-map",
        choices=[info["slug"] for info in describe_all()],
        help=help_text(),
    )
    p_render.add_argument("--state-file", help="Preference file for year/mode")
    p_render.add_argument(
        "--no-persist", action="store_true", help="Do not read or write preferences"
    )
    p_render.add_argument(
        "--drilldown-png", action="store_true", help="Also save the chart as PNG"
    )
    p_render.set_defaults(func=_cmd_render)

    p_hist = sub.add_parser("history", help="Print raw and smoothed history as JSON")
    _add_common(p_hist)
    _add_data(p_hist)
    p_hist.add_argument("--country", required=True, help="Country id (e.g. 004)")
    p_hist.add_argument("--output", "-o", default="-", help="JSON destination")
    p_hist.add_argument("--plot", help="Save the drill-down chart as an image")
    p_hist.set_defaults(func=_cmd_history)

    p_state = sub.add_parser("state", help="Inspect or clear saved preferences")
    _add_common(p_state)
    p_state.add_argument("action", choices=["show", "reset"])
    p_state.add_argument("--state-file", help="Preference file")
    p_state.set_defaults(func=_cmd_state)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    apply_verbosity_flags(ns)
    configure_logging_from_env()
    return int(ns.func(ns))


if __name__ == "__main__":  # pragma: no cover - exercised in CLI tests
    sys.exit(main())
