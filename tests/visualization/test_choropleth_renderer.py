# SPDX-License-Identifier: Apache-2.0
import json

import pytest

from thermomap.config import Layout
from thermomap.render.coordinator import RenderCoordinator
from thermomap.state.transform import ZoomTransform
from thermomap.visualization.renderers import (
    BundleRenderer,
    create,
    describe_all,
    get,
    help_text,
    register,
)
from thermomap.visualization.renderers.choropleth import ChoroplethRenderer
from thermomap.visualization.scales import NO_DATA_COLOR


def _painted(index, scales, state, geo, **options):
    renderer = create("choropleth-map", **options)
    coordinator = RenderCoordinator(index, scales, state, surface=renderer, geo=geo)
    coordinator.render_all()
    return renderer, coordinator


def test_registry_lists_choropleth():
    assert "choropleth-map" in {info["slug"] for info in describe_all()}
    assert get("choropleth-map") is ChoroplethRenderer
    assert isinstance(create("choropleth-map"), BundleRenderer)


def test_registry_rejects_unknown_and_duplicates():
    with pytest.raises(KeyError):
        get("globe")
    with pytest.raises(ValueError):
        register(ChoroplethRenderer)
    with pytest.raises(TypeError):
        register(object)  # type: ignore[arg-type]


def test_build_requires_a_painted_frame(tmp_path):
    with pytest.raises(RuntimeError):
        ChoroplethRenderer().build(output_dir=tmp_path)


def test_bundle_contains_frame_legend_and_drilldown(index, scales, state, geo, tmp_path):
    renderer, coordinator = _painted(index, scales, state, geo, title="Test map")
    coordinator.on_click("250")
    renderer.configure(geo_document=geo.document, geo_object=geo.object_name)

    bundle = renderer.build(output_dir=tmp_path / "bundle")

    assert bundle.index_html.exists()
    names = {p.name for p in bundle.assets}
    assert names == {"choropleth.js", "config.json", "geo.json"}
    config = json.loads((tmp_path / "bundle" / "assets" / "config.json").read_text(encoding="utf-8"))
    assert config["title"] == "Test map"
    assert config["geo"] == "assets/geo.json"
    assert config["geo_object"] == "countries"
    assert config["projection"]["translate"] == [480.0, 400.0]
    assert config["frame"]["year"] == 2014
    assert config["frame"]["mode"] == "absolute"
    assert config["frame"]["fills"]["-99"] == NO_DATA_COLOR
    assert config["frame"]["fills"]["004"] == scales.absolute(15.1)
    assert config["legend"]["title"] == "Average Temperature (°C)"
    assert len(config["legend"]["stops"]) == 11
    assert config["drilldown"]["country_name"] == "France"
    assert config["zoom"] == {"map": {"k": 1.0, "x": 0.0, "y": 0.0}, "chart": None}
    html = bundle.index_html.read_text(encoding="utf-8")
    assert "window.THERMOMAP_CONFIG" in html
    assert "d3@7" in html
    assert "<title>Test map</title>" in html


def test_remote_geo_source_is_referenced_not_copied(index, scales, state, geo, tmp_path):
    renderer, _ = _painted(index, scales, state, geo)
    renderer.configure(geo_source="https://example.com/countries.json")
    bundle = renderer.build(output_dir=tmp_path)
    config = json.loads((tmp_path / "assets" / "config.json").read_text(encoding="utf-8"))
    assert config["geo"] == "https://example.com/countries.json"
    assert config["drilldown"] is None
    assert not (tmp_path / "assets" / "geo.json").exists()
    assert len(bundle.assets) == 2


def test_drilldown_png_written_when_requested(index, scales, state, geo, tmp_path):
    renderer, coordinator = _painted(index, scales, state, geo, drilldown_png=True)
    coordinator.on_click("004")
    renderer.build(output_dir=tmp_path)
    png = tmp_path / "assets" / "drilldown.png"
    assert png.read_bytes()[:4] == b"\x89PNG"


def test_dismiss_clears_drilldown_and_chart_zoom(index, scales, state, geo):
    renderer, coordinator = _painted(index, scales, state, geo)
    coordinator.on_click("250")
    coordinator.on_zoom(ZoomTransform(2.0), "chart")
    assert "chart" in renderer.zoom
    coordinator.on_dismiss()
    assert renderer.drilldown is None
    assert "chart" not in renderer.zoom


def test_describe_metadata():
    assert ChoroplethRenderer().describe()["slug"] == "choropleth-map"


def test_help_text_lists_descriptions():
    assert f"choropleth-map: {ChoroplethRenderer.description}" in help_text()


def test_layout_sizes_map_projection_and_chart(index, scales, state, geo, tmp_path):
    layout = Layout(map_width=1200, map_height=900, projection_scale=200.0, chart_width=400)
    renderer, _ = _painted(index, scales, state, geo, layout=layout)
    renderer.build(output_dir=tmp_path)
    config = json.loads((tmp_path / "assets" / "config.json").read_text(encoding="utf-8"))
    assert (config["width"], config["height"]) == (1200, 900)
    assert config["projection"] == {"scale": 200.0, "translate": [600.0, 600.0]}
    assert config["chart"] == {"width": 400, "height": 280}
