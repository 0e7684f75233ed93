# SPDX-License-Identifier: Apache-2.0
"""D3-based choropleth bundle renderer.

Writes ``index.html`` plus ``assets/config.json`` holding the precomputed
fills, legend and drill-down series. The page only draws; every value comes
from the render coordinator. D3 and topojson-client load from jsDelivr.
"""

from __future__ import annotations

import json
from pathlib import Path
from textwrap import dedent
from typing import Any

from thermomap.config import Layout
from thermomap.visualization.scales import NO_DATA_COLOR
from thermomap.visualization.timeseries import save_drilldown

from .base import BundleRenderer, RenderBundle
from .registry import register


@register
class ChoroplethRenderer(BundleRenderer):
    slug = "choropleth-map"
    description = "World choropleth with legend and drill-down chart (D3 bundle)."

    def build(self, *, output_dir: Path) -> RenderBundle:
        if self.frame is None or self.legend is None:
            raise RuntimeError("nothing to build: render the map and legend first")
        output_dir = Path(output_dir)
        assets_dir = output_dir / "assets"
        assets_dir.mkdir(parents=True, exist_ok=True)

        index_html = output_dir / "index.html"
        script_path = assets_dir / "choropleth.js"
        config_path = assets_dir / "config.json"
        staged: list[Path] = []

        config = self._config()
        geo_document = self._options.get("geo_document")
        if geo_document is not None:
            geo_path = assets_dir / "geo.json"
            geo_path.write_text(json.dumps(geo_document), encoding="utf-8")
            config["geo"] = "assets/geo.json"
            staged.append(geo_path)
        if self.drilldown is not None and self._options.get("drilldown_png"):
            png = save_drilldown(
                self.drilldown,
                assets_dir / "drilldown.png",
                width=self.layout.chart_width,
                height=self.layout.chart_height,
            )
            config["drilldown_image"] = "assets/drilldown.png"
            staged.append(png)

        config_json = json.dumps(config, indent=2, ensure_ascii=False)
        config_path.write_text(config_json + "\n", encoding="utf-8")
        index_html.write_text(self._render_index_html(config_json), encoding="utf-8")
        script_path.write_text(self._render_script(), encoding="utf-8")

        return RenderBundle(
            output_dir=output_dir,
            index_html=index_html,
            assets=(script_path, config_path, *staged),
        )

    @property
    def layout(self) -> Layout:
        return self._options.get("layout") or Layout()

    def _config(self) -> dict[str, Any]:
        opts = self._options
        layout = self.layout
        map_zoom = self.zoom.get("map")
        chart_zoom = self.zoom.get("chart")
        return {
            "title": opts.get("title", "ThermoMap"),
            "width": layout.map_width,
            "height": layout.map_height,
            "projection": {
                "scale": layout.projection_scale,
                "translate": list(layout.projection_translate),
            },
            "geo": opts.get("geo_source"),
            "geo_object": opts.get("geo_object"),
            "chart": {
                "width": layout.chart_width,
                "height": layout.chart_height,
            },
            "no_data_color": NO_DATA_COLOR,
            "frame": self.frame.to_dict(),
            "legend": self.legend.to_dict(),
            "drilldown": self.drilldown.to_dict() if self.drilldown else None,
            "zoom": {
                "map": map_zoom.transform.to_dict() if map_zoom else None,
                "chart": chart_zoom.transform.to_dict() if chart_zoom else None,
            },
            "tooltips": dict(opts.get("tooltips") or {}),
        }

    def _render_index_html(self, config_json: str) -> str:
        title = self._options.get("title", "ThermoMap")
        return (
            dedent(
                f"""
            <!DOCTYPE html>
            <html lang="en">
              <head>
                <meta charset="utf-8" />
                <meta name="viewport" content="width=device-width, initial-scale=1" />
                <title>{title}</title>
                <style>
                  body {{ margin: 0; font-family: system-ui, sans-serif; background: #fafafa; }}
                  #tooltip {{ position: absolute; background: rgba(0, 0, 0, 0.8); color: #fff; padding: 10px; border-radius: 5px; pointer-events: none; opacity: 0; font-size: 12px; white-space: pre-line; }}
                  #drilldown {{ margin: 12px; }}
                  #drilldown[hidden] {{ display: none; }}
                </style>
              </head>
              <body>
                <h2 id="heading"></h2>
                <svg id="map"></svg>
                <div id="tooltip"></div>
                <div id="drilldown" hidden><svg id="chart"></svg></div>
                <script>
                  window.THERMOMAP_CONFIG = {config_json};
                </script>
                <script src="https://cdn.jsdelivr.net/npm/d3@7.9.0/dist/d3.min.js"></script>
                <script src="https://cdn.jsdelivr.net/npm/topojson-client@3"></script>
                <script src="assets/choropleth.js"></script>
              </body>
            </html>
            """
            ).strip()
            + "\n"
        )

    def _render_script(self) -> str:
        return (
            dedent(
                """
            (async function () {
              const config = window.THERMOMAP_CONFIG || {};
              const frame = config.frame;
              const fills = frame.fills || {};
              const tooltips = config.tooltips || {};
              d3.select("#heading").text(`${config.title} (${frame.year}, ${frame.mode})`);

              const svg = d3.select("#map").attr("width", config.width).attr("height", config.height);
              const g = svg.append("g");
              if (config.zoom.map) {
                const t = config.zoom.map;
                g.attr("transform", `translate(${t.x},${t.y}) scale(${t.k})`);
              }

              const doc = await d3.json(config.geo);
              let features = [];
              if (doc.type === "Topology") {
                const name = config.geo_object || Object.keys(doc.objects)[0];
                features = topojson.feature(doc, doc.objects[name]).features;
              } else {
                features = doc.features || [];
              }
              const key = (d) => {
                const raw = d.id ?? (d.properties || {}).id;
                const n = Number(raw);
                return Number.isInteger(n) && n >= 0 ? String(n).padStart(3, "0") : String(raw).toUpperCase();
              };

              const projection = d3.geoMercator()
                .scale(config.projection.scale)
                .translate(config.projection.translate);
              const path = d3.geoPath(projection);
              const tooltip = d3.select("#tooltip");

              g.selectAll("path.country")
                .data(features)
                .join("path")
                .attr("class", "country")
                .attr("d", path)
                .attr("fill", (d) => fills[key(d)] || config.no_data_color)
                .attr("stroke", "#fff")
                .attr("stroke-width", 0.5)
                .on("mouseover", function (event, d) {
                  d3.select(this).attr("stroke", "#000").attr("stroke-width", 2);
                  const text = tooltips[key(d)] || `${(d.properties || {}).name || "Unknown"}\\nNo data available`;
                  tooltip.style("opacity", 1).text(text)
                    .style("left", `${event.pageX + 10}px`).style("top", `${event.pageY - 10}px`);
                })
                .on("mousemove", (event) => {
                  tooltip.style("left", `${event.pageX + 10}px`).style("top", `${event.pageY - 10}px`);
                })
                .on("mouseout", function () {
                  d3.select(this).attr("stroke", "#fff").attr("stroke-width", 0.5);
                  tooltip.style("opacity", 0);
                });

              const legend = config.legend;
              const lx = config.width - legend.width - 20;
              const ly = config.height - 40;
              const lg = svg.append("g").attr("transform", `translate(${lx},${ly})`);
              const gradient = lg.append("defs").append("linearGradient")
                .attr("id", "legend-gradient").attr("x1", "0%").attr("x2", "100%");
              legend.stops.forEach((s) => {
                gradient.append("stop").attr("offset", `${s.offset * 100}%`).attr("stop-color", s.color);
              });
              lg.append("rect").attr("width", legend.width).attr("height", legend.height)
                .style("fill", "url(#legend-gradient)").style("stroke", "#000");
              legend.ticks.forEach((t) => {
                lg.append("text").attr("x", t.position).attr("y", legend.height + 14)
                  .style("text-anchor", "middle").style("font-size", "10px").text(t.label);
              });
              lg.append("text").attr("x", legend.width / 2).attr("y", -5)
                .style("text-anchor", "middle").style("font-size", "12px")
                .style("font-weight", "bold").text(legend.title);

              const chart = config.drilldown;
              if (!chart) return;
              d3.select("#drilldown").attr("hidden", null);
              const cw = config.chart.width, ch = config.chart.height, m = { top: 20, right: 30, bottom: 40, left: 50 };
              const cs = d3.select("#chart").attr("width", cw).attr("height", ch);
              const x = d3.scaleLinear().domain(chart.visible_x_domain).range([m.left, cw - m.right]);
              const y = d3.scaleLinear().domain(chart.visible_y_domain).range([ch - m.bottom, m.top]);
              cs.append("g").attr("transform", `translate(0,${ch - m.bottom})`)
                .call(d3.axisBottom(x).tickFormat(d3.format("d")));
              cs.append("g").attr("transform", `translate(${m.left},0)`).call(d3.axisLeft(y));
              const line = d3.line().x((p) => x(p.year)).y((p) => y(p.temperature));
              cs.append("path").datum(chart.raw).attr("fill", "none")
                .attr("stroke", "#4575b4").attr("d", line);
              cs.append("path").datum(chart.smoothed).attr("fill", "none")
                .attr("stroke", "#d73027").attr("stroke-width", 2).attr("d", line);
              cs.selectAll("circle").data(chart.raw).join("circle")
                .attr("cx", (p) => x(p.year)).attr("cy", (p) => y(p.temperature))
                .attr("r", 2).attr("fill", "#4575b4");
              cs.append("text").attr("x", cw / 2).attr("y", 14)
                .style("text-anchor", "middle").text(chart.country_name);
            })().catch((error) => {
              console.error("ThermoMap bootstrap failed", error);
            });
            """
            ).strip()
            + "\n"
        )
