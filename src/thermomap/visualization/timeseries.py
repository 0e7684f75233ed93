# SPDX-License-Identifier: Apache-2.0
"""Static drill-down chart: raw annual temperatures plus the smoothed trend."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

if TYPE_CHECKING:  # pragma: no cover
    from matplotlib.figure import Figure

    from thermomap.render.models import DrilldownModel

RAW_COLOR = "#4575b4"
TREND_COLOR = "#d73027"


def drilldown_figure(
    chart: DrilldownModel, *, width: int = 560, height: int = 280, dpi: int = 96
) -> Figure:
    """Draw ``chart`` with its visible (possibly zoomed) axis domains."""

    fig, ax = plt.subplots(figsize=(width / dpi, height / dpi), dpi=dpi)
    years = [p.year for p in chart.raw]
    ax.plot(
        years,
        [p.temperature for p in chart.raw],
        color=RAW_COLOR,
        linewidth=1.0,
        marker="o",
        markersize=2.5,
        label="Annual mean",
    )
    ax.plot(
        [p.year for p in chart.smoothed],
        [p.temperature for p in chart.smoothed],
        color=TREND_COLOR,
        linewidth=2.0,
        label="Trend",
    )
    ax.set_xlim(*chart.x_scale.domain)
    ax.set_ylim(*sorted(chart.y_scale.domain))
    ax.set_title(chart.country_name)
    ax.set_xlabel("Year")
    ax.set_ylabel("Temperature (°C)")
    ax.grid(True, alpha=0.3)
    ax.legend(loc="upper left", fontsize="small")
    fig.tight_layout()
    return fig


def save_drilldown(chart: DrilldownModel, path: str | Path, **kwargs) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    fig = drilldown_figure(chart, **kwargs)
    try:
        fig.savefig(out)
    finally:
        plt.close(fig)
    return out
