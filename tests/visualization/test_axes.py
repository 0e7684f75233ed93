# SPDX-License-Identifier: Apache-2.0
import pytest

from thermomap.data.records import Mode
from thermomap.visualization.axes import (
    LEGEND_TITLES,
    LinearScale,
    format_absolute,
    format_change,
    format_relative,
    nice_ticks,
    tick_formatter,
)


def test_linear_scale_maps_and_inverts():
    scale = LinearScale((0.0, 10.0), (0.0, 100.0))
    assert scale(5) == pytest.approx(50.0)
    assert scale.invert(50) == pytest.approx(5.0)


def test_linear_scale_inverted_range():
    # chart y axis: larger values sit higher, i.e. at smaller pixel rows
    scale = LinearScale((9.5, 13.3), (240.0, 20.0))
    assert scale(13.3) == pytest.approx(20.0)
    assert scale.invert(240.0) == pytest.approx(9.5)


def test_linear_scale_degenerate_domain():
    assert LinearScale((3.0, 3.0), (0.0, 10.0))(3.0) == pytest.approx(5.0)


def test_with_domain_keeps_range():
    scale = LinearScale((0.0, 1.0), (50.0, 530.0)).with_domain((2, 4))
    assert scale.domain == (2.0, 4.0)
    assert scale.range == (50.0, 530.0)


def test_nice_ticks_stay_inside_domain():
    ticks = nice_ticks((8.1, 15.1), 5)
    assert ticks
    assert ticks == sorted(ticks)
    assert all(8.1 <= t <= 15.1 for t in ticks)


def test_nice_ticks_symmetric_domain_includes_zero():
    ticks = nice_ticks((-12.8, 12.8), 5)
    assert 0.0 in ticks
    assert "-0.0%" not in [format_relative(t) for t in ticks]
    assert ticks == [-t for t in reversed(ticks)]


def test_nice_ticks_point_domain():
    assert nice_ticks((4.0, 4.0)) == [4.0]


def test_formatters():
    assert format_absolute(14.2) == "14.2°C"
    assert format_relative(1.5) == "+1.5%"
    assert format_relative(-2.0) == "-2.0%"
    assert format_relative(0.0) == "0.0%"
    assert format_change(2.8) == "+2.80%"
    assert format_change(-4.2) == "-4.20%"
    assert format_change(None) == "N/A"


def test_tick_formatter_by_mode():
    assert tick_formatter(Mode.ABSOLUTE) is format_absolute
    assert tick_formatter("change") is format_relative


def test_legend_titles():
    assert LEGEND_TITLES[Mode.ABSOLUTE] == "Average Temperature (°C)"
    assert LEGEND_TITLES[Mode.RELATIVE] == "Temperature Change (Δ)"
