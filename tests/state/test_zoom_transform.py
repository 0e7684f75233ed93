# SPDX-License-Identifier: Apache-2.0
import pytest

from thermomap.errors import OutOfRange
from thermomap.state.transform import (
    IDENTITY,
    ZOOM_EXTENTS,
    ZoomTarget,
    ZoomTransform,
    check_transform,
    clamp_transform,
)


def test_apply_and_invert_round_trip():
    t = ZoomTransform(2.0, 10.0, 20.0)
    assert t.apply((1.0, 1.0)) == (12.0, 22.0)
    assert t.invert((12.0, 22.0)) == (1.0, 1.0)
    assert t.invert_x(t.apply_x(7.0)) == pytest.approx(7.0)
    assert t.invert_y(t.apply_y(-3.0)) == pytest.approx(-3.0)


def test_identity_serialisation():
    assert IDENTITY.to_dict() == {"k": 1.0, "x": 0.0, "y": 0.0}
    assert ZoomTransform(2, 10, 20).to_dict() == {"k": 2, "x": 10, "y": 20}


def test_extents():
    assert ZOOM_EXTENTS[ZoomTarget.MAP] == (1.0, 8.0)
    assert ZOOM_EXTENTS[ZoomTarget.CHART] == (1.0, 20.0)


def test_check_transform_raises_with_clamped_fallback():
    with pytest.raises(OutOfRange) as excinfo:
        check_transform(ZoomTransform(10.0, 5.0, 6.0), (1.0, 8.0))
    assert excinfo.value.value == 10.0
    assert excinfo.value.fallback == ZoomTransform(8.0, 5.0, 6.0)


@pytest.mark.parametrize(
    "k, target, expected",
    [
        (0.5, ZoomTarget.MAP, 1.0),
        (4.0, ZoomTarget.MAP, 4.0),
        (9.0, ZoomTarget.MAP, 8.0),
        (15.0, "chart", 15.0),
        (25.0, "chart", 20.0),
        (0.0, "chart", 1.0),
        (-2.0, ZoomTarget.MAP, 1.0),
    ],
)
def test_clamp_transform(k, target, expected):
    assert clamp_transform(ZoomTransform(k, 1.0, 2.0), target) == ZoomTransform(expected, 1.0, 2.0)
