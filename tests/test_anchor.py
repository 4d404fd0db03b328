import math

import pytest

from solargrid.model.anchor import BoundingBox, RoofAnchorProbe


@pytest.fixture
def probe():
    return RoofAnchorProbe()


def test_defaults_to_zero_before_ready(probe):
    assert probe.anchor_height == 0.0
    assert not probe.is_ready


def test_anchor_is_top_of_bounding_box(probe):
    height = probe.on_asset_ready((-4.0, 4.0, 0.0, 6.25, -3.0, 3.0))

    assert height == 6.25
    assert probe.anchor_height == 6.25
    assert probe.is_ready


def test_accepts_bounding_box(probe):
    box = BoundingBox(-1.0, 1.0, -2.0, 3.5, -1.0, 1.0)
    assert probe.on_asset_ready(box) == 3.5


@pytest.mark.parametrize("bounds", [
    None,
    (0.0, 1.0, 2.0),
    (0.0, 1.0, 5.0, 2.0, 0.0, 1.0),
    (0.0, 1.0, 0.0, math.nan, 0.0, 1.0),
    (0.0, 1.0, 0.0, math.inf, 0.0, 1.0),
    ("a", 1.0, 0.0, 2.0, 0.0, 1.0),
])
def test_degenerate_bounds_keep_last_value(probe, bounds):
    assert probe.on_asset_ready(bounds) == 0.0

    probe.on_asset_ready((0.0, 1.0, 0.0, 4.0, 0.0, 1.0))
    assert probe.on_asset_ready(bounds) == 4.0
    assert probe.anchor_height == 4.0


def test_reset(probe):
    probe.on_asset_ready((0.0, 1.0, 0.0, 4.0, 0.0, 1.0))
    probe.reset()

    assert probe.anchor_height == 0.0
    assert not probe.is_ready


def test_from_bounds_order():
    box = BoundingBox.from_bounds((1, 2, 3, 4, 5, 6))
    assert (box.min_x, box.max_x, box.min_y, box.max_y, box.min_z, box.max_z) == (1, 2, 3, 4, 5, 6)
    assert box.is_valid
