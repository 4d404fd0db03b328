import dataclasses
import math

import numpy as np
import pytest

from solargrid.model.errors import InvalidParameter
from solargrid.model.layout import (
    LayoutParams, PanelIndex, footprint_half_extent, generate_layout, layout_to_array
)
from solargrid.model.motion import RenderItem


def test_reference_2x2_positions(params):
    positions = generate_layout(params.replace(vertical_offset=0.3, anchor_height=1.2))
    expected = [(-0.9, -0.6), (0.9, -0.6), (-0.9, 0.6), (0.9, 0.6)]

    assert len(positions) == 4
    for pos, (x, z) in zip(positions, expected):
        assert pos.x == pytest.approx(x)
        assert pos.z == pytest.approx(z)
        assert pos.y == pytest.approx(1.5)


@pytest.mark.parametrize("rows, cols", [(1, 1), (1, 5), (2, 3), (5, 4), (8, 8)])
def test_grid_is_complete_and_centered(rows, cols):
    positions = generate_layout(LayoutParams(rows=rows, cols=cols))

    assert len(positions) == rows * cols
    assert len({p.index for p in positions}) == rows * cols
    assert [p.index for p in positions] == [PanelIndex(r, c) for r in range(rows) for c in range(cols)]

    xs = sorted(p.x for p in positions)
    zs = sorted(p.z for p in positions)
    assert xs == pytest.approx([-x for x in reversed(xs)], abs=1e-12)
    assert zs == pytest.approx([-z for z in reversed(zs)], abs=1e-12)
    assert sum(xs) == pytest.approx(0.0, abs=1e-9)


def test_horizontal_offset_shifts_x_only(params):
    base = generate_layout(params)
    shifted = generate_layout(params.replace(horizontal_offset=2.5))

    for a, b in zip(base, shifted):
        assert b.x == pytest.approx(a.x + 2.5)
        assert b.z == a.z
        assert b.y == a.y


def test_same_params_give_identical_output():
    p = LayoutParams(rows=7, cols=3, spacing=0.13, vertical_offset=-0.4, horizontal_offset=1.1, anchor_height=3.3)
    assert generate_layout(p) == generate_layout(LayoutParams(**dataclasses.asdict(p)))


@pytest.mark.parametrize("changes", [
    {"rows": 0},
    {"cols": 0},
    {"rows": -2},
    {"rows": 2.5},
    {"cols": True},
    {"spacing": -0.1},
    {"panel_width": 0.0},
    {"spacing": math.inf},
    {"spacing": math.nan},
    {"panel_width": math.nan},
    {"panel_depth": -math.inf},
    {"vertical_offset": math.nan},
    {"horizontal_offset": math.inf},
    {"anchor_height": -math.inf},
    {"spacing": "0.2"},
    {"vertical_offset": True},
])
def test_invalid_params_are_rejected(changes):
    with pytest.raises(InvalidParameter):
        LayoutParams(**changes)


def test_replace_keeps_original_snapshot(params):
    updated = params.replace(rows=5)

    assert updated.rows == 5
    assert params.rows == 2
    with pytest.raises(dataclasses.FrozenInstanceError):
        params.rows = 3
    with pytest.raises(InvalidParameter):
        params.replace(cols=0)


def test_negative_vertical_offset_is_allowed():
    positions = generate_layout(LayoutParams(rows=1, cols=1, vertical_offset=-1.0))
    assert positions[0].y == -1.0


def test_generate_layout_requires_params():
    with pytest.raises(InvalidParameter):
        generate_layout({"rows": 2, "cols": 2})


def test_layout_to_array(params):
    arr = layout_to_array(generate_layout(params))

    assert arr.shape == (4, 3)
    assert arr.dtype == np.float64
    assert layout_to_array([]).shape == (0, 3)


def test_numpy_integer_counts_are_accepted():
    p = LayoutParams(rows=np.int64(3), cols=np.int32(2))

    assert p.panel_count == 6
    assert len(generate_layout(p)) == 6


def test_non_finite_update_keeps_snapshot(params):
    with pytest.raises(InvalidParameter):
        params.replace(spacing=math.inf)
    assert all(math.isfinite(v) for pos in generate_layout(params) for v in (pos.x, pos.y, pos.z))


def test_render_items_share_the_array_hand_off():
    items = [RenderItem(PanelIndex(0, 0), -2.5, 1.0, 0.5), RenderItem(PanelIndex(0, 1), 1.0, 1.0, -3.0)]
    coords = layout_to_array(items)

    assert coords.tolist() == [[-2.5, 1.0, 0.5], [1.0, 1.0, -3.0]]
    assert footprint_half_extent(coords) == 3.0
    assert footprint_half_extent(layout_to_array([])) == 0.0
