import math

import pytest

from solargrid.model.errors import InvalidParameter
from solargrid.model.layout import LayoutParams, PanelIndex, generate_layout
from solargrid.model.motion import CaptureMode, CaptureTransitionController, approach


def single_panel(y: float):
    return generate_layout(LayoutParams(rows=1, cols=1, vertical_offset=y))


def test_armed_snaps_to_layout_height(controller, params):
    controller.advance(0.016, generate_layout(params.replace(vertical_offset=0.7)))
    assert all(item.y == pytest.approx(0.7) for item in controller.render_list)

    controller.advance(0.016, generate_layout(params.replace(vertical_offset=1.9)))
    assert all(item.y == pytest.approx(1.9) for item in controller.render_list)
    assert controller.mode is CaptureMode.ARMED


def test_armed_tracks_panel_set(controller):
    controller.advance(0.0, generate_layout(LayoutParams(rows=2, cols=3)))
    assert len(controller.states) == 6

    controller.advance(0.0, generate_layout(LayoutParams(rows=1, cols=2)))
    assert set(controller.states) == {PanelIndex(0, 0), PanelIndex(0, 1)}

    controller.advance(0.0, generate_layout(LayoutParams(rows=3, cols=3)))
    assert len(controller.states) == 9
    assert [item.id for item in controller.render_list] == [
        PanelIndex(r, c) for r in range(3) for c in range(3)
    ]


def test_states_are_reused_across_recomputation(controller, params):
    controller.advance(0.0, generate_layout(params))
    first = controller.states[PanelIndex(1, 1)]

    controller.advance(0.0, generate_layout(params.replace(rows=3, spacing=0.5)))
    assert controller.states[PanelIndex(1, 1)] is first


def test_render_list_uses_layout_xz(controller, params):
    positions = generate_layout(params)
    render_list = controller.advance(0.0, positions)

    assert [(r.x, r.z) for r in render_list] == [(p.x, p.z) for p in positions]


def test_capture_descends_monotonically_without_overshoot(controller):
    controller.advance(0.0, single_panel(5.0))
    controller.capture()

    positions = single_panel(5.0)
    previous = controller.render_list[0].y
    for _ in range(600):
        y = controller.advance(1 / 60, positions)[0].y
        assert 0.0 <= y < previous
        previous = y

    assert previous == pytest.approx(5.0 * (1 - 0.5 / 60) ** 600, rel=1e-9)


def test_capture_converges_at_faster_rate():
    controller = CaptureTransitionController(rate=1.0)
    controller.advance(0.0, single_panel(5.0))
    controller.capture()

    for _ in range(600):
        controller.advance(1 / 60, single_panel(5.0))

    assert abs(controller.render_list[0].y) < 1e-3


def test_large_delta_is_clamped_to_target():
    assert approach(5.0, 0.0, dt=10.0, rate=0.5) == 0.0
    assert approach(-2.0, 0.0, dt=1e6, rate=0.5) == 0.0


def test_zero_delta_is_a_noop(armed_controller, params):
    armed_controller.capture()
    before = armed_controller.render_list

    after = armed_controller.advance(0.0, generate_layout(params))
    assert after == before


@pytest.mark.parametrize("dt", [-1.0, -1e-9, math.nan, math.inf, "0.1"])
def test_invalid_delta_is_rejected(armed_controller, params, dt):
    with pytest.raises(InvalidParameter):
        armed_controller.advance(dt, generate_layout(params))

    armed_controller.capture()
    with pytest.raises(InvalidParameter):
        armed_controller.advance(dt, generate_layout(params))


def test_capture_is_irreversible(armed_controller):
    assert armed_controller.capture() is True
    assert armed_controller.capture() is False
    assert armed_controller.mode is CaptureMode.CAPTURED
    assert armed_controller.is_captured


def test_captured_panel_set_is_frozen(armed_controller, params):
    armed_controller.capture()
    frozen = set(armed_controller.states)

    armed_controller.advance(0.1, generate_layout(params.replace(rows=1, cols=1)))
    assert set(armed_controller.states) == frozen
    assert len(armed_controller.render_list) == 4

    armed_controller.advance(0.1, generate_layout(params.replace(rows=4, cols=4)))
    assert set(armed_controller.states) == frozen


def test_captured_keeps_horizontal_edits_live(armed_controller, params):
    armed_controller.capture()
    y_before = armed_controller.render_list[0].y

    shifted = generate_layout(params.replace(horizontal_offset=3.0, vertical_offset=9.0))
    render_list = armed_controller.advance(0.1, shifted)

    assert [(r.x, r.z) for r in render_list] == [(p.x, p.z) for p in shifted]
    # Target is pinned to the ground, not the new vertical offset
    assert render_list[0].y < y_before


def test_dropped_panels_keep_last_position(armed_controller, params):
    armed_controller.capture()
    last = {r.id: (r.x, r.z) for r in armed_controller.render_list}

    render_list = armed_controller.advance(0.1, generate_layout(params.replace(rows=1, cols=1)))
    dropped = [r for r in render_list if r.id == PanelIndex(1, 1)][0]
    assert (dropped.x, dropped.z) == last[PanelIndex(1, 1)]


def test_is_settled(armed_controller, params):
    assert not armed_controller.is_settled()

    armed_controller.capture()
    assert not armed_controller.is_settled()

    armed_controller.advance(100.0, generate_layout(params))
    assert armed_controller.is_settled()


@pytest.mark.parametrize("rate", [0.0, -0.5, math.nan])
def test_invalid_rate_is_rejected(rate):
    with pytest.raises(InvalidParameter):
        CaptureTransitionController(rate=rate)
