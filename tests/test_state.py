import pytest

from solargrid.model.errors import InvalidParameter
from solargrid.model.layout import LayoutParams
from solargrid.model.motion import CaptureMode

ROOF = (-5.0, 5.0, 0.0, 3.0, -4.0, 4.0)


def test_update_reports_size_changes(scene):
    assert scene.update_params(rows=5) is True
    assert scene.update_params(vertical_offset=1.0) is False
    assert scene.update_params(cols=scene.params.cols) is False
    assert scene.energy_estimate().total_panels == 5 * scene.params.cols


def test_update_replaces_snapshot(scene):
    old = scene.params
    scene.update_params(spacing=0.5)

    assert scene.params is not old
    assert old.spacing == pytest.approx(0.2)
    assert scene.params.spacing == pytest.approx(0.5)


def test_invalid_update_keeps_old_snapshot(scene):
    old = scene.params
    with pytest.raises(InvalidParameter):
        scene.update_params(rows=0)
    assert scene.params is old


def test_anchor_height_is_not_user_updatable(scene):
    with pytest.raises(KeyError):
        scene.update_params(anchor_height=2.0)


def test_tick_uses_latest_snapshot(scene):
    scene.update_params(rows=1, cols=2, vertical_offset=0.8)
    render_list = scene.tick(0.016)

    assert len(render_list) == 2
    assert all(item.y == pytest.approx(0.8) for item in render_list)


def test_anchor_lifts_panels(scene):
    scene.update_params(vertical_offset=0.2)
    scene.set_anchor_from_bounds(ROOF)

    assert scene.params.anchor_height == 3.0
    assert all(item.y == pytest.approx(3.2) for item in scene.tick(0.0))

    scene.set_anchor_enabled(False)
    assert scene.params.anchor_height == 0.0
    assert all(item.y == pytest.approx(0.2) for item in scene.tick(0.0))


def test_degenerate_model_keeps_anchor(scene):
    scene.set_anchor_from_bounds(ROOF)
    scene.set_anchor_from_bounds((0.0, 0.0, 1.0, -1.0, 0.0, 0.0))
    assert scene.params.anchor_height == 3.0


def test_clear_model_drops_anchor(scene):
    scene.model_path = "house.glb"
    scene.set_anchor_from_bounds(ROOF)
    scene.clear_model()

    assert scene.model_path is None
    assert scene.params.anchor_height == 0.0


def test_capture_lowers_array_and_estimate_is_unchanged(scene):
    scene.update_params(vertical_offset=2.0)
    scene.tick(0.0)
    estimate = scene.energy_estimate()

    assert scene.capture() is True
    assert scene.capture() is False
    for _ in range(10):
        scene.tick(0.1)

    assert all(0.0 < item.y < 2.0 for item in scene.controller.render_list)
    assert scene.energy_estimate() == estimate


def test_reset_starts_new_session(scene):
    scene.update_params(rows=6)
    scene.set_anchor_from_bounds(ROOF)
    scene.tick(0.0)
    scene.capture()

    scene.reset()

    assert scene.params == LayoutParams()
    assert scene.controller.mode is CaptureMode.ARMED
    assert scene.probe.anchor_height == 0.0
    assert not scene.controller.states
