import pytest
import pyvista as pv

from solargrid.controller.workers import ModelLoadWorker
from solargrid.model.state import SceneState


@pytest.fixture
def house_file(tmp_path):
    path = tmp_path / "house.vtp"
    pv.Cube(center=(0.0, 1.0, 0.0), x_length=4.0, y_length=2.0, z_length=3.0).save(str(path))
    return str(path)


def run_worker(filepath):
    """Run the worker body on the calling thread and collect what it emits."""
    loaded, errors = [], []
    worker = ModelLoadWorker(filepath)
    worker.model_loaded.connect(lambda *args: loaded.append(args))
    worker.error_occurred.connect(errors.append)
    worker.run()
    return loaded, errors


def test_loaded_signal_carries_path_mesh_and_bounds(house_file):
    loaded, errors = run_worker(house_file)

    assert errors == []
    assert len(loaded) == 1
    filepath, mesh, bounds = loaded[0]
    assert filepath == house_file
    assert isinstance(mesh, pv.DataSet)
    assert isinstance(bounds, tuple)
    assert bounds == pytest.approx((-2.0, 2.0, 0.0, 2.0, -1.5, 1.5))


def test_loaded_bounds_feed_the_roof_anchor(house_file):
    (_, _, bounds), = run_worker(house_file)[0]
    scene = SceneState()

    assert scene.set_anchor_from_bounds(bounds) == pytest.approx(2.0)
    assert scene.params.anchor_height == pytest.approx(2.0)


def test_missing_file_reports_error(tmp_path):
    loaded, errors = run_worker(str(tmp_path / "missing.obj"))

    assert loaded == []
    assert len(errors) == 1
    assert "not found" in errors[0]
