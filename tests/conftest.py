import pytest

from solargrid.model.layout import LayoutParams, generate_layout
from solargrid.model.motion import CaptureTransitionController
from solargrid.model.state import SceneState


@pytest.fixture
def params():
    """The 2x2 reference grid."""
    return LayoutParams(rows=2, cols=2, spacing=0.2, vertical_offset=0.0, horizontal_offset=0.0)


@pytest.fixture
def controller():
    return CaptureTransitionController(rate=0.5, ground=0.0)


@pytest.fixture
def armed_controller(controller, params):
    """Controller that has seen one frame of the 2x2 grid at height 1.5."""
    controller.advance(0.0, generate_layout(params.replace(vertical_offset=1.5)))
    return controller


@pytest.fixture
def scene():
    return SceneState()
