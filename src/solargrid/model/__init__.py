"""
The MODEL layer contains pure data structures and business logic.
It has NO knowledge of the GUI (Qt) or the Visualization (PyVista).
It deals with Layout, Energy and Motion.
"""
from solargrid.model.errors import InvalidParameter
from solargrid.model.layout import LayoutParams, PanelIndex, PanelPosition, generate_layout, layout_to_array
from solargrid.model.energy import EnergyEstimate, PanelSpec, estimate, estimate_for_layout
from solargrid.model.motion import CaptureMode, CaptureTransitionController, PanelMotionState, RenderItem
from solargrid.model.anchor import BoundingBox, RoofAnchorProbe

__all__ = [
    "InvalidParameter",
    "LayoutParams", "PanelIndex", "PanelPosition", "generate_layout", "layout_to_array",
    "EnergyEstimate", "PanelSpec", "estimate", "estimate_for_layout",
    "CaptureMode", "CaptureTransitionController", "PanelMotionState", "RenderItem",
    "BoundingBox", "RoofAnchorProbe",
]
