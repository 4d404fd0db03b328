"""
Scene State (Data Model)
========================
This module defines the central data structure for the running session.

Why is this file needed?
------------------------
1. State Management: It holds the current layout snapshot, the panel spec, the
   roof probe and the capture controller in one place.
2. Ordering: ``tick()`` generates the layout from a single params snapshot and
   only then advances the controller, so one frame never mixes two snapshots.
3. Decoupling: Views read from this object; Qt signals and timers call into it.

Classes:
    SceneState: The main container class.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from solargrid.model.anchor import RoofAnchorProbe
from solargrid.model.energy import EnergyEstimate, PanelSpec, estimate_for_layout
from solargrid.model.layout import LayoutParams, generate_layout
from solargrid.model.motion import CaptureTransitionController, RenderItem

logger = logging.getLogger(__name__)

# Fields a parameter update event may carry. anchor_height is owned by the probe.
UPDATABLE_FIELDS = frozenset({"rows", "cols", "spacing", "vertical_offset", "horizontal_offset"})


@dataclass
class SceneState:
    """
    Singleton-like class that holds the state of the running session.
    Pass this instance to your Controllers and Views.
    """
    params: LayoutParams = field(default_factory=LayoutParams)
    panel_spec: PanelSpec = field(default_factory=PanelSpec)
    probe: RoofAnchorProbe = field(default_factory=RoofAnchorProbe)
    controller: CaptureTransitionController = field(default_factory=CaptureTransitionController)

    anchor_enabled: bool = True
    model_path: Optional[str] = None

    @property
    def is_captured(self) -> bool:
        return self.controller.is_captured

    def update_params(self, **changes) -> bool:
        """
        Replace the layout snapshot with one carrying ``changes``.

        Returns:
            True if the panel count changed (the estimate needs refreshing).

        Raises:
            InvalidParameter: if the new snapshot is invalid. The old one is kept.
            KeyError: for fields that are not user-updatable.
        """
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise KeyError(f"Not updatable: {', '.join(sorted(unknown))}")

        old = self.params
        self.params = old.replace(**changes)
        logger.debug(f"Layout params updated: {changes}")
        return (old.rows, old.cols) != (self.params.rows, self.params.cols)

    def set_anchor_from_bounds(self, bounds: Sequence[float]) -> float:
        """Asset-ready hook: probe the model bounds and apply the anchor."""
        self.probe.on_asset_ready(bounds)
        return self._apply_anchor()

    def set_anchor_enabled(self, enabled: bool) -> float:
        self.anchor_enabled = enabled
        return self._apply_anchor()

    def clear_model(self) -> None:
        self.model_path = None
        self.probe.reset()
        self._apply_anchor()

    def energy_estimate(self) -> EnergyEstimate:
        return estimate_for_layout(self.params, self.panel_spec)

    def tick(self, dt: float) -> list[RenderItem]:
        """Run one frame: generate from the current snapshot, then advance motion."""
        snapshot = self.params
        positions = generate_layout(snapshot)
        return self.controller.advance(dt, positions)

    def capture(self) -> bool:
        return self.controller.capture()

    def reset(self) -> None:
        """Start a new session: default layout, armed controller, no model."""
        self.params = LayoutParams()
        self.panel_spec = PanelSpec()
        self.probe = RoofAnchorProbe()
        self.controller = CaptureTransitionController(
            rate=self.controller.rate, ground=self.controller.ground
        )
        self.anchor_enabled = True
        self.model_path = None
        logger.info("Scene state has been reset.")

    def _apply_anchor(self) -> float:
        height = self.probe.anchor_height if self.anchor_enabled else 0.0
        if height != self.params.anchor_height:
            self.params = self.params.replace(anchor_height=height)
        return height
