"""
Capture Transition
==================
Per-panel vertical motion driven once per rendered frame.

While the array is ARMED every panel snaps to the live layout height and the
set of panels follows rows/cols. Once CAPTURED the panel set is frozen and each
panel eases down to the ground with a clamped first-order step:

    y <- y + (ground - y) * min(dt * rate, 1)

X and Z are always taken from the current layout; only Y lags.

Classes:
    CaptureMode: ARMED / CAPTURED.
    PanelMotionState: Mutable vertical state of one panel.
    RenderItem: One entry of the per-frame render list.
    CaptureTransitionController: Owns all motion states and advances them.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import Mapping, Sequence

from solargrid import config
from solargrid.model.errors import InvalidParameter
from solargrid.model.layout import PanelIndex, PanelPosition

logger = logging.getLogger(__name__)


class CaptureMode(StrEnum):
    ARMED = "armed"
    CAPTURED = "captured"


@dataclass
class PanelMotionState:
    index: PanelIndex
    current_y: float
    # Last known horizontal placement, kept for panels that dropped out of the
    # layout after capture.
    x: float = 0.0
    z: float = 0.0


@dataclass(frozen=True)
class RenderItem:
    id: PanelIndex
    x: float
    y: float
    z: float


def check_frame_delta(dt: float) -> None:
    """Reject negative or non-finite frame deltas."""
    if isinstance(dt, bool) or not isinstance(dt, (int, float)) or not math.isfinite(dt) or dt < 0:
        raise InvalidParameter(f"Frame delta must be a finite number >= 0, got {dt!r}")


def approach(current: float, target: float, dt: float, rate: float) -> float:
    """One clamped exponential step from ``current`` towards ``target``."""
    check_frame_delta(dt)
    return current + (target - current) * min(dt * rate, 1.0)


class CaptureTransitionController:
    """
    Owns one PanelMotionState per (row, col) and advances them every frame.

    Nothing else mutates the states; the renderer only reads ``render_list``.
    """

    def __init__(self, rate: float = config.CAPTURE_RATE, ground: float = config.GROUND_LEVEL) -> None:
        if not math.isfinite(rate) or rate <= 0:
            raise InvalidParameter(f"Capture rate must be a finite number > 0, got {rate!r}")
        self.rate = rate
        self.ground = ground
        self._mode = CaptureMode.ARMED
        self._states: dict[PanelIndex, PanelMotionState] = {}
        self._render_list: list[RenderItem] = []

    # --- PROPERTIES ---

    @property
    def mode(self) -> CaptureMode:
        return self._mode

    @property
    def is_captured(self) -> bool:
        return self._mode is CaptureMode.CAPTURED

    @property
    def states(self) -> Mapping[PanelIndex, PanelMotionState]:
        return MappingProxyType(self._states)

    @property
    def render_list(self) -> list[RenderItem]:
        """Render list produced by the most recent ``advance()``."""
        return list(self._render_list)

    # --- TRANSITIONS ---

    def capture(self) -> bool:
        """
        Lock the current panel set and start the descent.

        Returns:
            True if this call performed the transition, False if already captured.
        """
        if self.is_captured:
            logger.debug("Capture requested while already captured; ignoring.")
            return False
        self._mode = CaptureMode.CAPTURED
        logger.info(f"Array captured with {len(self._states)} panels.")
        return True

    def advance(self, dt: float, positions: Sequence[PanelPosition]) -> list[RenderItem]:
        """
        Advance all panels by one frame.

        Args:
            dt: Seconds since the previous frame (>= 0).
            positions: Layout generated from this frame's single params snapshot.

        Returns:
            The render list, one item per tracked panel.
        """
        check_frame_delta(dt)
        if self.is_captured:
            self._advance_captured(dt, positions)
        else:
            self._sync_armed(positions)

        self._render_list = [
            RenderItem(id=s.index, x=s.x, y=s.current_y, z=s.z) for s in self._states.values()
        ]
        return self.render_list

    def is_settled(self, tolerance: float = config.SETTLE_TOLERANCE) -> bool:
        """True once captured and every panel is within ``tolerance`` of the ground."""
        if not self.is_captured:
            return False
        return all(abs(s.current_y - self.ground) <= tolerance for s in self._states.values())

    # --- INTERNAL ---

    def _sync_armed(self, positions: Sequence[PanelPosition]) -> None:
        synced: dict[PanelIndex, PanelMotionState] = {}
        for pos in positions:
            state = self._states.get(pos.index)
            if state is None:
                state = PanelMotionState(index=pos.index, current_y=pos.y)
            state.current_y = pos.y
            state.x = pos.x
            state.z = pos.z
            synced[pos.index] = state

        if len(synced) != len(self._states) or synced.keys() != self._states.keys():
            logger.debug(f"Panel set changed: {len(self._states)} -> {len(synced)} panels.")
        self._states = synced

    def _advance_captured(self, dt: float, positions: Sequence[PanelPosition]) -> None:
        by_index = {pos.index: pos for pos in positions}
        for state in self._states.values():
            pos = by_index.get(state.index)
            if pos is not None:
                state.x = pos.x
                state.z = pos.z
            state.current_y = approach(state.current_y, self.ground, dt, self.rate)
