"""
Roof Anchor
===========
Turns the bounding box of a loaded house model into the anchor height that
lifts the array onto the roof.

The model is loaded asynchronously by the view layer. Until the first valid
bounding box arrives the anchor height stays 0; a degenerate box is ignored
and the last valid height is kept.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box, Y up."""
    min_x: float
    max_x: float
    min_y: float
    max_y: float
    min_z: float
    max_z: float

    @classmethod
    def from_bounds(cls, bounds: Sequence[float]) -> BoundingBox:
        """Build from PyVista ordering ``(xmin, xmax, ymin, ymax, zmin, zmax)``."""
        if len(bounds) != 6:
            raise ValueError(f"Expected 6 bound values, got {len(bounds)}")
        return cls(*(float(b) for b in bounds))

    @property
    def is_valid(self) -> bool:
        values = (self.min_x, self.max_x, self.min_y, self.max_y, self.min_z, self.max_z)
        if not all(math.isfinite(v) for v in values):
            return False
        return self.min_x <= self.max_x and self.min_y <= self.max_y and self.min_z <= self.max_z


class RoofAnchorProbe:
    def __init__(self) -> None:
        self._anchor_height: float = 0.0
        self._ready: bool = False

    @property
    def is_ready(self) -> bool:
        return self._ready

    @property
    def anchor_height(self) -> float:
        return self._anchor_height

    @staticmethod
    def probe(box: BoundingBox) -> float:
        """Anchor height for a model: the top of its bounding box."""
        return box.max_y

    def on_asset_ready(self, bounds: Optional[Sequence[float] | BoundingBox]) -> float:
        """
        Feed the bounding box of a freshly loaded model.

        Returns:
            The anchor height now in effect.
        """
        try:
            box = bounds if isinstance(bounds, BoundingBox) else BoundingBox.from_bounds(bounds)
        except (TypeError, ValueError) as e:
            logger.warning(f"Unusable model bounds {bounds!r}: {e}. Keeping anchor at {self._anchor_height}.")
            return self._anchor_height

        if not box.is_valid:
            logger.warning(f"Degenerate model bounds {box}. Keeping anchor at {self._anchor_height}.")
            return self._anchor_height

        self._anchor_height = self.probe(box)
        self._ready = True
        logger.info(f"Roof anchor height set to {self._anchor_height:.3f} m.")
        return self._anchor_height

    def reset(self) -> None:
        """Forget the current model (asset changed or unloaded)."""
        self._anchor_height = 0.0
        self._ready = False
