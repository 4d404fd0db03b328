"""
Grid Layout
===========
Maps the user-tunable grid parameters to an ordered set of 3D panel positions.

The grid is centered on the origin in X (columns) and Z (rows). Y is the
vertical axis: every panel sits at ``vertical_offset + anchor_height``.

Classes:
    LayoutParams: Immutable snapshot of the grid inputs.
    PanelIndex: Stable (row, col) identity of a panel.
    PanelPosition: Derived position of one panel.
"""
from __future__ import annotations

import dataclasses
import math
import numbers
from dataclasses import dataclass
from typing import NamedTuple, Protocol, Sequence, TYPE_CHECKING

import numpy as np

from solargrid import config
from solargrid.model.errors import InvalidParameter

if TYPE_CHECKING:
    import numpy.typing as npt

_REAL_FIELDS = (
    "spacing", "vertical_offset", "horizontal_offset", "anchor_height", "panel_width", "panel_depth",
)


class HasPosition(Protocol):
    x: float
    y: float
    z: float


class PanelIndex(NamedTuple):
    row: int
    col: int

    def __str__(self) -> str:
        return f"{self.row}-{self.col}"


@dataclass(frozen=True)
class LayoutParams:
    """
    Snapshot of the grid inputs.

    Never edited in place: a parameter change produces a new snapshot via
    ``replace()``, so the generator, the estimator and the UI can all read the
    same instance without coordination.
    """
    rows: int = config.DEFAULT_ROWS
    cols: int = config.DEFAULT_COLS
    spacing: float = config.DEFAULT_SPACING
    vertical_offset: float = config.DEFAULT_VERTICAL_OFFSET
    horizontal_offset: float = 0.0
    anchor_height: float = 0.0
    panel_width: float = config.PANEL_WIDTH
    panel_depth: float = config.PANEL_DEPTH

    def __post_init__(self) -> None:
        for name in ("rows", "cols"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < 1:
                raise InvalidParameter(f"{name} must be an integer >= 1, got {value!r}")
        for name in _REAL_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real) or not math.isfinite(value):
                raise InvalidParameter(f"{name} must be a finite number, got {value!r}")
        if self.spacing < 0:
            raise InvalidParameter(f"spacing must be >= 0, got {self.spacing!r}")
        if self.panel_width <= 0 or self.panel_depth <= 0:
            raise InvalidParameter(
                f"panel footprint must be positive, got {self.panel_width!r} x {self.panel_depth!r}"
            )

    @property
    def panel_count(self) -> int:
        return self.rows * self.cols

    @property
    def height(self) -> float:
        """Height of every panel above the reference plane."""
        return self.vertical_offset + self.anchor_height

    def replace(self, **changes) -> LayoutParams:
        """Return a new, validated snapshot with the given fields changed."""
        return dataclasses.replace(self, **changes)


@dataclass(frozen=True)
class PanelPosition:
    index: PanelIndex
    x: float
    y: float
    z: float


def generate_layout(params: LayoutParams) -> list[PanelPosition]:
    """
    Compute one position per (row, col), in row-major order.

    Args:
        params: The grid snapshot to lay out.

    Returns:
        ``rows * cols`` positions. Identical params always give identical output.
    """
    if not isinstance(params, LayoutParams):
        raise InvalidParameter(f"Expected LayoutParams, got {type(params).__name__}")

    pitch_x = params.panel_width + params.spacing
    pitch_z = params.panel_depth + params.spacing
    half_x = ((params.cols - 1) * pitch_x) / 2
    half_z = ((params.rows - 1) * pitch_z) / 2
    y = params.vertical_offset + params.anchor_height

    positions: list[PanelPosition] = []
    for row in range(params.rows):
        z = row * pitch_z - half_z
        for col in range(params.cols):
            x = col * pitch_x - half_x + params.horizontal_offset
            positions.append(PanelPosition(PanelIndex(row, col), x, y, z))
    return positions


def layout_to_array(positions: Sequence[HasPosition]) -> npt.NDArray[np.float64]:
    """
    Stack positions into an (N, 3) array, in the given order.

    Accepts anything with ``x``, ``y`` and ``z`` attributes, so both layout
    positions and render items can be handed to the renderer this way.
    """
    if not positions:
        return np.empty((0, 3), dtype=np.float64)
    return np.array([(p.x, p.y, p.z) for p in positions], dtype=np.float64)


def footprint_half_extent(coords: npt.NDArray[np.float64]) -> float:
    """Largest |x| or |z| in an (N, 3) coordinate array, 0 when empty."""
    if coords.size == 0:
        return 0.0
    return float(np.abs(coords[:, [0, 2]]).max())
