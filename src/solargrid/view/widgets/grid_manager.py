"""
Grid Manager
Handles the ground plane and its reference grid (XZ plane, Y up).
Captured panels settle onto this plane.
"""
from typing import Optional
import numpy as np
import pyvista as pv

from solargrid import config


class GridManager:
    def __init__(self, plotter: pv.Plotter) -> None:
        self.plotter = plotter
        self.major_spacing: float = 1.0
        self.minor_spacing: float = 0.2
        self.ground_level: float = config.GROUND_LEVEL

        self._plane_actor: Optional[pv.Actor] = None
        self._grid_major_actor: Optional[pv.Actor] = None
        self._grid_minor_actor: Optional[pv.Actor] = None
        self._extent: Optional[float] = None

    @property
    def actors(self) -> list[pv.Actor]:
        return [a for a in (self._plane_actor, self._grid_minor_actor, self._grid_major_actor) if a]

    def update_grid(self, half_extent: float) -> None:
        """Rebuild the ground grid to cover [-half_extent, half_extent] in X and Z."""
        if self.plotter is None: return

        # Snap to whole major cells so small layout edits do not rebuild the grid
        half_extent = float(np.ceil(max(half_extent, self.major_spacing) / self.major_spacing) * self.major_spacing)
        if half_extent == self._extent:
            return
        self.clear_actors()
        self._extent = half_extent
        bounds = (-half_extent, half_extent, -half_extent, half_extent)

        plane = pv.Plane(
            center=(0.0, self.ground_level - 0.002, 0.0),
            direction=(0.0, 1.0, 0.0),
            i_size=2 * half_extent,
            j_size=2 * half_extent,
        )
        self._plane_actor = self.plotter.add_mesh(
            plane, color="#C8D6C0", opacity=0.35, pickable=False, show_scalar_bar=False
        )

        grid_minor = self._build_xz_grid_polydata(bounds, spacing=self.minor_spacing, y=self.ground_level)
        grid_major = self._build_xz_grid_polydata(bounds, spacing=self.major_spacing, y=self.ground_level)

        self._grid_minor_actor = self.plotter.add_mesh(
            grid_minor, color="#E0E0E0", line_width=1, opacity=0.5, pickable=False
        )
        self._grid_major_actor = self.plotter.add_mesh(
            grid_major, color="#B0B0B0", line_width=1, opacity=0.8, pickable=False
        )

    def set_visible(self, visible: bool) -> None:
        for a in self.actors:
            a.SetVisibility(visible)

    @staticmethod
    def _build_xz_grid_polydata(bounds, spacing, y: float = 0.0) -> pv.PolyData:
        """
        Create a grid in the XZ plane with the given bounds and spacing.

        Args:
            bounds: (x_min, x_max, z_min, z_max)
            spacing: Grid spacing in both directions.
            y: Height of the plane.

        Returns:
            A PyVista PolyData grid object.
        """
        x_min, x_max, z_min, z_max = bounds
        xs = np.arange(np.floor(x_min / spacing) * spacing, np.ceil(x_max / spacing) * spacing + spacing / 2, spacing)
        zs = np.arange(np.floor(z_min / spacing) * spacing, np.ceil(z_max / spacing) * spacing + spacing / 2, spacing)

        n_lines = len(xs) + len(zs)
        if n_lines == 0: return pv.PolyData()

        points = np.empty((n_lines * 2, 3), dtype=float)
        cells = np.empty(n_lines * 3, dtype=int)

        pid, cid = 0, 0
        for x in xs:
            points[pid] = (x, y, z_min)
            points[pid + 1] = (x, y, z_max)
            cells[cid:cid + 3] = (2, pid, pid + 1)
            pid += 2
            cid += 3
        for z in zs:
            points[pid] = (x_min, y, z)
            points[pid + 1] = (x_max, y, z)
            cells[cid:cid + 3] = (2, pid, pid + 1)
            pid += 2
            cid += 3

        return pv.PolyData(points, lines=cells)

    def clear_actors(self) -> None:
        """Clears the plane and grid actors from the plotter."""
        for a in self.actors:
            self.plotter.remove_actor(a)
        self._plane_actor = None
        self._grid_minor_actor = None
        self._grid_major_actor = None
        self._extent = None
