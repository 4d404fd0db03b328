"""
3D Visualization Widget (PyVista Wrapper)
"""

from __future__ import annotations

import os
from typing import Optional, Sequence

import logging

from PySide6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QFrame, QStyle
from PySide6.QtGui import QCloseEvent, QResizeEvent

from pyvistaqt import QtInteractor
import pyvista as pv

from solargrid import config
from solargrid.model.layout import PanelIndex, footprint_half_extent, layout_to_array
from solargrid.model.motion import RenderItem
from solargrid.view.widgets.grid_manager import GridManager

logger = logging.getLogger(__name__)

CAMERA_POSITION = (0.0, 5.0, 10.0)
CAMERA_VIEW_ANGLE = 50.0
SUN_POSITION = (5.0, 10.0, 5.0)


class PyVistaWidget(QWidget):
    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        self.layout_box: QVBoxLayout = QVBoxLayout(self)
        self.layout_box.setContentsMargins(0, 0, 0, 0)

        self.plotter: QtInteractor = QtInteractor(self)
        self.layout_box.addWidget(self.plotter)

        self._init_plotter()

        # --- Managers ---
        self._grid_manager = GridManager(self.plotter)

        # --- Panel template (shared by all panel actors) ---
        self._panel_mesh: pv.PolyData = pv.Cube(
            x_length=config.PANEL_WIDTH,
            y_length=config.PANEL_THICKNESS,
            z_length=config.PANEL_DEPTH,
        )
        self._panel_texture: Optional[pv.Texture] = self._load_panel_texture(config.SOLAR_TEXTURE_PATH)

        # --- Actors state ---
        self._panel_actors: dict[PanelIndex, pv.Actor] = {}
        self._house_actor: Optional[pv.Actor] = None

        # Last drawn render list, to skip redundant renders
        self._last_render_list: Optional[list[RenderItem]] = None

        # --- Visibility state ---
        self._visible_grid: bool = True
        self._visible_house: bool = True

        self._setup_overlay_controls()
        self._grid_manager.update_grid(half_extent=5.0)

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def update_panels(self, render_list: Sequence[RenderItem]) -> None:
        """
        Draws the panels at the positions of the render list.
        Actors are created/removed to match the ids and otherwise only moved.
        """
        render_list = list(render_list)
        if render_list == self._last_render_list:
            return
        self._last_render_list = render_list

        wanted = {item.id for item in render_list}
        for index in [i for i in self._panel_actors if i not in wanted]:
            self.plotter.remove_actor(self._panel_actors.pop(index), render=False)

        for item in render_list:
            actor = self._panel_actors.get(item.id)
            if actor is None:
                actor = self._add_panel_actor(item.id)
            actor.position = (item.x, item.y, item.z)

        if render_list:
            coords = layout_to_array(render_list)
            self._grid_manager.update_grid(half_extent=footprint_half_extent(coords) + 2.0)
            self._grid_manager.set_visible(self._visible_grid)

        self.plotter.render()

    def set_house_model(self, mesh: pv.DataSet) -> None:
        """Shows the loaded house model, replacing the previous one."""
        self.clear_house_model(render=False)
        self._house_actor = self.plotter.add_mesh(
            mesh,
            color="#D9C8B4",
            smooth_shading=True,
            pickable=False,
            show_scalar_bar=False,
        )
        self._house_actor.SetVisibility(self._visible_house)
        self.btn_vis_house.setEnabled(True)
        self.plotter.render()

    def clear_house_model(self, render: bool = True) -> None:
        if self._house_actor:
            self.plotter.remove_actor(self._house_actor, render=False)
            self._house_actor = None
        self.btn_vis_house.setEnabled(False)
        if render:
            self.plotter.render()

    def reset_camera(self) -> None:
        cam = self.plotter.camera
        cam.position = CAMERA_POSITION
        cam.focal_point = (0.0, 0.0, 0.0)
        cam.up = (0.0, 1.0, 0.0)
        cam.view_angle = CAMERA_VIEW_ANGLE
        self.plotter.render()

    def clear_panels(self) -> None:
        for actor in self._panel_actors.values():
            self.plotter.remove_actor(actor, render=False)
        self._panel_actors.clear()
        self._last_render_list = None

    # ------------------------------------------------------------------------------
    # Internal: Layer Management
    # ------------------------------------------------------------------------------

    def _add_panel_actor(self, index: PanelIndex) -> pv.Actor:
        if self._panel_texture is not None:
            actor = self.plotter.add_mesh(
                self._panel_mesh,
                texture=self._panel_texture,
                pbr=True,
                metallic=0.6,
                roughness=0.3,
                pickable=False,
                show_scalar_bar=False,
                render=False,
            )
        else:
            actor = self.plotter.add_mesh(
                self._panel_mesh,
                color="#1F3A68",
                pbr=True,
                metallic=0.6,
                roughness=0.3,
                show_edges=True,
                edge_color="#9DB4D6",
                pickable=False,
                show_scalar_bar=False,
                render=False,
            )
        self._panel_actors[index] = actor
        return actor

    @staticmethod
    def _load_panel_texture(path: str) -> Optional[pv.Texture]:
        if not os.path.exists(path):
            logger.info(f"Panel texture not found at {path}, using flat color.")
            return None
        try:
            return pv.read_texture(path)
        except Exception as e:
            logger.error(f"Failed to load panel texture from {path}: {e}")
            return None

    def _apply_visibility(self) -> None:
        self._grid_manager.set_visible(self._visible_grid)
        if self._house_actor:
            self._house_actor.SetVisibility(self._visible_house)

    # ------------------------------------------------------------------------------
    # Internal: Setup
    # ------------------------------------------------------------------------------

    def _init_plotter(self) -> None:
        self.plotter.set_background("#E8EEF4", top="#B8D4F0")

        # Dim fill light + one shadow-casting sun
        self.plotter.remove_all_lights()
        self.plotter.add_light(pv.Light(light_type="headlight", intensity=0.4))
        sun = pv.Light(position=SUN_POSITION, focal_point=(0.0, 0.0, 0.0), light_type="scene light")
        sun.intensity = 1.0
        self.plotter.add_light(sun)
        self.plotter.enable_shadows()

        self.reset_camera()

    def _setup_overlay_controls(self) -> None:
        """Floating toggle buttons."""
        self.overlay_widget = QFrame(self)
        self.overlay_widget.setStyleSheet("""
            QFrame { background-color: rgba(255, 255, 255, 200); border-radius: 6px; border: 1px solid #ccc; }
            QPushButton { background-color: transparent; border: none; padding: 4px; }
            QPushButton:checked { background-color: rgba(0, 120, 215, 50); border: 1px solid #0078D7; border-radius: 3px; }
            QPushButton:hover { background-color: rgba(0, 0, 0, 10); }
        """)

        layout = QHBoxLayout(self.overlay_widget)
        layout.setContentsMargins(4, 4, 4, 4)

        def make_btn(icon, slot, tooltip, checkable=True, default_state=True):
            btn = QPushButton()
            btn.setIcon(self.style().standardIcon(icon))
            btn.setToolTip(tooltip)
            if checkable:
                btn.setCheckable(True)
                btn.setChecked(default_state)
                btn.toggled.connect(slot)
            else:
                btn.clicked.connect(slot)
            layout.addWidget(btn)
            return btn

        self.btn_vis_grid = make_btn(QStyle.SP_FileDialogListView, self.on_toggle_grid, "Show Ground Grid")
        self.btn_vis_house = make_btn(QStyle.SP_DirHomeIcon, self.on_toggle_house, "Show House Model")
        self.btn_vis_house.setEnabled(False)
        self.btn_reset_cam = make_btn(QStyle.SP_BrowserReload, self.reset_camera, "Reset Camera", checkable=False)

        self.overlay_widget.adjustSize()
        self.overlay_widget.move(8, 8)

    # --- Toggle Slots ---
    def on_toggle_grid(self, checked: bool) -> None:
        self._visible_grid = checked
        self._apply_visibility()
        self.plotter.render()

    def on_toggle_house(self, checked: bool) -> None:
        self._visible_house = checked
        self._apply_visibility()
        self.plotter.render()

    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        self.overlay_widget.raise_()

    def closeEvent(self, event: QCloseEvent) -> None:
        self.plotter.close()
        event.accept()
