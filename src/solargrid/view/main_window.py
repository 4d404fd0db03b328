"""
Main Application Window
=======================
The primary GUI container that holds the Menu Bar, the control panels, the 3D
scene and the camera feed.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects panel signals, the frame clock and the model loader
   to the SceneState, and the SceneState output back to the 3D view.
"""
import logging
from typing import Optional

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QSplitter, QTabBar, QStackedWidget, QMessageBox
)
from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QCloseEvent

from solargrid.application import VISIBLE_APP_NAME
from solargrid.controller.camera import CameraGate
from solargrid.controller.frame_clock import FrameClock
from solargrid.controller.workers import ModelLoadWorker
from solargrid.model.errors import InvalidParameter
from solargrid.model.state import SceneState
from solargrid.view.tabs.tab_array import ArrayControlPanel
from solargrid.view.tabs.tab_roof import RoofControlPanel
from solargrid.view.widgets.camera_feed import CameraFeedWidget
from solargrid.view.widgets.plot_3d import PyVistaWidget

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, scene_state: SceneState) -> None:
        super().__init__()
        self.scene: SceneState = scene_state
        self._load_worker: Optional[ModelLoadWorker] = None
        self._placed: bool = False

        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1400, 900)

        # --- MAIN CONTAINER ---
        main_widget = QWidget()
        self.setCentralWidget(main_widget)

        main_layout = QVBoxLayout(main_widget)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        # --- 1. TOP TAB BAR ---
        self.tab_bar = QTabBar()
        self.tab_bar.setDrawBase(True)
        self.tab_bar.setExpanding(True)
        self.tab_bar.addTab("1. Array")
        self.tab_bar.addTab("2. Roof")
        self.tab_bar.setStyleSheet("""
                    QTabBar::tab { height: 35px; min-width: 100px; }
                    QTabBar::tab:selected { font-weight: bold; }
                """)
        main_layout.addWidget(self.tab_bar)

        # --- 2. SPLITTER (CONTENT AREA) ---
        splitter = QSplitter(Qt.Horizontal)
        main_layout.addWidget(splitter)

        # --- LEFT SIDE: Control Panels (Stacked) ---
        self.controls_stack = QStackedWidget()
        self.array_panel = ArrayControlPanel(self.scene.params)
        self.roof_panel = RoofControlPanel()
        self.controls_stack.addWidget(self.array_panel)  # Index 0
        self.controls_stack.addWidget(self.roof_panel)  # Index 1
        splitter.addWidget(self.controls_stack)

        # --- RIGHT SIDE: 3D Scene above Camera Feed ---
        view_splitter = QSplitter(Qt.Vertical)
        self.visualizer = PyVistaWidget()
        view_splitter.addWidget(self.visualizer)

        self.camera_gate = CameraGate(self)
        self.camera_feed = CameraFeedWidget(self.camera_gate)
        view_splitter.addWidget(self.camera_feed)
        view_splitter.setSizes([650, 250])

        splitter.addWidget(view_splitter)
        splitter.setSizes([350, 1050])

        # --- FRAME CLOCK ---
        self.frame_clock = FrameClock(parent=self)

        # --- SIGNAL CONNECTIONS ---
        self.tab_bar.currentChanged.connect(self.controls_stack.setCurrentIndex)

        self.array_panel.params_changed.connect(self.on_params_changed)
        self.array_panel.capture_requested.connect(self.on_capture)

        self.roof_panel.load_requested.connect(self.on_load_model)
        self.roof_panel.clear_requested.connect(self.on_clear_model)
        self.roof_panel.anchor_toggled.connect(self.on_anchor_toggled)

        self.frame_clock.ticked.connect(self.on_frame)

        # --- ACTIONS & MENUS ---
        self._create_actions()
        self._create_menus()

        # --- START ---
        self.refresh_estimate()
        self.frame_clock.start()
        self.camera_gate.request()

    def _create_actions(self) -> None:
        self.act_load_model = QAction("Load House Model...", self)
        self.act_load_model.triggered.connect(self.roof_panel.on_load_clicked)

        self.act_reset = QAction("Reset Session", self)
        self.act_reset.triggered.connect(self.on_reset_session)

        self.act_exit = QAction("Exit", self)
        self.act_exit.triggered.connect(self.close)

        self.act_capture = QAction("Capture", self)
        self.act_capture.setShortcut("Ctrl+Return")
        self.act_capture.triggered.connect(self.on_capture)

    def _create_menus(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        file_menu.addAction(self.act_load_model)
        file_menu.addSeparator()
        file_menu.addAction(self.act_reset)
        file_menu.addSeparator()
        file_menu.addAction(self.act_exit)

        array_menu = menu_bar.addMenu("&Array")
        array_menu.addAction(self.act_capture)

    # --- HELPER METHODS ---

    def refresh_estimate(self) -> None:
        self.array_panel.set_estimate(self.scene.energy_estimate())

    def refresh_ui_from_state(self) -> None:
        """Force the widgets to read from the SceneState again."""
        self.array_panel.load_from_state(self.scene.params)
        self.array_panel.set_captured(self.scene.is_captured)
        self.act_capture.setEnabled(not self.scene.is_captured)
        self.refresh_estimate()

    # --- SLOTS ---

    def on_frame(self, dt: float) -> None:
        """Called once per frame by the FrameClock."""
        render_list = self.scene.tick(dt)
        self.visualizer.update_panels(render_list)

        if not self._placed and self.scene.controller.is_settled():
            self._placed = True
            self.array_panel.set_placed()
            logger.info("Captured array has settled on the ground.")

    def on_params_changed(self, changes: dict) -> None:
        try:
            size_changed = self.scene.update_params(**changes)
        except InvalidParameter as e:
            logger.error(f"Rejected layout update {changes}: {e}")
            QMessageBox.critical(self, "Invalid Parameter", str(e))
            self.array_panel.load_from_state(self.scene.params)
            return

        if size_changed:
            self.refresh_estimate()

    def on_capture(self) -> None:
        if not self.scene.capture():
            return
        self.array_panel.set_captured(True)
        self.act_capture.setEnabled(False)

    def on_reset_session(self) -> None:
        self.scene.reset()
        self._placed = False
        self.visualizer.clear_panels()
        self.visualizer.clear_house_model()
        self.roof_panel.reset_status()
        self.refresh_ui_from_state()

    def on_load_model(self, filepath: str) -> None:
        if self._load_worker is not None and self._load_worker.isRunning():
            logger.warning("A model is already loading; ignoring request.")
            return

        self.roof_panel.set_loading(filepath)
        self._load_worker = ModelLoadWorker(filepath)
        self._load_worker.model_loaded.connect(self.on_model_loaded)
        self._load_worker.error_occurred.connect(self.on_model_load_error)
        self._load_worker.start()

    def on_model_loaded(self, filepath: str, mesh, bounds: tuple) -> None:
        """Asset-ready: runs on the GUI thread once the worker is done."""
        self.scene.model_path = filepath
        self.scene.set_anchor_from_bounds(bounds)
        self.visualizer.set_house_model(mesh)
        self.roof_panel.set_loaded(self.scene.params.anchor_height)

    def on_model_load_error(self, message: str) -> None:
        self.roof_panel.set_failed(message)
        QMessageBox.critical(self, "Model Error", f"Could not load the model:\n{message}")

    def on_clear_model(self) -> None:
        self.scene.clear_model()
        self.scene.set_anchor_enabled(True)
        self.visualizer.clear_house_model()
        self.roof_panel.reset_status()

    def on_anchor_toggled(self, enabled: bool) -> None:
        height = self.scene.set_anchor_enabled(enabled)
        self.roof_panel.set_anchor_height(height)

    def closeEvent(self, event: QCloseEvent, /) -> None:
        self.frame_clock.stop()
        self.camera_feed.stop()

        if self._load_worker is not None and self._load_worker.isRunning():
            self._load_worker.wait()

        # Close the PyVista plotter safely
        if self.visualizer and self.visualizer.plotter:
            self.visualizer.plotter.close()

        event.accept()
