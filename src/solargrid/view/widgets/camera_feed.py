"""
Camera Feed Widget
Shows the live device camera next to the 3D scene once access is granted.
"""
import logging
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtMultimedia import QCamera, QMediaCaptureSession
from PySide6.QtMultimediaWidgets import QVideoWidget
from PySide6.QtWidgets import QLabel, QStackedWidget, QVBoxLayout, QWidget

from solargrid.controller.camera import CameraGate

logger = logging.getLogger(__name__)


class CameraFeedWidget(QWidget):
    def __init__(self, gate: CameraGate, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.gate = gate

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.stack = QStackedWidget()
        layout.addWidget(self.stack)

        self.lbl_placeholder = QLabel("Requesting permission...")
        self.lbl_placeholder.setAlignment(Qt.AlignCenter)
        self.lbl_placeholder.setStyleSheet("color: gray;")
        self.stack.addWidget(self.lbl_placeholder)

        self.video_widget = QVideoWidget()
        self.stack.addWidget(self.video_widget)

        self._camera: Optional[QCamera] = None
        self._session = QMediaCaptureSession(self)
        self._session.setVideoOutput(self.video_widget)

        self.gate.permission_changed.connect(self.on_permission_changed)

    def on_permission_changed(self, granted: bool) -> None:
        if granted:
            self._start_camera()
        else:
            self.stop()
            self.lbl_placeholder.setText("No camera access")
            self.stack.setCurrentWidget(self.lbl_placeholder)

    def _start_camera(self) -> None:
        device = self.gate.default_device()
        if device is None:
            self.on_permission_changed(False)
            return

        if self._camera is None:
            self._camera = QCamera(device, self)
            self._camera.errorOccurred.connect(self._on_camera_error)
            self._session.setCamera(self._camera)

        self._camera.start()
        self.stack.setCurrentWidget(self.video_widget)
        logger.info(f"Camera feed started: {device.description()}")

    def _on_camera_error(self, error: QCamera.Error, message: str) -> None:
        logger.error(f"Camera error ({error}): {message}")
        self.lbl_placeholder.setText(f"Camera error: {message}")
        self.stack.setCurrentWidget(self.lbl_placeholder)

    def stop(self) -> None:
        if self._camera is not None and self._camera.isActive():
            self._camera.stop()
