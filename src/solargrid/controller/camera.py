"""
Camera Gate
===========
Tracks whether the camera feed may be shown.

The layout and the estimate keep working regardless; only the feed widget
waits for this gate. The state is None while the request is pending.
"""
import logging
from typing import Optional

from PySide6.QtCore import QCameraPermission, QCoreApplication, QObject, Qt, Signal
from PySide6.QtMultimedia import QCameraDevice, QMediaDevices

logger = logging.getLogger(__name__)


class CameraGate(QObject):
    permission_changed = Signal(bool)

    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._granted: Optional[bool] = None

    @property
    def granted(self) -> Optional[bool]:
        return self._granted

    @staticmethod
    def default_device() -> Optional[QCameraDevice]:
        device = QMediaDevices.defaultVideoInput()
        return None if device.isNull() else device

    def request(self) -> None:
        """Ask for camera access; the answer arrives via ``permission_changed``."""
        app = QCoreApplication.instance()
        permission = QCameraPermission()
        status = app.checkPermission(permission)

        if status == Qt.PermissionStatus.Undetermined:
            logger.info("Requesting camera permission...")
            app.requestPermission(permission, self, self._on_permission_result)
            return

        self._resolve(status == Qt.PermissionStatus.Granted)

    def _on_permission_result(self, *_) -> None:
        status = QCoreApplication.instance().checkPermission(QCameraPermission())
        self._resolve(status == Qt.PermissionStatus.Granted)

    def _resolve(self, granted: bool) -> None:
        if granted and self.default_device() is None:
            logger.warning("Camera permission granted but no video input is available.")
            granted = False

        if granted != self._granted:
            self._granted = granted
            logger.info(f"Camera access {'granted' if granted else 'denied'}.")
            self.permission_changed.emit(granted)
