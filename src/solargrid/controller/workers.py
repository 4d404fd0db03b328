"""
Background Workers (Threading)
==============================
This module contains QThread subclasses for handling long-running tasks.

Why is this file needed?
------------------------
1. Responsiveness: Reading a house model from disk can take a while. Doing it
   on the main thread would freeze the render loop and the capture animation.
2. Signals: They provide a safe way to hand the loaded model back to the GUI
   thread using Qt Signals. The bounds emitted with it are the "asset ready"
   input of the roof anchor.

Classes:
    ModelLoadWorker: Loads a 3D model file with PyVista.
"""
import logging
import os

import pyvista as pv
from PySide6.QtCore import QThread, Signal

logger = logging.getLogger(__name__)


class ModelLoadWorker(QThread):
    # (filepath, mesh, bounds) where bounds = (xmin, xmax, ymin, ymax, zmin, zmax)
    model_loaded = Signal(str, object, object)
    error_occurred = Signal(str)

    def __init__(self, filepath: str) -> None:
        super().__init__()
        self.filepath = filepath

    def run(self) -> None:
        try:
            logger.info(f"Loading model from: {self.filepath}")
            if not os.path.exists(self.filepath):
                raise FileNotFoundError(f"Model file not found: {self.filepath}")

            mesh = pv.read(self.filepath)
            bounds = tuple(float(b) for b in mesh.bounds)

            logger.info(f"Model loaded, bounds: {bounds}")
            self.model_loaded.emit(self.filepath, mesh, bounds)

        except Exception as e:
            logger.error(f"Error in ModelLoadWorker: {e}")
            self.error_occurred.emit(str(e))
