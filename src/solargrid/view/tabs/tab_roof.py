"""
Roof Anchor Control Panel
"""
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QLabel, QPushButton, QGroupBox, QFormLayout, QCheckBox, QFileDialog
)
from PySide6.QtCore import Signal, Qt

MODEL_FILE_FILTER = "3D Models (*.glb *.gltf *.obj *.stl *.ply *.vtk *.vtp);;All Files (*)"


class RoofControlPanel(QWidget):
    # Emitted with the chosen model file path
    load_requested = Signal(str)
    clear_requested = Signal()
    anchor_toggled = Signal(bool)

    def __init__(self) -> None:
        super().__init__()

        layout = QVBoxLayout(self)

        # --- Model Group ---
        grp = QGroupBox("House Model")
        form = QFormLayout(grp)

        self.chk_anchor = QCheckBox("")
        self.chk_anchor.setChecked(True)
        self.chk_anchor.toggled.connect(self.anchor_toggled)
        form.addRow("Anchor to roof", self.chk_anchor)

        self.lbl_anchor = QLabel("0.00 m")
        form.addRow("Anchor height:", self.lbl_anchor)

        layout.addWidget(grp)

        # --- Actions ---
        self.btn_load = QPushButton("Load Model...")
        self.btn_load.setMinimumHeight(40)
        self.btn_load.clicked.connect(self.on_load_clicked)
        layout.addWidget(self.btn_load)

        self.btn_clear = QPushButton("Remove Model")
        self.btn_clear.setEnabled(False)
        self.btn_clear.clicked.connect(self.clear_requested)
        layout.addWidget(self.btn_clear)

        # --- Status Info ---
        self.lbl_status = QLabel("Status: No model loaded.")
        self.lbl_status.setAlignment(Qt.AlignCenter)
        self.lbl_status.setWordWrap(True)
        self.lbl_status.setStyleSheet("color: gray;")
        layout.addWidget(self.lbl_status)

        layout.addStretch()

    # --- PROPERTIES ---

    @property
    def status_message(self) -> str:
        return self.lbl_status.text()

    @status_message.setter
    def status_message(self, text: str) -> None:
        self.lbl_status.setText(text)
        self.lbl_status.setStyleSheet("color: gray;")

    def _set_status_styled(self, text: str, color: str, bold: bool = False) -> None:
        self.lbl_status.setText(text)
        weight = "bold" if bold else "normal"
        self.lbl_status.setStyleSheet(f"color: {color}; font-weight: {weight};")

    # --- SLOTS ---

    def on_load_clicked(self) -> None:
        fname, _ = QFileDialog.getOpenFileName(self, "Load House Model", "", MODEL_FILE_FILTER)
        if fname:
            self.load_requested.emit(fname)

    # --- PUBLIC ---

    def set_loading(self, filepath: str) -> None:
        self.status_message = f"Loading {filepath}..."
        self.btn_load.setEnabled(False)

    def set_loaded(self, anchor_height: float) -> None:
        self._set_status_styled("Status: Model loaded ✓", "green", bold=True)
        self.btn_load.setEnabled(True)
        self.btn_clear.setEnabled(True)
        self.set_anchor_height(anchor_height)

    def set_failed(self, message: str) -> None:
        self._set_status_styled(f"Error: {message}", "red")
        self.btn_load.setEnabled(True)

    def set_anchor_height(self, height: float) -> None:
        self.lbl_anchor.setText(f"{height:.2f} m")

    def reset_status(self) -> None:
        self.status_message = "Status: No model loaded."
        self.btn_load.setEnabled(True)
        self.btn_clear.setEnabled(False)
        self.set_anchor_height(0.0)
        self.chk_anchor.blockSignals(True)
        self.chk_anchor.setChecked(True)
        self.chk_anchor.blockSignals(False)
