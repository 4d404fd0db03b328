"""
Array Control Panel
"""
from typing import Any, Callable

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QLabel, QPushButton, QGroupBox, QFormLayout, QSlider
)
from PySide6.QtCore import Signal, Qt

from solargrid import config
from solargrid.model.energy import EnergyEstimate
from solargrid.model.layout import LayoutParams


class StepSlider(QSlider):
    """Horizontal slider over a float range with a fixed step."""

    def __init__(self, minimum: float, maximum: float, step: float) -> None:
        super().__init__(Qt.Horizontal)
        self.minimum_value = minimum
        self.step = step
        self.setRange(0, round((maximum - minimum) / step))
        self.setSingleStep(1)
        self.setPageStep(max(1, round(0.5 / step)))

    def float_value(self) -> float:
        return round(self.minimum_value + self.value() * self.step, 6)

    def set_float_value(self, value: float) -> None:
        self.setValue(round((value - self.minimum_value) / self.step))


class ArrayControlPanel(QWidget):
    # Partial params update, e.g. {"rows": 4}
    params_changed = Signal(dict)
    capture_requested = Signal()

    def __init__(self, params: LayoutParams) -> None:
        super().__init__()

        layout = QVBoxLayout(self)

        # --- Grid Group ---
        grp = QGroupBox("Solar Panel Grid")
        form = QFormLayout(grp)

        self.rows_slider = QSlider(Qt.Horizontal)
        self.rows_slider.setRange(*config.ROWS_RANGE)
        self.lbl_rows = QLabel()
        form.addRow(self.lbl_rows, self.rows_slider)

        self.cols_slider = QSlider(Qt.Horizontal)
        self.cols_slider.setRange(*config.COLS_RANGE)
        self.lbl_cols = QLabel()
        form.addRow(self.lbl_cols, self.cols_slider)

        self.height_slider = StepSlider(*config.HEIGHT_RANGE)
        self.lbl_height = QLabel()
        form.addRow(self.lbl_height, self.height_slider)

        self.offset_slider = StepSlider(*config.HORIZONTAL_RANGE)
        self.lbl_offset = QLabel()
        form.addRow(self.lbl_offset, self.offset_slider)

        self.spacing_slider = StepSlider(*config.SPACING_RANGE)
        self.lbl_spacing = QLabel()
        form.addRow(self.lbl_spacing, self.spacing_slider)

        layout.addWidget(grp)

        self.rows_slider.valueChanged.connect(
            self._make_handler("rows", self.rows_slider.value))
        self.cols_slider.valueChanged.connect(
            self._make_handler("cols", self.cols_slider.value))
        self.height_slider.valueChanged.connect(
            self._make_handler("vertical_offset", self.height_slider.float_value))
        self.offset_slider.valueChanged.connect(
            self._make_handler("horizontal_offset", self.offset_slider.float_value))
        self.spacing_slider.valueChanged.connect(
            self._make_handler("spacing", self.spacing_slider.float_value))

        # --- Output ---
        out = QGroupBox("Estimate")
        out.setStyleSheet("QGroupBox { background-color: #e8f5e9; border-radius: 8px; }")
        out_layout = QVBoxLayout(out)
        self.lbl_total_panels = QLabel()
        self.lbl_total_power = QLabel()
        for lbl in (self.lbl_total_panels, self.lbl_total_power):
            lbl.setAlignment(Qt.AlignCenter)
            lbl.setStyleSheet("font-weight: bold;")
            out_layout.addWidget(lbl)
        layout.addWidget(out)

        # --- Actions ---
        self.btn_capture = QPushButton("Capture")
        self.btn_capture.setMinimumHeight(40)
        self.btn_capture.setToolTip("Lock the layout and lower the panels onto the ground")
        self.btn_capture.clicked.connect(self.capture_requested)
        layout.addWidget(self.btn_capture)

        self.lbl_status = QLabel("Status: Live")
        self.lbl_status.setAlignment(Qt.AlignCenter)
        self.lbl_status.setStyleSheet("color: gray;")
        layout.addWidget(self.lbl_status)

        layout.addStretch()

        self.load_from_state(params)

    def _make_handler(self, name: str, getter: Callable[[], Any]) -> Callable[[int], None]:
        def handler(_: int) -> None:
            self._update_labels()
            self.params_changed.emit({name: getter()})
        return handler

    def _update_labels(self) -> None:
        self.lbl_rows.setText(f"Rows: {self.rows_slider.value()}")
        self.lbl_cols.setText(f"Columns: {self.cols_slider.value()}")
        self.lbl_height.setText(f"Panel Height: {self.height_slider.float_value():.1f}m")
        self.lbl_offset.setText(f"Horizontal Offset: {self.offset_slider.float_value():.1f}m")
        self.lbl_spacing.setText(f"Spacing: {self.spacing_slider.float_value():.2f}m")

    # --- PUBLIC ---

    def load_from_state(self, params: LayoutParams) -> None:
        """Push a params snapshot into the sliders without emitting changes."""
        sliders = (self.rows_slider, self.cols_slider, self.height_slider, self.offset_slider, self.spacing_slider)
        for s in sliders:
            s.blockSignals(True)
        try:
            self.rows_slider.setValue(params.rows)
            self.cols_slider.setValue(params.cols)
            self.height_slider.set_float_value(params.vertical_offset)
            self.offset_slider.set_float_value(params.horizontal_offset)
            self.spacing_slider.set_float_value(params.spacing)
        finally:
            for s in sliders:
                s.blockSignals(False)
        self._update_labels()

    def set_estimate(self, estimate: EnergyEstimate) -> None:
        self.lbl_total_panels.setText(f"Total Panels: {estimate.total_panels}")
        self.lbl_total_power.setText(f"Estimated Power: {estimate.format()}")

    def set_captured(self, captured: bool) -> None:
        """Freeze the controls a captured array no longer follows."""
        for w in (self.rows_slider, self.cols_slider, self.height_slider, self.btn_capture):
            w.setEnabled(not captured)
        if captured:
            self.lbl_status.setText("Status: Captured")
            self.lbl_status.setStyleSheet("color: green; font-weight: bold;")
        else:
            self.lbl_status.setText("Status: Live")
            self.lbl_status.setStyleSheet("color: gray;")

    def set_placed(self) -> None:
        self.lbl_status.setText("Status: Placed ✓")
        self.lbl_status.setStyleSheet("color: green; font-weight: bold;")
