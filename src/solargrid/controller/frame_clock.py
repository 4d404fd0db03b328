"""
Frame Clock
===========
Drives the per-frame update with a QTimer and reports the elapsed time.

Why is this file needed?
------------------------
The capture animation is frame-rate independent: every tick carries the real
number of seconds since the previous one, measured with a monotonic clock,
instead of assuming a fixed timer interval.
"""
import logging
import time

from PySide6.QtCore import QObject, QTimer, Signal

from solargrid import config

logger = logging.getLogger(__name__)


class FrameClock(QObject):
    # Seconds since the previous tick (0.0 on the first tick after start)
    ticked = Signal(float)

    def __init__(self, interval_ms: int = config.FRAME_INTERVAL_MS, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._last_tick: float | None = None

        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._on_timeout)

    @property
    def is_running(self) -> bool:
        return self._timer.isActive()

    def start(self) -> None:
        if self.is_running:
            return
        self._last_tick = None
        self._timer.start()
        logger.debug(f"Frame clock started ({self._timer.interval()} ms).")

    def stop(self) -> None:
        if not self.is_running:
            return
        self._timer.stop()
        logger.debug("Frame clock stopped.")

    def _on_timeout(self) -> None:
        now = time.perf_counter()
        dt = 0.0 if self._last_tick is None else now - self._last_tick
        self._last_tick = now
        self.ticked.emit(dt)
