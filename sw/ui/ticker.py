from PySide6.QtCore import Qt, QTimer
from sw.core.ticker import Ticker


# Ticker backed by a QTimer on the Qt event loop. QTimer.stop() is synchronous, so once cancel() returns no
# further timeout can be delivered.
class QtTicker(Ticker):

    def __init__(self, parent=None):
        self._timer = QTimer(parent)
        self._timer.setTimerType(Qt.PreciseTimer)
        self._callback = None
        self._timer.timeout.connect(self._on_timeout)

    def start(self, interval_ms, callback):
        self._timer.stop()
        self._callback = callback
        self._timer.start(int(interval_ms))

    def cancel(self):
        self._timer.stop()
        self._callback = None

    @property
    def active(self):
        return self._timer.isActive()

    def _on_timeout(self):
        if self._callback is not None:
            self._callback()
