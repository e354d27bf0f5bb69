import sys
from datetime import date
from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QApplication,
    QCheckBox,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)
from sw.common.logger import log
from sw.core import config
from sw.core.clock import SystemClock
from sw.core.restore import restore_stopwatch
from sw.core.snapshot import THEME_DARK
from sw.core.stopwatch import RenderSink
from sw.core.store import JsonFileStore
from sw.ui.theme import build_stylesheet
from sw.ui.ticker import QtTicker


# ---------------------------------------------------------------------------
# Main window
# ---------------------------------------------------------------------------

# Main window of the stopwatch. It only renders what the Stopwatch pushes into it and forwards button presses
# back as commands; all timing and persistence lives in sw.core.
class MainWindow(QMainWindow, RenderSink):

    def __init__(self, settings=None, store=None, clock=None):
        super().__init__()
        self.setWindowTitle("Stopwatch")
        self.settings = settings or config.load_settings()

        # -- Build UI skeleton --
        central = QWidget()
        self.setCentralWidget(central)
        main_lay = QVBoxLayout(central)

        time_row = QHBoxLayout()
        time_row.setAlignment(Qt.AlignCenter)
        self._hours = self._time_label("00")
        self._minutes = self._time_label("00")
        self._seconds = self._time_label("00")
        self._millis = self._time_label("000")
        for widget in (self._hours, self._time_label(":"), self._minutes, self._time_label(":"),
                       self._seconds, self._time_label("."), self._millis):
            time_row.addWidget(widget)
        main_lay.addLayout(time_row)

        button_row = QHBoxLayout()
        self._start_stop_btn = QPushButton("start")
        self._reset_btn = QPushButton("reset")
        self._lap_btn = QPushButton("lap")
        for btn in (self._start_stop_btn, self._reset_btn, self._lap_btn):
            btn.setFocusPolicy(Qt.NoFocus)
            button_row.addWidget(btn)
        main_lay.addLayout(button_row)

        self._laps_list = QListWidget()
        main_lay.addWidget(self._laps_list)

        footer_row = QHBoxLayout()
        self._theme_toggle = QCheckBox("Dark mode")
        footer_row.addWidget(self._theme_toggle)
        footer_row.addStretch(1)
        self._year_label = QLabel(f"© {date.today().year}")
        self._year_label.setObjectName("footer")
        footer_row.addWidget(self._year_label)
        main_lay.addLayout(footer_row)

        # -- Restore the stopwatch and let it render into this window --
        self.watch = restore_stopwatch(
            clock=clock or SystemClock(),
            store=store or JsonFileStore(),
            ticker=QtTicker(self),
            sink=self,
            settings=self.settings,
        )

        # -- Wiring --
        self._start_stop_btn.clicked.connect(lambda: self.watch.toggle())
        self._reset_btn.clicked.connect(lambda: self.watch.reset())
        self._lap_btn.clicked.connect(lambda: self.watch.record_lap())
        self._theme_toggle.toggled.connect(self.watch.set_theme)

    @staticmethod
    def _time_label(text):
        lbl = QLabel(text)
        lbl.setObjectName("timeField")
        return lbl

    # ------------------------------------------------------------------ #
    #  Render sink                                                         #
    # ------------------------------------------------------------------ #

    def on_time_update(self, hours, minutes, seconds, millis):
        self._hours.setText(f"{hours:02d}")
        self._minutes.setText(f"{minutes:02d}")
        self._seconds.setText(f"{seconds:02d}")
        self._millis.setText(f"{millis:03d}")

    def on_lap_added(self, index, label):
        self._laps_list.addItem(f"Lap {index} - {label}")
        self._laps_list.scrollToBottom()

    def on_laps_cleared(self):
        self._laps_list.clear()

    def on_run_state_changed(self, running):
        self._start_stop_btn.setText("stop" if running else "start")
        self._lap_btn.setEnabled(running or self.settings.allow_lap_while_paused)

    def on_theme_changed(self, theme):
        dark = theme == THEME_DARK
        if self._theme_toggle.isChecked() != dark:
            self._theme_toggle.blockSignals(True)
            self._theme_toggle.setChecked(dark)
            self._theme_toggle.blockSignals(False)
        self.setStyleSheet(build_stylesheet(theme))

    # ------------------------------------------------------------------ #
    #  Window close                                                        #
    # ------------------------------------------------------------------ #

    def closeEvent(self, event):
        self.watch.persist()
        log.info("Window closed, final stopwatch state persisted")
        event.accept()


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main(settings=None):
    app = QApplication(sys.argv)
    window = MainWindow(settings)
    window.show()
    sys.exit(app.exec())
