"""Qt application."""

from __future__ import annotations

import sys
import traceback
from typing import Any, Dict, Optional

from PyQt6 import QtCore, QtGui, QtWidgets

# Timeless UI title (versions belong in release tags/changelog, not runtime code).
APP_TITLE = "Flowbook"


def _install_global_excepthook(app_name: str = "Flowbook"):
    """Write a crash report and show a fatal error dialog instead of silently closing."""
    from app.crash_reporter import write_report

    def _hook(exctype, value, tb):
        msg = "".join(traceback.format_exception(exctype, value, tb))
        sys.stderr.write(msg + "\n")
        try:
            rp = write_report(exctype, value, tb)
            sys.stderr.write(f"[{app_name}] Crash report written: {rp}\n")
        except OSError as e:
            sys.stderr.write(f"[{app_name}] Could not write crash report: {e}\n")
        if QtWidgets.QApplication.instance() is not None:
            QtWidgets.QMessageBox.critical(
                None,
                f"{app_name}: Fatal Error",
                "An unexpected error occurred.\n\n" + msg[-4000:],
            )

    sys.excepthook = _hook


import behaviors  # noqa: E402,F401  (registers built-in sketches)
from app.log_buffer import error, log  # noqa: E402
from app.settings import AppSettings  # noqa: E402
from behaviors.registry import REGISTRY, SketchDef, get_sketch, list_sketch_keys, next_sketch_key, resolve_sketch  # noqa: E402
from behaviors.sketch_base import SketchSetupError  # noqa: E402
from params.store import ParameterStore  # noqa: E402
from preview.frame_driver import FrameDriver, build_driver  # noqa: E402
from qt.params_panel import ParamsPanel  # noqa: E402
from qt.qt_surface import qt_surface_factory  # noqa: E402


class CanvasWidget(QtWidgets.QWidget):
    """Shows the driver's canvas at its native size."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.driver: Optional[FrameDriver] = None

    def set_driver(self, driver: Optional[FrameDriver]) -> None:
        self.driver = driver
        if driver is not None:
            self.setFixedSize(driver.width, driver.height)
        self.update()

    def paintEvent(self, event):
        p = QtGui.QPainter(self)
        try:
            drv = self.driver
            if drv is None or drv.released:
                p.fillRect(self.rect(), QtGui.QColor(0, 0, 0))
                return
            p.drawImage(0, 0, drv.canvas.image)
        finally:
            p.end()


class QtMainWindow(QtWidgets.QMainWindow):
    def __init__(self, settings: AppSettings, overrides: Optional[Dict[str, Any]] = None):
        super().__init__()
        self.settings = settings
        self._startup_overrides = dict(overrides or {})
        self.driver: Optional[FrameDriver] = None
        self.store: Optional[ParameterStore] = None
        self.current_key: Optional[str] = None

        central = QtWidgets.QWidget()
        outer = QtWidgets.QVBoxLayout(central)
        outer.setContentsMargins(8, 8, 8, 8)
        outer.setSpacing(6)

        bar = QtWidgets.QHBoxLayout()
        bar.addWidget(QtWidgets.QLabel("Sketch"))
        self.sketch_combo = QtWidgets.QComboBox()
        for key in list_sketch_keys():
            self.sketch_combo.addItem(REGISTRY[key].title, key)
        bar.addWidget(self.sketch_combo)
        self.btn_next = QtWidgets.QPushButton("Next Sketch")
        bar.addWidget(self.btn_next)
        self.btn_params = QtWidgets.QPushButton("Show Params")
        self.btn_params.setCheckable(True)
        bar.addWidget(self.btn_params)
        bar.addStretch(1)
        self.status = QtWidgets.QLabel("")
        bar.addWidget(self.status)
        outer.addLayout(bar)

        body = QtWidgets.QHBoxLayout()
        self.canvas = CanvasWidget()
        scroll = QtWidgets.QScrollArea()
        scroll.setWidget(self.canvas)
        scroll.setAlignment(QtCore.Qt.AlignmentFlag.AlignCenter)
        scroll.setFrameShape(QtWidgets.QFrame.Shape.NoFrame)
        body.addWidget(scroll, 1)
        self.params_panel = ParamsPanel()
        body.addWidget(self.params_panel)
        outer.addLayout(body, 1)
        self.setCentralWidget(central)

        self.sketch_combo.currentIndexChanged.connect(self._on_combo)
        self.btn_next.clicked.connect(self.next_sketch)
        self.btn_params.toggled.connect(self.set_params_visible)

        self._timer = QtCore.QTimer(self)
        self._timer.setInterval(int(settings.tick_ms))
        self._timer.timeout.connect(self._on_tick)

        self.set_params_visible(bool(settings.debug))
        self.btn_params.setChecked(bool(settings.debug))

    # ---- sketch lifecycle
    def start_sketch(self, ref: str, overrides: Optional[Dict[str, Any]] = None) -> bool:
        try:
            defn = resolve_sketch(ref)
        except KeyError as e:
            error(str(e))
            defn = get_sketch(list_sketch_keys()[0])
        return self._start(defn, overrides)

    def _start(self, defn: SketchDef, overrides: Optional[Dict[str, Any]] = None) -> bool:
        self.stop_sketch()
        store = ParameterStore(defn.params)
        for name, value in (overrides or {}).items():
            if name in store:
                store.set(name, value)
            else:
                error(f"{defn.key}: unknown parameter {name!r}")
        try:
            drv = build_driver(
                defn,
                store,
                surface_factory=qt_surface_factory(self.settings.font_path),
                seed=self.settings.seed,
                frame_rate=self.settings.fps,
            )
        except SketchSetupError as e:
            error(f"{defn.key}: setup failed: {e}")
            self.current_key = defn.key
            self.status.setText(f"setup failed: {e}")
            self.params_panel.bind(None)
            self.canvas.set_driver(None)
            self._sync_combo(defn.key)
            self._update_title(defn)
            QtWidgets.QMessageBox.warning(self, APP_TITLE, f"{defn.title} could not start:\n\n{e}")
            return False

        self.driver = drv
        self.store = store
        self.current_key = defn.key
        self.params_panel.bind(store)
        self.canvas.set_driver(drv)
        self.status.setText("")
        self._sync_combo(defn.key)
        self._update_title(defn)
        log(f"sketch started: {defn.key} ({defn.width}x{defn.height})")
        self._timer.start()
        return True

    def stop_sketch(self) -> None:
        self._timer.stop()
        drv, self.driver = self.driver, None
        self.canvas.set_driver(None)
        if drv is not None:
            drv.teardown()
            log(f"sketch stopped: {drv.sketch.key} frames={drv.frame} failed={drv.failed_frames}")
        self.store = None

    def next_sketch(self) -> None:
        key = next_sketch_key(self.current_key or "")
        self._start(get_sketch(key))

    def set_params_visible(self, visible: bool) -> None:
        self.params_panel.setVisible(bool(visible))
        self.btn_params.setText("Hide Params" if visible else "Show Params")

    # ---- Qt plumbing
    def _on_combo(self, index: int) -> None:
        key = self.sketch_combo.itemData(index)
        if key and key != self.current_key:
            self._start(get_sketch(key))

    def _sync_combo(self, key: str) -> None:
        i = self.sketch_combo.findData(key)
        if i >= 0 and i != self.sketch_combo.currentIndex():
            self.sketch_combo.blockSignals(True)
            self.sketch_combo.setCurrentIndex(i)
            self.sketch_combo.blockSignals(False)

    def _update_title(self, defn: SketchDef) -> None:
        self.setWindowTitle(f"{APP_TITLE} - {defn.title}")

    def _on_tick(self) -> None:
        drv = self.driver
        if drv is None:
            return
        drv.tick()
        if drv.failed_frames:
            self.status.setText(f"failed frames: {drv.failed_frames}")
        self.canvas.update()

    def post_startup_init(self) -> None:
        self.start_sketch(self.settings.sketch, self._startup_overrides)
        self._startup_overrides = {}

    def closeEvent(self, event):
        self.stop_sketch()
        super().closeEvent(event)


def run_qt(settings: AppSettings, overrides: Optional[Dict[str, Any]] = None) -> int:
    app = QtWidgets.QApplication(sys.argv)
    _install_global_excepthook(APP_TITLE)
    win = QtMainWindow(settings, overrides)
    win.setMinimumSize(520, 420)
    win.resize(1280, 720)
    win.show()
    # one-shot post-startup sync (after show so sizes are valid).
    QtCore.QTimer.singleShot(0, win.post_startup_init)
    return app.exec()
