from __future__ import annotations

"""Parameter panel.

One slider per parameter of the running sketch. Slider positions are step
indexes from `min`, so every position maps onto a value the store accepts
unchanged; the store still clamps and quantizes on write.
"""

import math
from typing import Dict, Optional

from PyQt6 import QtCore, QtWidgets

from params.store import ParameterStore


def _steps(spec) -> int:
    step = float(spec.get("step") or 0.0)
    if step <= 0:
        return 1000
    return max(1, int(math.floor((float(spec["max"]) - float(spec["min"])) / step + 1e-9)))


def _value_at(spec, pos: int) -> float:
    step = float(spec.get("step") or 0.0)
    if step <= 0:
        step = (float(spec["max"]) - float(spec["min"])) / 1000.0
    return float(spec["min"]) + pos * step


def _pos_for(spec, value: float) -> int:
    step = float(spec.get("step") or 0.0)
    if step <= 0:
        step = (float(spec["max"]) - float(spec["min"])) / 1000.0 or 1.0
    return int(round((float(value) - float(spec["min"])) / step))


def _fmt(value) -> str:
    if isinstance(value, int):
        return str(value)
    return f"{float(value):.4g}"


class ParamsPanel(QtWidgets.QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.store: Optional[ParameterStore] = None
        self._sliders: Dict[str, QtWidgets.QSlider] = {}
        self._labels: Dict[str, QtWidgets.QLabel] = {}
        self._suspend = False

        outer = QtWidgets.QVBoxLayout(self)
        outer.setContentsMargins(10, 10, 10, 10)
        outer.setSpacing(8)

        hdr = QtWidgets.QHBoxLayout()
        hdr.addWidget(QtWidgets.QLabel("Parameters"))
        hdr.addStretch(1)
        self.btn_reset = QtWidgets.QPushButton("Reset")
        hdr.addWidget(self.btn_reset)
        outer.addLayout(hdr)

        self.form = QtWidgets.QFormLayout()
        outer.addLayout(self.form)
        outer.addStretch(1)

        self.btn_reset.clicked.connect(self._reset)
        self.setMinimumWidth(300)

    def bind(self, store: Optional[ParameterStore]) -> None:
        """Rebuild the sliders for a new store (None empties the panel)."""
        while self.form.rowCount():
            self.form.removeRow(0)
        self._sliders.clear()
        self._labels.clear()
        self.store = store
        if store is None:
            return

        for name, spec in store.defs.items():
            row = QtWidgets.QHBoxLayout()
            sl = QtWidgets.QSlider(QtCore.Qt.Orientation.Horizontal)
            sl.setRange(0, _steps(spec))
            lbl = QtWidgets.QLabel("")
            lbl.setMinimumWidth(56)
            row.addWidget(sl, 1)
            row.addWidget(lbl)
            self.form.addRow(name, row)
            self._sliders[name] = sl
            self._labels[name] = lbl
            sl.valueChanged.connect(lambda pos, n=name: self._on_slider(n, pos))
        self.sync()

    def sync(self) -> None:
        """Move sliders to the values currently in the store."""
        if self.store is None:
            return
        self._suspend = True
        try:
            for name, sl in self._sliders.items():
                spec = self.store.defs[name]
                v = self.store.get(name)
                sl.setValue(_pos_for(spec, v))
                self._labels[name].setText(_fmt(v))
        finally:
            self._suspend = False

    def _on_slider(self, name: str, pos: int) -> None:
        if self._suspend or self.store is None:
            return
        spec = self.store.defs[name]
        stored = self.store.set(name, _value_at(spec, pos))
        self._labels[name].setText(_fmt(stored))

    def _reset(self) -> None:
        if self.store is None:
            return
        self.store.reset()
        self.sync()
