from __future__ import annotations

"""QImage-backed drawing surface for the interactive window.

Same contract as runtime.surface_v1.RasterSurfaceV1, but painted with QPainter
so circles and text are antialiased. Needs a QGuiApplication for text.
"""

import math
import sys
from typing import Optional, Tuple

from PyQt6 import QtCore, QtGui

from app.log_buffer import warn
from runtime.surface_v1 import RGBA, ColorLike, decay_table, parse_color


def _qcolor(color: ColorLike) -> QtGui.QColor:
    r, g, b, a = parse_color(color)
    return QtGui.QColor(r, g, b, a)


def load_font_family(font_path: Optional[str]) -> Optional[str]:
    """Register a font file with Qt. Returns its family, or None if it could not be loaded."""
    if not font_path:
        return QtGui.QFontDatabase.systemFont(QtGui.QFontDatabase.SystemFont.FixedFont).family()
    fid = QtGui.QFontDatabase.addApplicationFont(str(font_path))
    if fid == -1:
        warn(f"font: could not load {font_path}")
        return None
    families = QtGui.QFontDatabase.applicationFontFamilies(fid)
    return families[0] if families else None


class QImageSurface:
    def __init__(self, width: int, height: int, background: ColorLike = "#000000",
                 font_family: Optional[str] = None):
        self.width = max(1, int(width))
        self.height = max(1, int(height))
        self.image = QtGui.QImage(self.width, self.height, QtGui.QImage.Format.Format_RGB32)
        self.font_family = font_family
        self.released = False
        self._fill = QtGui.QColor(255, 255, 255, 255)
        self.clear(background)

    def _painter(self) -> QtGui.QPainter:
        p = QtGui.QPainter(self.image)
        p.setRenderHint(QtGui.QPainter.RenderHint.Antialiasing, True)
        p.setPen(QtCore.Qt.PenStyle.NoPen)
        return p

    def _font(self, size: float) -> QtGui.QFont:
        f = QtGui.QFont(self.font_family or "")
        f.setPixelSize(max(1, int(round(size))))
        return f

    # ---- state
    def fill_color(self, color: ColorLike) -> None:
        self._fill = _qcolor(color)

    def clear(self, color: ColorLike = "#000000") -> None:
        c = _qcolor(color)
        c.setAlpha(255)
        self.image.fill(c)

    # ---- primitives
    def draw_rect(self, x: float, y: float, w: float, h: float) -> None:
        p = self._painter()
        try:
            p.fillRect(QtCore.QRectF(x, y, w, h), self._fill)
        finally:
            p.end()

    def draw_circle(self, x: float, y: float, diameter: float) -> None:
        rad = float(diameter) / 2.0
        if rad <= 0:
            return
        p = self._painter()
        try:
            p.setBrush(self._fill)
            p.drawEllipse(QtCore.QPointF(x, y), rad, rad)
        finally:
            p.end()

    def text_bounds(self, text: str, size: float) -> Tuple[float, float]:
        fm = QtGui.QFontMetricsF(self._font(size))
        return fm.horizontalAdvance(str(text)), fm.ascent()

    def draw_text(self, text: str, x: float, y: float, size: float) -> None:
        """Draw `text` with its baseline at y."""
        p = self._painter()
        try:
            p.setFont(self._font(size))
            p.setPen(self._fill)
            p.drawText(QtCore.QPointF(x, y), str(text))
        finally:
            p.end()

    def get_pixel(self, x: float, y: float) -> RGBA:
        ix = int(math.floor(x))
        iy = int(math.floor(y))
        if ix < 0 or iy < 0 or ix >= self.width or iy >= self.height:
            return (0, 0, 0, 0)
        c = self.image.pixelColor(ix, iy)
        return (c.red(), c.green(), c.blue(), 255)

    # ---- whole-surface transforms
    def apply_decay(self, strength: float) -> None:
        """Fade transform c' = trunc(c * (1 - s)) on every colour byte, same table as the raster."""
        s = float(strength)
        if s == 0.0:
            return
        img = self.image.convertToFormat(QtGui.QImage.Format.Format_RGB32)
        ptr = img.constBits()
        ptr.setsize(img.sizeInBytes())
        raw = bytes(ptr)
        out = bytearray(raw.translate(decay_table(s)))
        # RGB32 is 0xffRRGGBB per pixel; keep the pad byte as it was
        pad = 3 if sys.byteorder == "little" else 0
        out[pad::4] = raw[pad::4]
        self.image = QtGui.QImage(bytes(out), img.width(), img.height(), img.bytesPerLine(),
                                  QtGui.QImage.Format.Format_RGB32).copy()

    def apply_blur(self, radius: int) -> None:
        r = max(0, int(radius))
        if r == 0:
            return
        k = r + 1
        mode = QtCore.Qt.TransformationMode.SmoothTransformation
        aspect = QtCore.Qt.AspectRatioMode.IgnoreAspectRatio
        small = self.image.scaled(max(1, self.width // k), max(1, self.height // k), aspect, mode)
        self.image = small.scaled(self.width, self.height, aspect, mode).convertToFormat(
            QtGui.QImage.Format.Format_RGB32)

    def composite_onto(self, target) -> None:
        if not isinstance(target, QImageSurface):
            raise TypeError(f"Cannot composite onto {type(target).__name__}")
        p = QtGui.QPainter(target.image)
        try:
            p.setCompositionMode(QtGui.QPainter.CompositionMode.CompositionMode_Source)
            p.drawImage(0, 0, self.image)
        finally:
            p.end()

    def has_font(self) -> bool:
        return bool(self.font_family)

    def to_bytes(self) -> bytes:
        img = self.image.convertToFormat(QtGui.QImage.Format.Format_RGB888)
        ptr = img.constBits()
        ptr.setsize(img.sizeInBytes())
        raw = bytes(ptr)
        stride = img.bytesPerLine()
        row = self.width * 3
        return b"".join(raw[y * stride:y * stride + row] for y in range(self.height))

    def release(self) -> None:
        self.image = QtGui.QImage()
        self.released = True


def qt_surface_factory(font_path: Optional[str] = None):
    """Surface factory for the frame driver; the font is resolved once per sketch."""
    family = load_font_family(font_path)

    def _make(width: int, height: int) -> QImageSurface:
        return QImageSurface(width, height, font_family=family)

    return _make
