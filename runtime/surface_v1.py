from __future__ import annotations

"""
Drawing surfaces v1 (engine primitive)

`DrawingSurface` is everything a sketch is allowed to do to pixels. The
simulation only ever talks to this protocol, so it runs the same against the
pure-Python `RasterSurfaceV1` (headless runs, selftests) and the Qt surface
used by the interactive window.

Decay math (both forms multiply each channel):
- translucent overlay:  c' = round(c * (1 - a/255))   (source-over black, alpha a)
- fade transform:       c' = trunc(c * (1 - s))        clamped to 0..255, s < 0 brightens
"""

import math
from typing import Protocol, Sequence, Tuple, Union

from behaviors.assets.bitmap_font import BitmapFont

RGBA = Tuple[int, int, int, int]
ColorLike = Union[str, Sequence[int]]


def _clamp_u8(x: int) -> int:
    if x < 0: return 0
    if x > 255: return 255
    return x


def parse_color(color: ColorLike) -> RGBA:
    """'#RRGGBB', '#RRGGBBAA', (r,g,b) or (r,g,b,a) -> (r,g,b,a)."""
    if isinstance(color, str):
        s = color.strip().lstrip("#")
        if len(s) not in (6, 8):
            raise ValueError(f"Unsupported color string: {color!r}")
        try:
            vals = [int(s[i:i + 2], 16) for i in range(0, len(s), 2)]
        except ValueError:
            raise ValueError(f"Unsupported color string: {color!r}") from None
        if len(vals) == 3:
            vals.append(255)
        return vals[0], vals[1], vals[2], vals[3]
    vals = [int(v) for v in color]
    if len(vals) == 3:
        vals.append(255)
    if len(vals) != 4:
        raise ValueError(f"Unsupported color: {color!r}")
    r, g, b, a = (_clamp_u8(v) for v in vals)
    return r, g, b, a


def overlay_hex(alpha: float) -> str:
    """Black with the given 0..255 alpha, as '#000000AA'."""
    a = _clamp_u8(int(math.floor(float(alpha))))
    return f"#000000{a:02x}"


def decay_table(strength: float) -> bytes:
    """Per-byte lookup for the fade transform."""
    k = 1.0 - float(strength)
    return bytes(_clamp_u8(int(c * k)) for c in range(256))


def overlay_table(src: int, alpha: int) -> bytes:
    """Per-byte lookup for a source-over blend of one channel value."""
    a = _clamp_u8(int(alpha))
    return bytes((c * (255 - a) + src * a + 127) // 255 for c in range(256))


class DrawingSurface(Protocol):
    width: int
    height: int

    def clear(self, color: ColorLike = "#000000") -> None: ...
    def fill_color(self, color: ColorLike) -> None: ...
    def draw_circle(self, x: float, y: float, diameter: float) -> None: ...
    def draw_rect(self, x: float, y: float, w: float, h: float) -> None: ...
    def draw_text(self, text: str, x: float, y: float, size: float) -> None: ...
    def text_bounds(self, text: str, size: float) -> Tuple[float, float]: ...
    def get_pixel(self, x: float, y: float) -> RGBA: ...
    def apply_decay(self, strength: float) -> None: ...
    def apply_blur(self, radius: int) -> None: ...
    def composite_onto(self, target: "DrawingSurface") -> None: ...
    def has_font(self) -> bool: ...
    def to_bytes(self) -> bytes: ...
    def release(self) -> None: ...


class RasterSurfaceV1:
    """Opaque RGB raster held in a bytearray (row-major, 3 bytes per pixel)."""

    def __init__(self, width: int, height: int, background: ColorLike = "#000000",
                 font: BitmapFont | None = None):
        self.width = max(1, int(width))
        self.height = max(1, int(height))
        self.font = font or BitmapFont()
        self.data = bytearray(self.width * self.height * 3)
        self.released = False
        self._fill: RGBA = (255, 255, 255, 255)
        self.clear(background)

    # ---- state
    def fill_color(self, color: ColorLike) -> None:
        self._fill = parse_color(color)

    def clear(self, color: ColorLike = "#000000") -> None:
        r, g, b, _ = parse_color(color)
        self.data[:] = bytes((r, g, b)) * (self.width * self.height)

    # ---- pixel helpers
    def _blend(self, i: int, r: int, g: int, b: int, a: int) -> None:
        d = self.data
        if a >= 255:
            d[i] = r; d[i + 1] = g; d[i + 2] = b
            return
        ia = 255 - a
        d[i] = (d[i] * ia + r * a + 127) // 255
        d[i + 1] = (d[i + 1] * ia + g * a + 127) // 255
        d[i + 2] = (d[i + 2] * ia + b * a + 127) // 255

    def _blend_span(self, x0: int, x1: int, y0: int, y1: int) -> None:
        r, g, b, a = self._fill
        if a <= 0 or x0 >= x1 or y0 >= y1:
            return
        row_bytes = self.width * 3
        if x0 == 0 and x1 == self.width:
            # whole rows: blend channel by channel through lookup tables
            lo, hi = y0 * row_bytes, y1 * row_bytes
            block = self.data[lo:hi]
            for ch, src in enumerate((r, g, b)):
                block[ch::3] = block[ch::3].translate(overlay_table(src, a))
            self.data[lo:hi] = block
            return
        for yy in range(y0, y1):
            base = yy * row_bytes
            for xx in range(x0, x1):
                self._blend(base + xx * 3, r, g, b, a)

    # ---- primitives
    def draw_rect(self, x: float, y: float, w: float, h: float) -> None:
        if w < 0:
            x, w = x + w, -w
        if h < 0:
            y, h = y + h, -h
        x0 = max(0, int(math.floor(x)))
        y0 = max(0, int(math.floor(y)))
        x1 = min(self.width, int(math.floor(x + w)))
        y1 = min(self.height, int(math.floor(y + h)))
        self._blend_span(x0, x1, y0, y1)

    def draw_circle(self, x: float, y: float, diameter: float) -> None:
        rad = float(diameter) / 2.0
        if rad <= 0:
            return
        r, g, b, a = self._fill
        if a <= 0:
            return
        r2 = rad * rad
        hit = False
        y_lo = max(0, int(math.floor(y - rad)))
        y_hi = min(self.height - 1, int(math.ceil(y + rad)))
        x_lo = max(0, int(math.floor(x - rad)))
        x_hi = min(self.width - 1, int(math.ceil(x + rad)))
        for py in range(y_lo, y_hi + 1):
            dy = py + 0.5 - y
            base = py * self.width * 3
            for px in range(x_lo, x_hi + 1):
                dx = px + 0.5 - x
                if dx * dx + dy * dy <= r2:
                    self._blend(base + px * 3, r, g, b, a)
                    hit = True
        if not hit:
            # sub-pixel dots still mark the pixel they sit in
            ix, iy = int(math.floor(x)), int(math.floor(y))
            if 0 <= ix < self.width and 0 <= iy < self.height:
                self._blend((iy * self.width + ix) * 3, r, g, b, a)

    def text_bounds(self, text: str, size: float) -> Tuple[float, float]:
        return self.font.bounds(str(text), size)

    def draw_text(self, text: str, x: float, y: float, size: float) -> None:
        """Draw `text` with its baseline at y."""
        text = str(text)
        k = self.font.cell_size(size)
        _, h = self.font.bounds(text, size)
        top = float(y) - h
        for col, row in self.font.cells(text):
            self.draw_rect(x + col * k, top + row * k, k, k)

    def get_pixel(self, x: float, y: float) -> RGBA:
        ix = int(math.floor(x))
        iy = int(math.floor(y))
        if ix < 0 or iy < 0 or ix >= self.width or iy >= self.height:
            return (0, 0, 0, 0)
        i = (iy * self.width + ix) * 3
        d = self.data
        return (d[i], d[i + 1], d[i + 2], 255)

    # ---- whole-surface transforms
    def apply_decay(self, strength: float) -> None:
        s = float(strength)
        if s == 0.0:
            return
        self.data = bytearray(self.data.translate(decay_table(s)))

    def apply_blur(self, radius: int) -> None:
        """Separable box blur; edge pixels average only their in-bounds neighbours."""
        r = max(0, int(radius))
        if r == 0:
            return
        w, h = self.width, self.height
        src = self.data
        tmp = bytearray(len(src))
        # horizontal
        for yy in range(h):
            base = yy * w * 3
            for ch in range(3):
                row = src[base + ch:base + w * 3:3]
                out = _box_line(row, r)
                tmp[base + ch:base + w * 3:3] = out
        dst = bytearray(len(src))
        # vertical
        stride = w * 3
        for xx in range(w):
            for ch in range(3):
                start = xx * 3 + ch
                col = tmp[start::stride]
                dst[start::stride] = _box_line(col, r)
        self.data = dst

    def composite_onto(self, target: "DrawingSurface") -> None:
        if isinstance(target, RasterSurfaceV1):
            if target.width == self.width and target.height == self.height:
                target.data[:] = self.data
                return
            w = min(self.width, target.width) * 3
            for yy in range(min(self.height, target.height)):
                s0 = yy * self.width * 3
                t0 = yy * target.width * 3
                target.data[t0:t0 + w] = self.data[s0:s0 + w]
            return
        raise TypeError(f"Cannot composite onto {type(target).__name__}")

    def has_font(self) -> bool:
        return self.font is not None

    def to_bytes(self) -> bytes:
        return bytes(self.data)

    def release(self) -> None:
        self.data = bytearray()
        self.released = True


def _box_line(line: bytes, r: int) -> bytes:
    n = len(line)
    if n == 0:
        return b""
    prefix = [0] * (n + 1)
    acc = 0
    for i, v in enumerate(line):
        acc += v
        prefix[i + 1] = acc
    out = bytearray(n)
    for i in range(n):
        lo = i - r if i - r > 0 else 0
        hi = i + r + 1 if i + r + 1 < n else n
        out[i] = (prefix[hi] - prefix[lo]) // (hi - lo)
    return bytes(out)
