"""Deterministic noise helpers v2 (engine primitive).

v2 moves the lattice noise to three dimensions so a flow field can be sampled
at (x, y, time).
- No external dependencies
- Deterministic given the same seed and inputs
- Output of `value()` and `fbm01()` is always in [0, 1)

This is *not* a sketch: it is a reusable math primitive.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


def _hash_u32(x: int) -> int:
    # xorshift32
    x &= 0xFFFFFFFF
    x ^= (x << 13) & 0xFFFFFFFF
    x ^= (x >> 17) & 0xFFFFFFFF
    x ^= (x << 5) & 0xFFFFFFFF
    return x & 0xFFFFFFFF


def _mix_u32(a: int, b: int) -> int:
    return _hash_u32(a ^ (_hash_u32(b) + 0x9E3779B9 + ((a << 6) & 0xFFFFFFFF) + (a >> 2)))


def _u32_to_unit(u: int) -> float:
    # map to [0,1)
    return (u & 0xFFFFFFFF) / 4294967296.0


def _smoothstep(t: float) -> float:
    return t * t * (3.0 - 2.0 * t)


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


@dataclass(frozen=True)
class Noise3DConfig:
    seed: int = 1337
    # For fBm:
    octaves: int = 4
    lacunarity: float = 2.0
    gain: float = 0.5


class Noise3D:
    """Seeded deterministic 3D value-noise."""

    def __init__(self, cfg: Noise3DConfig | None = None):
        self.cfg = cfg or Noise3DConfig()

    def _cell_rand(self, ix: int, iy: int, iz: int) -> float:
        h = _mix_u32(self.cfg.seed & 0xFFFFFFFF, ix & 0xFFFFFFFF)
        h = _mix_u32(h, iy & 0xFFFFFFFF)
        h = _mix_u32(h, iz & 0xFFFFFFFF)
        return _u32_to_unit(h)

    def value(self, x: float, y: float, z: float) -> float:
        """Smooth value noise in [0,1)."""
        x0 = math.floor(x)
        y0 = math.floor(y)
        z0 = math.floor(z)
        u = _smoothstep(x - x0)
        v = _smoothstep(y - y0)
        w = _smoothstep(z - z0)
        ix, iy, iz = int(x0), int(y0), int(z0)

        c000 = self._cell_rand(ix, iy, iz)
        c100 = self._cell_rand(ix + 1, iy, iz)
        c010 = self._cell_rand(ix, iy + 1, iz)
        c110 = self._cell_rand(ix + 1, iy + 1, iz)
        c001 = self._cell_rand(ix, iy, iz + 1)
        c101 = self._cell_rand(ix + 1, iy, iz + 1)
        c011 = self._cell_rand(ix, iy + 1, iz + 1)
        c111 = self._cell_rand(ix + 1, iy + 1, iz + 1)

        a = _lerp(_lerp(c000, c100, u), _lerp(c010, c110, u), v)
        b = _lerp(_lerp(c001, c101, u), _lerp(c011, c111, u), v)
        out = _lerp(a, b, w)
        # float rounding in the lerps can land exactly on 1.0
        return out if out < 1.0 else math.nextafter(1.0, 0.0)

    def fbm01(self, x: float, y: float, z: float, octaves: int | None = None) -> float:
        """Fractal sum of value noise, normalized back into [0,1)."""
        o = octaves if octaves is not None else self.cfg.octaves
        lac = self.cfg.lacunarity
        g = self.cfg.gain

        amp = 1.0
        freq = 1.0
        acc = 0.0
        norm = 0.0
        for _ in range(max(1, int(o))):
            acc += amp * self.value(x * freq, y * freq, z * freq)
            norm += amp
            amp *= g
            freq *= lac
        out = acc / norm
        return out if out < 1.0 else math.nextafter(1.0, 0.0)
