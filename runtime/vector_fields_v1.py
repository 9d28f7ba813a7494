"""Vector Fields v1 (engine primitive).

A flow field maps a position and a time to a steering angle. It is *not* a
sketch; particle sketches sample it once per particle per frame.

Fields are deterministic given their noise seed.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .noise_v2 import Noise3D, Noise3DConfig


@dataclass
class FlowFieldConfig:
    seed: int = 1337
    # Multipliers applied to (x, y) and t before sampling noise.
    # 1.0 samples pixel coordinates and milliseconds directly.
    scale: float = 1.0
    time_scale: float = 1.0
    octaves: int = 4


class FlowFieldV1:
    """Noise-driven steering angles.

    angle = -pi/2 + n * strength * pi, with n in [0,1) from 3D noise.
    Strength is deliberately not clamped; larger values just widen the spread.
    """

    def __init__(self, cfg: FlowFieldConfig | None = None):
        self.cfg = cfg or FlowFieldConfig()
        self._noise = Noise3D(Noise3DConfig(seed=self.cfg.seed, octaves=self.cfg.octaves))

    def noise_at(self, x: float, y: float, t: float) -> float:
        s = self.cfg.scale
        return self._noise.fbm01(x * s, y * s, t * self.cfg.time_scale)

    def angle_at(self, x: float, y: float, t: float, strength: float = 1.0) -> float:
        n = self.noise_at(x, y, t)
        return -math.pi / 2.0 + n * float(strength) * math.pi
