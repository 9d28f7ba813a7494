from __future__ import annotations

"""
Integrators v1 (engine primitive)

Integration helpers for flow-field particles.

Design goals:
- Deterministic given deterministic inputs (no wall-clock dt; one call = one frame)
- Speed clamp enforced on every call
- Wrap-around that never leaves a trail segment spanning the canvas
"""

import math
from typing import Protocol


def clamp(v: float, lo: float, hi: float) -> float:
    return lo if v < lo else hi if v > hi else v


class HasKinematics(Protocol):
    x: float
    y: float
    vx: float
    vy: float
    ax: float
    ay: float
    px: float
    py: float


def clamp_speed(vx: float, vy: float, limit: float | None) -> tuple[float, float]:
    if limit is None:
        return vx, vy
    lim = float(limit)
    if lim <= 0:
        return 0.0, 0.0
    s2 = vx*vx + vy*vy
    if s2 <= lim*lim:
        return vx, vy
    s = math.sqrt(s2)
    if s <= 1e-9:
        return 0.0, 0.0
    k = lim / s
    vx, vy = vx*k, vy*k
    # k can overshoot by an ulp
    if vx*vx + vy*vy > lim*lim:
        k = math.nextafter(1.0, 0.0)
        vx, vy = vx*k, vy*k
    return vx, vy


def wrap_edges(p: HasKinematics, width: float, height: float) -> None:
    """Teleport to the opposite edge and pin the previous position to the edge just left."""
    if p.x < 0:
        p.x = width
        p.px = 0.0
    if p.x > width:
        p.x = 0.0
        p.px = width
    if p.y < 0:
        p.y = height
        p.py = 0.0
    if p.y > height:
        p.y = 0.0
        p.py = height


def step_particle(p: HasKinematics, angle: float, force_strength: float, max_speed: float,
                  width: float, height: float) -> None:
    """Advance one particle by one frame, steering along `angle`."""
    p.px, p.py = p.x, p.y

    fs = float(force_strength)
    p.ax += math.cos(angle) * fs
    p.ay += math.sin(angle) * fs

    p.vx += p.ax
    p.vy += p.ay
    p.vx, p.vy = clamp_speed(p.vx, p.vy, max_speed)

    p.x += p.vx
    p.y += p.vy
    p.ax = 0.0
    p.ay = 0.0

    wrap_edges(p, float(width), float(height))
