from __future__ import annotations

"""
Particle Pool v1 (engine primitive)

This is NOT a sketch. It is the particle population that flow-field sketches
resize, steer and draw every frame.

Design goals:
- Deterministic when given a deterministic RNG
- Smooth population ramps: shrink evicts the oldest particles first, grow appends
- JSON-serializable state (for snapshots / debugging)
- Canvas-space coordinates: (0,0) top-left, (width,height) bottom-right
"""

from collections import deque
from dataclasses import dataclass, asdict
from typing import Any, Callable, Deque, Dict, Iterator

from behaviors.state_runtime import DeterministicRNG


@dataclass
class Particle:
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    ax: float = 0.0
    ay: float = 0.0
    px: float = 0.0
    py: float = 0.0

    @staticmethod
    def at(x: float, y: float) -> "Particle":
        """A resting particle whose previous position equals its position."""
        return Particle(float(x), float(y), px=float(x), py=float(y))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "Particle":
        return Particle(**d)


class ParticlePoolV1:
    def __init__(self, width: float, height: float, rng: DeterministicRNG | None = None):
        self.width = float(width)
        self.height = float(height)
        self.rng = rng or DeterministicRNG(0)
        self.particles: Deque[Particle] = deque()

    def __len__(self) -> int:
        return len(self.particles)

    def __iter__(self) -> Iterator[Particle]:
        return iter(self.particles)

    def spawn_one(self) -> Particle:
        p = Particle.at(self.rng.uniform(0.0, self.width), self.rng.uniform(0.0, self.height))
        self.particles.append(p)
        return p

    def resize(self, target: int) -> None:
        """Match the population to `target`: evict from the front, append at the back."""
        target = max(0, int(target))
        while len(self.particles) > target:
            self.particles.popleft()
        while len(self.particles) < target:
            self.spawn_one()

    def for_each(self, fn: Callable[[Particle], None]) -> None:
        for p in self.particles:
            fn(p)

    def clear(self) -> None:
        self.particles.clear()

    # ---- serialization
    def to_dict(self) -> Dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "particles": [p.to_dict() for p in self.particles],
        }
