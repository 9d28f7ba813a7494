from __future__ import annotations

"""
Echoes v1 (engine primitive)

Spawn cadence + mirrored echo bookkeeping for shape-spawning sketches.

An echo is a shape that keeps redrawing itself mirrored across the vertical
centre line every `delay` frames until it has been drawn `max_count` times
(the spawn draw included).
"""

import math
from dataclasses import dataclass, asdict
from typing import Any, Callable, Dict, List, Optional


@dataclass
class EchoEvent:
    x: float
    y: float
    size: float
    spawn_frame: int
    last_frame: int
    repeat_count: int = 1
    origin_x: float = 0.0
    origin_y: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class SpawnCadenceV1:
    """Frame interval between spawns, derived from a time multiplier."""

    def __init__(self, frame_rate: float = 30.0):
        self.frame_rate = float(frame_rate)

    def interval(self, time_multiplier: float) -> Optional[int]:
        """Frames between spawns, or None when spawning is disabled."""
        t = float(time_multiplier)
        if not (t > 0.0):
            return None
        # 30 * 0.1 is 3.0000000000000004; don't let that become 4
        return max(1, int(math.ceil(round(self.frame_rate * t, 6))))

    def is_due(self, frame: int, time_multiplier: float) -> bool:
        n = self.interval(time_multiplier)
        if n is None:
            return False
        return int(frame) % n == 0


class EchoCompositorV1:
    def __init__(self, width: float, height: float):
        self.width = float(width)
        self.height = float(height)
        self.echoes: List[EchoEvent] = []

    def __len__(self) -> int:
        return len(self.echoes)

    def mirror(self, x: float, y: float) -> tuple[float, float]:
        """Point reflection through the canvas centre."""
        return self.width - x, self.height - y

    def track(self, x: float, y: float, size: float, frame: int) -> EchoEvent:
        ev = EchoEvent(float(x), float(y), float(size), int(frame), int(frame),
                       repeat_count=1, origin_x=float(x), origin_y=float(y))
        self.echoes.append(ev)
        return ev

    def spawn_pair(self, x: float, y: float, size: float, frame: int) -> tuple[EchoEvent, EchoEvent]:
        """Track a freshly drawn shape and its point reflection as two independent echoes."""
        mx, my = self.mirror(x, y)
        return self.track(x, y, size, frame), self.track(mx, my, size, frame)

    def _prune(self, max_count: int) -> None:
        self.echoes = [e for e in self.echoes if e.repeat_count < max_count]

    def process(self, frame: int, delay: int, max_count: int, draw: Callable[[EchoEvent], None]) -> int:
        """Redraw every due echo at its mirrored x. Returns the number of redraws."""
        frame = int(frame)
        delay = max(0, int(delay))
        max_count = int(max_count)
        self._prune(max_count)
        drawn = 0
        for e in self.echoes:
            if frame - e.last_frame < delay:
                continue
            e.x = self.width - e.x
            draw(e)
            e.repeat_count += 1
            e.last_frame = frame
            drawn += 1
        self._prune(max_count)
        return drawn

    def clear(self) -> None:
        self.echoes.clear()
