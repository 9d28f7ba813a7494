from __future__ import annotations
"""Fixed virtual-timestep clock.

Simulated time is derived from the frame count alone:
    sim_time_ms = frame * (1000 / frame_rate)
Wall-clock time never enters the simulation, so a sketch renders the same
frames no matter how fast the host manages to call tick().
"""


class FrameClock:
    def __init__(self, frame_rate: float = 30.0):
        rate = float(frame_rate)
        if rate <= 0:
            raise ValueError(f"frame_rate must be > 0, got {frame_rate}")
        self.frame_rate = rate
        self.frame = 0

    @property
    def frame_ms(self) -> float:
        return 1000.0 / self.frame_rate

    @property
    def sim_time_ms(self) -> float:
        return self.frame * self.frame_ms

    def reset(self) -> None:
        self.frame = 0

    def advance(self) -> int:
        """Step one frame. Returns the new frame index (first frame is 1)."""
        self.frame += 1
        return self.frame
