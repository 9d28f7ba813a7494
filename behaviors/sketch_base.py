from __future__ import annotations

"""Sketch hooks.

A sketch decides *what* is drawn; the frame driver decides *when*. Every hook
has a no-op default so a sketch only overrides the stages it takes part in.
Hooks receive the driver (surfaces, rng, pool, echoes, frame index) and the
parameter snapshot of the current tick.
"""

from typing import TYPE_CHECKING, Any, Mapping

if TYPE_CHECKING:  # pragma: no cover
    from preview.frame_driver import FrameDriver
    from runtime.echoes_v1 import EchoEvent
    from runtime.particles_v1 import Particle

Params = Mapping[str, Any]


class SketchSetupError(RuntimeError):
    """A sketch cannot start (missing font, empty word list, ...)."""


class Sketch:
    key = ""

    def setup(self, driver: "FrameDriver") -> None:
        """Validate assets and paint the initial surfaces. Raise SketchSetupError to abort."""

    def decay(self, driver: "FrameDriver", params: Params) -> None:
        pass

    def draw_echo(self, driver: "FrameDriver", echo: "EchoEvent") -> None:
        pass

    def after_echoes(self, driver: "FrameDriver", params: Params) -> None:
        """Runs once the due echoes are redrawn, before the spawn check."""

    def spawn(self, driver: "FrameDriver", params: Params) -> None:
        pass

    def particle_target(self, params: Params) -> int:
        return 0

    def draw_particle(self, driver: "FrameDriver", p: "Particle", on_trail: bool, params: Params) -> None:
        pass

    def composite(self, driver: "FrameDriver", params: Params) -> None:
        pass

    def teardown(self, driver: "FrameDriver") -> None:
        pass
