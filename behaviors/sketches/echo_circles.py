from __future__ import annotations

"""Echo circles.

Circles appear on the right half of the canvas together with their point
reflection on the left. Every `echoDelay` frames each one flips across the
vertical centre line and is redrawn, until it has been drawn `echoCount` times.
Everything is painted into an offscreen buffer that fades under a black
overlay, and the buffer is copied onto the canvas at the end of each frame.
The buffer is blurred after the echo redraws and before new circles spawn.
"""

from behaviors.registry import SketchDef, register
from behaviors.sketch_base import Params, Sketch
from params.registry import ECHO_CIRCLES_PARAMS
from runtime.surface_v1 import overlay_hex

ECHO_COLOR = "#4422FF"


class EchoCircles(Sketch):
    key = "echo_circles"

    def setup(self, driver) -> None:
        driver.trail.clear("#000000")
        driver.canvas.clear("#000000")

    def decay(self, driver, params: Params) -> None:
        buf = driver.trail
        buf.fill_color(overlay_hex(params["transparencyStrength"]))
        buf.draw_rect(0, 0, driver.width, driver.height)

    def draw_echo(self, driver, echo) -> None:
        buf = driver.trail
        buf.fill_color(ECHO_COLOR)
        buf.draw_circle(echo.x, echo.y, echo.size)

    def after_echoes(self, driver, params: Params) -> None:
        # blur softens the redrawn echoes too, new circles stay sharp
        driver.trail.apply_blur(int(params.get("blurRadius", 0)))

    def spawn(self, driver, params: Params) -> None:
        lo = float(params["circleSizeMin"])
        size = driver.rng.uniform(lo, lo + float(params["circleSizeMaxInc"]))
        w, h = driver.width, driver.height
        x = driver.rng.uniform(w / 2.0 + size, w - size)
        y = driver.rng.uniform(size, h - size)

        buf = driver.trail
        buf.fill_color(ECHO_COLOR)
        first, second = driver.echoes.spawn_pair(x, y, size, driver.frame)
        buf.draw_circle(first.x, first.y, size)
        buf.draw_circle(second.x, second.y, size)

    def composite(self, driver, params: Params) -> None:
        driver.trail.composite_onto(driver.canvas)


def register_echo_circles():
    return register(SketchDef(
        "echo_circles",
        title="Echo Circles",
        factory=EchoCircles,
        params=ECHO_CIRCLES_PARAMS,
        size=(600, 600),
    ))
