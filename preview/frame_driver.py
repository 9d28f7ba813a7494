from __future__ import annotations

"""Frame driver: one tick = one animation frame.

Order of operations per tick (locked by selftest):
  (a) decay            sketch fades its trail/canvas
  (b) echoes           due echoes redraw mirrored, then the after-echoes hook
  (c) spawn            if the spawn cadence hits this frame
  (d) pool resize      to the sketch's particle target
  (e) steer+integrate  flow-field angle per particle
  (f) draw particles   styled by sampling the trail under each particle
then the sketch composites.

The parameter store is injected and snapshotted at the start of every tick,
so a slider write is always visible on the very next frame.
"""

from typing import Callable, Optional

from app.log_buffer import error
from behaviors.registry import SketchDef
from behaviors.sketch_base import Sketch, SketchSetupError
from behaviors.state_runtime import DeterministicRNG
from params.store import ParameterStore
from preview.sim_clock import FrameClock
from runtime.echoes_v1 import EchoCompositorV1, SpawnCadenceV1
from runtime.integrators_v1 import step_particle
from runtime.particles_v1 import ParticlePoolV1
from runtime.surface_v1 import DrawingSurface, RasterSurfaceV1
from runtime.vector_fields_v1 import FlowFieldConfig, FlowFieldV1

SurfaceFactory = Callable[[int, int], DrawingSurface]


class FrameDriver:
    def __init__(self, sketch: Sketch, store: ParameterStore, *, canvas: DrawingSurface,
                 trail: DrawingSurface, seed: int = 0, frame_rate: float = 30.0):
        self.sketch = sketch
        self.store = store
        self.canvas = canvas
        self.trail = trail
        self.width = int(canvas.width)
        self.height = int(canvas.height)
        self.clock = FrameClock(frame_rate)
        self.rng = DeterministicRNG(seed)
        self.pool = ParticlePoolV1(self.width, self.height, self.rng)
        self.flow = FlowFieldV1(FlowFieldConfig(seed=int(seed)))
        self.echoes = EchoCompositorV1(self.width, self.height)
        self.cadence = SpawnCadenceV1(frame_rate)
        self.running = False
        self.released = False
        self.failed_frames = 0
        self.last_error: Optional[BaseException] = None

    @property
    def frame(self) -> int:
        return self.clock.frame

    def setup(self) -> None:
        """Let the sketch check its assets; SketchSetupError propagates and nothing ticks."""
        self.sketch.setup(self)
        self.running = True

    def tick(self) -> bool:
        """Render one frame. Returns False when stopped or when the frame failed."""
        if not self.running:
            return False
        self.clock.advance()
        params = self.store.snapshot()
        try:
            self._run_frame(params, self.clock.sim_time_ms)
        except Exception as e:
            # one lost frame is invisible; the next tick starts clean
            self.failed_frames += 1
            self.last_error = e
            error(f"{self.sketch.key}: frame {self.frame} failed: {type(e).__name__}: {e}")
            return False
        return True

    def _run_frame(self, params, t_ms: float) -> None:
        sk = self.sketch
        frame = self.frame

        sk.decay(self, params)

        self.echoes.process(
            frame,
            int(params.get("echoDelay", 0)),
            int(params.get("echoCount", 0)),
            lambda ev: sk.draw_echo(self, ev),
        )
        sk.after_echoes(self, params)

        if self.cadence.is_due(frame, float(params.get("timeMultiplier", 0.0))):
            sk.spawn(self, params)

        self.pool.resize(sk.particle_target(params))

        if len(self.pool):
            strength = float(params.get("particleNoiseStrength", 1.0))
            force = float(params.get("particleForceStrength", 0.0))
            max_speed = float(params.get("particleMaxSpeed", 0.0))
            for p in self.pool:
                angle = self.flow.angle_at(p.x, p.y, t_ms, strength)
                step_particle(p, angle, force, max_speed, self.width, self.height)
            for p in self.pool:
                on_trail = self.trail.get_pixel(p.x, p.y)[0] > 0
                sk.draw_particle(self, p, on_trail, params)

        sk.composite(self, params)

    def run(self, frames: int) -> int:
        """Tick `frames` times; returns how many frames rendered cleanly."""
        ok = 0
        for _ in range(max(0, int(frames))):
            if self.tick():
                ok += 1
        return ok

    def teardown(self) -> None:
        if self.released:
            return
        self.released = True
        self.running = False
        self.sketch.teardown(self)
        self.pool.clear()
        self.echoes.clear()
        self.canvas.release()
        self.trail.release()


def raster_factory(width: int, height: int) -> DrawingSurface:
    return RasterSurfaceV1(width, height)


def build_driver(defn: SketchDef, store: ParameterStore | None = None, *,
                 surface_factory: SurfaceFactory = raster_factory,
                 seed: int = 0, frame_rate: float = 30.0) -> FrameDriver:
    """Create surfaces at the sketch's fixed size and run its setup."""
    store = store or ParameterStore(defn.params)
    w, h = defn.size
    drv = FrameDriver(
        defn.create(),
        store,
        canvas=surface_factory(w, h),
        trail=surface_factory(w, h),
        seed=seed,
        frame_rate=frame_rate,
    )
    try:
        drv.setup()
    except SketchSetupError:
        drv.teardown()
        raise
    return drv
