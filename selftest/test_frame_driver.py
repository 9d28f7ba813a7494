"""Frame driver: lock the per-tick order of operations and its failure handling."""

from behaviors.registry import SketchDef
from behaviors.sketch_base import Sketch, SketchSetupError
from params.store import ParameterStore
from preview.frame_driver import build_driver
from preview.sim_clock import FrameClock

DEFS = {
    # 30 fps * 0.01 -> spawn every frame
    "timeMultiplier": {"type": "float", "default": 0.01, "min": 0.0, "max": 1.0, "step": 0.01},
    "echoDelay": {"type": "int", "default": 0, "min": 0, "max": 10, "step": 1},
    "echoCount": {"type": "int", "default": 3, "min": 0, "max": 10, "step": 1},
    "particleMaxCount": {"type": "int", "default": 2, "min": 0, "max": 10, "step": 1},
    "marker": {"type": "int", "default": 0, "min": 0, "max": 100, "step": 1},
}


class RecordingSketch(Sketch):
    key = "recording"

    def __init__(self, fail_on_frame=None):
        self.calls = []
        self.markers = []
        self.fail_on_frame = fail_on_frame

    def _rec(self, driver, name):
        self.calls.append((driver.frame, name))

    def decay(self, driver, params):
        self._rec(driver, "decay")
        self.markers.append(params["marker"])

    def draw_echo(self, driver, echo):
        self._rec(driver, "echo")

    def after_echoes(self, driver, params):
        self._rec(driver, "after_echoes")

    def spawn(self, driver, params):
        self._rec(driver, "spawn")
        if driver.frame == self.fail_on_frame:
            raise RuntimeError("boom")
        driver.echoes.spawn_pair(30.0, 10.0, 4.0, driver.frame)

    def particle_target(self, params):
        return params["particleMaxCount"]

    def draw_particle(self, driver, p, on_trail, params):
        assert on_trail is False
        self._rec(driver, "particle")

    def composite(self, driver, params):
        self._rec(driver, "composite")


def _defn(factory, size=(40, 30)):
    return SketchDef("recording", factory=factory, params=DEFS, size=size)


def _frame_calls(sk, frame):
    return [name for f, name in sk.calls if f == frame]


def test_tick_order():
    sk = RecordingSketch()
    drv = build_driver(_defn(lambda: sk))
    assert drv.run(2) == 2
    assert _frame_calls(sk, 1) == ["decay", "after_echoes", "spawn", "particle", "particle", "composite"]
    assert _frame_calls(sk, 2) == ["decay", "echo", "echo", "after_echoes", "spawn",
                                   "particle", "particle", "composite"]
    assert len(drv.pool) == 2
    drv.teardown()


def test_param_writes_visible_next_tick():
    sk = RecordingSketch()
    store = ParameterStore(DEFS)
    drv = build_driver(_defn(lambda: sk), store)
    drv.tick()
    store.set("marker", 42)
    drv.tick()
    store.set("particleMaxCount", 0)
    drv.tick()
    assert sk.markers == [0, 42, 42]
    assert len(drv.pool) == 0
    drv.teardown()


def test_frame_errors_are_swallowed():
    sk = RecordingSketch(fail_on_frame=2)
    drv = build_driver(_defn(lambda: sk))
    assert drv.run(4) == 3
    assert drv.failed_frames == 1
    assert isinstance(drv.last_error, RuntimeError)
    assert drv.frame == 4
    # the failed frame stopped at spawn; the next one ran in full
    assert _frame_calls(sk, 2)[-1] == "spawn"
    assert _frame_calls(sk, 3)[-1] == "composite"
    drv.teardown()


def test_no_spawn_when_time_multiplier_is_zero():
    sk = RecordingSketch()
    store = ParameterStore(DEFS)
    store.set("timeMultiplier", 0)
    drv = build_driver(_defn(lambda: sk), store)
    drv.run(10)
    assert not [c for c in sk.calls if c[1] == "spawn"]
    drv.teardown()


def test_teardown_releases_and_stops():
    sk = RecordingSketch()
    drv = build_driver(_defn(lambda: sk))
    drv.run(2)
    drv.teardown()
    drv.teardown()
    assert drv.released and not drv.running
    assert drv.canvas.released and drv.trail.released
    assert len(drv.pool) == 0 and len(drv.echoes) == 0
    assert drv.tick() is False


def test_setup_error_aborts_before_ticking():
    released = []

    class Broken(Sketch):
        def setup(self, driver):
            released.append(driver)
            raise SketchSetupError("missing asset")

    try:
        build_driver(_defn(Broken))
        assert False, "setup error swallowed"
    except SketchSetupError:
        pass
    drv = released[0]
    assert drv.frame == 0 and not drv.running
    assert drv.canvas.released


def test_clock_is_virtual():
    c = FrameClock(30.0)
    assert c.sim_time_ms == 0.0
    for _ in range(3):
        c.advance()
    assert c.frame == 3
    assert abs(c.sim_time_ms - 100.0) < 1e-9
    c.reset()
    assert c.frame == 0
    try:
        FrameClock(0)
        assert False, "zero frame rate accepted"
    except ValueError:
        pass


def main():
    test_tick_order()
    test_param_writes_visible_next_tick()
    test_frame_errors_are_swallowed()
    test_no_spawn_when_time_multiplier_is_zero()
    test_teardown_releases_and_stops()
    test_setup_error_aborts_before_ticking()
    test_clock_is_virtual()
    print("OK: test_frame_driver")


if __name__ == "__main__":
    main()
