"""Selftest for spawn cadence and the echo compositor."""

from runtime.echoes_v1 import EchoCompositorV1, SpawnCadenceV1


def test_cadence_interval():
    c = SpawnCadenceV1(30.0)
    assert c.interval(0.1) == 3
    assert c.interval(0.5) == 15
    assert c.interval(0.265) == 8
    assert c.interval(1.0) == 30
    assert c.interval(0.001) == 1
    assert c.interval(0.0) is None
    assert c.interval(-0.5) is None


def test_cadence_due_frames():
    c = SpawnCadenceV1(30.0)
    due = [f for f in range(1, 25) if c.is_due(f, 0.265)]
    assert due == [8, 16, 24]
    assert not any(c.is_due(f, 0.0) for f in range(0, 100))


def test_spawn_pair_is_point_reflection():
    ec = EchoCompositorV1(600, 400)
    a, b = ec.spawn_pair(500.0, 100.0, 20.0, frame=1)
    assert (a.x, a.y) == (500.0, 100.0)
    assert (b.x, b.y) == (100.0, 300.0)
    assert a.repeat_count == 1 and b.repeat_count == 1
    assert len(ec) == 2


def test_echo_redraws_mirrored_after_delay():
    ec = EchoCompositorV1(600, 600)
    ec.spawn_pair(500.0, 100.0, 20.0, frame=1)
    drawn = []

    assert ec.process(2, 2, 3, drawn.append) == 0
    assert ec.process(3, 2, 3, drawn.append) == 2
    assert [e.x for e in drawn] == [100.0, 500.0]
    assert all(e.repeat_count == 2 and e.last_frame == 3 for e in ec.echoes)

    drawn.clear()
    assert ec.process(4, 2, 3, drawn.append) == 0
    assert ec.process(5, 2, 3, drawn.append) == 2
    # flipped back; third draw reached the limit, so they are gone
    assert [e.x for e in drawn] == [500.0, 100.0]
    assert len(ec) == 0


def test_echo_never_exceeds_max_draws():
    for max_count in range(0, 6):
        ec = EchoCompositorV1(100, 100)
        ev, _ = ec.spawn_pair(70.0, 20.0, 5.0, frame=0)
        draws = 1  # the spawn draw
        for frame in range(1, 40):
            redrawn = []
            ec.process(frame, 0, max_count, redrawn.append)
            draws += sum(1 for e in redrawn if e is ev)
        assert draws <= max(1, max_count)
        assert len(ec) == 0


def test_zero_delay_redraws_every_frame():
    ec = EchoCompositorV1(100, 100)
    ec.track(10.0, 10.0, 4.0, frame=0)
    xs = []
    for f in range(1, 4):
        ec.process(f, 0, 10, lambda e: xs.append(e.x))
    assert xs == [90.0, 10.0, 90.0]
    ec.clear()
    assert len(ec) == 0


def main():
    test_cadence_interval()
    test_cadence_due_frames()
    test_spawn_pair_is_point_reflection()
    test_echo_redraws_mirrored_after_delay()
    test_echo_never_exceeds_max_draws()
    test_zero_delay_redraws_every_frame()
    print("OK: test_echoes")


if __name__ == "__main__":
    main()
