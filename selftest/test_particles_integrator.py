"""Selftest for the particle pool and the per-frame integrator."""

import math

from behaviors.state_runtime import DeterministicRNG
from runtime.integrators_v1 import clamp_speed, step_particle, wrap_edges
from runtime.particles_v1 import Particle, ParticlePoolV1


def test_pool_grows_inside_canvas_and_shrinks_oldest_first():
    pool = ParticlePoolV1(120, 80, DeterministicRNG(7))
    pool.resize(5)
    assert len(pool) == 5
    for p in pool:
        assert 0.0 <= p.x <= 120.0 and 0.0 <= p.y <= 80.0
        assert (p.px, p.py) == (p.x, p.y)
        assert p.vx == p.vy == p.ax == p.ay == 0.0

    before = list(pool)
    pool.resize(2)
    assert list(pool) == before[3:]

    pool.resize(4)
    assert list(pool)[:2] == before[3:]
    pool.resize(-3)
    assert len(pool) == 0


def test_pool_is_deterministic_per_seed():
    a = ParticlePoolV1(100, 100, DeterministicRNG(3))
    b = ParticlePoolV1(100, 100, DeterministicRNG(3))
    a.resize(10)
    b.resize(10)
    assert a.to_dict() == b.to_dict()
    assert Particle.from_dict(a.to_dict()["particles"][0]) == list(a)[0]


def test_clamp_speed():
    assert clamp_speed(1.0, 1.0, 5.0) == (1.0, 1.0)
    assert clamp_speed(3.0, 4.0, 0.0) == (0.0, 0.0)
    assert clamp_speed(3.0, 4.0, None) == (3.0, 4.0)
    vx, vy = clamp_speed(3.0, 4.0, 2.5)
    assert math.hypot(vx, vy) <= 2.5
    assert abs(math.hypot(vx, vy) - 2.5) < 1e-9
    # direction kept
    assert abs(vx / vy - 0.75) < 1e-9


def test_step_applies_force_then_resets_acceleration():
    p = Particle.at(10.0, 10.0)
    step_particle(p, 0.0, 1.0, 5.0, 100, 100)
    assert (p.px, p.py) == (10.0, 10.0)
    assert abs(p.vx - 1.0) < 1e-12 and abs(p.vy) < 1e-12
    assert abs(p.x - 11.0) < 1e-12
    assert p.ax == 0.0 and p.ay == 0.0

    # angle -pi/2 points up the canvas
    q = Particle.at(50.0, 50.0)
    step_particle(q, -math.pi / 2, 0.5, 5.0, 100, 100)
    assert q.y < 50.0 and abs(q.x - 50.0) < 1e-9


def test_speed_never_exceeds_limit():
    p = Particle.at(50.0, 50.0)
    for i in range(200):
        step_particle(p, i * 0.37, 10.0, 2.0, 100, 100)
        assert math.hypot(p.vx, p.vy) <= 2.0 + 1e-12


def test_wrap_pins_previous_position_to_edge_left():
    p = Particle.at(99.5, 40.0)
    p.vx = 1.0
    step_particle(p, 0.0, 0.0, 5.0, 100, 100)
    assert p.x == 0.0 and p.px == 100.0

    q = Particle.at(0.2, 40.0)
    q.vx = -1.0
    step_particle(q, 0.0, 0.0, 5.0, 100, 100)
    assert q.x == 100.0 and q.px == 0.0

    r = Particle(x=30.0, y=-0.1)
    wrap_edges(r, 100, 60)
    assert r.y == 60.0 and r.py == 0.0
    r = Particle(x=30.0, y=60.5)
    wrap_edges(r, 100, 60)
    assert r.y == 0.0 and r.py == 60.0

    # exactly on the edge is inside
    e = Particle(x=100.0, y=0.0)
    wrap_edges(e, 100, 60)
    assert (e.x, e.y) == (100.0, 0.0)


def main():
    test_pool_grows_inside_canvas_and_shrinks_oldest_first()
    test_pool_is_deterministic_per_seed()
    test_clamp_speed()
    test_step_applies_force_then_resets_acceleration()
    test_speed_never_exceeds_limit()
    test_wrap_pins_previous_position_to_edge_left()
    print("OK: test_particles_integrator")


if __name__ == "__main__":
    main()
