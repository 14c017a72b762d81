import math

import numpy as np
import pytest

from galton_sim.config import BoardConfig
from galton_sim.engine import SimulationEngine
from galton_sim.core.invariants import check_invariants, escaped_particles, kinetic_energy


def test_spawn_at_funnel(small_config, make_engine, find_particle):
    engine = make_engine(small_config)
    pid = engine.spawn_particle()
    p = find_particle(engine, pid)
    assert not p.settled
    assert p.bin_index is None
    assert np.allclose(p.velocity, 0.0)
    assert p.position[1] == pytest.approx(small_config.spawn_y)
    assert abs(p.position[0]) <= small_config.spawn_jitter / 2
    assert p.position3[2] == 0.0


def test_particle_ids_are_monotonic(small_config, make_engine):
    engine = make_engine(small_config)
    ids = [engine.spawn_particle() for _ in range(5)]
    assert ids == sorted(ids)
    assert len(set(ids)) == 5
    engine.reset()
    assert engine.spawn_particle() > ids[-1]


def test_freefall_single_step(small_config, make_engine, find_particle):
    """
    One step from rest, away from pins:
      v = damping * g * dt,  y = y0 - v * dt
    """
    cfg = small_config
    engine = make_engine(cfg)
    p = find_particle(engine, engine.spawn_particle(x=0.0))
    y0 = p.position[1]
    dt = 1 / 60
    engine.step(dt)
    v = cfg.damping * cfg.gravity * dt
    assert p.velocity[1] == pytest.approx(-v)
    assert p.position[1] == pytest.approx(y0 - v * dt)
    assert engine.time == pytest.approx(dt)


@pytest.mark.parametrize("dt", [0.0, -0.01, 0.2, 0.5, math.nan])
def test_out_of_window_steps_are_skipped(small_config, make_engine, find_particle, dt):
    engine = make_engine(small_config)
    p = find_particle(engine, engine.spawn_particle())
    before = p.position.copy()
    engine.step(dt)
    assert np.array_equal(p.position, before)
    assert engine.time == 0.0


def test_single_particle_settles():
    """
    rows=8, bins=9, spacing=0.7: a particle dropped at x = 0 bounces down
    through the pins and comes to rest in a bin with zero velocity.
    """
    cfg = BoardConfig(rows=8, bin_count=9, pin_spacing=0.7)
    engine = SimulationEngine(cfg, rng=np.random.default_rng(42))
    engine.spawn_particle(x=0.0)
    p = engine.particles[0]

    for _ in range(3000):
        engine.step(1 / 60)
        if p.settled:
            break

    assert p.settled
    assert 0 <= p.bin_index <= 8
    assert np.array_equal(p.velocity, [0.0, 0.0])
    assert engine.bin_counts()[p.bin_index] == 1
    assert p.position[0] == pytest.approx(engine.bins[p.bin_index].x)

    # Settled particles are frozen.
    frozen = p.position.copy()
    for _ in range(10):
        engine.step(1 / 60)
    assert np.array_equal(p.position, frozen)


def test_invariants_hold_while_running():
    """Conservation, caps and containment after every operation."""
    cfg = BoardConfig(rows=6, bin_count=7, pin_spacing=0.5, max_live=40, max_settled=25)
    engine = SimulationEngine(cfg, rng=np.random.default_rng(3))
    for frame in range(900):
        if frame % 5 == 0:
            engine.spawn_particle()
            assert check_invariants(engine) == []
        engine.step(1 / 60)
        assert escaped_particles(engine) == []
        assert sum(engine.bin_counts()) == sum(p.settled for p in engine.particles)
    engine.spawn_particle()
    assert check_invariants(engine) == []
    assert engine.settled_count > 0


def test_no_escape_at_high_speed(small_config, make_engine, find_particle):
    cfg = small_config
    engine = make_engine(cfg)
    p = find_particle(engine, engine.spawn_particle(x=0.0))
    p.velocity[:] = [500.0, 300.0]
    engine.step(1 / 30)
    assert abs(p.position[0]) <= cfg.half_width
    assert p.position[1] <= cfg.top_y
    assert p.velocity[0] < 0.0
    assert p.velocity[1] < 0.0


def test_gravity_inversion(small_config, make_engine, find_particle):
    engine = make_engine(small_config)
    assert engine.gravity[1] < 0
    engine.set_gravity_inverted(True)
    assert engine.gravity[1] == pytest.approx(small_config.gravity)

    p = find_particle(engine, engine.spawn_particle(x=0.0))
    p.position[1] = 0.25  # between pin rows
    engine.step(1 / 60)
    assert p.velocity[1] > 0

    engine.set_gravity_inverted(False)
    assert engine.gravity[1] == pytest.approx(-small_config.gravity)


def test_reset_is_idempotent(small_config, make_engine, settle_in):
    engine = make_engine(small_config)
    settle_in(engine, 1)
    settle_in(engine, 3)
    engine.spawn_particle()
    engine.step(1 / 60)

    engine.reset()
    once = engine.snapshot()
    engine.reset()
    twice = engine.snapshot()

    assert once == twice
    assert engine.particles == ()
    assert engine.bin_counts() == [0] * small_config.bin_count
    assert engine.settled_count == 0 and engine.falling_count == 0


def test_rebuild_swaps_board(small_config, make_engine, settle_in):
    engine = make_engine(small_config)
    settle_in(engine, 2)
    new_cfg = small_config.with_rows(9)
    engine.rebuild(new_cfg)

    assert engine.config is new_cfg
    assert engine.particles == ()
    assert len(engine.bins) == 10
    assert engine.bin_counts() == [0] * 10
    assert len(engine.pins) == 9 * 10 // 2
    assert check_invariants(engine) == []


def test_degenerate_board_keeps_running():
    """No bins: nothing settles, nothing raises, caps still hold."""
    cfg = BoardConfig(rows=0, bin_count=0, max_live=5)
    engine = SimulationEngine(cfg, rng=np.random.default_rng(0))
    for _ in range(8):
        engine.spawn_particle()
        engine.step(1 / 60)
    assert len(engine.particles) <= 5
    assert engine.settled_count == 0
    assert engine.bin_counts() == []


def test_zero_live_cap_spawns_nothing():
    engine = SimulationEngine(BoardConfig(max_live=0))
    assert engine.spawn_particle() is None
    assert engine.particles == ()


@pytest.mark.parametrize("x", [math.nan, math.inf, -math.inf])
def test_non_finite_spawn_x_falls_back_to_jitter(small_config, make_engine, find_particle, x):
    """A bad start x is replaced by a jittered one; stepping must not raise."""
    engine = make_engine(small_config)
    pid = engine.spawn_particle(x=x)
    p = find_particle(engine, pid)
    assert math.isfinite(p.position[0])
    assert abs(p.position[0]) <= 0.5 * small_config.spawn_jitter

    engine.step(1 / 60)
    assert np.all(np.isfinite(p.position))
    assert check_invariants(engine) == []


def test_profiler_records_phases(small_config):
    from galton_sim.profiler import Profiler

    prof = Profiler()
    engine = SimulationEngine(small_config, profiler=prof)
    engine.spawn_particle()
    for _ in range(5):
        engine.step(1 / 60)
    summary = prof.stats.summary()
    for phase in ("integrate", "pins", "bounds"):
        assert summary[phase]["n"] == 5
    assert sum(row["share"] for row in summary.values()) == pytest.approx(1.0)


def test_kinetic_energy_drains_as_particles_settle(small_config, make_engine):
    """
    Falling particles carry T = sum(0.5 |v|^2) > 0; once every particle has
    settled all velocities are zero and so is T.
    """
    engine = make_engine(small_config)
    assert kinetic_energy(engine.particles) == 0.0

    for _ in range(3):
        engine.spawn_particle()
    for _ in range(10):
        engine.step(1 / 60)
    assert engine.falling_count == 3
    assert kinetic_energy(engine.particles) > 0.0

    for _ in range(3000):
        if engine.falling_count == 0:
            break
        engine.step(1 / 60)
    assert engine.settled_count == 3
    assert kinetic_energy(engine.particles) == 0.0
