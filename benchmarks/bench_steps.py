"""
Microbenchmark: time per step vs number of falling particles.
Run:
  python benchmarks/bench_steps.py
"""
import time

import numpy as np

from galton_sim.config import BoardConfig
from galton_sim.engine import SimulationEngine
from galton_sim.profiler import Profiler


def run(n: int, steps: int = 120):
    prof = Profiler()
    cfg = BoardConfig(rows=20, bin_count=21, pin_spacing=0.5, max_live=max(n, 1), max_settled=max(n, 1))
    engine = SimulationEngine(cfg, rng=np.random.default_rng(12345), profiler=prof)

    # spread spawn heights so particles are in different rows of the field
    for k in range(n):
        engine.spawn_particle()
        p = engine.particles[-1]
        p.position[1] = cfg.spawn_y - (k % 20) * 0.25 * cfg.pin_spacing

    # warmup
    for _ in range(10):
        engine.step(1 / 60)

    t0 = time.perf_counter()
    for _ in range(steps):
        engine.step(1 / 60)
    t1 = time.perf_counter()

    per_step = (t1 - t0) / steps
    return per_step, engine.falling_count, prof.stats.summary()


if __name__ == "__main__":
    for n in [10, 100, 250, 500, 1000]:
        per_step, falling, summary = run(n)
        print(f"N={n:5d}  step={1e3*per_step:8.3f} ms  steps/s={1/per_step:8.1f}  still falling={falling}")
        for k in ["integrate", "pins", "settle", "bounds"]:
            if k in summary:
                print(" ", k, summary[k])
        print()
