# MIT License (see LICENSE)
"""
Lightweight timing of engine phases.

Attach a Profiler to a SimulationEngine and every step records how long the
integrate, pins, settle and bounds phases took, summed over all particles.

Example:
    prof = Profiler()
    engine = SimulationEngine(config, profiler=prof)
    run(engine, duration=5.0)
    for name, row in prof.stats.summary().items():
        print(name, row["mean_ms"])
"""
from __future__ import annotations
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator


@dataclass
class ProfileStats:
    """Accumulated seconds per phase, one sample per step."""
    samples: dict[str, list[float]] = field(default_factory=dict)

    def add(self, name: str, seconds: float) -> None:
        self.samples.setdefault(name, []).append(seconds)

    def summary(self) -> dict[str, dict[str, float]]:
        """
        Per-phase statistics.

        Keys: 'n' (steps sampled), 'mean_ms', 'max_ms' and 'share' (fraction
        of all recorded time spent in this phase).
        """
        grand = sum(sum(v) for v in self.samples.values()) or 1.0
        out = {}
        for name, times in self.samples.items():
            if not times:
                continue
            out[name] = {
                "n": len(times),
                "mean_ms": 1e3 * sum(times) / len(times),
                "max_ms": 1e3 * max(times),
                "share": sum(times) / grand,
            }
        return out


class Profiler:
    """
    Phase timer.

    Phases can be entered many times per step (once per particle); call
    commit() at the end of the step to fold the running totals into one
    sample per phase.
    """

    def __init__(self) -> None:
        self.stats = ProfileStats()
        self._pending: dict[str, float] = {}

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self._pending[name] = self._pending.get(name, 0.0) + time.perf_counter() - t0

    def commit(self) -> None:
        for name, seconds in self._pending.items():
            self.stats.add(name, seconds)
        self._pending.clear()
