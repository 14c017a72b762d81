# MIT License (see LICENSE)
"""
Frame and spawn scheduling around a SimulationEngine.

The engine has no clock of its own. These helpers are the pieces an
interactive front end would wire to its render loop and start button,
written so they can be driven manually (tests, headless runs):

- FrameClock turns render timestamps (milliseconds) into step deltas.
- SpawnTicker drops particles at a fixed cadence until a quota is reached.
- run() is a fixed-rate loop tying both to an engine and a renderer.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from . import constants as C

if TYPE_CHECKING:
    from .engine import SimulationEngine
    from .renderer.adapter import RendererAdapter

logger = logging.getLogger(__name__)


@dataclass
class FrameClock:
    """
    Converts absolute frame timestamps to deltas in seconds.

    The first tick measures from `last_ms` (0 by default), matching a render
    loop whose clock starts at page load. Out-of-range deltas are passed
    through unchanged; SimulationEngine.step() discards them.
    """
    last_ms: float = 0.0

    def tick(self, now_ms: float) -> float:
        dt = (now_ms - self.last_ms) / 1000.0
        self.last_ms = now_ms
        return dt


@dataclass
class SpawnTicker:
    """
    Fixed-interval particle dropper.

    Attributes:
        interval: Seconds between drops.
        total: Drops per run; the ticker stops itself after this many.
        running: Whether drops are being scheduled.
        added: Drops made in the current run.
    """
    interval: float = C.SPAWN_INTERVAL
    total: int = C.SPAWN_TOTAL
    running: bool = False
    added: int = 0
    _accum: float = field(default=0.0, init=False, repr=False)

    def start(self, engine: "SimulationEngine") -> None:
        """Begin a run; the first particle drops immediately."""
        self.added = 0
        self._accum = 0.0
        self.running = self.total > 0
        logger.debug("Spawn ticker started: %d particles every %.3fs.", self.total, self.interval)
        if self.running:
            self._drop(engine)

    def stop(self) -> None:
        if self.running:
            logger.debug("Spawn ticker stopped after %d particles.", self.added)
        self.running = False

    def toggle(self, engine: "SimulationEngine") -> bool:
        """Start if stopped, stop if running. Returns the new running state."""
        if self.running:
            self.stop()
        else:
            self.start(engine)
        return self.running

    def advance(self, engine: "SimulationEngine", elapsed: float) -> int:
        """
        Account for `elapsed` seconds and drop any particles that came due.

        Returns:
            Number of particles spawned by this call.
        """
        if not self.running or elapsed <= 0:
            return 0
        if self.interval <= 0:
            # Degenerate cadence: drop everything that is left at once.
            n = 0
            while self.running:
                self._drop(engine)
                n += 1
            return n
        self._accum += elapsed
        n = 0
        while self.running and self._accum >= self.interval:
            self._accum -= self.interval
            self._drop(engine)
            n += 1
        return n

    def _drop(self, engine: "SimulationEngine") -> None:
        engine.spawn_particle()
        self.added += 1
        if self.added >= self.total:
            self.stop()


def run(
    engine: "SimulationEngine",
    duration: float,
    fps: float = 60.0,
    ticker: SpawnTicker | None = None,
    renderer: "RendererAdapter | None" = None,
) -> int:
    """
    Drive an engine at a fixed frame rate.

    Args:
        engine: The engine to step.
        duration: Simulated seconds to run.
        fps: Frames per second; each frame is one step of 1/fps.
        ticker: Optional spawner, advanced by one frame time per frame.
        renderer: Optional renderer called after every step.

    Returns:
        Number of frames run.
    """
    if fps <= 0 or duration <= 0:
        return 0
    dt = 1.0 / fps
    frames = int(round(duration * fps))
    for _ in range(frames):
        if ticker is not None:
            ticker.advance(engine, dt)
        engine.step(dt)
        if renderer is not None:
            renderer.render_engine(engine)
    return frames
