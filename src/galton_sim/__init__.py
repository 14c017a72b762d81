# MIT License (see LICENSE)
"""
galton_sim - A Galton board (bean machine) particle simulation.

Balls drop through a triangular or trapezoidal field of pins, bounce with
damping and a little randomness, and pile up in bins at the bottom in an
approximately binomial distribution. The population is capped; old balls
are recycled from the edges inward so the simulation can run forever.

Main entry points:
    - BoardConfig: Immutable board parameters.
    - generate_layout: Pure pin and bin placement.
    - SimulationEngine: Particles, bins, spawn/step/reset/rebuild.

Submodules:
    - collision: Pin broadphase, pin contacts, walls.
    - core: Integration, settling, eviction, invariant checks.
    - io: JSON configs and snapshots.
    - renderer: Optional visualization adapters.
    - driver: Frame clock, spawn ticker and a fixed-rate run loop.

Example:
    from galton_sim import BoardConfig, SimulationEngine

    engine = SimulationEngine(BoardConfig(rows=12, bin_count=13))
    for _ in range(200):
        engine.spawn_particle()
    for _ in range(600):
        engine.step(1 / 60)
    print(engine.bin_counts())
"""
from .config import BoardConfig
from .layout import Layout, generate_layout
from .types import Pin, Bin, Particle
from .engine import SimulationEngine, ParticleId
from .driver import FrameClock, SpawnTicker, run
from .logging_config import setup_logging

__all__ = [
    # Configuration and layout
    "BoardConfig",
    "Layout",
    "generate_layout",
    # Data types
    "Pin",
    "Bin",
    "Particle",
    # Simulation
    "SimulationEngine",
    "ParticleId",
    # Driving
    "FrameClock",
    "SpawnTicker",
    "run",
    "setup_logging",
]
