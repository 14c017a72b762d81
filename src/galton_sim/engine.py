# MIT License (see LICENSE)
"""
The Galton board simulation engine.

SimulationEngine owns the live particles and the bin counters of one board.
A driver calls it once per frame:

    engine = SimulationEngine(BoardConfig(rows=12, bin_count=13))
    engine.spawn_particle()            # from a fixed-cadence ticker
    engine.step(1 / 60)                # once per frame
    counts = engine.bin_counts()       # read back for rendering

Each step advances every falling particle with the same dt:
    1. Damped Euler integration under gravity.
    2. Pin contacts, resolved one pin at a time.
    3. Bin settling once below the collection line.
    4. Wall and ceiling reflection.

Everything runs on the caller's thread. Nothing here raises for odd numbers:
out-of-window time steps are skipped, degenerate boards simulate nothing
useful but stay consistent.
"""
from __future__ import annotations
import logging
import math
from contextlib import nullcontext
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from .config import BoardConfig
from .layout import Layout, generate_layout
from .types import Bin, Particle, Pin
from .util import clamp
from .profiler import Profiler
from .collision.broadphase import PinGrid
from .collision.pins import pin_contact, resolve_pin_contact
from .collision.boundary import reflect_walls
from .core.integrators import damped_euler_step, gravity_vector
from .core.settling import try_settle, repack_bin
from .core.eviction import Eviction, choose_falling, choose_settled

logger = logging.getLogger(__name__)

ParticleId = int


@dataclass
class SimulationEngine:
    """
    Simulation state and operations for one board.

    Attributes:
        config: Immutable board configuration; replace it with rebuild().
        rng: Random source for spawn and bounce jitter. Defaults to an
             unseeded generator; pass a seeded one for repeatable runs.
        profiler: Optional Profiler timing the step phases.
        gravity_inverted: Gravity points up (+y) when True.
        time: Simulated seconds accumulated by accepted steps.
    """
    config: BoardConfig = field(default_factory=BoardConfig)
    rng: np.random.Generator | None = None
    profiler: Profiler | None = None
    gravity_inverted: bool = False
    time: float = 0.0

    def __post_init__(self) -> None:
        if self.rng is None:
            self.rng = np.random.default_rng()
        self._particles: list[Particle] = []
        self._settled = 0
        self._next_id = 1
        self._build()

    def _build(self) -> None:
        """Regenerate layout, bins and pin grid from self.config."""
        cfg = self.config
        self.layout: Layout = generate_layout(cfg)
        self._bins: list[Bin] = self.layout.make_bins()
        self._grid = PinGrid(self.layout.pins, cell_size=cfg.pin_spacing)
        self._g = gravity_vector(cfg.gravity, self.gravity_inverted)
        # Worst case a push-out moves a particle by ~2 contact distances
        # before the next pin is tested.
        self._reach = 3.0 * (cfg.ball_size + cfg.pin_radius) + cfg.collision_epsilon

    # ------------------------------------------------------------------
    # Queries (read-only for renderers)
    # ------------------------------------------------------------------

    @property
    def particles(self) -> tuple[Particle, ...]:
        """Live particles in creation order."""
        return tuple(self._particles)

    @property
    def bins(self) -> tuple[Bin, ...]:
        return tuple(self._bins)

    @property
    def pins(self) -> tuple[Pin, ...]:
        return self.layout.pins

    @property
    def settled_count(self) -> int:
        return self._settled

    @property
    def falling_count(self) -> int:
        return len(self._particles) - self._settled

    @property
    def gravity(self) -> np.ndarray:
        """Current gravity acceleration vector (copy)."""
        return self._g.copy()

    def bin_counts(self) -> list[int]:
        """Occupant count of every bin, left to right."""
        return [b.count for b in self._bins]

    def snapshot(self) -> dict[str, Any]:
        """JSON-compatible view of config, bins and particles."""
        # Local import: io depends on the engine module.
        from .io.json_io import engine_to_json
        return engine_to_json(self)

    # ------------------------------------------------------------------
    # Control
    # ------------------------------------------------------------------

    def set_gravity_inverted(self, inverted: bool) -> None:
        """Flip gravity, e.g. when an orientation sensor reports upside down."""
        self.gravity_inverted = bool(inverted)
        self._g = gravity_vector(self.config.gravity, self.gravity_inverted)

    def reset(self) -> None:
        """Remove every particle and zero every bin. Safe to call repeatedly."""
        self._particles.clear()
        for b in self._bins:
            b.count = 0
        self._settled = 0
        self.time = 0.0
        logger.info("Board reset (%d bins).", len(self._bins))

    def rebuild(self, config: BoardConfig) -> None:
        """
        Replace the configuration and regenerate the board.

        All particles are discarded and the layout, bins and pin lookup are
        rebuilt from `config` in one go.
        """
        self.config = config
        self._particles.clear()
        self._settled = 0
        self.time = 0.0
        self._build()
        logger.info(
            "Board rebuilt: %d rows, %d bins, spacing %.3f, %d pins.",
            config.rows, len(self._bins), config.pin_spacing, len(self.layout.pins),
        )

    def spawn_particle(self, x: float | None = None) -> ParticleId | None:
        """
        Drop one particle from the funnel.

        Enforces the population caps first (see core.eviction), then creates
        a falling particle at rest just under the ceiling.

        Args:
            x: Start x. None (or a non-finite value) draws it uniformly from
               the spawn jitter band around the centre line.

        Returns:
            The new particle id, or None if max_live leaves no room at all.
        """
        cfg = self.config
        if cfg.max_live <= 0:
            return None
        self._enforce_caps()

        if x is None or not math.isfinite(x):
            x = (float(self.rng.random()) - 0.5) * cfg.spawn_jitter
        r = cfg.ball_size
        x = clamp(float(x), -cfg.half_width + r, cfg.half_width - r)

        p = Particle(position=(x, cfg.spawn_y), id=self._next_id)
        self._next_id += 1
        self._particles.append(p)
        return p.id

    def step(self, dt: float) -> None:
        """
        Advance every falling particle by dt seconds.

        Steps with dt <= 0 or dt >= config.max_dt are ignored (paused tab,
        clock jump). Particles are processed in creation order; a particle
        settling earlier in the step raises the stack height seen by later
        ones in the same bin.
        """
        dt = float(dt)
        cfg = self.config
        if not 0.0 < dt < cfg.max_dt:
            return

        r = cfg.ball_size
        pins = self.layout.pins
        section = self.profiler.section if self.profiler else _no_section

        for p in self._particles:
            if p.settled:
                continue

            with section("integrate"):
                damped_euler_step(p, self._g, cfg.damping, dt)

            with section("pins"):
                for i in self._grid.query(p.position[0], p.position[1], self._reach):
                    contact = pin_contact(p, pins[i], r)
                    if contact is None:
                        continue
                    kick = (float(self.rng.random()) - 0.5) * cfg.bounce_jitter
                    resolve_pin_contact(p, contact, r, cfg.restitution, cfg.collision_epsilon, kick)

            with section("settle"):
                settled_in = try_settle(p, self._bins, cfg)
            if settled_in is not None:
                self._settled += 1
                continue

            with section("bounds"):
                reflect_walls(p, cfg.half_width, cfg.top_y, r, cfg.restitution)

        self.time += dt
        if self.profiler:
            self.profiler.commit()

    # ------------------------------------------------------------------
    # Eviction
    # ------------------------------------------------------------------

    def _enforce_caps(self) -> None:
        """
        Make room for one more particle.

        A spawn that hits either cap first removes one falling particle, or,
        with none falling and the settled cap reached, one settled particle.
        The loops after that only matter when settling between spawns has
        pushed the population further over a cap.
        """
        cfg = self.config
        max_live = max(cfg.max_live, 0)
        max_settled = max(cfg.max_settled, 0)

        if len(self._particles) >= max_live or self._settled >= max_settled:
            victim = choose_falling(self._particles)
            if victim is None and self._settled >= max_settled:
                victim = choose_settled(self._particles, len(self._bins))
            if victim is not None:
                self._evict(victim)

        while len(self._particles) >= max_live:
            victim = choose_falling(self._particles) or choose_settled(self._particles, len(self._bins))
            if victim is None:
                break
            self._evict(victim)

        while self._settled > max_settled:
            victim = choose_settled(self._particles, len(self._bins))
            if victim is None:
                break
            self._evict(victim)

    def _evict(self, eviction: Eviction) -> None:
        p = eviction.particle
        self._particles.remove(p)
        if p.settled:
            self._settled -= 1
        if p.settled and p.bin_index is not None and 0 <= p.bin_index < len(self._bins):
            b = self._bins[p.bin_index]
            occupants = [q for q in self._particles if q.settled and q.bin_index == b.index]
            repack_bin(b, occupants, self.config.ball_size, self.config.stack_offset)
        logger.debug("Evicted particle %d (%s, bin %s).", p.id, eviction.rule, p.bin_index)


def _no_section(name: str):
    return nullcontext()
