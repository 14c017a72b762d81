# MIT License (see LICENSE)
"""
Checks for the properties the engine must hold between operations.

Used by the tests and handy when debugging a driver:
- Bin conservation: bin counters sum to the number of settled particles,
  and every settled particle is counted by the bin it sits in.
- Bounded population: live <= max_live and settled <= max_settled.
- No escape: every particle is inside the walls and under the ceiling.
"""
from __future__ import annotations
from typing import TYPE_CHECKING, Iterable

import numpy as np

from ..types import Particle

if TYPE_CHECKING:
    from ..engine import SimulationEngine


def kinetic_energy(particles: Iterable[Particle]) -> float:
    """
    Total kinetic energy per unit mass, T = sum(0.5 * |v|^2).

    Settled particles contribute nothing (their velocity is zero).
    """
    ke = 0.0
    for p in particles:
        ke += 0.5 * float(np.dot(p.velocity, p.velocity))
    return ke


def bin_conservation_error(engine: "SimulationEngine") -> int:
    """sum(bin counts) - number of settled particles; 0 when consistent."""
    return sum(engine.bin_counts()) - engine.settled_count


def population_ok(engine: "SimulationEngine") -> bool:
    cfg = engine.config
    return (
        len(engine.particles) <= max(cfg.max_live, 0)
        and engine.settled_count <= max(cfg.max_settled, 0)
    )


def escaped_particles(engine: "SimulationEngine", tol: float = 1e-9) -> list[Particle]:
    """Particles outside [-W/2, W/2] horizontally or above the ceiling."""
    cfg = engine.config
    hw, top = cfg.half_width, cfg.top_y
    return [
        p for p in engine.particles
        if abs(p.position[0]) > hw + tol or p.position[1] > top + tol
    ]


def check_invariants(engine: "SimulationEngine") -> list[str]:
    """
    Run every check.

    Returns:
        Human-readable violations; empty when the engine is consistent.
    """
    problems = []
    err = bin_conservation_error(engine)
    if err:
        problems.append(f"bin counts off by {err} from settled particles")

    per_bin = [0] * len(engine.bins)
    for p in engine.particles:
        if p.settled:
            if p.bin_index is None or not 0 <= p.bin_index < len(per_bin):
                problems.append(f"settled particle {p.id} has no valid bin")
                continue
            per_bin[p.bin_index] += 1
            if np.any(p.velocity != 0.0):
                problems.append(f"settled particle {p.id} is moving")
        elif p.bin_index is not None:
            problems.append(f"falling particle {p.id} claims bin {p.bin_index}")
    for b, n in zip(engine.bins, per_bin):
        if b.count != n:
            problems.append(f"bin {b.index} counts {b.count} but holds {n}")

    if not population_ok(engine):
        problems.append(
            f"population {len(engine.particles)} live / {engine.settled_count} settled "
            f"exceeds caps {engine.config.max_live} / {engine.config.max_settled}"
        )
    for p in escaped_particles(engine):
        problems.append(f"particle {p.id} escaped at ({p.position[0]:.3f}, {p.position[1]:.3f})")
    return problems
