# MIT License (see LICENSE)
"""
Time integration for falling particles.

One explicit step with per-step damping, in this order:
    v <- v + g dt
    v <- damping * v
    x <- x + v dt

Damping is applied per call, not per second, so the effective drag depends
on the frame rate. That is the behaviour the board was tuned for; the step
clamp in the engine keeps dt in a narrow band anyway.
"""
from __future__ import annotations

import numpy as np

from ..types import Particle


def damped_euler_step(
    particle: Particle,
    gravity: np.ndarray,
    damping: float,
    dt: float,
) -> None:
    """Advance one falling particle by dt (in place)."""
    v = particle.velocity
    v += gravity * dt
    v *= damping
    particle.position += v * dt


def gravity_vector(magnitude: float, inverted: bool) -> np.ndarray:
    """Gravity acceleration; points down (-y) unless inverted."""
    sign = 1.0 if inverted else -1.0
    return np.array([0.0, sign * abs(magnitude)], dtype=np.float64)
