# MIT License (see LICENSE)
"""
Side walls and ceiling.

The board is a box [-W/2, W/2] x (-inf, top_y]. A particle crossing a wall
is clamped back inside (one radius from the wall) and the offending velocity
component is inverted and scaled by the restitution. There is no floor here:
the bins catch everything that falls through the collection line.
"""
from __future__ import annotations

from ..types import Particle


def reflect_walls(
    particle: Particle,
    half_width: float,
    top_y: float,
    radius: float,
    restitution: float,
) -> bool:
    """
    Clamp a particle into the board and bounce it off walls and ceiling.

    If the board is narrower than the particle the x position collapses to
    the centre line.

    Returns:
        True if any wall or the ceiling was touched.
    """
    p, v = particle.position, particle.velocity
    hit = False

    lo = -half_width + radius
    hi = half_width - radius
    if lo > hi:
        lo = hi = 0.0
    if p[0] < lo:
        p[0] = lo
        v[0] *= -restitution
        hit = True
    elif p[0] > hi:
        p[0] = hi
        v[0] *= -restitution
        hit = True

    if p[1] > top_y:
        p[1] = top_y
        v[1] *= -restitution
        hit = True
    return hit
