# MIT License (see LICENSE)
"""
Particle-pin contact detection and response.

Contacts are resolved one pin at a time, in layout order, with no
multi-contact solver:

1. Overlap test: |p - pin| < r_ball + r_pin.
2. Push-out: move the particle along the pin normal to a gap of
   r_ball + r_pin + epsilon so it does not stick on the next step.
3. Reflection, only if approaching (v . n < 0):
       v <- v - (1 + e) (v . n) n
   followed by a uniform horizontal kick. Without the kick every particle
   dropped from the same spot follows the same lane and the histogram
   collapses to a spike.
"""
from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from ..types import Particle, Pin
from ..util import unit


@dataclass
class PinContact:
    """
    An overlap between a particle and a pin.

    Attributes:
        pin: The pin hit.
        normal: Unit vector from the pin centre toward the particle.
        penetration: Overlap depth (positive).
    """
    pin: Pin
    normal: np.ndarray
    penetration: float


def pin_contact(particle: Particle, pin: Pin, ball_radius: float) -> PinContact | None:
    """Return the contact with `pin`, or None if they do not overlap."""
    dx = particle.position[0] - pin.x
    dy = particle.position[1] - pin.y
    min_dist = ball_radius + pin.radius
    dist_sq = dx * dx + dy * dy
    if dist_sq >= min_dist * min_dist:
        return None
    d = np.array([dx, dy], dtype=np.float64)
    n = unit(d)
    return PinContact(pin=pin, normal=n, penetration=min_dist - float(np.sqrt(dist_sq)))


def resolve_pin_contact(
    particle: Particle,
    contact: PinContact,
    ball_radius: float,
    restitution: float,
    epsilon: float,
    kick: float = 0.0,
) -> bool:
    """
    Separate the particle from the pin and reflect its velocity.

    Args:
        particle: The falling particle (mutated in place).
        contact: Result of pin_contact().
        ball_radius: Particle radius.
        restitution: Coefficient e of the normal response.
        epsilon: Extra gap beyond touching distance.
        kick: Horizontal velocity added when the particle bounces.

    Returns:
        True if the velocity was reflected, False if only the position moved
        (the particle was already separating).
    """
    pin, n = contact.pin, contact.normal
    gap = ball_radius + pin.radius + epsilon
    particle.position[0] = pin.x + n[0] * gap
    particle.position[1] = pin.y + n[1] * gap

    vn = float(np.dot(particle.velocity, n))
    if vn >= 0.0:
        return False
    particle.velocity -= (1.0 + restitution) * vn * n
    particle.velocity[0] += kick
    return True
