# MIT License (see LICENSE)
"""
Collision handling for falling particles.

    - broadphase: Static spatial hash over pins (PinGrid).
    - pins: Particle-pin overlap test and reflection with symmetry-breaking kick.
    - boundary: Side walls and ceiling.

Particle-particle collisions are not modelled.
"""
from .broadphase import PinGrid
from .pins import PinContact, pin_contact, resolve_pin_contact
from .boundary import reflect_walls

__all__ = [
    "PinGrid",
    "PinContact",
    "pin_contact",
    "resolve_pin_contact",
    "reflect_walls",
]
