# MIT License (see LICENSE)
"""
Bin assignment and stacking.

A falling particle that drops below the collection line is assigned to the
bin under it:

    bin = floor((x + W/2) / spacing)

If that index is a real bin the particle snaps to the bin centre, stacks on
top of the particles already there and becomes settled. An out-of-range
index (numerical drift past a wall) leaves the particle falling; eviction
cleans such particles up eventually.

Stack heights:
    y_k = floor_y + k * r * stack_offset      (k = occupants below)
never lower than floor_y.
"""
from __future__ import annotations
import math
from typing import Iterable

from ..config import BoardConfig
from ..types import Bin, Particle


def bin_index_for(x: float, half_width: float, spacing: float) -> int:
    """Bin under horizontal position x; may be out of range."""
    if spacing <= 0:
        return -1
    return int(math.floor((x + half_width) / spacing))


def stack_height(b: Bin, slot: int, radius: float, stack_offset: float) -> float:
    """Resting height of the particle at stack position `slot` in bin b."""
    y = b.floor_y + slot * radius * stack_offset
    # Safety net for odd configs (negative offsets); never sink through.
    return max(y, b.floor_y)


def try_settle(particle: Particle, bins: list[Bin], config: BoardConfig) -> Bin | None:
    """
    Settle a falling particle if it has crossed the collection line.

    Args:
        particle: A falling particle (mutated on success).
        bins: The engine's bins, indexed by bin index.
        config: Board configuration.

    Returns:
        The bin the particle settled into, or None.
    """
    if particle.settled or particle.position[1] >= config.collection_y:
        return None
    idx = bin_index_for(float(particle.position[0]), config.half_width, config.pin_spacing)
    if not 0 <= idx < len(bins):
        return None
    b = bins[idx]
    y = stack_height(b, b.count, config.ball_size, config.stack_offset)
    particle.settle(idx, b.x, y)
    b.count += 1
    return b


def repack_bin(b: Bin, occupants: Iterable[Particle], radius: float, stack_offset: float) -> None:
    """
    Re-stack a bin's particles contiguously from the floor.

    The existing order (lowest first, creation order on ties) is preserved,
    so the oldest particle stays at the bottom. Also resyncs b.count.
    """
    ordered = sorted(occupants, key=lambda p: (p.position[1], p.id))
    for slot, p in enumerate(ordered):
        p.position[0] = b.x
        p.position[1] = stack_height(b, slot, radius, stack_offset)
    b.count = len(ordered)
