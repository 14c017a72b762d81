# MIT License (see LICENSE)
"""
Victim selection for the bounded particle population.

When a spawn would exceed a cap the engine removes particles in this order:

1. Any falling particle (the first one in creation order). Cheapest and
   least visible.
2. The oldest settled particle of an edge bin (index 0, then the last bin).
3. Otherwise the oldest settled particle of the bin furthest from the centre,
   searching inward; left before right at equal distance.

"Oldest" within a bin is the lowest particle, creation order breaking ties.
Trimming from the outside in keeps the bell shape recognisable while old
particles are recycled.
"""
from __future__ import annotations
from collections import defaultdict
from dataclasses import dataclass
from typing import Iterable

from ..types import Particle

FALLING = "falling"
EDGE_BIN = "edge-bin"
CENTER_OUT = "center-out"


@dataclass(frozen=True)
class Eviction:
    """A chosen victim and the rule that picked it."""
    particle: Particle
    rule: str


def edge_bins(bin_count: int) -> list[int]:
    """Indices of the outermost bins, left first."""
    if bin_count <= 0:
        return []
    if bin_count == 1:
        return [0]
    return [0, bin_count - 1]


def center_out_order(bin_count: int) -> list[int]:
    """
    Bin indices ordered from furthest-from-centre to the centre bin.

    For 5 bins: [0, 4, 1, 3, 2].
    """
    if bin_count <= 0:
        return []
    middle = bin_count // 2
    order = []
    for distance in range(bin_count // 2, -1, -1):
        left, right = middle - distance, middle + distance
        if left >= 0:
            order.append(left)
        if right < bin_count and right != left:
            order.append(right)
    return order


def oldest(particles: Iterable[Particle]) -> Particle | None:
    """Lowest particle; the earliest created wins a tie."""
    best = None
    for p in particles:
        if best is None or (p.position[1], p.id) < (best.position[1], best.id):
            best = p
    return best


def choose_falling(particles: Iterable[Particle]) -> Eviction | None:
    """First falling particle in collection order, if any."""
    for p in particles:
        if not p.settled:
            return Eviction(p, FALLING)
    return None


def choose_settled(particles: Iterable[Particle], bin_count: int) -> Eviction | None:
    """Settled victim per rules 2 and 3, or None if nothing is settled."""
    by_bin: dict[int, list[Particle]] = defaultdict(list)
    for p in particles:
        if p.settled and p.bin_index is not None:
            by_bin[p.bin_index].append(p)
    if not by_bin:
        return None

    for idx in edge_bins(bin_count):
        if by_bin.get(idx):
            return Eviction(oldest(by_bin[idx]), EDGE_BIN)
    for idx in center_out_order(bin_count):
        if by_bin.get(idx):
            return Eviction(oldest(by_bin[idx]), CENTER_OUT)

    # Settled in a bin that no longer exists; should not happen, take any.
    idx = min(by_bin)
    return Eviction(oldest(by_bin[idx]), CENTER_OUT)
