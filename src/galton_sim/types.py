# MIT License (see LICENSE)
"""
Core data types of the Galton board.

- Pin: static circular obstacle, immutable after layout.
- Bin: one collection slot at the bottom of the board with its occupant count.
- Particle: a ball, either falling (integrated every step) or settled
  (frozen in a bin until evicted).

The board is planar: positions are 2D float64 arrays. Renderers that need a
3D point read Particle.position3, whose z is always 0.
"""
from __future__ import annotations
from dataclasses import dataclass, field

import numpy as np

from .util import f64


@dataclass(frozen=True)
class Pin:
    """
    A static obstacle.

    Attributes:
        x, y: Centre in board-local coordinates.
        radius: Collision radius.
        row: Row index (0 = top row).
        index: Position within the row, left to right.
    """
    x: float
    y: float
    radius: float
    row: int = 0
    index: int = 0


@dataclass
class Bin:
    """
    A collection slot.

    Bins are laid side by side with no gaps: bin i covers
    [x - width/2, x + width/2] and its right edge is bin i+1's left edge.

    Attributes:
        index: Slot index, 0 is the leftmost.
        x: Horizontal centre.
        floor_y: Height of the bin floor.
        width: Slot width (equal to the pin spacing).
        count: Number of settled particles currently in the slot.
    """
    index: int
    x: float
    floor_y: float
    width: float
    count: int = 0

    @property
    def left(self) -> float:
        return self.x - 0.5 * self.width

    @property
    def right(self) -> float:
        return self.x + 0.5 * self.width


@dataclass(eq=False)
class Particle:
    """
    A ball on the board.

    Lifecycle: Falling -> Settled -> removed. Once settled the velocity is
    zero and the position only changes when the engine re-packs its bin.

    Attributes:
        position: Centre [x, y].
        velocity: [vx, vy].
        settled: True once resting in a bin.
        bin_index: Bin holding the particle, None while falling.
        id: Monotonic creation order, assigned by the engine.

    Particles compare by identity; two balls at the same spot are still two
    balls.
    """
    position: np.ndarray | tuple[float, float] = (0.0, 0.0)
    velocity: np.ndarray | tuple[float, float] = (0.0, 0.0)
    settled: bool = False
    bin_index: int | None = None
    id: int = -1

    def __post_init__(self) -> None:
        self.position = f64(self.position)
        self.velocity = f64(self.velocity)

    @property
    def x(self) -> float:
        return float(self.position[0])

    @property
    def y(self) -> float:
        return float(self.position[1])

    @property
    def position3(self) -> tuple[float, float, float]:
        return (float(self.position[0]), float(self.position[1]), 0.0)

    def settle(self, bin_index: int, x: float, y: float) -> None:
        """Freeze the particle in a bin at (x, y)."""
        self.position[0] = x
        self.position[1] = y
        self.velocity.fill(0.0)
        self.settled = True
        self.bin_index = bin_index
