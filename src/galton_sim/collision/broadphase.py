# MIT License (see LICENSE)
"""
Broadphase pin lookup using a static spatial hash.

Pins never move, so the grid is built once per layout. A query returns the
indices of pins whose cells overlap a square around the particle, sorted so
that the narrowphase visits pins in layout order (row by row, left to right),
exactly as a brute-force scan over every pin would.

Key concepts:
- Cell size defaults to the pin spacing, so a particle touches at most a
  handful of cells.
- The query margin must cover the contact distance plus any push-out that
  happens while resolving earlier pins in the same step.
"""
from __future__ import annotations
import math
from collections import defaultdict

from ..types import Pin


class PinGrid:
    """
    Uniform grid over static pins.

    Example:
        grid = PinGrid(layout.pins, cell_size=cfg.pin_spacing)
        for i in grid.query(x, y, reach):
            resolve(layout.pins[i])
    """

    def __init__(self, pins: tuple[Pin, ...] | list[Pin], cell_size: float) -> None:
        self.cell_size = cell_size if cell_size > 0 else 1.0
        self.cells: dict[tuple[int, int], list[int]] = defaultdict(list)
        for i, pin in enumerate(pins):
            self.cells[self._cell(pin.x, pin.y)].append(i)

    def _cell(self, x: float, y: float) -> tuple[int, int]:
        inv = 1.0 / self.cell_size
        return (int(math.floor(x * inv)), int(math.floor(y * inv)))

    def query(self, x: float, y: float, reach: float) -> list[int]:
        """
        Indices of pins that may lie within `reach` of (x, y).

        Returns:
            Sorted pin indices (layout order).
        """
        if not self.cells:
            return []
        x0, y0 = self._cell(x - reach, y - reach)
        x1, y1 = self._cell(x + reach, y + reach)
        found: list[int] = []
        for cx in range(x0, x1 + 1):
            for cy in range(y0, y1 + 1):
                bucket = self.cells.get((cx, cy))
                if bucket:
                    found.extend(bucket)
        found.sort()
        return found

    def __len__(self) -> int:
        return sum(len(v) for v in self.cells.values())
