# MIT License (see LICENSE)
"""
Pin and bin layout generation.

generate_layout() is a pure function of a BoardConfig. It places pins row by
row, top to bottom, either as a triangle (row r holds r+1 pins centred on
x = 0) or as a trapezoid whose row widths interpolate linearly from
top_width_ratio * bin_count at the top to bin_count at the bottom. Bin
centres tile the board width with one pin spacing per bin.

Degenerate inputs (rows <= 0, bin_count <= 0, non-positive spacing) yield
an empty-but-valid layout instead of raising.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass

import numpy as np

from .config import BoardConfig
from .types import Pin, Bin
from .util import floor_index

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Layout:
    """
    Result of generate_layout().

    Unpacks as (pins, bin_centers) so callers can write
    `pins, centers = generate_layout(cfg)`.
    """
    pins: tuple[Pin, ...]
    bin_centers: tuple[float, ...]
    bin_width: float = 0.0
    floor_y: float = 0.0

    def __iter__(self):
        yield self.pins
        yield self.bin_centers

    def pin_array(self) -> np.ndarray:
        """Pin centres as an [N, 2] float64 array."""
        if not self.pins:
            return np.zeros((0, 2), dtype=np.float64)
        return np.array([(p.x, p.y) for p in self.pins], dtype=np.float64)

    def row_counts(self) -> list[int]:
        """Number of pins in each row, top to bottom."""
        counts: dict[int, int] = {}
        for p in self.pins:
            counts[p.row] = counts.get(p.row, 0) + 1
        return [counts[r] for r in sorted(counts)]

    def make_bins(self) -> list[Bin]:
        """Fresh, empty Bin objects for every bin centre."""
        return [
            Bin(index=i, x=x, floor_y=self.floor_y, width=self.bin_width)
            for i, x in enumerate(self.bin_centers)
        ]


def row_pin_count(config: BoardConfig, row: int) -> int:
    """
    Pins in a given row.

    Triangular: row + 1. Trapezoidal: the floored linear interpolation
    between top_width_ratio * bin_count (row 0) and bin_count (last row).
    """
    if not config.is_trapezoid:
        return row + 1
    ratio = float(config.top_width_ratio)
    n = config.bin_count
    progress = row / (config.rows - 1) if config.rows > 1 else 0.0
    return max(floor_index(ratio * n + (1.0 - ratio) * n * progress), 0)


def _row_x_positions(config: BoardConfig, row: int, count: int) -> list[float]:
    s = config.pin_spacing
    if not config.is_trapezoid:
        # Centred on x = 0, neighbours one spacing apart.
        return [(i - 0.5 * row) * s for i in range(count)]
    offset = (config.bin_count - count) * s / 2
    left = -config.half_width + 0.5 * s
    return [left + i * s + offset for i in range(count)]


def bin_centers(config: BoardConfig) -> tuple[float, ...]:
    """Centres of the bin_count bins, left to right."""
    if config.bin_count <= 0 or config.pin_spacing <= 0:
        return ()
    s = config.pin_spacing
    left = -config.half_width
    return tuple(left + (i + 0.5) * s for i in range(config.bin_count))


def generate_layout(config: BoardConfig) -> Layout:
    """
    Compute pin positions and bin centres for a board.

    Args:
        config: Board parameters.

    Returns:
        Layout with pins ordered row by row, left to right.
    """
    pins: list[Pin] = []
    if config.rows > 0 and config.pin_spacing > 0:
        y0 = config.pin_top_y
        for row in range(config.rows):
            count = row_pin_count(config, row)
            y = y0 - row * config.pin_spacing
            for i, x in enumerate(_row_x_positions(config, row, count)):
                pins.append(Pin(x=x, y=y, radius=config.pin_radius, row=row, index=i))

    centers = bin_centers(config)
    layout = Layout(
        pins=tuple(pins),
        bin_centers=centers,
        bin_width=config.pin_spacing if centers else 0.0,
        floor_y=config.floor_y,
    )
    logger.debug(
        "Generated %s layout: %d rows, %d pins, %d bins",
        "trapezoid" if config.is_trapezoid else "triangular",
        max(config.rows, 0), len(pins), len(centers),
    )
    return layout
