# MIT License (see LICENSE)
"""
Board configuration.

BoardConfig is an immutable value describing one Galton board: its geometry,
the contact response and the population caps. Everything the engine and the
layout generator derive (board extents, ceiling, collection line, floor) is
exposed as a read-only property so there is exactly one place that turns
tunables into coordinates.

Changing a parameter means building a new config (dataclasses.replace or
with_rows) and handing it to SimulationEngine.rebuild().
"""
from __future__ import annotations
from dataclasses import dataclass, replace

from . import constants as C


@dataclass(frozen=True)
class BoardConfig:
    """
    Geometry, physics and population limits of a board.

    Attributes:
        rows: Number of pin rows.
        pin_spacing: Horizontal and vertical pin pitch; also the bin width.
        bin_count: Number of collection bins (rows + 1 for a classic board).
        top_width_ratio: None for a triangular board (row r has r+1 pins).
                         A number selects a trapezoidal board whose top row
                         holds top_width_ratio * bin_count pins.
        ball_radius: Explicit particle radius. None derives it as
                     ball_size_fraction * pin_spacing.
        ball_size_fraction: See ball_radius.
        pin_radius: Collision radius of every pin.
        restitution: Normal velocity kept after a pin or wall contact.
        damping: Velocity multiplier applied once per step.
        gravity: Gravity magnitude (always positive, direction is separate).
        max_live: Cap on particles in the engine, falling plus settled.
        max_settled: Cap on settled particles.
        stack_offset: Vertical pitch of stacked particles, in ball radii.
        pin_area_offset: Upward shift of the pin field, fraction of height.
        collection_line_fraction: Depth (fraction of height, below y=0) at
                                  which falling particles are binned.
        floor_fraction: Depth of the physical bin floor.
        collision_epsilon: Extra gap left after a pin push-out.
        bounce_jitter: Width of the uniform horizontal kick on pin bounces.
        spawn_jitter: Width of the uniform spread of spawn x positions.
        max_dt: Steps with dt >= max_dt are skipped.
    """
    rows: int = 20
    pin_spacing: float = 0.5
    bin_count: int = 21
    top_width_ratio: float | None = None
    ball_radius: float | None = None
    ball_size_fraction: float = C.BALL_SIZE_FRACTION
    pin_radius: float = C.PIN_RADIUS
    restitution: float = C.RESTITUTION
    damping: float = C.DAMPING
    gravity: float = C.GRAVITY
    max_live: int = C.MAX_LIVE
    max_settled: int = C.MAX_SETTLED
    stack_offset: float = C.STACK_OFFSET
    pin_area_offset: float = C.PIN_AREA_OFFSET
    collection_line_fraction: float = C.COLLECTION_LINE_FRACTION
    floor_fraction: float = C.FLOOR_FRACTION
    collision_epsilon: float = C.COLLISION_EPSILON
    bounce_jitter: float = C.BOUNCE_JITTER
    spawn_jitter: float = C.SPAWN_JITTER
    max_dt: float = C.MAX_DT

    def with_rows(self, rows: int) -> "BoardConfig":
        """Copy with a new row count; bin_count follows as rows + 1."""
        return replace(self, rows=rows, bin_count=rows + 1)

    @property
    def is_trapezoid(self) -> bool:
        return self.top_width_ratio is not None

    @property
    def board_width(self) -> float:
        return max(self.bin_count, 0) * self.pin_spacing

    @property
    def board_height(self) -> float:
        return max(self.rows, 0) * self.pin_spacing

    @property
    def ball_size(self) -> float:
        """Effective particle radius."""
        if self.ball_radius is not None:
            return self.ball_radius
        return self.pin_spacing * self.ball_size_fraction

    @property
    def pin_top_y(self) -> float:
        """Height of pin row 0."""
        return self.board_height * (C.PIN_TOP_FRACTION + self.pin_area_offset)

    @property
    def top_y(self) -> float:
        """Ceiling; particles are reflected back below it."""
        return self.board_height * (C.CEILING_FRACTION + self.pin_area_offset)

    @property
    def collection_y(self) -> float:
        """Falling particles below this line are assigned to a bin."""
        return -self.board_height * self.collection_line_fraction

    @property
    def floor_y(self) -> float:
        """Physical bottom of every bin."""
        return -self.board_height * self.floor_fraction

    @property
    def spawn_y(self) -> float:
        """Drop height, one radius under the ceiling."""
        return self.top_y - self.ball_size

    @property
    def half_width(self) -> float:
        return 0.5 * self.board_width
