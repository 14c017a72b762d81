# MIT License (see LICENSE)
"""
Default tuning values for the Galton board.

Lengths are in board-local units (one pin spacing is ~0.5), times in seconds.
The geometry fractions are multiples of the board height H = rows * spacing.
"""
from __future__ import annotations

# Downward acceleration magnitude.
GRAVITY: float = 9.8

# Fraction of normal velocity kept (and inverted) after a pin or wall hit.
RESTITUTION: float = 0.5

# Per-step velocity attenuation (frame based, not time based).
DAMPING: float = 0.98

# Frame gaps at or above this are treated as a paused clock and skipped.
MAX_DT: float = 0.2

# Extra separation after pushing a particle out of a pin, avoids re-contact
# on the very next step.
COLLISION_EPSILON: float = 0.01

# Width of the uniform horizontal kick added on each pin bounce.
BOUNCE_JITTER: float = 0.3

# Width of the uniform horizontal spread of spawn positions.
SPAWN_JITTER: float = 0.2

# Ball radius as a fraction of pin spacing.
BALL_SIZE_FRACTION: float = 0.12
PIN_RADIUS: float = 0.04

# Vertical placement, as fractions of board height.
PIN_AREA_OFFSET: float = 0.3
PIN_TOP_FRACTION: float = 0.2
CEILING_FRACTION: float = 0.3
COLLECTION_LINE_FRACTION: float = 0.8
FLOOR_FRACTION: float = 1.05

# Stack spacing in ball radii.
STACK_OFFSET: float = 0.3

MAX_LIVE: int = 1000
MAX_SETTLED: int = 1000

# Spawn cadence of the start button: one drop every interval, total drops per press.
SPAWN_INTERVAL: float = 0.15
SPAWN_TOTAL: int = 50
