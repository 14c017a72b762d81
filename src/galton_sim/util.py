# MIT License (see LICENSE)
"""
Small vector and numeric helpers shared by the engine modules.

Vectors are numpy float64 arrays of shape (2,), matching the board's planar
coordinates. Helpers return Python floats where callers only need scalars.
"""
from __future__ import annotations

import math

import numpy as np

# Direction used when a particle sits exactly on a pin centre.
UP = np.array([0.0, 1.0], dtype=np.float64)


def f64(x) -> np.ndarray:
    """Convert any array-like (tuple, list, array) to a float64 array."""
    return np.array(x, dtype=np.float64)


def norm(v: np.ndarray) -> float:
    """Length of a 2D vector."""
    return math.hypot(float(v[0]), float(v[1]))


def unit(v: np.ndarray, fallback: np.ndarray = UP, eps: float = 1e-12) -> np.ndarray:
    """
    Normalise v, returning a copy of `fallback` when |v| < eps.

    The fallback keeps degenerate contacts (coincident centres) resolvable
    instead of producing NaNs.
    """
    n = norm(v)
    if n < eps:
        return fallback.copy()
    return v / n


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp x into [lo, hi]. If lo > hi the midpoint is returned."""
    if lo > hi:
        return 0.5 * (lo + hi)
    return lo if x < lo else hi if x > hi else x


def floor_index(value: float, eps: float = 1e-9) -> int:
    """
    Floor with a small tolerance so 20.999999999 counts as 21.

    Layout arithmetic like ratio * count + (1 - ratio) * count * 1.0 lands a
    hair under the integer it should hit.
    """
    return int(math.floor(value + eps))
