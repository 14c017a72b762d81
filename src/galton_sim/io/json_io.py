# MIT License (see LICENSE)
"""
JSON serialization of board configurations and engine snapshots.

Configuration files are small and human-edited, so only non-default values
need to be present; everything else falls back to the BoardConfig defaults.

Config Schema Overview:
-----------------------
{
  "layout": "triangular" | "trapezoid",  # Default: "triangular"
  "rows": int,                           # Default: 20
  "bin_count": int,                      # Default: rows + 1 if rows given, else 21
  "pin_spacing": float,                  # Default: 0.5
  "top_width_ratio": float,              # Trapezoid only, default: 0.5
  "ball_radius": float | null,           # Default: derived from spacing
  "pin_radius": float,
  "restitution": float,
  "damping": float,
  "gravity": float,
  "max_live": int,
  "max_settled": int,
  "stack_offset": float,
  ...                                    # any other BoardConfig field
}

Snapshot Schema (engine_to_json):
---------------------------------
{
  "time": float,
  "gravity_inverted": bool,
  "config": {...},                       # as above
  "bins": [{"index", "x", "floor_y", "width", "count"}, ...],
  "particles": [{"id", "position", "velocity", "settled", "bin"}, ...]
}
"""
from __future__ import annotations
import json
import logging
from dataclasses import fields
from typing import TYPE_CHECKING, Any

import numpy as np

from ..config import BoardConfig
from ..types import Bin, Particle

if TYPE_CHECKING:
    from ..engine import SimulationEngine

logger = logging.getLogger(__name__)

DEFAULT_TRAPEZOID_RATIO = 0.5

_INT_FIELDS = {"rows", "bin_count", "max_live", "max_settled"}
_OPTIONAL_FIELDS = {"top_width_ratio", "ball_radius"}


def _number(key: str, value: Any, integer: bool) -> int | float:
    # bool is an int subclass; "rows": true is a typo, not a 1.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Config field '{key}' must be a number, got {value!r}")
    if integer:
        if isinstance(value, float) and not value.is_integer():
            raise ValueError(f"Config field '{key}' must be an integer, got {value!r}")
        return int(value)
    return float(value)


def config_from_json(d: dict[str, Any]) -> BoardConfig:
    """
    Build a BoardConfig from a parsed JSON object.

    Unknown keys are ignored for forward compatibility.

    Raises:
        ValueError: If a value has the wrong type or the layout is unknown.
    """
    if not isinstance(d, dict):
        raise ValueError(f"Config must be a JSON object, got {type(d).__name__}")

    kwargs: dict[str, Any] = {}
    for f in fields(BoardConfig):
        if f.name not in d:
            continue
        value = d[f.name]
        if value is None and f.name in _OPTIONAL_FIELDS:
            kwargs[f.name] = None
        else:
            kwargs[f.name] = _number(f.name, value, f.name in _INT_FIELDS)

    layout = d.get("layout")
    if layout is None:
        pass
    elif layout == "triangular":
        kwargs["top_width_ratio"] = None
    elif layout == "trapezoid":
        if kwargs.get("top_width_ratio") is None:
            kwargs["top_width_ratio"] = DEFAULT_TRAPEZOID_RATIO
    else:
        raise ValueError(f"Unknown layout: '{layout}'")

    # A classic board has one more bin than rows.
    if "rows" in kwargs and "bin_count" not in kwargs:
        kwargs["bin_count"] = kwargs["rows"] + 1

    return BoardConfig(**kwargs)


def config_to_json(config: BoardConfig) -> dict[str, Any]:
    """
    Serialize a BoardConfig, keeping only non-default fields.

    The layout name and the geometry (rows, bin_count, pin_spacing) are
    always written so a file is self-describing.
    """
    defaults = BoardConfig()
    result: dict[str, Any] = {
        "layout": "trapezoid" if config.is_trapezoid else "triangular",
        "rows": config.rows,
        "bin_count": config.bin_count,
        "pin_spacing": config.pin_spacing,
    }
    for f in fields(BoardConfig):
        if f.name in result:
            continue
        value = getattr(config, f.name)
        if value != getattr(defaults, f.name):
            result[f.name] = value
    return result


def load_config(path: str) -> BoardConfig:
    """
    Read a BoardConfig from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If the document is not a valid config.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    config = config_from_json(data)
    logger.info("Loaded board config from %s (%d rows, %d bins).", path, config.rows, config.bin_count)
    return config


def save_config(config: BoardConfig, path: str, indent: int = 2) -> None:
    """Write a BoardConfig to a JSON file."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config_to_json(config), f, indent=indent)
    logger.info("Saved board config to %s.", path)


def bin_to_json(b: Bin) -> dict[str, Any]:
    return {"index": b.index, "x": b.x, "floor_y": b.floor_y, "width": b.width, "count": b.count}


def particle_to_json(p: Particle) -> dict[str, Any]:
    return {
        "id": p.id,
        "position": _to_list(p.position),
        "velocity": _to_list(p.velocity),
        "settled": p.settled,
        "bin": p.bin_index,
    }


def engine_to_json(engine: "SimulationEngine") -> dict[str, Any]:
    """Snapshot of an engine for renderers, recordings or debugging."""
    return {
        "time": engine.time,
        "gravity_inverted": engine.gravity_inverted,
        "config": config_to_json(engine.config),
        "bins": [bin_to_json(b) for b in engine.bins],
        "particles": [particle_to_json(p) for p in engine.particles],
    }


def save_snapshot(engine: "SimulationEngine", path: str, indent: int | None = None) -> None:
    """Write engine_to_json(engine) to disk."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(engine_to_json(engine), f, indent=indent)
    logger.info("Saved snapshot of %d particles to %s.", len(engine.particles), path)


def _to_list(arr: Any) -> list[float]:
    """Numpy array or tuple to a plain list of floats."""
    if isinstance(arr, np.ndarray):
        return arr.tolist()
    return [float(v) for v in arr]
