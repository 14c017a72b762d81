# MIT License (see LICENSE)
"""
Input/Output for board configurations and engine snapshots.

Typical usage:
    from galton_sim.io import load_config, save_config, save_snapshot

    config = load_config("board.json")
    engine = SimulationEngine(config)
    ...
    save_snapshot(engine, "frame.json")
"""
from .json_io import (
    load_config,
    save_config,
    config_from_json,
    config_to_json,
    engine_to_json,
    save_snapshot,
    bin_to_json,
    particle_to_json,
)

__all__ = [
    # Config
    "load_config",
    "save_config",
    "config_from_json",
    "config_to_json",
    # Snapshots
    "engine_to_json",
    "save_snapshot",
    "bin_to_json",
    "particle_to_json",
]
