# MIT License (see LICENSE)
"""
Per-particle simulation rules.

    - integrators: Damped explicit Euler step and the gravity vector.
    - settling: Bin assignment, stacking and re-packing.
    - eviction: Victim selection for the population caps.
    - invariants: Consistency checks over an engine.
"""
from .integrators import damped_euler_step, gravity_vector
from .settling import bin_index_for, stack_height, try_settle, repack_bin
from .eviction import Eviction, choose_falling, choose_settled, center_out_order, edge_bins
from .invariants import (
    kinetic_energy,
    bin_conservation_error,
    population_ok,
    escaped_particles,
    check_invariants,
)

__all__ = [
    "damped_euler_step",
    "gravity_vector",
    "bin_index_for",
    "stack_height",
    "try_settle",
    "repack_bin",
    "Eviction",
    "choose_falling",
    "choose_settled",
    "center_out_order",
    "edge_bins",
    "kinetic_energy",
    "bin_conservation_error",
    "population_ok",
    "escaped_particles",
    "check_invariants",
]
