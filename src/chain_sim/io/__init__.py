# MIT License (see LICENSE)
"""
Input/Output utilities for chain simulations.

This subpackage provides:
    - JSON serialization: Save and load simulations to/from JSON files.
    - Round-trip support: Saved sessions resume from the exact same state.

Typical usage:
    from chain_sim.io import load_simulation, save_simulation

    sim = load_simulation("chain.json")
    sim.tick(0.0)
    sim.tick(1 / 60)
    save_simulation(sim, "chain_after.json")
"""
from .json_io import (
    load_simulation,
    load_simulation_raw,
    save_simulation,
    simulation_from_json,
    simulation_to_json,
    chain_from_json,
    segment_from_json,
    segment_to_json,
)

__all__ = [
    # Loading
    "load_simulation",
    "load_simulation_raw",
    "simulation_from_json",
    "chain_from_json",
    "segment_from_json",
    # Saving
    "save_simulation",
    "simulation_to_json",
    "segment_to_json",
]
