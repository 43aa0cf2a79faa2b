# MIT License (see LICENSE)
"""
JSON serialization and deserialization for chain simulations.

This module saves and loads a ChainSimulation: the chain's physical
parameters together with the evolving state, so a session can be resumed.

JSON Schema Overview:
---------------------
{
  "gravity": [float, float, float],  # Default: [0.0, 9.8, 0.0] (points "up")
  "segments": [                      # Required, root to tip, at least 2
    {"length": float, "mass": float}
  ],
  "substeps": int,                   # Integrator substeps per tick, default 1024
  "integrator": string,              # "rk4", "verlet" or "euler", default "rk4"
  "root": [x, y, z],                 # Root position, default [0, 0, 0]
  "root_velocity": [vx, vy, vz],     # Default [0, 0, 0]
  "layout": {"angle_deg": float},    # Zig-zag used when positions are absent
  "positions": [[x, y, z], ...],     # Optional, one per segment
  "velocities": [[vx, vy, vz], ...], # Optional, one per segment
  "time": float                      # Optional timestamp of the last tick
}
"""
from __future__ import annotations
import json
from typing import TYPE_CHECKING, Any

import numpy as np

from ..chain import ChainModel
from ..constants import DEFAULT_GRAVITY, DEFAULT_SUBSTEPS, DEFAULT_ZIGZAG_DEG
from ..types import Segment

if TYPE_CHECKING:
    from ..simulation import ChainSimulation


def load_simulation_raw(path: str) -> dict[str, Any]:
    """
    Load raw JSON data from a simulation file without object construction.

    Args:
        path: Absolute or relative path to the JSON file.

    Returns:
        Dictionary containing the raw JSON data.
    """
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def segment_from_json(d: dict[str, Any]) -> Segment:
    """
    Parse a single {length, mass} entry.

    Positivity is checked by ChainModel, which reports the segment index.

    Raises:
        ValueError: If a required field is missing.
    """
    for key in ("length", "mass"):
        if key not in d:
            raise ValueError(f"Segment definition missing required '{key}' field.")
    return Segment(length=float(d["length"]), mass=float(d["mass"]))


def chain_from_json(data: dict[str, Any]) -> ChainModel:
    """
    Build a ChainModel from the physical parameters of a simulation dict.

    Raises:
        ValueError: If 'segments' is missing.
        ChainConfigError: If the parameters are physically invalid.
    """
    if "segments" not in data:
        raise ValueError("Simulation definition missing required 'segments' field.")
    return ChainModel(
        gravity=tuple(data.get("gravity", DEFAULT_GRAVITY)),
        segments=[segment_from_json(s) for s in data["segments"]],
        substeps=int(data.get("substeps", DEFAULT_SUBSTEPS)),
    )


def simulation_from_json(data: dict[str, Any]) -> "ChainSimulation":
    """Construct a ready-to-run ChainSimulation from a parsed JSON dict."""
    # Import locally to avoid circular import (simulation imports chain)
    from ..simulation import ChainSimulation

    chain = chain_from_json(data)
    positions = data.get("positions")
    velocities = data.get("velocities")
    return ChainSimulation(
        chain=chain,
        integrator=data.get("integrator", "rk4"),
        positions=None if positions is None else np.array(positions, dtype=np.float64),
        velocities=None if velocities is None else np.array(velocities, dtype=np.float64),
        root_position=tuple(data.get("root", [0.0, 0.0, 0.0])),
        root_velocity=tuple(data.get("root_velocity", [0.0, 0.0, 0.0])),
        last_tick=data.get("time"),
        layout_angle_deg=float(data.get("layout", {}).get("angle_deg", DEFAULT_ZIGZAG_DEG)),
    )


def load_simulation(path: str) -> "ChainSimulation":
    """
    Load and construct a ChainSimulation from a JSON file.

    Raises:
        FileNotFoundError: If the file cannot be found.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If required fields are missing or invalid.
    """
    return simulation_from_json(load_simulation_raw(path))


def segment_to_json(segment: Segment) -> dict[str, float]:
    return {"length": segment.length, "mass": segment.mass}


def simulation_to_json(sim: "ChainSimulation") -> dict[str, Any]:
    """
    Serialize a ChainSimulation to a dictionary (round-trip compatible).

    Positions and velocities are always written, so loading restores the
    exact state rather than a fresh layout.
    """
    chain = sim.chain
    result = {
        "gravity": _to_list(chain.gravity),
        "segments": [segment_to_json(s) for s in chain.segments],
        "root": _to_list(sim.root_position),
        "positions": _to_list(sim.positions),
        "velocities": _to_list(sim.velocities),
    }

    # Optional parameters (skip if standard defaults)
    if chain.substeps != DEFAULT_SUBSTEPS:
        result["substeps"] = chain.substeps
    if sim.integrator.name not in ("", "rk4"):
        result["integrator"] = sim.integrator.name
    if np.any(sim.root_velocity != 0.0):
        result["root_velocity"] = _to_list(sim.root_velocity)
    if sim.last_tick is not None:
        result["time"] = sim.last_tick

    return result


def save_simulation(sim: "ChainSimulation", path: str, indent: int = 2) -> None:
    """Save a ChainSimulation to a JSON file on disk."""
    data = simulation_to_json(sim)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent)


def _to_list(arr: Any) -> list:
    """Helper: Convert numpy array or tuple to a clean (nested) list of floats."""
    if isinstance(arr, np.ndarray):
        return arr.tolist()
    return list(arr)
