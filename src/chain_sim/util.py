# MIT License (see LICENSE)
"""
Utility functions for 3D vector math and array conversion.

Vectors are numpy arrays of shape (3,); chain state is stored as arrays of
shape (n, 3), one row per point mass.
"""
from __future__ import annotations
import os

import numpy as np


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.

    Allows tuple/list inputs for gravity, root positions and chain state.
    """
    return np.array(x, dtype=np.float64)


def vec3(x) -> np.ndarray:
    """Convert to a float64 vector of shape (3,), raising on other shapes."""
    v = f64(x)
    if v.shape != (3,):
        raise ValueError(f"Expected a 3D vector, got shape {v.shape}")
    return v


def norm2(v: np.ndarray) -> float:
    """Squared magnitude of a 3D vector."""
    return float(np.dot(v, v))


def norm(v: np.ndarray) -> float:
    """Magnitude (length) of a 3D vector."""
    return float(np.sqrt(norm2(v)))


def row_norm2(rows: np.ndarray) -> np.ndarray:
    """Squared magnitude of every row of an (n, 3) array."""
    return np.einsum("ij,ij->i", rows, rows)


def row_dot(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Row-wise dot product of two (n, 3) arrays."""
    return np.einsum("ij,ij->i", a, b)


def segments_from_points(origin: np.ndarray, points: np.ndarray) -> np.ndarray:
    """
    Relative vectors along a chain.

    Row 0 is points[0] - origin, row i is points[i] - points[i-1].
    """
    return np.diff(np.vstack([origin, points]), axis=0)


def log_level_from_env(default: str = "WARNING") -> str:
    """Log level requested through the CHAIN_SIM_LOG_LEVEL environment variable."""
    return os.environ.get("CHAIN_SIM_LOG_LEVEL", default).upper()
