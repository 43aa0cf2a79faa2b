# MIT License (see LICENSE)
"""
Utilities for calculating physical invariants and constraint residuals.

Used for verifying simulation correctness and debugging stability issues.
With a fixed root and no dissipation, the chain's total energy should remain
constant (within integration error), and rod lengths should match their
configured values after every correction.
"""
from __future__ import annotations
import numpy as np

from ..util import row_norm2, segments_from_points


def kinetic_energy(masses: np.ndarray, velocities: np.ndarray) -> float:
    """
    Total kinetic energy of a set of point masses.

    T = Σ 0.5 * m * |v|²
    """
    return 0.5 * float(np.dot(masses, row_norm2(velocities)))


def potential_energy(masses: np.ndarray, positions: np.ndarray, up: np.ndarray) -> float:
    """
    Gravitational potential per unit gravity strength.

    U = Σ m * (x · up). Multiply by |g| for an energy.
    """
    return float(np.dot(masses, positions @ up))


def rod_lengths(root: np.ndarray, positions: np.ndarray) -> np.ndarray:
    """
    Distance of each point from its predecessor (the root for point 0).
    """
    return np.sqrt(row_norm2(segments_from_points(root, positions)))


def max_rod_error(root: np.ndarray, positions: np.ndarray, lengths: np.ndarray) -> float:
    """Largest relative deviation of any rod from its configured length."""
    return float(np.max(np.abs(rod_lengths(root, positions) - lengths) / lengths))
