# MIT License (see LICENSE)
"""
Core type definitions for the chain simulation.

A chain is an ordered list of point masses joined by rigid, massless rods.
Segment i connects point i to its predecessor (point i-1, or the root for
i == 0), so segment and point indices are aligned.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable

import numpy as np


@dataclass(frozen=True)
class Segment:
    """
    One rod and the point mass at its far end.

    Attributes:
        length: Rod length in meters (distance from the previous point).
        mass: Point mass in kg.
    """
    length: float
    mass: float

    @classmethod
    def coerce(cls, item: "Segment | tuple[float, float]") -> "Segment":
        """Accept either a Segment or a (length, mass) pair."""
        if isinstance(item, Segment):
            return item
        length, mass = item
        return cls(float(length), float(mass))


def coerce_segments(items: Iterable) -> tuple[Segment, ...]:
    """Normalize a sequence of segments or (length, mass) pairs."""
    return tuple(Segment.coerce(item) for item in items)


def check_state(positions: np.ndarray, velocities: np.ndarray, n: int) -> None:
    """
    Verify that chain state arrays are index-aligned with n segments.

    Raises:
        ValueError: If either array is not of shape (n, 3).
    """
    if positions.shape != (n, 3):
        raise ValueError(f"positions must have shape ({n}, 3), got {positions.shape}")
    if velocities.shape != (n, 3):
        raise ValueError(f"velocities must have shape ({n}, 3), got {velocities.shape}")
