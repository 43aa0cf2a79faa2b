# MIT License (see LICENSE)
"""
Frame-driven simulation session around a ChainModel.

ChainSimulation owns everything that persists between frames: the chain's
positions and velocities, the root's current position and velocity, and the
timestamp of the last tick. Each call to ``tick`` advances the chain from the
previous timestamp to the new one while the root is dragged toward an
optional target point (for example a point under the mouse cursor).

Structure:
    - Build a ChainModel (or use ChainSimulation.default()).
    - Call sim.tick(timestamp, root_target) once per frame.
    - Read sim.positions / sim.root_position to draw the chain.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from .chain import ChainModel
from .constants import DEFAULT_GRAVITY, DEFAULT_ZIGZAG_DEG
from .types import check_state
from .util import f64, norm, vec3
from .core.integrators import ExplicitIntegrator, make_integrator
from .core.invariants import max_rod_error

logger = logging.getLogger("chain_sim")


def side_axis(up: np.ndarray) -> np.ndarray:
    """A unit vector perpendicular to ``up``, chosen deterministically."""
    # Cross with the coordinate axis least aligned with up
    axis = np.zeros(3, dtype=np.float64)
    axis[int(np.argmin(np.abs(up)))] = 1.0
    side = np.cross(up, axis)
    return side / norm(side)


def zigzag_layout(
    root,
    lengths: Sequence[float],
    down=(0.0, -1.0, 0.0),
    side=(1.0, 0.0, 0.0),
    angle_deg: float = DEFAULT_ZIGZAG_DEG,
) -> np.ndarray:
    """
    Lay out chain points descending from ``root`` in a zig-zag.

    Each rod leans ``angle_deg`` away from ``down``, alternately toward
    +side and -side, starting with +side.

    Returns:
        Positions, shape (n, 3).
    """
    down = vec3(down)
    down = down / norm(down)
    side = vec3(side)
    side = side - np.dot(side, down) * down
    side = side / norm(side)

    theta = np.radians(angle_deg)
    points = np.empty((len(lengths), 3), dtype=np.float64)
    last = vec3(root)
    for i, length in enumerate(lengths):
        sign = 1.0 if i % 2 == 0 else -1.0
        direction = np.cos(theta) * down + sign * np.sin(theta) * side
        last = last + length * direction
        points[i] = last
    return points


@dataclass(eq=False)
class ChainSimulation:
    """
    A chain plus the state that evolves across frames.

    Attributes:
        chain: The constrained chain model.
        integrator: ExplicitIntegrator or registered name ("rk4", "verlet", "euler").
        positions: Point positions (n, 3) in meters. Defaults to a zig-zag
                   hanging from root_position.
        velocities: Point velocities (n, 3) in m/s. Defaults to zero.
        root_position: Current root position in meters.
        root_velocity: Current root velocity in m/s.
        last_tick: Timestamp (s) reached by the previous tick, None before
                   the first frame.
    """
    chain: ChainModel
    integrator: str | ExplicitIntegrator = "rk4"
    positions: np.ndarray | None = None
    velocities: np.ndarray | None = None
    root_position: np.ndarray | Sequence[float] = (0.0, 0.0, 0.0)
    root_velocity: np.ndarray | Sequence[float] = (0.0, 0.0, 0.0)
    last_tick: float | None = None
    layout_angle_deg: float = field(default=DEFAULT_ZIGZAG_DEG, repr=False)

    def __post_init__(self) -> None:
        self.integrator = make_integrator(self.integrator)
        self.root_position = vec3(self.root_position)
        self.root_velocity = vec3(self.root_velocity)
        n = len(self.chain)
        if self.positions is None:
            down = -self.chain.up
            self.positions = zigzag_layout(
                self.root_position,
                self.chain.rod_lengths,
                down=down,
                side=side_axis(down),
                angle_deg=self.layout_angle_deg,
            )
        else:
            self.positions = f64(self.positions)
        if self.velocities is None:
            self.velocities = np.zeros((n, 3), dtype=np.float64)
        else:
            self.velocities = f64(self.velocities)
        check_state(self.positions, self.velocities, n)

    @classmethod
    def default(cls, **kwargs) -> "ChainSimulation":
        """Four 0.3 m rods with 1 kg masses under 9.8 m/s² gravity."""
        chain = ChainModel(gravity=DEFAULT_GRAVITY, segments=[(0.3, 1.0)] * 4)
        return cls(chain=chain, **kwargs)

    def tick(self, timestamp: float, root_target=None) -> float:
        """
        Advance the chain to ``timestamp`` (seconds).

        The first call only records the timestamp. A repeated or earlier
        timestamp leaves the state unchanged.

        Args:
            timestamp: Frame time in seconds.
            root_target: Where the root should be at ``timestamp``. The root
                         stays put when None.

        Returns:
            The time reached.
        """
        t = float(timestamp)
        last = self.last_tick
        self.last_tick = t
        if last is None or t == last:
            return t
        if t < last:
            logger.debug("tick: timestamp %g precedes last tick %g, ignored", t, last)
            self.last_tick = last
            return last

        target = self.root_position if root_target is None else vec3(root_target)
        t_reached, self.root_position, self.root_velocity = self.chain.tick_towards(
            self.integrator,
            last,
            t,
            self.root_position,
            self.root_velocity,
            target,
            self.positions,
            self.velocities,
        )
        self.last_tick = t_reached
        return t_reached

    def potential_energy(self) -> float:
        """Potential energy of the chain in J."""
        return self.chain.potential_energy(self.positions)

    def kinetic_energy(self) -> float:
        """Kinetic energy of the chain in J."""
        return self.chain.kinetic_energy(self.velocities)

    def unit_energy(self) -> float:
        """Characteristic energy of the chain in J."""
        return self.chain.unit_energy()

    def total_energy(self) -> float:
        return self.potential_energy() + self.kinetic_energy()

    def max_rod_error(self) -> float:
        """Largest relative rod-length deviation of the current state."""
        return max_rod_error(self.root_position, self.positions, self.chain.rod_lengths)
