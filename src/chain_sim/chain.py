# MIT License (see LICENSE)
"""
Constrained chain model: point masses joined by rigid rods.

The ChainModel owns the physical parameters of a chain anchored at a moving
root and provides the equations of motion consumed by an explicit
integrator:

- acceleration(t, x, v): accelerations consistent with the rod constraints,
  from Lagrange multipliers solved as a symmetric tridiagonal system.
- correct(t, x, v): projection of positions back onto exact rod lengths.

Both work in nondimensional units. ``tick`` converts caller-owned physical
state into those units, runs a fixed number of integrator substeps and
converts the result back in place.

Units:
    unit_length = shortest rod
    unit_mass   = total mass
    unit_time   = sqrt(unit_length / |g|)
so that gravity has unit magnitude in model units.

Constraint system:
    With s_i the segment vectors (point i minus its predecessor) and λ_i the
    rod tensions per unit length, the force on point i is
        m_i a_i = λ_{i+1} s_{i+1} - λ_i s_i - m_i g
    Differentiating |s_i|² = const twice gives, for each rod,
        λ_i |s_i|² (1/m_{i-1} + 1/m_i) - λ_{i-1} (s_{i-1}·s_i)/m_{i-1}
            - λ_{i+1} (s_i·s_{i+1})/m_i = |ṡ_i|²
    where the first rod has no 1/m_{i-1} term and picks up -s_0·(g + r̈)
    from the root's acceleration r̈.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from .constants import DEFAULT_SUBSTEPS
from .exceptions import ChainConfigError
from .profiler import Profiler
from .types import Segment, check_state, coerce_segments
from .util import f64, norm, row_dot, row_norm2, segments_from_points, vec3
from .core.drivers import CubicTrajectory, FixedPoint, RootDriver
from .core.integrators import ExplicitIntegrator, make_integrator
from .core.invariants import kinetic_energy, potential_energy
from .core.tridiagonal import thomas

logger = logging.getLogger("chain_sim")


@dataclass(eq=False)
class ChainModel:
    """
    A chain of point masses hanging from a driven root.

    Attributes:
        gravity: Gravity vector in m/s². It points "up": masses accelerate
                 along its negation, and potential energy grows along it.
        segments: Sequence of Segment or (length, mass) pairs, root to tip.
        substeps: Integrator substeps per tick (fixed, never adapted).
        profiler: Optional Profiler instance for timing statistics.

    Raises:
        ChainConfigError: On fewer than 2 segments, a non-positive length or
            mass, zero gravity or a non-positive substep count.
    """
    gravity: Sequence[float] | np.ndarray
    segments: Sequence[Segment | tuple[float, float]]
    substeps: int = DEFAULT_SUBSTEPS
    profiler: Profiler | None = None

    # Derived in __post_init__
    unit_length: float = field(init=False)
    unit_mass: float = field(init=False)
    unit_time: float = field(init=False)
    lengths: np.ndarray = field(init=False, repr=False)
    masses: np.ndarray = field(init=False, repr=False)
    up: np.ndarray = field(init=False, repr=False)
    root: RootDriver = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate parameters and nondimensionalize them."""
        self.segments = coerce_segments(self.segments)
        if len(self.segments) < 2:
            raise ChainConfigError(
                f"at least 2 segments are required, got {len(self.segments)}"
            )
        for i, seg in enumerate(self.segments):
            if not seg.length > 0:
                raise ChainConfigError(f"segment {i}: length must be positive, got {seg.length}")
            if not seg.mass > 0:
                raise ChainConfigError(f"segment {i}: mass must be positive, got {seg.mass}")
        if self.substeps < 1:
            raise ChainConfigError(f"substeps must be at least 1, got {self.substeps}")

        g = vec3(self.gravity)
        g_mag = norm(g)
        if not g_mag > 0:
            raise ChainConfigError("gravity must be a non-zero vector")
        self.gravity = g

        lengths = f64([s.length for s in self.segments])
        masses = f64([s.mass for s in self.segments])
        self.unit_length = float(lengths.min())
        self.unit_mass = float(masses.sum())
        self.unit_time = float(np.sqrt(self.unit_length / g_mag))
        self.lengths = lengths / self.unit_length
        self.masses = masses / self.unit_mass
        self.up = g / g_mag
        self.root = FixedPoint()

        logger.debug(
            "ChainModel: n=%d unit_length=%g unit_mass=%g unit_time=%g",
            len(self.segments), self.unit_length, self.unit_mass, self.unit_time,
        )

    def __len__(self) -> int:
        return len(self.segments)

    # ------------------------------------------------------------------
    # Unit bookkeeping
    # ------------------------------------------------------------------

    @property
    def velocity_unit(self) -> float:
        """Physical velocity corresponding to 1 in model units (m/s)."""
        return self.unit_length / self.unit_time

    def to_model_units(
        self, positions: np.ndarray, velocities: np.ndarray
    ) -> tuple[np.ndarray, np.ndarray]:
        """Convert physical positions/velocities to new nondimensional arrays."""
        return f64(positions) / self.unit_length, f64(velocities) / self.velocity_unit

    def from_model_units(
        self, x: np.ndarray, v: np.ndarray
    ) -> tuple[np.ndarray, np.ndarray]:
        """Convert nondimensional positions/velocities back to physical units."""
        return x * self.unit_length, v * self.velocity_unit

    def _root_state(self, t: float) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Root position, velocity and acceleration in model units at model time t."""
        tp = t * self.unit_time
        x = self.root.x(tp) / self.unit_length
        v = self.root.v(tp) / self.velocity_unit
        a = self.root.a(tp) * (self.unit_time * self.unit_time / self.unit_length)
        return x, v, a

    # ------------------------------------------------------------------
    # Diagnostics (physical units in, physical units out)
    # ------------------------------------------------------------------

    def potential_energy(self, positions: np.ndarray) -> float:
        """Gravitational potential energy in J, zero at the origin."""
        return potential_energy(self.masses, f64(positions), self.up) * (
            self.unit_mass * self.unit_length / (self.unit_time * self.unit_time)
        )

    def kinetic_energy(self, velocities: np.ndarray) -> float:
        """Kinetic energy in J. Never negative."""
        return kinetic_energy(self.masses, f64(velocities)) * self.unit_mass

    def unit_energy(self) -> float:
        """Characteristic energy scale unit_mass·unit_length²/unit_time² in J."""
        return self.unit_mass * self.unit_length ** 2 / self.unit_time ** 2

    @property
    def rod_lengths(self) -> np.ndarray:
        """Configured rod lengths in meters."""
        return self.lengths * self.unit_length

    @property
    def point_masses(self) -> np.ndarray:
        """Configured point masses in kg."""
        return self.masses * self.unit_mass

    # ------------------------------------------------------------------
    # Equations of motion (model units)
    # ------------------------------------------------------------------

    def acceleration(self, t: float, x: np.ndarray, v: np.ndarray) -> np.ndarray:
        """
        Accelerations of all points under the rod constraints.

        Args:
            t: Model time.
            x: Positions, shape (n, 3), model units.
            v: Velocities, shape (n, 3), model units.

        Returns:
            Accelerations, shape (n, 3), model units.
        """
        root_x, root_v, root_a = self._root_state(t)
        s = segments_from_points(root_x, x)
        w = segments_from_points(root_v, v)

        inv_m = 1.0 / self.masses
        inv_prev = np.concatenate(([0.0], inv_m[:-1]))

        diag = row_norm2(s) * (inv_m + inv_prev)
        off = row_dot(s[:-1], s[1:]) * inv_m[:-1]
        rhs = row_norm2(w)
        rhs[0] -= float(np.dot(s[0], self.up + root_a))

        lam = thomas(diag, off, rhs)

        tension = lam[:, None] * s
        pull = np.zeros_like(tension)
        pull[:-1] = tension[1:]
        return (pull - tension) * inv_m[:, None] - self.up

    def correct(self, t: float, x: np.ndarray, v: np.ndarray | None = None) -> np.ndarray:
        """
        Project positions onto exact rod lengths.

        Walking from the root, each point is placed at the previous corrected
        point plus its original segment vector rescaled to the rod length.
        Velocities are left untouched.

        Returns:
            Corrected positions, shape (n, 3), model units.
        """
        root_x = self._root_state(t)[0]
        s = segments_from_points(root_x, x)
        s *= (self.lengths / np.sqrt(row_norm2(s)))[:, None]
        return root_x + np.cumsum(s, axis=0)

    # ------------------------------------------------------------------
    # Time stepping (physical units)
    # ------------------------------------------------------------------

    def tick(
        self,
        integrator: str | ExplicitIntegrator,
        t_start: float,
        t_end: float,
        root: RootDriver,
        positions: np.ndarray,
        velocities: np.ndarray,
    ) -> float:
        """
        Advance caller-owned state from t_start to t_end.

        The root driver replaces the stored one and governs the anchor for
        this tick. The window is always split into ``substeps`` equal
        substeps; ``correct`` runs after each of them.

        Args:
            integrator: ExplicitIntegrator instance or registered name.
            t_start: Start time in seconds.
            t_end: End time in seconds.
            root: Anchor trajectory for this tick.
            positions: Float array (n, 3) in meters, updated in place.
            velocities: Float array (n, 3) in m/s, updated in place.

        Returns:
            The time reached, in seconds. Equals t_start (with state
            untouched) when t_end <= t_start.
        """
        if t_end <= t_start:
            logger.debug("tick: empty window [%g, %g], nothing to do", t_start, t_end)
            return t_start
        check_state(np.asarray(positions), np.asarray(velocities), len(self))

        stepper = make_integrator(integrator)
        self.root = root
        t = t_start / self.unit_time
        until = t_end / self.unit_time
        x, v = self.to_model_units(positions, velocities)

        logger.debug(
            "tick: [%g, %g] s with %s, %d substeps, root=%r",
            t_start, t_end, type(stepper).__name__, self.substeps, root,
        )
        if self.profiler is not None:
            with self.profiler.section("integrate"):
                t, x, v = stepper.iterate_until(self, t, x, v, until, self.substeps)
        else:
            t, x, v = stepper.iterate_until(self, t, x, v, until, self.substeps)

        positions[:], velocities[:] = self.from_model_units(x, v)
        return t * self.unit_time

    def tick_towards(
        self,
        integrator: str | ExplicitIntegrator,
        t_start: float,
        t_end: float,
        root_position,
        root_velocity,
        root_end,
        positions: np.ndarray,
        velocities: np.ndarray,
    ) -> tuple[float, np.ndarray, np.ndarray]:
        """
        Tick while dragging the root from root_position to root_end.

        The root follows ``CubicTrajectory.from_2points`` so that its
        velocity is continuous with the previous tick.

        Returns:
            Tuple (t_reached, root_position, root_velocity) at t_reached,
            ready to be fed into the next call.
        """
        if t_end <= t_start:
            return t_start, vec3(root_position), vec3(root_velocity)
        path = CubicTrajectory.from_2points(root_position, root_velocity, root_end, t_start, t_end)
        t = self.tick(integrator, t_start, t_end, path, positions, velocities)
        return t, path.x(t), path.v(t)
