# MIT License (see LICENSE)
"""
Root drivers: prescribed motion of the chain's anchor point.

A root driver is a pure function of (physical) time returning the anchor's
position, velocity and acceleration as 3D vectors. The chain model uses all
three to express the first rod's constraint relative to a moving anchor.

Available drivers:
- FixedPoint: stationary anchor.
- CubicTrajectory: cubic Bezier curve over a time interval (mouse drags).
- HarmonicOscillation: closed-form elliptical/linear oscillation.
"""
from __future__ import annotations
from abc import ABC, abstractmethod

import numpy as np

from ..util import vec3


class RootDriver(ABC):
    """
    Abstract base class for anchor trajectories.

    Subclasses return float64 arrays of shape (3,) from every method.
    A driver is handed to ``ChainModel.tick`` for a single tick only.
    """

    @abstractmethod
    def x(self, t: float) -> np.ndarray:
        """Anchor position at time t."""
        ...

    @abstractmethod
    def v(self, t: float) -> np.ndarray:
        """Anchor velocity at time t."""
        ...

    @abstractmethod
    def a(self, t: float) -> np.ndarray:
        """Anchor acceleration at time t."""
        ...


class FixedPoint(RootDriver):
    """Anchor held at a constant position."""

    def __init__(self, position=(0.0, 0.0, 0.0)) -> None:
        self.position = vec3(position)

    def x(self, t: float) -> np.ndarray:
        return self.position.copy()

    def v(self, t: float) -> np.ndarray:
        return np.zeros(3, dtype=np.float64)

    def a(self, t: float) -> np.ndarray:
        return np.zeros(3, dtype=np.float64)

    def __repr__(self) -> str:
        return f"FixedPoint({self.position.tolist()})"


class CubicTrajectory(RootDriver):
    """
    Cubic Bezier curve parameterized over [t0, t0 + dt].

    Global time maps to s = (t - t0) / dt. The parameter is not clamped, so
    evaluating outside the interval extrapolates the cubic.

    With u = 1 - s:
        x(s)   = P0 u³ + 3 P1 u² s + 3 P2 u s² + P3 s³
        x'(s)  = 3 [(P1 - P0) u² + 2 (P2 - P1) u s + (P3 - P2) s²]
        x''(s) = 6 [(P2 - 2 P1 + P0) u + (P3 - 2 P2 + P1) s]
    and velocity/acceleration in time are x'/dt and x''/dt².
    """

    def __init__(self, p0, p1, p2, p3, t0: float = 0.0, dt: float = 1.0) -> None:
        self.p0 = vec3(p0)
        self.p1 = vec3(p1)
        self.p2 = vec3(p2)
        self.p3 = vec3(p3)
        self.t0 = float(t0)
        self.dt = float(dt)

    @classmethod
    def from_2points(cls, x0, v0, x1, t0: float, t1: float) -> "CubicTrajectory":
        """
        Build the curve leaving x0 with velocity v0 at t0 and reaching x1 at t1.

        P1 is fixed by x'(t0) = v0. P2 is chosen so the third derivative
        (jerk) vanishes, which makes the curve the quadratic through those
        conditions written in cubic Bezier form. The end velocity is left free.
        """
        x0, v0, x1 = vec3(x0), vec3(v0), vec3(x1)
        dt = float(t1) - float(t0)
        p1 = x0 + v0 * (dt / 3.0)
        p2 = (2.0 * x0 + x1 + v0 * dt) / 3.0
        return cls(x0, p1, p2, x1, t0=t0, dt=dt)

    def _s(self, t: float) -> float:
        return (t - self.t0) / self.dt

    def x(self, t: float) -> np.ndarray:
        s = self._s(t)
        u = 1.0 - s
        return (
            self.p0 * (u * u * u)
            + self.p1 * (3.0 * u * u * s)
            + self.p2 * (3.0 * u * s * s)
            + self.p3 * (s * s * s)
        )

    def v(self, t: float) -> np.ndarray:
        s = self._s(t)
        u = 1.0 - s
        ds = 3.0 * (
            (self.p1 - self.p0) * (u * u)
            + (self.p2 - self.p1) * (2.0 * u * s)
            + (self.p3 - self.p2) * (s * s)
        )
        return ds / self.dt

    def a(self, t: float) -> np.ndarray:
        s = self._s(t)
        u = 1.0 - s
        dds = 6.0 * (
            (self.p2 - 2.0 * self.p1 + self.p0) * u
            + (self.p3 - 2.0 * self.p2 + self.p1) * s
        )
        return dds / (self.dt * self.dt)


class HarmonicOscillation(RootDriver):
    """
    Anchor moving as x(t) = a cos θ + b sin θ with θ = omega (t - theta0).

    Orthogonal amplitude vectors give an ellipse; b = 0 gives a linear
    oscillation along a.
    """

    def __init__(self, a, b, omega: float, theta0: float = 0.0) -> None:
        self.amp_a = vec3(a)
        self.amp_b = vec3(b)
        self.omega = float(omega)
        self.theta0 = float(theta0)

    def _theta(self, t: float) -> float:
        return self.omega * (t - self.theta0)

    def x(self, t: float) -> np.ndarray:
        th = self._theta(t)
        return self.amp_a * np.cos(th) + self.amp_b * np.sin(th)

    def v(self, t: float) -> np.ndarray:
        th = self._theta(t)
        return self.omega * (-self.amp_a * np.sin(th) + self.amp_b * np.cos(th))

    def a(self, t: float) -> np.ndarray:
        return -(self.omega * self.omega) * self.x(t)
