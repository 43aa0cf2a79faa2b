# MIT License (see LICENSE)
"""
Explicit integrators for constrained equations of motion.

An integrator advances a packed state (t, x, v) of a second-order system

    dx/dt = v,         dv/dt = model.acceleration(t, x, v)

over a fixed number of equal substeps, calling ``model.correct`` after each
substep so that the state is projected back onto the constraint manifold.
The integrator knows nothing about chains; any object satisfying
``EquationsOfMotion`` can be driven.

Available integrators:
- RK4: Classical 4th-order Runge-Kutta (reference method)
- VelocityVerlet: Velocity Verlet with a predicted end-of-step velocity
- SymplecticEuler: First-order semi-implicit Euler (cheap, for comparisons)

Reference:
    Runge-Kutta methods: https://en.wikipedia.org/wiki/Runge-Kutta_methods
    Velocity Verlet: https://en.wikipedia.org/wiki/Verlet_integration#Velocity_Verlet
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Protocol

import numpy as np


class EquationsOfMotion(Protocol):
    """What an integrator needs from a model."""

    def acceleration(self, t: float, x: np.ndarray, v: np.ndarray) -> np.ndarray:
        ...

    def correct(self, t: float, x: np.ndarray, v: np.ndarray) -> np.ndarray:
        ...


def rk4_step(
    model: EquationsOfMotion,
    t: float,
    x: np.ndarray,
    v: np.ndarray,
    dt: float,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Advance (x, v) by dt using classical 4th-order Runge-Kutta.

    RK4 evaluates derivatives at 4 points within the timestep and combines
    them with weights (1, 2, 2, 1)/6 to achieve O(dt⁵) local error. The
    acceleration is queried at the interior points t + dt/2 (twice) and t + dt.

    Returns:
        New (x, v), before constraint correction.
    """
    half = 0.5 * dt

    k1x = v
    k1v = model.acceleration(t, x, v)

    k2x = v + half * k1v
    k2v = model.acceleration(t + half, x + half * k1x, k2x)

    k3x = v + half * k2v
    k3v = model.acceleration(t + half, x + half * k2x, k3x)

    k4x = v + dt * k3v
    k4v = model.acceleration(t + dt, x + dt * k3x, k4x)

    x_new = x + (dt / 6.0) * (k1x + 2.0 * k2x + 2.0 * k3x + k4x)
    v_new = v + (dt / 6.0) * (k1v + 2.0 * k2v + 2.0 * k3v + k4v)
    return x_new, v_new


def verlet_step(
    model: EquationsOfMotion,
    t: float,
    x: np.ndarray,
    v: np.ndarray,
    dt: float,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Advance (x, v) by dt using velocity Verlet.

        x(t+dt) = x(t) + v(t)*dt + 0.5*a(t)*dt²
        v(t+dt) = v(t) + 0.5*(a(t) + a(t+dt))*dt

    Constraint forces depend on velocity, so a(t+dt) is evaluated with the
    Euler-predicted velocity v(t) + a(t)*dt.
    """
    a0 = model.acceleration(t, x, v)
    x_new = x + v * dt + 0.5 * a0 * dt * dt
    a1 = model.acceleration(t + dt, x_new, v + a0 * dt)
    v_new = v + 0.5 * (a0 + a1) * dt
    return x_new, v_new


def euler_step(
    model: EquationsOfMotion,
    t: float,
    x: np.ndarray,
    v: np.ndarray,
    dt: float,
) -> tuple[np.ndarray, np.ndarray]:
    """Advance (x, v) by dt using semi-implicit (symplectic) Euler."""
    v_new = v + model.acceleration(t, x, v) * dt
    x_new = x + v_new * dt
    return x_new, v_new


class ExplicitIntegrator(ABC):
    """
    Fixed-substep explicit time stepper.

    Subclasses implement a single ``step``; ``iterate_until`` splits the
    window into equal substeps and applies the model's correction after
    each of them.
    """

    name: str = ""

    @abstractmethod
    def step(
        self,
        model: EquationsOfMotion,
        t: float,
        x: np.ndarray,
        v: np.ndarray,
        dt: float,
    ) -> tuple[np.ndarray, np.ndarray]:
        """Advance (x, v) from t to t + dt without correction."""
        ...

    def iterate_until(
        self,
        model: EquationsOfMotion,
        t: float,
        x: np.ndarray,
        v: np.ndarray,
        until: float,
        steps: int,
    ) -> tuple[float, np.ndarray, np.ndarray]:
        """
        Advance the state from t to ``until`` in ``steps`` equal substeps.

        Args:
            model: Equations of motion to integrate.
            t: Start time.
            x: Positions at t (not modified).
            v: Velocities at t (not modified).
            until: Target time.
            steps: Number of substeps (>= 1).

        Returns:
            Tuple (t_reached, x, v).
        """
        t0 = float(t)
        h = (until - t0) / steps
        for k in range(steps):
            tk = t0 + k * h
            x, v = self.step(model, tk, x, v, h)
            x = model.correct(tk + h, x, v)
        return t0 + steps * h, x, v


class RK4(ExplicitIntegrator):
    """Classical 4th-order Runge-Kutta; four acceleration evaluations per substep."""

    name = "rk4"

    def step(self, model, t, x, v, dt):
        return rk4_step(model, t, x, v, dt)


class VelocityVerlet(ExplicitIntegrator):
    """Second-order velocity Verlet; two acceleration evaluations per substep."""

    name = "verlet"

    def step(self, model, t, x, v, dt):
        return verlet_step(model, t, x, v, dt)


class SymplecticEuler(ExplicitIntegrator):
    """First-order semi-implicit Euler; one acceleration evaluation per substep."""

    name = "euler"

    def step(self, model, t, x, v, dt):
        return euler_step(model, t, x, v, dt)


INTEGRATORS: dict[str, type[ExplicitIntegrator]] = {
    cls.name: cls for cls in (RK4, VelocityVerlet, SymplecticEuler)
}


def make_integrator(name: str | ExplicitIntegrator) -> ExplicitIntegrator:
    """
    Resolve an integrator by name ("rk4", "verlet", "euler").

    Instances are passed through unchanged.
    """
    if isinstance(name, ExplicitIntegrator):
        return name
    try:
        return INTEGRATORS[name]()
    except KeyError:
        raise ValueError(f"Unknown integrator: {name}") from None
