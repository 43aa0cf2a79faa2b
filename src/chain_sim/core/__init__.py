# MIT License (see LICENSE)
"""
Numerical building blocks of the chain simulator.

This subpackage provides:
    - Root drivers: FixedPoint, CubicTrajectory, HarmonicOscillation.
    - Integrators: RK4, velocity Verlet, symplectic Euler.
    - thomas: symmetric tridiagonal solver.
    - Invariants: energy and rod-length diagnostics.

Typical usage:
    from chain_sim.core import RK4, HarmonicOscillation

    root = HarmonicOscillation(a=(0.1, 0, 0), b=(0, 0, 0.1), omega=6.0)
    chain.tick(RK4(), 0.0, 1 / 60, root, positions, velocities)
"""
from .drivers import RootDriver, FixedPoint, CubicTrajectory, HarmonicOscillation
from .integrators import (
    EquationsOfMotion,
    ExplicitIntegrator,
    RK4,
    VelocityVerlet,
    SymplecticEuler,
    make_integrator,
    rk4_step,
    verlet_step,
    euler_step,
)
from .invariants import kinetic_energy, potential_energy, rod_lengths, max_rod_error
from .tridiagonal import thomas

__all__ = [
    # Root drivers
    "RootDriver",
    "FixedPoint",
    "CubicTrajectory",
    "HarmonicOscillation",
    # Integrators
    "EquationsOfMotion",
    "ExplicitIntegrator",
    "RK4",
    "VelocityVerlet",
    "SymplecticEuler",
    "make_integrator",
    "rk4_step",
    "verlet_step",
    "euler_step",
    # Invariants
    "kinetic_energy",
    "potential_energy",
    "rod_lengths",
    "max_rod_error",
    # Linear algebra
    "thomas",
]
