# MIT License (see LICENSE)
"""
chain_sim - Constrained dynamics of a chain of point masses.

Simulates point masses joined by rigid, massless rods and anchored to a root
whose motion is prescribed. Accelerations come from Lagrange multipliers of
the rod constraints; an explicit integrator advances the state in fixed
substeps, projecting positions back onto exact rod lengths after each one.

Main entry points:
    - ChainModel: Physical parameters, equations of motion and tick().
    - ChainSimulation: Frame-driven session owning the chain state.
    - Segment: One (length, mass) pair.
    - FixedPoint, CubicTrajectory, HarmonicOscillation: Root drivers.
    - RK4, VelocityVerlet, SymplecticEuler: Explicit integrators.

Submodules:
    - core: Root drivers, integrators, tridiagonal solver, invariants.
    - io: JSON serialization/deserialization.

Example:
    import numpy as np
    from chain_sim import ChainModel, FixedPoint, RK4

    chain = ChainModel(gravity=(0, 9.8, 0), segments=[(0.3, 1.0)] * 4)
    positions = np.array([[0.15, -0.26, 0], [0, -0.52, 0],
                          [0.15, -0.78, 0], [0, -1.04, 0]])
    velocities = np.zeros((4, 3))
    chain.tick(RK4(), 0.0, 0.01, FixedPoint(), positions, velocities)
"""
from .chain import ChainModel
from .simulation import ChainSimulation, zigzag_layout
from .types import Segment
from .exceptions import ChainConfigError
from .profiler import Profiler
from .core.drivers import RootDriver, FixedPoint, CubicTrajectory, HarmonicOscillation
from .core.integrators import ExplicitIntegrator, RK4, VelocityVerlet, SymplecticEuler

__all__ = [
    # Core simulation
    "ChainModel",
    "ChainSimulation",
    "Segment",
    "ChainConfigError",
    "zigzag_layout",
    "Profiler",
    # Root drivers
    "RootDriver",
    "FixedPoint",
    "CubicTrajectory",
    "HarmonicOscillation",
    # Integrators
    "ExplicitIntegrator",
    "RK4",
    "VelocityVerlet",
    "SymplecticEuler",
]
