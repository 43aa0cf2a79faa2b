import numpy as np
from chain_sim.chain import ChainModel
from chain_sim.core.drivers import FixedPoint
from chain_sim.core.integrators import RK4

def test_double_pendulum_normal_mode():
    """
    Small-angle double pendulum, equal masses and rods, started in the
    in-phase normal mode θ2 = √2 θ1:
      θ1(t) = θ0 cos( sqrt((2 - √2) g/L) t )
    Compare θ1 at t=T.
    """
    g = 9.81
    L = 1.0
    theta0 = 0.02  # small angle [rad]
    T = 1.0

    chain = ChainModel(gravity=(0, g, 0), segments=[(L, 1.0), (L, 1.0)], substeps=32)

    th1, th2 = theta0, np.sqrt(2.0) * theta0
    p1 = np.array([L*np.sin(th1), -L*np.cos(th1), 0.0])
    p2 = p1 + np.array([L*np.sin(th2), -L*np.cos(th2), 0.0])
    positions = np.array([p1, p2])
    velocities = np.zeros((2, 3))

    t = 0.0
    root = FixedPoint((0.0, 0.0, 0.0))
    while t < T - 1e-12:
        t = chain.tick(RK4(), t, min(t + 1/60, T), root, positions, velocities)

    # compute simulated angle from position
    x, y = positions[0, 0], positions[0, 1]
    theta_sim = np.arctan2(x, -y)

    omega0 = np.sqrt((2.0 - np.sqrt(2.0)) * g / L)
    theta_exp = theta0 * np.cos(omega0 * T)

    err = abs(theta_sim - theta_exp) / theta0
    print("theta", theta_sim, "exp", theta_exp, "err/theta0", err)
    assert err <= 0.01

    # Second bob keeps the mode shape
    th2_sim = np.arctan2(positions[1, 0] - x, -(positions[1, 1] - y))
    assert abs(th2_sim - np.sqrt(2.0) * theta_sim) <= 0.02 * theta0
