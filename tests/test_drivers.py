import numpy as np
import pytest
from chain_sim.core.drivers import FixedPoint, CubicTrajectory, HarmonicOscillation


def test_fixed_point():
    root = FixedPoint((1.0, 2.0, 3.0))
    for t in (-1.0, 0.0, 5.0):
        np.testing.assert_array_equal(root.x(t), [1.0, 2.0, 3.0])
        np.testing.assert_array_equal(root.v(t), np.zeros(3))
        np.testing.assert_array_equal(root.a(t), np.zeros(3))


def test_fixed_point_position_is_not_aliased():
    root = FixedPoint((0.0, 0.0, 0.0))
    x = root.x(0.0)
    x += 1.0
    np.testing.assert_array_equal(root.x(0.0), np.zeros(3))


@pytest.mark.parametrize("seed", [0, 1, 2, 3])
def test_cubic_boundary_conditions(seed):
    rng = np.random.default_rng(seed)
    x0, v0, x1 = rng.normal(size=(3, 3))
    t0 = float(rng.uniform(-5.0, 5.0))
    t1 = t0 + float(rng.uniform(0.01, 3.0))

    path = CubicTrajectory.from_2points(x0, v0, x1, t0, t1)

    np.testing.assert_allclose(path.x(t0), x0, atol=1e-12)
    np.testing.assert_allclose(path.v(t0), v0, atol=1e-10)
    np.testing.assert_allclose(path.x(t1), x1, atol=1e-12)


def test_cubic_has_zero_jerk():
    path = CubicTrajectory.from_2points((0, 0, 0), (1, 2, 0), (3, -1, 1), 0.5, 1.25)
    np.testing.assert_allclose(path.a(0.5), path.a(1.25), atol=1e-10)
    np.testing.assert_allclose(path.a(0.5), path.a(3.0), atol=1e-9)


def test_cubic_derivatives_match_finite_differences():
    path = CubicTrajectory((0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 1), t0=1.0, dt=2.0)
    h = 1e-5
    for t in (0.5, 1.0, 1.7, 3.0, 4.2):
        v_fd = (path.x(t + h) - path.x(t - h)) / (2 * h)
        a_fd = (path.v(t + h) - path.v(t - h)) / (2 * h)
        np.testing.assert_allclose(path.v(t), v_fd, atol=1e-7)
        np.testing.assert_allclose(path.a(t), a_fd, atol=1e-6)


def test_cubic_extrapolates_past_interval():
    """Times beyond t1 are not clamped."""
    path = CubicTrajectory.from_2points((0, 0, 0), (1, 0, 0), (1, 0, 0), 0.0, 1.0)
    assert path.x(2.0)[0] != pytest.approx(path.x(1.0)[0])


def test_cubic_chaining_is_continuous():
    first = CubicTrajectory.from_2points((0, 0, 0), (0.5, 0, 0), (1, 1, 0), 0.0, 0.1)
    t = 0.1
    second = CubicTrajectory.from_2points(first.x(t), first.v(t), (2, 0, 1), t, 0.25)

    np.testing.assert_allclose(second.x(t), first.x(t), atol=1e-12)
    np.testing.assert_allclose(second.v(t), first.v(t), atol=1e-10)


def test_harmonic_closed_form():
    a = np.array([0.2, 0.0, 0.0])
    b = np.array([0.0, 0.0, 0.1])
    omega = 3.0
    root = HarmonicOscillation(a, b, omega, theta0=0.25)

    np.testing.assert_allclose(root.x(0.25), a, atol=1e-15)
    np.testing.assert_allclose(root.v(0.25), omega * b, atol=1e-15)

    t = 0.25 + np.pi / (2 * omega)
    np.testing.assert_allclose(root.x(t), b, atol=1e-12)
    np.testing.assert_allclose(root.a(t), -omega ** 2 * b, atol=1e-12)


def test_harmonic_derivatives_match_finite_differences():
    root = HarmonicOscillation((0.1, 0.3, 0.0), (0.0, 0.0, -0.2), 5.0, theta0=-0.4)
    h = 1e-6
    for t in (0.0, 0.3, 1.1):
        v_fd = (root.x(t + h) - root.x(t - h)) / (2 * h)
        a_fd = (root.v(t + h) - root.v(t - h)) / (2 * h)
        np.testing.assert_allclose(root.v(t), v_fd, atol=1e-7)
        np.testing.assert_allclose(root.a(t), a_fd, atol=1e-6)
