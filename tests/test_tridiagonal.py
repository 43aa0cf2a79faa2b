import numpy as np
import pytest
from chain_sim.core.tridiagonal import thomas


def dense(a, b):
    """Dense matrix with a on the diagonal and -b beside it."""
    n = len(a)
    m = np.diag(np.asarray(a, dtype=np.float64))
    for k in range(n - 1):
        m[k, k + 1] = -b[k]
        m[k + 1, k] = -b[k]
    return m


def test_thomas_matches_dense_inverse():
    a = [1.0, 2.0, 3.0, 4.0]
    b = [3.14, 1.5, 9.2]
    c = [2.7, 1.8, 2.81, 8.28]

    expected = np.linalg.inv(dense(a, b)) @ np.array(c)
    actual = thomas(a, b, c)

    assert actual.shape == (4,)
    np.testing.assert_allclose(actual, expected, rtol=1e-12, atol=1e-12)


def test_thomas_two_unknowns():
    a = [2.0, 3.0]
    b = [0.5]
    c = [1.0, -1.0]
    np.testing.assert_allclose(thomas(a, b, c), np.linalg.solve(dense(a, b), c), rtol=1e-13)


def test_thomas_single_unknown():
    np.testing.assert_allclose(thomas([4.0], [], [2.0]), [0.5])


def test_thomas_diagonally_dominant_random():
    rng = np.random.default_rng(7)
    for n in range(2, 11):
        b = rng.uniform(-1.0, 1.0, n - 1)
        a = 2.5 + rng.uniform(0.0, 1.0, n)
        c = rng.normal(size=n)
        x = thomas(a, b, c)
        np.testing.assert_allclose(dense(a, b) @ x, c, rtol=1e-10, atol=1e-12)


def test_thomas_zero_pivot_is_not_guarded():
    """A singular leading pivot propagates inf/nan instead of raising."""
    with np.errstate(divide="ignore", invalid="ignore"):
        x = thomas([0.0, 1.0, 1.0], [1.0, 1.0], [1.0, 1.0, 1.0])
    assert not np.all(np.isfinite(x))
