# MIT License (see LICENSE)
"""
Symmetric tridiagonal solver (Thomas algorithm).

Solves M x = c where, for n = 4,

    [ a0 -b0   0   0 ] [x0]   [c0]
    [-b0  a1 -b1   0 ] [x1] = [c1]
    [  0 -b1  a2 -b2 ] [x2]   [c2]
    [  0   0 -b2  a3 ] [x3]   [c3]

Note the negated off-diagonal: ``b`` holds -M[k, k+1].

No pivoting is done. The chain's constraint matrix is diagonally dominant
for physical configurations; a (near-)zero pivot is not detected and yields
NaN/Inf in the result.

Reference:
    https://en.wikipedia.org/wiki/Tridiagonal_matrix_algorithm
"""
from __future__ import annotations
from typing import Sequence

import numpy as np


def thomas(a: Sequence[float], b: Sequence[float], c: Sequence[float]) -> np.ndarray:
    """
    Solve the symmetric tridiagonal system described in the module docstring.

    Args:
        a: Diagonal, length n.
        b: Negated off-diagonal, length n-1.
        c: Right-hand side, length n.

    Returns:
        Solution vector of length n.
    """
    # numpy scalars, so a zero pivot gives inf/nan rather than ZeroDivisionError
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    c = np.asarray(c, dtype=np.float64)
    n = len(a)
    if n == 1:
        return np.array([c[0] / a[0]], dtype=np.float64)

    d = np.empty(n - 1, dtype=np.float64)
    e = np.empty(n - 1, dtype=np.float64)
    d[0] = b[0] / a[0]
    e[0] = c[0] / a[0]

    # Forward elimination
    for k in range(1, n - 1):
        denom = a[k] - b[k - 1] * d[k - 1]
        d[k] = b[k] / denom
        e[k] = (c[k] + b[k - 1] * e[k - 1]) / denom

    # Back substitution
    x = np.empty(n, dtype=np.float64)
    x[n - 1] = (c[n - 1] + b[n - 2] * e[n - 2]) / (a[n - 1] - b[n - 2] * d[n - 2])
    for k in range(n - 2, -1, -1):
        x[k] = d[k] * x[k + 1] + e[k]
    return x
