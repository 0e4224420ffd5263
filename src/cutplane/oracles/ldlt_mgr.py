"""
LDLT Factorization Manager

Incremental row-by-row LDL' factorization (Cholesky-Banachiewicz form)
of a symmetric matrix supplied lazily through ``get_elem(i, j)``. The
matrix itself is never materialized, which matters for matrix-inequality
oracles whose matrix is ``B - sum_k x_k F_k``.

When the matrix is not positive definite the scan stops at the first
non-positive pivot, and ``witness()`` produces a vector v with
v' A v = -ep < 0, used to build a cut.

Storage layout of ``T`` (n x n, reused across calls):
- T[i, i]        pivot d_i (the D factor)
- T[i, j], i > j  L factor entry l_ij
- T[j, i], j < i  unscaled entry l_ij * d_j
"""

from typing import Callable, Tuple

import numpy as np


class LDLTMgr:
    """
    LDLT factorization manager for positive (semi)definiteness tests.

    Attributes:
        p: Active window ``(start, stop)``; ``stop == 0`` after success
        witness_vec: Witness vector, valid only after a failed factor
    """

    def __init__(self, ndim: int):
        """
        Args:
            ndim: Dimension of the matrix
        """
        if ndim <= 0:
            raise ValueError(f"dimension must be positive, got {ndim}")
        self._n = ndim
        self.p: Tuple[int, int] = (0, 0)
        self.witness_vec = np.zeros(ndim)
        self._T = np.zeros((ndim, ndim))

    @property
    def ndim(self) -> int:
        return self._n

    def factorize(self, A: np.ndarray) -> bool:
        """Factor a materialized symmetric matrix (strict test)."""
        return self.factor(lambda i, j: A[i, j])

    def factor(self, get_elem: Callable[[int, int], float]) -> bool:
        """
        Test positive definiteness, row by row.

        Only the lower triangle (i >= j) of the matrix is requested.

        Args:
            get_elem: Callback returning element (i, j)

        Returns:
            True if the matrix is positive definite
        """
        T = self._T
        start, stop = 0, 0
        for i in range(self._n):
            d = self._factor_row(get_elem, i, start)
            T[i, i] = d
            if d <= 0.0:
                stop = i + 1
                break
        self.p = (start, stop)
        return self.is_spd()

    def factor_with_allow_semidefinite(self, get_elem: Callable[[int, int], float]) -> bool:
        """
        Test positive semidefiniteness, row by row.

        A zero pivot restarts the active window just past the degenerate
        row instead of stopping; only a negative pivot stops the scan.

        Args:
            get_elem: Callback returning element (i, j)

        Returns:
            True if the matrix is positive semidefinite
        """
        T = self._T
        start, stop = 0, 0
        for i in range(self._n):
            d = self._factor_row(get_elem, i, start)
            T[i, i] = d
            if d < 0.0:
                stop = i + 1
                break
            if d == 0.0:
                start = i + 1
        self.p = (start, stop) if stop else (0, 0)
        return self.is_spd()

    def _factor_row(self, get_elem: Callable[[int, int], float], i: int, start: int) -> float:
        T = self._T
        d = get_elem(i, start)
        for j in range(start, i):
            T[j, i] = d
            T[i, j] = d / T[j, j]
            s = j + 1
            d = get_elem(i, s)
            for k in range(start, s):
                d -= T[i, k] * T[k, s]
        return d

    def is_spd(self) -> bool:
        """True when the last factorization found no failing pivot."""
        return self.p[1] == 0

    def witness(self) -> float:
        """
        Build the infeasibility witness of the last failed factorization.

        Solves L' v = e_m on the active window by back substitution, so
        that v' A v equals the failing pivot.

        Returns:
            ep = -T[m, m] with m = stop - 1, the infeasibility margin
        """
        assert not self.is_spd(), "witness() requires a failed factorization"
        start, stop = self.p
        m = stop - 1
        T = self._T
        v = self.witness_vec
        v.fill(0.0)
        v[m] = 1.0
        for i in range(m, start, -1):
            v[i - 1] = -np.dot(T[i:stop, i - 1], v[i:stop])
        return float(-T[m, m])

    def sym_quad(self, A: np.ndarray) -> float:
        """Quadratic form v' A v of the witness over the active window."""
        start, stop = self.p
        v = self.witness_vec[start:stop]
        return float(v @ A[start:stop, start:stop] @ v)

    def sqrt(self) -> np.ndarray:
        """
        Upper-triangular R with R' R = A for a positive definite matrix.

        Returns:
            R = sqrt(D) L'
        """
        assert self.is_spd(), "sqrt() requires a successful factorization"
        T = self._T
        n = self._n
        R = np.zeros((n, n))
        for i in range(n):
            R[i, i] = np.sqrt(T[i, i])
            R[i, i + 1:] = T[i + 1:, i] * R[i, i]
        return R
