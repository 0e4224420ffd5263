"""
Numerically Stable Ellipsoid Search Space

Same region as ``Ell`` but the shape matrix M is kept in factored form
M = L D L' and never formed. Each cut applies a rank-one downdate to
(L, D) directly (Gill, Golub, Murray & Saunders, method C1), so D stays
positive where the explicit update could lose definiteness to rounding.

L (unit lower triangular) and D share one packed matrix: D on the
diagonal, L strictly below it.
"""

import copy
from typing import Union

import numpy as np

from ..contract import ArrayType, Cut
from ..core.status import CutStatus
from .ell_calc import EllCalc


class EllStable:
    """Ellipsoid search space with a factored shape matrix."""

    def __init__(self, val: Union[float, np.ndarray], xc: np.ndarray):
        """
        Args:
            val: Squared radius (scalar, M = I) or the diagonal of M
            xc: Initial center
        """
        xc = np.array(xc, dtype=np.float64)
        if xc.ndim != 1 or xc.size == 0:
            raise ValueError("center must be a non-empty vector")
        ndim = xc.size

        if np.isscalar(val):
            self._kappa = float(val)
            self._mq = np.eye(ndim)
        else:
            val = np.asarray(val, dtype=np.float64)
            if val.shape != (ndim,):
                raise ValueError(
                    f"diagonal length ({val.size}) must match dimension ({ndim})")
            self._kappa = 1.0
            self._mq = np.diag(val)

        self._n = ndim
        self._xc = xc
        self._tsq = 0.0
        self._helper = EllCalc(ndim)
        self.no_defer_trick = False

    @property
    def ndim(self) -> int:
        return self._n

    def xc(self) -> ArrayType:
        return self._xc

    def set_xc(self, x: ArrayType) -> None:
        self._xc = np.array(x, dtype=np.float64)

    def tsq(self) -> float:
        return self._tsq

    def copy(self) -> 'EllStable':
        return copy.deepcopy(self)

    def matrix(self) -> np.ndarray:
        """Shape matrix kappa * L D L'."""
        L = np.tril(self._mq, -1) + np.eye(self._n)
        D = np.diag(np.diag(self._mq))
        return self._kappa * (L @ D @ L.T)

    def update(self, cut: Cut) -> CutStatus:
        """
        Shrink the ellipsoid with a deep or parallel cut.

        Args:
            cut: ``(g, beta)``, beta a scalar or a ``(beta0, beta1)`` pair

        Returns:
            Status of the update; the ellipsoid is unchanged unless SUCCESS
        """
        grad, beta = cut
        grad = np.asarray(grad, dtype=np.float64)
        mq = self._mq
        n = self._n

        # M g = L (D (L' g))
        inv_lg = grad.copy()
        for j in range(n - 1):
            inv_lg[j] += mq[j + 1:, j] @ grad[j + 1:]
        g_mq = np.diag(mq) * inv_lg
        omega = float(inv_lg @ g_mq)
        grad_t = g_mq.copy()
        for i in range(n - 1, 0, -1):
            grad_t[i] += mq[i, :i] @ g_mq[:i]

        self._tsq = self._kappa * omega
        status, rho, sigma, delta = self._helper.calc(beta, self._tsq)
        if status != CutStatus.SUCCESS:
            return status

        self._xc = self._xc - (rho / omega) * grad_t

        # L D L' - (sigma / omega) grad_t grad_t'
        alpha = -sigma / omega
        w = grad_t
        for j in range(n):
            p = w[j]
            d_old = mq[j, j]
            d_new = d_old + alpha * p * p
            beta_j = p * alpha / d_new
            alpha *= d_old / d_new
            mq[j, j] = d_new
            w[j + 1:] -= p * mq[j + 1:, j]
            mq[j + 1:, j] += beta_j * w[j + 1:]

        self._kappa *= delta

        if self.no_defer_trick:
            mq[np.diag_indices(n)] *= self._kappa
            self._kappa = 1.0
        return status
