"""
Ellipsoid Cut Calculator

Computes the update parameters (rho, sigma, delta) of the minimum-volume
ellipsoid containing the intersection of an ellipsoid with a cut.

With E = {x | (x - xc)' P^{-1} (x - xc) <= 1}, a cut g' (x - xc) + beta <= 0
and tsq = g' P g, the new ellipsoid is

    xc+ = xc - rho * P g / tsq
    P+  = delta * (P - sigma * P g g' P / tsq)

A parallel cut ``(beta0, beta1)`` additionally keeps
g' (x - xc) + beta1 >= 0.
"""

import math
from typing import Optional, Tuple, Union

from ..core.status import CutStatus

CalcResult = Tuple[CutStatus, float, float, float]


class EllCalc:
    """Cut parameter calculator for an n-dimensional ellipsoid."""

    def __init__(self, ndim: int):
        if ndim <= 0:
            raise ValueError(f"dimension must be positive, got {ndim}")
        self._n = ndim
        self._n_f = float(ndim)
        self._n_plus_1 = ndim + 1.0
        # n^2 / (n^2 - 1), undefined for n = 1
        self._c1 = self._n_f ** 2 / (self._n_f ** 2 - 1.0) if ndim > 1 else None

    @property
    def ndim(self) -> int:
        return self._n

    def calc(self, beta: Union[float, Tuple[float, Optional[float]]], tsq: float) -> CalcResult:
        """Dispatch on the cut kind: scalar is a deep cut, a pair a parallel cut."""
        if isinstance(beta, tuple):
            beta0, beta1 = beta
            if beta1 is None:
                return self.calc_deep_cut(beta0, tsq)
            return self.calc_parallel_cut(beta0, beta1, tsq)
        return self.calc_deep_cut(beta, tsq)

    def calc_central_cut(self, tsq: float) -> CalcResult:
        return self.calc_deep_cut(0.0, tsq)

    def calc_deep_cut(self, beta: float, tsq: float) -> CalcResult:
        """
        Deep cut g' (x - xc) + beta <= 0.

        Returns:
            (status, rho, sigma, delta); the floats are 0 unless SUCCESS
        """
        if beta > 0.0 and tsq < beta * beta:
            return CutStatus.NO_SOLN, 0.0, 0.0, 0.0
        tau = math.sqrt(tsq)
        eta = tau + self._n_f * beta
        if eta <= 0.0:
            return CutStatus.NO_EFFECT, 0.0, 0.0, 0.0

        rho = eta / self._n_plus_1
        if self._n == 1:
            # the interval [xc - tau, xc - beta] (scaled), no rank-one term
            return CutStatus.SUCCESS, rho, 0.0, (tau - beta) ** 2 / (4.0 * tsq)
        sigma = 2.0 * rho / (tau + beta)
        delta = self._c1 * (tsq - beta * beta) / tsq
        return CutStatus.SUCCESS, rho, sigma, delta

    def calc_parallel_cut(self, beta0: float, beta1: float, tsq: float) -> CalcResult:
        """
        Parallel cut -beta1 <= g' (x - xc) <= -beta0.

        Falls back to a deep cut on ``beta0`` when the second hyperplane
        does not meet the ellipsoid.

        Returns:
            (status, rho, sigma, delta); the floats are 0 unless SUCCESS
        """
        if beta1 < beta0:
            return CutStatus.NO_SOLN, 0.0, 0.0, 0.0
        if beta1 * beta1 >= tsq or beta1 == beta0:
            return self.calc_deep_cut(beta0, tsq)
        tau = math.sqrt(tsq)
        if beta1 < -tau:
            return CutStatus.NO_SOLN, 0.0, 0.0, 0.0
        beta0 = max(beta0, -tau)

        bsum = beta0 + beta1
        if self._n == 1:
            bdiff = beta1 - beta0
            return CutStatus.SUCCESS, bsum / 2.0, 0.0, bdiff * bdiff / (4.0 * tsq)

        # p = 1 + lambda solves (n-1) D^2 p^2 - 2 Q p - (n+1) S^2 = 0
        bdiffsq = (beta1 - beta0) ** 2
        bsumsq = bsum * bsum
        q = 2.0 * tsq - beta0 * beta0 - beta1 * beta1
        root = math.sqrt(q * q + (self._n_f ** 2 - 1.0) * bdiffsq * bsumsq)
        p = (q + root) / ((self._n_f - 1.0) * bdiffsq)
        if p <= 1.0:
            return CutStatus.NO_EFFECT, 0.0, 0.0, 0.0

        sigma = 1.0 - 1.0 / p
        rho = sigma * bsum / 2.0
        delta = 1.0 - (p - 1.0) * beta0 * beta1 / tsq + (p - 1.0) ** 2 * bsumsq / (4.0 * p * tsq)
        return CutStatus.SUCCESS, rho, sigma, delta
