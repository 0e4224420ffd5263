"""
Ellipsoid Search Space

E = {x | (x - xc)' (kappa * M)^{-1} (x - xc) <= 1}

Keeping the scalar ``kappa`` apart from ``M`` defers the scaling of the
whole matrix to one multiplication per update.
"""

import copy
from typing import Union

import numpy as np

from ..contract import ArrayType, Cut
from ..core.status import CutStatus
from .ell_calc import EllCalc


class Ell:
    """
    Ellipsoid search space.

    Attributes:
        no_defer_trick: Fold kappa into M after every update
    """

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

        self._xc = xc
        self._tsq = 0.0
        self._helper = EllCalc(ndim)
        self.no_defer_trick = False

    @property
    def ndim(self) -> int:
        return self._xc.size

    def xc(self) -> ArrayType:
        return self._xc

    def set_xc(self, x: ArrayType) -> None:
        self._xc = np.array(x, dtype=np.float64)

    def tsq(self) -> float:
        """kappa * g' M g of the last cut."""
        return self._tsq

    def copy(self) -> 'Ell':
        return copy.deepcopy(self)

    def matrix(self) -> np.ndarray:
        """Shape matrix kappa * M."""
        return self._kappa * self._mq

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
        grad_t = self._mq @ grad
        omega = float(grad @ grad_t)
        self._tsq = self._kappa * omega

        status, rho, sigma, delta = self._helper.calc(beta, self._tsq)
        if status != CutStatus.SUCCESS:
            return status

        self._xc = self._xc - (rho / omega) * grad_t
        self._mq -= (sigma / omega) * np.outer(grad_t, grad_t)
        self._kappa *= delta

        if self.no_defer_trick:
            self._mq *= self._kappa
            self._kappa = 1.0
        return status
