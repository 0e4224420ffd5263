"""
Quadratic Matrix Inequality Oracle

    find x  s.t.  t I - Fx Fx' > 0,   Fx = F0 - sum_k x_k F_k

Rows of Fx are computed only as the factorization reaches them, so a
failure early in the scan skips most of the work.
"""

from typing import List, Optional, Sequence

import numpy as np

from ..contract import ArrayType, Cut
from .ldlt_mgr import LDLTMgr


class QMIOracle:
    """Feasibility oracle for t I - Fx Fx' positive definite."""

    def __init__(self, F: Sequence[np.ndarray], F0: np.ndarray):
        """
        Args:
            F: Matrices F_k (same shape as F0), one per decision variable
            F0: Constant matrix
        """
        self.F: List[np.ndarray] = [np.asarray(Fk, dtype=np.float64) for Fk in F]
        self.F0 = np.asarray(F0, dtype=np.float64)
        for k, Fk in enumerate(self.F):
            if Fk.shape != self.F0.shape:
                raise ValueError(f"F[{k}] has shape {Fk.shape}, expected {self.F0.shape}")
        self.t = 0.0
        self._Fx = np.zeros(self.F0.shape)
        self._count = 0
        self._Q = LDLTMgr(self.F0.shape[0])

    def update(self, t: float) -> None:
        """Set the bound t."""
        self.t = t

    def assess_feas(self, x: ArrayType) -> Optional[Cut]:
        self._count = 0
        Fx = self._Fx

        def get_elem(i: int, j: int) -> float:
            assert i >= j
            if self._count < i + 1:
                self._count = i + 1
                Fx[i] = self.F0[i] - sum(Fk[i] * xk for Fk, xk in zip(self.F, x))
            a = -float(Fx[i] @ Fx[j])
            if i == j:
                a += self.t
            return a

        if self._Q.factor(get_elem):
            return None

        ep = self._Q.witness()
        start, stop = self._Q.p
        v = self._Q.witness_vec[start:stop]
        Av = v @ Fx[start:stop]
        g = np.array([-2.0 * float((v @ Fk[start:stop]) @ Av) for Fk in self.F])
        return g, ep
