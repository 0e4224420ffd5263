"""
Linear Matrix Inequality Oracles

- LMIOracle:  find x  s.t.  B - sum_k x_k F_k  > 0
- LMI0Oracle: find x  s.t.  sum_k x_k F_k  > 0

Both test definiteness with an LDLTMgr over the lazily evaluated matrix
and, on failure, build the cut from the witness v: the gradient entries
are the quadratic forms v' F_k v and the offset is the witness margin.
"""

from typing import List, Optional, Sequence

import numpy as np

from ..contract import ArrayType, Cut
from .ldlt_mgr import LDLTMgr


class LMIOracle:
    """Feasibility oracle for B - sum_k x_k F_k positive definite."""

    def __init__(self, F: Sequence[np.ndarray], B: np.ndarray):
        """
        Args:
            F: Symmetric matrices F_k, one per decision variable
            B: Symmetric constant matrix
        """
        self.F: List[np.ndarray] = [np.asarray(Fk, dtype=np.float64) for Fk in F]
        self.F0 = np.asarray(B, dtype=np.float64)
        for k, Fk in enumerate(self.F):
            if Fk.shape != self.F0.shape:
                raise ValueError(f"F[{k}] has shape {Fk.shape}, expected {self.F0.shape}")
        self._mq = LDLTMgr(self.F0.shape[0])

    def assess_feas(self, x: ArrayType) -> Optional[Cut]:
        F = self.F
        F0 = self.F0

        def get_elem(i: int, j: int) -> float:
            return F0[i, j] - sum(Fk[i, j] * xk for Fk, xk in zip(F, x))

        if self._mq.factor(get_elem):
            return None

        ep = self._mq.witness()
        g = np.array([self._mq.sym_quad(Fk) for Fk in F])
        return g, ep


class LMI0Oracle:
    """Feasibility oracle for sum_k x_k F_k positive definite."""

    def __init__(self, F: Sequence[np.ndarray]):
        if not F:
            raise ValueError("at least one matrix is required")
        self.F: List[np.ndarray] = [np.asarray(Fk, dtype=np.float64) for Fk in F]
        self._mq = LDLTMgr(self.F[0].shape[0])

    def assess_feas(self, x: ArrayType) -> Optional[Cut]:
        F = self.F

        def get_elem(i: int, j: int) -> float:
            return sum(Fk[i, j] * xk for Fk, xk in zip(F, x))

        if self._mq.factor(get_elem):
            return None

        ep = self._mq.witness()
        g = np.array([-self._mq.sym_quad(Fk) for Fk in F])
        return g, ep
