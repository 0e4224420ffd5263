"""
Profit Maximization Oracles

Cobb-Douglas production with two inputs:

    max   p A x1^a1 x2^a2 - v1 x1 - v2 x2
    s.t.  x1 <= k

solved in log-space y = log(x), where the problem becomes

    max   t
    s.t.  t + v' exp(y) <= p A exp(a' y)
          y1 <= log k

- ProfitOracle: nominal problem
- ProfitOracleRb: robust against bounded parameter variations
- ProfitOracleQ: discrete version over integer inputs
"""

import math
from typing import Optional, Sequence, Tuple

import numpy as np

from ..contract import ArrayType, Cut


class ProfitOracle:
    """
    Optimization oracle for the nominal profit problem.

    Attributes:
        elasticities: Output elasticities (a1, a2)
        price_out: Input prices (v1, v2)
    """

    def __init__(
        self,
        params: Tuple[float, float, float],
        elasticities: Sequence[float],
        price_out: Sequence[float]
    ):
        """
        Args:
            params: (unit_price p, scale A, limit k)
            elasticities: (a1, a2)
            price_out: (v1, v2)
        """
        unit_price, scale, limit = params
        self.log_pA = math.log(unit_price * scale)
        self.log_k = math.log(limit)
        self.elasticities = np.asarray(elasticities, dtype=np.float64)
        self.price_out = np.asarray(price_out, dtype=np.float64)

    def assess_optim(self, y: ArrayType, target: float) -> Tuple[Cut, Optional[float]]:
        """
        Args:
            y: Point in log-space
            target: Best-so-far profit

        Returns:
            (cut, new_target); new_target is None unless y improves on target
        """
        # y0 <= log k
        f1 = y[0] - self.log_k
        if f1 > 0.0:
            return (np.array([1.0, 0.0]), f1), None

        log_Cobb = self.log_pA + self.elasticities @ y
        q = self.price_out * np.exp(y)
        vx = q[0] + q[1]
        te = target + vx

        # te <= 0 means any output beats the target
        if te > 0.0:
            fj = math.log(te) - log_Cobb
            if fj >= 0.0:
                g = q / te - self.elasticities
                return (g, fj), None

        te = math.exp(log_Cobb)
        g = q / te - self.elasticities
        return (g, 0.0), te - vx


class ProfitOracleRb:
    """
    Optimization oracle for the robust profit problem.

    The elasticities may vary by +/- ``elasticity_var`` and the price,
    limit and input prices by ``param_var``; the oracle evaluates the
    nominal problem at the worst case for the current point.
    """

    def __init__(
        self,
        params: Tuple[float, float, float],
        elasticities: Sequence[float],
        price_out: Sequence[float],
        elasticity_var: Sequence[float],
        param_var: float
    ):
        """
        Args:
            params: (unit_price p, scale A, limit k)
            elasticities: Nominal (a1, a2)
            price_out: Nominal (v1, v2)
            elasticity_var: Variation of each elasticity
            param_var: Variation of p, k, v1 and v2
        """
        unit_price, scale, limit = params
        self.elasticities = np.asarray(elasticities, dtype=np.float64)
        self.elasticity_var = np.asarray(elasticity_var, dtype=np.float64)
        params_rb = (unit_price - param_var, scale, limit - param_var)
        price_rb = np.asarray(price_out, dtype=np.float64) + param_var
        self.omega = ProfitOracle(params_rb, self.elasticities, price_rb)

    def assess_optim(self, y: ArrayType, target: float) -> Tuple[Cut, Optional[float]]:
        a_rb = self.elasticities + np.where(y > 0.0, -self.elasticity_var, self.elasticity_var)
        self.omega.elasticities = a_rb
        return self.omega.assess_optim(y, target)


class ProfitOracleQ:
    """
    Quantized optimization oracle for the profit problem.

    The center is rounded to integer inputs (zero is replaced by one) and
    the nominal oracle is evaluated there; the cut offset is shifted so
    the cut stays valid at the unrounded center.
    """

    def __init__(
        self,
        params: Tuple[float, float, float],
        elasticities: Sequence[float],
        price_out: Sequence[float]
    ):
        self.omega = ProfitOracle(params, elasticities, price_out)
        self._yd: Optional[np.ndarray] = None

    def assess_optim_q(
        self, y: ArrayType, target: float, retry: bool
    ) -> Tuple[Cut, Optional[float], ArrayType, bool]:
        """
        Args:
            y: Point in log-space
            target: Best-so-far profit
            retry: Reuse the previous rounding instead of rounding ``y``

        Returns:
            (cut, new_target, y_rounded, more_alt); no alternative rounding
            is offered, so more_alt is always False
        """
        if not retry or self._yd is None:
            x = np.floor(np.exp(y) + 0.5)
            x[x == 0.0] = 1.0
            self._yd = np.log(x)

        (g, h), target1 = self.omega.assess_optim(self._yd, target)
        # g' (z - yd) + h <= 0 rewritten around y
        h += g @ (y - self._yd)
        return (g, h), target1, self._yd.copy(), False
