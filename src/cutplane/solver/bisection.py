"""
Bisection Search

- bsearch: bisection over a monotone predicate on a scalar parameter
- BSearchAdaptor: exposes a feasibility search as such a predicate

The interval may hold floats, ints or ``fractions.Fraction`` values;
halving is done with ``half_nonnegative`` so integer brackets never leave
the integers and rational brackets stay exact.
"""

import logging
from numbers import Integral
from typing import Any, Tuple

from ..contract import ArrayType, OracleBS, OracleFeas2, SearchSpace
from ..core.status import CInfo, Options
from .cutting_plane import cutting_plane_feas

logger = logging.getLogger(__name__)


def half_nonnegative(value: Any) -> Any:
    """
    Half of a non-negative value, in the value's own number type.

    Integers are floor-divided, everything else is divided exactly.
    """
    if isinstance(value, Integral):
        return value // 2
    return value / 2


def bsearch(
    omega: OracleBS,
    intrvl: Tuple[Any, Any],
    options: Options = Options()
) -> CInfo:
    """
    Bisection search assuming ``omega.assess_bs`` is monotone.

    A candidate accepted by the oracle becomes the new upper bound,
    a rejected one the new lower bound.

    Args:
        omega: Monotone predicate
        intrvl: Initial ``(lower, upper)`` bracket, ``lower <= upper``
        options: Iteration budget and tolerance on the half-width

    Returns:
        CInfo whose ``feasible`` flag tells whether the upper bound moved,
        with the final bracket in ``interval``.
    """
    lower, upper = intrvl
    assert lower <= upper, f"invalid interval: [{lower}, {upper}]"
    u_orig = upper

    for niter in range(options.max_iter):
        tau = half_nonnegative(upper - lower)
        if tau < options.tol:
            logger.debug("bracket closed after %d iterations: [%s, %s]", niter, lower, upper)
            return CInfo(upper != u_orig, niter, interval=(lower, upper))
        target = lower + tau
        if omega.assess_bs(target):
            upper = target
        else:
            lower = target

    logger.debug("iteration budget exhausted (%d)", options.max_iter)
    return CInfo(upper != u_orig, options.max_iter, interval=(lower, upper))


class BSearchAdaptor:
    """
    Turns a reparametrizable feasibility oracle into a bisection predicate.

    Each probe runs a full feasibility search on a copy of the persistent
    search space. Only a successful probe moves the persistent center, so
    an infeasible probe never disturbs committed state.
    """

    def __init__(
        self,
        omega: OracleFeas2,
        space: SearchSpace,
        options: Options = Options()
    ):
        """
        Args:
            omega: Feasibility oracle exposing ``update(target)``
            space: Persistent search space
            options: Options for each inner feasibility search
        """
        self.omega = omega
        self.space = space
        self.options = options

    @property
    def x_best(self) -> ArrayType:
        """Center of the last feasible probe (or the initial center)."""
        return self.space.xc()

    def assess_bs(self, target: Any) -> bool:
        space = self.space.copy()
        self.omega.update(target)
        info = cutting_plane_feas(self.omega, space, self.options)
        if info.feasible:
            self.space.set_xc(space.xc())
        return info.feasible
