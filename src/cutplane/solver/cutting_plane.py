"""
Cutting-Plane Driving Loops

Three generic loops composing a search space with a separation oracle:

- cutting_plane_feas: find x such that f(x) <= 0
- cutting_plane_optim: maximize/minimize via a best-so-far target
- cutting_plane_optim_q: same, over a quantized (rounded) domain

A function f(x) is convex if there always exists g(x) such that
f(z) >= f(x) + g(x)' (z - x) for all z, x in dom f. The affine function
g' (x - xc) + beta is the cut returned by the oracle. Each iteration
queries the oracle at the space's center, applies the cut and decides
whether to continue, stop with success or stop with failure.

Budget exhaustion is a normal exit path: the returned iteration count
then equals ``options.max_iter``.
"""

import logging
from typing import Optional, Tuple

import numpy as np

from ..contract import ArrayType, OracleFeas, OracleOptim, OracleOptimQ, SearchSpace
from ..core.status import CInfo, CutStatus, Options

logger = logging.getLogger(__name__)


def cutting_plane_feas(
    omega: OracleFeas,
    space: SearchSpace,
    options: Options = Options()
) -> CInfo:
    """
    Find a point in a convex set defined through a separation oracle.

    Solves::

        find x
        s.t. f(x) <= 0

    Args:
        omega: Feasibility oracle, queried at the space's center
        space: Search space containing a feasible point (mutated)
        options: Iteration budget and tolerance

    Returns:
        CInfo with ``feasible`` set when the oracle accepted a center.
        The space is left untouched on the iteration that succeeds.
    """
    for niter in range(options.max_iter):
        cut = omega.assess_feas(space.xc())
        if cut is None:
            logger.debug("feasible point found after %d iterations", niter)
            return CInfo(True, niter, CutStatus.SUCCESS)

        status = space.update(cut)
        if status != CutStatus.SUCCESS or space.tsq() < options.tol:
            logger.debug("stopped at iteration %d: status=%s tsq=%.3e",
                         niter, status.value, space.tsq())
            return CInfo(False, niter, status)

    logger.debug("iteration budget exhausted (%d)", options.max_iter)
    return CInfo(False, options.max_iter)


def cutting_plane_optim(
    omega: OracleOptim,
    space: SearchSpace,
    target: float,
    options: Options = Options()
) -> Tuple[Optional[ArrayType], float, int]:
    """
    Cutting-plane method for a convex (or quasiconvex) optimization problem.

    The oracle tightens ``target`` whenever the current center improves on
    it; that center is recorded as the best point before the cut is applied.

    Args:
        omega: Optimization oracle
        space: Search space containing an optimal point (mutated)
        target: Initial best-so-far objective value
        options: Iteration budget and tolerance

    Returns:
        ``(x_best, target, num_iters)``. ``x_best`` is None when the oracle
        never reported an improvement.
    """
    x_best: Optional[ArrayType] = None
    for niter in range(options.max_iter):
        cut, target1 = omega.assess_optim(space.xc(), target)
        if target1 is not None:
            target = target1
            x_best = np.array(space.xc(), copy=True)
        status = space.update(cut)
        if status != CutStatus.SUCCESS or space.tsq() < options.tol:
            logger.debug("stopped at iteration %d: status=%s target=%g",
                         niter, status.value, target)
            return x_best, target, niter

    logger.debug("iteration budget exhausted (%d)", options.max_iter)
    return x_best, target, options.max_iter


def cutting_plane_optim_q(
    omega: OracleOptimQ,
    space: SearchSpace,
    target: float,
    options: Options = Options()
) -> Tuple[Optional[ArrayType], float, int]:
    """
    Cutting-plane method for a convex discrete optimization problem.

    The oracle evaluates a rounded version of the center. When a cut has
    no effect on the space the loop asks the oracle for an alternative
    rounding (``retry``) instead of giving up, as long as the oracle
    reports that one remains. Once set, ``retry`` stays set.

    Args:
        omega: Quantized optimization oracle
        space: Search space containing an optimal point (mutated)
        target: Initial best-so-far objective value
        options: Iteration budget and tolerance

    Returns:
        ``(x_best, target, num_iters)`` where ``x_best`` is the best
        rounded point found, or None.
    """
    x_best: Optional[ArrayType] = None
    retry = False

    for niter in range(options.max_iter):
        cut, target1, x_q, more_alt = omega.assess_optim_q(space.xc(), target, retry)
        if target1 is not None:
            target = target1
            x_best = np.array(x_q, copy=True)

        status = space.update(cut)
        if status == CutStatus.NO_EFFECT:
            if not more_alt:
                logger.debug("no alternative cut left at iteration %d", niter)
                return x_best, target, niter
            retry = True
            continue
        if status == CutStatus.NO_SOLN:
            logger.debug("no solution at iteration %d", niter)
            return x_best, target, niter
        if space.tsq() < options.tol:
            logger.debug("converged at iteration %d: target=%g", niter, target)
            return x_best, target, niter

    logger.debug("iteration budget exhausted (%d)", options.max_iter)
    return x_best, target, options.max_iter
