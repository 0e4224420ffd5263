"""
Capability Contracts

Defines the interfaces between the driving loops, search spaces and
separation oracles:

- SearchSpace: a mutable region (center, cut update, shrink metric)
- OracleFeas: feasibility oracle, returns a cut or None when feasible
- OracleOptim: optimization oracle, may tighten the best-so-far target
- OracleOptimQ: discrete optimization oracle with retry across roundings
- OracleBS: monotone predicate for bisection search

A cut is a pair ``(g, beta)`` representing the half-space
``g' (x - xc) + beta <= 0``. For a parallel cut ``beta`` is a pair
``(beta0, beta1)`` sharing the same gradient ``g``.
"""

from typing import Any, Optional, Protocol, Tuple, TypeVar, Union

import numpy as np

from .core.status import CutStatus

ArrayType = np.ndarray
CutChoice = Union[float, Tuple[float, Optional[float]]]
Cut = Tuple[ArrayType, CutChoice]

S = TypeVar("S", bound="SearchSpace")


class SearchSpace(Protocol):
    """Search region driven by the cutting-plane loops."""

    def xc(self) -> ArrayType:
        """Current center."""
        ...

    def set_xc(self, x: ArrayType) -> None:
        """Replace the current center."""
        ...

    def update(self, cut: Cut) -> CutStatus:
        """Shrink the region with ``cut``."""
        ...

    def tsq(self) -> float:
        """Normalized squared size of the region (convergence signal)."""
        ...

    def copy(self: S) -> S:
        """Independent deep copy."""
        ...


class OracleFeas(Protocol):
    """Separation oracle for a feasibility problem."""

    def assess_feas(self, xc: ArrayType) -> Optional[Cut]:
        """Return None if ``xc`` is feasible, otherwise a separating cut."""
        ...


class OracleFeas2(OracleFeas, Protocol):
    """Feasibility oracle that can be reparametrized by a scalar target."""

    def update(self, target: Any) -> None:
        ...


class OracleOptim(Protocol):
    """Separation oracle for an optimization problem."""

    def assess_optim(self, xc: ArrayType, target: float) -> Tuple[Cut, Optional[float]]:
        """
        Assess ``xc`` against the best-so-far ``target``.

        Returns the cut and the tightened target, or None when ``xc`` did
        not improve on ``target``.
        """
        ...


class OracleOptimQ(Protocol):
    """Separation oracle for a quantized (discrete) optimization problem."""

    def assess_optim_q(
        self, xc: ArrayType, target: float, retry: bool
    ) -> Tuple[Cut, Optional[float], ArrayType, bool]:
        """
        Assess a rounded version of ``xc``.

        Returns ``(cut, new_target, x_rounded, more_alt)`` where
        ``more_alt`` tells whether another rounding alternative remains.
        """
        ...


class OracleBS(Protocol):
    """Monotone predicate over a scalar parameter."""

    def assess_bs(self, target: Any) -> bool:
        ...
