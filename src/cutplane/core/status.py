"""
Shared Status and Configuration Types

Vocabulary shared by search spaces, oracles and the driving loops:

- CutStatus: outcome of applying a cut to a search space
- Options: iteration budget and termination tolerance
- CInfo: result record of a feasibility-style run

All three are plain data. Drivers never mutate an Options instance and
produce exactly one CInfo per invocation.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class CutStatus(Enum):
    """Outcome of a search space update."""
    SUCCESS = "success"            # Cut applied, region shrunk
    NO_SOLN = "no_soln"            # Cut excludes the whole region
    SMALL_ENOUGH = "small_enough"  # Region already below tolerance
    NO_EFFECT = "no_effect"        # Cut has no separating power


@dataclass(frozen=True)
class Options:
    """
    Driver configuration.

    Attributes:
        max_iter: Maximum number of oracle queries
        tol: Termination tolerance on the space's shrink metric
    """
    max_iter: int = 2000
    tol: float = 1e-8

    def __post_init__(self):
        if self.max_iter < 0:
            raise ValueError(f"max_iter must be non-negative, got {self.max_iter}")
        if self.tol < 0:
            raise ValueError(f"tol must be non-negative, got {self.tol}")


@dataclass(frozen=True)
class CInfo:
    """
    Result of a feasibility search or a bisection search.

    Attributes:
        feasible: Whether a feasible point (or parameter) was found
        num_iters: Number of iterations consumed
        status: Last cut status observed, when the driver tracks one
        interval: Final (lower, upper) bracket of a bisection search
    """
    feasible: bool
    num_iters: int
    status: Optional[CutStatus] = None
    interval: Optional[Tuple[Any, Any]] = None

    def to_canonical(self) -> Dict[str, Any]:
        return {
            "feasible": self.feasible,
            "num_iters": self.num_iters,
            "status": self.status.value if self.status is not None else None,
            "interval": [str(v) for v in self.interval] if self.interval is not None else None,
        }
