"""
cutplane - Cutting-Plane Methods for Convex Feasibility and Optimization

Drives a search region toward a solution by querying a separation
oracle: the oracle either accepts the current center or returns a cut
that separates it from the feasible (or optimal) set.

Key Features:
- Feasibility, optimization and quantized optimization loops
- Bisection search over a monotone predicate, with an adaptor that
  exposes a feasibility search as such a predicate
- Lazy LDLT factorization producing infeasibility witnesses for
  matrix-inequality oracles
- Ellipsoidal search regions with deep and parallel cuts
"""

from .core.status import (
    CutStatus,
    Options,
    CInfo,
)
from .core.canonical_json import (
    canonical_dumps,
    canonical_hash,
)
from .contract import (
    Cut,
    SearchSpace,
    OracleFeas,
    OracleFeas2,
    OracleOptim,
    OracleOptimQ,
    OracleBS,
)
from .solver.cutting_plane import (
    cutting_plane_feas,
    cutting_plane_optim,
    cutting_plane_optim_q,
)
from .solver.bisection import (
    BSearchAdaptor,
    bsearch,
    half_nonnegative,
)
from .space import EllCalc, Ell, EllStable
from .oracles import (
    LDLTMgr,
    LMIOracle,
    LMI0Oracle,
    QMIOracle,
    ProfitOracle,
    ProfitOracleRb,
    ProfitOracleQ,
)

__version__ = "0.1.0"

__all__ = [
    # Status
    "CutStatus",
    "Options",
    "CInfo",
    "canonical_dumps",
    "canonical_hash",
    # Contracts
    "Cut",
    "SearchSpace",
    "OracleFeas",
    "OracleFeas2",
    "OracleOptim",
    "OracleOptimQ",
    "OracleBS",
    # Solver
    "cutting_plane_feas",
    "cutting_plane_optim",
    "cutting_plane_optim_q",
    "BSearchAdaptor",
    "bsearch",
    "half_nonnegative",
    # Space
    "EllCalc",
    "Ell",
    "EllStable",
    # Oracles
    "LDLTMgr",
    "LMIOracle",
    "LMI0Oracle",
    "QMIOracle",
    "ProfitOracle",
    "ProfitOracleRb",
    "ProfitOracleQ",
]
