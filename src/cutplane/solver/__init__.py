"""
Solver Module - Cutting-Plane Loops and Bisection

Provides:
- cutting_plane_feas: feasibility search
- cutting_plane_optim: continuous optimization
- cutting_plane_optim_q: quantized optimization
- bsearch / BSearchAdaptor: monotone bisection and its feasibility adaptor
"""

from .cutting_plane import (
    cutting_plane_feas,
    cutting_plane_optim,
    cutting_plane_optim_q,
)
from .bisection import (
    BSearchAdaptor,
    bsearch,
    half_nonnegative,
)

__all__ = [
    'cutting_plane_feas',
    'cutting_plane_optim',
    'cutting_plane_optim_q',
    'BSearchAdaptor',
    'bsearch',
    'half_nonnegative',
]
