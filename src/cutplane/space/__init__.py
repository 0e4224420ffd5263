"""
Space Module - Ellipsoidal Search Regions

Provides:
- EllCalc: cut parameters for deep, central and parallel cuts
- Ell: ellipsoid with explicit shape matrix
- EllStable: ellipsoid with factored shape matrix
"""

from .ell_calc import EllCalc
from .ell import Ell
from .ell_stable import EllStable

__all__ = [
    'EllCalc',
    'Ell',
    'EllStable',
]
