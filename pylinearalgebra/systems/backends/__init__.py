"""
Linear system backends.

Available backends:
    LUBackend: Doolittle LU with partial pivoting, then substitution
    GaussJordanBackend: Reduction of the augmented matrix [A | b]
"""

from pylinearalgebra.systems.backends.lu import LUBackend
from pylinearalgebra.systems.backends.gauss_jordan import GaussJordanBackend

__all__ = [
    "LUBackend",
    "GaussJordanBackend",
]
