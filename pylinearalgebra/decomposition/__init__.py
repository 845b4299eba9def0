"""
Matrix decompositions.

Public API:
    lu_decompose: Doolittle LU with partial pivoting
    LUDecompositionResult: Factors, permutation, determinant, solve, inverse
"""

from pylinearalgebra.decomposition.solution import LUDecompositionResult
from pylinearalgebra.decomposition.lu import lu_decompose

__all__ = [
    "LUDecompositionResult",
    "lu_decompose",
]
