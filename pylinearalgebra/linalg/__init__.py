"""
Dense vectors and matrices.

Public API:
    Vector: 1-D container with in-place arithmetic and products
    Matrix: 2-D container with row/column views, predicates and row operations
    orthogonalize / orthonormalize: In-place modified Gram-Schmidt
    gaussian_elimination / gauss_jordan_elimination / jordan_reduction:
        In-place reductions to (reduced) row echelon form
    NumberFormatter: Display formatting for vectors and matrices
"""

from pylinearalgebra.linalg.vector import Vector, orthogonalize, orthonormalize
from pylinearalgebra.linalg.matrix import Matrix
from pylinearalgebra.linalg.elimination import (
    partial_pivot_row,
    gaussian_elimination,
    gauss_jordan_elimination,
    jordan_reduction,
)
from pylinearalgebra.linalg.formatting import NumberFormatter
from pylinearalgebra.linalg import positions

__all__ = [
    "Vector",
    "Matrix",
    "orthogonalize",
    "orthonormalize",
    "partial_pivot_row",
    "gaussian_elimination",
    "gauss_jordan_elimination",
    "jordan_reduction",
    "NumberFormatter",
    "positions",
]
